"""Plain-text flattening of zettel content.

Used where markup must become an attribute value (image titles) or plain
text (summaries).  Text and tags contribute their string, the three kinds
of space contribute a single blank, every other node contributes the text
of its children.  Attribute lists and payload strings (link targets,
code, ...) contribute nothing.
"""

from __future__ import annotations

from typing import Iterable

from zettel_html import zjson
from zettel_html.sexpr.const import SYM_HARD, SYM_SOFT, SYM_SPACE, SYM_TAG, SYM_TEXT
from zettel_html.sexpr.values import List, String, Symbol, Value
from zettel_html.zjson.const import (
    NAME_STRING,
    TYPE_BREAK_HARD,
    TYPE_BREAK_SOFT,
    TYPE_SPACE,
    TYPE_TAG,
    TYPE_TEXT,
)

_TEXT_SYMBOLS = (SYM_TEXT, SYM_TAG)
_SPACE_SYMBOLS = (SYM_SPACE, SYM_SOFT, SYM_HARD)


def _sexpr_text(value: Value, out: list[str]) -> None:
    if not isinstance(value, List) or not value:
        return
    head = value.head
    if isinstance(head, Symbol):
        if head in _TEXT_SYMBOLS:
            arg = value[1] if len(value) > 1 else None
            if isinstance(arg, String):
                out.append(arg.value)
            elif isinstance(arg, Symbol):
                out.append(arg.name)
            return
        if head in _SPACE_SYMBOLS:
            out.append(" ")
            return
        children: Iterable[Value] = value.tail
    else:
        children = value
    for child in children:
        _sexpr_text(child, out)


def sexpr_inline_text(values: Iterable[Value]) -> str:
    """Plain text of a sequence of symbolic inline nodes."""
    out: list[str] = []
    for value in values:
        _sexpr_text(value, out)
    return "".join(out)


class _TextVisitor:
    """Collects plain text while walking a generic tree."""

    def __init__(self) -> None:
        self.out: list[str] = []

    def block_array(self, a: zjson.Array, pos: int) -> zjson.CloseFn:
        return None

    def inline_array(self, a: zjson.Array, pos: int) -> zjson.CloseFn:
        return None

    def item_array(self, a: zjson.Array, pos: int) -> zjson.CloseFn:
        return None

    def block_object(self, t: str, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
        return True, None

    def inline_object(self, t: str, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
        if t in (TYPE_TEXT, TYPE_TAG):
            self.out.append(zjson.get_string(obj, NAME_STRING))
            return False, None
        if t in (TYPE_SPACE, TYPE_BREAK_SOFT, TYPE_BREAK_HARD):
            self.out.append(" ")
            return False, None
        return True, None

    def unexpected(self, val: zjson.Value, pos: int, expected: str) -> None:
        pass


def zjson_inline_text(array: zjson.Array | None) -> str:
    """Plain text of a generic inline array."""
    if not array:
        return ""
    v = _TextVisitor()
    zjson.walk_inline(v, array)
    return "".join(v.out)


class _SpacedTextVisitor(_TextVisitor):
    """Block-level text: node boundaries become single blanks."""

    def __init__(self) -> None:
        super().__init__()
        self.can_space = False

    def write_space(self) -> None:
        if self.can_space:
            self.out.append(" ")
            self.can_space = False

    def block_object(self, t: str, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
        self.write_space()
        return True, None

    def inline_object(self, t: str, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
        self.write_space()
        if t in (TYPE_TEXT, TYPE_TAG):
            self.out.append(zjson.get_string(obj, NAME_STRING))
            self.can_space = True
            return False, None
        if t in (TYPE_SPACE, TYPE_BREAK_SOFT, TYPE_BREAK_HARD):
            return False, None
        return True, None


def zjson_block_text(array: zjson.Array | None) -> str:
    """Plain text of a generic block array, blocks separated by one blank."""
    if not array:
        return ""
    v = _SpacedTextVisitor()
    zjson.walk_block(v, array)
    return "".join(v.out)
