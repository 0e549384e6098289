"""Accessors and the visitor-driven traversal of generic JSON trees.

A tree is plain decoded JSON: objects are ``dict``, arrays are ``list``.
Accessors never raise and never mutate; a missing or mistyped field reads as
its empty value.

Traversal order for an object: the visitor's ``*_object`` hook runs first;
if it asks for descent, the inline (``i``), block (``b``) and item (``c``)
children are walked in that order; finally the returned close function
runs.
"""

from __future__ import annotations

from typing import Any, Callable, Optional, Protocol

from zettel_html.attrs import Attributes
from zettel_html.zjson.const import (
    NAME_ATTRIBUTE,
    NAME_BLOCK,
    NAME_INLINE,
    NAME_LIST,
    NAME_NUMERIC,
    NAME_TYPE,
    TYPE_PARAGRAPH,
)

Value = Any
Array = list
Object = dict
CloseFn = Optional[Callable[[], None]]


# ── accessors ───────────────────────────────────────────────────────


def make_array(val: Value) -> Array | None:
    return val if isinstance(val, list) else None


def make_object(val: Value) -> Object | None:
    return val if isinstance(val, dict) else None


def get_array(obj: Object, key: str) -> Array | None:
    return make_array(obj.get(key))


def get_string(obj: Object, key: str) -> str:
    val = obj.get(key)
    return val if isinstance(val, str) else ""


def get_number(obj: Object) -> str:
    """The numeric payload as text (JSON numbers and strings are accepted)."""
    val = obj.get(NAME_NUMERIC)
    if isinstance(val, bool):
        return ""
    if isinstance(val, int):
        return str(val)
    if isinstance(val, float) and val.is_integer():
        return str(int(val))
    if isinstance(val, str):
        return val
    return ""


def get_type(obj: Object) -> str:
    return get_string(obj, NAME_TYPE)


def get_attributes(obj: Object) -> Attributes:
    """Attributes of *obj*; non-string values are skipped."""
    raw = obj.get(NAME_ATTRIBUTE)
    if not isinstance(raw, dict):
        return Attributes()
    return Attributes({k: v for k, v in raw.items() if isinstance(k, str) and isinstance(v, str)})


def get_paragraph_inline(blocks: Array) -> Array | None:
    """Inline content if *blocks* is exactly one paragraph, else None."""
    if len(blocks) != 1:
        return None
    obj = make_object(blocks[0])
    if obj is None or get_type(obj) != TYPE_PARAGRAPH:
        return None
    return get_array(obj, NAME_INLINE) or []


# ── visitor protocol ────────────────────────────────────────────────


class Visitor(Protocol):
    def block_array(self, a: Array, pos: int) -> CloseFn: ...

    def inline_array(self, a: Array, pos: int) -> CloseFn: ...

    def item_array(self, a: Array, pos: int) -> CloseFn: ...

    def block_object(self, t: str, obj: Object, pos: int) -> tuple[bool, CloseFn]: ...

    def inline_object(self, t: str, obj: Object, pos: int) -> tuple[bool, CloseFn]: ...

    def unexpected(self, val: Value, pos: int, expected: str) -> None:
        """Called for a value that does not have the expected shape."""
        ...


def _close(fn: CloseFn) -> None:
    if fn is not None:
        fn()


def walk_block(v: Visitor, a: Array, pos: int = 0) -> None:
    """Traverse a block array."""
    ef = v.block_array(a, pos)
    for i, elem in enumerate(a):
        walk_block_object(v, elem, i)
    _close(ef)


def walk_inline(v: Visitor, a: Array, pos: int = 0) -> None:
    """Traverse an inline array."""
    ef = v.inline_array(a, pos)
    for i, elem in enumerate(a):
        walk_inline_object(v, elem, i)
    _close(ef)


def walk_items(v: Visitor, items: Array, pos: int = 0) -> None:
    """Traverse an item array: every item is itself a block array."""
    for i, item in enumerate(items):
        ef = v.item_array(items, i)
        blocks = make_array(item)
        if blocks is None:
            v.unexpected(item, i, "item block array")
        else:
            walk_block(v, blocks, i)
        _close(ef)


def _typed_object(v: Visitor, val: Value, pos: int) -> tuple[str, Object] | None:
    obj = make_object(val)
    if obj is None:
        v.unexpected(val, pos, "object")
        return None
    t = obj.get(NAME_TYPE)
    if not isinstance(t, str):
        v.unexpected(obj, pos, "object type")
        return None
    return t, obj


def walk_block_object(v: Visitor, val: Value, pos: int) -> None:
    typed = _typed_object(v, val, pos)
    if typed is None:
        return
    t, obj = typed
    descend, ef = v.block_object(t, obj, pos)
    if descend:
        walk_children(v, obj, pos)
    _close(ef)


def walk_inline_object(v: Visitor, val: Value, pos: int) -> None:
    typed = _typed_object(v, val, pos)
    if typed is None:
        return
    t, obj = typed
    descend, ef = v.inline_object(t, obj, pos)
    if descend:
        walk_children(v, obj, pos)
    _close(ef)


def walk_inline_child(v: Visitor, obj: Object, pos: int) -> None:
    if NAME_INLINE not in obj:
        return
    inline = get_array(obj, NAME_INLINE)
    if inline is None:
        v.unexpected(obj[NAME_INLINE], pos, "inline array")
    else:
        walk_inline(v, inline, 0)


def walk_children(v: Visitor, obj: Object, pos: int) -> None:
    walk_inline_child(v, obj, pos)
    if NAME_BLOCK in obj:
        blocks = get_array(obj, NAME_BLOCK)
        if blocks is None:
            v.unexpected(obj[NAME_BLOCK], pos, "block array")
        else:
            walk_block(v, blocks, 0)
    if NAME_LIST in obj:
        items = get_array(obj, NAME_LIST)
        if items is None:
            v.unexpected(obj[NAME_LIST], pos, "item array")
        else:
            walk_items(v, items, pos)
