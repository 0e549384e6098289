"""HTML lowering environment for the symbolic tree representation.

``EncEnvironment`` is an evaluation :class:`~zettel_html.sexpr.Environment`
whose builtins write HTML instead of returning values.  Each instance owns a
copy of the default renderer table, so callers can override single node
types (``set_builtin`` / ``change_builtin``) without touching the shared
default.

Usage::

    env = EncEnvironment(heading_offset=1)
    env.set_unique("doc1")
    evaluate(env, tree)
    env.write_endnotes()
    html, err = env.getvalue(), env.error
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from zettel_html.attrs import Attributes
from zettel_html.errors import EvaluationError
from zettel_html.html.builtins import DEFAULT_BUILTINS, Renderer
from zettel_html.html.writer import FootnoteQueue, HtmlWriter
from zettel_html.sexpr.attrs import get_attributes
from zettel_html.sexpr.eval import Builtin, evaluate, evaluate_call
from zettel_html.sexpr.values import (
    List,
    String,
    Symbol,
    Value,
    get_list,
    get_string,
    get_symbol,
)

_logger = logging.getLogger(__name__)


class EncEnvironment(HtmlWriter):
    """Render session over a symbolic tree."""

    def __init__(
        self,
        heading_offset: int = 0,
        *,
        builtins: dict[Symbol, Builtin] | None = None,
        footnotes: FootnoteQueue | None = None,
    ) -> None:
        super().__init__(heading_offset, footnotes=footnotes)
        # A caller-supplied table is shared (sub-renders); otherwise clone the default.
        self.builtins = builtins if builtins is not None else dict(DEFAULT_BUILTINS)

    # ── renderer table ──────────────────────────────────────────────

    def lookup(self, sym: Symbol) -> Builtin | None:
        return self.builtins.get(sym)

    def set_builtin(
        self,
        sym: Symbol,
        fn: Renderer,
        *,
        min_args: int = 0,
        max_args: int = -1,
    ) -> None:
        """Bind *sym* to a new renderer in this environment only."""
        self.builtins[sym] = Builtin(sym.name, fn, True, min_args, max_args)

    def change_builtin(self, sym: Symbol, maker: Callable[[Renderer], Renderer]) -> None:
        """Replace the renderer of *sym* with ``maker(previous_renderer)``."""
        old = self.builtins.get(sym)
        if old is None:
            raise KeyError(sym.name)
        self.builtins[sym] = Builtin(old.name, maker(old.fn), old.special, old.min_args, old.max_args)

    # ── evaluation protocol ─────────────────────────────────────────

    def evaluate_symbol(self, sym: Symbol) -> None:
        self.write_escaped(sym.name)

    def evaluate_string(self, s: String) -> None:
        self.write_escaped(s.value)

    def evaluate_list(self, lst: List) -> None:
        try:
            _, done = evaluate_call(self, lst.items)
            if not done:
                # Not a typed node: a plain sequence of children.
                for value in lst:
                    evaluate(self, value)
        except EvaluationError as err:
            _logger.debug("render error in %s: %s", lst.head, err)
            self.set_error(err)

    def evaluate_each(self, values: Sequence[Value]) -> None:
        for value in values:
            evaluate(self, value)

    # ── sticky argument accessors ───────────────────────────────────

    def get_string(self, args: Sequence[Value], idx: int) -> str:
        if self.error is not None:
            return ""
        try:
            return get_string(args, idx)
        except EvaluationError as err:
            self.set_error(err)
            return ""

    def get_symbol(self, args: Sequence[Value], idx: int) -> Symbol | None:
        if self.error is not None:
            return None
        try:
            return get_symbol(args, idx)
        except EvaluationError as err:
            self.set_error(err)
            return None

    def get_list(self, args: Sequence[Value], idx: int) -> List:
        if self.error is not None:
            return List()
        try:
            return get_list(args, idx)
        except EvaluationError as err:
            self.set_error(err)
            return List()

    def get_attributes(self, args: Sequence[Value], idx: int) -> Attributes:
        return get_attributes(self.get_list(args, idx))

    # ── sub-renders and endnotes ────────────────────────────────────

    def evaluate_inline(self, value: Value, *, with_footnotes: bool, no_links: bool) -> str:
        """Render *value* into a separate buffer and return the HTML text.

        The sub-render shares this environment's renderer table and footnote
        queue; its first error becomes this environment's error.
        """
        child = EncEnvironment(
            self.heading_offset,
            builtins=self.builtins,
            footnotes=self.footnotes,
        )
        child.unique = self.unique
        child.write_footnotes = with_footnotes and self.write_footnotes
        child.no_links = no_links
        evaluate(child, value)
        self.set_error(child.error)
        return child.getvalue()

    def render_footnote(self, note: Sequence[Value]) -> None:
        self.evaluate_each(note)
