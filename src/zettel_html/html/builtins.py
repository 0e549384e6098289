"""Default renderer table of the symbolic HTML environment.

Every renderer is a *special* builtin: it receives the unevaluated argument
tuple of its node and writes HTML through the environment.  Arity limits
are checked by :class:`~zettel_html.sexpr.eval.Builtin` before a renderer
runs.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Sequence

from zettel_html.attrs import Attributes
from zettel_html.html.writer import (
    REF_STATE_BASED,
    REF_STATE_BROKEN,
    REF_STATE_EXTERNAL,
    REF_STATE_FOUND,
    REF_STATE_HOSTED,
    REF_STATE_INVALID,
    REF_STATE_SELF,
    REF_STATE_ZETTEL,
    SYNTAX_SVG,
)
from zettel_html.sexpr import const as c
from zettel_html.sexpr.eval import Builtin, evaluate
from zettel_html.sexpr.values import List, Symbol, Value
from zettel_html.text import sexpr_inline_text

if TYPE_CHECKING:
    from zettel_html.html.environment import EncEnvironment

_logger = logging.getLogger(__name__)

Renderer = Callable[["EncEnvironment", Sequence[Value]], None]


def do_nothing(env: EncEnvironment, args: Sequence[Value]) -> None:
    """Renderer for nodes that produce no HTML."""


# ── block structure helpers ─────────────────────────────────────────


def _is_node(value: Value, sym: Symbol) -> bool:
    return isinstance(value, List) and value.head == sym


def _item_blocks(item: Value) -> Sequence[Value]:
    """An item is either one block node or a plain list of block nodes."""
    if isinstance(item, List) and not isinstance(item.head, Symbol):
        return item.items
    return (item,)


def _paragraph_inline(blocks: Sequence[Value]) -> Sequence[Value] | None:
    """Inline content if *blocks* is exactly one PARA node, else None."""
    if len(blocks) == 1 and _is_node(blocks[0], c.SYM_PARA):
        return blocks[0].tail
    return None


def _is_compact(items: Sequence[Value]) -> bool:
    for item in items:
        blocks = _item_blocks(item)
        if blocks and _paragraph_inline(blocks) is None:
            return False
    return True


def _write_item(env: EncEnvironment, item: Value, compact: bool) -> None:
    blocks = _item_blocks(item)
    inline = _paragraph_inline(blocks) if compact else None
    if inline is not None:
        env.evaluate_each(inline)
    else:
        env.evaluate_each(blocks)


def make_list_fn(tag: str) -> Renderer:
    def render(env: EncEnvironment, args: Sequence[Value]) -> None:
        compact = _is_compact(args)
        env.write_start_tag(tag)
        for item in args:
            env.write_string("<li>")
            _write_item(env, item, compact)
            env.write_string("</li>")
        env.write_end_tag(tag)

    return render


def render_quotation(env: EncEnvironment, args: Sequence[Value]) -> None:
    env.write_string("<blockquote>")
    inline = _paragraph_inline(_item_blocks(args[0])) if len(args) == 1 else None
    if inline is not None:
        env.evaluate_each(inline)
    else:
        for item in args:
            env.evaluate_each(_item_blocks(item))
    env.write_string("</blockquote>")


def render_description(env: EncEnvironment, args: Sequence[Value]) -> None:
    env.write_string("<dl>")
    for i in range(0, len(args), 2):
        env.write_string("<dt>")
        evaluate(env, args[i])
        env.write_string("</dt>")
        if i + 1 >= len(args):
            continue
        descriptions = args[i + 1]
        if not isinstance(descriptions, List):
            continue
        for dd in descriptions:
            blocks = _item_blocks(dd)
            if not blocks:
                continue
            env.write_string("<dd>")
            _write_item(env, dd, True)
            env.write_string("</dd>")
    env.write_string("</dl>")


def _write_table_row(env: EncEnvironment, row: List) -> None:
    if not row:
        return
    env.write_string("<tr>")
    env.evaluate_each(row)
    env.write_string("</tr>")


def render_table(env: EncEnvironment, args: Sequence[Value]) -> None:
    env.write_string("<table>")
    header = env.get_list(args, 0)
    if header:
        env.write_string("<thead>")
        _write_table_row(env, header)
        env.write_string("</thead>")
    rows = [env.get_list(args, i) for i in range(1, len(args))]
    if any(rows):
        env.write_string("<tbody>")
        for row in rows:
            _write_table_row(env, row)
        env.write_string("</tbody>")
    env.write_string("</table>")


def make_cell_fn(align: str) -> Renderer:
    def render(env: EncEnvironment, args: Sequence[Value]) -> None:
        env.write_table_cell_start(align)
        env.evaluate_each(args)
        env.write_string("</td>")

    return render


def make_region_fn(tag: str, promote: bool = False) -> Renderer:
    def render(env: EncEnvironment, args: Sequence[Value]) -> None:
        a = env.get_attributes(args, 0)
        if promote:
            a = a.promote_default()
        env.write_start_tag(tag, a)
        evaluate(env, env.get_list(args, 1))
        if len(args) > 2:
            cite = env.get_list(args, 2)
            if cite:
                env.write_string("<cite>")
                env.evaluate_each(cite)
                env.write_string("</cite>")
        env.write_end_tag(tag)

    return render


# ── verbatim / literal ──────────────────────────────────────────────


def _verbatim_code(env: EncEnvironment, args: Sequence[Value]) -> None:
    env.write_verbatim(env.get_attributes(args, 0).promote_default("language-"), env.get_string(args, 1))


def make_verbatim_fn(cls: str) -> Renderer:
    def render(env: EncEnvironment, args: Sequence[Value]) -> None:
        env.write_verbatim(env.get_attributes(args, 0).add_class(cls), env.get_string(args, 1))

    return render


def make_literal_fn(tag: str, cls: str = "", lang: bool = False) -> Renderer:
    def render(env: EncEnvironment, args: Sequence[Value]) -> None:
        a = env.get_attributes(args, 0)
        if lang:
            a = a.promote_default("language-")
        if cls:
            a = a.add_class(cls)
        env.write_literal(tag, a, env.get_string(args, 1))

    return render


def make_comment_fn(block: bool) -> Renderer:
    def render(env: EncEnvironment, args: Sequence[Value]) -> None:
        if env.get_attributes(args, 0).has_marker() and len(args) > 1:
            env.write_comment(env.get_string(args, 1), block=block)

    return render


def render_html(env: EncEnvironment, args: Sequence[Value]) -> None:
    env.write_raw_html(env.get_string(args, 1))


# ── inline ──────────────────────────────────────────────────────────


def render_text(env: EncEnvironment, args: Sequence[Value]) -> None:
    if args:
        env.write_escaped(env.get_string(args, 0))


def render_space(env: EncEnvironment, args: Sequence[Value]) -> None:
    if not args:
        env.write_string(" ")
        return
    env.write_escaped(env.get_string(args, 0))


def write_span(env: EncEnvironment, a: Attributes, children: Sequence[Value]) -> None:
    """Render *children* inside a ``<span>``; nothing if there are none."""
    if not children:
        return
    env.write_start_tag("span", a.promote_default())
    env.evaluate_each(children)
    env.write_end_tag("span")


def make_link_fn(state: str) -> Renderer:
    def render(env: EncEnvironment, args: Sequence[Value]) -> None:
        a = env.get_attributes(args, 0)
        children = args[2:]
        if env.ignore_links() or state == REF_STATE_INVALID:
            write_span(env, a, children)
            return
        ref = env.get_string(args, 1)
        if not ref:
            env.evaluate_each(children)
            return
        link_attrs = env.link_attributes(state, a, ref)
        if link_attrs is None:
            write_span(env, a, children)
            return
        env.write_start_tag("a", link_attrs)
        if children:
            env.evaluate_each(children)
        else:
            env.write_escaped(ref)
        env.write_end_tag("a")

    return render


def render_embed(env: EncEnvironment, args: Sequence[Value]) -> None:
    ref = env.get_list(args, 1)
    src = env.get_string(ref, 1)
    if env.get_string(args, 2) == SYNTAX_SVG:
        env.write_svg_embed(src)
        return
    env.write_image(env.get_attributes(args, 0), src, sexpr_inline_text(args[3:]))


def _blob_title(a: Attributes, inline: Sequence[Value]) -> str:
    return a.get("title") or sexpr_inline_text(inline)


def render_embed_blob(env: EncEnvironment, args: Sequence[Value]) -> None:
    a = env.get_attributes(args, 0)
    env.write_blob(_blob_title(a, args[3:]), env.get_string(args, 1), env.get_string(args, 2))


def render_blob(env: EncEnvironment, args: Sequence[Value]) -> None:
    env.write_blob(env.get_string(args, 0), env.get_string(args, 1), env.get_string(args, 2))


def render_cite(env: EncEnvironment, args: Sequence[Value]) -> None:
    env.write_start_tag("span", env.get_attributes(args, 0))
    key = env.get_string(args, 1)
    if key:
        env.write_escaped(key)
        if len(args) > 2:
            env.write_string(", ")
            env.evaluate_each(args[2:])
    env.write_end_tag("span")


def render_mark(env: EncEnvironment, args: Sequence[Value]) -> None:
    children = args[3:]
    if env.ignore_links():
        write_span(env, Attributes(), children)
        return
    fragment = env.get_string(args, 2)
    if not fragment:
        env.evaluate_each(children)
        return
    env.write_mark_start(fragment)
    env.evaluate_each(children)
    env.write_end_tag("a")


def render_footnote_ref(env: EncEnvironment, args: Sequence[Value]) -> None:
    if env.write_footnotes:
        env.push_footnote(tuple(args[1:]), env.get_attributes(args, 0))


def make_format_fn(tag: str) -> Renderer:
    def render(env: EncEnvironment, args: Sequence[Value]) -> None:
        env.write_start_tag(tag, env.get_attributes(args, 0).promote_default())
        env.evaluate_each(args[1:])
        env.write_end_tag(tag)

    return render


_REF_STATES = {
    c.SYM_REF_STATE_INVALID: REF_STATE_INVALID,
    c.SYM_REF_STATE_ZETTEL: REF_STATE_ZETTEL,
    c.SYM_REF_STATE_SELF: REF_STATE_SELF,
    c.SYM_REF_STATE_FOUND: REF_STATE_FOUND,
    c.SYM_REF_STATE_BROKEN: REF_STATE_BROKEN,
    c.SYM_REF_STATE_HOSTED: REF_STATE_HOSTED,
    c.SYM_REF_STATE_BASED: REF_STATE_BASED,
    c.SYM_REF_STATE_EXTERNAL: REF_STATE_EXTERNAL,
}


def ref_state(kind: Symbol) -> str:
    """Writer state of a reference-kind symbol; unknown kinds keep their name."""
    return _REF_STATES.get(kind, kind.name)


def render_transclude(env: EncEnvironment, args: Sequence[Value]) -> None:
    ref = env.get_list(args, 1)
    kind = env.get_symbol(ref, 0)
    if kind is None:
        return
    if not env.write_transclude(ref_state(kind), env.get_string(ref, 1)):
        _logger.warning("transclusion without reference: %s", List(args))


def render_heading(env: EncEnvironment, args: Sequence[Value]) -> None:
    level = env.heading_level(env.get_string(args, 0))
    if level is None:
        return
    a = env.heading_attributes(env.get_attributes(args, 1), env.get_string(args, 2), env.get_string(args, 3))
    env.write_start_tag("h" + level, a)
    env.evaluate_each(args[4:])
    env.write_end_tag("h" + level)


def render_thematic(env: EncEnvironment, args: Sequence[Value]) -> None:
    a = env.get_attributes(args, 0) if args else None
    env.write_start_tag("hr", a)


def render_para(env: EncEnvironment, args: Sequence[Value]) -> None:
    env.write_string("<p>")
    env.evaluate_each(args)
    env.write_string("</p>")


# ── the table ───────────────────────────────────────────────────────

_list_ul = make_list_fn("ul")
_list_ol = make_list_fn("ol")

_DEFAULT_RENDERERS: list[tuple[Symbol, int, int, Renderer]] = [
    (c.SYM_PARA, 0, -1, render_para),
    (c.SYM_HEADING, 4, -1, render_heading),
    (c.SYM_THEMATIC, 0, 1, render_thematic),
    (c.SYM_LIST_UNORDERED, 0, -1, _list_ul),
    (c.SYM_LIST_UNORDERED_ALIAS, 0, -1, _list_ul),
    (c.SYM_LIST_ORDERED, 0, -1, _list_ol),
    (c.SYM_LIST_ORDERED_ALIAS, 0, -1, _list_ol),
    (c.SYM_LIST_QUOTE, 0, -1, render_quotation),
    (c.SYM_LIST_QUOTE_ALIAS, 0, -1, render_quotation),
    (c.SYM_DESCRIPTION, 0, -1, render_description),
    (c.SYM_TABLE, 1, -1, render_table),
    (c.SYM_CELL, 0, -1, make_cell_fn("")),
    (c.SYM_CELL_LEFT, 0, -1, make_cell_fn("left")),
    (c.SYM_CELL_CENTER, 0, -1, make_cell_fn("center")),
    (c.SYM_CELL_RIGHT, 0, -1, make_cell_fn("right")),
    (c.SYM_REGION_BLOCK, 2, -1, make_region_fn("div", promote=True)),
    (c.SYM_REGION_QUOTE, 2, -1, make_region_fn("blockquote")),
    (c.SYM_REGION_VERSE, 2, -1, make_region_fn("div")),
    (c.SYM_VERBATIM_CODE, 2, -1, _verbatim_code),
    (c.SYM_VERBATIM_EVAL, 2, -1, make_verbatim_fn("zs-eval")),
    (c.SYM_VERBATIM_MATH, 2, -1, make_verbatim_fn("zs-math")),
    (c.SYM_VERBATIM_COMMENT, 1, -1, make_comment_fn(block=True)),
    (c.SYM_VERBATIM_HTML, 2, -1, render_html),
    (c.SYM_VERBATIM_ZETTEL, 0, -1, do_nothing),
    (c.SYM_BLOB, 3, -1, render_blob),
    (c.SYM_TRANSCLUDE, 2, -1, render_transclude),
    (c.SYM_TEXT, 0, -1, render_text),
    (c.SYM_SPACE, 0, -1, render_space),
    (c.SYM_SOFT, 0, -1, lambda env, _args: env.write_string(" ")),
    (c.SYM_HARD, 0, -1, lambda env, _args: env.write_string("<br>")),
    (c.SYM_TAG, 0, -1, render_text),
    (c.SYM_LINK_INVALID, 2, -1, make_link_fn(REF_STATE_INVALID)),
    (c.SYM_LINK_ZETTEL, 2, -1, make_link_fn(REF_STATE_ZETTEL)),
    (c.SYM_LINK_SELF, 2, -1, make_link_fn(REF_STATE_SELF)),
    (c.SYM_LINK_FOUND, 2, -1, make_link_fn(REF_STATE_FOUND)),
    (c.SYM_LINK_BROKEN, 2, -1, make_link_fn(REF_STATE_BROKEN)),
    (c.SYM_LINK_HOSTED, 2, -1, make_link_fn(REF_STATE_HOSTED)),
    (c.SYM_LINK_BASED, 2, -1, make_link_fn(REF_STATE_BASED)),
    (c.SYM_LINK_EXTERNAL, 2, -1, make_link_fn(REF_STATE_EXTERNAL)),
    (c.SYM_EMBED, 3, -1, render_embed),
    (c.SYM_EMBED_BLOB, 3, -1, render_embed_blob),
    (c.SYM_CITE, 2, -1, render_cite),
    (c.SYM_MARK, 3, -1, render_mark),
    (c.SYM_FOOTNOTE, 1, -1, render_footnote_ref),
    (c.SYM_FORMAT_DELETE, 1, -1, make_format_fn("del")),
    (c.SYM_FORMAT_EMPH, 1, -1, make_format_fn("em")),
    (c.SYM_FORMAT_INSERT, 1, -1, make_format_fn("ins")),
    (c.SYM_FORMAT_QUOTE, 1, -1, make_format_fn("q")),
    (c.SYM_FORMAT_SPAN, 1, -1, make_format_fn("span")),
    (c.SYM_FORMAT_STRONG, 1, -1, make_format_fn("strong")),
    (c.SYM_FORMAT_SUB, 1, -1, make_format_fn("sub")),
    (c.SYM_FORMAT_SUPER, 1, -1, make_format_fn("sup")),
    (c.SYM_LITERAL_CODE, 2, -1, make_literal_fn("code", lang=True)),
    (c.SYM_LITERAL_INPUT, 2, -1, make_literal_fn("kbd")),
    (c.SYM_LITERAL_OUTPUT, 2, -1, make_literal_fn("samp")),
    (c.SYM_LITERAL_MATH, 2, -1, make_literal_fn("code", cls="zs-math")),
    (c.SYM_LITERAL_COMMENT, 1, -1, make_comment_fn(block=False)),
    (c.SYM_LITERAL_HTML, 2, -1, render_html),
    (c.SYM_LITERAL_ZETTEL, 0, -1, do_nothing),
]

DEFAULT_BUILTINS: dict[Symbol, Builtin] = {
    sym: Builtin(sym.name, fn, True, min_args, max_args)
    for sym, min_args, max_args, fn in _DEFAULT_RENDERERS
}
