"""HTML encoder for the generic JSON tree.

``Encoder`` is a :class:`~zettel_html.zjson.Visitor`; a type map binds every
node type to a ``TypeFunc`` returning ``(descend, close)``.  The output for a
document is byte-identical to the symbolic :class:`EncEnvironment` output for
the same logical document.

Object layouts (field names from :mod:`zettel_html.zjson.const`)::

    Para            i
    Heading         n a s(slug) q(fragment) i
    Thematic        a
    Bullet/Ordered  c
    Quotation       c
    Description     g: [{i, d: [blocks, ...]}, ...]
    Table           p: [header-cells, [row-cells, ...]]; cell = {s(align), i}
    Block/Excerpt/Poem   a b i(cite)
    *Block verbatim a s
    BLOB            q(title) s(syntax) o|v(data)
    Transclude      a q(state) s(ref)
    Text/Tag        s
    Space           [s]
    Link            a q(state) s(ref) i
    Embed           a s(src) q(syntax) i
    EmbedBLOB       a s(syntax) o|v(data) i
    Cite            a s(key) i
    Mark            s(mark) v(slug) q(fragment) i
    Footnote/Format a i
    literals        a s
"""

from __future__ import annotations

import logging
from typing import Callable

from zettel_html import zjson
from zettel_html.attrs import Attributes
from zettel_html.errors import TypeMismatch, UnboundIdentifier
from zettel_html.html.writer import REF_STATE_INVALID, SYNTAX_SVG, FootnoteQueue, HtmlWriter
from zettel_html.text import zjson_inline_text
from zettel_html.zjson import const as z

_logger = logging.getLogger(__name__)

TypeFunc = Callable[["Encoder", zjson.Object, int], "tuple[bool, zjson.CloseFn]"]

_NO_DESCENT: tuple[bool, zjson.CloseFn] = (False, None)


class Encoder(HtmlWriter):
    """Translate a generic JSON tree into HTML text."""

    def __init__(
        self,
        heading_offset: int = 0,
        *,
        type_map: dict[str, TypeFunc] | None = None,
        footnotes: FootnoteQueue | None = None,
    ) -> None:
        super().__init__(heading_offset, footnotes=footnotes)
        self.type_map = type_map if type_map is not None else dict(DEFAULT_TYPE_MAP)

    # ── type map ────────────────────────────────────────────────────

    def get_type_func(self, t: str) -> TypeFunc | None:
        return self.type_map.get(t)

    def set_type_func(self, t: str, fn: TypeFunc) -> None:
        """Replace the handler of an existing type; KeyError if there is none."""
        if t not in self.type_map:
            raise KeyError(t)
        self.type_map[t] = fn

    def change_type_func(self, t: str, maker: Callable[[TypeFunc], TypeFunc]) -> None:
        """Replace the handler of *t* with ``maker(previous_handler)``."""
        self.type_map[t] = maker(self.type_map[t])

    # ── traversal entry points ──────────────────────────────────────

    def traverse_block(self, blocks: zjson.Array) -> None:
        zjson.walk_block(self, blocks)

    def traverse_inline(self, inline: zjson.Array) -> None:
        zjson.walk_inline(self, inline)

    def encode_inline(self, inline: zjson.Array, *, with_footnotes: bool, no_links: bool) -> str:
        """Render *inline* into a separate buffer sharing map and footnotes."""
        child = Encoder(self.heading_offset, type_map=self.type_map, footnotes=self.footnotes)
        child.unique = self.unique
        child.write_footnotes = with_footnotes and self.write_footnotes
        child.no_links = no_links
        child.traverse_inline(inline)
        self.set_error(child.error)
        return child.getvalue()

    def render_footnote(self, note: zjson.Array) -> None:
        zjson.walk_inline(self, note)

    # ── visitor ─────────────────────────────────────────────────────

    def block_array(self, a: zjson.Array, pos: int) -> zjson.CloseFn:
        return None

    def inline_array(self, a: zjson.Array, pos: int) -> zjson.CloseFn:
        return None

    def item_array(self, a: zjson.Array, pos: int) -> zjson.CloseFn:
        self.write_string("<li>")
        return lambda: self.write_string("</li>")

    def unexpected(self, val: zjson.Value, pos: int, expected: str) -> None:
        _logger.warning("unexpected value at position %d (expected %s): %r", pos, expected, val)
        self.set_error(TypeMismatch(expected, val, pos))

    def _dispatch(self, t: str, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
        fn = self.type_map.get(t)
        if fn is None:
            self.set_error(UnboundIdentifier(t))
            return _NO_DESCENT
        return fn(self, obj, pos)

    def block_object(self, t: str, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
        return self._dispatch(t, obj, pos)

    def inline_object(self, t: str, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
        return self._dispatch(t, obj, pos)

    # ── shared node helpers ─────────────────────────────────────────

    def _close_tag(self, tag: str) -> zjson.CloseFn:
        return lambda: self.write_end_tag(tag)

    def _inline_of(self, obj: zjson.Object) -> zjson.Array:
        return zjson.get_array(obj, z.NAME_INLINE) or []

    def _write_span(self, a: Attributes, obj: zjson.Object) -> tuple[bool, zjson.CloseFn]:
        if not self._inline_of(obj):
            return _NO_DESCENT
        self.write_start_tag("span", a.promote_default())
        return True, self._close_tag("span")

    def _write_item(self, blocks: zjson.Array, compact: bool) -> None:
        inline = zjson.get_paragraph_inline(blocks) if compact else None
        if inline is not None:
            self.traverse_inline(inline)
        else:
            self.traverse_block(blocks)


# ── block handlers ──────────────────────────────────────────────────


def visit_para(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    enc.write_string("<p>")
    return True, lambda: enc.write_string("</p>")


def visit_heading(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    level = enc.heading_level(zjson.get_number(obj))
    if level is None:
        return _NO_DESCENT
    a = enc.heading_attributes(
        zjson.get_attributes(obj),
        zjson.get_string(obj, z.NAME_STRING),
        zjson.get_string(obj, z.NAME_STRING2),
    )
    enc.write_start_tag("h" + level, a)
    return True, enc._close_tag("h" + level)


def visit_thematic(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    enc.write_start_tag("hr", zjson.get_attributes(obj))
    return _NO_DESCENT


def _is_compact(items: zjson.Array) -> bool:
    for item in items:
        blocks = zjson.make_array(item)
        if blocks and zjson.get_paragraph_inline(blocks) is None:
            return False
    return True


def make_list_visitor(tag: str) -> TypeFunc:
    def visit(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
        items = zjson.get_array(obj, z.NAME_LIST) or []
        compact = _is_compact(items)
        enc.write_start_tag(tag)
        for i, item in enumerate(items):
            close = enc.item_array(items, i)
            blocks = zjson.make_array(item)
            if blocks is None:
                enc.unexpected(item, i, "item block array")
            else:
                enc._write_item(blocks, compact)
            close()
        enc.write_end_tag(tag)
        return _NO_DESCENT

    return visit


def visit_quotation(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    items = zjson.get_array(obj, z.NAME_LIST) or []
    enc.write_string("<blockquote>")
    single = zjson.make_array(items[0]) if len(items) == 1 else None
    inline = zjson.get_paragraph_inline(single) if single is not None else None
    if inline is not None:
        enc.traverse_inline(inline)
    else:
        for i, item in enumerate(items):
            blocks = zjson.make_array(item)
            if blocks is None:
                enc.unexpected(item, i, "quotation block array")
            else:
                enc.traverse_block(blocks)
    enc.write_string("</blockquote>")
    return _NO_DESCENT


def visit_description(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    enc.write_string("<dl>")
    for entry in zjson.get_array(obj, z.NAME_DESCR_LIST) or []:
        d_obj = zjson.make_object(entry)
        if d_obj is None:
            continue
        enc.write_string("<dt>")
        enc.traverse_inline(enc._inline_of(d_obj))
        enc.write_string("</dt>")
        for dd in zjson.get_array(d_obj, z.NAME_DESCRIPTION) or []:
            blocks = zjson.make_array(dd)
            if not blocks:
                continue
            enc.write_string("<dd>")
            enc._write_item(blocks, True)
            enc.write_string("</dd>")
    enc.write_string("</dl>")
    return _NO_DESCENT


def _write_table_row(enc: Encoder, row: zjson.Array) -> None:
    if not row:
        return
    enc.write_string("<tr>")
    for cell in row:
        c_obj = zjson.make_object(cell)
        if c_obj is None:
            continue
        enc.write_table_cell_start(z.ALIGN_NAMES.get(zjson.get_string(c_obj, z.NAME_STRING), ""))
        enc.traverse_inline(enc._inline_of(c_obj))
        enc.write_string("</td>")
    enc.write_string("</tr>")


def visit_table(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    tdata = zjson.get_array(obj, z.NAME_TABLE) or []
    header = zjson.make_array(tdata[0]) if tdata else None
    body = zjson.make_array(tdata[1]) if len(tdata) > 1 else None
    rows = [zjson.make_array(r) or [] for r in body or []]
    enc.write_string("<table>")
    if header:
        enc.write_string("<thead>")
        _write_table_row(enc, header)
        enc.write_string("</thead>")
    if any(rows):
        enc.write_string("<tbody>")
        for row in rows:
            _write_table_row(enc, row)
        enc.write_string("</tbody>")
    enc.write_string("</table>")
    return _NO_DESCENT


def make_region_visitor(tag: str, promote: bool = False) -> TypeFunc:
    def visit(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
        a = zjson.get_attributes(obj)
        if promote:
            a = a.promote_default()
        enc.write_start_tag(tag, a)
        enc.traverse_block(zjson.get_array(obj, z.NAME_BLOCK) or [])
        cite = enc._inline_of(obj)
        if cite:
            enc.write_string("<cite>")
            enc.traverse_inline(cite)
            enc.write_string("</cite>")
        enc.write_end_tag(tag)
        return _NO_DESCENT

    return visit


def visit_verbatim_code(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    a = zjson.get_attributes(obj).promote_default("language-")
    enc.write_verbatim(a, zjson.get_string(obj, z.NAME_STRING))
    return _NO_DESCENT


def make_verbatim_visitor(cls: str) -> TypeFunc:
    def visit(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
        enc.write_verbatim(zjson.get_attributes(obj).add_class(cls), zjson.get_string(obj, z.NAME_STRING))
        return _NO_DESCENT

    return visit


def make_comment_visitor(block: bool) -> TypeFunc:
    def visit(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
        if zjson.get_attributes(obj).has_marker():
            enc.write_comment(zjson.get_string(obj, z.NAME_STRING), block=block)
        return _NO_DESCENT

    return visit


def visit_html(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    enc.write_raw_html(zjson.get_string(obj, z.NAME_STRING))
    return _NO_DESCENT


def _blob_data(obj: zjson.Object) -> str:
    return zjson.get_string(obj, z.NAME_STRING3) or zjson.get_string(obj, z.NAME_BINARY)


def visit_blob(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    enc.write_blob(zjson.get_string(obj, z.NAME_STRING2), zjson.get_string(obj, z.NAME_STRING), _blob_data(obj))
    return _NO_DESCENT


def visit_transclude(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    state = zjson.get_string(obj, z.NAME_STRING2)
    if not state:
        enc.unexpected(obj, pos, "reference state")
        return _NO_DESCENT
    if not enc.write_transclude(state, zjson.get_string(obj, z.NAME_STRING)):
        _logger.warning("transclusion without reference: %r", obj)
    return _NO_DESCENT


def do_nothing(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    return _NO_DESCENT


# ── inline handlers ─────────────────────────────────────────────────


def visit_text(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    enc.write_escaped(zjson.get_string(obj, z.NAME_STRING))
    return _NO_DESCENT


def visit_space(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    if z.NAME_STRING in obj:
        enc.write_escaped(zjson.get_string(obj, z.NAME_STRING))
    else:
        enc.write_string(" ")
    return _NO_DESCENT


def visit_soft(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    enc.write_string(" ")
    return _NO_DESCENT


def visit_hard(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    enc.write_string("<br>")
    return _NO_DESCENT


def visit_link(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    a = zjson.get_attributes(obj)
    state = zjson.get_string(obj, z.NAME_STRING2)
    if enc.ignore_links() or state == REF_STATE_INVALID:
        return enc._write_span(a, obj)
    ref = zjson.get_string(obj, z.NAME_STRING)
    inline = enc._inline_of(obj)
    if not ref:
        return bool(inline), None
    link_attrs = enc.link_attributes(state, a, ref)
    if link_attrs is None:
        return enc._write_span(a, obj)
    enc.write_start_tag("a", link_attrs)
    if not inline:
        enc.write_escaped(ref)
        enc.write_end_tag("a")
        return _NO_DESCENT
    return True, enc._close_tag("a")


def visit_embed(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    src = zjson.get_string(obj, z.NAME_STRING)
    if zjson.get_string(obj, z.NAME_STRING2) == SYNTAX_SVG:
        enc.write_svg_embed(src)
        return _NO_DESCENT
    enc.write_image(zjson.get_attributes(obj), src, zjson_inline_text(enc._inline_of(obj)))
    return _NO_DESCENT


def visit_embed_blob(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    title = zjson.get_attributes(obj).get("title") or zjson_inline_text(enc._inline_of(obj))
    enc.write_blob(title, zjson.get_string(obj, z.NAME_STRING), _blob_data(obj))
    return _NO_DESCENT


def visit_cite(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    enc.write_start_tag("span", zjson.get_attributes(obj))
    key = zjson.get_string(obj, z.NAME_STRING)
    descend = False
    if key:
        enc.write_escaped(key)
        if enc._inline_of(obj):
            enc.write_string(", ")
            descend = True
    return descend, enc._close_tag("span")


def visit_mark(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    if enc.ignore_links():
        return enc._write_span(Attributes(), obj)
    fragment = zjson.get_string(obj, z.NAME_STRING2)
    if not fragment:
        return True, None
    enc.write_mark_start(fragment)
    return True, enc._close_tag("a")


def visit_footnote(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
    if enc.write_footnotes:
        enc.push_footnote(enc._inline_of(obj), zjson.get_attributes(obj))
    return _NO_DESCENT


def make_format_visitor(tag: str) -> TypeFunc:
    def visit(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
        enc.write_start_tag(tag, zjson.get_attributes(obj).promote_default())
        return True, enc._close_tag(tag)

    return visit


def make_literal_visitor(tag: str, cls: str = "", lang: bool = False) -> TypeFunc:
    def visit(enc: Encoder, obj: zjson.Object, pos: int) -> tuple[bool, zjson.CloseFn]:
        a = zjson.get_attributes(obj)
        if lang:
            a = a.promote_default("language-")
        if cls:
            a = a.add_class(cls)
        enc.write_literal(tag, a, zjson.get_string(obj, z.NAME_STRING))
        return _NO_DESCENT

    return visit


DEFAULT_TYPE_MAP: dict[str, TypeFunc] = {
    # Block
    z.TYPE_PARAGRAPH: visit_para,
    z.TYPE_HEADING: visit_heading,
    z.TYPE_BREAK_THEMATIC: visit_thematic,
    z.TYPE_LIST_BULLET: make_list_visitor("ul"),
    z.TYPE_LIST_ORDERED: make_list_visitor("ol"),
    z.TYPE_LIST_QUOTATION: visit_quotation,
    z.TYPE_DESCR_LIST: visit_description,
    z.TYPE_TABLE: visit_table,
    z.TYPE_BLOCK: make_region_visitor("div", promote=True),
    z.TYPE_EXCERPT: make_region_visitor("blockquote"),
    z.TYPE_POEM: make_region_visitor("div"),
    z.TYPE_VERBATIM_CODE: visit_verbatim_code,
    z.TYPE_VERBATIM_EVAL: make_verbatim_visitor("zs-eval"),
    z.TYPE_VERBATIM_MATH: make_verbatim_visitor("zs-math"),
    z.TYPE_VERBATIM_COMMENT: make_comment_visitor(block=True),
    z.TYPE_VERBATIM_HTML: visit_html,
    z.TYPE_VERBATIM_ZETTEL: do_nothing,
    z.TYPE_BLOB: visit_blob,
    z.TYPE_TRANSCLUDE: visit_transclude,
    # Inline
    z.TYPE_TEXT: visit_text,
    z.TYPE_SPACE: visit_space,
    z.TYPE_BREAK_SOFT: visit_soft,
    z.TYPE_BREAK_HARD: visit_hard,
    z.TYPE_TAG: visit_text,
    z.TYPE_LINK: visit_link,
    z.TYPE_EMBED: visit_embed,
    z.TYPE_EMBED_BLOB: visit_embed_blob,
    z.TYPE_CITATION: visit_cite,
    z.TYPE_MARK: visit_mark,
    z.TYPE_FOOTNOTE: visit_footnote,
    z.TYPE_FORMAT_DELETE: make_format_visitor("del"),
    z.TYPE_FORMAT_EMPH: make_format_visitor("em"),
    z.TYPE_FORMAT_INSERT: make_format_visitor("ins"),
    z.TYPE_FORMAT_QUOTE: make_format_visitor("q"),
    z.TYPE_FORMAT_SPAN: make_format_visitor("span"),
    z.TYPE_FORMAT_STRONG: make_format_visitor("strong"),
    z.TYPE_FORMAT_SUB: make_format_visitor("sub"),
    z.TYPE_FORMAT_SUPER: make_format_visitor("sup"),
    z.TYPE_LITERAL_CODE: make_literal_visitor("code", lang=True),
    z.TYPE_LITERAL_INPUT: make_literal_visitor("kbd"),
    z.TYPE_LITERAL_OUTPUT: make_literal_visitor("samp"),
    z.TYPE_LITERAL_MATH: make_literal_visitor("code", cls="zs-math"),
    z.TYPE_LITERAL_COMMENT: make_comment_visitor(block=False),
    z.TYPE_LITERAL_HTML: visit_html,
    z.TYPE_LITERAL_ZETTEL: do_nothing,
}
