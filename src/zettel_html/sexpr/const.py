"""Node-type symbols of the symbolic zettel representation."""

from __future__ import annotations

from zettel_html.sexpr.values import SYMBOLS

_make = SYMBOLS.make

# Block nodes
SYM_PARA = _make("PARA")
SYM_HEADING = _make("HEADING")
SYM_THEMATIC = _make("THEMATIC")
SYM_LIST_UNORDERED = _make("UNORDERED")
SYM_LIST_ORDERED = _make("ORDERED")
SYM_LIST_QUOTE = _make("QUOTATION")
SYM_DESCRIPTION = _make("DESCRIPTION")
SYM_TABLE = _make("TABLE")
SYM_CELL = _make("CELL")
SYM_CELL_LEFT = _make("CELL-LEFT")
SYM_CELL_CENTER = _make("CELL-CENTER")
SYM_CELL_RIGHT = _make("CELL-RIGHT")
SYM_REGION_BLOCK = _make("REGION-BLOCK")
SYM_REGION_QUOTE = _make("REGION-QUOTE")
SYM_REGION_VERSE = _make("REGION-VERSE")
SYM_VERBATIM_CODE = _make("VERBATIM-CODE")
SYM_VERBATIM_COMMENT = _make("VERBATIM-COMMENT")
SYM_VERBATIM_EVAL = _make("VERBATIM-EVAL")
SYM_VERBATIM_HTML = _make("VERBATIM-HTML")
SYM_VERBATIM_MATH = _make("VERBATIM-MATH")
SYM_VERBATIM_ZETTEL = _make("VERBATIM-ZETTEL")
SYM_BLOB = _make("BLOB")
SYM_TRANSCLUDE = _make("TRANSCLUDE")

# Inline nodes
SYM_TEXT = _make("TEXT")
SYM_SPACE = _make("SPACE")
SYM_SOFT = _make("SOFT")
SYM_HARD = _make("HARD")
SYM_TAG = _make("TAG")
SYM_LINK_INVALID = _make("LINK-INVALID")
SYM_LINK_ZETTEL = _make("LINK-ZETTEL")
SYM_LINK_SELF = _make("LINK-SELF")
SYM_LINK_FOUND = _make("LINK-FOUND")
SYM_LINK_BROKEN = _make("LINK-BROKEN")
SYM_LINK_HOSTED = _make("LINK-HOSTED")
SYM_LINK_BASED = _make("LINK-BASED")
SYM_LINK_EXTERNAL = _make("LINK-EXTERNAL")
SYM_EMBED = _make("EMBED")
SYM_EMBED_BLOB = _make("EMBED-BLOB")
SYM_CITE = _make("CITE")
SYM_MARK = _make("MARK")
SYM_FOOTNOTE = _make("FOOTNOTE")
SYM_FORMAT_DELETE = _make("FORMAT-DELETE")
SYM_FORMAT_EMPH = _make("FORMAT-EMPH")
SYM_FORMAT_INSERT = _make("FORMAT-INSERT")
SYM_FORMAT_QUOTE = _make("FORMAT-QUOTE")
SYM_FORMAT_SPAN = _make("FORMAT-SPAN")
SYM_FORMAT_STRONG = _make("FORMAT-STRONG")
SYM_FORMAT_SUB = _make("FORMAT-SUB")
SYM_FORMAT_SUPER = _make("FORMAT-SUPER")
SYM_LITERAL_CODE = _make("LITERAL-CODE")
SYM_LITERAL_COMMENT = _make("LITERAL-COMMENT")
SYM_LITERAL_HTML = _make("LITERAL-HTML")
SYM_LITERAL_INPUT = _make("LITERAL-INPUT")
SYM_LITERAL_MATH = _make("LITERAL-MATH")
SYM_LITERAL_OUTPUT = _make("LITERAL-OUTPUT")
SYM_LITERAL_ZETTEL = _make("LITERAL-ZETTEL")

# Alternate spellings accepted for list nodes
SYM_LIST_UNORDERED_ALIAS = _make("LIST-UNORDERED")
SYM_LIST_ORDERED_ALIAS = _make("LIST-ORDERED")
SYM_LIST_QUOTE_ALIAS = _make("LIST-QUOTE")

# Reference states (head of a reference list, e.g. ``(EXTERNAL "https://…")``)
SYM_REF_STATE_INVALID = _make("INVALID")
SYM_REF_STATE_ZETTEL = _make("ZETTEL")
SYM_REF_STATE_SELF = _make("SELF")
SYM_REF_STATE_FOUND = _make("FOUND")
SYM_REF_STATE_BROKEN = _make("BROKEN")
SYM_REF_STATE_HOSTED = _make("HOSTED")
SYM_REF_STATE_BASED = _make("BASED")
SYM_REF_STATE_EXTERNAL = _make("EXTERNAL")
