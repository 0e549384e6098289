"""Field names, node types and enumerated values of the generic JSON tree."""

from __future__ import annotations

# Object field names
NAME_TYPE = ""
NAME_ATTRIBUTE = "a"
NAME_BINARY = "o"
NAME_BLOCK = "b"
NAME_DESCRIPTION = "d"
NAME_DESCR_LIST = "g"
NAME_INLINE = "i"
NAME_LIST = "c"
NAME_NUMERIC = "n"
NAME_STRING = "s"
NAME_STRING2 = "q"
NAME_STRING3 = "v"
NAME_TABLE = "p"

# Block types
TYPE_PARAGRAPH = "Para"
TYPE_HEADING = "Heading"
TYPE_BREAK_THEMATIC = "Thematic"
TYPE_LIST_BULLET = "Bullet"
TYPE_LIST_ORDERED = "Ordered"
TYPE_LIST_QUOTATION = "Quotation"
TYPE_DESCR_LIST = "Description"
TYPE_TABLE = "Table"
TYPE_BLOCK = "Block"
TYPE_EXCERPT = "Excerpt"
TYPE_POEM = "Poem"
TYPE_VERBATIM_CODE = "CodeBlock"
TYPE_VERBATIM_EVAL = "EvalBlock"
TYPE_VERBATIM_MATH = "MathBlock"
TYPE_VERBATIM_COMMENT = "CommentBlock"
TYPE_VERBATIM_HTML = "HTMLBlock"
TYPE_VERBATIM_ZETTEL = "ZettelBlock"
TYPE_BLOB = "BLOB"
TYPE_TRANSCLUDE = "Transclude"

# Inline types
TYPE_TEXT = "Text"
TYPE_SPACE = "Space"
TYPE_BREAK_SOFT = "Soft"
TYPE_BREAK_HARD = "Hard"
TYPE_TAG = "Tag"
TYPE_LINK = "Link"
TYPE_EMBED = "Embed"
TYPE_EMBED_BLOB = "EmbedBLOB"
TYPE_CITATION = "Cite"
TYPE_MARK = "Mark"
TYPE_FOOTNOTE = "Footnote"
TYPE_FORMAT_DELETE = "Delete"
TYPE_FORMAT_EMPH = "Emph"
TYPE_FORMAT_INSERT = "Insert"
TYPE_FORMAT_QUOTE = "Quote"
TYPE_FORMAT_SPAN = "Span"
TYPE_FORMAT_STRONG = "Strong"
TYPE_FORMAT_SUB = "Sub"
TYPE_FORMAT_SUPER = "Super"
TYPE_LITERAL_CODE = "Code"
TYPE_LITERAL_INPUT = "Input"
TYPE_LITERAL_OUTPUT = "Output"
TYPE_LITERAL_MATH = "Math"
TYPE_LITERAL_COMMENT = "Comment"
TYPE_LITERAL_HTML = "HTML"
TYPE_LITERAL_ZETTEL = "Zettel"

BLOCK_TYPES = frozenset(
    {
        TYPE_PARAGRAPH, TYPE_HEADING, TYPE_BREAK_THEMATIC, TYPE_LIST_BULLET,
        TYPE_LIST_ORDERED, TYPE_LIST_QUOTATION, TYPE_DESCR_LIST, TYPE_TABLE,
        TYPE_BLOCK, TYPE_EXCERPT, TYPE_POEM, TYPE_VERBATIM_CODE,
        TYPE_VERBATIM_EVAL, TYPE_VERBATIM_MATH, TYPE_VERBATIM_COMMENT,
        TYPE_VERBATIM_HTML, TYPE_VERBATIM_ZETTEL, TYPE_BLOB, TYPE_TRANSCLUDE,
    }
)
INLINE_TYPES = frozenset(
    {
        TYPE_TEXT, TYPE_SPACE, TYPE_BREAK_SOFT, TYPE_BREAK_HARD, TYPE_TAG,
        TYPE_LINK, TYPE_EMBED, TYPE_EMBED_BLOB, TYPE_CITATION, TYPE_MARK,
        TYPE_FOOTNOTE, TYPE_FORMAT_DELETE, TYPE_FORMAT_EMPH, TYPE_FORMAT_INSERT,
        TYPE_FORMAT_QUOTE, TYPE_FORMAT_SPAN, TYPE_FORMAT_STRONG, TYPE_FORMAT_SUB,
        TYPE_FORMAT_SUPER, TYPE_LITERAL_CODE, TYPE_LITERAL_INPUT,
        TYPE_LITERAL_OUTPUT, TYPE_LITERAL_MATH, TYPE_LITERAL_COMMENT,
        TYPE_LITERAL_HTML, TYPE_LITERAL_ZETTEL,
    }
)

# Reference states
REF_STATE_ZETTEL = "zettel"
REF_STATE_SELF = "self"
REF_STATE_FOUND = "found"
REF_STATE_BROKEN = "broken"
REF_STATE_HOSTED = "local"
REF_STATE_BASED = "based"
REF_STATE_EXTERNAL = "external"
REF_STATE_INVALID = "invalid"

# Table cell alignment
ALIGN_DEFAULT = ""
ALIGN_LEFT = "<"
ALIGN_CENTER = ":"
ALIGN_RIGHT = ">"

ALIGN_NAMES = {
    ALIGN_DEFAULT: "",
    ALIGN_LEFT: "left",
    ALIGN_CENTER: "center",
    ALIGN_RIGHT: "right",
}
