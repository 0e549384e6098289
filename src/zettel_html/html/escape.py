"""HTML escaping and the raw-HTML safety filter."""

from __future__ import annotations

HTML_QUOT = "&quot;"  # longer than "&#34;", but often requested in standards
HTML_AMP = "&amp;"
HTML_LT = "&lt;"
HTML_GT = "&gt;"
HTML_NULL = "\ufffd"
HTML_LIT_SPACE = "\u00a0"
HTML_VIS_SPACE = "\u2423"

_HTML_ESCAPES = {
    ord("&"): HTML_AMP,
    ord("<"): HTML_LT,
    ord(">"): HTML_GT,
    ord('"'): HTML_QUOT,
    0: HTML_NULL,
}
_HTML_VIS_ESCAPES = {
    **_HTML_ESCAPES,
    ord(" "): HTML_VIS_SPACE,
    ord(HTML_LIT_SPACE): HTML_VIS_SPACE,
}


def escape(s: str) -> str:
    """Escape *s* so that it cannot interfere with surrounding HTML."""
    return s.translate(_HTML_ESCAPES)


def escape_literal(s: str) -> str:
    """Escape literal (code / keyboard / sample) content."""
    return s.translate(_HTML_ESCAPES)


def escape_visible(s: str) -> str:
    """Like :func:`escape_literal`, but every space becomes U+2423."""
    return s.translate(_HTML_VIS_ESCAPES)


def attribute_escape(s: str) -> str:
    """Escape an attribute value (to be placed inside double quotes)."""
    return s.translate(_HTML_ESCAPES)


_UNSAFE_SNIPPETS = ("<script", "</script", "<iframe", "</iframe")


def is_safe(s: str) -> bool:
    """True if *s* contains no script or iframe elements (case-insensitive)."""
    lower = s.lower()
    return not any(snippet in lower for snippet in _UNSAFE_SNIPPETS)
