"""HTML lowering of zettel trees."""

from zettel_html.html.environment import EncEnvironment
from zettel_html.html.escape import attribute_escape, escape, escape_visible, is_safe
from zettel_html.html.writer import FootnoteQueue, HtmlWriter
from zettel_html.html.zencoder import Encoder

__all__ = [
    "EncEnvironment",
    "Encoder",
    "FootnoteQueue",
    "HtmlWriter",
    "attribute_escape",
    "escape",
    "escape_visible",
    "is_safe",
]
