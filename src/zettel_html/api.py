"""
zettel_html.api
===============

Programmatic entrypoints for lowering zettel trees to HTML.

Goals:
  - No argparse / CLI dependencies
  - One call per document, returning text plus the first render error
  - Identical output for both tree representations

Usage::

    from zettel_html.api import render_sexpr, render_zjson

    result = render_sexpr('(PARA (TEXT "Hello"))')
    assert result.ok and result.html == "<p>Hello</p>"
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from zettel_html.core.config import RenderConfig
from zettel_html.html.environment import EncEnvironment
from zettel_html.html.zencoder import Encoder
from zettel_html.sexpr.eval import evaluate
from zettel_html.sexpr.reader import read_document
from zettel_html.sexpr.values import Value

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    """HTML text of one render call and the first error it recorded."""

    html: str
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        err = None
        if self.error is not None:
            err = {"type": type(self.error).__name__, "message": str(self.error)}
        return {"html": self.html, "ok": self.ok, "error": err}


def _configure(writer: EncEnvironment | Encoder, config: RenderConfig) -> None:
    writer.set_unique(config.unique_prefix)
    writer.write_footnotes = config.emit_footnotes
    writer.no_links = config.suppress_links


# ── symbolic tree ───────────────────────────────────────────────────


def render_sexpr_value(tree: Value, config: RenderConfig | None = None) -> RenderResult:
    """Render an already-read symbolic tree."""
    config = config or RenderConfig()
    env = EncEnvironment(config.heading_offset)
    _configure(env, config)
    evaluate(env, tree)
    env.write_endnotes()
    if env.error is not None:
        _logger.info("render error: %s", env.error)
    return RenderResult(env.getvalue(), env.error)


def render_sexpr(source: str | Value, config: RenderConfig | None = None) -> RenderResult:
    """Read *source* (if it is text) and render it.

    Text must hold exactly one top-level value.  Raises
    :class:`~zettel_html.errors.ParseError` for malformed text or trailing
    input; render errors are reported in the result.
    """
    tree = read_document(source) if isinstance(source, str) else source
    return render_sexpr_value(tree, config)


# ── generic JSON tree ───────────────────────────────────────────────


def render_zjson(tree: Any, config: RenderConfig | None = None, *, validate: bool = False) -> RenderResult:
    """Render a generic tree (a block array of node objects).

    With ``validate=True`` the tree is checked against the bundled schema
    first; ``jsonschema.ValidationError`` propagates.
    """
    if validate:
        from zettel_html.contracts.load import validate_tree

        validate_tree(tree)
    config = config or RenderConfig(input_format="zjson")
    enc = Encoder(config.heading_offset)
    _configure(enc, config)
    if isinstance(tree, list):
        enc.traverse_block(tree)
    else:
        enc.unexpected(tree, 0, "block array")
    enc.write_endnotes()
    if enc.error is not None:
        _logger.info("render error: %s", enc.error)
    return RenderResult(enc.getvalue(), enc.error)
