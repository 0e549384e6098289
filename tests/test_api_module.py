"""Tests for zettel_html.api (programmatic render entry points)."""

from __future__ import annotations

import jsonschema
import pytest

import zettel_html
from zettel_html.api import RenderResult, render_sexpr, render_sexpr_value, render_zjson
from zettel_html.core.config import RenderConfig
from zettel_html.errors import ParseError, UnboundIdentifier
from zettel_html.sexpr import read_string


# ── render_sexpr ────────────────────────────────────────────────────


class TestRenderSexpr:
    def test_text_source(self) -> None:
        result = render_sexpr('(PARA (TEXT "Hello"))')
        assert result == RenderResult("<p>Hello</p>")
        assert result.ok

    def test_value_source(self) -> None:
        tree = read_string('(PARA (TEXT "Hello"))')
        assert render_sexpr(tree).html == "<p>Hello</p>"
        assert render_sexpr_value(tree).html == "<p>Hello</p>"

    def test_parse_error_propagates(self) -> None:
        with pytest.raises(ParseError):
            render_sexpr("(PARA")

    @pytest.mark.parametrize(
        "src",
        [
            '(PARA (TEXT "a")) (PARA (TEXT "b"))',
            '(PARA (TEXT "a")))',
        ],
    )
    def test_trailing_input_is_parse_error(self, src: str) -> None:
        with pytest.raises(ParseError):
            render_sexpr(src)

    def test_leading_bom(self) -> None:
        result = render_sexpr('\ufeff(PARA (TEXT "a"))')
        assert result == RenderResult("<p>a</p>")

    def test_sessions_are_independent(self) -> None:
        src = '(PARA (FOOTNOTE () (TEXT "n")))'
        first = render_sexpr(src).html
        assert render_sexpr(src).html == first
        assert 'id="fn:2"' not in first


# ── render_zjson ────────────────────────────────────────────────────


class TestRenderZjson:
    def test_basic(self) -> None:
        assert render_zjson([{"": "Para", "i": [{"": "Text", "s": "x"}]}]).html == "<p>x</p>"

    def test_validate_rejects_bad_tree(self) -> None:
        with pytest.raises(jsonschema.ValidationError):
            render_zjson([{"": "Nope"}], validate=True)

    def test_without_validation_error_is_reported(self) -> None:
        result = render_zjson([{"": "Nope"}])
        assert isinstance(result.error, UnboundIdentifier)

    def test_config_applies(self) -> None:
        tree = [{"": "Heading", "n": 1, "i": []}]
        assert render_zjson(tree, RenderConfig(heading_offset=1)).html == "<h2></h2>"


# ── RenderResult ────────────────────────────────────────────────────


class TestRenderResult:
    def test_to_dict_ok(self) -> None:
        assert RenderResult("<p></p>").to_dict() == {"html": "<p></p>", "ok": True, "error": None}

    def test_to_dict_error(self) -> None:
        d = RenderResult("", UnboundIdentifier("X")).to_dict()
        assert d["ok"] is False
        assert d["error"] == {"type": "UnboundIdentifier", "message": "unbound identifier: 'X'"}


def test_package_exports() -> None:
    assert zettel_html.render_sexpr is render_sexpr
    assert zettel_html.render_zjson is render_zjson
    assert zettel_html.__version__
