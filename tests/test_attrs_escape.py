"""Tests for Attributes, attribute-list extraction, escaping and is_safe."""

from __future__ import annotations

import pytest

from zettel_html.attrs import Attributes
from zettel_html.html.escape import attribute_escape, escape, escape_literal, escape_visible, is_safe
from zettel_html.sexpr import get_attributes, read_string


# ── Attributes ──────────────────────────────────────────────────────


class TestAttributes:
    """Attributes are immutable; every change returns a new value."""

    def test_set_does_not_mutate(self) -> None:
        a = Attributes({"x": "1"})
        b = a.set("y", "2")
        assert dict(a) == {"x": "1"}
        assert dict(b) == {"x": "1", "y": "2"}

    def test_add_class_appends_once(self) -> None:
        a = Attributes({"class": "a"}).add_class("b").add_class("b")
        assert a["class"] == "a b"
        assert a.has_class("b")
        assert not a.has_class("c")

    def test_promote_default(self) -> None:
        a = Attributes({"": "go", "class": "x"}).promote_default("language-")
        assert dict(a) == {"class": "x language-go"}

    def test_promote_without_default_is_identity(self) -> None:
        a = Attributes({"id": "i"})
        assert a.promote_default() is a

    def test_marker(self) -> None:
        a = Attributes({"-": ""})
        assert a.has_marker()
        assert not a.remove_marker().has_marker()

    def test_sorted_keys(self) -> None:
        assert Attributes({"b": "", "a": "", "": ""}).keys_sorted() == ["", "a", "b"]


class TestAttributeLists:
    """``((key value) ...)`` lists become Attributes."""

    def test_pairs(self) -> None:
        a = get_attributes(read_string('(("" "go") ("id" "x"))'))
        assert dict(a) == {"": "go", "id": "x"}

    def test_malformed_pairs_skipped(self) -> None:
        a = get_attributes(read_string('(("only") "str" ("k" "v") (("n") "v"))'))
        assert dict(a) == {"k": "v"}

    def test_non_list_is_empty(self) -> None:
        assert get_attributes(read_string('"x"')).is_empty()


# ── escaping ────────────────────────────────────────────────────────


class TestEscape:
    """HTML escaping and the raw-HTML safety filter."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("a<b>c", "a&lt;b&gt;c"),
            ("x & y", "x &amp; y"),
            ('"q"', "&quot;q&quot;"),
            ("nul\x00", "nul�"),
        ],
    )
    def test_escape(self, raw: str, expected: str) -> None:
        assert escape(raw) == expected
        assert attribute_escape(raw) == expected

    @pytest.mark.parametrize("raw", ["", "plain text", "café – ok", "it's"])
    def test_clean_text_is_unchanged(self, raw: str) -> None:
        assert escape(raw) == raw
        assert escape(escape(raw)) == raw

    def test_visible_space(self) -> None:
        assert escape_visible("a b\u00a0c<") == "a␣b␣c&lt;"
        assert escape_literal("a b") == "a b"

    def test_visible_no_break_space(self) -> None:
        assert escape_visible("a\u00a0b") == "a␣b"
        assert escape_literal("a\u00a0b") == "a\u00a0b"

    @pytest.mark.parametrize(
        "html, safe",
        [
            ("<b>x</b>", True),
            ("<script>x</script>", False),
            ("<SCRIPT src=x>", False),
            ("text </Script>", False),
            ("<iframe src=x>", False),
            ("</IFRAME>", False),
            ("<scripted>", False),
            ("<p>script</p>", True),
        ],
    )
    def test_is_safe(self, html: str, safe: bool) -> None:
        assert is_safe(html) is safe
