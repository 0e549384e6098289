"""Tests for the generic JSON tree: accessors, traversal and the HTML Encoder."""

from __future__ import annotations

import pytest

from zettel_html import zjson
from zettel_html.api import render_zjson
from zettel_html.core.config import RenderConfig
from zettel_html.errors import TypeMismatch, UnboundIdentifier
from zettel_html.html import Encoder


def _html(tree, **cfg) -> str:
    result = render_zjson(tree, RenderConfig(input_format="zjson", **cfg))
    assert result.ok, result.error
    return result.html


def _para(*inline) -> dict:
    return {"": "Para", "i": list(inline)}


def _text(s: str) -> dict:
    return {"": "Text", "s": s}


# ── accessors ───────────────────────────────────────────────────────


class TestAccessors:
    """Accessors never raise; mistyped fields read as empty."""

    @pytest.mark.parametrize(
        "value, expected",
        [(2, "2"), (2.0, "2"), ("3", "3"), (True, ""), (2.5, ""), (None, "")],
    )
    def test_get_number(self, value, expected: str) -> None:
        assert zjson.get_number({"n": value}) == expected

    def test_get_string(self) -> None:
        assert zjson.get_string({"s": "x"}, "s") == "x"
        assert zjson.get_string({"s": 1}, "s") == ""
        assert zjson.get_string({}, "s") == ""

    def test_get_attributes_skips_non_strings(self) -> None:
        a = zjson.get_attributes({"a": {"": "x", "n": 1, "id": "i"}})
        assert dict(a) == {"": "x", "id": "i"}
        assert zjson.get_attributes({"a": []}).is_empty()

    def test_get_paragraph_inline(self) -> None:
        assert zjson.get_paragraph_inline([_para(_text("a"))]) == [_text("a")]
        assert zjson.get_paragraph_inline([{"": "Para"}]) == []
        assert zjson.get_paragraph_inline([_para(), _para()]) is None
        assert zjson.get_paragraph_inline([{"": "Thematic"}]) is None

    def test_make_helpers(self) -> None:
        assert zjson.make_array([1]) == [1]
        assert zjson.make_array({}) is None
        assert zjson.make_object({}) == {}
        assert zjson.make_object([]) is None


# ── traversal ───────────────────────────────────────────────────────


class Recorder:
    """Visitor that logs every hook call and always descends."""

    def __init__(self) -> None:
        self.events: list[str] = []

    def _log(self, event: str):
        self.events.append(event)
        return lambda: self.events.append("/" + event)

    def block_array(self, a, pos):
        return self._log("blocks")

    def inline_array(self, a, pos):
        return self._log("inlines")

    def item_array(self, a, pos):
        return self._log(f"item {pos}")

    def block_object(self, t, obj, pos):
        return True, self._log(f"block {t}")

    def inline_object(self, t, obj, pos):
        return True, self._log(f"inline {t}")

    def unexpected(self, val, pos, expected):
        self.events.append(f"unexpected {expected} at {pos}")


class TestWalk:
    """Visitor hook order."""

    def test_nested_tree(self) -> None:
        tree = [_para(_text("a")), {"": "Bullet", "c": [[{"": "Thematic"}]]}, 5]
        v = Recorder()
        zjson.walk_block(v, tree)
        assert v.events == [
            "blocks",
            "block Para",
            "inlines",
            "inline Text",
            "/inline Text",
            "/inlines",
            "/block Para",
            "block Bullet",
            "item 0",
            "blocks",
            "block Thematic",
            "/block Thematic",
            "/blocks",
            "/item 0",
            "/block Bullet",
            "unexpected object at 2",
            "/blocks",
        ]

    def test_children_order_is_inline_block_items(self) -> None:
        v = Recorder()
        zjson.walk_block_object(v, {"": "X", "c": [[]], "b": [], "i": []}, 0)
        assert v.events == [
            "block X",
            "inlines",
            "/inlines",
            "blocks",
            "/blocks",
            "item 0",
            "blocks",
            "/blocks",
            "/item 0",
            "/block X",
        ]

    def test_missing_type(self) -> None:
        v = Recorder()
        zjson.walk_inline(v, [{"s": "x"}])
        assert v.events == ["inlines", "unexpected object type at 0", "/inlines"]

    def test_mistyped_children(self) -> None:
        v = Recorder()
        zjson.walk_block_object(v, {"": "X", "i": "no"}, 3)
        assert "unexpected inline array at 3" in v.events

    def test_no_descent(self) -> None:
        class Shallow(Recorder):
            def block_object(self, t, obj, pos):
                return False, self._log(f"block {t}")

        v = Shallow()
        zjson.walk_block(v, [_para(_text("a"))])
        assert v.events == ["blocks", "block Para", "/block Para", "/blocks"]


# ── encoder ─────────────────────────────────────────────────────────


class TestEncoder:
    """Generic-tree specific behaviour of the HTML encoder."""

    def test_paragraph(self) -> None:
        tree = [_para(_text("Hello"), {"": "Emph", "i": [_text("world")]})]
        assert _html(tree) == "<p>Hello<em>world</em></p>"

    def test_heading_number_as_string(self) -> None:
        tree = [{"": "Heading", "n": "2", "s": "slug", "i": [_text("x")]}]
        assert _html(tree, heading_offset=1) == '<h3 id="slug">x</h3>'

    def test_table_alignment_markers(self) -> None:
        tree = [
            {
                "": "Table",
                "p": [
                    [{"s": ">", "i": [_text("h")]}],
                    [[{"s": "<", "i": [_text("a")]}, {"i": [_text("b")]}]],
                ],
            }
        ]
        assert _html(tree) == (
            '<table><thead><tr><td class="right">h</td></tr></thead>'
            '<tbody><tr><td class="left">a</td><td>b</td></tr></tbody></table>'
        )

    def test_description(self) -> None:
        tree = [{"": "Description", "g": [{"i": [_text("t")], "d": [[_para(_text("d"))], []]}]}]
        assert _html(tree) == "<dl><dt>t</dt><dd>d</dd></dl>"

    def test_local_state_is_hosted(self) -> None:
        tree = [{"": "Transclude", "q": "local", "s": "/x"}]
        assert _html(tree) == "<!-- transclude HOSTED: /x -->"

    def test_link_local(self) -> None:
        tree = [_para({"": "Link", "q": "local", "s": "/x", "i": [_text("h")]})]
        assert _html(tree) == '<p><a href="/x">h</a></p>'

    def test_blob_binary_field(self) -> None:
        tree = [{"": "BLOB", "q": "T", "s": "png", "o": "AAAA"}]
        assert _html(tree) == '<p><img src="data:image/png;base64,AAAA" title="T"></p>'

    def test_mark_without_fragment_renders_children(self) -> None:
        tree = [_para({"": "Mark", "s": "m", "i": [_text("x")]})]
        assert _html(tree) == "<p>x</p>"

    def test_unknown_type(self) -> None:
        result = render_zjson([{"": "Nope"}])
        assert isinstance(result.error, UnboundIdentifier)
        assert result.html == ""

    def test_tree_must_be_array(self) -> None:
        result = render_zjson({"": "Para"})
        assert isinstance(result.error, TypeMismatch)

    def test_transclude_without_state(self) -> None:
        result = render_zjson([{"": "Transclude", "s": "x"}])
        assert isinstance(result.error, TypeMismatch)

    def test_set_type_func(self) -> None:
        enc = Encoder()

        def shout(e, obj, pos):
            e.write_escaped(zjson.get_string(obj, "s").upper())
            return False, None

        enc.set_type_func("Text", shout)
        enc.traverse_block([_para(_text("hi"))])
        assert enc.getvalue() == "<p>HI</p>"
        assert _html([_para(_text("hi"))]) == "<p>hi</p>"

    def test_set_unknown_type_func(self) -> None:
        with pytest.raises(KeyError):
            Encoder().set_type_func("Nope", lambda e, o, p: (False, None))

    def test_change_type_func(self) -> None:
        enc = Encoder()

        def wrap(previous):
            def visit(e, obj, pos):
                e.write_string("[")
                descend, close = previous(e, obj, pos)

                def done():
                    if close is not None:
                        close()
                    e.write_string("]")

                return descend, done

            return visit

        enc.change_type_func("Para", wrap)
        enc.traverse_block([_para(_text("x"))])
        assert enc.getvalue() == "[<p>x</p>]"

    def test_encode_inline(self) -> None:
        enc = Encoder()
        out = enc.encode_inline(
            [{"": "Link", "q": "zettel", "s": "1", "i": [_text("a")]}],
            with_footnotes=False,
            no_links=True,
        )
        assert out == "<span>a</span>"
        assert enc.getvalue() == ""


# ── metadata ────────────────────────────────────────────────────────


class TestMeta:
    """Typed metadata values of a generic zettel."""

    RAW = {
        "title": {"": "Zettelmarkup", "s": "A *title*"},
        "tags": {"": "TagSet", "s": ["#a", "#b"]},
        "untyped": {"s": "dropped"},
        "empty": {},
        "scalar": "dropped",
    }

    def test_make_meta_keeps_typed_entries(self) -> None:
        meta = zjson.make_meta(self.RAW)
        assert sorted(meta) == ["tags", "title"]
        assert meta["title"] == zjson.MetaValue("Zettelmarkup", "s", "A *title*")

    def test_get_string(self) -> None:
        meta = zjson.make_meta(self.RAW)
        assert meta.get_string("title") == "A *title*"
        assert meta.get_string("tags") == ""
        assert meta.get_string("missing") == ""

    def test_get_array(self) -> None:
        meta = zjson.make_meta(self.RAW)
        assert meta.get_array("tags") == ["#a", "#b"]
        assert meta.get_array("title") is None
        assert meta.get_array("missing") is None

    @pytest.mark.parametrize("raw", [None, [], "x", {}])
    def test_non_object_is_empty(self, raw) -> None:
        assert zjson.make_meta(raw) == {}
