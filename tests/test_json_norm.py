"""Tests for the canonical JSON normalization layer."""

import json

from zettel_html.api import RenderResult
from zettel_html.errors import UnboundIdentifier
from zettel_html.utils.json_norm import stable_json_dumps


def test_stable_json_dumps_sorts_keys_and_adds_newline():
    s = stable_json_dumps({"b": 1, "a": 2})
    assert s.endswith("\n")
    # Keys should be sorted in the serialized output
    assert s.index('"a"') < s.index('"b"')


def test_stable_json_dumps_render_result():
    payload = RenderResult("<p>x</p>", UnboundIdentifier("X")).to_dict()
    obj = json.loads(stable_json_dumps(payload))
    assert obj == {
        "html": "<p>x</p>",
        "ok": False,
        "error": {"type": "UnboundIdentifier", "message": "unbound identifier: 'X'"},
    }


def test_stable_json_dumps_nested_keys_sorted():
    s = stable_json_dumps({"z": {"b": [1, ("t",)], "a": None}}, indent=None)
    assert s == '{"z": {"a": null, "b": [1, ["t"]]}}\n'


def test_stable_json_dumps_keeps_non_ascii():
    assert "␣" in stable_json_dumps({"html": "a␣b"}, indent=None)
