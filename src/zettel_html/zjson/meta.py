"""Metadata of a generic JSON zettel.

Metadata is an object mapping each key to a typed value object such as
``{"": "Word", "s": "draft"}``: the ``""`` field names the value type and
the one other field holds the value.
"""

from __future__ import annotations

from dataclasses import dataclass

from zettel_html.zjson.const import NAME_TYPE
from zettel_html.zjson.walk import Array, Object, Value, make_array, make_object


@dataclass(frozen=True)
class MetaValue:
    type: str
    key: str
    value: Value


def _make_meta_value(obj: Object) -> MetaValue:
    mtype, key, value = "", "", None
    for name, val in obj.items():
        if name == NAME_TYPE:
            if isinstance(val, str):
                mtype = val
        else:
            key, value = name, val
    return MetaValue(mtype, key, value)


class Meta(dict):
    """Key -> :class:`MetaValue`; accessors return empty values for missing keys."""

    def get_string(self, key: str) -> str:
        mv = self.get(key)
        if mv is None or not isinstance(mv.value, str):
            return ""
        return mv.value

    def get_array(self, key: str) -> Array | None:
        mv = self.get(key)
        return None if mv is None else make_array(mv.value)


def make_meta(val: Value) -> Meta:
    """Metadata from a decoded JSON object; untyped entries are dropped."""
    meta = Meta()
    for key, raw in (make_object(val) or {}).items():
        obj = make_object(raw)
        if not obj:
            continue
        mv = _make_meta_value(obj)
        if mv.type:
            meta[key] = mv
    return meta
