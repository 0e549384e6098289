"""Attribute lists in the symbolic representation."""

from __future__ import annotations

from zettel_html.attrs import Attributes
from zettel_html.sexpr.values import List, String, Symbol, Value


def _atom_text(val: Value) -> str | None:
    if isinstance(val, String):
        return val.value
    if isinstance(val, Symbol):
        return val.name
    return None


def get_attributes(lst: Value | None) -> Attributes:
    """Turn ``((key value) ...)`` into :class:`Attributes`.

    Pairs that are not lists, are too short, or hold non-atoms are skipped.
    """
    if not isinstance(lst, List):
        return Attributes()
    data: dict[str, str] = {}
    for elem in lst:
        if not isinstance(elem, List) or len(elem) < 2:
            continue
        key = _atom_text(elem[0])
        val = _atom_text(elem[1])
        if key is None or val is None:
            continue
        data[key] = val
    return Attributes(data)
