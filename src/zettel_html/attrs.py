"""Attributes attached to zettel nodes.

An ``Attributes`` value is an immutable string -> string mapping.  Every
"mutating" method returns a new instance, so attributes read from a caller's
tree can be normalised (class promotion, id injection, ...) without ever
aliasing the input.

Two keys are reserved:

- ``""`` is the *default* attribute, a positional value (CSS class, language).
- ``"-"`` is a boolean marker without a value.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping

#: Key of the positional default value.
DEFAULT_KEY = ""

#: Key of the boolean marker attribute.
MARKER_KEY = "-"


class Attributes(Mapping[str, str]):
    """Immutable attribute map with HTML-class helpers."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(data) if data else {}

    # ── Mapping protocol ────────────────────────────────────────────

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Attributes({self._data!r})"

    # ── queries ─────────────────────────────────────────────────────

    def is_empty(self) -> bool:
        return not self._data

    def keys_sorted(self) -> list[str]:
        """Keys in deterministic (sorted) order."""
        return sorted(self._data)

    def has_marker(self) -> bool:
        """True if the ``"-"`` marker is present."""
        return MARKER_KEY in self._data

    def classes(self) -> list[str]:
        return self._data.get("class", "").split()

    def has_class(self, name: str) -> bool:
        classes = self._data.get("class")
        if classes is None:
            return False
        return f" {name} " in f" {classes} "

    # ── derivations (all return new instances) ──────────────────────

    def set(self, key: str, value: str) -> Attributes:
        data = dict(self._data)
        data[key] = value
        return Attributes(data)

    def remove(self, key: str) -> Attributes:
        if key not in self._data:
            return self
        data = dict(self._data)
        del data[key]
        return Attributes(data)

    def remove_marker(self) -> Attributes:
        return self.remove(MARKER_KEY)

    def add_class(self, name: str) -> Attributes:
        classes = self.classes()
        if name in classes:
            return self
        classes.append(name)
        return self.set("class", " ".join(classes))

    def promote_default(self, prefix: str = "") -> Attributes:
        """Move the ``""`` value into the class list (optionally prefixed).

        ``{"": "go"}`` with prefix ``"language-"`` becomes
        ``{"class": "language-go"}``.
        """
        value = self._data.get(DEFAULT_KEY)
        if value is None:
            return self
        return self.remove(DEFAULT_KEY).add_class(prefix + value)


EMPTY = Attributes()
