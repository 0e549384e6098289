"""Value model of symbolic expressions: symbols, strings and lists."""

from __future__ import annotations

import threading
from typing import Iterable, Union

from zettel_html.errors import ArityError, TypeMismatch


class Symbol:
    """An interned, upper-cased atom.

    Never construct directly; use :meth:`SymbolTable.make` so that textually
    equal symbols share one identity.
    """

    __slots__ = ("name", "table")

    def __init__(self, name: str, table: SymbolTable) -> None:
        self.name = name
        self.table = table

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if isinstance(other, Symbol):
            return self.name == other.name
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Symbol({self.name!r})"

    def __str__(self) -> str:
        return self.name


class SymbolTable:
    """Interner for :class:`Symbol` values.

    Lookup is case-insensitive: ``make("a") is make("A")``.
    """

    def __init__(self) -> None:
        self._symbols: dict[str, Symbol] = {}
        self._lock = threading.Lock()

    def make(self, text: str) -> Symbol:
        if not text:
            raise ValueError("symbol text must not be empty")
        key = text.upper()
        with self._lock:
            sym = self._symbols.get(key)
            if sym is None:
                sym = Symbol(key, self)
                self._symbols[key] = sym
            return sym

    def find(self, text: str) -> Symbol | None:
        """Return an existing symbol without creating one."""
        return self._symbols.get(text.upper())

    def __contains__(self, text: str) -> bool:
        return text.upper() in self._symbols

    def __len__(self) -> int:
        return len(self._symbols)


#: Long-lived shared registry used when no explicit table is given.
SYMBOLS = SymbolTable()


_STRING_ESCAPES = {
    "\t": "\\t",
    "\r": "\\r",
    "\n": "\\n",
    '"': '\\"',
    "\\": "\\\\",
}


class String:
    """An immutable text payload."""

    __slots__ = ("value",)

    def __init__(self, value: str) -> None:
        self.value = value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, String):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("String", self.value))

    def __repr__(self) -> str:
        return f"String({self.value!r})"

    def __str__(self) -> str:
        out = ['"']
        for ch in self.value:
            esc = _STRING_ESCAPES.get(ch)
            if esc is not None:
                out.append(esc)
            elif ch < " ":
                out.append(f"\\u{ord(ch):04X}")
            else:
                out.append(ch)
        out.append('"')
        return "".join(out)


class List:
    """An ordered sequence of values; the empty list is valid."""

    __slots__ = ("items",)

    def __init__(self, items: Iterable[Value] = ()) -> None:
        self.items: tuple[Value, ...] = tuple(items)

    @property
    def head(self) -> Value | None:
        return self.items[0] if self.items else None

    @property
    def tail(self) -> tuple[Value, ...]:
        return self.items[1:]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    def __bool__(self) -> bool:
        return bool(self.items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, List):
            return self.items == other.items
        return NotImplemented

    def __hash__(self) -> int:
        return hash(("List", self.items))

    def __repr__(self) -> str:
        return f"List({list(self.items)!r})"

    def __str__(self) -> str:
        return "(" + " ".join(str(v) for v in self.items) + ")"


Value = Union[Symbol, String, List]


def make_list(*items: Value) -> List:
    return List(items)


# ── typed argument accessors ─────────────────────────────────────────


def _checked(args: tuple[Value, ...] | list[Value], idx: int) -> Value:
    if idx < 0 or idx >= len(args):
        raise ArityError("argument access", len(args), idx + 1)
    return args[idx]


def get_symbol(args, idx: int) -> Symbol:
    val = _checked(args, idx)
    if isinstance(val, Symbol):
        return val
    raise TypeMismatch("symbol", val, idx)


def get_string(args, idx: int) -> str:
    """Return the text of a String (or Symbol) argument."""
    val = _checked(args, idx)
    if isinstance(val, String):
        return val.value
    if isinstance(val, Symbol):
        return val.name
    raise TypeMismatch("string", val, idx)


def get_list(args, idx: int) -> List:
    val = _checked(args, idx)
    if isinstance(val, List):
        return val
    raise TypeMismatch("list", val, idx)
