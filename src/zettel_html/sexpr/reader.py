"""Reader: turns s-expression text into values.

Grammar::

    value  := list | string | symbol
    list   := "(" value* ")"
    string := '"' (char | escape)* '"'
    escape := \\t | \\r | \\n | \\" | \\\\ | \\xHH | \\uHHHH | \\UHHHHHH

A numeric escape with missing or non-hex digits keeps the escape letter
literally instead of failing.  A leading byte-order mark is skipped.
"""

from __future__ import annotations

import unicodedata

from zettel_html.errors import ParseError, UnexpectedEOF
from zettel_html.sexpr.values import SYMBOLS, List, String, SymbolTable, Value

_SIMPLE_ESCAPES = {"t": "\t", "r": "\r", "n": "\n"}
_NUMERIC_ESCAPES = {"x": 2, "u": 4, "U": 6}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_DELIMITERS = frozenset('()"')
_BOM = "\ufeff"


def _is_symbol_end(ch: str) -> bool:
    return ch in _DELIMITERS or ch.isspace() or unicodedata.category(ch).startswith("C")


class Reader:
    """Single-use cursor over one source text."""

    def __init__(self, src: str, symbols: SymbolTable | None = None) -> None:
        self.src = src
        self.pos = 1 if src.startswith(_BOM) else 0
        self.symbols = symbols if symbols is not None else SYMBOLS

    def at_end(self) -> bool:
        self.skip_space()
        return self.pos >= len(self.src)

    def skip_space(self) -> None:
        src = self.src
        while self.pos < len(src) and src[self.pos].isspace():
            self.pos += 1

    def read(self) -> Value:
        self.skip_space()
        if self.pos >= len(self.src):
            raise UnexpectedEOF("value")
        ch = self.src[self.pos]
        if ch == "(":
            return self._read_list()
        if ch == '"':
            return self._read_string()
        if ch == ")":
            raise ParseError(f"unexpected ')' at offset {self.pos}")
        return self._read_symbol()

    def _read_symbol(self) -> Value:
        src = self.src
        start = self.pos
        self.pos += 1
        while self.pos < len(src) and not _is_symbol_end(src[self.pos]):
            self.pos += 1
        return self.symbols.make(src[start:self.pos])

    def _read_string(self) -> Value:
        src = self.src
        buf: list[str] = []
        self.pos += 1  # opening quote
        while True:
            if self.pos >= len(src):
                raise UnexpectedEOF("string")
            ch = src[self.pos]
            self.pos += 1
            if ch == '"':
                return String("".join(buf))
            if ch != "\\":
                buf.append(ch)
                continue
            if self.pos >= len(src):
                raise UnexpectedEOF("string")
            esc = src[self.pos]
            self.pos += 1
            if esc in _SIMPLE_ESCAPES:
                buf.append(_SIMPLE_ESCAPES[esc])
            elif esc in _NUMERIC_ESCAPES:
                buf.append(self._read_code_point(esc, _NUMERIC_ESCAPES[esc]))
            else:
                buf.append(esc)

    def _read_code_point(self, letter: str, num_digits: int) -> str:
        digits = self.src[self.pos:self.pos + num_digits]
        if len(digits) < num_digits or not all(d in _HEX_DIGITS for d in digits):
            return letter
        self.pos += num_digits
        code = int(digits, 16)
        if code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
            return "\ufffd"
        return chr(code)

    def _read_list(self) -> Value:
        src = self.src
        self.pos += 1  # opening paren
        items: list[Value] = []
        while True:
            self.skip_space()
            if self.pos >= len(src):
                raise UnexpectedEOF("list")
            if src[self.pos] == ")":
                self.pos += 1
                return List(items)
            items.append(self.read())


def _too_deep() -> ParseError:
    return ParseError("input nested too deeply")


def read_string(src: str, *, symbols: SymbolTable | None = None) -> Value:
    """Read the first value of *src*."""
    try:
        return Reader(src, symbols).read()
    except RecursionError:
        raise _too_deep() from None


def read_bytes(data: bytes, *, symbols: SymbolTable | None = None) -> Value:
    return read_string(data.decode("utf-8", errors="replace"), symbols=symbols)


def read_document(src: str, *, symbols: SymbolTable | None = None) -> Value:
    """Read *src* as exactly one value; trailing input is a ParseError."""
    reader = Reader(src, symbols)
    try:
        value = reader.read()
    except RecursionError:
        raise _too_deep() from None
    if not reader.at_end():
        raise ParseError(f"trailing input at offset {reader.pos}")
    return value


def read_all(src: str, *, symbols: SymbolTable | None = None) -> list[Value]:
    """Read every top-level value of *src*."""
    reader = Reader(src, symbols)
    values: list[Value] = []
    try:
        while not reader.at_end():
            values.append(reader.read())
    except RecursionError:
        raise _too_deep() from None
    return values
