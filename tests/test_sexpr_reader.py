"""Tests for zettel_html.sexpr: value model, interning and the reader."""

from __future__ import annotations

import pytest

from zettel_html.errors import ArityError, ParseError, TypeMismatch, UnexpectedEOF
from zettel_html.sexpr import (
    SYMBOLS,
    List,
    String,
    SymbolTable,
    get_list,
    get_string,
    get_symbol,
    make_list,
    read_all,
    read_bytes,
    read_document,
    read_string,
)


# ── symbols ─────────────────────────────────────────────────────────


class TestSymbolInterning:
    """Symbols are upper-cased and interned per table."""

    def test_same_identity_regardless_of_case(self) -> None:
        assert SYMBOLS.make("para") is SYMBOLS.make("PARA")

    def test_name_is_upper_cased(self) -> None:
        assert SYMBOLS.make("link-external").name == "LINK-EXTERNAL"

    def test_empty_text_rejected(self) -> None:
        with pytest.raises(ValueError):
            SYMBOLS.make("")

    def test_separate_tables_compare_equal_by_name(self) -> None:
        table = SymbolTable()
        own = table.make("text")
        assert own is not SYMBOLS.make("text")
        assert own == SYMBOLS.make("TEXT")
        assert hash(own) == hash(SYMBOLS.make("TEXT"))

    def test_find_does_not_create(self) -> None:
        table = SymbolTable()
        assert table.find("nothing") is None
        assert "nothing" not in table
        table.make("nothing")
        assert "NOTHING" in table
        assert len(table) == 1

    def test_reader_uses_explicit_table(self) -> None:
        table = SymbolTable()
        value = read_string("(abc)", symbols=table)
        assert value.head is table.find("abc")


# ── strings and lists ───────────────────────────────────────────────


class TestPrinting:
    """str() gives the canonical s-expression form."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (String("plain"), '"plain"'),
            (String('say "hi"'), '"say \\"hi\\""'),
            (String("a\tb\nc\r"), '"a\\tb\\nc\\r"'),
            (String("back\\slash"), '"back\\\\slash"'),
            (String("\x01"), '"\\u0001"'),
            (List(), "()"),
            (make_list(SYMBOLS.make("a"), String("b"), List()), '(A "b" ())'),
        ],
    )
    def test_canonical_form(self, value, expected: str) -> None:
        assert str(value) == expected

    def test_structural_equality(self) -> None:
        a = make_list(SYMBOLS.make("x"), String("y"))
        b = make_list(SYMBOLS.make("X"), String("y"))
        assert a == b
        assert a != make_list(SYMBOLS.make("x"), String("z"))

    def test_list_head_and_tail(self) -> None:
        lst = read_string('(PARA (TEXT "a") (TEXT "b"))')
        assert lst.head == SYMBOLS.make("para")
        assert len(lst.tail) == 2
        assert List().head is None


class TestAccessors:
    """Typed accessors raise the evaluation errors."""

    ARGS = (String("s"), SYMBOLS.make("sym"), List())

    def test_get_string_accepts_string_and_symbol(self) -> None:
        assert get_string(self.ARGS, 0) == "s"
        assert get_string(self.ARGS, 1) == "SYM"

    def test_get_string_rejects_list(self) -> None:
        with pytest.raises(TypeMismatch) as exc:
            get_string(self.ARGS, 2)
        assert exc.value.index == 2

    def test_get_symbol(self) -> None:
        assert get_symbol(self.ARGS, 1).name == "SYM"
        with pytest.raises(TypeMismatch):
            get_symbol(self.ARGS, 0)

    def test_get_list(self) -> None:
        assert get_list(self.ARGS, 2) == List()
        with pytest.raises(TypeMismatch):
            get_list(self.ARGS, 0)

    def test_out_of_range_is_arity_error(self) -> None:
        with pytest.raises(ArityError):
            get_string(self.ARGS, 3)


# ── reader ──────────────────────────────────────────────────────────


class TestReader:
    """Reading s-expression text."""

    def test_nested_list(self) -> None:
        value = read_string('(para (text "Hello") (space))')
        assert str(value) == '(PARA (TEXT "Hello") (SPACE))'

    def test_whitespace_is_insignificant(self) -> None:
        assert read_string("  (\n a\t b )  ") == read_string("(a b)")

    def test_symbol_ends_at_paren_and_quote(self) -> None:
        value = read_string('(a"b"c)')
        assert str(value) == '(A "b" C)'

    @pytest.mark.parametrize(
        "text, expected",
        [
            ('"\\x41"', "A"),
            ('"\\u00e4"', "ä"),
            ('"\\U01F600"', "\U0001F600"),
            ('"\\t\\r\\n\\"\\\\"', '\t\r\n"\\'),
            ('"\\q"', "q"),
        ],
    )
    def test_escapes(self, text: str, expected: str) -> None:
        assert read_string(text) == String(expected)

    @pytest.mark.parametrize(
        "text, expected",
        [
            ('"\\x4"', "x4"),
            ('"\\xZZ"', "xZZ"),
            ('"\\u12"', "u12"),
            ('"\\UFFFFFF"', "�"),
        ],
    )
    def test_malformed_numeric_escapes_degrade(self, text: str, expected: str) -> None:
        assert read_string(text) == String(expected)

    @pytest.mark.parametrize("text", ["", "   ", "(a (b)", '"open', '(a "b'])
    def test_unexpected_eof(self, text: str) -> None:
        with pytest.raises(UnexpectedEOF):
            read_string(text)

    def test_stray_close_paren(self) -> None:
        with pytest.raises(ParseError):
            read_string(")")

    def test_eof_is_parse_error(self) -> None:
        assert issubclass(UnexpectedEOF, ParseError)

    def test_read_all(self) -> None:
        values = read_all('a "b" (c)')
        assert [str(v) for v in values] == ["A", '"b"', "(C)"]

    def test_read_bytes_is_utf8(self) -> None:
        assert read_bytes('(text "ü")'.encode("utf-8")) == read_string('(TEXT "ü")')

    @pytest.mark.parametrize(
        "text",
        [
            '(PARA (TEXT "Hello") (FORMAT-EMPH () (TEXT "world")))',
            '(a "tab\\there" ("" "x") ())',
            '("quote \\" and \\\\ backslash" "\\u0007")',
        ],
    )
    def test_round_trip(self, text: str) -> None:
        value = read_string(text)
        assert read_string(str(value)) == value
        assert str(read_string(str(value))) == str(value)

    def test_leading_bom_is_skipped(self) -> None:
        assert read_string('\ufeff(PARA (TEXT "a"))') == read_string('(PARA (TEXT "a"))')
        assert read_all("\ufeffa b") == read_all("a b")

    def test_deep_nesting_is_parse_error(self) -> None:
        depth = 5000
        with pytest.raises(ParseError, match="nested too deeply"):
            read_string("(" * depth + ")" * depth)


class TestReadDocument:
    """A document is exactly one top-level value."""

    def test_single_value(self) -> None:
        assert read_document(' (PARA (TEXT "a"))\n') == read_string('(PARA (TEXT "a"))')

    @pytest.mark.parametrize(
        "text",
        [
            '(PARA (TEXT "a")) (PARA (TEXT "b"))',
            '(PARA (TEXT "a")))',
            "(a) b",
        ],
    )
    def test_trailing_input_rejected(self, text: str) -> None:
        with pytest.raises(ParseError, match="trailing input"):
            read_document(text)

    def test_empty_is_eof(self) -> None:
        with pytest.raises(UnexpectedEOF):
            read_document("\ufeff  ")
