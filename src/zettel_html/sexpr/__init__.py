"""Symbolic expressions: value model, reader and evaluation protocol."""

from zettel_html.sexpr.attrs import get_attributes
from zettel_html.sexpr.eval import (
    Builtin,
    Environment,
    evaluate,
    evaluate_call,
    evaluate_slice,
)
from zettel_html.sexpr.reader import read_all, read_bytes, read_document, read_string
from zettel_html.sexpr.values import (
    SYMBOLS,
    List,
    String,
    Symbol,
    SymbolTable,
    Value,
    get_list,
    get_string,
    get_symbol,
    make_list,
)

__all__ = [
    "SYMBOLS",
    "Builtin",
    "Environment",
    "List",
    "String",
    "Symbol",
    "SymbolTable",
    "Value",
    "evaluate",
    "evaluate_call",
    "evaluate_slice",
    "get_attributes",
    "get_list",
    "get_string",
    "get_symbol",
    "make_list",
    "read_all",
    "read_bytes",
    "read_document",
    "read_string",
]
