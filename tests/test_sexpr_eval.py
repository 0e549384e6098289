"""Tests for the generic evaluation protocol (zettel_html.sexpr.eval)."""

from __future__ import annotations

import pytest

from zettel_html.errors import ArityError, UnboundIdentifier
from zettel_html.sexpr import (
    SYMBOLS,
    Builtin,
    List,
    String,
    Symbol,
    evaluate,
    evaluate_call,
    evaluate_slice,
    read_string,
)


def _add(env, args):
    return sum(int(a) for a in args)


def _quote(env, args):
    return args[0]


class CalcEnv:
    """Minimal value-returning environment used to exercise the protocol."""

    def __init__(self) -> None:
        self.builtins = {
            SYMBOLS.make("add"): Builtin("ADD", _add, special=False, min_args=1),
            SYMBOLS.make("quote"): Builtin("QUOTE", _quote, special=True, min_args=1, max_args=1),
        }
        self.seen_symbols: list[str] = []

    def lookup(self, sym: Symbol):
        return self.builtins.get(sym)

    def evaluate_symbol(self, sym: Symbol):
        self.seen_symbols.append(sym.name)
        return sym.name

    def evaluate_string(self, s: String):
        return s.value

    def evaluate_list(self, lst: List):
        result, done = evaluate_call(self, lst.items)
        if done:
            return result
        return evaluate_slice(self, lst.items)


class TestEvaluate:
    """Dispatch by value kind and call semantics."""

    def test_string_and_symbol(self) -> None:
        env = CalcEnv()
        assert evaluate(env, String("x")) == "x"
        assert evaluate(env, SYMBOLS.make("y")) == "Y"

    def test_normal_builtin_gets_evaluated_arguments(self) -> None:
        env = CalcEnv()
        assert evaluate(env, read_string('(add "1" (add "2" "3"))')) == 6

    def test_special_builtin_gets_raw_arguments(self) -> None:
        env = CalcEnv()
        result = evaluate(env, read_string('(quote (add "1"))'))
        assert isinstance(result, List)
        assert str(result) == '(ADD "1")'

    def test_non_call_list_is_a_sequence(self) -> None:
        env = CalcEnv()
        assert evaluate(env, read_string('("a" (add "1" "1") "b")')) == ["a", 2, "b"]

    def test_empty_list_is_not_a_call(self) -> None:
        assert evaluate_call(CalcEnv(), ()) == (None, False)

    def test_unbound_head_symbol(self) -> None:
        with pytest.raises(UnboundIdentifier) as exc:
            evaluate(CalcEnv(), read_string("(nope 1)"))
        assert exc.value.name == "NOPE"

    def test_too_few_arguments(self) -> None:
        with pytest.raises(ArityError) as exc:
            evaluate(CalcEnv(), read_string("(add)"))
        assert exc.value.got == 0
        assert exc.value.min_args == 1

    def test_too_many_arguments(self) -> None:
        with pytest.raises(ArityError):
            evaluate(CalcEnv(), read_string('(quote "a" "b")'))

    def test_normal_arguments_fail_fast(self) -> None:
        env = CalcEnv()
        with pytest.raises(UnboundIdentifier):
            evaluate(env, read_string("(add (nope) sym)"))
        assert env.seen_symbols == []
