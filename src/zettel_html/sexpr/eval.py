"""Generic evaluation protocol for symbolic expressions.

An :class:`Environment` binds symbols to :class:`Builtin` handlers and decides
what strings, symbols and lists evaluate to.  :func:`evaluate_call` is the
single dispatch step shared by every environment:

- head is a bound symbol, builtin is *special* -> handler gets the raw tail
- head is a bound symbol, builtin is *normal*  -> tail is evaluated first
- head is an unbound symbol                    -> ``UnboundIdentifier``
- anything else                                -> not a call (``done=False``)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol, Sequence

from zettel_html.errors import ArityError, UnboundIdentifier
from zettel_html.sexpr.values import List, String, Symbol, Value

Handler = Callable[[Any, Sequence[Value]], Any]


@dataclass(frozen=True, slots=True)
class Builtin:
    """A named handler with an arity contract."""

    name: str
    fn: Handler
    special: bool = True
    min_args: int = 0
    max_args: int = -1  # -1 = unbounded

    def call(self, env: Environment, args: Sequence[Value]) -> Any:
        n = len(args)
        if n < self.min_args or (self.max_args >= 0 and n > self.max_args):
            raise ArityError(self.name, n, self.min_args, self.max_args)
        return self.fn(env, args)


class Environment(Protocol):
    """Every evaluation environment must expose these four operations."""

    def lookup(self, sym: Symbol) -> Builtin | None:
        """Return the builtin bound to *sym*, or None."""
        ...

    def evaluate_symbol(self, sym: Symbol) -> Any: ...

    def evaluate_string(self, s: String) -> Any: ...

    def evaluate_list(self, lst: List) -> Any: ...


def evaluate(env: Environment, value: Value) -> Any:
    """Dispatch *value* to the environment by kind."""
    if isinstance(value, Symbol):
        return env.evaluate_symbol(value)
    if isinstance(value, String):
        return env.evaluate_string(value)
    if isinstance(value, List):
        return env.evaluate_list(value)
    # Other values evaluate to themselves
    return value


def evaluate_call(env: Environment, values: Sequence[Value]) -> tuple[Any, bool]:
    """Try to evaluate *values* as a call; return ``(result, done)``.

    ``done`` is False when the sequence does not start with a symbol, in which
    case the caller treats it as a plain sequence.
    """
    if not values:
        return None, False
    head = values[0]
    if not isinstance(head, Symbol):
        return None, False
    builtin = env.lookup(head)
    if builtin is None:
        raise UnboundIdentifier(head.name)
    params: Sequence[Value] = values[1:]
    if not builtin.special:
        params = evaluate_slice(env, params)
    return builtin.call(env, params), True


def evaluate_slice(env: Environment, values: Sequence[Value]) -> list[Any]:
    """Evaluate every element in order, failing on the first error."""
    return [evaluate(env, v) for v in values]
