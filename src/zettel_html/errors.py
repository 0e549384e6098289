"""Error taxonomy shared by the reader, the evaluator and the encoders.

``ParseError`` is raised by the reader and aborts the read.  The
``EvaluationError`` family is raised by the evaluation protocol; the HTML
encoders never let those escape a render call, they record the first one
as the session's sticky error and keep walking the tree.
"""

from __future__ import annotations


class ZettelHtmlError(Exception):
    """Base class of all errors raised by zettel_html."""


class ParseError(ZettelHtmlError):
    """Malformed s-expression text."""


class UnexpectedEOF(ParseError):
    """Input ended inside a list or a string (or was empty)."""

    def __init__(self, what: str = "value") -> None:
        self.what = what
        super().__init__(f"unexpected eof while reading {what}")


class EvaluationError(ZettelHtmlError):
    """A tree could not be evaluated / lowered."""


class UnboundIdentifier(EvaluationError):
    """A node-type symbol has no bound renderer."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unbound identifier: {name!r}")


class ArityError(EvaluationError):
    """A renderer received fewer (or more) arguments than it accepts."""

    def __init__(self, name: str, got: int, min_args: int, max_args: int = -1) -> None:
        self.name = name
        self.got = got
        self.min_args = min_args
        self.max_args = max_args
        if got < min_args:
            detail = f"at least {min_args}"
        else:
            detail = f"at most {max_args}"
        super().__init__(f"{name} expects {detail} argument(s), got {got}")


class TypeMismatch(EvaluationError):
    """An argument position holds a value of the wrong kind."""

    def __init__(self, expected: str, value: object, index: int | None = None) -> None:
        self.expected = expected
        self.value = value
        self.index = index
        where = "" if index is None else f" at position {index}"
        super().__init__(f"expected {expected}{where}, got {value!s}")
