"""Argument checking helpers shared by the intrinsic modules."""

from __future__ import annotations

from rlisp import LispValue
from rlisp.errors import RLispArityError, RLispNotANumber, RLispNotAString, RLispNotAList
from rlisp.types.printer import to_display
from rlisp.types.values import is_number


def check_arity(expected: int, args: list[LispValue]) -> None:
    """Raise an exact-arity error unless exactly ``expected`` args were passed."""
    if len(args) != expected:
        raise RLispArityError.exact(expected, len(args))


def number_arg(value: LispValue) -> float:
    if not is_number(value):
        raise RLispNotANumber(to_display(value))
    return float(value)


def string_arg(value: LispValue) -> str:
    if not isinstance(value, str):
        raise RLispNotAString(to_display(value))
    return value


def list_arg(value: LispValue) -> list:
    if not isinstance(value, list):
        raise RLispNotAList(to_display(value))
    return value
