"""Built-in functions for the RLisp runtime environment.

This module defines core arithmetic, comparison, list processing, predicates,
application helpers, and the registration entry point that populates an
Environment's base scope. Numbers follow IEEE double semantics: division by
zero and out-of-domain operations produce inf or NaN rather than errors.
"""
from __future__ import annotations

import math

from rlisp import LispValue, IntrinsicFn, SpecialFormFn
from rlisp.config import LISP_NAME, LISP_VERSION
from rlisp.errors import (
    RLispArityError,
    RLispError,
    RLispNotABool,
    RLispNotAFunction,
    RLispNotAList,
    RLispTypeError,
)
from rlisp.evaluation.apply import apply_closure
from rlisp.evaluation.evaluator import evaluate
from rlisp.evaluation.special_forms import SPECIAL_FORMS
from rlisp.types.environment import Environment
from rlisp.types.printer import to_display
from rlisp.types.symbol import Symbol
from rlisp.types.values import (
    Closure,
    Intrinsic,
    SpecialForm,
    StructInstance,
    empty,
    is_number,
    to_expr,
    values_equal,
)
from rlisp.builtin.common import check_arity, number_arg, list_arg
from rlisp.builtin import io_builtin, string_builtin


def define_intrinsic(env: Environment, name: str, fn: IntrinsicFn) -> None:
    """Bind ``name`` to a native function whose arguments are evaluated first."""
    env.define(name, Intrinsic(name, fn))


def define_special_form(env: Environment, name: str, fn: SpecialFormFn) -> None:
    """Bind ``name`` to a native handler receiving its form unevaluated."""
    env.define(name, SpecialForm(name, fn))


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[LispValue]) -> float:
    """Return the sum of 0 and all arguments."""
    total = 0.0
    for arg in args:
        total += number_arg(arg)
    return total


def sub(env: Environment, args: list[LispValue]) -> float:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    if not args:
        raise RLispArityError.at_least(1, 0)
    first = number_arg(args[0])
    if len(args) == 1:
        return -first
    for arg in args[1:]:
        first -= number_arg(arg)
    return first


def mul(env: Environment, args: list[LispValue]) -> float:
    """Return the product of 1 and all arguments."""
    product = 1.0
    for arg in args:
        product *= number_arg(arg)
    return product


def _divide(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def div(env: Environment, args: list[LispValue]) -> float:
    """Divide left-to-right; with one arg returns the reciprocal."""
    if not args:
        raise RLispArityError.at_least(1, 0)
    first = number_arg(args[0])
    if len(args) == 1:
        return _divide(1.0, first)
    for arg in args[1:]:
        first = _divide(first, number_arg(arg))
    return first


def modulo(env: Environment, args: list[LispValue]) -> float:
    """(modulo a b): remainder with the sign of a."""
    check_arity(2, args)
    a, b = number_arg(args[0]), number_arg(args[1])
    if b == 0.0 or math.isinf(a):
        return math.nan
    return math.fmod(a, b)


def sqrt(env: Environment, args: list[LispValue]) -> float:
    check_arity(1, args)
    a = number_arg(args[0])
    return math.sqrt(a) if a >= 0 else math.nan


def power(env: Environment, args: list[LispValue]) -> float:
    """(pow a b) => a raised to the power b."""
    check_arity(2, args)
    a, b = number_arg(args[0]), number_arg(args[1])
    # Odd integral exponents keep the sign of the base
    odd = b.is_integer() and b % 2 == 1
    if a == 0.0 and b < 0:
        return math.copysign(math.inf, a) if odd else math.inf
    try:
        return math.pow(a, b)
    except OverflowError:
        return math.copysign(math.inf, a) if odd else math.inf
    except ValueError:
        return math.nan


def _ln(x: float) -> float:
    if x == 0.0:
        return -math.inf
    if x < 0.0 or math.isnan(x):
        return math.nan
    return math.log(x)


def log(env: Environment, args: list[LispValue]) -> float:
    """(log x) natural logarithm, (log x base) logarithm in the given base."""
    if len(args) == 1:
        return _ln(number_arg(args[0]))
    if len(args) == 2:
        return _divide(_ln(number_arg(args[0])), _ln(number_arg(args[1])))
    if not args:
        raise RLispArityError.at_least(1, 0)
    raise RLispArityError.at_most(2, len(args))


def fibonacci(env: Environment, args: list[LispValue]) -> float:
    """(fibonacci n) computed natively, fib(0) = 0 and fib(1) = 1."""
    check_arity(1, args)
    n = number_arg(args[0])
    if n < 0 or not n.is_integer():
        raise RLispError(f"{to_display(n)} is not a non-negative integer.")
    a, b = 0, 1
    for _ in range(int(n)):
        a, b = b, a + b
    return float(a)


def _unary_math(fn):
    def intrinsic(env: Environment, args: list[LispValue]) -> float:
        check_arity(1, args)
        try:
            return fn(number_arg(args[0]))
        except ValueError:
            return math.nan
    return intrinsic


TRIG_FUNCTIONS = {
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "asin": math.asin,
    "acos": math.acos,
    "atan": math.atan,
}


# -------------------------------
# Comparison
# -------------------------------
def _compare(args: list[LispValue]) -> tuple[float, float]:
    check_arity(2, args)
    a, b = args
    if not is_number(a) or not is_number(b):
        raise RLispTypeError(
            to_display(a), f"Cannot compare {to_display(a)} and {to_display(b)}."
        )
    return float(a), float(b)


def lt(env: Environment, args: list[LispValue]) -> bool:
    a, b = _compare(args)
    return a < b


def lte(env: Environment, args: list[LispValue]) -> bool:
    a, b = _compare(args)
    return a <= b


def gt(env: Environment, args: list[LispValue]) -> bool:
    a, b = _compare(args)
    return a > b


def gte(env: Environment, args: list[LispValue]) -> bool:
    a, b = _compare(args)
    return a >= b


def is_eq(env: Environment, args: list[LispValue]) -> bool:
    """(eq? a b): structural equality; functions are never equal."""
    check_arity(2, args)
    return values_equal(args[0], args[1])


# -------------------------------
# Boolean logic
# -------------------------------
def _bool_pair(args: list[LispValue]) -> tuple[bool, bool]:
    check_arity(2, args)
    for arg in args:
        if not isinstance(arg, bool):
            raise RLispNotABool(to_display(arg))
    return args[0], args[1]


def logical_and(env: Environment, args: list[LispValue]) -> bool:
    a, b = _bool_pair(args)
    return a and b


def logical_or(env: Environment, args: list[LispValue]) -> bool:
    a, b = _bool_pair(args)
    return a or b


def logical_not(env: Environment, args: list[LispValue]) -> bool:
    check_arity(1, args)
    if not isinstance(args[0], bool):
        raise RLispNotABool(to_display(args[0]))
    return not args[0]


# -------------------------------
# Type predicates
# -------------------------------
def _predicate(check):
    def intrinsic(env: Environment, args: list[LispValue]) -> bool:
        check_arity(1, args)
        return check(args[0])
    return intrinsic


TYPE_CHECKS = {
    "num?": is_number,
    "bool?": lambda v: isinstance(v, bool),
    "str?": lambda v: isinstance(v, str),
    "symbol?": lambda v: isinstance(v, Symbol),
    "cons?": lambda v: isinstance(v, list),
    "lambda?": lambda v: isinstance(v, (Closure, Intrinsic)),
    "struct?": lambda v: isinstance(v, StructInstance),
}


# -------------------------------
# List operations
# -------------------------------
def list_builtin(env: Environment, args: list[LispValue]) -> list:
    return list(args)


def cons(env: Environment, args: list[LispValue]) -> list:
    """(cons x xs): a new list with x prepended to xs."""
    check_arity(2, args)
    head, tail = args
    return [head, *list_arg(tail)]


def car(env: Environment, args: list[LispValue]) -> LispValue:
    check_arity(1, args)
    xs = list_arg(args[0])
    if not xs:
        raise RLispError("Cannot call car on an empty list.")
    return xs[0]


def cdr(env: Environment, args: list[LispValue]) -> list:
    check_arity(1, args)
    xs = list_arg(args[0])
    if not xs:
        raise RLispError("Cannot call cdr on an empty list.")
    return xs[1:]


def length(env: Environment, args: list[LispValue]) -> float:
    check_arity(1, args)
    return float(len(list_arg(args[0])))


def nth(env: Environment, args: list[LispValue]) -> LispValue:
    """(nth xs i): element i of xs; the empty list for an empty xs."""
    check_arity(2, args)
    xs = list_arg(args[0])
    index = number_arg(args[1])
    if not xs:
        return empty()
    if not index.is_integer():
        raise RLispError("List index must be an integer.")
    if not 0 <= index < len(xs):
        raise RLispError(f"Index {to_display(index)} is out of range for {to_display(xs)}.")
    return xs[int(index)]


def append(env: Environment, args: list[LispValue]) -> list:
    """(append xs ys ...): concatenation of all list arguments."""
    result: list = []
    for arg in args:
        result.extend(list_arg(arg))
    return result


# -------------------------------
# Evaluation and application
# -------------------------------
def begin(env: Environment, args: list[LispValue]) -> LispValue:
    """Return the last argument; arguments were already evaluated in order."""
    return args[-1] if args else empty()


def apply_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(apply f xs): call f with the elements of xs as its arguments."""
    check_arity(2, args)
    fn, fn_args = args
    if not isinstance(fn_args, list):
        raise RLispNotAList(to_display(fn_args))
    if isinstance(fn, Closure):
        return apply_closure(fn, list(fn_args), env, evaluate)
    if isinstance(fn, Intrinsic):
        return fn(env, list(fn_args))
    if isinstance(fn, SpecialForm):
        raise RLispTypeError(
            to_display(fn), f"Contract not satisfied: {to_display(fn)} {to_display(fn_args)}."
        )
    raise RLispNotAFunction(to_display(fn))


def eval_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(eval v): convert v back to an expression and evaluate it."""
    check_arity(1, args)
    return evaluate(to_expr(args[0]), env)


# -------------------------------
# Registration
# -------------------------------
def register(env: Environment) -> None:
    """Populate the current (normally base) scope with the standard library."""
    env.update({
        "empty": empty(),
        "math/infinity": math.inf,
        "math/-infinity": -math.inf,
        "math/pi": math.pi,
        "math/e": math.e,
        "env/lisp-version": LISP_VERSION,
        "env/lisp-name": LISP_NAME,
    })

    for name, handler in SPECIAL_FORMS.items():
        define_special_form(env, name, handler)

    intrinsics: dict[str, IntrinsicFn] = {
        "+": add,
        "-": sub,
        "*": mul,
        "/": div,
        "modulo": modulo,
        "sqrt": sqrt,
        "pow": power,
        "log": log,
        "fibonacci": fibonacci,
        "list": list_builtin,
        "cons": cons,
        "car": car,
        "cdr": cdr,
        "len": length,
        "nth": nth,
        "append": append,
        "<": lt,
        "<=": lte,
        ">": gt,
        ">=": gte,
        "eq?": is_eq,
        "and": logical_and,
        "or": logical_or,
        "not": logical_not,
        "begin": begin,
        "apply": apply_builtin,
        "eval": eval_builtin,
    }
    intrinsics.update({name: _predicate(check) for name, check in TYPE_CHECKS.items()})
    intrinsics.update({name: _unary_math(fn) for name, fn in TRIG_FUNCTIONS.items()})
    intrinsics.update(string_builtin.INTRINSICS)
    intrinsics.update(io_builtin.INTRINSICS)

    for name, fn in intrinsics.items():
        define_intrinsic(env, name, fn)
