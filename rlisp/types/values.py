"""Runtime value variants and conversions between values and expressions.

Atoms (numbers, booleans, strings) and lists are plain Python ``float``,
``bool``, ``str`` and ``list`` objects, shared with the symbolic expression
form. The remaining variants are the classes below. The variant set is
closed: the evaluator and the printers dispatch over exactly these.
"""

from __future__ import annotations

from rlisp import SExpression, LispValue, IntrinsicFn, SpecialFormFn
from rlisp.errors import RLispConversionError
from rlisp.types.nil import NilType
from rlisp.types.symbol import Symbol


class Quote:
    """A quoted expression, ``'expr``, as produced by the reader."""

    __slots__ = ("expr",)

    def __init__(self, expr: SExpression):
        self.expr = expr

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Quote) and self.expr == other.expr

    def __hash__(self) -> int:
        return hash(("quote", repr(self.expr)))

    def __repr__(self) -> str:
        return f"Quote({self.expr!r})"


class Closure:
    """A user-defined function: parameter names, a body and a variadic flag.

    A closure captures no environment. Free identifiers in the body resolve
    against whatever scopes are live when it is called (dynamic scoping).
    """

    __slots__ = ("params", "body", "variadic")

    def __init__(self, params: list[str], body: SExpression, variadic: bool = False):
        self.params: list[str] = params
        self.body: SExpression = body
        self.variadic: bool = variadic

    def __str__(self) -> str:
        from rlisp.types.printer import to_display
        return to_display(self)

    def __repr__(self) -> str:
        return str(self)


class Intrinsic:
    """A native operator whose arguments are evaluated before the call."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: IntrinsicFn):
        self.name = name
        self.fn = fn

    def __call__(self, env, args: list[LispValue]) -> LispValue:
        return self.fn(env, args)

    def __repr__(self) -> str:
        return f"<Intrinsic {self.name}>"


class SpecialForm:
    """A native operator receiving its whole form unevaluated, head included."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: SpecialFormFn):
        self.name = name
        self.fn = fn

    def __call__(self, env, exprs: list[SExpression]) -> LispValue:
        return self.fn(env, exprs)

    def __repr__(self) -> str:
        return f"<SpecialForm {self.name}>"


class StructInstance:
    """An instance of a ``define-struct`` type.

    ``fields`` is parallel to the declared field names held in the
    environment's struct registry under ``type_name``.
    """

    __slots__ = ("type_name", "fields")

    def __init__(self, type_name: str, fields: list[LispValue]):
        self.type_name = type_name
        self.fields = fields

    def __eq__(self, other: object) -> bool:
        return values_equal(self, other)

    __hash__ = None  # mutable field list

    def __str__(self) -> str:
        from rlisp.types.printer import to_display
        return to_display(self)

    def __repr__(self) -> str:
        return f"StructInstance({self.type_name!r}, {self.fields!r})"


CALLABLE_TYPES = (Closure, Intrinsic, SpecialForm)


def empty() -> list:
    """The empty list, which doubles as the 'no meaningful result' value."""
    return []


def is_number(value: LispValue) -> bool:
    # bool subclasses int; booleans are never numbers here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def values_equal(a: LispValue, b: LispValue) -> bool:
    """Structural, variant-sensitive equality.

    Callables are never equal to anything, themselves included.
    """
    if isinstance(a, CALLABLE_TYPES) or isinstance(b, CALLABLE_TYPES):
        return False
    if isinstance(a, bool) or isinstance(b, bool):
        return isinstance(a, bool) and isinstance(b, bool) and a == b
    if is_number(a) or is_number(b):
        return is_number(a) and is_number(b) and float(a) == float(b)
    if isinstance(a, str) or isinstance(b, str):
        return isinstance(a, str) and isinstance(b, str) and a == b
    if isinstance(a, Symbol) or isinstance(b, Symbol):
        return a == b
    if isinstance(a, list) and isinstance(b, list):
        if len(a) != len(b):
            return False
        return all(values_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, StructInstance) and isinstance(b, StructInstance):
        if a.type_name != b.type_name or len(a.fields) != len(b.fields):
            return False
        return all(values_equal(x, y) for x, y in zip(a.fields, b.fields))
    return False


def to_value(expr: SExpression) -> LispValue:
    """Convert a symbolic expression to a runtime value without evaluating it."""
    if isinstance(expr, Quote):
        return to_value(expr.expr)
    if isinstance(expr, NilType):
        return empty()
    if isinstance(expr, list):
        return [to_value(e) for e in expr]
    if isinstance(expr, Symbol):
        return Symbol(expr.id, expr.variadic)
    if is_number(expr):
        return float(expr)
    return expr


def to_expr(value: LispValue) -> SExpression:
    """Convert a runtime value back into a symbolic expression.

    Struct instances become constructor calls and closures become lambda
    forms. Native operators have no source form and raise
    ``RLispConversionError``.
    """
    if isinstance(value, list):
        return [to_expr(v) for v in value]
    if isinstance(value, StructInstance):
        return [Symbol(f"make-{value.type_name}"), *(to_expr(f) for f in value.fields)]
    if isinstance(value, Closure):
        params = [Symbol(p) for p in value.params]
        if value.variadic and params:
            params[-1] = Symbol(value.params[-1], True)
        return [Symbol("lambda"), params, value.body]
    if isinstance(value, (Intrinsic, SpecialForm)):
        raise RLispConversionError(
            f"Cannot convert native operator {value.name} to an expression."
        )
    return value
