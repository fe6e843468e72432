"""Text renderings of expressions and values.

``to_source`` renders symbolic expressions in re-readable form (strings are
quoted). ``to_display`` renders runtime values the way ``print`` and the REPL
show them (strings raw).
"""

from __future__ import annotations

import math
from io import StringIO

from rlisp import SExpression, LispValue
from rlisp.types.nil import NilType
from rlisp.types.symbol import Symbol
from rlisp.types.values import (
    Quote,
    Closure,
    Intrinsic,
    SpecialForm,
    StructInstance,
    is_number,
)

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t", "\r": "\\r"}


def format_number(n: float) -> str:
    """Shortest form: integral values print without a fractional part."""
    if math.isnan(n):
        return "NaN"
    if math.isinf(n):
        return "inf" if n > 0 else "-inf"
    if float(n).is_integer():
        return str(int(n))
    return repr(float(n))


def _quote_string(s: str) -> str:
    return '"' + "".join(_ESCAPES.get(c, c) for c in s) + '"'


def _write_seq(buffer: StringIO, items, render) -> None:
    buffer.write("(")
    buffer.write(" ".join(render(i) for i in items))
    buffer.write(")")


def to_source(expr: SExpression) -> str:
    if isinstance(expr, bool):
        return "true" if expr else "false"
    if is_number(expr):
        return format_number(expr)
    if isinstance(expr, str):
        return _quote_string(expr)
    if isinstance(expr, Symbol):
        return str(expr)
    if isinstance(expr, Quote):
        return "'" + to_source(expr.expr)
    if isinstance(expr, NilType):
        return "'()"
    if isinstance(expr, list):
        with StringIO() as buffer:
            _write_seq(buffer, expr, to_source)
            return buffer.getvalue()
    # Values embedded in a tree by a host program
    return to_display(expr)


def to_display(value: LispValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, Symbol):
        return str(value)
    if isinstance(value, list):
        with StringIO() as buffer:
            _write_seq(buffer, value, to_display)
            return buffer.getvalue()
    if isinstance(value, Closure):
        with StringIO() as buffer:
            buffer.write("(lambda (")
            buffer.write(" ".join(value.params))
            if value.variadic and value.params:
                buffer.write("...")
            buffer.write(") ")
            buffer.write(to_source(value.body))
            buffer.write(")")
            return buffer.getvalue()
    if isinstance(value, Intrinsic):
        return "<function>"
    if isinstance(value, SpecialForm):
        return "<procedure>"
    if isinstance(value, StructInstance):
        with StringIO() as buffer:
            buffer.write(f"(make-{value.type_name}")
            for field in value.fields:
                buffer.write(f" {to_display(field)}")
            buffer.write(")")
            return buffer.getvalue()
    if isinstance(value, (Quote, NilType)):
        return to_source(value)
    return str(value)
