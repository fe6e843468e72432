"""Value model and environment for RLisp."""

from rlisp.types.symbol import Symbol
from rlisp.types.nil import Nil, NilType
from rlisp.types.values import (
    Quote,
    Closure,
    Intrinsic,
    SpecialForm,
    StructInstance,
    empty,
    is_number,
    values_equal,
    to_value,
    to_expr,
)
from rlisp.types.environment import Environment
from rlisp.types.printer import to_source, to_display, format_number

__all__ = [
    "Symbol",
    "Nil",
    "NilType",
    "Quote",
    "Closure",
    "Intrinsic",
    "SpecialForm",
    "StructInstance",
    "Environment",
    "empty",
    "is_number",
    "values_equal",
    "to_value",
    "to_expr",
    "to_source",
    "to_display",
    "format_number",
]
