# Core type aliases for RLisp's data model.
# Plain Python types (float, bool, str, list) represent both code (symbolic
# expressions) and runtime values. Identifiers/symbols, quotes, closures,
# native operators and struct instances have dedicated classes in rlisp.types.
#
# Naming guidance:
# - SExpression: use in reader and special-form code for unevaluated forms.
# - LispValue:  use in evaluator/runtime code for evaluated values.

from typing import Any, Callable

# Runtime value alias
LispValue = Any
# Parsed, not yet evaluated, form
SExpression = Any

# Native operator signatures: (environment, evaluated args) and
# (environment, unevaluated exprs including the head)
IntrinsicFn = Callable[..., LispValue]
SpecialFormFn = Callable[..., LispValue]
