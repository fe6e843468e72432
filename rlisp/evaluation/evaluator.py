"""Core evaluator for the RLisp interpreter.

``evaluate`` maps a symbolic expression and an Environment to a runtime
value, raising an RLispError on failure. Dispatch for a non-empty list is on
the variant of the evaluated head:

- Closure: arguments evaluated left to right, then the application protocol.
- Intrinsic: arguments evaluated left to right, then the native function.
- SpecialForm: the whole form is handed over unevaluated.
"""

from __future__ import annotations

from rlisp import SExpression, LispValue
from rlisp.errors import RLispNotAFunction
from rlisp.types.environment import Environment
from rlisp.types.nil import NilType
from rlisp.types.printer import to_display
from rlisp.types.symbol import Symbol
from rlisp.types.values import Quote, Closure, Intrinsic, SpecialForm, empty, to_value, is_number
from rlisp.evaluation.apply import apply_closure

# Identifiers written with this prefix skip the innermost scope
SUPER_PREFIX = "#super:"


def evaluate(expr: SExpression, env: Environment) -> LispValue:
    """Evaluate ``expr`` in ``env``."""
    match expr:
        case bool() | str():
            return expr
        case Symbol():
            return _resolve(expr, env)
        case [head, *tail]:
            return _evaluate_form(expr, head, tail, env)
        case []:
            return empty()
        case Quote():
            return to_value(expr.expr)
        case NilType():
            return empty()

    if is_number(expr):
        return float(expr)
    # Host programs may splice already-evaluated values into a tree
    return expr


def evaluate_args(exprs: list[SExpression], env: Environment) -> list[LispValue]:
    """Evaluate argument expressions strictly left to right."""
    return [evaluate(e, env) for e in exprs]


def _resolve(ident: Symbol, env: Environment) -> LispValue:
    name = ident.id
    if name.startswith(SUPER_PREFIX):
        return env.lookup_super(name[len(SUPER_PREFIX):])
    return env.lookup(name)


def _evaluate_form(
    expr: list[SExpression], head: SExpression, tail: list[SExpression], env: Environment
) -> LispValue:
    func = evaluate(head, env)

    if isinstance(func, Closure):
        return apply_closure(func, evaluate_args(tail, env), env, evaluate)
    if isinstance(func, Intrinsic):
        return func.fn(env, evaluate_args(tail, env))
    if isinstance(func, SpecialForm):
        return func.fn(env, expr)

    raise RLispNotAFunction(to_display(func))
