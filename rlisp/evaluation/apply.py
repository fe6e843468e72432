"""Application protocol for RLisp closures.

Arity checking and parameter binding live here so the evaluator, the
``apply`` intrinsic and anything else that calls closures share a single
definition of the rules:

- Fixed arity: argument count must equal parameter count.
- Variadic: the last parameter collects surplus arguments into a list and
  may be empty; every leading parameter needs an argument.

A fresh scope is entered for the parameters and is always exited before
returning, whether the body succeeded or raised.
"""

from __future__ import annotations

from rlisp import LispValue, SExpression
from rlisp.errors import RLispArityError
from rlisp.types.environment import Environment
from rlisp.types.values import Closure
from typing import Callable

EvaluatorFn = Callable[[SExpression, Environment], LispValue]


def bind_arguments(fn: Closure, args: list[LispValue], env: Environment) -> None:
    """Check arity and bind ``args`` to the parameters of ``fn`` in the current scope."""
    params = fn.params
    n_params = len(params)
    n_args = len(args)

    if not fn.variadic:
        if n_args != n_params:
            raise RLispArityError.exact(n_params, n_args)
        for name, value in zip(params, args):
            env.define(name, value)
        return

    leading = n_params - 1
    if n_args < leading:
        raise RLispArityError.at_least(leading, n_args)
    for name, value in zip(params[:leading], args):
        env.define(name, value)
    env.define(params[-1], list(args[leading:]))


def apply_closure(
    fn: Closure,
    args: list[LispValue],
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> LispValue:
    """Apply a closure to already-evaluated arguments.

    The body is evaluated against the live environment: identifiers not
    bound as parameters resolve through the caller's scopes.
    """
    with env.scope():
        bind_arguments(fn, args, env)
        return evaluate_fn(fn.body, env)
