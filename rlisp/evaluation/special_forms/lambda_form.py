from __future__ import annotations

from rlisp import SExpression, LispValue
from rlisp.errors import RLispArityError, RLispNotAList, RLispNotAnIdentifier, RLispParameterError
from rlisp.types.environment import Environment
from rlisp.types.printer import to_source
from rlisp.types.symbol import Symbol
from rlisp.types.values import Closure


def lambda_form(env: Environment, exprs: list[SExpression]) -> LispValue:
    """(lambda (param ... rest...) body)

    Only the final parameter may carry the variadic marker. The body is a
    single expression; use begin for sequencing.
    """
    n_args = len(exprs) - 1
    if n_args != 2:
        raise RLispArityError.exact(2, n_args)

    params, body = exprs[1], exprs[2]
    if not isinstance(params, list):
        raise RLispNotAList(to_source(params))

    names: list[str] = []
    last = len(params) - 1
    for i, param in enumerate(params):
        if not isinstance(param, Symbol):
            raise RLispNotAnIdentifier(to_source(param))
        if param.variadic and i != last:
            raise RLispParameterError(
                "Only the final parameter of a function may be variadic."
            )
        names.append(param.id)

    variadic = bool(params) and params[-1].variadic
    return Closure(names, body, variadic)
