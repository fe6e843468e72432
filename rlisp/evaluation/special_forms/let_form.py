from rlisp import SExpression, LispValue
from rlisp.errors import RLispArityError, RLispNotAList, RLispNotAnIdentifier
from rlisp.evaluation.evaluator import evaluate
from rlisp.types.environment import Environment
from rlisp.types.printer import to_source
from rlisp.types.symbol import Symbol


def let_form(env: Environment, exprs: list[SExpression]) -> LispValue:
    """
    (let ((name value) ...) body)

    Bindings are made one at a time in a fresh scope, so each value
    expression sees the names bound before it.
    """
    n_args = len(exprs) - 1
    if n_args != 2:
        raise RLispArityError.exact(2, n_args)

    bindings, body = exprs[1], exprs[2]
    if not isinstance(bindings, list):
        raise RLispNotAList(to_source(bindings))

    with env.scope():
        for binding in bindings:
            if not isinstance(binding, list):
                raise RLispNotAList(to_source(binding))
            if len(binding) != 2:
                raise RLispArityError.exact(2, len(binding))
            name, val_expr = binding
            if not isinstance(name, Symbol):
                raise RLispNotAnIdentifier(to_source(name))
            env.define(name.id, evaluate(val_expr, env))

        return evaluate(body, env)
