from rlisp import SExpression, LispValue
from rlisp.errors import RLispArityError, RLispNotABool
from rlisp.evaluation.evaluator import evaluate
from rlisp.types.environment import Environment
from rlisp.types.printer import to_source


def if_form(env: Environment, exprs: list[SExpression]) -> LispValue:
    """(if test then else): test must evaluate to a bool; one branch is evaluated."""
    n_args = len(exprs) - 1
    if n_args != 3:
        raise RLispArityError.exact(3, n_args)

    test, then, other = exprs[1], exprs[2], exprs[3]
    cond = evaluate(test, env)
    if not isinstance(cond, bool):
        raise RLispNotABool(to_source(test))

    return evaluate(then if cond else other, env)
