"""Special form: cond, the multi-branch conditional."""

from rlisp import SExpression, LispValue
from rlisp.errors import RLispArityError, RLispNotABool, RLispNotAList
from rlisp.evaluation.evaluator import evaluate
from rlisp.types.environment import Environment
from rlisp.types.printer import to_display, to_source
from rlisp.types.values import empty


def cond_form(env: Environment, exprs: list[SExpression]) -> LispValue:
    """Evaluate (cond (test value) ...).

    Tests run in order inside a fresh scope where ``else`` is bound to true,
    and each must produce a bool. The scope is gone by the time the value
    of the first true clause is evaluated, so the value expression runs in
    the enclosing scope. No match yields the empty list.
    """
    chosen = None
    with env.scope():
        env.define("else", True)
        for clause in exprs[1:]:
            if not isinstance(clause, list):
                raise RLispNotAList(to_source(clause))
            if len(clause) != 2:
                raise RLispArityError.exact(2, len(clause))

            test_val = evaluate(clause[0], env)
            if not isinstance(test_val, bool):
                raise RLispNotABool(to_display(test_val))
            if test_val:
                chosen = clause[1]
                break

    if chosen is None:
        return empty()
    return evaluate(chosen, env)
