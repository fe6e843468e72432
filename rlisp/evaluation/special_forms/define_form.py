from __future__ import annotations

from rlisp import SExpression, LispValue
from rlisp.errors import RLispArityError, RLispError, RLispNotAnIdentifier, RLispReservedWord
from rlisp.evaluation.evaluator import evaluate
from rlisp.types.environment import Environment
from rlisp.types.printer import to_source
from rlisp.types.symbol import Symbol
from rlisp.types.values import empty

# Names that may never be bound with define
RESERVED_WORDS = frozenset({
    "define",
    "define-struct",
    "begin",
    "cond",
    "else",
    "if",
    "let",
})


def define_form(env: Environment, exprs: list[SExpression]) -> LispValue:
    """
    (define name value)
    (define (name param ...) body ...)

    The function shape is rewritten to
    (define name (lambda (param ...) (begin body ...))) and evaluated again;
    a single body expression is used as is.
    """
    n_args = len(exprs) - 1
    if n_args < 2:
        raise RLispArityError.at_least(2, n_args)

    target = exprs[1]
    if isinstance(target, Symbol):
        if n_args != 2:
            raise RLispArityError.exact(2, n_args)
        if target.id in RESERVED_WORDS:
            raise RLispReservedWord(target.id)
        value = evaluate(exprs[2], env)
        env.define(target.id, value)
        return empty()

    if isinstance(target, list):
        if not target:
            raise RLispError("Cannot redefine empty list.")
        name, params = target[0], target[1:]
        body_forms = exprs[2:]
        if len(body_forms) > 1:
            body = [Symbol("begin"), *body_forms]
        else:
            body = body_forms[0]
        rewritten = [Symbol("define"), name, [Symbol("lambda"), list(params), body]]
        return evaluate(rewritten, env)

    raise RLispNotAnIdentifier(to_source(target))
