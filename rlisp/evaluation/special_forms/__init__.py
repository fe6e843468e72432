"""Registry of special forms for the RLisp evaluator.

Maps names to handler functions that receive their form unevaluated. The
table is installed into an environment as ordinary SpecialForm bindings by
``rlisp.builtin.env_builtin.register``; the evaluator has no separate
namespace for them.
"""

from rlisp.evaluation.special_forms.define_form import define_form, RESERVED_WORDS
from rlisp.evaluation.special_forms.lambda_form import lambda_form
from rlisp.evaluation.special_forms.if_form import if_form
from rlisp.evaluation.special_forms.cond_form import cond_form
from rlisp.evaluation.special_forms.let_form import let_form
from rlisp.evaluation.special_forms.defstruct_form import defstruct_form

SPECIAL_FORMS = {
    "define": define_form,
    "lambda": lambda_form,
    "if": if_form,
    "cond": cond_form,
    "let": let_form,
    "define-struct": defstruct_form,
}

__all__ = ["SPECIAL_FORMS", "RESERVED_WORDS"]
