"""Special form: define-struct, and the operators it generates.

(define-struct Name (field ...)) registers Name's ordered field names in the
environment's struct registry and installs three kinds of special form:

- (make-Name v ...)   constructor, one positional value per field
- (Name? v)           predicate for instances of exactly this type
- (Name-field v)      one accessor per field

Each generated operator is a plain function plus the captured type (and
field) name. Field positions are looked up in the registry at call time.
"""

from __future__ import annotations

import logging
from functools import partial

from rlisp import SExpression, LispValue
from rlisp.errors import (
    RLispArityError,
    RLispError,
    RLispNotAList,
    RLispNotAStruct,
    RLispNotAnIdentifier,
)
from rlisp.evaluation.evaluator import evaluate
from rlisp.types.environment import Environment
from rlisp.types.printer import to_display, to_source
from rlisp.types.symbol import Symbol
from rlisp.types.values import SpecialForm, StructInstance, empty

logger = logging.getLogger(__name__)


def _registered_fields(env: Environment, struct_name: str) -> list[str]:
    fields = env.get_struct(struct_name)
    if fields is None:
        raise RLispError(f"Struct {struct_name} is not defined.")
    return fields


def struct_constructor(struct_name: str, env: Environment, exprs: list[SExpression]) -> LispValue:
    fields = _registered_fields(env, struct_name)
    args = exprs[1:]
    if len(args) != len(fields):
        raise RLispArityError.exact(len(fields), len(args))

    values = [evaluate(arg, env) for arg in args]
    return StructInstance(struct_name, values)


def struct_predicate(struct_name: str, env: Environment, exprs: list[SExpression]) -> LispValue:
    n_args = len(exprs) - 1
    if n_args != 1:
        raise RLispArityError.exact(1, n_args)

    value = evaluate(exprs[1], env)
    return isinstance(value, StructInstance) and value.type_name == struct_name


def struct_accessor(
    struct_name: str, field_name: str, env: Environment, exprs: list[SExpression]
) -> LispValue:
    n_args = len(exprs) - 1
    if n_args != 1:
        raise RLispArityError.exact(1, n_args)

    value = evaluate(exprs[1], env)
    if not isinstance(value, StructInstance):
        raise RLispNotAStruct(to_display(value))
    if value.type_name != struct_name:
        raise RLispNotAStruct(
            to_display(value), f"{to_display(value)} is not a {struct_name}."
        )

    fields = _registered_fields(env, struct_name)
    if field_name not in fields:
        raise RLispError(f"{field_name} is not a field of {struct_name}.")
    if len(value.fields) != len(fields):
        raise RLispError(
            f"{to_display(value)} does not match the current definition of {struct_name}."
        )
    return value.fields[fields.index(field_name)]


def defstruct_form(env: Environment, exprs: list[SExpression]) -> LispValue:
    """(define-struct Name (field ...))"""
    n_args = len(exprs) - 1
    if n_args != 2:
        raise RLispArityError.exact(2, n_args)

    name, field_list = exprs[1], exprs[2]
    if not isinstance(name, Symbol):
        raise RLispNotAnIdentifier(to_source(name))
    if not isinstance(field_list, list):
        raise RLispNotAList(to_source(field_list))
    if not field_list:
        raise RLispArityError.exact(1, 0)

    fields: list[str] = []
    for field in field_list:
        if not isinstance(field, Symbol):
            raise RLispNotAnIdentifier(to_source(field))
        fields.append(field.id)

    struct_name = name.id
    env.add_struct(struct_name, fields)
    logger.debug("Registered struct %s with fields %s", struct_name, fields)

    predicate = f"{struct_name}?"
    env.define(predicate, SpecialForm(predicate, partial(struct_predicate, struct_name)))

    for field_name in fields:
        accessor = f"{struct_name}-{field_name}"
        env.define(
            accessor,
            SpecialForm(accessor, partial(struct_accessor, struct_name, field_name)),
        )

    constructor = f"make-{struct_name}"
    env.define(constructor, SpecialForm(constructor, partial(struct_constructor, struct_name)))

    return empty()
