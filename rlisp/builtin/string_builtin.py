"""String intrinsics: concatenation, interpolation and reading data from text."""

from __future__ import annotations

from rlisp import LispValue
from rlisp.errors import RLispSyntaxError
from rlisp.evaluation.evaluator import evaluate
from rlisp.reader.parser import parse
from rlisp.types.environment import Environment
from rlisp.types.printer import to_display
from rlisp.types.values import to_value
from rlisp.builtin.common import check_arity, string_arg

INTERPOLATION_OPEN = "${"
INTERPOLATION_CLOSE = "}"


def concat(env: Environment, args: list[LispValue]) -> str:
    """Return the display forms of all arguments joined together."""
    return "".join(to_display(arg) for arg in args)


def split_template(template: str) -> list[tuple[bool, str]]:
    """Split a template into (is_expression, text) sections.

    ``${expr}`` marks an expression; it ends at the first closing brace.
    """
    sections: list[tuple[bool, str]] = []
    pos = 0
    while True:
        start = template.find(INTERPOLATION_OPEN, pos)
        if start == -1:
            if pos < len(template):
                sections.append((False, template[pos:]))
            return sections
        end = template.find(INTERPOLATION_CLOSE, start + len(INTERPOLATION_OPEN))
        if end == -1:
            raise RLispSyntaxError("Unclosed expression while interpolating string.")
        if start > pos:
            sections.append((False, template[pos:start]))
        sections.append((True, template[start + len(INTERPOLATION_OPEN):end]))
        pos = end + len(INTERPOLATION_CLOSE)


def _interpolate(env: Environment, source: str) -> str:
    exprs = parse(source)
    if not exprs:
        raise RLispSyntaxError("Empty expression while interpolating string.")
    with env.scope():
        return to_display(evaluate(exprs[0], env))


def format_builtin(env: Environment, args: list[LispValue]) -> str:
    """(format "text ${expr} text"): evaluate each embedded expression in a child scope."""
    check_arity(1, args)
    template = string_arg(args[0])
    return "".join(
        _interpolate(env, text) if is_expr else text
        for is_expr, text in split_template(template)
    )


def parse_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(parse "text"): the first expression in text, as unevaluated data."""
    check_arity(1, args)
    exprs = parse(string_arg(args[0]))
    if not exprs:
        raise RLispSyntaxError("No expression to parse.")
    return to_value(exprs[0])


INTRINSICS = {
    "concat": concat,
    "format": format_builtin,
    "parse": parse_builtin,
}
