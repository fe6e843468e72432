"""Intrinsics that touch the host: console, files and process exit."""

from __future__ import annotations

import logging
import math
import sys
from pathlib import Path

from rlisp import LispValue
from rlisp.config import get_lib_roots
from rlisp.errors import RLispArityError, RLispHostError
from rlisp.evaluation.evaluator import evaluate
from rlisp.reader.parser import parse
from rlisp.types.environment import Environment
from rlisp.types.values import empty
from rlisp.builtin.common import check_arity, number_arg, string_arg
from rlisp.builtin.string_builtin import concat

logger = logging.getLogger(__name__)


EXIT_CODE_MAX = 2**31 - 1
EXIT_CODE_MIN = -(2**31)


def exit_code(n: float) -> int:
    """Truncate toward zero, saturating at the 32-bit range; NaN maps to 0."""
    if math.isnan(n):
        return 0
    if n >= EXIT_CODE_MAX:
        return EXIT_CODE_MAX
    if n <= EXIT_CODE_MIN:
        return EXIT_CODE_MIN
    return int(n)


def exit_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(exit) or (exit code): terminate the process; code is truncated to an int."""
    if len(args) > 1:
        raise RLispArityError.at_most(1, len(args))
    code = exit_code(number_arg(args[0])) if args else 0
    sys.exit(code)


def print_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    sys.stdout.write(concat(env, args))
    sys.stdout.flush()
    return empty()


def println_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    sys.stdout.write(concat(env, args) + "\n")
    return empty()


def read_line(env: Environment, args: list[LispValue]) -> str:
    """(read-line): the next line of standard input without its newline."""
    check_arity(0, args)
    line = sys.stdin.readline()
    if not line:
        raise RLispHostError("Could not read input.")
    return line.rstrip("\n")


def resolve_path(name: str, roots: list[Path] | None = None) -> Path:
    """Find ``name`` relative to the current directory, then each library root."""
    path = Path(name)
    if path.is_file():
        return path
    if not path.is_absolute():
        for root in roots if roots is not None else get_lib_roots():
            candidate = root / path
            if candidate.is_file():
                return candidate
    raise RLispHostError(f"File {name} not found.")


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as ex:
        raise RLispHostError(f"Could not read {path}: {ex.strerror}") from ex


def import_file(env: Environment, path: Path) -> LispValue:
    """Read, parse and evaluate every expression of the file at ``path``."""
    logger.debug("Importing %s", path)
    for expr in parse(_read_text(path)):
        evaluate(expr, env)
    return empty()


def import_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    """(import "file.rl")"""
    check_arity(1, args)
    return import_file(env, resolve_path(string_arg(args[0])))


def read_file(env: Environment, args: list[LispValue]) -> str:
    check_arity(1, args)
    return _read_text(Path(string_arg(args[0])))


def write_file(env: Environment, args: list[LispValue]) -> LispValue:
    """(write-file path contents): replace the file's contents."""
    check_arity(2, args)
    path, contents = string_arg(args[0]), string_arg(args[1])
    try:
        Path(path).write_text(contents, encoding="utf-8")
    except OSError as ex:
        raise RLispHostError(f"Could not write {path}: {ex.strerror}") from ex
    return empty()


INTRINSICS = {
    "exit": exit_builtin,
    "print": print_builtin,
    "println": println_builtin,
    "read-line": read_line,
    "import": import_builtin,
    "read-file": read_file,
    "write-file": write_file,
}
