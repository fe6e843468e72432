from __future__ import annotations

import logging
import sys
from pathlib import Path

from rlisp import LispValue
from rlisp.builtin.env_builtin import register
from rlisp.builtin.io_builtin import import_file, resolve_path
from rlisp.config import ENTRY_POINT, get_lib_roots, get_recursion_limit
from rlisp.evaluation.evaluator import evaluate
from rlisp.reader.parser import lex, TokenStream
from rlisp.types.environment import Environment
from rlisp.types.values import empty


class Interpreter:
    """
    Owns one Environment populated with the standard intrinsics and the
    bundled library, and evaluates source text against it. Definitions
    persist between calls to ``eval``.
    """
    def __init__(self, lib_paths: list[Path] | None = None, load_library: bool = True):
        self._logger = logging.getLogger("Interpreter")
        self.lib_paths = list(lib_paths) if lib_paths is not None else get_lib_roots()

        limit = get_recursion_limit()
        if sys.getrecursionlimit() < limit:
            sys.setrecursionlimit(limit)

        self.env = Environment()
        register(self.env)

        if load_library:
            self.load_library()

    def load_library(self) -> None:
        """Import the entry point of the first library root that has one."""
        for root in self.lib_paths:
            entry = root / ENTRY_POINT
            if entry.is_file():
                self._logger.debug("Loading library from %s", entry)
                import_file(self.env, entry)
                return
        self._logger.debug("No %s found in %s", ENTRY_POINT, self.lib_paths)

    def eval(self, code: str) -> LispValue:
        """Evaluate every expression in ``code``; return the last result.

        Returns the empty list when ``code`` holds no expressions.
        """
        stream = TokenStream(lex(code))
        result: LispValue = empty()
        for expr in stream.parse_all():
            result = evaluate(expr, self.env)
        return result

    def load(self, name: str) -> LispValue:
        """Evaluate a source file, searched like the import intrinsic does."""
        return import_file(self.env, resolve_path(name, self.lib_paths))
