"""Runtime environment for RLisp.

The Environment is a stack of scopes (innermost last) sitting on a base
scope that holds the global bindings, plus an append-only registry of struct
type definitions. A single Environment is owned by the caller and passed to
every evaluation; there is no ambient global state.
"""

from __future__ import annotations

from contextlib import contextmanager
from io import StringIO
from typing import Iterator, Optional

from rlisp import LispValue
from rlisp.errors import RLispUnboundIdentifier

Scope = dict[str, LispValue]


class Environment:
    """Stack of name-to-value scopes with super-scope lookup and struct registry."""

    __slots__ = ("base", "stack", "structs")

    def __init__(self):
        self.base: Scope = {}
        # The base scope is the bottom of the stack and is never popped
        self.stack: list[Scope] = [self.base]
        self.structs: dict[str, list[str]] = {}

    # --- Scope management ---
    def enter_scope(self) -> None:
        """Push an empty scope."""
        self.stack.append({})

    def exit_scope(self) -> None:
        """Pop the innermost scope.

        Popping the base scope means a caller lost track of its own
        enter/exit pairing; that is a bug in the interpreter, not in user
        code, so it raises RuntimeError rather than an RLispError.
        """
        if len(self.stack) <= 1:
            raise RuntimeError("Attempted to exit nonexistent scope.")
        self.stack.pop()

    @contextmanager
    def scope(self) -> Iterator[Environment]:
        """Enter a scope for the duration of a ``with`` block, exiting on any path."""
        self.enter_scope()
        try:
            yield self
        finally:
            self.exit_scope()

    @property
    def depth(self) -> int:
        """Number of scopes above the base scope."""
        return len(self.stack) - 1

    # --- Bindings ---
    def define(self, name: str, value: LispValue) -> None:
        """Bind ``name`` in the innermost scope, overwriting any binding there."""
        self.stack[-1][name] = value

    def update(self, mapping: dict[str, LispValue]) -> None:
        """Bulk-define a mapping of name -> value in the innermost scope."""
        self.stack[-1].update(mapping)

    def get(self, name: str) -> Optional[LispValue]:
        """Search from the innermost scope down to the base; None if unbound."""
        for scope in reversed(self.stack):
            if name in scope:
                return scope[name]
        return None

    def get_super(self, name: str) -> Optional[LispValue]:
        """Like ``get`` but skipping the innermost scope.

        With only the base scope on the stack, the base scope itself is
        searched.
        """
        if len(self.stack) > 1:
            for scope in reversed(self.stack[:-1]):
                if name in scope:
                    return scope[name]
            return None
        return self.base.get(name)

    def lookup(self, name: str) -> LispValue:
        """``get`` that raises RLispUnboundIdentifier when nothing is bound."""
        value = self.get(name)
        if value is None:
            raise RLispUnboundIdentifier(name)
        return value

    def lookup_super(self, name: str) -> LispValue:
        """``get_super`` that raises RLispUnboundIdentifier when nothing is bound."""
        value = self.get_super(name)
        if value is None:
            raise RLispUnboundIdentifier(name)
        return value

    # --- Struct registry ---
    def add_struct(self, name: str, fields: list[str]) -> None:
        """Register the ordered field names of struct type ``name``.

        Entries are never removed. Registering a name again replaces its
        field list.
        """
        self.structs[name] = list(fields)

    def get_struct(self, name: str) -> Optional[list[str]]:
        return self.structs.get(name)

    # --- Debugging helpers ---
    def _write_scope(self, buffer: StringIO, scope: Scope) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in scope.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Innermost scope only, with an indicator for enclosing scopes."""
        with StringIO() as buffer:
            self._write_scope(buffer, self.stack[-1])
            if len(self.stack) > 1:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment stack: ")
            chain = []
            for scope in reversed(self.stack):
                scope_buf = StringIO()
                self._write_scope(scope_buf, scope)
                chain.append(scope_buf.getvalue())
            buffer.write(" -> ".join(chain))
            buffer.write(">")
            return buffer.getvalue()
