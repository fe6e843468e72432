from __future__ import annotations
import sys


class Symbol:
    """An identifier in source form, or a quoted identifier at runtime.

    ``variadic`` is set by the reader when the identifier was written with a
    trailing ``...`` (``rest...``); only lambda parameter lists give it meaning.
    """

    __slots__ = ("id", "variadic")

    def __init__(self, name: str, variadic: bool = False):
        # Intern to ensure fast equality/hash and reduce memory
        self.id = sys.intern(name)
        self.variadic = variadic

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, Symbol)
            and self.id == other.id
            and self.variadic == other.variadic
        )

    def __hash__(self) -> int:
        return hash((self.id, self.variadic))

    def __repr__(self):
        if self.variadic:
            return f"Symbol({self.id!r}, variadic=True)"
        return f"Symbol({self.id!r})"

    def __str__(self):
        return f"{self.id}..." if self.variadic else self.id
