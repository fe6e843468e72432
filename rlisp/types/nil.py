from __future__ import annotations


class NilType:
    """The empty/nil marker a host may place in an expression tree.

    It evaluates to the empty list. The reader itself produces ``[]`` for
    ``()``, so this mostly appears in trees built by embedding programs.
    """

    _instance: NilType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "Nil"
    def __bool__(self): return False

    def __eq__(self, other):
        return isinstance(other, NilType)

    def __hash__(self):
        return hash(NilType)


Nil = NilType()
