"""Error taxonomy for RLisp.

Every failure reported to the user is an ``RLispError``. Evaluation never
catches these; they propagate to whoever called ``evaluate`` (normally the
REPL or the file loader), which decides how to render them.
"""

from __future__ import annotations


class RLispError(Exception):
    """ Base class for all RLisp errors"""
    pass


class RLispUnboundIdentifier(RLispError):
    """ Raised when an identifier is used before it is bound"""

    def __init__(self, name: str):
        super().__init__(f"Variable {name} is unbound.")
        self.name = name


class RLispTypeError(RLispError):
    """ Raised when a value or expression violates a type contract"""

    kind = "value"

    def __init__(self, shown: str, message: str | None = None):
        super().__init__(message or f"{shown} is not a {self.kind}.")
        self.shown = shown


class RLispNotAFunction(RLispTypeError):
    kind = "function"


class RLispNotANumber(RLispTypeError):
    kind = "number"


class RLispNotAList(RLispTypeError):
    kind = "list"


class RLispNotABool(RLispTypeError):
    kind = "bool"


class RLispNotAString(RLispTypeError):
    kind = "str"


class RLispNotAStruct(RLispTypeError):
    kind = "struct"


class RLispNotAnIdentifier(RLispTypeError):
    def __init__(self, shown: str):
        super().__init__(shown, f"{shown} is not an identifier.")


class RLispArityError(RLispError):
    """ Raised when the number of arguments passed to an operator is incorrect"""

    EXACT = "exact"
    AT_LEAST = "at-least"
    AT_MOST = "at-most"

    def __init__(self, kind: str, expected: int, found: int):
        qualifier = {
            self.EXACT: "",
            self.AT_LEAST: "at least ",
            self.AT_MOST: "at most ",
        }[kind]
        super().__init__(f"Expected {qualifier}{expected} arg(s), found {found}.")
        self.kind = kind
        self.expected = expected
        self.found = found

    @classmethod
    def exact(cls, expected: int, found: int) -> RLispArityError:
        return cls(cls.EXACT, expected, found)

    @classmethod
    def at_least(cls, expected: int, found: int) -> RLispArityError:
        return cls(cls.AT_LEAST, expected, found)

    @classmethod
    def at_most(cls, expected: int, found: int) -> RLispArityError:
        return cls(cls.AT_MOST, expected, found)


class RLispReservedWord(RLispError):
    """ Raised when a language keyword is used as a binding name"""

    def __init__(self, word: str):
        super().__init__(f'"{word}" is a reserved word.')
        self.word = word


class RLispParameterError(RLispError):
    """ Raised for malformed lambda parameter lists"""


class RLispHostError(RLispError):
    """ Raised when a host resource (file, stream) cannot be used"""


class RLispSyntaxError(RLispError):
    """ Raised by the reader on malformed source text"""


class RLispConversionError(RLispError):
    """ Raised when a runtime value has no expression form"""
