"""
  RLisp Reader: Lexer and Parser

- Regex lexer yielding (token_type, token_value) tuples
- Token stream parser emitting Python primitives:

    - numbers -> float
    - #t / true, #f / false -> bool
    - strings -> str (escapes resolved)
    - identifiers -> Symbol (trailing "..." sets the variadic flag)
    - ( ... ) and [ ... ] -> list
    - 'expr -> Quote(expr)
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from rlisp import SExpression
from rlisp.errors import RLispSyntaxError
from rlisp.types.symbol import Symbol
from rlisp.types.values import Quote


TOKEN_RE = re.compile(
    r"\s*("
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<quote>')"  # quote
    r"|(?P<lparen>[(\[])"  # ( or [
    r"|(?P<rparen>[)\]])"  # ) or ]
    r'|(?P<string>"(?:\\.|[^\\"])*")'  # double-quoted string
    r"|(?P<unterminated>\"[^\n]*)"  # string with no closing quote
    r"|(?P<atom>[^\s()\[\]'\";]+)"  # numbers, booleans, identifiers
    r")",
    re.DOTALL,
)

NUMBER_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
IDENT_RE = re.compile(r"[A-Za-z0-9\-_+/*%><=?!&$.#:λ]+")

VARIADIC_SUFFIX = "..."

ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    '"': '"',
    "\\": "\\",
}

CLOSERS = {"(": ")", "[": "]"}


def lex(source: str) -> Iterator[tuple[str, str]]:
    """Token generator: yields (token_type, token_value) tuples, comments dropped."""
    pos = 0
    n = len(source)
    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m or m.end() == pos:
            if source[pos:].isspace():
                break
            raise RLispSyntaxError(f"Unexpected character {source[pos]!r}.")
        pos = m.end()
        for nm in TOKEN_RE.groupindex:
            val = m.group(nm)
            if val:
                if nm == "comment":
                    break
                if nm == "unterminated":
                    raise RLispSyntaxError("Unexpected EOF before end of string.")
                yield nm, val
                break


def _unescape(body: str) -> str:
    out: list[str] = []
    chars = iter(body)
    for c in chars:
        if c != "\\":
            out.append(c)
            continue
        nxt = next(chars, "")
        if nxt not in ESCAPES:
            raise RLispSyntaxError(f"Unknown escape sequence \\{nxt}.")
        out.append(ESCAPES[nxt])
    return "".join(out)


def parse_atom(text: str) -> SExpression:
    """Classify a bare atom as a boolean, number or identifier."""
    if text in ("#t", "true"):
        return True
    if text in ("#f", "false"):
        return False
    if NUMBER_RE.fullmatch(text):
        return float(text)
    if not IDENT_RE.fullmatch(text):
        raise RLispSyntaxError(f"Invalid identifier {text}.")

    variadic = text.endswith(VARIADIC_SUFFIX)
    name = text[: -len(VARIADIC_SUFFIX)] if variadic else text
    if not name:
        raise RLispSyntaxError("Empty identifier.")
    return Symbol(name, variadic)


class TokenStream:
    def __init__(self, token_iter: Iterator[tuple[str, str]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, str]] = []

    def peek(self) -> tuple[Optional[str], Optional[str]]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], Optional[str]]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def parse_expr(self) -> SExpression:
        """Parse the next expression; None at end of input."""
        tok_type, tok_val = self.advance()
        if tok_type is None:
            return None

        if tok_type == "atom":
            return parse_atom(tok_val)

        if tok_type == "string":
            return _unescape(tok_val[1:-1])

        if tok_type == "quote":
            if self.peek()[0] is None:
                raise RLispSyntaxError("Unexpected EOF after quote.")
            return Quote(self.parse_expr())

        if tok_type == "lparen":
            close = CLOSERS[tok_val]
            items = []
            while True:
                nxt_type, nxt_val = self.peek()
                if nxt_type is None:
                    raise RLispSyntaxError("Unexpected EOF before end of list.")
                if nxt_type == "rparen":
                    self.advance()
                    if nxt_val != close:
                        raise RLispSyntaxError(
                            f"Mismatched {nxt_val!r}, expected {close!r}."
                        )
                    return items
                items.append(self.parse_expr())

        if tok_type == "rparen":
            raise RLispSyntaxError(f"Unexpected {tok_val!r}.")

        raise RLispSyntaxError(f"Unknown token: {tok_type} {tok_val}")

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def parse(source: str) -> list[SExpression]:
    """Read every expression in ``source``."""
    return list(TokenStream(lex(source)).parse_all())
