from __future__ import annotations

"""
Lightweight indexer for RLisp files without evaluating code.

We scan for top-level forms and build an index for:
- definitions: (define name ...), (define (name param ...) ...)
- structs: (define-struct Name (field ...)), plus the operators it generates:
  make-Name, Name? and Name-field for every field

The scanner is tolerant: it works on partial/incomplete buffers and extracts
only enough structure to power LSP features (document symbols, completion,
hover). Syntax diagnostics come from the real reader.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple
import re

from rlisp.errors import RLispSyntaxError
from rlisp.reader.parser import parse

# Simple token patterns for scanning
TOKEN_REGEX = re.compile(
    r"\s+|;.*$|[(\[]|[)\]]|'|\"(?:\\.|[^\"\\])*\"|[^\s()\[\]'\";]+",
    re.MULTILINE,
)

OPENERS = ("(", "[")
CLOSERS = (")", "]")


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function" | "struct" | "constructor" | "predicate" | "accessor"
    line: int
    col: int
    detail: Optional[str] = None


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    structs: Dict[str, List[str]] = field(default_factory=dict)
    paren_balance: int = 0
    has_unmatched_quote: bool = False
    syntax_error: Optional[str] = None


def _iter_tokens(text: str):
    for m in TOKEN_REGEX.finditer(text):
        tok = m.group(0)
        if not tok or tok.isspace() or tok.startswith(";"):
            continue
        yield tok, m.start(), m.end()


def _position_from_offset(text: str, offset: int) -> Tuple[int, int]:
    # Return (line, col), 0-based
    line = text.count("\n", 0, offset)
    last_nl = text.rfind("\n", 0, offset)
    col = offset if last_nl == -1 else offset - last_nl - 1
    return line, col


def _is_name(tok: str) -> bool:
    return tok not in OPENERS + CLOSERS + ("'",) and not tok.startswith('"')


def _index_define(text: str, tokens, i: int, idx: DocumentIndex) -> None:
    # tokens[i] is "define"
    if i + 1 >= len(tokens):
        return
    tok, start, _ = tokens[i + 1]
    kind = "var"
    detail = None
    if tok in OPENERS:
        # (define (name param ...) ...)
        if i + 2 >= len(tokens):
            return
        tok, start, _ = tokens[i + 2]
        kind = "function"
        params = []
        j = i + 3
        while j < len(tokens) and tokens[j][0] not in CLOSERS:
            params.append(tokens[j][0])
            j += 1
        detail = f"({tok}{''.join(' ' + p for p in params)})"
    if not _is_name(tok):
        return
    line, col = _position_from_offset(text, start)
    idx.symbols[tok] = SymbolDef(name=tok, kind=kind, line=line, col=col, detail=detail)


def _index_struct(text: str, tokens, i: int, idx: DocumentIndex) -> None:
    # tokens[i] is "define-struct"
    if i + 2 >= len(tokens):
        return
    name, start, _ = tokens[i + 1]
    if not _is_name(name) or tokens[i + 2][0] not in OPENERS:
        return
    fields = []
    j = i + 3
    while j < len(tokens) and tokens[j][0] not in CLOSERS:
        if _is_name(tokens[j][0]):
            fields.append(tokens[j][0])
        j += 1

    line, col = _position_from_offset(text, start)
    idx.structs[name] = fields
    shape = f"({name}{''.join(' ' + f for f in fields)})"
    idx.symbols[name] = SymbolDef(name, "struct", line, col, shape)
    idx.symbols[f"make-{name}"] = SymbolDef(
        f"make-{name}", "constructor", line, col,
        f"(make-{name}{''.join(' ' + f for f in fields)})",
    )
    idx.symbols[f"{name}?"] = SymbolDef(f"{name}?", "predicate", line, col, f"({name}? v)")
    for f in fields:
        accessor = f"{name}-{f}"
        idx.symbols[accessor] = SymbolDef(accessor, "accessor", line, col, f"({accessor} v)")


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    tokens = list(_iter_tokens(text))

    for i, (tok, start, end) in enumerate(tokens):
        if tok in OPENERS:
            idx.paren_balance += 1
            if i + 1 < len(tokens):
                head = tokens[i + 1][0]
                if head == "define":
                    _index_define(text, tokens, i + 1, idx)
                elif head == "define-struct":
                    _index_struct(text, tokens, i + 1, idx)
        elif tok in CLOSERS:
            idx.paren_balance -= 1

    # simple unmatched quote detection: count unescaped quotes outside comments
    quote_count = 0
    esc = False
    in_comment = False
    for ch in text:
        if in_comment:
            in_comment = ch != "\n"
            continue
        if esc:
            esc = False
            continue
        if ch == '\\':
            esc = True
        elif ch == ';' and quote_count == 0:
            in_comment = True
        elif ch == '"':
            quote_count ^= 1  # toggle open/close
    idx.has_unmatched_quote = (quote_count == 1)

    try:
        parse(text)
    except RLispSyntaxError as ex:
        idx.syntax_error = str(ex)

    return idx


# Builtin signatures for quick hover/signature help without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "define": "(define name value) | (define (name params...) body...)",
    "lambda": "(lambda (params... rest...) body)",
    "if": "(if test then else)",
    "cond": "(cond (test value) ... (else value))",
    "let": "(let ((name value) ...) body)",
    "define-struct": "(define-struct Name (fields...))",
    "+": "(+ nums...)",
    "-": "(- x nums...)",
    "*": "(* nums...)",
    "/": "(/ x nums...)",
    "modulo": "(modulo a b)",
    "sqrt": "(sqrt x)",
    "pow": "(pow a b)",
    "log": "(log x base)",
    "fibonacci": "(fibonacci n)",
    "sin": "(sin x)",
    "cos": "(cos x)",
    "tan": "(tan x)",
    "asin": "(asin x)",
    "acos": "(acos x)",
    "atan": "(atan x)",
    "num?": "(num? v)",
    "bool?": "(bool? v)",
    "str?": "(str? v)",
    "symbol?": "(symbol? v)",
    "cons?": "(cons? v)",
    "lambda?": "(lambda? v)",
    "struct?": "(struct? v)",
    "cons": "(cons x xs)",
    "car": "(car xs)",
    "cdr": "(cdr xs)",
    "list": "(list xs...)",
    "len": "(len xs)",
    "nth": "(nth xs i)",
    "append": "(append lists...)",
    "<": "(< a b)",
    "<=": "(<= a b)",
    ">": "(> a b)",
    ">=": "(>= a b)",
    "eq?": "(eq? a b)",
    "and": "(and a b)",
    "or": "(or a b)",
    "not": "(not b)",
    "begin": "(begin exprs...)",
    "apply": "(apply f xs)",
    "eval": "(eval v)",
    "concat": "(concat values...)",
    "format": "(format template)",
    "parse": "(parse text)",
    "print": "(print values...)",
    "println": "(println values...)",
    "read-line": "(read-line)",
    "import": "(import path)",
    "read-file": "(read-file path)",
    "write-file": "(write-file path contents)",
    "exit": "(exit code)",
}
