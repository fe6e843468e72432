from __future__ import annotations

"""
A minimal pygls-based Language Server for RLisp.

Features:
- Text synchronization and document store
- Diagnostics: reader errors, unmatched parens, unmatched quotes
- Hover: builtin signatures and locally defined symbols
- Completion: locals and builtins
- Signature Help: for known builtins and local functions
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    HoverParams,
    DocumentSymbolParams,
    DocumentSymbol,
    SymbolKind,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureInformation,
    ParameterInformation,
    SignatureHelpParams,
)

from rlisp.config import LISP_VERSION
from rlisp_lsp.indexer import build_index, BUILTIN_SIGNATURES, DocumentIndex, SymbolDef

SOURCE = "rlisp-ls"

SYMBOL_KINDS = {
    "var": SymbolKind.Variable,
    "function": SymbolKind.Function,
    "struct": SymbolKind.Struct,
    "constructor": SymbolKind.Constructor,
    "predicate": SymbolKind.Function,
    "accessor": SymbolKind.Field,
}

WORD_BREAKS = " \t()[]'\"\n\r"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class RLispLanguageServer(LanguageServer):
    CMD_NAME = "rlisp-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, LISP_VERSION)
        self.documents: Dict[str, DocumentState] = {}


ls = RLispLanguageServer()
logger = logging.getLogger(__name__)


def _update(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, collect_diagnostics(idx))


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    _update(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    # Full sync: the last change carries the whole document
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        state = ls.documents.get(uri)
        text = state.text if state else ""
    _update(uri, text)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.pop(uri, None)
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _mk_range(line: int, col: int) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + 1))


def collect_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []

    if idx.syntax_error:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message=idx.syntax_error,
                severity=DiagnosticSeverity.Error,
                source=SOURCE,
            )
        )

    if idx.paren_balance != 0:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unmatched parentheses detected",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )

    if idx.has_unmatched_quote:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unmatched quote detected",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )

    return diags


# --- Hover ---
def describe(word: str, idx: DocumentIndex) -> Optional[str]:
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    sdef = idx.symbols.get(word)
    if sdef is None:
        return None
    shape = f"{sdef.detail} " if sdef.detail else ""
    return f"{shape}{sdef.kind} {word} (defined at {sdef.line + 1}:{sdef.col + 1})"


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = extract_word_at(state.text, params.position)
    if not word:
        return None

    contents = describe(word, state.index)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    items: List[CompletionItem] = []

    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    if state:
        for name, sdef in state.index.symbols.items():
            kind = CompletionItemKind.Variable if sdef.kind == "var" else CompletionItemKind.Function
            items.append(CompletionItem(label=name, kind=kind, detail=sdef.detail))

    return CompletionList(is_incomplete=False, items=items)


# --- Signature Help ---
def signature_for(callee: str, idx: DocumentIndex) -> Optional[str]:
    sig = BUILTIN_SIGNATURES.get(callee)
    if sig:
        return sig
    sdef = idx.symbols.get(callee)
    if sdef and sdef.kind != "var":
        return sdef.detail
    return None


@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    # crude: find current word after the last '(' on the current line
    line_text = get_line_prefix(state.text, params.position)
    callee = extract_callee_name(line_text)
    if not callee:
        return None

    label = signature_for(callee, state.index)
    if not label:
        return None

    open_paren = label.find('(')
    close_paren = label.find(')')
    params_list = label[open_paren + 1:close_paren].split()[1:]
    parameters = [ParameterInformation(label=p) for p in params_list]

    return SignatureHelp(
        signatures=[SignatureInformation(label=label, parameters=parameters)],
        active_signature=0,
        active_parameter=0,
    )


# --- Document Symbols ---
def _document_symbol(name: str, sdef: SymbolDef) -> DocumentSymbol:
    rng = Range(
        start=Position(line=sdef.line, character=sdef.col),
        end=Position(line=sdef.line, character=sdef.col + len(sdef.name)),
    )
    return DocumentSymbol(
        name=name,
        kind=SYMBOL_KINDS.get(sdef.kind, SymbolKind.Function),
        range=rng,
        selection_range=rng,
        detail=sdef.detail,
    )


@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    return [_document_symbol(name, sdef) for name, sdef in state.index.symbols.items()]


# --- Helpers ---

def get_line_prefix(text: str, pos: Position) -> str:
    # Return the text from start of line up to pos
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in WORD_BREAKS:
        start -= 1
    while end < len(line) and line[end] not in WORD_BREAKS:
        end += 1
    return line[start:end] or None


def extract_callee_name(prefix: str) -> Optional[str]:
    # find last opener and take the following token
    lp = max(prefix.rfind('('), prefix.rfind('['))
    if lp == -1:
        return None
    tail = prefix[lp + 1:].split()
    if not tail:
        return None
    return tail[0].rstrip(")]") or None


def main():
    logging.basicConfig(level=logging.INFO)
    logger.info("Starting %s over stdio", SOURCE)
    ls.start_io()


if __name__ == "__main__":
    main()
