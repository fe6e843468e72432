import pytest

from rlisp_lsp.indexer import build_index, BUILTIN_SIGNATURES
from rlisp_lsp import server
from lsprotocol.types import DiagnosticSeverity, Position

SOURCE = """; sample
(define limit 10)
(define (clamp n lo hi)
  (cond ((< n lo) lo) ((> n hi) hi) (else n)))
(define-struct Point (x y))
"""


@pytest.fixture
def idx():
    return build_index(SOURCE)


def test_indexes_definitions(idx):
    limit = idx.symbols["limit"]
    assert (limit.kind, limit.line, limit.col) == ("var", 1, 8)
    clamp = idx.symbols["clamp"]
    assert (clamp.kind, clamp.line, clamp.col) == ("function", 2, 9)
    assert clamp.detail == "(clamp n lo hi)"


def test_indexes_struct_operators(idx):
    assert idx.structs == {"Point": ["x", "y"]}
    kinds = {name: idx.symbols[name].kind for name in ("Point", "make-Point", "Point?", "Point-x", "Point-y")}
    assert kinds == {
        "Point": "struct",
        "make-Point": "constructor",
        "Point?": "predicate",
        "Point-x": "accessor",
        "Point-y": "accessor",
    }
    assert idx.symbols["make-Point"].detail == "(make-Point x y)"


def test_clean_document_has_no_diagnostics(idx):
    assert idx.paren_balance == 0
    assert not idx.has_unmatched_quote
    assert idx.syntax_error is None
    assert server.collect_diagnostics(idx) == []


def test_partial_document_is_indexed_and_diagnosed():
    idx = build_index("(define (f a)\n  (+ a")
    assert idx.symbols["f"].kind == "function"
    assert idx.paren_balance == 2
    assert idx.syntax_error == "Unexpected EOF before end of list."
    severities = [d.severity for d in server.collect_diagnostics(idx)]
    assert severities == [DiagnosticSeverity.Error, DiagnosticSeverity.Warning]


def test_unmatched_quote_ignores_comments():
    assert build_index('(define s "abc)').has_unmatched_quote
    assert not build_index('; don"t count this\n(define s "ok")').has_unmatched_quote
    assert not build_index('(define s "say \\"hi\\"")').has_unmatched_quote


def test_builtin_signatures_cover_core_operators():
    for name in ("define", "lambda", "cond", "define-struct", "car", "format", "import"):
        assert name in BUILTIN_SIGNATURES


def test_hover_text(idx):
    assert server.describe("car", idx) == BUILTIN_SIGNATURES["car"]
    assert server.describe("clamp", idx) == "(clamp n lo hi) function clamp (defined at 3:10)"
    assert server.describe("limit", idx) == "var limit (defined at 2:9)"
    assert server.describe("unknown", idx) is None


def test_signature_lookup(idx):
    assert server.signature_for("cons", idx) == "(cons x xs)"
    assert server.signature_for("clamp", idx) == "(clamp n lo hi)"
    assert server.signature_for("limit", idx) is None


def test_text_helpers():
    text = "(define x 1)\n(clamp x 0 5)\n"
    assert server.extract_word_at(text, Position(line=1, character=3)) == "clamp"
    assert server.extract_word_at(text, Position(line=9, character=0)) is None
    assert server.get_line_prefix(text, Position(line=1, character=7)) == "(clamp "
    assert server.extract_callee_name("(list (clamp x") == "clamp"
    assert server.extract_callee_name("no call here") is None
    assert server.extract_callee_name("(") is None
