import pytest

from rlisp import errors
from rlisp.evaluation.special_forms import RESERVED_WORDS
from rlisp.types import Closure, Symbol


# -----------------------------
# define
# -----------------------------

def test_define_variable_returns_empty_list(run, env):
    assert run("(define x (+ 1 2))") == []
    assert env.lookup("x") == 3.0


def test_define_function_shape(run, env):
    run("(define (square n) (* n n))")
    fn = env.lookup("square")
    assert isinstance(fn, Closure)
    assert fn.params == ["n"]
    assert fn.body == [Symbol("*"), Symbol("n"), Symbol("n")]
    assert run("(square 4)") == 16.0


def test_define_function_with_several_body_forms_uses_begin(run, env):
    run("(define (f a) (define tmp (* a 2)) (+ tmp 1))")
    assert env.lookup("f").body[0] == Symbol("begin")
    assert run("(f 5)") == 11.0


def test_define_function_with_variadic_parameter(run):
    run("(define (count xs...) (len xs))")
    assert run("(count 1 2 3)") == 3.0


def test_define_overwrites_in_same_scope(run):
    run("(define x 1)")
    run("(define x 2)")
    assert run("x") == 2.0


@pytest.mark.parametrize("word", sorted(RESERVED_WORDS))
def test_define_rejects_reserved_words(run, word):
    with pytest.raises(errors.RLispReservedWord, match=f'"{word}" is a reserved word.'):
        run(f"(define {word} 1)")


def test_define_errors(run):
    with pytest.raises(errors.RLispArityError, match="at least 2"):
        run("(define x)")
    with pytest.raises(errors.RLispArityError, match=r"Expected 2 arg\(s\), found 3"):
        run("(define x 1 2)")
    with pytest.raises(errors.RLispError, match="Cannot redefine empty list."):
        run("(define () 1)")
    with pytest.raises(errors.RLispNotAnIdentifier, match="1 is not an identifier."):
        run("(define 1 2)")


# -----------------------------
# lambda
# -----------------------------

def test_lambda_builds_closure(run):
    fn = run("(lambda (a rest...) a)")
    assert isinstance(fn, Closure)
    assert fn.params == ["a", "rest"]
    assert fn.variadic


def test_lambda_validation(run):
    with pytest.raises(errors.RLispArityError):
        run("(lambda (a))")
    with pytest.raises(errors.RLispNotAList):
        run("(lambda a a)")
    with pytest.raises(errors.RLispNotAnIdentifier):
        run("(lambda (a 1) a)")
    with pytest.raises(errors.RLispParameterError, match="final parameter"):
        run("(lambda (a... b) a)")


# -----------------------------
# if
# -----------------------------

def test_if_evaluates_one_branch(run):
    assert run("(if (< 1 2) 'yes (undefined))") == Symbol("yes")
    assert run("(if false (undefined) 'no)") == Symbol("no")


def test_if_requires_bool_test(run):
    with pytest.raises(errors.RLispNotABool, match=r"\(\+ 1 2\) is not a bool\."):
        run("(if (+ 1 2) 1 2)")
    with pytest.raises(errors.RLispNotABool):
        run("(if empty 1 2)")


def test_if_arity(run):
    with pytest.raises(errors.RLispArityError, match=r"Expected 3 arg\(s\), found 2"):
        run("(if true 1)")


# -----------------------------
# cond
# -----------------------------

def test_cond_picks_first_true_clause(run):
    run("(define (sign n) (cond ((< n 0) -1) ((eq? n 0) 0) (else 1)))")
    assert run("(sign -5)") == -1.0
    assert run("(sign 0)") == 0.0
    assert run("(sign 9)") == 1.0


def test_cond_without_match_is_empty(run):
    assert run("(cond (false 1))") == []
    assert run("(cond)") == []


def test_cond_value_runs_outside_test_scope(run):
    # else is only bound while the tests run
    with pytest.raises(errors.RLispUnboundIdentifier, match="Variable else is unbound."):
        run("(cond (else else))")


def test_cond_errors_leave_scope_balanced(run, env):
    with pytest.raises(errors.RLispNotABool, match="5 is not a bool."):
        run("(cond (5 1))")
    assert env.depth == 0
    with pytest.raises(errors.RLispArityError):
        run("(cond (true 1 2))")
    with pytest.raises(errors.RLispNotAList):
        run("(cond true)")
    assert env.depth == 0


# -----------------------------
# let
# -----------------------------

def test_let_binds_sequentially(run):
    assert run("(let ((a 1) (b (+ a 1))) (list a b))") == [1.0, 2.0]


def test_let_bindings_are_local(run, env):
    run("(let ((tmp 1)) tmp)")
    assert env.get("tmp") is None


def test_let_errors_leave_scope_balanced(run, env):
    with pytest.raises(errors.RLispUnboundIdentifier):
        run("(let ((a 1)) missing)")
    with pytest.raises(errors.RLispNotAnIdentifier):
        run("(let ((1 2)) 3)")
    with pytest.raises(errors.RLispArityError):
        run("(let ((a)) a)")
    with pytest.raises(errors.RLispNotAList):
        run("(let a a)")
    assert env.depth == 0


# -----------------------------
# begin
# -----------------------------

def test_begin_returns_last_value(run):
    assert run("(begin 1 2 3)") == 3.0
    assert run("(begin)") == []
