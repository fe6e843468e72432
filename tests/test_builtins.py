import math

import pytest

from rlisp import errors
from rlisp.types import Symbol


# -----------------------------
# Arithmetic
# -----------------------------

@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+)", 0.0),
        ("(+ 1 2 3)", 6.0),
        ("(- 5)", -5.0),
        ("(- 10 3 2)", 5.0),
        ("(*)", 1.0),
        ("(* 2 3 4)", 24.0),
        ("(/ 2)", 0.5),
        ("(/ 12 2 3)", 2.0),
        ("(modulo 7 3)", 1.0),
        ("(modulo -7 3)", -1.0),
        ("(sqrt 16)", 4.0),
        ("(pow 2 10)", 1024.0),
        ("(fibonacci 0)", 0.0),
        ("(fibonacci 10)", 55.0),
        ("(sin 0)", 0.0),
        ("(cos 0)", 1.0),
    ],
)
def test_arithmetic(run, source, expected):
    assert run(source) == pytest.approx(expected)


def test_logarithms(run):
    assert run("(log math/e)") == pytest.approx(1.0)
    assert run("(log 8 2)") == pytest.approx(3.0)
    with pytest.raises(errors.RLispArityError, match="at most 2"):
        run("(log 1 2 3)")


def test_ieee_results_instead_of_errors(run):
    assert run("(/ 1 0)") == math.inf
    assert run("(/ -1 0)") == -math.inf
    assert math.isnan(run("(/ 0 0)"))
    assert math.isnan(run("(sqrt -1)"))
    assert math.isnan(run("(modulo 1 0)"))
    assert run("(log 0)") == -math.inf
    assert run("(pow 0 -1)") == math.inf
    assert run("(pow 0 -2)") == math.inf
    assert run("(pow -10 1001)") == -math.inf
    assert run("(pow 10 1000)") == math.inf
    assert math.isnan(run("(pow -8 0.5)"))


def test_arithmetic_type_errors(run):
    with pytest.raises(errors.RLispNotANumber, match='a is not a number.'):
        run('(+ 1 "a")')
    with pytest.raises(errors.RLispNotANumber, match="true is not a number."):
        run("(* true 2)")
    with pytest.raises(errors.RLispArityError):
        run("(-)")
    with pytest.raises(errors.RLispError, match="non-negative integer"):
        run("(fibonacci 1.5)")


def test_constants(run):
    assert run("math/pi") == math.pi
    assert run("math/infinity") == math.inf
    assert run("env/lisp-name") == "rlisp"
    assert run("empty") == []


# -----------------------------
# Comparison and logic
# -----------------------------

def test_comparisons(run):
    assert run("(< 1 2)") is True
    assert run("(<= 2 2)") is True
    assert run("(> 1 2)") is False
    assert run("(>= 3 2)") is True
    assert run("(<= math/infinity math/infinity)") is True
    assert run("(>= math/-infinity math/-infinity)") is True
    assert run("(< math/-infinity math/infinity)") is True
    assert run("(< 1 (/ 0 0))") is False
    with pytest.raises(errors.RLispTypeError, match="Cannot compare a and 1."):
        run('(< "a" 1)')


def test_eq(run):
    assert run("(eq? (list 1 2) '(1 2))") is True
    assert run("(eq? 'a 'a)") is True
    assert run('(eq? "a" \'a)') is False
    assert run("(eq? 1 true)") is False
    assert run("(eq? + +)") is False
    assert run("(begin (define f (lambda (x) x)) (eq? f f))") is False


def test_logic(run):
    assert run("(and true false)") is False
    assert run("(or true false)") is True
    assert run("(not false)") is True
    with pytest.raises(errors.RLispNotABool, match="1 is not a bool."):
        run("(and 1 true)")
    with pytest.raises(errors.RLispNotABool):
        run("(not empty)")


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(num? 1)", True),
        ("(num? true)", False),
        ("(bool? false)", True),
        ('(str? "s")', True),
        ("(symbol? 'a)", True),
        ("(symbol? \"a\")", False),
        ("(cons? '())", True),
        ("(lambda? car)", True),
        ("(lambda? (lambda (x) x))", True),
        ("(lambda? if)", False),
        ("(struct? 1)", False),
    ],
)
def test_type_predicates(run, source, expected):
    assert run(source) is expected


# -----------------------------
# Lists
# -----------------------------

def test_list_operations(run):
    assert run("(list 1 2 3)") == [1.0, 2.0, 3.0]
    assert run("(cons 0 (list 1 2))") == [0.0, 1.0, 2.0]
    assert run("(car '(a b))") == Symbol("a")
    assert run("(cdr '(a b))") == [Symbol("b")]
    assert run("(len '(1 2 3))") == 3.0
    assert run("(nth '(a b c) 2)") == Symbol("c")
    assert run("(nth '() 5)") == []
    assert run("(append '(1) '() '(2 3))") == [1.0, 2.0, 3.0]


def test_list_errors(run):
    with pytest.raises(errors.RLispError, match="car on an empty list"):
        run("(car '())")
    with pytest.raises(errors.RLispError, match="cdr on an empty list"):
        run("(cdr empty)")
    with pytest.raises(errors.RLispNotAList, match="1 is not a list."):
        run("(cons 0 1)")
    with pytest.raises(errors.RLispError, match="out of range"):
        run("(nth '(1 2) 2)")
    with pytest.raises(errors.RLispNotAList):
        run('(len "abc")')


def test_list_intrinsics_do_not_mutate_arguments(run):
    run("(define xs '(1 2))")
    run("(cons 0 xs)")
    run("(append xs '(3))")
    assert run("xs") == [1.0, 2.0]


# -----------------------------
# apply / eval
# -----------------------------

def test_apply(run):
    assert run("(apply + '(1 2 3))") == 6.0
    assert run("(apply (lambda (a rest...) rest) '(1 2 3))") == [2.0, 3.0]
    with pytest.raises(errors.RLispNotAList):
        run("(apply + 1)")
    with pytest.raises(errors.RLispNotAFunction):
        run("(apply 1 '())")
    with pytest.raises(errors.RLispTypeError, match="Contract not satisfied"):
        run("(apply if '(true 1 2))")


def test_eval(run):
    assert run("(eval '(+ 1 2))") == 3.0
    assert run("(eval (list '* 2 3))") == 6.0
    assert run("(eval (parse \"(- 10 1)\"))") == 9.0
    assert run("(eval 5)") == 5.0
    with pytest.raises(errors.RLispConversionError):
        run("(eval (list + 1 2))")


def test_eval_of_closure_value(run):
    fn = run("(eval (lambda (x) (* x 2)))")
    assert run("((eval (lambda (x) (* x 2))) 4)") == 8.0
    assert fn.params == ["x"]


# -----------------------------
# Strings
# -----------------------------

def test_concat(run):
    assert run('(concat "a" 1 true \'sym (list 1 2))') == "a1truesym(1 2)"
    assert run("(concat)") == ""


def test_format_interpolates_in_child_scope(run, env):
    run("(define name \"world\")")
    assert run('(format "hello ${name}, ${(+ 1 2)}!")') == "hello world, 3!"
    assert run('(format "${(define leaked 1)}done")') == "()done"
    assert env.get("leaked") is None
    assert env.depth == 0


def test_format_errors(run):
    with pytest.raises(errors.RLispSyntaxError, match="Unclosed expression"):
        run('(format "oops ${x")')
    with pytest.raises(errors.RLispNotAString):
        run("(format 1)")


def test_parse_returns_data(run):
    assert run('(parse "(a 1)")') == [Symbol("a"), 1.0]
    assert run("(parse \"'x\")") == Symbol("x")
    with pytest.raises(errors.RLispSyntaxError):
        run('(parse "")')
