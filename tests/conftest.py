import pytest

from rlisp.builtin.env_builtin import register
from rlisp.evaluation.evaluator import evaluate
from rlisp.interpreter import Interpreter
from rlisp.reader.parser import lex, TokenStream
from rlisp.types.environment import Environment


@pytest.fixture
def env():
    """A fresh environment with the standard intrinsics and no library."""
    env = Environment()
    register(env)
    return env


@pytest.fixture
def run(env):
    """Evaluate every form in a source string against ``env``; return the last result."""
    def _run(source: str):
        last = []
        for form in TokenStream(lex(source)).parse_all():
            last = evaluate(form, env)
        return last
    return _run


@pytest.fixture
def interp(monkeypatch):
    """An interpreter with the bundled library loaded."""
    monkeypatch.delenv("RLISP_LIB_PATH", raising=False)
    return Interpreter()
