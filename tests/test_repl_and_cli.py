import io

import pytest

from rlisp import repl
from rlisp.__main__ import main
from rlisp.config import LISP_VERSION


def _reader(lines):
    """A stand-in for input() that raises EOFError once lines run out."""
    pending = list(lines)
    prompts = []

    def read(prompt):
        prompts.append(prompt)
        if not pending:
            raise EOFError
        line = pending.pop(0)
        if isinstance(line, BaseException):
            raise line
        return line

    read.prompts = prompts
    return read


def test_eval_line_prints_result(interp):
    out = io.StringIO()
    repl.eval_line(interp, '(concat "a" "b")', out)
    repl.eval_line(interp, "(list 1 2.5 true)", out)
    assert out.getvalue() == "ab\n(1 2.5 true)\n"


def test_eval_line_hides_empty_results(interp):
    out = io.StringIO()
    repl.eval_line(interp, "(define x 1)", out)
    repl.eval_line(interp, "'()", out)
    assert out.getvalue() == ""


def test_eval_line_reports_errors(interp):
    out = io.StringIO()
    repl.eval_line(interp, "(car '())", out)
    repl.eval_line(interp, "(+ 1", out)
    assert out.getvalue() == (
        "ERROR: Cannot call car on an empty list.\n"
        "ERROR: Unexpected EOF before end of list.\n"
    )


def test_run_until_eof(interp, monkeypatch):
    monkeypatch.setattr(repl, "user_name", lambda: "tester")
    out = io.StringIO()
    read = _reader(["(define x 20)", "", KeyboardInterrupt(), "(+ x 1)"])
    repl.run(interp, read=read, out=out)
    assert out.getvalue() == "\n21\n\n"
    assert read.prompts[0] == "tester> "
    assert len(read.prompts) == 5


def test_cli_version(capsys):
    with pytest.raises(SystemExit) as ex:
        main(["--version"])
    assert ex.value.code == 0
    assert LISP_VERSION in capsys.readouterr().out


def test_cli_runs_file(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("RLISP_LIB_PATH", raising=False)
    program = tmp_path / "hello.rl"
    program.write_text('(println (format "sum ${(foldl + 0 (range 0 4))}"))', encoding="utf-8")
    assert main([str(program)]) == 0
    assert capsys.readouterr().out == "sum 6\n"


def test_cli_reports_errors(tmp_path, capsys, monkeypatch):
    monkeypatch.delenv("RLISP_LIB_PATH", raising=False)
    program = tmp_path / "bad.rl"
    program.write_text("(undefined-fn)", encoding="utf-8")
    assert main([str(program)]) == 1
    assert "Variable undefined-fn is unbound." in capsys.readouterr().err


def test_cli_custom_library(tmp_path, capsys, monkeypatch):
    lib = tmp_path / "lib"
    lib.mkdir()
    (lib / "loader.rl").write_text("(define greeting \"hi\")", encoding="utf-8")
    program = tmp_path / "main.rl"
    program.write_text("(println greeting)", encoding="utf-8")
    # main writes --lib into RLISP_LIB_PATH
    monkeypatch.setenv("RLISP_LIB_PATH", "")
    assert main(["--lib", str(lib), str(program)]) == 0
    assert capsys.readouterr().out == "hi\n"


def test_session_survives_struct_redefinition(interp, monkeypatch):
    monkeypatch.setattr(repl, "user_name", lambda: "tester")
    out = io.StringIO()
    read = _reader([
        "(define-struct Point (x y))",
        "(define old (make-Point 1 2))",
        "(define-struct Point (a b c))",
        "(Point-x (make-Point 1 2 3))",
        "(Point-c old)",
        "(exit (/ 0 0)) 1",
        "(+ 1 1)",
    ])
    with pytest.raises(SystemExit) as ex:
        repl.run(interp, read=read, out=out)
    assert ex.value.code == 0
    assert out.getvalue() == (
        "ERROR: x is not a field of Point.\n"
        "ERROR: (make-Point 1 2) does not match the current definition of Point.\n"
    )
