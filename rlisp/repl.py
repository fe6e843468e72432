"""Line-based read-eval-print loop around an Interpreter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, TextIO
import sys

from rlisp.errors import RLispError
from rlisp.interpreter import Interpreter
from rlisp.types.printer import to_display

logger = logging.getLogger(__name__)


def user_name() -> str:
    try:
        name = Path.home().name
    except RuntimeError:
        name = ""
    return name or "user"


def eval_line(interp: Interpreter, line: str, out: TextIO) -> None:
    """Evaluate one line, echoing each non-empty result or the error."""
    try:
        result = interp.eval(line)
    except RLispError as ex:
        logger.debug("Evaluation failed: %r", ex)
        out.write(f"ERROR: {ex}\n")
        return
    if not (isinstance(result, list) and not result):
        out.write(to_display(result) + "\n")


def run(
    interp: Interpreter,
    read: Callable[[str], str] = input,
    out: TextIO = sys.stdout,
) -> None:
    """Prompt, evaluate and print until end of input."""
    prompt = f"{user_name()}> "
    while True:
        try:
            line = read(prompt)
        except EOFError:
            out.write("\n")
            return
        except KeyboardInterrupt:
            out.write("\n")
            continue
        if line.strip():
            eval_line(interp, line, out)
