from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List

LISP_NAME = "rlisp"
LISP_VERSION = "1.0.0"

# Entry point loaded from the first library root that has one
ENTRY_POINT = "loader.rl"


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Resolve installation dir (rlisp package directory)
_RLISP_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_LIB_DIRS = [_RLISP_DIR / 'lib']
_DEFAULT_LOG_LEVEL = 'WARNING'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_lib_roots() -> List[Path]:
    return paths_from_env('RLISP_LIB_PATH', _DEFAULT_LIB_DIRS)


def get_log_level() -> str:
    return os.environ.get('RLISP_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()


def get_recursion_limit() -> int:
    # Each RLisp call nests several Python frames
    return int(os.environ.get('RLISP_RECURSION_LIMIT', '20000'))
