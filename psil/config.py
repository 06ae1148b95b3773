from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional


_DEFAULT_LOG_LEVEL = 'WARNING'
_DEFAULT_RECURSION_LIMIT = 5000


def path_from_env(var: str) -> Optional[Path]:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return None
    return Path(raw.strip())


def get_prelude_path() -> Optional[Path]:
    """File of declarations processed silently before every program, if any."""
    return path_from_env('PSIL_PRELUDE_PATH')


def get_log_level() -> int:
    raw = os.environ.get('PSIL_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    # getLevelName returns a "Level X" string for unknown names
    return level if isinstance(level, int) else logging.WARNING


def get_recursion_limit() -> int:
    raw = os.environ.get('PSIL_RECURSION_LIMIT')
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        return max(int(raw), 1000)
    except ValueError:
        return _DEFAULT_RECURSION_LIMIT
