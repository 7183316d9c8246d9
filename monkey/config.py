from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List, Optional


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Resolve installation dir (monkey package directory)
_MONKEY_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _MONKEY_DIR / 'prelude'
PRELUDE_SUFFIX = '.mk'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_prelude_files() -> List[Path]:
    """Prelude sources in load order.

    MONKEY_PRELUDE_PATH may list directories and/or files; directories
    contribute their *.mk files sorted by name.
    """
    files: List[Path] = []
    for p in paths_from_env('MONKEY_PRELUDE_PATH', [_DEFAULT_PRELUDE_DIR]):
        if p.is_dir():
            files.extend(sorted(p.glob(f'*{PRELUDE_SUFFIX}')))
        elif p.is_file():
            files.append(p)
    return files


def get_recursion_limit() -> Optional[int]:
    raw = os.environ.get('MONKEY_RECURSION_LIMIT')
    if not raw:
        return None
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f"MONKEY_RECURSION_LIMIT must be an integer, got {raw!r}")
    return limit if limit > 0 else None
