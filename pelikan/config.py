from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List, Optional

FEATHER_SUFFIX = '.pl'

# Resolve installation dir (pelikan package directory)
_PELIKAN_DIR = Path(__file__).resolve().parent

# Defaults
BUILTIN_FEATHERS_DIR = _PELIKAN_DIR / 'feathers'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    return [Path(p.strip()) for p in raw.split(os.pathsep) if p.strip()]


def get_custom_feather_roots() -> List[Path]:
    return paths_from_env('PELIKAN_FEATHERS_PATH', [])


def get_feather_roots(extra: Optional[Iterable[str]] = None) -> List[Path]:
    """Search roots for feathers: built-in directory, then environment, then extra."""
    roots = [BUILTIN_FEATHERS_DIR]
    roots.extend(get_custom_feather_roots())
    if extra:
        roots.extend(Path(p) for p in extra)
    return roots
