"""Feather (module) resolution for Pelikan.

A feather is a ``.pl`` source file whose top-level function definitions are
exported to importers. :class:`FeatherManager` owns the feather cache and
drives each feather through ``unloaded -> loading -> loaded``. Re-entering a
feather while it is still ``loading`` means the imports form a cycle, which
is rejected with :class:`ImportCycleError` instead of recursing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Tuple

from .ast import FuncDecl
from .config import FEATHER_SUFFIX, get_feather_roots
from .environment import Environment
from .errors import ImportCycleError, NotFoundError
from .lexer import read_source
from .parser import parse_program

if TYPE_CHECKING:
    from .interpreter import FunctionValue, Interpreter

UNLOADED = 'unloaded'
LOADING = 'loading'
LOADED = 'loaded'


@dataclass
class Feather:
    name: str
    origin: str
    state: str = UNLOADED
    env: Optional[Environment] = None
    exports: Dict[str, 'FunctionValue'] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"<feather {self.name} ({self.state}) from {self.origin}>"


class FeatherManager:
    """Locates, loads and caches feathers for one execution context."""
    def __init__(self, search_paths: Optional[Iterable[Path]] = None):
        if search_paths is None:
            search_paths = get_feather_roots()
        self.search_paths: List[Path] = [Path(p) for p in search_paths]
        self.feathers: Dict[str, Feather] = {}
        self.loading: List[str] = []

    def locate(self, name: str) -> Tuple[str, str]:
        """Return the source text and origin of the feather called ``name``."""
        for root in self.search_paths:
            candidate = root / (name + FEATHER_SUFFIX)
            if candidate.is_file():
                return read_source(candidate), str(candidate)
        searched = ', '.join(str(p) for p in self.search_paths) or '(no search paths)'
        raise NotFoundError(f"could not find feather {name} in {searched}")

    def locate_path(self, source: str, base_dir: Optional[str] = None, position=None) -> Path:
        """Resolve a path import against the importing unit's directory, then the cwd."""
        path = Path(source)
        if not path.suffix:
            path = path.with_suffix(FEATHER_SUFFIX)
        if path.is_absolute():
            candidates = [path]
        else:
            candidates = []
            if base_dir is not None:
                candidates.append(Path(base_dir) / path)
            candidates.append(Path.cwd() / path)
        for candidate in candidates:
            if candidate.is_file():
                return candidate.resolve()
        raise NotFoundError(f"could not find feather file {source}", position)

    def is_loaded(self, key: str) -> bool:
        feather = self.feathers.get(key)
        return feather is not None and feather.state == LOADED

    def get(self, key: str) -> Optional[Feather]:
        return self.feathers.get(key)

    def resolve_import(self, source: str, interpreter: 'Interpreter', is_path: bool = False,
                       base_dir: Optional[str] = None, position=None) -> Feather:
        """Load the feather named by an import directive, or return it from the cache."""
        if is_path:
            path = self.locate_path(source, base_dir, position)
            key = str(path)
            name = path.stem
        else:
            path = None
            key = name = source

        feather = self.feathers.get(key)
        if feather is not None:
            if feather.state == LOADED:
                if interpreter.debug_level >= 1:
                    interpreter.debug(f"feather {name} already loaded")
                return feather
            if feather.state == LOADING:
                chain = ' -> '.join(self.feathers[k].name for k in self.loading + [key])
                raise ImportCycleError(f"cyclic import {chain}", position)

        if path is not None:
            text, origin = read_source(path), str(path)
        else:
            try:
                text, origin = self.locate(name)
            except NotFoundError as e:
                e.position = position
                raise

        feather = Feather(name, origin, LOADING)
        self.feathers[key] = feather
        self.loading.append(key)
        if interpreter.debug_level >= 1:
            interpreter.debug(f"loading feather {name} from {origin}")
        try:
            program = parse_program(text)
            env = Environment()
            env.origin_dir = str(Path(origin).parent)
            interpreter.execute_program(program, env)
            # A top-level return stops the feather early; later definitions are never bound.
            for stmt in program.body:
                if isinstance(stmt, FuncDecl) and stmt.name in env.values:
                    feather.exports[stmt.name] = env.values[stmt.name]
            feather.env = env
            feather.state = LOADED
        except BaseException:
            del self.feathers[key]
            raise
        finally:
            self.loading.pop()
        if interpreter.debug_level >= 1:
            interpreter.debug(f"loaded feather {name}: exports {sorted(feather.exports)}")
        return feather
