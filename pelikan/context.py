from dataclasses import dataclass
from typing import Iterable, Optional

from .config import get_feather_roots
from .feather import FeatherManager
from .natives import NativeRegistry
from .std import populate_std_registry


@dataclass
class ExecutionContext:
    """State shared by everything that runs within one interpreter.

    Owns the feather cache and the native registry, so separate contexts
    (for example one per test) never share loaded feathers.
    """
    registry: NativeRegistry
    feathers: FeatherManager

    @classmethod
    def create(cls, feather_paths: Optional[Iterable[str]] = None,
               registry: Optional[NativeRegistry] = None) -> 'ExecutionContext':
        if registry is None:
            registry = populate_std_registry(NativeRegistry())
        return cls(registry, FeatherManager(get_feather_roots(feather_paths)))
