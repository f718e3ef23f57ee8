# Standard native libraries registered into every default execution context.
from .func import populate_func_registry
from .io import populate_io_registry
from pelikan.natives import NativeRegistry


def populate_std_registry(registry: NativeRegistry) -> NativeRegistry:
    populate_func_registry(registry)
    populate_io_registry(registry)
    return registry
