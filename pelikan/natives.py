"""Registry of native callables reachable through ``RUST[lib::func](...)``.

The registry is populated before any script runs and is read-only during
execution. Dispatch validates the argument count and the declared parameter
kinds before invoking the callable, so a kind mismatch on a native call is
always a :class:`TypeMismatchError` raised here, never inside the native.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .errors import (
    PelikanError, ArityMismatchError, TypeMismatchError,
    UnknownNativeFunctionError, NativeExecutionError,
)
from .types import NUN, NunVal, TypeSpec, check_value, is_function, kind_name

NativeFn = Callable[[List[Any]], Any]


@dataclass
class NativeFunction:
    library: str
    name: str
    arity: Optional[int]  # None means variadic
    params: Tuple[TypeSpec, ...]
    fn: NativeFn

    @property
    def qualified_name(self) -> str:
        return f"{self.library}::{self.name}"

    def __repr__(self) -> str:
        return f"<native {self.qualified_name}>"

    def param_spec(self, index: int) -> TypeSpec:
        if not self.params:
            return TypeSpec.any()
        if self.arity is None:
            # Variadic natives declare one kind that applies to every argument.
            return self.params[min(index, len(self.params) - 1)]
        return self.params[index]


def to_value(result: Any, native: NativeFunction) -> Any:
    """Convert a native callable's result into a Pelikan value."""
    if result is None:
        return NUN
    if isinstance(result, (bool, float, str, NunVal)):
        return result
    if isinstance(result, int):
        return float(result)
    if is_function(result):
        return result
    raise NativeExecutionError(
        f"{native.qualified_name} returned unsupported value of type {type(result).__name__}")


class NativeRegistry:
    """Maps (library, function) keys to native callables."""
    def __init__(self):
        self.entries: Dict[Tuple[str, str], NativeFunction] = {}

    def register(self, library: str, name: str, arity: Optional[int],
                 params: Tuple[str, ...] = (), fn: Optional[NativeFn] = None) -> NativeFunction:
        if fn is None:
            raise ValueError('native function callable is required')
        specs = tuple(TypeSpec(p) for p in params)
        if arity is not None and specs and len(specs) != arity:
            raise ValueError(f"{library}::{name} declares {len(specs)} parameter kinds for arity {arity}")
        entry = NativeFunction(library, name, arity, specs, fn)
        self.entries[(library, name)] = entry
        return entry

    def native(self, library: str, name: str, arity: Optional[int], params: Tuple[str, ...] = ()):
        """Decorator form of :meth:`register`."""
        def decorator(fn: NativeFn) -> NativeFn:
            self.register(library, name, arity, params, fn)
            return fn
        return decorator

    def lookup(self, library: str, name: str, position=None) -> NativeFunction:
        entry = self.entries.get((library, name))
        if entry is None:
            raise UnknownNativeFunctionError(f'unknown native function {library}::{name}', position)
        return entry

    def __contains__(self, key: Tuple[str, str]) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def dispatch(self, library: str, name: str, args: List[Any], position=None) -> Any:
        native = self.lookup(library, name, position)
        if native.arity is not None and len(args) != native.arity:
            raise ArityMismatchError(
                f"{native.qualified_name} expects {native.arity} arguments, got {len(args)}", position)
        for index, arg in enumerate(args):
            spec = native.param_spec(index)
            try:
                check_value(arg, spec)
            except TypeError as e:
                raise TypeMismatchError(
                    f"argument {index + 1} of {native.qualified_name}: {e}", position)
        try:
            result = native.fn(list(args))
        except PelikanError as e:
            if e.position is None:
                e.position = position
            raise
        except Exception as e:
            raise NativeExecutionError(f"{native.qualified_name} failed: {e}", e, position) from e
        return to_value(result, native)


def describe_args(args: List[Any]) -> str:
    return ', '.join(kind_name(a) for a in args)
