"""Type definitions and helpers for Pelikan.

This module defines the runtime value model used by the Pelikan interpreter.
Values are plain Python objects tagged by their class:

* Number -> ``float``
* String -> ``str``
* Bool   -> ``bool``
* Null   -> the :data:`NUN` singleton
* Function -> ``pelikan.interpreter.FunctionValue``

It also defines :class:`TypeSpec`, the type tags written in function
signatures, together with utilities for checking values against tags,
naming value kinds, comparing values and printing them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .errors import TypeMismatchError

BUILTIN_KINDS = ('num', 'str', 'bool', 'nun', 'any', 'fn')


@dataclass(frozen=True)
class TypeSpec:
    """Represents a Pelikan type tag.

    One of the builtin kinds ``num``, ``str``, ``bool``, ``nun``, ``any`` and
    ``fn``, or a custom name that the parser accepts but nothing enforces.
    """
    kind: str

    def __repr__(self) -> str:
        return self.kind

    @property
    def is_builtin(self) -> bool:
        return self.kind in BUILTIN_KINDS

    # Convenience constructors
    @staticmethod
    def number() -> 'TypeSpec':
        return TypeSpec('num')

    @staticmethod
    def string() -> 'TypeSpec':
        return TypeSpec('str')

    @staticmethod
    def boolean() -> 'TypeSpec':
        return TypeSpec('bool')

    @staticmethod
    def nun() -> 'TypeSpec':
        return TypeSpec('nun')

    @staticmethod
    def any() -> 'TypeSpec':
        return TypeSpec('any')


class NunVal:
    """Marker object for the Pelikan ``nun`` value."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'nun'

    def __bool__(self) -> bool:
        return False


NUN = NunVal()


def is_function(value: Any) -> bool:
    # Imported lazily; FunctionValue lives with the evaluator.
    from .interpreter import FunctionValue
    return isinstance(value, FunctionValue)


def kind_name(value: Any) -> str:
    """Return the Pelikan kind name of a runtime value."""
    if isinstance(value, bool):
        return 'bool'
    if isinstance(value, float):
        return 'num'
    if isinstance(value, str):
        return 'str'
    if isinstance(value, NunVal):
        return 'nun'
    if is_function(value):
        return 'fn'
    return type(value).__name__


def check_value(value: Any, spec: TypeSpec) -> bool:
    """Check whether a runtime value matches a type tag.

    Returns True if the value conforms to the tag. If it does not, raises a
    TypeError (not a Pelikan error) with a descriptive message; callers
    translate it into a :class:`TypeMismatchError` where appropriate. Custom
    tags are accepted without checking.
    """
    kind = spec.kind
    if kind == 'any' or not spec.is_builtin:
        return True
    actual = kind_name(value)
    if actual == kind:
        return True
    raise TypeError(f"expected {kind}, got {actual}")


def _require_comparable(a: Any, b: Any, op: str) -> None:
    ka, kb = kind_name(a), kind_name(b)
    if ka not in ('num', 'str', 'bool') or ka != kb:
        raise TypeMismatchError(f"cannot compare {ka} with {kb} using {op}")


def values_equal(a: Any, b: Any) -> bool:
    """Equality between two Numbers, two Strings or two Bools."""
    _require_comparable(a, b, 'eq')
    return a == b


def value_less(a: Any, b: Any) -> bool:
    """Ordering between two Numbers, two Strings or two Bools (false < true)."""
    _require_comparable(a, b, 'lt')
    return a < b


def format_number(value: float) -> str:
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def to_string(value: Any) -> str:
    """Convert a Pelikan value to its string representation for printing."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, str):
        return value
    if isinstance(value, NunVal):
        return 'nun'
    return repr(value)
