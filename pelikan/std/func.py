"""The ``std_func`` native library: logic, numbers, comparison and text.

Argument counts and kinds are validated by the registry before any of these
run, so the bodies only deal with domain failures such as division by zero.
"""

import math
from typing import Any, List

from pelikan.natives import NativeRegistry
from pelikan.types import to_string, value_less, values_equal

LIBRARY = 'std_func'


def populate_func_registry(registry: NativeRegistry) -> NativeRegistry:
    native = registry.native

    # Logic
    @native(LIBRARY, 'and', 2, ('bool', 'bool'))
    def std_and(args: List[Any]) -> Any:
        return args[0] and args[1]

    @native(LIBRARY, 'or', 2, ('bool', 'bool'))
    def std_or(args: List[Any]) -> Any:
        return args[0] or args[1]

    @native(LIBRARY, 'not', 1, ('bool',))
    def std_not(args: List[Any]) -> Any:
        return not args[0]

    @native(LIBRARY, 'xor', 2, ('bool', 'bool'))
    def std_xor(args: List[Any]) -> Any:
        return args[0] != args[1]

    # Numbers
    @native(LIBRARY, 'add', 2, ('num', 'num'))
    def std_add(args: List[Any]) -> Any:
        return args[0] + args[1]

    @native(LIBRARY, 'subtract', 2, ('num', 'num'))
    def std_subtract(args: List[Any]) -> Any:
        return args[0] - args[1]

    @native(LIBRARY, 'multiply', 2, ('num', 'num'))
    def std_multiply(args: List[Any]) -> Any:
        return args[0] * args[1]

    @native(LIBRARY, 'divide', 2, ('num', 'num'))
    def std_divide(args: List[Any]) -> Any:
        if args[1] == 0.0:
            raise ZeroDivisionError('division by zero')
        return args[0] / args[1]

    @native(LIBRARY, 'sqrt', 1, ('num',))
    def std_sqrt(args: List[Any]) -> Any:
        if args[0] < 0.0:
            raise ValueError('cannot compute square root of negative number')
        return math.sqrt(args[0])

    @native(LIBRARY, 'pow', 2, ('num', 'num'))
    def std_pow(args: List[Any]) -> Any:
        return math.pow(args[0], args[1])

    @native(LIBRARY, 'floor', 1, ('num',))
    def std_floor(args: List[Any]) -> Any:
        return float(math.floor(args[0]))

    @native(LIBRARY, 'sin', 1, ('num',))
    def std_sin(args: List[Any]) -> Any:
        return math.sin(args[0])

    @native(LIBRARY, 'cos', 1, ('num',))
    def std_cos(args: List[Any]) -> Any:
        return math.cos(args[0])

    @native(LIBRARY, 'tan', 1, ('num',))
    def std_tan(args: List[Any]) -> Any:
        return math.tan(args[0])

    # Comparison; kinds are checked by values_equal/value_less
    @native(LIBRARY, 'eq', 2, ('any', 'any'))
    def std_eq(args: List[Any]) -> Any:
        return values_equal(args[0], args[1])

    @native(LIBRARY, 'lt', 2, ('any', 'any'))
    def std_lt(args: List[Any]) -> Any:
        return value_less(args[0], args[1])

    @native(LIBRARY, 'gt', 2, ('any', 'any'))
    def std_gt(args: List[Any]) -> Any:
        return value_less(args[1], args[0])

    # Text
    @native(LIBRARY, 'to_str', 1, ('any',))
    def std_to_str(args: List[Any]) -> Any:
        return to_string(args[0])

    @native(LIBRARY, 'to_num', 1, ('str',))
    def std_to_num(args: List[Any]) -> Any:
        try:
            return float(args[0].strip())
        except ValueError:
            raise ValueError(f'cannot parse num from {args[0]!r}')

    @native(LIBRARY, 'concat', None, ('str',))
    def std_concat(args: List[Any]) -> Any:
        return ''.join(args)

    @native(LIBRARY, 'len', 1, ('str',))
    def std_len(args: List[Any]) -> Any:
        return float(len(args[0]))

    return registry
