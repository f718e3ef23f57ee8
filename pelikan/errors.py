"""Error types raised by the Pelikan pipeline.

Every failure is fatal to the current run: the lexer, parser, evaluator,
feather resolver and native registry all raise a subclass of
:class:`PelikanError`, which the command line runner reports before exiting
with a non-zero status.
"""

from typing import Any, Optional, Tuple

Position = Tuple[int, int]


class PelikanError(Exception):
    """Base class for all Pelikan errors.

    Carries a human-readable message and, where available, the (line, column)
    source position the error refers to.
    """
    def __init__(self, message: str, position: Optional[Position] = None):
        super().__init__(message)
        self.message = message
        self.position = position

    @property
    def name(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        if self.position is not None:
            line, column = self.position
            return f"{self.name}: {self.message} at {line}:{column}"
        return f"{self.name}: {self.message}"


class LexError(PelikanError):
    """Raised on a malformed token; lexing does not recover."""
    def __init__(self, message: str, position: Optional[Position] = None, character: str = ''):
        super().__init__(message, position)
        self.character = character


class ParseError(PelikanError):
    """Raised on a grammar violation."""
    def __init__(self, expected: str, found: str, position: Optional[Position] = None):
        super().__init__(f"expected {expected}, found {found}", position)
        self.expected = expected
        self.found = found


class UndefinedNameError(PelikanError):
    pass


class UndefinedExportError(PelikanError):
    pass


class NotCallableError(PelikanError):
    pass


class ArityMismatchError(PelikanError):
    pass


class TypeMismatchError(PelikanError):
    """A value's kind does not satisfy an operation's expectation."""


class ImportCycleError(PelikanError):
    pass


class NotFoundError(PelikanError):
    """A feather's source could not be located."""


class UnknownNativeFunctionError(PelikanError):
    pass


class NativeExecutionError(PelikanError):
    """Wraps a failure raised inside a native callable."""
    def __init__(self, message: str, cause: Optional[BaseException] = None,
                 position: Optional[Position] = None):
        super().__init__(message, position)
        self.cause = cause


class ReturnSignal(Exception):
    """Internal exception to handle return statements in functions."""
    def __init__(self, value: Any):
        super().__init__('return')
        self.value = value
