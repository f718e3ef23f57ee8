# Pelikan language package
# This package provides the lexer, parser, interpreter and feather loader for the Pelikan language.
from .context import ExecutionContext
from .errors import PelikanError
from .interpreter import run_program, compile_module, Interpreter
from .parser import parse_program

__version__ = '0.1.0'

__all__ = [
    'run_program',
    'compile_module',
    'parse_program',
    'Interpreter',
    'ExecutionContext',
    'PelikanError',
]
