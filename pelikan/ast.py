"""Abstract Syntax Tree (AST) definitions for the Pelikan language.

The AST classes defined in this module represent the syntactic structure
of parsed Pelikan programs. They are produced by the parser and only read by
the interpreter, so a parsed program can be executed more than once. Nodes
that may fail at runtime carry the source position of their first token;
positions never take part in equality.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from .types import TypeSpec

Position = Tuple[int, int]


def _pos() -> Any:
    return field(default=None, compare=False, repr=False)


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Program(Node):
    body: List[Node]


@dataclass
class ImportStmt(Node):
    source: str  # feather name, or a file path when is_path is set
    is_path: bool = False
    pos: Optional[Position] = _pos()


@dataclass
class FuncParam:
    type_spec: TypeSpec
    name: str


@dataclass
class FuncDecl(Node):
    name: str
    params: List[FuncParam]
    return_type: TypeSpec
    body: 'Block'
    pos: Optional[Position] = _pos()


@dataclass
class Block(Node):
    statements: List[Node]


@dataclass
class ReturnStmt(Node):
    value: Node


@dataclass
class ExprStmt(Node):
    expr: Node


@dataclass
class Literal(Node):
    value: Any
    literal_type: str  # 'num', 'str', 'bool' or 'nun'


@dataclass
class Ident(Node):
    name: str
    pos: Optional[Position] = _pos()


@dataclass
class Member(Node):
    target: Node
    name: str
    pos: Optional[Position] = _pos()


@dataclass
class Call(Node):
    func: Node  # Ident, or Member for feather.function
    args: List[Node]
    pos: Optional[Position] = _pos()


@dataclass
class ForeignCall(Node):
    library: str
    function: str
    args: List[Node]
    pos: Optional[Position] = _pos()
