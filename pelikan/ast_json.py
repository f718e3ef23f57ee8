"""JSON serialization/deserialization for Pelikan AST.

This module converts between Pelikan AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. It supports a full
round-trip for all node types and `TypeSpec`. Source positions are kept as
``[line, column]`` pairs when present.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    ImportStmt,
    FuncParam,
    FuncDecl,
    Block,
    ReturnStmt,
    ExprStmt,
    Literal,
    Ident,
    Member,
    Call,
    ForeignCall,
)
from .types import TypeSpec, NUN, NunVal


def typespec_to_obj(t: TypeSpec) -> Dict[str, Any]:
    return {"kind": t.kind}


def typespec_from_obj(o: Dict[str, Any]) -> TypeSpec:
    return TypeSpec(o["kind"])


def _pos_to_obj(pos):
    return list(pos) if pos is not None else None


def _pos_from_obj(obj: Dict[str, Any]):
    pos = obj.get("pos")
    return tuple(pos) if pos is not None else None


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if node is None:
        return None
    if isinstance(node, (float, str, bool)):
        return node
    if isinstance(node, NunVal):
        return {"__type__": "Nun"}

    # TypeSpec
    if isinstance(node, TypeSpec):
        return {"__type__": "TypeSpec", "value": typespec_to_obj(node)}

    # Node types
    if isinstance(node, Program):
        return {"type": "Program", "body": [ast_to_obj(n) for n in node.body]}
    if isinstance(node, ImportStmt):
        return {"type": "ImportStmt", "source": node.source, "is_path": node.is_path, "pos": _pos_to_obj(node.pos)}
    if isinstance(node, FuncParam):
        return {
            "type": "FuncParam",
            "type_spec": ast_to_obj(node.type_spec),
            "name": node.name,
        }
    if isinstance(node, FuncDecl):
        return {
            "type": "FuncDecl",
            "name": node.name,
            "params": [ast_to_obj(p) for p in node.params],
            "return_type": ast_to_obj(node.return_type),
            "body": ast_to_obj(node.body),
            "pos": _pos_to_obj(node.pos),
        }
    if isinstance(node, Block):
        return {"type": "Block", "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, ReturnStmt):
        return {"type": "ReturnStmt", "value": ast_to_obj(node.value)}
    if isinstance(node, ExprStmt):
        return {"type": "ExprStmt", "expr": ast_to_obj(node.expr)}
    if isinstance(node, Literal):
        return {"type": "Literal", "value": ast_to_obj(node.value), "literal_type": node.literal_type}
    if isinstance(node, Ident):
        return {"type": "Ident", "name": node.name, "pos": _pos_to_obj(node.pos)}
    if isinstance(node, Member):
        return {"type": "Member", "target": ast_to_obj(node.target), "name": node.name, "pos": _pos_to_obj(node.pos)}
    if isinstance(node, Call):
        return {
            "type": "Call",
            "func": ast_to_obj(node.func),
            "args": [ast_to_obj(a) for a in node.args],
            "pos": _pos_to_obj(node.pos),
        }
    if isinstance(node, ForeignCall):
        return {
            "type": "ForeignCall",
            "library": node.library,
            "function": node.function,
            "args": [ast_to_obj(a) for a in node.args],
            "pos": _pos_to_obj(node.pos),
        }

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None or isinstance(obj, (float, str, bool)):
        return obj
    if isinstance(obj, int):
        # json renders whole floats like 2.0 faithfully, but hand-written files may not
        return float(obj)
    if isinstance(obj, dict) and obj.get("__type__") == "TypeSpec":
        return typespec_from_obj(obj["value"])
    if isinstance(obj, dict) and obj.get("__type__") == "Nun":
        return NUN
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(body=[ast_from_obj(n) for n in obj["body"]])
    if t == "ImportStmt":
        return ImportStmt(source=obj["source"], is_path=bool(obj.get("is_path", False)), pos=_pos_from_obj(obj))
    if t == "FuncParam":
        return FuncParam(type_spec=ast_from_obj(obj["type_spec"]), name=obj["name"])
    if t == "FuncDecl":
        return FuncDecl(
            name=obj["name"],
            params=[ast_from_obj(p) for p in obj["params"]],
            return_type=ast_from_obj(obj["return_type"]),
            body=ast_from_obj(obj["body"]),
            pos=_pos_from_obj(obj),
        )
    if t == "Block":
        return Block(statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "ReturnStmt":
        return ReturnStmt(value=ast_from_obj(obj["value"]))
    if t == "ExprStmt":
        return ExprStmt(expr=ast_from_obj(obj["expr"]))
    if t == "Literal":
        return Literal(value=ast_from_obj(obj["value"]), literal_type=obj["literal_type"])
    if t == "Ident":
        return Ident(name=obj["name"], pos=_pos_from_obj(obj))
    if t == "Member":
        return Member(target=ast_from_obj(obj["target"]), name=obj["name"], pos=_pos_from_obj(obj))
    if t == "Call":
        return Call(func=ast_from_obj(obj["func"]), args=[ast_from_obj(a) for a in obj["args"]], pos=_pos_from_obj(obj))
    if t == "ForeignCall":
        return ForeignCall(
            library=obj["library"],
            function=obj["function"],
            args=[ast_from_obj(a) for a in obj["args"]],
            pos=_pos_from_obj(obj),
        )

    raise ValueError(f"Unknown AST node type: {t}")
