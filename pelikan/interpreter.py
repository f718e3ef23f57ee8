"""Interpreter for the Pelikan language.

This module implements the evaluator: a strict left-to-right walk over the
AST produced by :mod:`pelikan.parser`. Functions are closures over the scope
active at their definition. Import directives, dotted feather calls and
``RUST[lib::func]`` calls are routed through the interpreter's
:class:`~pelikan.context.ExecutionContext`, which owns the feather cache and
the native registry.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, List, Optional

from .ast import (
    Program, ImportStmt, FuncParam, FuncDecl, Block, ReturnStmt, ExprStmt,
    Literal, Ident, Member, Call, ForeignCall, Node,
)
from .context import ExecutionContext
from .environment import Environment
from .errors import (
    ReturnSignal, NotCallableError, ArityMismatchError,
    UndefinedNameError, UndefinedExportError,
)
from .lexer import read_source
from .natives import describe_args
from .parser import parse_program
from .types import NUN, TypeSpec, kind_name, to_string


class FunctionValue:
    """Represents a user-defined Pelikan function."""
    def __init__(self, name: str, params: List[FuncParam], return_type: TypeSpec, body: Block, env: Environment):
        self.name = name
        self.params = params
        self.return_type = return_type
        self.body = body  # shared with the defining AST, never copied
        self.env = env  # closure environment

    @property
    def arity(self) -> int:
        return len(self.params)

    def __repr__(self) -> str:
        return f"<fn {self.name}>"


class Interpreter:
    """Core interpreter that executes Pelikan AST."""
    def __init__(self, context: Optional[ExecutionContext] = None, debug_level: int = 0,
                 debug_file: Optional[str] = 'debug.txt'):
        self.context = context if context is not None else ExecutionContext.create()
        self.global_env = Environment()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg, file=sys.stderr)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Any:
        """Execute a program and return the value of its last expression statement."""
        if env is None:
            env = self.global_env
        try:
            return self.execute_program(program, env)
        finally:
            self.close()

    def execute_program(self, program: Program, env: Environment) -> Any:
        try:
            return self.execute_block(program.body, env)
        except ReturnSignal as r:
            return r.value

    def execute_block(self, statements: List[Node], env: Environment) -> Any:
        # Only expression statements produce a value; definitions and imports leave nun.
        result = NUN
        for stmt in statements:
            result = self.execute(stmt, env)
        return result

    def execute(self, node: Node, env: Environment) -> Any:
        if isinstance(node, ExprStmt):
            return self.evaluate(node.expr, env)
        if isinstance(node, FuncDecl):
            env.define(node.name, FunctionValue(node.name, node.params, node.return_type, node.body, env))
            if self.debug_level >= 2:
                params = ', '.join(f"{p.type_spec!r} {p.name}" for p in node.params)
                self.debug(f"define fn {node.return_type!r} {node.name}({params})")
            return NUN
        if isinstance(node, ImportStmt):
            self.import_feather(node, env)
            return NUN
        if isinstance(node, ReturnStmt):
            raise ReturnSignal(self.evaluate(node.value, env))
        raise NotImplementedError(f"execute: unexpected node type {type(node)}")

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Ident):
            return env.get(node.name, node.pos)
        if isinstance(node, Member):
            return self.feather_export(node, env)
        if isinstance(node, Call):
            func = self.evaluate(node.func, env)
            if not isinstance(func, FunctionValue):
                raise NotCallableError(
                    f"{callee_name(node.func)} is a {kind_name(func)} value, not a function", node.pos)
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call_function(func, args, node.pos)
        if isinstance(node, ForeignCall):
            args = [self.evaluate(arg, env) for arg in node.args]
            if self.debug_level >= 4:
                self.debug(f"native {node.library}::{node.function}({describe_args(args)})")
            result = self.context.registry.dispatch(node.library, node.function, args, node.pos)
            if self.debug_level >= 4:
                self.debug(f"native {node.library}::{node.function} -> {to_string(result)}")
            return result
        raise NotImplementedError(f"evaluate: unexpected node type {type(node)}")

    def call_function(self, func: Any, args: List[Any], position=None) -> Any:
        if not isinstance(func, FunctionValue):
            raise NotCallableError(f"{kind_name(func)} value is not callable", position)
        if len(args) != func.arity:
            raise ArityMismatchError(f"{func.name} expects {func.arity} arguments, got {len(args)}", position)
        if self.debug_level >= 3:
            self.debug(f"call {func.name}({describe_args(args)})")
        # Create new environment for call; closure's env is parent
        call_env = Environment(parent=func.env)
        for param, arg in zip(func.params, args):
            call_env.define(param.name, arg)
        try:
            return self.execute_block(func.body.statements, call_env)
        except ReturnSignal as r:
            return r.value

    def feather_export(self, node: Member, env: Environment) -> FunctionValue:
        if not isinstance(node.target, Ident):
            raise NotImplementedError(f"feather access on {type(node.target)}")
        feather_name = node.target.name
        feather = env.find_feather(feather_name)
        if feather is None:
            raise UndefinedNameError(f"feather {feather_name} has not been imported", node.target.pos)
        func = feather.exports.get(node.name)
        if func is None:
            raise UndefinedExportError(f"feather {feather_name} has no function {node.name}", node.pos)
        return func

    def import_feather(self, node: ImportStmt, env: Environment):
        root = env.root()
        feather = self.context.feathers.resolve_import(
            node.source, self, node.is_path, root.origin_dir, node.pos)
        env.add_feather(feather.name, feather)
        if self.debug_level >= 1:
            self.debug(f"import {feather.name}")


def callee_name(node: Node) -> str:
    if isinstance(node, Ident):
        return node.name
    if isinstance(node, Member) and isinstance(node.target, Ident):
        return f"{node.target.name}.{node.name}"
    return type(node).__name__


def run_program(source: str, debug_level: int = 0, context: Optional[ExecutionContext] = None) -> Any:
    """Convenience function to parse and run a Pelikan program from source string."""
    ast_program = parse_program(source)
    interpreter = Interpreter(context, debug_level=debug_level)
    return interpreter.run(ast_program)


def compile_module(file_path: str, debug_level: int = 0, context: Optional[ExecutionContext] = None) -> Interpreter:
    """Parse and execute a Pelikan file, returning the interpreter instance."""
    ast_program = parse_program(read_source(file_path))
    interpreter = Interpreter(context, debug_level=debug_level)
    interpreter.global_env.origin_dir = str(Path(file_path).resolve().parent)
    interpreter.run(ast_program)
    return interpreter
