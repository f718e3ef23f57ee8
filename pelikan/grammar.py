"""Reference grammar for the Pelikan language.

The interpreter runs the output of the hand-written parser in
:mod:`pelikan.parser`. This module states the same language as a Lark LALR
grammar and transforms the resulting parse tree into the identical AST, so
the two front ends can be checked against each other. String literals are
decoded with the lexer's own escape rules.

The public entry point is :func:`parse_with_grammar`.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Transformer, Token
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken, VisitError

from .ast import (
    Program, ImportStmt, FuncParam, FuncDecl, Block, ReturnStmt, ExprStmt,
    Literal, Ident, Member, Call, ForeignCall,
)
from .errors import LexError, ParseError, PelikanError
from .lexer import decode_string
from .types import TypeSpec, NUN


PELIKAN_GRAMMAR = r"""
    start: _top*

    _top: import_stmt
        | _statement

    import_stmt: "imp" IDENT        -> import_name
               | "imp" STRING       -> import_path

    _statement: func_def
               | return_stmt
               | expr_stmt

    func_def: "fn" type_tag IDENT "(" [params] ")" block
    params: param ("," param)*
    param: type_tag IDENT

    type_tag: "num"     -> tag_num
            | "str"     -> tag_str
            | "bool"    -> tag_bool
            | "any"     -> tag_any
            | "nun"     -> tag_nun
            | IDENT     -> tag_custom

    block: "{" _statement* "}"

    return_stmt: "return" expression
    expr_stmt: expression

    ?expression: literal
               | IDENT                                              -> ident
               | IDENT args                                         -> call
               | IDENT "." IDENT args                               -> dotted_call
               | "RUST" "[" IDENT "::" IDENT "]" args               -> foreign_call

    args: "(" [expression ("," expression)*] ")"

    literal: NUMBER     -> number
           | STRING     -> string
           | "true"     -> true
           | "false"    -> false
           | "nun"      -> nun

    IDENT: /[A-Za-z_][A-Za-z0-9_]*/
    NUMBER: /-?[0-9]+(\.[0-9]+)?([eE][+-]?[0-9]+)?(?![A-Za-z0-9_.])/
    STRING: /"(\\.|[^"\\])*"/

    LINE_COMMENT: /(\/\/|#)[^\n]*/
    BLOCK_COMMENT: /\/\*[\s\S]*?\*\//
    %import common.WS
    %ignore WS
    %ignore LINE_COMMENT
    %ignore BLOCK_COMMENT
"""


PELIKAN_PARSER = Lark(
    PELIKAN_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
    maybe_placeholders=False,
    lexer='basic',
)


def _pos(token: Token):
    return (token.line, token.column)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, items):
        return Program(body=list(items))

    def import_name(self, items):
        token = items[0]
        return ImportStmt(str(token), False)

    def import_path(self, items):
        token = items[0]
        return ImportStmt(decode_string(str(token)[1:-1], token.line, token.column), True)

    def func_def(self, items):
        return_type, name, *rest = items
        body = rest[-1]
        params: List[FuncParam] = rest[0] if len(rest) == 2 else []
        return FuncDecl(str(name), params, return_type, body)

    def params(self, items):
        return list(items)

    def param(self, items):
        return FuncParam(items[0], str(items[1]))

    def tag_num(self, items):
        return TypeSpec('num')

    def tag_str(self, items):
        return TypeSpec('str')

    def tag_bool(self, items):
        return TypeSpec('bool')

    def tag_any(self, items):
        return TypeSpec('any')

    def tag_nun(self, items):
        return TypeSpec('nun')

    def tag_custom(self, items):
        return TypeSpec(str(items[0]))

    def block(self, items):
        return Block(statements=list(items))

    def return_stmt(self, items):
        return ReturnStmt(items[0])

    def expr_stmt(self, items):
        return ExprStmt(items[0])

    def ident(self, items):
        token = items[0]
        return Ident(str(token), pos=_pos(token))

    def call(self, items):
        token, args = items
        return Call(Ident(str(token), pos=_pos(token)), args, pos=_pos(token))

    def dotted_call(self, items):
        feather, member, args = items
        callee = Member(Ident(str(feather), pos=_pos(feather)), str(member), pos=_pos(member))
        return Call(callee, args, pos=_pos(feather))

    def foreign_call(self, items):
        library, function, args = items
        return ForeignCall(str(library), str(function), args)

    def args(self, items):
        return list(items)

    def number(self, items):
        return Literal(float(items[0]), 'num')

    def string(self, items):
        token = items[0]
        return Literal(decode_string(str(token)[1:-1], token.line, token.column), 'str')

    def true(self, items):
        return Literal(True, 'bool')

    def false(self, items):
        return Literal(False, 'bool')

    def nun(self, items):
        return Literal(NUN, 'nun')


def parse_with_grammar(source: str) -> Program:
    """Parse source text with the Lark reference grammar."""
    try:
        tree = PELIKAN_PARSER.parse(source)
    except UnexpectedCharacters as e:
        raise LexError(f"unexpected character {e.char!r}", (e.line, e.column), e.char)
    except UnexpectedToken as e:
        expected = ' or '.join(sorted(e.expected)) if e.expected else 'end of input'
        found = 'end of input' if e.token.type == '$END' else f"{e.token.type} {str(e.token)!r}"
        raise ParseError(expected, found, (e.line, e.column))
    except UnexpectedInput as e:
        raise ParseError('valid input', 'unexpected input', (e.line, e.column))
    try:
        return ASTTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, PelikanError):
            raise e.orig_exc
        raise
