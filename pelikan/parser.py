"""Recursive-descent parser for the Pelikan language.

The parser consumes the token list produced by :func:`pelikan.lexer.tokenize`
and builds the AST defined in :mod:`pelikan.ast`, using one token of
lookahead.

Grammar::

    program     := (import | funcDef | statement)* EOF
    import      := "imp" (IDENT | STRING)
    funcDef     := "fn" typeTag IDENT "(" paramList? ")" block
    paramList   := typeTag IDENT ("," typeTag IDENT)*
    block       := "{" statement* "}"
    statement   := funcDef | "return" expression | expression
    expression  := literal | IDENT | call | dottedCall | foreignCall
    call        := IDENT "(" argList? ")"
    dottedCall  := IDENT "." IDENT "(" argList? ")"
    foreignCall := "RUST" "[" IDENT "::" IDENT "]" "(" argList? ")"

Type tags are recorded on the AST but not checked. The first mismatch
raises :class:`ParseError`; there is no error recovery.
"""

from __future__ import annotations

from typing import List, Union

from .ast import (
    Program, ImportStmt, FuncParam, FuncDecl, Block, ReturnStmt, ExprStmt,
    Literal, Ident, Member, Call, ForeignCall, Node,
)
from .errors import ParseError
from .lexer import Token, tokenize
from .types import TypeSpec, NUN


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        return self.tokens[min(self.pos, len(self.tokens) - 1)]

    def at_end(self) -> bool:
        return self.peek().type == 'EOF'

    def consume(self, expected: Union[str, List[str]], description: str = '') -> Token:
        token = self.peek()
        if not self.match(expected):
            if not description:
                description = ' or '.join(expected) if isinstance(expected, list) else expected
            raise ParseError(description, token.describe(), token.position)
        self.pos += 1
        return token

    def match(self, expected: Union[str, List[str]]) -> bool:
        token = self.peek()
        if isinstance(expected, list):
            return any(self._matches(token, e) for e in expected)
        return self._matches(token, expected)

    @staticmethod
    def _matches(token: Token, expected: str) -> bool:
        if token.type == 'KEYWORD':
            return token.value == expected
        return token.type == expected

    def parse_program(self) -> Program:
        statements: List[Node] = []
        while not self.at_end():
            if self.match('imp'):
                statements.append(self.parse_import_stmt())
                continue
            statements.append(self.parse_statement())
        return Program(statements)

    def parse_statement(self) -> Node:
        if self.match('fn'):
            return self.parse_func_decl()
        if self.match('return'):
            self.consume('return')
            return ReturnStmt(self.parse_expression())
        if self.match('imp'):
            token = self.peek()
            raise ParseError('statement', 'import inside a block', token.position)
        return ExprStmt(self.parse_expression())

    def parse_import_stmt(self) -> ImportStmt:
        keyword = self.consume('imp')
        src_token = self.consume(['IDENT', 'STRING'], 'feather name or path')
        if src_token.type == 'STRING':
            if not src_token.literal:
                raise ParseError('feather path', 'empty string', src_token.position)
            return ImportStmt(src_token.literal, True, pos=keyword.position)
        return ImportStmt(src_token.value, False, pos=keyword.position)

    def parse_type_tag(self) -> TypeSpec:
        token = self.consume(['TYPE', 'NUN', 'IDENT'], 'type tag')
        return TypeSpec(token.value)

    def parse_func_decl(self) -> FuncDecl:
        keyword = self.consume('fn')
        return_type = self.parse_type_tag()
        name_token = self.consume('IDENT', 'function name')
        self.consume('(')
        params: List[FuncParam] = []
        if not self.match(')'):
            params = self.parse_param_list()
        self.consume(')')
        body = self.parse_block()
        return FuncDecl(name_token.value, params, return_type, body, pos=keyword.position)

    def parse_param_list(self) -> List[FuncParam]:
        params: List[FuncParam] = []
        while True:
            type_spec = self.parse_type_tag()
            name_token = self.consume('IDENT', 'parameter name')
            params.append(FuncParam(type_spec, name_token.value))
            if not self.match(','):
                break
            self.consume(',')
        return params

    def parse_block(self) -> Block:
        self.consume('{')
        statements: List[Node] = []
        while not self.match('}'):
            if self.at_end():
                token = self.peek()
                raise ParseError("'}'", token.describe(), token.position)
            statements.append(self.parse_statement())
        self.consume('}')
        return Block(statements)

    def parse_arguments(self) -> List[Node]:
        self.consume('(')
        args: List[Node] = []
        if not self.match(')'):
            args.append(self.parse_expression())
            while self.match(','):
                self.consume(',')
                args.append(self.parse_expression())
        self.consume(')')
        return args

    def parse_expression(self) -> Node:
        token = self.peek()
        # Literals
        if token.type == 'NUMBER':
            self.consume('NUMBER')
            return Literal(token.literal, 'num')
        if token.type == 'STRING':
            self.consume('STRING')
            return Literal(token.literal, 'str')
        if token.type == 'BOOL':
            self.consume('BOOL')
            return Literal(token.literal, 'bool')
        if token.type == 'NUN':
            self.consume('NUN')
            return Literal(NUN, 'nun')
        if self.match('RUST'):
            return self.parse_foreign_call()
        if token.type == 'IDENT':
            self.consume('IDENT')
            if self.match('('):
                args = self.parse_arguments()
                return Call(Ident(token.value, pos=token.position), args, pos=token.position)
            if self.match('.'):
                self.consume('.')
                member = self.consume('IDENT', 'feather function name')
                if not self.match('('):
                    after = self.peek()
                    raise ParseError(f"'(' after {token.value}.{member.value}", after.describe(), after.position)
                args = self.parse_arguments()
                callee = Member(Ident(token.value, pos=token.position), member.value, pos=member.position)
                return Call(callee, args, pos=token.position)
            return Ident(token.value, pos=token.position)
        raise ParseError('expression', token.describe(), token.position)

    def parse_foreign_call(self) -> ForeignCall:
        keyword = self.consume('RUST')
        self.consume('[')
        library = self.consume('IDENT', 'native library name')
        self.consume('::')
        function = self.consume('IDENT', 'native function name')
        self.consume(']')
        args = self.parse_arguments()
        return ForeignCall(library.value, function.value, args, pos=keyword.position)


def parse(tokens: List[Token]) -> Program:
    """Parse a token list into a Program AST."""
    return Parser(tokens).parse_program()


def parse_program(source: str) -> Program:
    """Lex and parse the given source code into a Program AST."""
    return parse(tokenize(source))
