"""Tokenizer for the Pelikan language.

The lexer makes a single pass over the source text and produces a list of
tokens terminated by an ``EOF`` token. It recognizes keywords, type tags,
identifiers, numeric and string literals, and the fixed punctuation set.
Whitespace and comments are skipped. Lexing never recovers: the first
malformed token raises :class:`LexError` and aborts the source unit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .errors import LexError

KEYWORDS = {'fn', 'imp', 'RUST', 'return'}
TYPE_TAGS = {'num', 'str', 'bool', 'any'}
PUNCTUATION = {'(', ')', '{', '}', ',', '.', '[', ']'}

ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '0': '\0',
    '"': '"',
    '\\': '\\',
}

DIGITS = set('0123456789')
IDENT_START = set('abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ_')
IDENT_CHARS = IDENT_START | DIGITS


@dataclass(frozen=True)
class Token:
    type: str
    value: str  # source lexeme
    literal: Any = None
    line: int = field(default=0, compare=False)
    column: int = field(default=0, compare=False)

    @property
    def position(self):
        return (self.line, self.column)

    def describe(self) -> str:
        if self.type == 'EOF':
            return 'end of input'
        return f"{self.type} {self.value!r}"


def read_source(path) -> str:
    """Read a UTF-8 source file; undecodable bytes raise :class:`LexError`."""
    with open(path, 'rb') as f:
        data = f.read()
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        prefix = data[:e.start].decode('utf-8', errors='replace')
        line = prefix.count('\n') + 1
        column = len(prefix) - prefix.rfind('\n')
        raise LexError(f'{path} is not valid UTF-8 at byte {e.start}', (line, column),
                       f'\\x{data[e.start]:02x}') from e


def decode_string(raw: str, line: int = 0, column: int = 0) -> str:
    """Resolve escape sequences in the body of a string literal."""
    chars: List[str] = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch == '\\':
            if i + 1 >= len(raw):
                raise LexError('dangling escape in string literal', (line, column), ch)
            code = raw[i + 1]
            if code not in ESCAPES:
                raise LexError(f'unknown escape \\{code} in string literal', (line, column), code)
            chars.append(ESCAPES[code])
            i += 2
            continue
        chars.append(ch)
        i += 1
    return ''.join(chars)


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens.

    A ``-`` is only valid directly in front of a digit, where it becomes part
    of the number literal.
    """
    tokens: List[Token] = []
    i = 0
    line = 1
    col = 1
    length = len(source)

    def advance(n: int = 1):
        nonlocal i, col, line
        for _ in range(n):
            if i < length and source[i] == '\n':
                line += 1
                col = 1
            else:
                col += 1
            i += 1

    def peek(offset: int = 0) -> Optional[str]:
        j = i + offset
        return source[j] if j < length else None

    def digits() -> int:
        count = 0
        while i < length and source[i] in DIGITS:
            advance()
            count += 1
        return count

    while i < length:
        c = source[i]
        # Skip whitespace
        if c.isspace():
            advance()
            continue
        # Comments
        if c == '#' or (c == '/' and peek(1) == '/'):
            while i < length and source[i] != '\n':
                advance()
            continue
        if c == '/' and peek(1) == '*':
            start = (line, col)
            advance(2)
            while i < length and not (source[i] == '*' and peek(1) == '/'):
                advance()
            if i >= length:
                raise LexError('unterminated block comment', start, '/*')
            advance(2)
            continue
        # Identifiers, keywords, type tags and word literals
        if c in IDENT_START:
            start_line, start_col = line, col
            start_i = i
            while i < length and source[i] in IDENT_CHARS:
                advance()
            value = source[start_i:i]
            if value in KEYWORDS:
                tokens.append(Token('KEYWORD', value, None, start_line, start_col))
            elif value in TYPE_TAGS:
                tokens.append(Token('TYPE', value, None, start_line, start_col))
            elif value == 'nun':
                tokens.append(Token('NUN', value, None, start_line, start_col))
            elif value in ('true', 'false'):
                tokens.append(Token('BOOL', value, value == 'true', start_line, start_col))
            else:
                tokens.append(Token('IDENT', value, None, start_line, start_col))
            continue
        # Numbers: -?digits(.digits)?([eE][+-]?digits)?
        if c in DIGITS or (c == '-' and peek(1) in DIGITS):
            start_line, start_col = line, col
            start_i = i
            if c == '-':
                advance()
            digits()
            if peek() == '.':
                advance()
                if digits() == 0:
                    raise LexError('malformed decimal in number literal', (line, col), peek() or '')
                if peek() == '.':
                    raise LexError("unexpected second '.' in number", (line, col), '.')
            if peek() in ('e', 'E'):
                advance()
                if peek() in ('+', '-'):
                    advance()
                if digits() == 0:
                    raise LexError('malformed exponent in number literal', (line, col), peek() or '')
            if peek() in IDENT_START:
                raise LexError('malformed number literal', (line, col), peek())
            value = source[start_i:i]
            tokens.append(Token('NUMBER', value, float(value), start_line, start_col))
            continue
        # String literal
        if c == '"':
            start_line, start_col = line, col
            advance()  # skip opening quote
            start_i = i
            escape = False
            while i < length:
                ch = source[i]
                if escape:
                    escape = False
                elif ch == '\\':
                    escape = True
                elif ch == '"':
                    break
                advance()
            else:
                raise LexError('unterminated string literal', (start_line, start_col), '"')
            raw = source[start_i:i]
            advance()  # skip closing quote
            literal = decode_string(raw, start_line, start_col)
            tokens.append(Token('STRING', '"' + raw + '"', literal, start_line, start_col))
            continue
        if c == ':' and peek(1) == ':':
            tokens.append(Token('::', '::', None, line, col))
            advance(2)
            continue
        if c in PUNCTUATION:
            tokens.append(Token(c, c, None, line, col))
            advance()
            continue
        raise LexError(f"unexpected character {c!r}", (line, col), c)
    tokens.append(Token('EOF', '', None, line, col))
    return tokens


def untokenize(tokens: List[Token]) -> str:
    """Concatenate token lexemes back into source text.

    Tokens are separated by single spaces, which is always enough to keep
    adjacent tokens apart; the result lexes to an equivalent token list.
    """
    parts: List[str] = []
    for token in tokens:
        if token.type == 'EOF':
            break
        parts.append(token.value)
    return ' '.join(parts)
