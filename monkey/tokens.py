"""Token vocabulary for the Monkey language.

Token kinds form a closed set. Keywords are recognised by looking up the
text of an identifier in `KEYWORDS`; everything else is a plain IDENT.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class TokenType(Enum):
    """All token kinds produced by the lexer."""

    ILLEGAL = 'ILLEGAL'
    EOF = 'EOF'

    # Identifiers and literals
    IDENT = 'IDENT'
    INT = 'INT'
    STRING = 'STRING'

    # Operators
    ASSIGN = '='
    PLUS = '+'
    MINUS = '-'
    BANG = '!'
    ASTERISK = '*'
    SLASH = '/'
    LT = '<'
    GT = '>'
    EQ = '=='
    NOT_EQ = '!='

    # Delimiters
    COMMA = ','
    COLON = ':'
    SEMICOLON = ';'
    LPAREN = '('
    RPAREN = ')'
    LBRACE = '{'
    RBRACE = '}'
    LBRACKET = '['
    RBRACKET = ']'

    # Keywords
    FUNCTION = 'FUNCTION'
    LET = 'LET'
    TRUE = 'TRUE'
    FALSE = 'FALSE'
    IF = 'IF'
    ELSE = 'ELSE'
    RETURN = 'RETURN'

    def __str__(self) -> str:
        return self.value


KEYWORDS = {
    'fn': TokenType.FUNCTION,
    'let': TokenType.LET,
    'true': TokenType.TRUE,
    'false': TokenType.FALSE,
    'if': TokenType.IF,
    'else': TokenType.ELSE,
    'return': TokenType.RETURN,
}


def lookup_ident(ident: str) -> TokenType:
    """Return the keyword kind for `ident`, or IDENT."""
    return KEYWORDS.get(ident, TokenType.IDENT)


@dataclass(frozen=True)
class Token:
    type: TokenType
    literal: str
    # Position of the first character; not part of a token's identity.
    line: int = field(default=1, compare=False)
    column: int = field(default=1, compare=False)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal!r})"
