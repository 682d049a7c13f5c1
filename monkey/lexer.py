"""Lexer for the Monkey language.

The lexer walks the source one character at a time and hands out tokens
on demand through `next_token`. It never fails: characters it does not
understand become ILLEGAL tokens and an unterminated string simply ends
at the end of the input.
"""

from __future__ import annotations

from typing import List

from .tokens import Token, TokenType, lookup_ident


SINGLE_CHAR_TOKENS = {
    '=': TokenType.ASSIGN,
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '!': TokenType.BANG,
    '*': TokenType.ASTERISK,
    '/': TokenType.SLASH,
    '<': TokenType.LT,
    '>': TokenType.GT,
    ',': TokenType.COMMA,
    ':': TokenType.COLON,
    ';': TokenType.SEMICOLON,
    '(': TokenType.LPAREN,
    ')': TokenType.RPAREN,
    '{': TokenType.LBRACE,
    '}': TokenType.RBRACE,
    '[': TokenType.LBRACKET,
    ']': TokenType.RBRACKET,
}

TWO_CHAR_TOKENS = {
    '==': TokenType.EQ,
    '!=': TokenType.NOT_EQ,
}

WHITESPACE = ' \t\n\r'


def is_letter(ch: str) -> bool:
    return ch.isalpha() or ch == '_'


def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    def peek_char(self, offset: int = 0) -> str:
        i = self.pos + offset
        if i < len(self.source):
            return self.source[i]
        return ''

    def advance(self, n: int = 1):
        for _ in range(n):
            if self.pos >= len(self.source):
                return
            if self.source[self.pos] == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self):
        while self.peek_char() and self.peek_char() in WHITESPACE:
            self.advance()

    def next_token(self) -> Token:
        """Consume and return the next token.

        Once the input is exhausted every call returns an EOF token.
        """
        self.skip_whitespace()
        line, column = self.line, self.column
        c = self.peek_char()
        if c == '':
            return Token(TokenType.EOF, '', line, column)
        pair = c + self.peek_char(1)
        if pair in TWO_CHAR_TOKENS:
            self.advance(2)
            return Token(TWO_CHAR_TOKENS[pair], pair, line, column)
        if c in SINGLE_CHAR_TOKENS:
            self.advance()
            return Token(SINGLE_CHAR_TOKENS[c], c, line, column)
        if c == '"':
            return Token(TokenType.STRING, self.read_string(), line, column)
        if is_letter(c):
            ident = self.read_while(is_letter)
            return Token(lookup_ident(ident), ident, line, column)
        if is_digit(c):
            return Token(TokenType.INT, self.read_while(is_digit), line, column)
        self.advance()
        return Token(TokenType.ILLEGAL, c, line, column)

    def read_while(self, predicate) -> str:
        start = self.pos
        while self.peek_char() and predicate(self.peek_char()):
            self.advance()
        return self.source[start:self.pos]

    def read_string(self) -> str:
        self.advance()  # opening quote
        start = self.pos
        while self.peek_char() not in ('"', ''):
            self.advance()
        value = self.source[start:self.pos]
        self.advance()  # closing quote, no-op at end of input
        return value

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return


def tokenize(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with EOF."""
    return list(Lexer(source))
