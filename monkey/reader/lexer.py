"""
  Monkey Lexer

- Character-at-a-time scanner with one character of lookahead.
- A NUL sentinel stands in for end of input, so the scanner never raises.
  A literal NUL in the source therefore ends the token stream, inside a
  string literal too.
- Unknown characters become ILLEGAL tokens; rejecting them is the parser's job.
- Strings run to the next double quote or to end of input. There are no
  escape sequences, and an unterminated string is not diagnosed.
"""

from __future__ import annotations

import string
from typing import Callable, Iterator

from monkey.reader.token import Token, TokenType, lookup_ident

EOF_CHAR = "\0"

LETTERS = frozenset(string.ascii_letters + "_")
DIGITS = frozenset(string.digits)
WHITESPACE = frozenset(" \t\n\r")

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}

# '=' and '!' become '==' and '!=' when followed by '='
TWO_CHAR_TOKENS: dict[str, tuple[TokenType, TokenType]] = {
    "=": (TokenType.ASSIGN, TokenType.EQ),
    "!": (TokenType.BANG, TokenType.NOT_EQ),
}


class Lexer:
    __slots__ = ("source", "position", "read_position", "ch")

    def __init__(self, source: str):
        self.source = source
        self.position = 0  # index of self.ch
        self.read_position = 0  # index of the next character to read
        self.ch = EOF_CHAR
        self.read_char()

    def read_char(self) -> None:
        if self.read_position >= len(self.source):
            self.ch = EOF_CHAR
        else:
            self.ch = self.source[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def peek_char(self) -> str:
        if self.read_position >= len(self.source):
            return EOF_CHAR
        return self.source[self.read_position]

    def _advance_while(self, predicate: Callable[[str], bool]) -> str:
        start = self.position
        while self.ch != EOF_CHAR and predicate(self.ch):
            self.read_char()
        return self.source[start:self.position]

    def _skip_whitespace(self) -> None:
        self._advance_while(lambda c: c in WHITESPACE)

    def _read_string(self) -> str:
        self.read_char()  # opening quote
        literal = self._advance_while(lambda c: c != '"')
        if self.ch == '"':
            self.read_char()
        return literal

    def next_token(self) -> Token:
        self._skip_whitespace()
        ch = self.ch

        if ch == EOF_CHAR:
            return Token(TokenType.EOF, "")

        if ch in LETTERS:
            literal = self._advance_while(lambda c: c in LETTERS)
            return Token(lookup_ident(literal), literal)

        if ch in DIGITS:
            return Token(TokenType.INT, self._advance_while(lambda c: c in DIGITS))

        if ch == '"':
            return Token(TokenType.STRING, self._read_string())

        if ch in TWO_CHAR_TOKENS:
            single, double = TWO_CHAR_TOKENS[ch]
            if self.peek_char() == "=":
                self.read_char()
                self.read_char()
                return Token(double, ch + "=")
            self.read_char()
            return Token(single, ch)

        self.read_char()
        return Token(SINGLE_CHAR_TOKENS.get(ch, TokenType.ILLEGAL), ch)

    def __iter__(self) -> Iterator[Token]:
        while (tok := self.next_token()).token_type is not TokenType.EOF:
            yield tok


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields every token before EOF."""
    yield from Lexer(source)
