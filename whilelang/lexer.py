"""Lexer for the While language.

`Lexer` takes any iterable of characters and is itself an iterator. Each
item it produces is either a `Spanned` token or a `LexError`; errors are
handed back as items rather than raised, so a caller may keep reading past
an unrecognised character. Tokens carry no text of their own: identifier
names and literal values are recovered later by slicing the source with the
token's span.

Line breaks double as statement separators. A run of `\\n`/`\\r` characters
becomes one `SEMICOLON` token, and an explicit `;` swallows the line breaks
that directly follow it (but never another `;`). Only line breaks that come
right after the `;` are absorbed: `;` followed by spaces and then a newline
lexes as two separators, which the parser rejects as an empty statement.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, Union

from .errors import LexError
from .span import Span, Spanned


class Token(Enum):
    # Groupings
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_SEMANTIC = auto()    # [[
    RIGHT_SEMANTIC = auto()   # ]]

    # Arithmetic operators
    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()

    # Literals
    LITERAL = auto()
    IDENTIFIER = auto()
    TRUE = auto()
    FALSE = auto()

    # Comparison and equality operators
    EQUAL = auto()
    NOT_EQUAL = auto()
    LESS_EQUAL = auto()
    LESS_THAN = auto()
    GREATER_EQUAL = auto()
    GREATER_THAN = auto()
    NOT = auto()
    AND = auto()

    # Statement identifiers
    ASSIGN = auto()
    IF = auto()
    THEN = auto()
    ELSE = auto()
    WHILE = auto()
    DO = auto()
    SKIP = auto()

    # Miscellaneous symbols
    WHITESPACE = auto()
    LINE_BREAK = auto()
    SEMICOLON = auto()
    UNKNOWN = auto()


KEYWORDS = {
    'if': Token.IF,
    'then': Token.THEN,
    'else': Token.ELSE,
    'while': Token.WHILE,
    'do': Token.DO,
    'skip': Token.SKIP,
    'true': Token.TRUE,
    'false': Token.FALSE,
}

SINGLE_CHAR_TOKENS = {
    '(': Token.LEFT_PAREN,
    ')': Token.RIGHT_PAREN,
    '+': Token.ADD,
    '-': Token.SUBTRACT,
    '*': Token.MULTIPLY,
    '=': Token.EQUAL,
    '&': Token.AND,
}

# first character -> (second character, token if both match, token if not)
TWO_CHAR_TOKENS = {
    '!': ('=', Token.NOT_EQUAL, Token.NOT),
    '<': ('=', Token.LESS_EQUAL, Token.LESS_THAN),
    '>': ('=', Token.GREATER_EQUAL, Token.GREATER_THAN),
    ':': ('=', Token.ASSIGN, Token.UNKNOWN),
    '[': ('[', Token.LEFT_SEMANTIC, Token.UNKNOWN),
    ']': (']', Token.RIGHT_SEMANTIC, Token.UNKNOWN),
}

LINE_BREAKS = '\n\r'
BLANKS = ' \t'

LexItem = Union[Spanned, LexError]


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_ident_start(c: str) -> bool:
    return c.isascii() and c.isalpha()


class Lexer:
    """Lexes an incoming character stream one token at a time."""

    def __init__(self, source: Iterable[str]):
        self._chars: Iterator[str] = iter(source)
        self._lookahead: Optional[str] = None
        self._exhausted = False
        self.current_index = 0

    def __iter__(self) -> 'Lexer':
        return self

    def peek(self) -> Optional[str]:
        if self._lookahead is None and not self._exhausted:
            self._lookahead = next(self._chars, None)
            if self._lookahead is None:
                self._exhausted = True
        return self._lookahead

    def advance(self) -> Optional[str]:
        c = self.peek()
        if c is not None:
            self._lookahead = None
            self.current_index += 1
        return c

    def eat_ident(self, start: str) -> Token:
        # The first character is already consumed, so it is passed in.
        buffer = [start]
        while self.peek() is not None and self.peek().isalnum():
            buffer.append(self.advance())
        return KEYWORDS.get(''.join(buffer), Token.IDENTIFIER)

    def eat_numbers(self) -> Token:
        while self.peek() is not None and is_digit(self.peek()):
            self.advance()
        return Token.LITERAL

    def eat_whitespaces(self) -> Token:
        while self.peek() is not None and self.peek() in BLANKS:
            self.advance()
        return Token.WHITESPACE

    def eat_linebreaks(self) -> Token:
        while self.peek() is not None and self.peek() in LINE_BREAKS:
            self.advance()
        return Token.SEMICOLON

    def __next__(self) -> LexItem:
        start = self.current_index
        c = self.advance()
        if c is None:
            raise StopIteration

        if c in SINGLE_CHAR_TOKENS:
            token = SINGLE_CHAR_TOKENS[c]
        elif c in TWO_CHAR_TOKENS:
            second, matched, alone = TWO_CHAR_TOKENS[c]
            if self.peek() == second:
                self.advance()
                token = matched
            else:
                token = alone
        elif is_digit(c):
            token = self.eat_numbers()
        elif is_ident_start(c):
            token = self.eat_ident(c)
        elif c in BLANKS:
            token = self.eat_whitespaces()
        elif c in LINE_BREAKS or c == ';':
            token = self.eat_linebreaks()
        else:
            token = Token.UNKNOWN

        span = Span(start, self.current_index)
        if token is Token.UNKNOWN:
            return LexError("Unknown token", span)
        return Spanned(token, span)


def tokenize(source: Iterable[str]) -> List[Spanned]:
    """Lex the whole source, raising the first `LexError` encountered."""
    tokens: List[Spanned] = []
    for item in Lexer(source):
        if isinstance(item, LexError):
            raise item
        tokens.append(item)
    return tokens
