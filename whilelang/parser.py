"""Recursive-descent parser for the While language.

The parser pulls `Spanned` tokens from a lexer (or any iterable of lexer
items) and builds an AST. It keeps a reference to the source so that
identifier names and literal values can be sliced out by span. Whitespace
tokens are skipped transparently; semicolons are significant.

Grammar, lowest to highest precedence:

    stmt_block  := ";"* statement (";" statement)* ";"?
    statement   := if_stmt | while_stmt | ass_stmt | run_stmt | skip_stmt
                 | "(" stmt_block ")"
    if_stmt     := "if" expression "then" stmt_block "else" stmt_block
    while_stmt  := "while" expression ["do"] stmt_block
    ass_stmt    := ident ":=" (expression | definition)
    definition  := if_stmt | while_stmt | skip_stmt | "[[" stmt_block "]]"
    run_stmt    := ident
    skip_stmt   := "skip"
    expression  := equality ("&" equality)*
    equality    := comparison (("=" | "!=") comparison)?
    comparison  := term (("<=" | "<" | ">" | ">=") term)?
    term        := factor (("+" | "-") factor)*
    factor      := unary ("*" unary)*
    unary       := ("-" | "!") unary | primary
    primary     := ident | literal | "true" | "false" | "(" expression ")"

`!=`, `<`, `>=`, `>` and unary minus are desugared while parsing, so the
AST only ever contains `Eq`, `LessEq`, `Not` and `Sub`.
"""

from __future__ import annotations

from typing import Iterable, Optional

from . import ast
from .ast import (
    Node, TrueLit, FalseLit, Literal, Ident, Not, Eq, LessEq, And,
    Add, Sub, Mul, Skip, Ass, Comp, If, While, DefinitionRun,
)
from .errors import LexError, ParseError
from .lexer import Lexer, LexItem, Token
from .span import Span, Spanned
from .types import I32_MAX

SKIPPED_TOKENS = (Token.WHITESPACE, Token.LINE_BREAK)

# Tokens that close a statement block. A semicolon directly before one of
# these is a trailing separator rather than the start of another statement.
BLOCK_TERMINATORS = (Token.RIGHT_PAREN, Token.ELSE, Token.RIGHT_SEMANTIC)

DEFINITION_STARTS = (Token.IF, Token.WHILE, Token.SKIP, Token.LEFT_SEMANTIC)

COMPARISONS = {
    Token.LESS_EQUAL: LessEq,
    Token.LESS_THAN: ast.less_than,
    Token.GREATER_EQUAL: ast.greater_equal,
    Token.GREATER_THAN: ast.greater_than,
}


class Parser:
    def __init__(self, source: str, tokens: Iterable[LexItem]):
        self.source = source
        self.tokens = iter(tokens)
        self._peeked: Optional[Spanned] = None
        self._has_peeked = False

    def end_span(self) -> Span:
        """Span used when the token stream runs out unexpectedly."""
        return Span(len(self.source), len(self.source) + 1)

    def _next_significant(self) -> Optional[Spanned]:
        for item in self.tokens:
            if isinstance(item, LexError):
                raise item
            if item.inner not in SKIPPED_TOKENS:
                return item
        return None

    def peek(self) -> Optional[Spanned]:
        if not self._has_peeked:
            self._peeked = self._next_significant()
            self._has_peeked = True
        return self._peeked

    def advance(self) -> Optional[Spanned]:
        token = self.peek()
        self._peeked = None
        self._has_peeked = False
        return token

    def match(self, *expected: Token) -> bool:
        token = self.peek()
        return token is not None and token.inner in expected

    def expect(self, expected: Token) -> Spanned:
        token = self.advance()
        if token is None:
            raise ParseError(f"Expected {expected.name}, but reached end of token stream", self.end_span())
        if token.inner is not expected:
            raise ParseError(f"Expected {expected.name}, found {token.inner.name}", token.span)
        return token

    def text(self, token: Spanned) -> str:
        return token.span.slice(self.source)

    def parse(self) -> Node:
        program = self.parse_stmt_block()
        leftover = self.peek()
        if leftover is not None:
            raise ParseError(f"Expected end of input, found {leftover.inner.name}", leftover.span)
        return program

    # Statements

    def parse_stmt_block(self) -> Node:
        while self.match(Token.SEMICOLON):
            self.advance()
        stmt = self.parse_statement()
        while self.match(Token.SEMICOLON):
            self.advance()
            if self.peek() is None or self.match(*BLOCK_TERMINATORS):
                break
            stmt = Comp(stmt, self.parse_statement())
        return stmt

    def parse_statement(self) -> Node:
        token = self.peek()
        if token is None:
            raise ParseError("Unexpected end of token stream", self.end_span())
        if token.inner is Token.IF:
            return self.parse_if_stmt()
        if token.inner is Token.WHILE:
            return self.parse_while_stmt()
        if token.inner is Token.IDENTIFIER:
            return self.parse_ident_stmt()
        if token.inner is Token.SKIP:
            return self.parse_skip_stmt()
        if token.inner is Token.LEFT_PAREN:
            self.advance()
            block = self.parse_stmt_block()
            self.expect(Token.RIGHT_PAREN)
            return block
        raise ParseError(f"Expected a statement, found {token.inner.name}", token.span)

    def parse_if_stmt(self) -> If:
        self.expect(Token.IF)
        cond = self.parse_expression()
        self.expect(Token.THEN)
        true_path = self.parse_stmt_block()
        self.expect(Token.ELSE)
        false_path = self.parse_stmt_block()
        return If(cond, true_path, false_path)

    def parse_while_stmt(self) -> While:
        self.expect(Token.WHILE)
        cond = self.parse_expression()
        if self.match(Token.DO):
            self.advance()
        body = self.parse_stmt_block()
        return While(cond, body)

    def parse_ident_stmt(self) -> Node:
        name = self.text(self.expect(Token.IDENTIFIER))
        if not self.match(Token.ASSIGN):
            return DefinitionRun(name)
        self.advance()
        if self.match(*DEFINITION_STARTS):
            return Ass(name, self.parse_definition())
        return Ass(name, self.parse_expression())

    def parse_definition(self) -> Node:
        if self.match(Token.LEFT_SEMANTIC):
            self.advance()
            body = self.parse_stmt_block()
            self.expect(Token.RIGHT_SEMANTIC)
            return body
        return self.parse_statement()

    def parse_skip_stmt(self) -> Skip:
        self.expect(Token.SKIP)
        return Skip()

    # Expressions

    def parse_expression(self) -> Node:
        node = self.parse_equality()
        while self.match(Token.AND):
            self.advance()
            node = And(node, self.parse_equality())
        return node

    def parse_equality(self) -> Node:
        # At most one operator: `a = b = c` is rejected by the caller.
        node = self.parse_comparison()
        if self.match(Token.EQUAL, Token.NOT_EQUAL):
            operator = self.advance().inner
            right = self.parse_comparison()
            node = Eq(node, right) if operator is Token.EQUAL else ast.not_equal(node, right)
        return node

    def parse_comparison(self) -> Node:
        node = self.parse_term()
        if self.match(*COMPARISONS):
            operator = self.advance().inner
            node = COMPARISONS[operator](node, self.parse_term())
        return node

    def parse_term(self) -> Node:
        node = self.parse_factor()
        while self.match(Token.ADD, Token.SUBTRACT):
            operator = self.advance().inner
            right = self.parse_factor()
            node = Add(node, right) if operator is Token.ADD else Sub(node, right)
        return node

    def parse_factor(self) -> Node:
        node = self.parse_unary()
        while self.match(Token.MULTIPLY):
            self.advance()
            node = Mul(node, self.parse_unary())
        return node

    def parse_unary(self) -> Node:
        if self.match(Token.SUBTRACT):
            self.advance()
            return ast.negate(self.parse_unary())
        if self.match(Token.NOT):
            self.advance()
            return Not(self.parse_unary())
        return self.parse_primary()

    def parse_primary(self) -> Node:
        token = self.advance()
        if token is None:
            raise ParseError("Reached end of token stream", self.end_span())
        if token.inner is Token.LEFT_PAREN:
            expr = self.parse_expression()
            self.expect(Token.RIGHT_PAREN)
            return expr
        if token.inner is Token.TRUE:
            return TrueLit()
        if token.inner is Token.FALSE:
            return FalseLit()
        if token.inner is Token.IDENTIFIER:
            return Ident(self.text(token))
        if token.inner is Token.LITERAL:
            return self.parse_literal(token)
        raise ParseError(f"Got unexpected {token.inner.name} at the primary parsing stage", token.span)

    def parse_literal(self, token: Spanned) -> Literal:
        text = self.text(token)
        if not text.isdigit() or not text.isascii():
            raise ParseError(f"Malformed literal {text!r}", token.span)
        value = int(text)
        if value > I32_MAX:
            raise ParseError(f"Literal {text} does not fit in a 32-bit integer", token.span)
        return Literal(value)


def parse_program(source: str) -> Node:
    """Lex and parse the given source into an AST."""
    return Parser(source, Lexer(source)).parse()
