"""Grammar-driven parser for the While language.

This is the declarative twin of `whilelang.parser`: the same language
written as a Lark LALR grammar, with a transformer that builds the very
same AST (it goes through the same desugaring helpers in `whilelang.ast`).
It is useful as an executable reference for the grammar and as a
cross-check on the hand-written parser.

Statement blocks are greedy in both parsers. In the LALR tables this shows
up as shift/reduce conflicts on the separator after a nested block, which
Lark resolves as shift: the innermost `while`/`if` branch keeps absorbing
`; statement` until it meets `)`, `]]`, `else` or the end of input.

Lark's own exceptions are translated into `LexError` and `ParseError` so
callers see the same error types whichever parser they use.
"""

from __future__ import annotations

from typing import List

from lark import Lark, Transformer, UnexpectedCharacters, UnexpectedEOF, UnexpectedToken
from lark.exceptions import VisitError

from . import ast
from .ast import (
    Node, TrueLit, FalseLit, Literal, Ident, Not, Eq, LessEq, And,
    Add, Sub, Mul, Skip, Ass, If, While, DefinitionRun,
)
from .errors import LexError, ParseError, WhileError
from .span import Span
from .types import I32_MAX


WHILE_GRAMMAR = r"""
    start: block

    block: _SEP* statement (_SEP statement)* _SEP?

    ?statement: if_stmt
              | while_stmt
              | ass_stmt
              | run_stmt
              | skip_stmt
              | "(" block ")"

    if_stmt: "if" expression "then" block "else" block
    while_stmt: "while" expression "do"? block
    ass_stmt: IDENT ":=" (expression | definition)
    ?definition: if_stmt
               | while_stmt
               | skip_stmt
               | "[[" block "]]"
    run_stmt: IDENT
    skip_stmt: "skip"

    // Expressions, lowest precedence first
    ?expression: equality
               | expression "&" equality      -> and_
    ?equality: comparison
             | comparison "=" comparison      -> eq
             | comparison "!=" comparison     -> not_eq
    ?comparison: term
               | term "<=" term               -> less_eq
               | term "<" term                -> less_than
               | term ">=" term               -> greater_eq
               | term ">" term                -> greater_than
    ?term: factor
         | term "+" factor                    -> add
         | term "-" factor                    -> sub
    ?factor: unary
           | factor "*" unary                 -> mul
    ?unary: primary
          | "-" unary                         -> neg
          | "!" unary                         -> not_
    ?primary: IDENT                           -> ident
            | INT                             -> literal
            | "true"                          -> true
            | "false"                         -> false
            | "(" expression ")"

    // Tokens
    // Letters and digits as in str.isalnum(), after an ASCII letter
    IDENT: /[A-Za-z][^\W_]*/
    INT: /[0-9]+/
    _SEP: /;[\r\n]*|[\r\n]+/

    %ignore /[ \t]+/
"""


WHILE_PARSER = Lark(
    WHILE_GRAMMAR,
    parser='lalr',
    lexer='basic',
    maybe_placeholders=False,
)


class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, items):
        return items[0]

    def block(self, items: List[Node]):
        return ast.sequence(items)

    def if_stmt(self, items):
        cond, true_path, false_path = items
        return If(cond, true_path, false_path)

    def while_stmt(self, items):
        cond, body = items
        return While(cond, body)

    def ass_stmt(self, items):
        name, value = items
        return Ass(str(name), value)

    def run_stmt(self, items):
        return DefinitionRun(str(items[0]))

    def skip_stmt(self, items):
        return Skip()

    # Expressions
    def and_(self, items):
        return And(*items)

    def eq(self, items):
        return Eq(*items)

    def not_eq(self, items):
        return ast.not_equal(*items)

    def less_eq(self, items):
        return LessEq(*items)

    def less_than(self, items):
        return ast.less_than(*items)

    def greater_eq(self, items):
        return ast.greater_equal(*items)

    def greater_than(self, items):
        return ast.greater_than(*items)

    def add(self, items):
        return Add(*items)

    def sub(self, items):
        return Sub(*items)

    def mul(self, items):
        return Mul(*items)

    def neg(self, items):
        return ast.negate(items[0])

    def not_(self, items):
        return Not(items[0])

    def ident(self, items):
        return Ident(str(items[0]))

    def literal(self, items):
        token = items[0]
        value = int(token)
        if value > I32_MAX:
            raise ParseError(
                f"Literal {token} does not fit in a 32-bit integer",
                Span(token.start_pos, token.end_pos),
            )
        return Literal(value)

    def true(self, items):
        return TrueLit()

    def false(self, items):
        return FalseLit()


def parse_with_grammar(source: str) -> Node:
    """Parse While source with the Lark grammar."""
    end_span = Span(len(source), len(source) + 1)
    try:
        tree = WHILE_PARSER.parse(source)
    except UnexpectedCharacters as e:
        raise LexError("Unknown token", Span(e.pos_in_stream, e.pos_in_stream + 1)) from None
    except UnexpectedEOF as e:
        raise ParseError(f"Expected one of {sorted(e.expected)}, but reached end of token stream", end_span) from None
    except UnexpectedToken as e:
        if e.token.type == '$END':
            raise ParseError(f"Expected one of {sorted(e.expected)}, but reached end of token stream", end_span) from None
        raise ParseError(
            f"Expected one of {sorted(e.expected)}, found {e.token.type}",
            Span(e.token.start_pos, e.token.end_pos),
        ) from None
    try:
        return ASTTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, WhileError):
            raise e.orig_exc from None
        raise
