"""Abstract Syntax Tree (AST) definitions for the While language.

The AST classes defined in this module represent the syntactic structure
of parsed While programs. They carry no behaviour and no source positions;
evaluating them is the interpreter's job. Every compound node owns its
children outright, so a program is always a tree.

Each node class records whether it is a statement or an expression in the
class attribute `is_statement`. The parser relies on this to decide whether
the right-hand side of `:=` is a value to bind or a definition to store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterable


@dataclass
class Node:
    """Base class for all AST nodes."""
    is_statement: ClassVar[bool] = False


@dataclass
class Statement(Node):
    is_statement: ClassVar[bool] = True


# Literals and identifiers

@dataclass
class TrueLit(Node):
    pass


@dataclass
class FalseLit(Node):
    pass


@dataclass
class Literal(Node):
    value: int


@dataclass
class Ident(Node):
    name: str


# Comparison and equality

@dataclass
class Not(Node):
    expr: Node


@dataclass
class Eq(Node):
    left: Node
    right: Node


@dataclass
class LessEq(Node):
    left: Node
    right: Node


@dataclass
class And(Node):
    left: Node
    right: Node


# Arithmetic

@dataclass
class Add(Node):
    left: Node
    right: Node


@dataclass
class Sub(Node):
    left: Node
    right: Node


@dataclass
class Mul(Node):
    left: Node
    right: Node


# Statements

@dataclass
class Skip(Statement):
    pass


@dataclass
class Ass(Statement):
    ident: str
    value: Node  # an expression, or a statement to store as a definition


@dataclass
class Comp(Statement):
    first: Node
    second: Node


@dataclass
class If(Statement):
    cond: Node
    true_path: Node
    false_path: Node


@dataclass
class While(Statement):
    cond: Node
    body: Node


@dataclass
class DefinitionRun(Statement):
    ident: str


# Desugaring helpers shared by both parsers

def negate(operand: Node) -> Node:
    """-e is 0 - e."""
    return Sub(Literal(0), operand)


def not_equal(left: Node, right: Node) -> Node:
    return Not(Eq(left, right))


def less_than(left: Node, right: Node) -> Node:
    # a < b == !(b <= a)
    return Not(LessEq(right, left))


def greater_equal(left: Node, right: Node) -> Node:
    # a >= b == (b <= a)
    return LessEq(right, left)


def greater_than(left: Node, right: Node) -> Node:
    # a > b == !(a <= b)
    return Not(LessEq(left, right))


def sequence(statements: Iterable[Node]) -> Node:
    """Fold statements into left-nested `Comp` nodes.

    `sequence([a, b, c])` gives `Comp(Comp(a, b), c)`, the same shape the
    parser builds while reading `a; b; c`.
    """
    iterator = iter(statements)
    try:
        result = next(iterator)
    except StopIteration:
        raise ValueError("sequence() needs at least one statement") from None
    for stmt in iterator:
        result = Comp(result, stmt)
    return result
