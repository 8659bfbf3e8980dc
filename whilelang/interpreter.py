"""Tree-walking interpreter for the While language.

The interpreter evaluates an AST against a `Context` (variable state plus
stored definitions) and hands back the final `State`. Runtime values are
checked at every node that consumes them: arithmetic wants `Integer`,
conditions and `&` want `Boolean`, and nothing is ever coerced from one to
the other. The first failure raises `InterpretError`; whatever was already
written to the state stays there.

The AST itself is never modified.
"""

from __future__ import annotations

import operator
from typing import Callable, Optional

from .ast import (
    Node, TrueLit, FalseLit, Literal, Ident, Not, Eq, LessEq, And,
    Add, Sub, Mul, Skip, Ass, Comp, If, While, DefinitionRun,
)
from .context import Context, State
from .errors import InterpretError
from .grammar import parse_with_grammar
from .parser import parse_program
from .types import Boolean, Integer, Unit, Value, fits_i32, type_name

ARITHMETIC: dict = {
    Add: operator.add,
    Sub: operator.sub,
    Mul: operator.mul,
}


class Interpreter:
    """Evaluates one AST against a fresh context."""
    def __init__(self, ast: Node, debug_level: int = 0, debug_file: str = 'debug.txt'):
        self.ast = ast
        self.context = Context()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()

    @property
    def state(self) -> State:
        return self.context.state

    def interpret(self) -> State:
        """Run the program in a fresh context and return a copy of the final state."""
        self.context = Context()
        try:
            self.debug("interpret: start")
            try:
                self.evaluate(self.ast)
            except RecursionError:
                raise InterpretError("Maximum recursion depth exceeded") from None
            self.debug(f"interpret: done {self.state}")
            return self.state.copy()
        finally:
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    def evaluate(self, node: Node) -> Value:
        # Statements
        if isinstance(node, Ass):
            return self.assign(node)
        if isinstance(node, Skip):
            return Unit
        if isinstance(node, Comp):
            # Compositions nest on the left, one level per statement.
            pending = []
            while isinstance(node, Comp):
                pending.append(node.second)
                node = node.first
            self.evaluate(node)
            for stmt in reversed(pending):
                self.evaluate(stmt)
            return Unit
        if isinstance(node, If):
            cond = self.evaluate(node.cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {cond!r}")
            if isinstance(cond, Boolean):
                return self.evaluate(node.true_path if cond.value else node.false_path)
            if isinstance(cond, Integer):
                raise InterpretError("Arithmetic conditional not allowed")
            raise InterpretError("Statement conditional not allowed")
        if isinstance(node, While):
            while True:
                cond = self.evaluate(node.cond)
                if self.debug_level >= 3:
                    self.debug(f"while condition {cond!r}")
                if not isinstance(cond, Boolean):
                    raise InterpretError(f"Bad conditional: expected Bool, got {type_name(cond)}")
                if not cond.value:
                    return Unit
                self.evaluate(node.body)
        if isinstance(node, DefinitionRun):
            definition = self.context.get_definition(node.ident)
            if definition is None:
                raise InterpretError(f"Undefined definition: {node.ident}")
            return self.evaluate(definition)

        # Expressions
        if isinstance(node, Literal):
            return Integer(node.value)
        if isinstance(node, Ident):
            return Integer(self.context.get_variable(node.name))
        if isinstance(node, TrueLit):
            return Boolean(True)
        if isinstance(node, FalseLit):
            return Boolean(False)
        if isinstance(node, Not):
            inner = self.evaluate(node.expr)
            if isinstance(inner, Boolean):
                return Boolean(not inner.value)
            if isinstance(inner, Integer):
                raise InterpretError("Cannot negate arithmetic")
            raise InterpretError("Cannot negate statement")
        if isinstance(node, Eq):
            return self.equal_values(self.evaluate(node.left), self.evaluate(node.right))
        if isinstance(node, LessEq):
            left, right = self.integer_operands(node.left, node.right)
            return Boolean(left <= right)
        if isinstance(node, And):
            left = self.evaluate(node.left)
            if not isinstance(left, Boolean):
                raise InterpretError("LHS is not boolean")
            right = self.evaluate(node.right)
            if not isinstance(right, Boolean):
                raise InterpretError("RHS is not boolean")
            return Boolean(left.value and right.value)
        if type(node) in ARITHMETIC:
            left, right = self.integer_operands(node.left, node.right)
            return Integer(self.checked(ARITHMETIC[type(node)], left, right))

        raise InterpretError(f"Unexpected node type {type(node).__name__}")

    def assign(self, node: Ass) -> Value:
        if node.value.is_statement:
            # `name := <statement>` stores the statement to run later.
            self.context.add_definition(node.ident, node.value)
            if self.debug_level >= 2:
                self.debug(f"define {node.ident}")
            return Unit
        value = self.evaluate(node.value)
        if not isinstance(value, Integer):
            raise InterpretError(f"Bad RHS of Assign to {node.ident}: expected Arith, got {type_name(value)}")
        self.context.set_variable(node.ident, value.value)
        if self.debug_level >= 2:
            self.debug(f"assign {node.ident} = {value.value}")
        return Unit

    def integer_operands(self, left_node: Node, right_node: Node):
        left = self.evaluate(left_node)
        if not isinstance(left, Integer):
            raise InterpretError("LHS is not arithmetic")
        right = self.evaluate(right_node)
        if not isinstance(right, Integer):
            raise InterpretError("RHS is not arithmetic")
        return left.value, right.value

    def checked(self, op: Callable[[int, int], int], left: int, right: int) -> int:
        result = op(left, right)
        if not fits_i32(result):
            raise InterpretError(f"Arithmetic overflow: {result} does not fit in a 32-bit integer")
        return result

    def equal_values(self, left: Value, right: Value) -> Boolean:
        if isinstance(left, Integer) and isinstance(right, Integer):
            return Boolean(left.value == right.value)
        if isinstance(left, Boolean) and isinstance(right, Boolean):
            return Boolean(left.value == right.value)
        raise InterpretError(f"Cannot evaluate {type_name(left)} = {type_name(right)}")


def run_program(source: str, debug_level: int = 0, parser: str = 'descent') -> State:
    """Convenience function to parse and run a While program from source."""
    ast = parse_source(source, parser)
    return Interpreter(ast, debug_level=debug_level).interpret()


def run_file(file_path: str, debug_level: int = 0, parser: str = 'descent') -> State:
    """Read a UTF-8 While file and run it, returning the final state."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, debug_level=debug_level, parser=parser)


def parse_source(source: str, parser: Optional[str] = 'descent') -> Node:
    """Parse with the hand-written parser ('descent') or the Lark grammar ('grammar')."""
    if parser == 'grammar':
        return parse_with_grammar(source)
    if parser in (None, 'descent'):
        return parse_program(source)
    raise ValueError(f"unknown parser {parser!r}")
