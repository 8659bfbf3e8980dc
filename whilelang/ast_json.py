"""JSON serialization/deserialization for the While AST.

This module converts between While AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Each node becomes
`{"type": "<ClassName>", <field>: <value>, ...}`, so a parsed program can
be written out with `--emit-ast` and executed later with `--ast`.
"""

from __future__ import annotations

from dataclasses import fields
from typing import Any, Dict

from .ast import (
    Node,
    TrueLit,
    FalseLit,
    Literal,
    Ident,
    Not,
    Eq,
    LessEq,
    And,
    Add,
    Sub,
    Mul,
    Skip,
    Ass,
    Comp,
    If,
    While,
    DefinitionRun,
)

NODE_TYPES: Dict[str, type] = {
    cls.__name__: cls
    for cls in (
        TrueLit, FalseLit, Literal, Ident, Not, Eq, LessEq, And,
        Add, Sub, Mul, Skip, Ass, Comp, If, While, DefinitionRun,
    )
}


def ast_to_obj(node: Any) -> Any:
    # Primitives
    if isinstance(node, (int, str)):
        return node

    if isinstance(node, Node) and type(node).__name__ in NODE_TYPES:
        obj: Dict[str, Any] = {"type": type(node).__name__}
        for f in fields(node):
            obj[f.name] = ast_to_obj(getattr(node, f.name))
        return obj

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if isinstance(obj, (int, str)):
        return obj
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    cls = NODE_TYPES.get(t)
    if cls is None:
        raise ValueError(f"Unknown AST node type: {t}")
    kwargs = {f.name: ast_from_obj(obj[f.name]) for f in fields(cls)}
    return cls(**kwargs)
