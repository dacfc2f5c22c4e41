"""Expression tree data model.

A tree is built from a closed set of node variants:

    - Number: numeric literal
    - Variable: name resolved against an environment at evaluation time
    - BinaryOp: one of + - * / ^ over two owned subtrees
    - Function: sin, cos, log or sqrt over one owned subtree
    - Equation: lhs = rhs, only ever the root of a statement
    - Assignment: name = expr, only ever the root of a statement

Each node exclusively owns its children. Operations over trees are free
functions that dispatch on the variant, so adding a variant means touching
each operation in one place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from ..config import BINARY_OPERATORS
from ..config import FUNCTIONS
from ..config import MAX_EXPRESSION_DEPTH
from ..config import MAX_EXPRESSION_NODES
from ..types import ValidationError


@dataclass
class Number:
    value: float

    def __post_init__(self):
        self.value = float(self.value)

    def __str__(self) -> str:
        return to_string(self)


@dataclass
class Variable:
    name: str

    def __str__(self) -> str:
        return to_string(self)


@dataclass
class BinaryOp:
    op: str
    left: Node
    right: Node

    def __str__(self) -> str:
        return to_string(self)


@dataclass
class Function:
    name: str
    arg: Node

    def __str__(self) -> str:
        return to_string(self)


@dataclass
class Equation:
    lhs: Node
    rhs: Node

    def __str__(self) -> str:
        return to_string(self)


@dataclass
class Assignment:
    name: str
    expr: Node

    def __str__(self) -> str:
        return to_string(self)


Node = Union[Number, Variable, BinaryOp, Function, Equation, Assignment]
STATEMENT_TYPES = (Equation, Assignment)


def children(node: Node) -> tuple[Node, ...]:
    """Return the direct children of a node, left to right."""
    if isinstance(node, (Number, Variable)):
        return ()
    if isinstance(node, BinaryOp):
        return (node.left, node.right)
    if isinstance(node, Function):
        return (node.arg,)
    if isinstance(node, Equation):
        return (node.lhs, node.rhs)
    if isinstance(node, Assignment):
        return (node.expr,)
    raise ValidationError(f"Not an expression node: {node!r}")


def clone(node: Node) -> Node:
    """Create a deep copy of a tree that shares no nodes with the source."""
    if isinstance(node, Number):
        return Number(node.value)
    if isinstance(node, Variable):
        return Variable(node.name)
    if isinstance(node, BinaryOp):
        return BinaryOp(node.op, clone(node.left), clone(node.right))
    if isinstance(node, Function):
        return Function(node.name, clone(node.arg))
    if isinstance(node, Equation):
        return Equation(clone(node.lhs), clone(node.rhs))
    if isinstance(node, Assignment):
        return Assignment(node.name, clone(node.expr))
    raise ValidationError(f"Not an expression node: {node!r}")


def collect_variables(node: Node) -> list[str]:
    """List every Variable leaf in left-to-right order, duplicates included.

    An Assignment target is not a leaf and is not reported.
    """
    names: list[str] = []
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Variable):
            names.append(current.name)
        else:
            # reversed so the left child is popped first
            stack.extend(reversed(children(current)))
    return names


def unique_variables(node: Node) -> list[str]:
    """Distinct variable names in order of first occurrence."""
    return list(dict.fromkeys(collect_variables(node)))


def count_nodes(node: Node) -> int:
    """Count total nodes in a tree."""
    return 1 + sum(count_nodes(child) for child in children(node))


def depth(node: Node) -> int:
    """Calculate depth of a tree (a single leaf has depth 1)."""
    kids = children(node)
    if not kids:
        return 1
    return 1 + max(depth(child) for child in kids)


def substitute(node: Node, bindings: dict[str, float]) -> Node:
    """Return a new tree with bound variables replaced by Number leaves."""
    if isinstance(node, Variable):
        if node.name in bindings:
            return Number(bindings[node.name])
        return Variable(node.name)
    if isinstance(node, Number):
        return Number(node.value)
    if isinstance(node, BinaryOp):
        return BinaryOp(
            node.op, substitute(node.left, bindings), substitute(node.right, bindings)
        )
    if isinstance(node, Function):
        return Function(node.name, substitute(node.arg, bindings))
    if isinstance(node, Equation):
        return Equation(substitute(node.lhs, bindings), substitute(node.rhs, bindings))
    if isinstance(node, Assignment):
        return Assignment(node.name, substitute(node.expr, bindings))
    raise ValidationError(f"Not an expression node: {node!r}")


def validate_tree(
    node: Node,
    max_depth: int | None = None,
    max_nodes: int | None = None,
) -> None:
    """Check that a tree is well-formed before handing it to the engine.

    Args:
        node: Root of the tree (an expression or a statement)
        max_depth: Depth limit (default: MAX_EXPRESSION_DEPTH)
        max_nodes: Node count limit (default: MAX_EXPRESSION_NODES)

    Raises:
        ValidationError: On a nested Equation/Assignment, an unknown operator
            or function name, or a tree beyond the size limits
    """
    if max_depth is None:
        max_depth = MAX_EXPRESSION_DEPTH
    if max_nodes is None:
        max_nodes = MAX_EXPRESSION_NODES

    node_count = 0
    stack: list[tuple[Node, int]] = [(node, 1)]
    while stack:
        current, level = stack.pop()
        node_count += 1
        if level > max_depth:
            raise ValidationError(f"Expression is nested deeper than {max_depth} levels")
        if node_count > max_nodes:
            raise ValidationError(f"Expression has more than {max_nodes} nodes")
        if level > 1 and isinstance(current, STATEMENT_TYPES):
            raise ValidationError(
                f"{type(current).__name__} can only appear at the top level"
            )
        if isinstance(current, BinaryOp) and current.op not in BINARY_OPERATORS:
            raise ValidationError(f"Unknown operator: {current.op}")
        if isinstance(current, Function) and current.name not in FUNCTIONS:
            raise ValidationError(f"Unknown function: {current.name}")
        for child in children(current):
            stack.append((child, level + 1))


def format_number(value: float) -> str:
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return f"{value:.6g}"


def to_string(node: Node) -> str:
    """Fully parenthesised infix rendering of a tree."""
    if isinstance(node, Number):
        return format_number(node.value)
    if isinstance(node, Variable):
        return node.name
    if isinstance(node, BinaryOp):
        return f"({to_string(node.left)} {node.op} {to_string(node.right)})"
    if isinstance(node, Function):
        return f"{node.name}({to_string(node.arg)})"
    if isinstance(node, Equation):
        return f"{to_string(node.lhs)} = {to_string(node.rhs)}"
    if isinstance(node, Assignment):
        return f"{node.name} = {to_string(node.expr)}"
    raise ValidationError(f"Not an expression node: {node!r}")
