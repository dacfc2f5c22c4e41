"""Conversion between expression trees and SymPy expressions.

SymPy is used for display and interop only; solving never goes through it.
"""

from __future__ import annotations

import sympy as sp

from ..types import ValidationError
from .nodes import Assignment
from .nodes import BinaryOp
from .nodes import Equation
from .nodes import Function
from .nodes import Node
from .nodes import Number
from .nodes import Variable

SYMPY_FUNCTIONS = {
    "sin": sp.sin,
    "cos": sp.cos,
    "log": sp.log,
    "sqrt": sp.sqrt,
}

SYMPY_BINARY = {
    "+": lambda x, y: x + y,
    "-": lambda x, y: x - y,
    "*": lambda x, y: x * y,
    "/": lambda x, y: x / y,
    "^": lambda x, y: x**y,
}


def _to_sympy_number(value: float) -> sp.Expr:
    if value.is_integer() and abs(value) < 1e15:
        return sp.Integer(int(value))
    return sp.Float(value)


def to_sympy(node: Node, symbols: dict[str, sp.Symbol] | None = None) -> sp.Basic:
    """Convert a tree to a SymPy expression (no simplification).

    Args:
        node: Expression or Equation tree
        symbols: Optional mapping of variable names to existing symbols

    Returns:
        SymPy expression; an Equation becomes ``sp.Eq`` (unevaluated)
    """
    if symbols is None:
        symbols = {}

    if isinstance(node, Number):
        return _to_sympy_number(node.value)

    if isinstance(node, Variable):
        if node.name not in symbols:
            symbols[node.name] = sp.Symbol(node.name)
        return symbols[node.name]

    if isinstance(node, BinaryOp):
        op_func = SYMPY_BINARY.get(node.op)
        if op_func is None:
            raise ValidationError(f"No SymPy equivalent for: {node.op}")
        return op_func(to_sympy(node.left, symbols), to_sympy(node.right, symbols))

    if isinstance(node, Function):
        op_func = SYMPY_FUNCTIONS.get(node.name)
        if op_func is None:
            raise ValidationError(f"No SymPy equivalent for: {node.name}")
        return op_func(to_sympy(node.arg, symbols))

    if isinstance(node, Equation):
        return sp.Eq(to_sympy(node.lhs, symbols), to_sympy(node.rhs, symbols), evaluate=False)

    if isinstance(node, Assignment):
        raise ValidationError("Assignments have no SymPy equivalent")

    raise ValidationError(f"Not an expression node: {node!r}")


def from_sympy(expr: sp.Basic) -> Node:
    """Build a tree from a SymPy expression.

    N-ary sums and products are chained left to right into binary nodes.
    ``Pow(x, 1/2)`` becomes ``sqrt(x)``; an ``Eq`` becomes an Equation.

    Raises:
        ValidationError: The expression uses something outside + - * / ^,
            sin, cos, log, sqrt, numbers and symbols
    """
    if isinstance(expr, sp.Equality):
        return Equation(from_sympy(expr.lhs), from_sympy(expr.rhs))

    if expr.is_Number or expr in (sp.pi, sp.E):
        try:
            return Number(float(expr))
        except (TypeError, ValueError):
            raise ValidationError(f"Not a real number: {expr}") from None

    if expr.is_Symbol:
        return Variable(str(expr))

    if expr.is_Add or expr.is_Mul:
        op = "+" if expr.is_Add else "*"
        operands = expr.as_ordered_terms() if expr.is_Add else expr.as_ordered_factors()
        current = from_sympy(operands[0])
        for operand in operands[1:]:
            current = BinaryOp(op, current, from_sympy(operand))
        return current

    if expr.is_Pow:
        if expr.exp == sp.Rational(1, 2):
            return Function("sqrt", from_sympy(expr.base))
        return BinaryOp("^", from_sympy(expr.base), from_sympy(expr.exp))

    if isinstance(expr, sp.Function):
        fname = expr.func.__name__.lower()
        if fname in SYMPY_FUNCTIONS and len(expr.args) == 1:
            return Function(fname, from_sympy(expr.args[0]))

    raise ValidationError(f"Cannot convert to an expression tree: {expr}")
