"""Symbolic differentiation of expression trees.

``derivative`` returns a brand new tree. Rules that need an operand twice
(product, quotient, chain) clone it, so the result never shares nodes with
the input and either can be evaluated or differentiated again on its own.
Results are not simplified: d/dx (3*x) is ((0 * x) + (3 * 1)).
"""

from __future__ import annotations

from ..types import UnsupportedDerivativeError
from .nodes import Assignment
from .nodes import BinaryOp
from .nodes import Equation
from .nodes import Function
from .nodes import Node
from .nodes import Number
from .nodes import Variable
from .nodes import clone


def derivative(node: Node, var: str) -> Node:
    """Differentiate a tree with respect to one variable.

    Args:
        node: Expression or Equation tree
        var: Name of the variable to differentiate by

    Returns:
        New tree for d(node)/d(var); an Equation maps to the Equation of the
        derivatives of both sides

    Raises:
        UnsupportedDerivativeError: Exponent is not a literal number, an
            unknown operator/function, or an Assignment
    """
    if isinstance(node, Number):
        return Number(0.0)

    if isinstance(node, Variable):
        return Number(1.0 if node.name == var else 0.0)

    if isinstance(node, BinaryOp):
        return _binary_derivative(node, var)

    if isinstance(node, Function):
        return _function_derivative(node, var)

    if isinstance(node, Equation):
        return Equation(derivative(node.lhs, var), derivative(node.rhs, var))

    if isinstance(node, Assignment):
        raise UnsupportedDerivativeError("Cannot differentiate an assignment")

    raise UnsupportedDerivativeError(f"Not an expression node: {node!r}")


def _binary_derivative(node: BinaryOp, var: str) -> Node:
    f, g = node.left, node.right

    if node.op in ("+", "-"):
        return BinaryOp(node.op, derivative(f, var), derivative(g, var))

    if node.op == "*":
        # f'g + fg'
        return BinaryOp(
            "+",
            BinaryOp("*", derivative(f, var), clone(g)),
            BinaryOp("*", clone(f), derivative(g, var)),
        )

    if node.op == "/":
        # (f'g - fg') / g^2
        numerator = BinaryOp(
            "-",
            BinaryOp("*", derivative(f, var), clone(g)),
            BinaryOp("*", clone(f), derivative(g, var)),
        )
        return BinaryOp("/", numerator, BinaryOp("^", clone(g), Number(2.0)))

    if node.op == "^":
        if not isinstance(g, Number):
            raise UnsupportedDerivativeError(
                f"Power rule needs a literal exponent, got {g}"
            )
        # c * f^(c-1) * f'
        return BinaryOp(
            "*",
            BinaryOp(
                "*",
                Number(g.value),
                BinaryOp("^", clone(f), Number(g.value - 1.0)),
            ),
            derivative(f, var),
        )

    raise UnsupportedDerivativeError(f"Unknown operator in derivative: {node.op}")


def _function_derivative(node: Function, var: str) -> Node:
    inner = node.arg

    if node.name == "sin":
        return BinaryOp("*", Function("cos", clone(inner)), derivative(inner, var))

    if node.name == "cos":
        neg_sin = BinaryOp("*", Number(-1.0), Function("sin", clone(inner)))
        return BinaryOp("*", neg_sin, derivative(inner, var))

    if node.name == "log":
        return BinaryOp("/", derivative(inner, var), clone(inner))

    if node.name == "sqrt":
        return BinaryOp(
            "/",
            derivative(inner, var),
            BinaryOp("*", Number(2.0), Function("sqrt", clone(inner))),
        )

    raise UnsupportedDerivativeError(f"Unknown function in derivative: {node.name}")
