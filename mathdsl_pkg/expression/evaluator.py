"""Numeric evaluation of expression trees against an environment."""

from __future__ import annotations

from typing import Callable
from typing import Mapping

import numpy as np

from ..types import DivisionByZeroError
from ..types import DomainError
from ..types import UndefinedVariableError
from ..types import UnknownFunctionError
from ..types import UnknownOperatorError
from ..types import ValidationError
from .nodes import Assignment
from .nodes import BinaryOp
from .nodes import Equation
from .nodes import Function
from .nodes import Node
from .nodes import Number
from .nodes import Variable


def _real_pow(base: float, exponent: float) -> float:
    # IEEE semantics: negative base with fractional exponent is NaN, overflow is inf
    with np.errstate(all="ignore"):
        return float(np.power(np.float64(base), np.float64(exponent)))


def _apply_binary(op: str, left: float, right: float) -> float:
    if op == "+":
        return left + right
    if op == "-":
        return left - right
    if op == "*":
        return left * right
    if op == "/":
        if right == 0:
            raise DivisionByZeroError()
        with np.errstate(all="ignore"):
            return float(np.float64(left) / np.float64(right))
    if op == "^":
        return _real_pow(left, right)
    raise UnknownOperatorError(op)


def _apply_function(name: str, value: float) -> float:
    if name == "sin":
        with np.errstate(all="ignore"):
            return float(np.sin(value))
    if name == "cos":
        with np.errstate(all="ignore"):
            return float(np.cos(value))
    # NaN is not out of domain; it passes through like it does for ^
    if name == "log":
        if value <= 0:
            raise DomainError("log", value)
        with np.errstate(all="ignore"):
            return float(np.log(value))
    if name == "sqrt":
        if value < 0:
            raise DomainError("sqrt", value)
        with np.errstate(all="ignore"):
            return float(np.sqrt(value))
    raise UnknownFunctionError(name)


def evaluate(node: Node, env: Mapping[str, float]) -> float:
    """Evaluate an expression tree.

    Args:
        node: Root of an expression (not a statement)
        env: Mapping from variable names to values; never modified

    Returns:
        The value as a float. NaN and inf from ``^``, sin and cos propagate.

    Raises:
        UndefinedVariableError: A variable is not bound in env
        DivisionByZeroError: A denominator evaluates to exactly 0
        DomainError: log of a value <= 0 or sqrt of a value < 0
        UnknownOperatorError / UnknownFunctionError: Malformed node
        ValidationError: node is an Equation or Assignment
    """
    if isinstance(node, Number):
        return node.value
    if isinstance(node, Variable):
        try:
            return float(env[node.name])
        except KeyError:
            raise UndefinedVariableError(node.name) from None
    if isinstance(node, BinaryOp):
        left = evaluate(node.left, env)
        right = evaluate(node.right, env)
        return _apply_binary(node.op, left, right)
    if isinstance(node, Function):
        return _apply_function(node.name, evaluate(node.arg, env))
    if isinstance(node, (Equation, Assignment)):
        raise ValidationError(
            f"{type(node).__name__} is a statement and cannot be evaluated as a value"
        )
    raise ValidationError(f"Not an expression node: {node!r}")


def make_function(
    node: Node, variable: str, env: Mapping[str, float] | None = None
) -> Callable[[float], float]:
    """Build a one-variable real function from a tree.

    Each call evaluates against a fresh copy of env with ``variable`` bound,
    so env itself is never written to.

    Args:
        node: Expression tree
        variable: Name of the free variable
        env: Other bindings (default: none)

    Returns:
        Callable mapping x to evaluate(node, env | {variable: x})
    """
    base = dict(env) if env else {}

    def f(x: float) -> float:
        bindings = dict(base)
        bindings[variable] = float(x)
        return evaluate(node, bindings)

    return f
