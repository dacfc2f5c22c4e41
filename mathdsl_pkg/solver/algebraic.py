"""Exact, non-iterative equation solving.

Two strategies live here:

- Linear extraction: rewrite a tree as sum(coeff_i * var_i) + constant and
  solve it directly when exactly one variable remains.
- Power shortcut: closed-form roots of ``v ^ N = c``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from dataclasses import field

import numpy as np

from ..expression.nodes import BinaryOp
from ..expression.nodes import Equation
from ..expression.nodes import Function
from ..expression.nodes import Node
from ..expression.nodes import Number
from ..expression.nodes import Variable
from ..expression.nodes import clone
from ..types import DivisionByZeroError
from ..types import InfiniteSolutionsError
from ..types import NoSolutionError
from ..types import NonLinearError
from ..types import NotAPowerEquationError
from ..types import TooManyVariablesError
from ..types import ValidationError


@dataclass
class LinearForm:
    """sum(coefficients[v] * v) + constant"""

    coefficients: dict[str, float] = field(default_factory=dict)
    constant: float = 0.0

    @property
    def is_constant(self) -> bool:
        return not self.coefficients

    def scaled(self, factor: float) -> LinearForm:
        return LinearForm(
            {name: coeff * factor for name, coeff in self.coefficients.items()},
            self.constant * factor,
        )

    def combined(self, other: LinearForm, sign: float = 1.0) -> LinearForm:
        coefficients = dict(self.coefficients)
        for name, coeff in other.coefficients.items():
            coefficients[name] = coefficients.get(name, 0.0) + sign * coeff
        return LinearForm(coefficients, self.constant + sign * other.constant)


def extract_linear(node: Node) -> LinearForm:
    """Rewrite a tree as a linear form.

    Args:
        node: Expression tree

    Returns:
        LinearForm with one coefficient per variable plus a constant. A
        variable that cancels out keeps a 0.0 coefficient.

    Raises:
        NonLinearError: Product of two non-constant sides, variable divisor,
            any power or function
        DivisionByZeroError: Division by a side that is the constant 0
    """
    if isinstance(node, Number):
        return LinearForm({}, node.value)

    if isinstance(node, Variable):
        return LinearForm({node.name: 1.0}, 0.0)

    if isinstance(node, BinaryOp):
        if node.op == "^":
            raise NonLinearError("Power terms are not linear")
        left = extract_linear(node.left)
        right = extract_linear(node.right)

        if node.op == "+":
            return left.combined(right)
        if node.op == "-":
            return left.combined(right, sign=-1.0)
        if node.op == "*":
            if left.is_constant:
                return right.scaled(left.constant)
            if right.is_constant:
                return left.scaled(right.constant)
            raise NonLinearError("Non-linear multiplication detected")
        if node.op == "/":
            if not right.is_constant:
                raise NonLinearError("Non-linear division detected")
            if right.constant == 0:
                raise DivisionByZeroError()
            return LinearForm(
                {name: coeff / right.constant for name, coeff in left.coefficients.items()},
                left.constant / right.constant,
            )
        raise NonLinearError(f"Unsupported operator in linear solver: {node.op}")

    if isinstance(node, Function):
        raise NonLinearError(f"Non-linear function in linear solver: {node.name}")

    raise NonLinearError(f"Unsupported node in linear solver: {type(node).__name__}")


def solve_linear(equation: Equation) -> dict[str, float]:
    """Solve lhs = rhs exactly when it is linear in a single variable.

    Raises:
        NonLinearError: From extract_linear
        TooManyVariablesError: More than one variable survives extraction
        NoSolutionError: Coefficient is 0 and the residual constant is not
        InfiniteSolutionsError: Coefficient and residual constant are both 0
    """
    if not isinstance(equation, Equation):
        raise ValidationError("Node is not an equation")
    form = extract_linear(BinaryOp("-", clone(equation.lhs), clone(equation.rhs)))

    if len(form.coefficients) > 1:
        raise TooManyVariablesError(list(form.coefficients))
    if not form.coefficients:
        if form.constant == 0:
            raise InfiniteSolutionsError("Equation holds for every value")
        raise NoSolutionError("No variables to solve for")

    (name, coeff), = form.coefficients.items()
    if coeff == 0:
        if form.constant == 0:
            raise InfiniteSolutionsError(f"Equation holds for every {name}")
        raise NoSolutionError(f"Coefficient of {name} is zero, no solution")
    return {name: -form.constant / coeff}


def _power_side(node: Node, var: str) -> float | None:
    if (
        isinstance(node, BinaryOp)
        and node.op == "^"
        and isinstance(node.left, Variable)
        and node.left.name == var
        and isinstance(node.right, Number)
    ):
        return node.right.value
    return None


def solve_power_equation(equation: Equation, var: str) -> dict[str, float]:
    """Closed-form solve of ``var ^ N = c`` (either side order).

    ``root = c ^ (1/N)`` under real exponentiation, so a non-real root is
    NaN. An even integer N adds ``<var>_neg = -root`` unless the root is 0.

    Raises:
        NotAPowerEquationError: The equation does not have that shape, or
            N is 0
    """
    exponent = _power_side(equation.lhs, var)
    other = equation.rhs
    if exponent is None:
        exponent = _power_side(equation.rhs, var)
        other = equation.lhs
    if exponent is None or not isinstance(other, Number):
        raise NotAPowerEquationError(f"Not of the form {var} ^ N = c")
    if exponent == 0:
        raise NotAPowerEquationError(f"{var} ^ 0 has no unique root")

    with np.errstate(all="ignore"):
        root = float(np.power(np.float64(other.value), 1.0 / np.float64(exponent)))

    solutions = {var: root}
    if math.isfinite(exponent) and exponent.is_integer() and int(exponent) % 2 == 0:
        if root != 0:
            solutions[f"{var}_neg"] = -root
    return solutions
