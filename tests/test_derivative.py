import math

import pytest
import sympy as sp

from mathdsl_pkg.expression import BinaryOp
from mathdsl_pkg.expression import Equation
from mathdsl_pkg.expression import Function
from mathdsl_pkg.expression import Number
from mathdsl_pkg.expression import Variable
from mathdsl_pkg.expression import clone
from mathdsl_pkg.expression import derivative
from mathdsl_pkg.expression import evaluate
from mathdsl_pkg.expression import to_sympy
from mathdsl_pkg.types import UnsupportedDerivativeError

x = Variable("x")


def test_leaves():
    assert derivative(Number(7), "x") == Number(0)
    assert derivative(Variable("x"), "x") == Number(1)
    assert derivative(Variable("y"), "x") == Number(0)


def test_second_derivative_of_cube():
    cube = BinaryOp("^", Variable("x"), Number(3))
    second = derivative(derivative(cube, "x"), "x")
    assert evaluate(second, {"x": 2.0}) == pytest.approx(12.0)


def test_power_rule_applies_chain_rule():
    # d/dx (3x + 1)^2 = 6(3x + 1)
    tree = BinaryOp("^", BinaryOp("+", BinaryOp("*", Number(3), Variable("x")), Number(1)), Number(2))
    assert evaluate(derivative(tree, "x"), {"x": 1.0}) == pytest.approx(24.0)


def test_quotient_rule():
    # d/dx x / (x + 1) = 1 / (x + 1)^2
    tree = BinaryOp("/", Variable("x"), BinaryOp("+", Variable("x"), Number(1)))
    assert evaluate(derivative(tree, "x"), {"x": 1.0}) == pytest.approx(0.25)


@pytest.mark.parametrize(
    "tree, point, expected",
    [
        (Function("sin", Variable("x")), 0.3, math.cos(0.3)),
        (Function("cos", Variable("x")), 0.3, -math.sin(0.3)),
        (Function("log", Variable("x")), 4.0, 0.25),
        (Function("sqrt", Variable("x")), 4.0, 0.25),
        (Function("sin", BinaryOp("*", Number(2), Variable("x"))), 0.1, 2 * math.cos(0.2)),
    ],
)
def test_function_rules(tree, point, expected):
    assert evaluate(derivative(tree, "x"), {"x": point}) == pytest.approx(expected)


def test_variable_exponent_is_unsupported():
    with pytest.raises(UnsupportedDerivativeError):
        derivative(BinaryOp("^", Variable("x"), Variable("x")), "x")
    with pytest.raises(UnsupportedDerivativeError):
        derivative(BinaryOp("^", Number(2), BinaryOp("+", Variable("x"), Number(0))), "x")


def test_equation_derivative_keeps_both_sides():
    eq = Equation(BinaryOp("*", Number(4), Variable("x")), Function("sin", Variable("x")))
    result = derivative(eq, "x")
    assert isinstance(result, Equation)
    assert evaluate(result.lhs, {"x": 0.0}) == 4.0
    assert evaluate(result.rhs, {"x": 0.0}) == 1.0


def test_derivative_does_not_alias_or_mutate_input():
    f = BinaryOp("*", Variable("x"), Function("sin", Variable("x")))
    before = clone(f)
    result = derivative(f, "x")
    assert f == before

    def nodes(node, seen):
        seen.append(node)
        for name in ("left", "right", "arg", "lhs", "rhs"):
            child = getattr(node, name, None)
            if child is not None:
                nodes(child, seen)
        return seen

    original_ids = {id(n) for n in nodes(f, [])}
    assert not original_ids & {id(n) for n in nodes(result, [])}


@pytest.mark.parametrize(
    "tree",
    [
        BinaryOp("*", BinaryOp("^", x, Number(2)), Function("sin", x)),
        BinaryOp("/", Function("log", x), Function("sqrt", x)),
        Function("cos", BinaryOp("^", x, Number(3))),
        BinaryOp("-", BinaryOp("/", Number(1), x), BinaryOp("*", Number(5), x)),
        Function("sqrt", BinaryOp("+", BinaryOp("^", x, Number(2)), Number(1))),
    ],
)
def test_matches_sympy_diff(tree):
    sym_x = sp.Symbol("x")
    ours = to_sympy(derivative(tree, "x"), {"x": sym_x})
    expected = sp.diff(to_sympy(tree, {"x": sym_x}), sym_x)
    assert sp.simplify(ours - expected) == 0
