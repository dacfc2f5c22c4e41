import logging
import math

import pytest
import sympy as sp

import mathdsl_pkg
from mathdsl_pkg.expression import Assignment
from mathdsl_pkg.expression import BinaryOp
from mathdsl_pkg.expression import Equation
from mathdsl_pkg.expression import Function
from mathdsl_pkg.expression import Number
from mathdsl_pkg.expression import Variable
from mathdsl_pkg.expression import evaluate as evaluate_tree
from mathdsl_pkg.expression import from_sympy
from mathdsl_pkg.logging_config import get_logger
from mathdsl_pkg.logging_config import setup_logging
from mathdsl_pkg.utils.formatting import format_number
from mathdsl_pkg.utils.formatting import format_solutions


def test_evaluate_result():
    result = mathdsl_pkg.evaluate(BinaryOp("+", Variable("x"), Number(1)), {"x": 2.0})
    assert result.ok
    assert result.value == 3.0


def test_evaluate_error_carries_code():
    result = mathdsl_pkg.evaluate(BinaryOp("/", Number(5), Number(0)))
    assert not result.ok
    assert result.error_code == "DIVISION_BY_ZERO"
    assert "Division by zero" in result.error


def test_solve_result():
    result = mathdsl_pkg.solve_equation(Equation(BinaryOp("^", Variable("x"), Number(2)), Number(9)))
    assert result.ok
    assert result.solutions == {"x": 3.0, "x_neg": -3.0}

    failed = mathdsl_pkg.solve_equation(
        Equation(BinaryOp("+", Variable("x"), Variable("y")), Number(1))
    )
    assert not failed.ok
    assert failed.error_code == "TOO_MANY_VARIABLES"


def test_diff_result():
    result = mathdsl_pkg.diff(BinaryOp("^", Variable("x"), Number(3)), "x")
    assert result.ok
    assert evaluate_tree(result.tree, {"x": 2.0}) == pytest.approx(12.0)
    assert result.text == "3*x^2"

    unsupported = mathdsl_pkg.diff(BinaryOp("^", Variable("x"), Variable("x")), "x")
    assert not unsupported.ok
    assert unsupported.error_code == "UNSUPPORTED_DERIVATIVE"


def test_run_statements_in_sequence():
    env = {}
    assigned = mathdsl_pkg.run_statement(Assignment("a", Number(3)), env)
    assert assigned.ok and assigned.kind == "assignment"
    assert env == {"a": 3.0}

    # a * x + 1 = 7
    solved = mathdsl_pkg.run_statement(
        Equation(BinaryOp("+", BinaryOp("*", Variable("a"), Variable("x")), Number(1)), Number(7)),
        env,
    )
    assert solved.ok and solved.kind == "equation"
    assert solved.solutions == {"x": 2.0}
    assert env == {"a": 3.0, "x": 2.0}

    value = mathdsl_pkg.run_statement(BinaryOp("*", Variable("x"), Variable("a")), env)
    assert value.ok and value.kind == "expression"
    assert value.value == 6.0


def test_failed_statement_leaves_env_unchanged():
    env = {"a": 1.0}
    bad_assign = mathdsl_pkg.run_statement(
        Assignment("b", Function("log", BinaryOp("-", Variable("a"), Number(2)))), env
    )
    assert not bad_assign.ok
    assert bad_assign.error_code == "DOMAIN_ERROR"

    no_roots = mathdsl_pkg.run_statement(
        Equation(BinaryOp("+", BinaryOp("^", Variable("x"), Number(2)), Number(1)), Number(0)), env
    )
    assert not no_roots.ok
    assert no_roots.error_code == "NO_ROOTS_FOUND"

    nested = mathdsl_pkg.run_statement(
        BinaryOp("+", Equation(Variable("x"), Number(1)), Number(1)), env
    )
    assert not nested.ok
    assert nested.error_code == "VALIDATION_ERROR"

    assert env == {"a": 1.0}


def test_apply_solutions_writes_every_name():
    env = {}
    mathdsl_pkg.apply_solutions(env, {"x": 3.0, "x_neg": -3.0})
    assert env == {"x": 3.0, "x_neg": -3.0}


def test_from_sympy_builds_an_evaluable_tree():
    x = sp.Symbol("x")
    tree = from_sympy(2 * sp.sin(x) + sp.sqrt(x) - 1)
    expected = 2 * math.sin(0.5) + math.sqrt(0.5) - 1
    assert evaluate_tree(tree, {"x": 0.5}) == pytest.approx(expected)


def test_from_sympy_equation_can_be_solved():
    x = sp.Symbol("x")
    tree = from_sympy(sp.Eq(3 * x - 2, 10))
    assert isinstance(tree, Equation)
    assert mathdsl_pkg.solve_equation(tree).solutions == pytest.approx({"x": 4.0})


def test_formatting():
    assert format_number(2.0) == "2"
    assert format_number(-1.5) == "-1.5"
    assert format_number(math.sqrt(2), precision=6) == "1.41421"
    assert format_number(math.nan) == "nan"
    assert format_solutions({"x": 3.0, "x_neg": -3.0}) == "x = 3\nx_neg = -3"


def test_loggers_are_namespaced():
    assert get_logger("solver.dispatch").name == "mathdsl.solver.dispatch"
    root = setup_logging("DEBUG")
    setup_logging("DEBUG")
    assert root.level == logging.DEBUG
    assert sum(1 for h in root.handlers if isinstance(h, logging.StreamHandler)) == 1
