"""Front-end facing API.

The engine itself raises ``MathDSLError`` subclasses. These wrappers catch
them and return result objects with ``ok``/``error``/``error_code`` so a
REPL or script runner can report a failed statement and keep going.
"""

from __future__ import annotations

from typing import MutableMapping

from .expression.derivative import derivative
from .expression.evaluator import evaluate as _evaluate
from .expression.nodes import Assignment
from .expression.nodes import Equation
from .expression.nodes import Node
from .expression.nodes import validate_tree
from .logging_config import get_logger
from .solver.dispatch import solve_equation as _solve_equation
from .types import DiffResult
from .types import EvalResult
from .types import MathDSLError
from .types import SolutionSet
from .types import SolveResult
from .types import StatementResult
from .utils.formatting import format_tree

logger = get_logger("api")


def evaluate(node: Node, env: MutableMapping[str, float] | None = None) -> EvalResult:
    """Evaluate an expression tree and wrap the outcome."""
    try:
        validate_tree(node)
        value = _evaluate(node, env or {})
    except MathDSLError as e:
        return EvalResult(ok=False, error=str(e), error_code=e.error_code)
    return EvalResult(ok=True, value=value)


def solve_equation(
    node: Node, env: MutableMapping[str, float] | None = None
) -> SolveResult:
    """Solve an equation tree and wrap the outcome. env is not modified."""
    try:
        solutions = _solve_equation(node, env or {})
    except MathDSLError as e:
        return SolveResult(ok=False, error=str(e), error_code=e.error_code)
    return SolveResult(ok=True, solutions=solutions)


def diff(node: Node, var: str, pretty: bool = True) -> DiffResult:
    """Differentiate a tree and render the result.

    Args:
        node: Expression or Equation tree
        var: Variable to differentiate by
        pretty: Simplify the rendering through SymPy

    Returns:
        DiffResult with the derivative tree and its text form
    """
    try:
        validate_tree(node)
        result = derivative(node, var)
    except MathDSLError as e:
        return DiffResult(ok=False, error=str(e), error_code=e.error_code)
    return DiffResult(ok=True, tree=result, text=format_tree(result, pretty=pretty))


def apply_solutions(env: MutableMapping[str, float], solutions: SolutionSet) -> None:
    """Write every solution identifier into the environment."""
    for name, value in solutions.items():
        env[name] = value


def run_statement(node: Node, env: MutableMapping[str, float]) -> StatementResult:
    """Run one top-level statement against an environment.

    - Assignment: evaluate the right-hand side and bind the name
    - Equation: solve it and bind every solution identifier
    - anything else: evaluate it

    A failing statement leaves env exactly as it was.
    """
    if isinstance(node, Assignment):
        kind = "assignment"
    elif isinstance(node, Equation):
        kind = "equation"
    else:
        kind = "expression"

    try:
        validate_tree(node)
        if isinstance(node, Assignment):
            value = _evaluate(node.expr, env)
            env[node.name] = value
            return StatementResult(
                ok=True, kind=kind, value=value, bindings={node.name: value}
            )
        if isinstance(node, Equation):
            solutions = _solve_equation(node, env)
            apply_solutions(env, solutions)
            return StatementResult(
                ok=True, kind=kind, solutions=solutions, bindings=dict(solutions)
            )
        return StatementResult(ok=True, kind=kind, value=_evaluate(node, env))
    except MathDSLError as e:
        logger.info(f"{kind.capitalize()} failed: {e}")
        return StatementResult(ok=False, kind=kind, error=str(e), error_code=e.error_code)
    except (ArithmeticError, TypeError, ValueError) as e:
        logger.error(f"Unexpected error running {kind}", exc_info=True)
        return StatementResult(
            ok=False, kind=kind, error=f"Unexpected error: {e}", error_code="INTERNAL_ERROR"
        )
