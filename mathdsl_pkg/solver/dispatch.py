from __future__ import annotations

from typing import Mapping

from ..config import NEWTON_SEEDS
from ..config import NEWTON_TOLERANCE
from ..config import ROOT_DEDUP_TOLERANCE
from ..config import SCAN_END
from ..config import SCAN_START
from ..config import SCAN_STEP
from ..config import SOLVE_ALL_ROOTS
from ..expression.derivative import derivative
from ..expression.evaluator import evaluate
from ..expression.evaluator import make_function
from ..expression.nodes import BinaryOp
from ..expression.nodes import Equation
from ..expression.nodes import Node
from ..expression.nodes import substitute
from ..expression.nodes import unique_variables
from ..expression.nodes import validate_tree
from ..logging_config import get_logger
from ..types import DivisionByZeroError
from ..types import InfiniteSolutionsError
from ..types import NonLinearError
from ..types import NoRootsFoundError
from ..types import NoSolutionError
from ..types import NotAPowerEquationError
from ..types import SolutionSet
from ..types import TooManyVariablesError
from ..types import UnsupportedDerivativeError
from ..types import ValidationError
from .algebraic import solve_linear
from .algebraic import solve_power_equation
from .numeric import add_unique_root
from .numeric import attempt_newton
from .numeric import find_all_roots

logger = get_logger("solver.dispatch")


def _unknown_variable(equation: Equation, env: Mapping[str, float]) -> str | None:
    names = unique_variables(equation)
    unbound = [name for name in names if name not in env]
    if len(unbound) > 1:
        raise TooManyVariablesError(unbound)
    if unbound:
        return unbound[0]
    # Every variable is bound: re-solve when the equation names just one
    if len(names) == 1:
        return names[0]
    if len(names) > 1:
        raise TooManyVariablesError(names)
    return None


def _solve_constant_equation(equation: Equation, env: Mapping[str, float]) -> SolutionSet:
    residual = evaluate(equation.lhs, env) - evaluate(equation.rhs, env)
    if residual == 0:
        raise InfiniteSolutionsError("Equation holds with no variable to solve for")
    raise NoSolutionError("Equation is false and has no variable to solve for")


def name_roots(var: str, roots: list[float]) -> SolutionSet:
    """Name roots ``var``, ``var_1``, ``var_2``, ... in order."""
    solutions: SolutionSet = {}
    for index, root in enumerate(roots):
        solutions[var if index == 0 else f"{var}_{index}"] = root
    return solutions


def find_numeric_roots(
    residual: Node,
    var: str,
    seeds: tuple[float, ...] = NEWTON_SEEDS,
    all_roots: bool = SOLVE_ALL_ROOTS,
) -> list[float]:
    """Numerically find roots of ``residual = 0`` in one variable.

    Newton-Raphson runs from every seed and keeps each distinct converged
    root. When no seed converges, or the residual has no symbolic
    derivative, the interval [SCAN_START, SCAN_END] is scanned instead.

    Args:
        residual: Tree with ``var`` as its only variable
        var: Variable name
        seeds: Newton-Raphson starting points
        all_roots: False stops at the first root

    Returns:
        Roots in discovery order (possibly empty)
    """
    f = make_function(residual, var)
    roots: list[float] = []

    try:
        df_tree = derivative(residual, var)
    except UnsupportedDerivativeError as e:
        logger.debug(f"No symbolic derivative, skipping Newton-Raphson: {e}")
        df_tree = None

    if df_tree is not None:
        df = make_function(df_tree, var)
        for seed in seeds:
            outcome = attempt_newton(f, df, seed, tol=NEWTON_TOLERANCE)
            if not outcome.ok:
                logger.debug(f"Newton-Raphson from {seed} failed: {outcome.error}")
                continue
            add_unique_root(roots, outcome.root, ROOT_DEDUP_TOLERANCE)
            if roots and not all_roots:
                return roots

    if not roots:
        logger.debug(
            f"Scanning [{SCAN_START}, {SCAN_END}] with step {SCAN_STEP} for roots in {var}"
        )
        roots = find_all_roots(f, SCAN_START, SCAN_END, SCAN_STEP, tol=ROOT_DEDUP_TOLERANCE)
        if roots and not all_roots:
            roots = roots[:1]
    return roots


def solve_equation(
    equation: Node,
    env: Mapping[str, float] | None = None,
    all_roots: bool = SOLVE_ALL_ROOTS,
) -> SolutionSet:
    """Solve a single-variable equation.

    Strategies, in order: power shortcut (``v ^ N = c``), exact linear
    solve, multi-seed Newton-Raphson, fixed-step scan with bisection.
    Failure of an earlier strategy silently falls through to the next.

    Args:
        equation: Equation tree
        env: Bindings for the other variables; never modified
        all_roots: Return every distinct numeric root rather than the first

    Returns:
        Ordered mapping of solution names (``x``, ``x_neg``, ``x_1``, ...)
        to values

    Raises:
        ValidationError: equation is not a well-formed Equation
        TooManyVariablesError: More than one unknown
        NoSolutionError / InfiniteSolutionsError: No unknown at all
        NoRootsFoundError: Every strategy came up empty
    """
    if not isinstance(equation, Equation):
        raise ValidationError("Node is not an equation")
    validate_tree(equation)
    env = dict(env) if env else {}

    var = _unknown_variable(equation, env)
    if var is None:
        return _solve_constant_equation(equation, env)

    bindings = {name: value for name, value in env.items() if name != var}
    bound = substitute(equation, bindings)

    try:
        solutions = solve_power_equation(bound, var)
        logger.debug(f"Solved {equation} with the power shortcut")
        return solutions
    except NotAPowerEquationError:
        pass

    try:
        solutions = solve_linear(bound)
        logger.debug(f"Solved {equation} as a linear equation")
        return solutions
    except (NonLinearError, NoSolutionError, InfiniteSolutionsError, DivisionByZeroError) as e:
        logger.debug(f"Linear solve of {equation} fell through: {e}")

    residual = BinaryOp("-", bound.lhs, bound.rhs)
    roots = find_numeric_roots(residual, var, all_roots=all_roots)
    if not roots:
        logger.info(f"No roots found for {equation}")
        raise NoRootsFoundError(
            f"No roots found for {var} in the search interval [{SCAN_START}, {SCAN_END}]"
        )
    return name_roots(var, roots)
