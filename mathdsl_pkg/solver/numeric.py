from __future__ import annotations

import math
from typing import Callable

import numpy as np

from ..config import BISECTION_TOLERANCE
from ..config import MAX_BISECTION_ITERATIONS
from ..config import MAX_NEWTON_ITERATIONS
from ..config import NEWTON_TOLERANCE
from ..config import ROOT_DEDUP_TOLERANCE
from ..types import DerivativeNearZeroError
from ..types import DidNotConvergeError
from ..types import EvaluationError
from ..types import InvalidBracketError
from ..types import RootFindingError
from ..types import RootOutcome

RealFunction = Callable[[float], float]


def newton_raphson(
    f: RealFunction,
    df: RealFunction,
    guess: float,
    tol: float = NEWTON_TOLERANCE,
    max_iter: int = MAX_NEWTON_ITERATIONS,
) -> float:
    """Find a root of f by Newton-Raphson iteration.

    Args:
        f: Function to find a root of
        df: Derivative of f
        guess: Starting point
        tol: Stop when |f(x)| < tol or the step is smaller than tol
        max_iter: Iteration cap

    Returns:
        The converged x

    Raises:
        DerivativeNearZeroError: |df(x)| < tol before convergence
        DidNotConvergeError: max_iter reached
    """
    x = float(guess)
    for _ in range(max_iter):
        fx = f(x)
        if abs(fx) < tol:
            return x
        dfx = df(x)
        if abs(dfx) < tol:
            raise DerivativeNearZeroError(f"Derivative too close to zero at x={x!r}")
        step = fx / dfx
        x -= step
        if abs(step) < tol:
            return x
    raise DidNotConvergeError(
        f"Newton-Raphson did not converge from {guess!r} in {max_iter} iterations"
    )


def bisection(
    f: RealFunction,
    a: float,
    b: float,
    tol: float = BISECTION_TOLERANCE,
) -> float:
    """Find a root of f inside [a, b] by repeated halving.

    Args:
        f: Continuous function with a sign change over [a, b]
        a: Lower end of the bracket
        b: Upper end of the bracket
        tol: Stop when the bracket is narrower than tol or |f(mid)| < tol

    Returns:
        Midpoint of the final bracket, or an endpoint that is an exact root

    Raises:
        InvalidBracketError: f(a) and f(b) have the same sign or either is
            not finite
    """
    a, b = float(a), float(b)
    if a > b:
        a, b = b, a
    fa = f(a)
    fb = f(b)
    if not (math.isfinite(fa) and math.isfinite(fb)):
        raise InvalidBracketError(f"Function is not finite at the ends of [{a}, {b}]")
    if fa * fb > 0:
        raise InvalidBracketError(
            "Function values at endpoints must have opposite signs"
        )
    if fa == 0:
        return a
    if fb == 0:
        return b

    for _ in range(MAX_BISECTION_ITERATIONS):
        if b - a < tol:
            break
        mid = (a + b) / 2
        fmid = f(mid)
        if abs(fmid) < tol:
            return mid
        if (fa < 0) != (fmid < 0):
            b = mid
        else:
            a, fa = mid, fmid
    return (a + b) / 2


def add_unique_root(
    roots: list[float], candidate: float, tol: float = ROOT_DEDUP_TOLERANCE
) -> bool:
    """Append candidate unless it is within tol of a root already found.

    Returns:
        True when the candidate was added
    """
    if any(abs(existing - candidate) < tol for existing in roots):
        return False
    roots.append(candidate)
    return True


def attempt_newton(
    f: RealFunction,
    df: RealFunction,
    guess: float,
    tol: float = NEWTON_TOLERANCE,
    max_iter: int = MAX_NEWTON_ITERATIONS,
) -> RootOutcome:
    """Run newton_raphson and report failure as a value instead of raising.

    Evaluation errors hit along the way (e.g. log of a negative iterate)
    count as a failed attempt, as does a non-finite result.
    """
    try:
        root = newton_raphson(f, df, guess, tol=tol, max_iter=max_iter)
    except (RootFindingError, EvaluationError) as e:
        return RootOutcome(ok=False, error=e)
    if not math.isfinite(root):
        return RootOutcome(ok=False, error=DidNotConvergeError(f"Diverged from {guess!r}"))
    return RootOutcome(ok=True, root=root)


def attempt_bisection(
    f: RealFunction, a: float, b: float, tol: float = BISECTION_TOLERANCE
) -> RootOutcome:
    """Run bisection and report failure as a value instead of raising."""
    try:
        return RootOutcome(ok=True, root=bisection(f, a, b, tol=tol))
    except (RootFindingError, EvaluationError) as e:
        return RootOutcome(ok=False, error=e)


def _sample(f: RealFunction, x: float) -> float:
    # Points where f cannot be evaluated are gaps in the scan
    try:
        return f(x)
    except EvaluationError:
        return math.nan


def find_all_roots(
    f: RealFunction,
    start: float,
    end: float,
    step: float,
    tol: float = ROOT_DEDUP_TOLERANCE,
) -> list[float]:
    """Enumerate roots of f over [start, end] by scanning for sign changes.

    The interval is cut into round((end - start) / step) equal pieces; every
    piece whose ends satisfy f(a) * f(b) <= 0 is refined with bisection.
    Failed bisections are skipped.

    Args:
        f: Function to scan
        start: Lower end of the scan
        end: Upper end of the scan
        step: Nominal grid spacing
        tol: Roots closer than this to an earlier root are dropped

    Returns:
        Distinct roots in discovery (ascending scan) order

    Raises:
        ValueError: step <= 0 or end <= start
    """
    if step <= 0:
        raise ValueError(f"Scan step must be positive, got {step}")
    if end <= start:
        raise ValueError(f"Scan interval is empty: [{start}, {end}]")

    n_steps = max(1, int(round((end - start) / step)))
    grid = np.linspace(start, end, n_steps + 1)

    roots: list[float] = []
    prev_x = float(grid[0])
    prev_fx = _sample(f, prev_x)
    for x in grid[1:]:
        x = float(x)
        fx = _sample(f, x)
        # NaN on either side makes the product NaN, which never passes
        if prev_fx * fx <= 0:
            outcome = attempt_bisection(f, prev_x, x)
            if outcome.ok:
                add_unique_root(roots, outcome.root, tol)
        prev_x, prev_fx = x, fx
    return roots
