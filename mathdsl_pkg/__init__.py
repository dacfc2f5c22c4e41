"""mathdsl package: expression trees, symbolic differentiation and equation solving."""

__version__ = "1.0.0"

from . import api, config, expression, logging_config, solver, types
from .api import apply_solutions
from .api import diff
from .api import evaluate
from .api import run_statement
from .api import solve_equation

__all__ = [
    "config",
    "expression",
    "solver",
    "types",
    "api",
    "logging_config",
    "evaluate",
    "solve_equation",
    "diff",
    "run_statement",
    "apply_solutions",
]
