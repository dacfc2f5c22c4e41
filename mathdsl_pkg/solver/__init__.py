from .algebraic import LinearForm
from .algebraic import extract_linear
from .algebraic import solve_linear
from .algebraic import solve_power_equation
from .dispatch import find_numeric_roots
from .dispatch import solve_equation
from .numeric import bisection
from .numeric import find_all_roots
from .numeric import newton_raphson

__all__ = [
    "solve_equation",
    "find_numeric_roots",
    "extract_linear",
    "solve_linear",
    "solve_power_equation",
    "LinearForm",
    "newton_raphson",
    "bisection",
    "find_all_roots",
]
