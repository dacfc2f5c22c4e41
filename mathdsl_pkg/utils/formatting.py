from __future__ import annotations

import math

import sympy as sp

from ..config import OUTPUT_PRECISION
from ..expression.nodes import Node
from ..expression.nodes import to_string
from ..expression.sympy_bridge import to_sympy
from ..logging_config import get_logger
from ..types import MathDSLError

logger = get_logger("utils.formatting")


def format_number(value: float, precision: int = OUTPUT_PRECISION) -> str:
    """Format a float without trailing zeros or a needless decimal point."""
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if abs(value - round(value)) < 10 ** (-precision) and abs(value) < 1e15:
        return str(int(round(value)))
    formatted = f"{value:.{precision}g}"
    if "e" in formatted or "." not in formatted:
        return formatted
    return formatted.rstrip("0").rstrip(".")


def format_solutions(solutions: dict[str, float], precision: int = OUTPUT_PRECISION) -> str:
    """Render a solution set one ``name = value`` per line."""
    return "\n".join(
        f"{name} = {format_number(value, precision)}" for name, value in solutions.items()
    )


def format_tree(node: Node, pretty: bool = True) -> str:
    """Render a tree, simplified through SymPy when pretty is set.

    Falls back to the raw parenthesised form when SymPy cannot handle the
    tree (for example an Assignment).
    """
    if not pretty:
        return to_string(node)
    try:
        expr = to_sympy(node)
        if isinstance(expr, sp.Equality):
            text = f"{sp.simplify(expr.lhs)} = {sp.simplify(expr.rhs)}"
        else:
            text = str(sp.simplify(expr))
        return text.replace("**", "^")
    except (MathDSLError, TypeError, ValueError) as e:
        logger.debug(f"Pretty rendering failed, using raw form: {e}")
        return to_string(node)
