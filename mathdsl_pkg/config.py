"""Centralized configuration for mathdsl.

This module defines:
- Numeric tolerances and iteration limits for the root finders
- Newton-Raphson seed points and the fallback scan interval
- Tree validation limits (depth, node count)
- Output formatting and logging defaults

Every value can be overridden via environment variables prefixed with
MATHDSL_ (e.g. MATHDSL_SCAN_STEP=0.05).
"""

import os

VERSION = "1.0.0"

# Root finding tolerances
NEWTON_TOLERANCE = float(
    os.getenv("MATHDSL_NEWTON_TOLERANCE", "1e-10")
)  # |f(x)| or |step| below this ends Newton-Raphson
BISECTION_TOLERANCE = float(
    os.getenv("MATHDSL_BISECTION_TOLERANCE", "1e-10")
)  # Bracket width / |f(mid)| below this ends bisection
ROOT_DEDUP_TOLERANCE = float(
    os.getenv("MATHDSL_ROOT_DEDUP_TOLERANCE", "1e-10")
)  # Roots closer than this are the same root

# Iteration limits
MAX_NEWTON_ITERATIONS = int(os.getenv("MATHDSL_MAX_NEWTON_ITERATIONS", "100"))
MAX_BISECTION_ITERATIONS = int(
    os.getenv("MATHDSL_MAX_BISECTION_ITERATIONS", "200")
)  # Hard stop when tolerance is below float spacing

# Numeric fallback strategy
NEWTON_SEEDS = tuple(
    float(seed)
    for seed in os.getenv("MATHDSL_NEWTON_SEEDS", "-10,-5,-1,0,1,5,10").split(",")
    if seed.strip()
)
SCAN_START = float(os.getenv("MATHDSL_SCAN_START", "-10"))
SCAN_END = float(os.getenv("MATHDSL_SCAN_END", "10"))
SCAN_STEP = float(os.getenv("MATHDSL_SCAN_STEP", "0.1"))
SOLVE_ALL_ROOTS = (
    os.getenv("MATHDSL_SOLVE_ALL_ROOTS", "true").lower() == "true"
)  # False keeps only the first root found

# Input validation limits
MAX_EXPRESSION_DEPTH = int(
    os.getenv("MATHDSL_MAX_EXPRESSION_DEPTH", "100")
)  # tree depth
MAX_EXPRESSION_NODES = int(
    os.getenv("MATHDSL_MAX_EXPRESSION_NODES", "5000")
)  # total nodes

# Output
OUTPUT_PRECISION = int(os.getenv("MATHDSL_OUTPUT_PRECISION", "10"))
LOG_LEVEL = os.getenv("MATHDSL_LOG_LEVEL", "WARNING")

BINARY_OPERATORS = frozenset({"+", "-", "*", "/", "^"})
FUNCTIONS = frozenset({"sin", "cos", "log", "sqrt"})
