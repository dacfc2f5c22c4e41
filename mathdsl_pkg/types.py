"""Exception taxonomy and result containers shared across mathdsl.

Core functions raise the specific ``MathDSLError`` subclass for each failure;
``api`` converts them into the ``*Result`` dataclasses below, carrying the
exception's ``error_code`` so front ends can branch without string matching.
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any

Environment = dict[str, float]
SolutionSet = dict[str, float]


class MathDSLError(Exception):
    """Base class for every error raised by mathdsl."""

    error_code = "MATHDSL_ERROR"


class ValidationError(MathDSLError):
    """Tree shape is not acceptable (nested statement, too deep, unknown op)."""

    error_code = "VALIDATION_ERROR"


# Evaluation errors


class EvaluationError(MathDSLError):
    error_code = "EVAL_ERROR"


class UndefinedVariableError(EvaluationError):
    error_code = "UNDEFINED_VARIABLE"

    def __init__(self, name: str):
        super().__init__(f"Undefined variable: {name}")
        self.name = name


class DivisionByZeroError(EvaluationError):
    error_code = "DIVISION_BY_ZERO"

    def __init__(self, message: str = "Division by zero"):
        super().__init__(message)


class DomainError(EvaluationError):
    """log of a non-positive value or sqrt of a negative value."""

    error_code = "DOMAIN_ERROR"

    def __init__(self, function: str, value: float):
        super().__init__(f"{function} domain error: {function}({value!r}) is undefined")
        self.function = function
        self.value = value


class UnknownOperatorError(EvaluationError):
    error_code = "UNKNOWN_OPERATOR"

    def __init__(self, op: str):
        super().__init__(f"Unknown operator: {op}")
        self.op = op


class UnknownFunctionError(EvaluationError):
    error_code = "UNKNOWN_FUNCTION"

    def __init__(self, name: str):
        super().__init__(f"Unknown function: {name}")
        self.name = name


# Symbolic errors


class UnsupportedDerivativeError(MathDSLError):
    error_code = "UNSUPPORTED_DERIVATIVE"


class NonLinearError(MathDSLError):
    error_code = "NON_LINEAR"


# Solving errors


class SolveError(MathDSLError):
    error_code = "SOLVER_ERROR"


class TooManyVariablesError(SolveError):
    error_code = "TOO_MANY_VARIABLES"

    def __init__(self, variables: list[str]):
        super().__init__(
            "Can only solve single-variable equations, got: " + ", ".join(variables)
        )
        self.variables = variables


class NoSolutionError(SolveError):
    error_code = "NO_SOLUTION"


class InfiniteSolutionsError(SolveError):
    error_code = "INFINITE_SOLUTIONS"


class NoRootsFoundError(SolveError):
    error_code = "NO_ROOTS_FOUND"


class NotAPowerEquationError(SolveError):
    """Equation does not have the shape ``v ^ N = c``."""

    error_code = "NOT_A_POWER_EQUATION"


# Root finding errors


class RootFindingError(MathDSLError):
    error_code = "ROOT_FINDING_ERROR"


class InvalidBracketError(RootFindingError):
    error_code = "INVALID_BRACKET"


class DerivativeNearZeroError(RootFindingError):
    error_code = "DERIVATIVE_NEAR_ZERO"


class DidNotConvergeError(RootFindingError):
    error_code = "DID_NOT_CONVERGE"


@dataclass
class RootOutcome:
    """Outcome of a single root-finding attempt.

    Attributes:
        ok: Whether the attempt produced a root
        root: The root when ok, otherwise None
        error: The failure when not ok, otherwise None
    """

    ok: bool
    root: float | None = None
    error: MathDSLError | None = None


@dataclass
class EvalResult:
    ok: bool
    value: float | None = None
    error: str | None = None
    error_code: str | None = None


@dataclass
class SolveResult:
    ok: bool
    solutions: SolutionSet = field(default_factory=dict)
    error: str | None = None
    error_code: str | None = None


@dataclass
class DiffResult:
    ok: bool
    tree: Any = None
    text: str | None = None
    error: str | None = None
    error_code: str | None = None


@dataclass
class StatementResult:
    """Outcome of running one top-level statement.

    Attributes:
        ok: Whether the statement succeeded
        kind: "assignment", "equation" or "expression"
        value: Value of an expression or assignment
        solutions: Solution set of an equation
        bindings: Names written into the environment
        error: Error message when not ok
        error_code: Stable code of the failure
    """

    ok: bool
    kind: str
    value: float | None = None
    solutions: SolutionSet = field(default_factory=dict)
    bindings: dict[str, float] = field(default_factory=dict)
    error: str | None = None
    error_code: str | None = None
