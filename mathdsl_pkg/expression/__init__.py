from .derivative import derivative
from .evaluator import evaluate
from .evaluator import make_function
from .nodes import Assignment
from .nodes import BinaryOp
from .nodes import Equation
from .nodes import Function
from .nodes import Node
from .nodes import Number
from .nodes import Variable
from .nodes import clone
from .nodes import collect_variables
from .nodes import count_nodes
from .nodes import depth
from .nodes import substitute
from .nodes import to_string
from .nodes import unique_variables
from .nodes import validate_tree
from .sympy_bridge import from_sympy
from .sympy_bridge import to_sympy

__all__ = [
    # Tree
    "Node",
    "Number",
    "Variable",
    "BinaryOp",
    "Function",
    "Equation",
    "Assignment",
    "clone",
    "collect_variables",
    "unique_variables",
    "count_nodes",
    "depth",
    "substitute",
    "validate_tree",
    "to_string",
    # Evaluation and calculus
    "evaluate",
    "make_function",
    "derivative",
    # SymPy interop
    "to_sympy",
    "from_sympy",
]
