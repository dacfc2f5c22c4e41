import pytest

from mathdsl_pkg.expression import Assignment
from mathdsl_pkg.expression import BinaryOp
from mathdsl_pkg.expression import Equation
from mathdsl_pkg.expression import Function
from mathdsl_pkg.expression import Number
from mathdsl_pkg.expression import Variable
from mathdsl_pkg.expression import clone
from mathdsl_pkg.expression import collect_variables
from mathdsl_pkg.expression import count_nodes
from mathdsl_pkg.expression import depth
from mathdsl_pkg.expression import evaluate
from mathdsl_pkg.expression import substitute
from mathdsl_pkg.expression import unique_variables
from mathdsl_pkg.expression import validate_tree
from mathdsl_pkg.types import ValidationError


def sample_tree():
    # sin(x) * (y + x) - 3
    return BinaryOp(
        "-",
        BinaryOp(
            "*",
            Function("sin", Variable("x")),
            BinaryOp("+", Variable("y"), Variable("x")),
        ),
        Number(3),
    )


def test_collect_variables_left_to_right_with_duplicates():
    assert collect_variables(sample_tree()) == ["x", "y", "x"]
    assert unique_variables(sample_tree()) == ["x", "y"]


def test_collect_variables_on_equation_covers_both_sides():
    eq = Equation(BinaryOp("*", Number(2), Variable("a")), Variable("b"))
    assert collect_variables(eq) == ["a", "b"]


def test_clone_is_structurally_equal_but_independent():
    original = sample_tree()
    copy = clone(original)
    assert copy == original
    assert copy is not original
    assert copy.left is not original.left
    assert copy.left.left.arg is not original.left.left.arg

    env = {"x": 0.7, "y": -1.5}
    assert evaluate(copy, env) == evaluate(original, env)

    copy.right.value = 100.0
    copy.left.left.arg.name = "y"
    assert original.right.value == 3.0
    assert original.left.left.arg.name == "x"
    assert evaluate(original, env) != evaluate(copy, env)


def test_count_nodes_and_depth():
    tree = sample_tree()
    assert count_nodes(tree) == 8
    assert depth(tree) == 4
    assert depth(Number(1)) == 1


def test_substitute_replaces_only_bound_names():
    tree = substitute(sample_tree(), {"y": 2.0})
    assert collect_variables(tree) == ["x", "x"]
    assert tree.left.right.left == Number(2.0)


def test_str_renders_parenthesised_infix():
    assert str(sample_tree()) == "((sin(x) * (y + x)) - 3)"
    assert str(Equation(Variable("x"), Number(2.5))) == "x = 2.5"
    assert str(Assignment("a", Number(4))) == "a = 4"


def test_validate_tree_accepts_top_level_statements():
    validate_tree(Equation(Variable("x"), Number(1)))
    validate_tree(Assignment("x", Number(1)))


def test_validate_tree_rejects_nested_equation():
    nested = BinaryOp("+", Equation(Variable("x"), Number(1)), Number(2))
    with pytest.raises(ValidationError):
        validate_tree(nested)


def test_validate_tree_rejects_unknown_names():
    with pytest.raises(ValidationError):
        validate_tree(BinaryOp("%", Number(1), Number(2)))
    with pytest.raises(ValidationError):
        validate_tree(Function("tan", Number(1)))


def test_validate_tree_limits():
    tree = Variable("x")
    for _ in range(10):
        tree = Function("sin", tree)
    validate_tree(tree, max_depth=11)
    with pytest.raises(ValidationError):
        validate_tree(tree, max_depth=10)
    with pytest.raises(ValidationError):
        validate_tree(tree, max_nodes=5)
