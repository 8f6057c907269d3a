import math

import numpy as np
import pytest

from diffgraph_pkg.expression import (
    differentiate,
    evaluate,
    format_expression,
    parse_formula,
    simplify,
    to_latex,
)
from diffgraph_pkg.expression.nodes import (
    Constant,
    Variable,
    add,
    call,
    div,
    mul,
    neg,
    pow_,
    sub,
)
from diffgraph_pkg.utils.formatting import format_fixed, format_number

X = Variable("x")
Y = Variable("y")


@pytest.mark.parametrize(
    "node, expected",
    [
        (add(X, mul(Constant(2.0), X)), "x + 2 * x"),
        (mul(add(X, Constant(1.0)), X), "(x + 1) * x"),
        (sub(X, sub(X, Constant(1.0))), "x - (x - 1)"),
        (sub(sub(X, X), Constant(1.0)), "x - x - 1"),
        (div(X, mul(X, Constant(2.0))), "x / (x * 2)"),
        (div(div(X, Constant(2.0)), X), "x / 2 / x"),
        (pow_(pow_(X, Constant(2.0)), Constant(3.0)), "(x ^ 2) ^ 3"),
        (pow_(X, pow_(Constant(2.0), Constant(3.0))), "x ^ 2 ^ 3"),
        (pow_(neg(X), Constant(2.0)), "(-x) ^ 2"),
        (neg(pow_(X, Constant(2.0))), "-x ^ 2"),
        (pow_(X, neg(Constant(1.0))), "x ^ -1"),
        (mul(X, neg(Y)), "x * -y"),
        (neg(add(X, Y)), "-(x + y)"),
        (neg(neg(X)), "-(-x)"),
        (neg(Constant(-2.0)), "-(-2)"),
        (pow_(Constant(-1.0), X), "(-1) ^ x"),
        (call("log", X, Constant(2.0)), "log(x, 2)"),
        (call("sin", add(X, Constant(1.0))), "sin(x + 1)"),
    ],
)
def test_minimal_parentheses(node, expected):
    assert format_expression(node) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (2.0, "2"),
        (-3.0, "-3"),
        (0.5, "0.5"),
        (0.1, "0.1"),
        (1e20, "1e+20"),
        (1.5e-7, "1.5e-07"),
    ],
)
def test_number_text(value, expected):
    assert format_expression(Constant(value)) == expected


def test_non_finite_constants_reparse_to_same_value():
    for value in (math.inf, -math.inf):
        text = format_expression(Constant(value))
        assert evaluate(parse_formula(text), {}) == value
    assert math.isnan(evaluate(parse_formula(format_expression(Constant(math.nan))), {}))


def test_negative_zero_keeps_its_sign():
    assert format_expression(Constant(-0.0)) == "-0"
    assert math.copysign(1.0, evaluate(parse_formula("-0"), {})) < 0
    assert format_expression(div(Constant(1.0), Constant(-0.0))) == "1 / -0"
    assert format_expression(pow_(Constant(-0.0), X)) == "(-0) ^ x"


@pytest.mark.parametrize(
    "node",
    [
        div(Constant(1.0), Constant(-0.0)),
        div(Constant(-2.5), Constant(0.0)),
        pow_(Constant(-0.0), neg(Constant(1.0))),
        simplify(parse_formula("1 / -0")),
        simplify(parse_formula("(0 * -1) ^ -3")),
    ],
)
def test_negative_zero_round_trip(node):
    again = parse_formula(format_expression(node))
    assert evaluate(again, {}) == evaluate(node, {})
    assert math.isinf(evaluate(node, {}))


def test_simplified_negative_zero_division():
    tree = simplify(parse_formula("1 / -0"))
    assert evaluate(tree, {}) == -math.inf
    assert evaluate(parse_formula(format_expression(tree)), {}) == -math.inf


ROUND_TRIP = [
    "x^2",
    "-x^2",
    "(-x)^2",
    "2^3^2",
    "(2^3)^2",
    "x^-1",
    "1 - (x - 1)",
    "x / (2 * x)",
    "-(x + 1) * 3",
    "sin(x)^2 + cos(x)^2",
    "log(x^2 + 1, 10)",
    "exp(-x^2 / 2) / sqrt(2 * pi)",
    "x * -x",
    "--x",
    "0.1 * x + 1e-3",
    "abs(x - 0.3) ^ (1 / 3)",
]


@pytest.mark.parametrize("text", ROUND_TRIP)
def test_round_trip_evaluates_identically(text):
    tree = parse_formula(text)
    again = parse_formula(format_expression(tree))
    xs = np.linspace(-3.0, 3.0, 61)
    np.testing.assert_array_equal(
        evaluate(again, {"x": xs}), evaluate(tree, {"x": xs})
    )


@pytest.mark.parametrize("text", ROUND_TRIP)
def test_round_trip_of_derivative(text):
    d_tree = simplify(differentiate(parse_formula(text), "x"))
    again = parse_formula(format_expression(d_tree))
    xs = np.linspace(0.25, 3.0, 12)
    np.testing.assert_array_equal(
        evaluate(again, {"x": xs}), evaluate(d_tree, {"x": xs})
    )


def test_latex():
    assert to_latex(parse_formula("x^2")) == "x^{2}"
    assert to_latex(parse_formula("sin(x)")) == r"\sin{\left(x \right)}"


def test_latex_recovers_named_constants():
    assert to_latex(parse_formula("2 * pi")) == r"2 \pi"


def test_format_number_helpers():
    assert format_number(4.0) == "4"
    assert format_number(-0.0) == "0"
    assert format_number(2.5) == "2.5"


def test_format_fixed():
    assert format_fixed(4.0) == "4.00"
    assert format_fixed(-0.0) == "0.00"
    assert format_fixed(-20.0) == "-20.00"
    assert format_fixed(1 / 3, 3) == "0.333"
    assert format_fixed(math.nan) == "NaN"
    assert format_fixed(math.inf) == "Infinity"
    assert format_fixed(-math.inf) == "-Infinity"
