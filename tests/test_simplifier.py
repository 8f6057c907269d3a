import unittest
from unittest.mock import patch

import numpy as np

from diffgraph_pkg import config
from diffgraph_pkg.expression import (
    evaluate,
    format_expression,
    parse_formula,
    simplify,
)
from diffgraph_pkg.expression.nodes import Constant, Variable, add, div, mul


def simplified(text):
    return format_expression(simplify(parse_formula(text)))


class TestIdentities(unittest.TestCase):
    def test_additive_identities(self):
        self.assertEqual(simplified("x + 0"), "x")
        self.assertEqual(simplified("0 + x"), "x")
        self.assertEqual(simplified("x - 0"), "x")
        self.assertEqual(simplified("0 - x"), "-x")

    def test_multiplicative_identities(self):
        self.assertEqual(simplified("x * 1"), "x")
        self.assertEqual(simplified("1 * x"), "x")
        self.assertEqual(simplified("x / 1"), "x")

    def test_multiplication_by_zero(self):
        self.assertEqual(simplified("x * 0"), "0")
        self.assertEqual(simplified("0 * sin(x)"), "0")

    def test_power_identities(self):
        self.assertEqual(simplified("x ^ 1"), "x")
        self.assertEqual(simplified("x ^ 0"), "1")

    def test_double_negation(self):
        self.assertEqual(simplified("--x"), "x")
        self.assertEqual(simplified("0 - -x"), "x")

    def test_zero_numerator_kept(self):
        # 0/x is NaN at x = 0, so it is not rewritten
        self.assertEqual(simplified("0 / x"), "0 / x")


class TestConstantFolding(unittest.TestCase):
    def test_arithmetic(self):
        self.assertEqual(simplified("2 + 3 * 4"), "14")
        self.assertEqual(simplified("2 ^ 10"), "1024")
        self.assertEqual(simplified("1 / 4"), "0.25")

    def test_negated_constant(self):
        self.assertEqual(simplify(parse_formula("-3")), Constant(-3.0))

    def test_zero_to_the_zero(self):
        self.assertEqual(simplified("0 ^ 0"), "1")

    def test_function_of_constants(self):
        self.assertEqual(simplified("sin(0)"), "0")
        self.assertEqual(simplified("log(4, 2) * x"), "2 * x")

    def test_nested_constant_subtrees(self):
        self.assertEqual(simplified("x * (3 - 2)"), "x")
        self.assertEqual(simplified("(1 + 1) * x + (2 - 2)"), "2 * x")

    def test_non_finite_results_not_folded(self):
        self.assertEqual(simplified("1 / 0"), "1 / 0")
        self.assertEqual(simplified("log(0)"), "log(0)")
        self.assertEqual(simplified("sqrt(-1)"), "sqrt(-1)")

    def test_non_finite_tree_keeps_its_value(self):
        tree = simplify(parse_formula("1 / 0 + x"))
        self.assertEqual(evaluate(tree, {"x": 1.0}), float("inf"))


class TestProperties(unittest.TestCase):
    FORMULAS = [
        "x^2 * 1 + 0",
        "sin(x) * cos(0) - 0 * x",
        "(x + 0) ^ (2 - 1)",
        "exp(-(-x)) / 1",
        "x^x + 2^x",
        "log(x + 0, 2 + 0)",
        "-(-(-x))",
    ]

    def test_idempotent(self):
        for text in self.FORMULAS:
            with self.subTest(text=text):
                once = simplify(parse_formula(text))
                self.assertEqual(simplify(once), once)

    def test_preserves_values(self):
        xs = np.array([0.5, 1.0, 1.7, 3.2])
        for text in self.FORMULAS:
            with self.subTest(text=text):
                tree = parse_formula(text)
                np.testing.assert_allclose(
                    evaluate(simplify(tree), {"x": xs}),
                    evaluate(tree, {"x": xs}),
                    rtol=1e-12,
                )

    def test_input_not_mutated(self):
        tree = add(mul(Variable("x"), Constant(1.0)), Constant(0.0))
        simplify(tree)
        self.assertEqual(tree, add(mul(Variable("x"), Constant(1.0)), Constant(0.0)))

    def test_already_simple_tree_returned_equal(self):
        tree = div(Variable("x"), add(Variable("x"), Constant(1.0)))
        self.assertEqual(simplify(tree), tree)


class TestPassLimit(unittest.TestCase):
    def test_stops_at_pass_limit_and_warns(self):
        # one pass turns 0 - -x into --x; the second would reach x
        with patch.object(config, "SIMPLIFY_MAX_PASSES", 1):
            with self.assertLogs("diffgraph.expression.simplifier", "WARNING") as cm:
                result = simplify(parse_formula("0 - -x"))
        self.assertEqual(format_expression(result), "-(-x)")
        self.assertIn("stopped after 1 passes", cm.output[0])
        self.assertIn("(3 nodes, depth 3 left)", cm.output[0])


if __name__ == "__main__":
    unittest.main()
