import math
import unittest
from unittest.mock import patch

from diffgraph_pkg import config
from diffgraph_pkg.expression import parse, parse_formula, tokenize
from diffgraph_pkg.expression.lexer import Token, TokenKind
from diffgraph_pkg.expression.nodes import (
    Call,
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
from diffgraph_pkg.expression.parser import Parser
from diffgraph_pkg.types import ErrorKind, ParseError

X = Variable("x")


def c(value):
    return Constant(float(value))


class TestPrecedence(unittest.TestCase):
    def test_mul_binds_tighter_than_add(self):
        self.assertEqual(parse_formula("1 + 2 * 3"), add(c(1), mul(c(2), c(3))))

    def test_parentheses_override(self):
        self.assertEqual(parse_formula("(1 + 2) * 3"), mul(add(c(1), c(2)), c(3)))

    def test_left_associative_sub_and_div(self):
        self.assertEqual(parse_formula("1 - 2 - 3"), sub(sub(c(1), c(2)), c(3)))
        self.assertEqual(parse_formula("8 / 4 / 2"), div(div(c(8), c(4)), c(2)))

    def test_power_right_associative(self):
        self.assertEqual(parse_formula("2^3^2"), pow_(c(2), pow_(c(3), c(2))))

    def test_unary_minus_looser_than_power(self):
        self.assertEqual(parse_formula("-x^2"), neg(pow_(X, c(2))))

    def test_unary_minus_tighter_than_mul(self):
        self.assertEqual(parse_formula("-2 * x"), mul(neg(c(2)), X))

    def test_negative_exponent(self):
        self.assertEqual(parse_formula("x^-1"), pow_(X, neg(c(1))))

    def test_double_negation(self):
        self.assertEqual(parse_formula("--x"), neg(neg(X)))

    def test_function_call(self):
        self.assertEqual(parse_formula("sin(x)"), call("sin", X))
        self.assertEqual(parse_formula("log(x, 2)"), Call("log", (X, c(2))))

    def test_nested_calls(self):
        self.assertEqual(
            parse_formula("exp(sin(x) ^ 2)"), call("exp", pow_(call("sin", X), c(2)))
        )

    def test_named_constants(self):
        self.assertEqual(parse_formula("pi"), Constant(math.pi))
        self.assertEqual(parse_formula("e ^ x"), pow_(Constant(math.e), X))

    def test_other_names_are_variables(self):
        self.assertEqual(parse_formula("y"), Variable("y"))

    def test_parse_accepts_token_list(self):
        self.assertEqual(parse(tokenize("x + 1")), add(X, c(1)))


class TestParseErrors(unittest.TestCase):
    def assertParseError(self, text, kind, position):
        with self.assertRaises(ParseError) as cm:
            parse_formula(text)
        self.assertEqual(cm.exception.kind, kind)
        self.assertEqual(cm.exception.position, position)
        return cm.exception

    def test_missing_operand_at_end(self):
        error = self.assertParseError("x +", ErrorKind.UNEXPECTED_TOKEN, 3)
        self.assertEqual(error.found, "end of input")
        self.assertEqual(error.expected, "expression")

    def test_implicit_multiplication_rejected(self):
        error = self.assertParseError("2x", ErrorKind.UNEXPECTED_TOKEN, 1)
        self.assertEqual(error.found, "'x'")

    def test_adjacent_parentheses_rejected(self):
        self.assertParseError("(x)(x)", ErrorKind.UNEXPECTED_TOKEN, 3)

    def test_unknown_function(self):
        error = self.assertParseError("foo(x)", ErrorKind.UNKNOWN_FUNCTION, 0)
        self.assertIn("foo", str(error))

    def test_unknown_function_inside_expression(self):
        self.assertParseError("1 + bar(x)", ErrorKind.UNKNOWN_FUNCTION, 4)

    def test_unclosed_parenthesis(self):
        self.assertParseError("(x + 1", ErrorKind.UNBALANCED_PARENTHESIS, 6)

    def test_extra_closing_parenthesis(self):
        self.assertParseError("x + 1)", ErrorKind.UNBALANCED_PARENTHESIS, 5)

    def test_wrong_argument_count(self):
        self.assertParseError("sin(x, 2)", ErrorKind.ARITY_MISMATCH, 0)
        self.assertParseError("log(x, 2, 3)", ErrorKind.ARITY_MISMATCH, 0)

    def test_missing_argument_separator(self):
        self.assertParseError("log(x 2)", ErrorKind.UNEXPECTED_TOKEN, 6)

    def test_function_name_without_call(self):
        self.assertParseError("sin + 1", ErrorKind.UNEXPECTED_TOKEN, 4)

    def test_empty_input(self):
        self.assertParseError("", ErrorKind.UNEXPECTED_TOKEN, 0)

    def test_empty_parentheses(self):
        self.assertParseError("()", ErrorKind.UNEXPECTED_TOKEN, 1)

    def test_trailing_comma_in_call(self):
        self.assertParseError("log(x,)", ErrorKind.UNEXPECTED_TOKEN, 6)

    def test_nesting_limit(self):
        text = "(" * 150 + "x" + ")" * 150
        with self.assertRaises(ParseError) as cm:
            parse_formula(text)
        self.assertEqual(cm.exception.kind, ErrorKind.TOO_DEEP)

    def test_nesting_limit_configurable(self):
        with patch.object(config, "MAX_EXPRESSION_DEPTH", 3):
            parse_formula("((x))")
            with self.assertRaises(ParseError):
                parse_formula("(((x)))")

    def test_token_stream_must_end(self):
        with self.assertRaises(ValueError):
            Parser([Token(TokenKind.IDENTIFIER, "x", 0)])


if __name__ == "__main__":
    unittest.main()
