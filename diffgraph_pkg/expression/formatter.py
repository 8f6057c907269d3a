"""Rendering formula ASTs as text, SymPy expressions and LaTeX.

``format_expression`` output is valid parser input: feeding it back through
``parse_formula`` yields a tree that evaluates exactly like the original.
Parentheses appear only where the grammar needs them.
"""

from __future__ import annotations

import math

import sympy as sp

from ..utils.formatting import format_number
from .functions import get_function
from .nodes import BinaryOp
from .nodes import BinaryOperator
from .nodes import Call
from .nodes import Constant
from .nodes import Node
from .nodes import UnaryOp
from .nodes import Variable

# Binding power of each syntactic level, loosest first
PREC_ADD = 1
PREC_MUL = 2
PREC_NEG = 3
PREC_POW = 4
PREC_ATOM = 5

_BINARY_PREC = {
    BinaryOperator.ADD: PREC_ADD,
    BinaryOperator.SUB: PREC_ADD,
    BinaryOperator.MUL: PREC_MUL,
    BinaryOperator.DIV: PREC_MUL,
    BinaryOperator.POW: PREC_POW,
}

# Minimum child precedence that needs no parentheses: (left, right)
_OPERAND_PREC = {
    PREC_ADD: (PREC_ADD, PREC_MUL),
    PREC_MUL: (PREC_MUL, PREC_NEG),
    PREC_POW: (PREC_ATOM, PREC_NEG),
}


def precedence(node: Node) -> int:
    if isinstance(node, BinaryOp):
        return _BINARY_PREC[node.op]
    if isinstance(node, UnaryOp):
        return PREC_NEG
    if isinstance(node, Constant) and math.copysign(1.0, node.value) < 0:
        # Printed with a leading minus, which re-parses as negation
        return PREC_NEG
    return PREC_ATOM


def _format_constant(value: float) -> str:
    if math.isnan(value):
        return "(0 / 0)"
    if math.isinf(value):
        return "1e999" if value > 0 else "-1e999"
    if value == 0 and math.copysign(1.0, value) < 0:
        # re-parses as -(0), which is -0.0
        return "-0"
    return format_number(value)


def _wrap(node: Node, minimum: int) -> str:
    text = format_expression(node)
    if precedence(node) < minimum:
        return f"({text})"
    return text


def format_expression(node: Node) -> str:
    """Render ``node`` as formula text using ``^`` for powers."""
    if isinstance(node, Constant):
        return _format_constant(node.value)

    if isinstance(node, Variable):
        return node.name

    if isinstance(node, UnaryOp):
        operand = _wrap(node.operand, PREC_NEG)
        if operand.startswith("-"):
            operand = f"({operand})"
        return f"-{operand}"

    if isinstance(node, BinaryOp):
        left_min, right_min = _OPERAND_PREC[_BINARY_PREC[node.op]]
        left = _wrap(node.left, left_min)
        right = _wrap(node.right, right_min)
        return f"{left} {node.op.value} {right}"

    if isinstance(node, Call):
        args = ", ".join(format_expression(arg) for arg in node.args)
        return f"{node.function}({args})"

    raise TypeError(f"Not an expression node: {node!r}")


def _constant_to_sympy(value: float) -> sp.Expr:
    if not math.isfinite(value):
        return sp.Float(value)
    if float(value).is_integer():
        return sp.Integer(int(value))
    # Recover pi, e and short fractions for display; fall back to a float
    try:
        nice = sp.nsimplify(value, [sp.pi, sp.E], tolerance=1e-12)
        if abs(float(nice) - value) < 1e-12 and sp.count_ops(nice) <= 3:
            return nice
    except (TypeError, ValueError):
        pass
    return sp.Float(value)


def to_sympy(node: Node, symbols: dict[str, sp.Symbol] | None = None) -> sp.Expr:
    """Convert this tree to a SymPy expression (for typeset display)."""
    if symbols is None:
        symbols = {}

    if isinstance(node, Constant):
        return _constant_to_sympy(node.value)

    if isinstance(node, Variable):
        return symbols.get(node.name, sp.Symbol(node.name))

    if isinstance(node, UnaryOp):
        return -to_sympy(node.operand, symbols)

    if isinstance(node, BinaryOp):
        left = to_sympy(node.left, symbols)
        right = to_sympy(node.right, symbols)
        if node.op == BinaryOperator.ADD:
            return left + right
        if node.op == BinaryOperator.SUB:
            return left - right
        if node.op == BinaryOperator.MUL:
            return left * right
        if node.op == BinaryOperator.DIV:
            return left / right
        return left**right

    if isinstance(node, Call):
        spec = get_function(node.function)
        if spec is None:
            raise ValueError(f"No SymPy equivalent for: {node.function}")
        return spec.sympy_func(*(to_sympy(arg, symbols) for arg in node.args))

    raise TypeError(f"Not an expression node: {node!r}")


def to_latex(node: Node) -> str:
    return sp.latex(to_sympy(node))
