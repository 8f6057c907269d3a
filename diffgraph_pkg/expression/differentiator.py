"""Symbolic differentiation of formula ASTs.

``differentiate`` is total over the node variants and always returns a new
tree; the input is never touched. The raw result is verbose (``0 * x`` terms,
``x ^ (2 - 1)``), so callers pass it through ``simplify`` before display.
"""

from __future__ import annotations

from .functions import get_function
from .nodes import BinaryOp
from .nodes import BinaryOperator
from .nodes import Call
from .nodes import Constant
from .nodes import Node
from .nodes import UnaryOp
from .nodes import Variable
from .nodes import add
from .nodes import call
from .nodes import depends_on
from .nodes import div
from .nodes import mul
from .nodes import neg
from .nodes import pow_
from .nodes import sub

ZERO = Constant(0.0)
ONE = Constant(1.0)


def differentiate(node: Node, wrt: str = "x") -> Node:
    """Return the derivative of ``node`` with respect to the variable ``wrt``.

    Args:
        node: Expression to differentiate
        wrt: Name of the variable to differentiate by; every other variable
             is treated as a constant

    Returns:
        Unsimplified derivative AST
    """

    def d(sub_node: Node) -> Node:
        return differentiate(sub_node, wrt)

    if isinstance(node, Constant):
        return ZERO

    if isinstance(node, Variable):
        return ONE if node.name == wrt else ZERO

    if isinstance(node, UnaryOp):
        return neg(d(node.operand))

    if isinstance(node, BinaryOp):
        u, v = node.left, node.right
        if node.op == BinaryOperator.ADD:
            return add(d(u), d(v))
        if node.op == BinaryOperator.SUB:
            return sub(d(u), d(v))
        if node.op == BinaryOperator.MUL:
            return add(mul(d(u), v), mul(u, d(v)))
        if node.op == BinaryOperator.DIV:
            return div(sub(mul(d(u), v), mul(u, d(v))), pow_(v, Constant(2.0)))
        return _power_rule(u, v, wrt)

    if isinstance(node, Call):
        spec = get_function(node.function)
        if spec is None:
            # Unreachable for parser output; kept total for hand-built trees
            raise ValueError(f"No derivative rule for function '{node.function}'")
        return spec.derivative(node.args, d)

    raise TypeError(f"Not an expression node: {node!r}")


def _power_rule(u: Node, v: Node, wrt: str) -> Node:
    du = differentiate(u, wrt)
    if not depends_on(v, wrt):
        # u^c -> c * u^(c-1) * du
        return mul(mul(v, pow_(u, sub(v, ONE))), du)

    dv = differentiate(v, wrt)
    if not depends_on(u, wrt):
        # c^v -> c^v * log(c) * dv
        return mul(mul(pow_(u, v), call("log", u)), dv)

    # u^v -> u^v * (dv * log(u) + v * du / u)
    return mul(pow_(u, v), add(mul(dv, call("log", u)), div(mul(v, du), u)))
