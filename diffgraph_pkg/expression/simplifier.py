"""Algebraic simplification of formula ASTs.

Each pass rebuilds the tree bottom-up, applying constant folding and identity
elimination at every node. Passes repeat until one leaves the tree unchanged,
which makes ``simplify`` idempotent, or until ``SIMPLIFY_MAX_PASSES`` is hit.

Folding only happens when the folded value is finite: ``1/0`` stays a
division so the formatter never has to spell ``inf``.
"""

from __future__ import annotations

import math

from .. import config
from ..logging_config import get_logger
from .evaluator import evaluate
from .nodes import BinaryOp
from .nodes import BinaryOperator
from .nodes import Call
from .nodes import Constant
from .nodes import Node
from .nodes import UnaryOp
from .nodes import count_nodes
from .nodes import depth
from .nodes import is_constant
from .nodes import neg

logger = get_logger("expression.simplifier")


def simplify(node: Node) -> Node:
    """Return a simplified tree that evaluates like ``node``."""
    current = node
    for _ in range(config.SIMPLIFY_MAX_PASSES):
        rewritten = _rewrite(current)
        if rewritten == current:
            return rewritten
        current = rewritten

    logger.warning(
        "Simplifier stopped after %d passes (%d nodes, depth %d left)",
        config.SIMPLIFY_MAX_PASSES,
        count_nodes(current),
        depth(current),
    )
    return current


def _fold(node: Node) -> Node:
    """Replace an all-constant node by its value when that value is finite."""
    value = evaluate(node, {})
    if math.isfinite(value):
        return Constant(value)
    return node


def _rewrite(node: Node) -> Node:
    if isinstance(node, UnaryOp):
        operand = _rewrite(node.operand)
        if isinstance(operand, Constant):
            return _fold(neg(operand))
        if isinstance(operand, UnaryOp):
            # -(-u) -> u
            return operand.operand
        return UnaryOp(node.op, operand)

    if isinstance(node, BinaryOp):
        left = _rewrite(node.left)
        right = _rewrite(node.right)
        rebuilt = BinaryOp(node.op, left, right)
        if isinstance(left, Constant) and isinstance(right, Constant):
            return _fold(rebuilt)
        return _apply_identities(rebuilt)

    if isinstance(node, Call):
        args = tuple(_rewrite(arg) for arg in node.args)
        rebuilt = Call(node.function, args)
        if all(isinstance(arg, Constant) for arg in args):
            return _fold(rebuilt)
        return rebuilt

    return node


def _apply_identities(node: BinaryOp) -> Node:
    left, right = node.left, node.right

    if node.op == BinaryOperator.ADD:
        if is_constant(right, 0):
            return left
        if is_constant(left, 0):
            return right

    elif node.op == BinaryOperator.SUB:
        if is_constant(right, 0):
            return left
        if is_constant(left, 0):
            return neg(right)

    elif node.op == BinaryOperator.MUL:
        if is_constant(left, 0) or is_constant(right, 0):
            return Constant(0.0)
        if is_constant(right, 1):
            return left
        if is_constant(left, 1):
            return right

    elif node.op == BinaryOperator.DIV:
        if is_constant(right, 1):
            return left

    elif node.op == BinaryOperator.POW:
        if is_constant(right, 0):
            return Constant(1.0)
        if is_constant(right, 1):
            return left

    return node
