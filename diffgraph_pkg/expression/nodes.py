"""AST node types for single-variable formulas.

Nodes are frozen dataclasses, so a tree can never be modified after it is
built and two trees compare equal exactly when they have the same structure.
The differentiator and simplifier always build new trees; the tree a session
was parsed from stays valid for as many evaluations as the plot needs.

Key Classes:
    - UnaryOperator / BinaryOperator: operator tags
    - Constant, Variable, UnaryOp, BinaryOp, Call: the closed set of variants
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class UnaryOperator(Enum):
    """Prefix operators."""

    NEG = "-"


class BinaryOperator(Enum):
    """Infix operators, valued by their source spelling."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"


@dataclass(frozen=True)
class Constant:
    """Numeric literal (or folded named constant such as ``pi``)."""

    value: float


@dataclass(frozen=True)
class Variable:
    """Reference to a bound variable."""

    name: str


@dataclass(frozen=True)
class UnaryOp:
    op: UnaryOperator
    operand: Node


@dataclass(frozen=True)
class BinaryOp:
    op: BinaryOperator
    left: Node
    right: Node


@dataclass(frozen=True)
class Call:
    """Application of a registered function to its arguments."""

    function: str
    args: tuple[Node, ...]


Node = Union[Constant, Variable, UnaryOp, BinaryOp, Call]


def children(node: Node) -> tuple[Node, ...]:
    """Direct sub-nodes of ``node``, left to right."""
    if isinstance(node, UnaryOp):
        return (node.operand,)
    if isinstance(node, BinaryOp):
        return (node.left, node.right)
    if isinstance(node, Call):
        return node.args
    return ()


def count_nodes(node: Node) -> int:
    """Count total nodes in this subtree."""
    return 1 + sum(count_nodes(child) for child in children(node))


def depth(node: Node) -> int:
    """Calculate depth of this subtree."""
    subs = children(node)
    if not subs:
        return 1
    return 1 + max(depth(child) for child in subs)


def free_variables(node: Node) -> frozenset[str]:
    """Names of all variables referenced anywhere in ``node``."""
    names = set()
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, Variable):
            names.add(current.name)
        stack.extend(children(current))
    return frozenset(names)


def depends_on(node: Node, name: str) -> bool:
    """Whether ``node`` references the variable ``name``."""
    return name in free_variables(node)


def is_constant(node: Node, value: float | None = None) -> bool:
    """Whether ``node`` is a literal, optionally a literal equal to ``value``."""
    if not isinstance(node, Constant):
        return False
    return value is None or node.value == value


# Shorthand constructors used by the differentiation rules
def add(left: Node, right: Node) -> BinaryOp:
    return BinaryOp(BinaryOperator.ADD, left, right)


def sub(left: Node, right: Node) -> BinaryOp:
    return BinaryOp(BinaryOperator.SUB, left, right)


def mul(left: Node, right: Node) -> BinaryOp:
    return BinaryOp(BinaryOperator.MUL, left, right)


def div(left: Node, right: Node) -> BinaryOp:
    return BinaryOp(BinaryOperator.DIV, left, right)


def pow_(base: Node, exponent: Node) -> BinaryOp:
    return BinaryOp(BinaryOperator.POW, base, exponent)


def neg(operand: Node) -> UnaryOp:
    return UnaryOp(UnaryOperator.NEG, operand)


def call(function: str, *args: Node) -> Call:
    return Call(function, tuple(args))
