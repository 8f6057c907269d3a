"""Numeric evaluation of formula ASTs.

Evaluation follows IEEE-754 semantics throughout: ``1/0`` is ``inf``,
``log(-1)`` is ``nan``. Nothing numeric raises; callers that draw the result
treat non-finite values as gaps. Bindings may be scalars or numpy arrays, in
which case the whole array is evaluated in a single walk of the tree.
"""

from __future__ import annotations

from typing import Mapping
from typing import Union

import numpy as np

from ..types import ErrorKind
from ..types import EvalError
from .functions import get_function
from .nodes import BinaryOp
from .nodes import BinaryOperator
from .nodes import Call
from .nodes import Constant
from .nodes import Node
from .nodes import UnaryOp
from .nodes import Variable

Value = Union[float, np.ndarray]

BINARY_KERNELS = {
    BinaryOperator.ADD: np.add,
    BinaryOperator.SUB: np.subtract,
    BinaryOperator.MUL: np.multiply,
    BinaryOperator.DIV: np.divide,
    BinaryOperator.POW: np.power,
}


def evaluate(node: Node, bindings: Mapping[str, Value]) -> Value:
    """Evaluate ``node`` with the given variable bindings.

    Args:
        node: AST to evaluate
        bindings: Mapping of variable name to a float or array of floats

    Returns:
        A float when every binding is scalar, otherwise a float array with the
        broadcast shape of the bindings

    Raises:
        EvalError: If a variable is unbound or a call names an unknown function
    """
    values = {name: np.asarray(value, dtype=float) for name, value in bindings.items()}
    with np.errstate(all="ignore"):
        result = _evaluate(node, values)

    if np.ndim(result) == 0:
        return float(result)
    return np.asarray(result, dtype=float)


def _evaluate(node: Node, values: dict[str, np.ndarray]):
    if isinstance(node, Constant):
        return np.float64(node.value)

    if isinstance(node, Variable):
        if node.name not in values:
            raise EvalError(ErrorKind.UNBOUND_VARIABLE, node.name)
        return values[node.name]

    if isinstance(node, UnaryOp):
        return np.negative(_evaluate(node.operand, values))

    if isinstance(node, BinaryOp):
        left = _evaluate(node.left, values)
        right = _evaluate(node.right, values)
        return BINARY_KERNELS[node.op](left, right)

    if isinstance(node, Call):
        spec = get_function(node.function)
        if spec is None:
            raise EvalError(ErrorKind.UNKNOWN_FUNCTION, node.function)
        args = [_evaluate(arg, values) for arg in node.args]
        return spec.kernel(*args)

    raise TypeError(f"Not an expression node: {node!r}")
