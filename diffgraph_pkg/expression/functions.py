"""Registry of the functions a formula may call.

Each entry bundles:
    - the numpy kernel used by the evaluator (IEEE semantics: domain errors
      give NaN, poles give inf)
    - the accepted argument count
    - the derivative rule, already combined with the chain rule
    - the SymPy equivalent used for typeset display

The parser rejects any call whose name is missing here, so the evaluator and
differentiator only ever see registered names.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np
import sympy as sp

from .nodes import Constant
from .nodes import Node
from .nodes import add
from .nodes import call
from .nodes import div
from .nodes import mul
from .nodes import neg
from .nodes import pow_
from .nodes import sub

# rule(args, d) -> derivative node, where d differentiates a sub-node
DerivativeRule = Callable[[tuple[Node, ...], Callable[[Node], Node]], Node]


@dataclass(frozen=True)
class FunctionSpec:
    """Definition of one registered function."""

    name: str
    kernel: Callable
    derivative: DerivativeRule
    sympy_func: Callable
    min_args: int = 1
    max_args: int = 1

    def accepts(self, count: int) -> bool:
        return self.min_args <= count <= self.max_args


def _log_kernel(x, base=None):
    if base is None:
        return np.log(x)
    return np.log(x) / np.log(base)


def _sympy_log(x, base=None):
    if base is None:
        return sp.log(x)
    return sp.log(x, base)


def _d_log(args, d):
    if len(args) == 2:
        # log(u, b) == log(u) / log(b)
        u, b = args
        return d(div(call("log", u), call("log", b)))
    (u,) = args
    return div(d(u), u)


def _chain(outer: Callable[[Node], Node]) -> DerivativeRule:
    """Build ``outer'(u) * du`` for a one-argument function."""

    def rule(args, d):
        (u,) = args
        return mul(outer(u), d(u))

    return rule


def _quotient_chain(denominator: Callable[[Node], Node]) -> DerivativeRule:
    """Build ``du / denominator(u)``."""

    def rule(args, d):
        (u,) = args
        return div(d(u), denominator(u))

    return rule


def _d_acos(args, d):
    (u,) = args
    return neg(div(d(u), call("sqrt", sub(Constant(1.0), pow_(u, Constant(2.0))))))


FUNCTIONS: dict[str, FunctionSpec] = {
    spec.name: spec
    for spec in (
        FunctionSpec("sin", np.sin, _chain(lambda u: call("cos", u)), sp.sin),
        FunctionSpec("cos", np.cos, _chain(lambda u: neg(call("sin", u))), sp.cos),
        FunctionSpec(
            "tan",
            np.tan,
            _quotient_chain(lambda u: pow_(call("cos", u), Constant(2.0))),
            sp.tan,
        ),
        FunctionSpec("exp", np.exp, _chain(lambda u: call("exp", u)), sp.exp),
        FunctionSpec("log", _log_kernel, _d_log, _sympy_log, min_args=1, max_args=2),
        FunctionSpec(
            "sqrt",
            np.sqrt,
            _quotient_chain(lambda u: mul(Constant(2.0), call("sqrt", u))),
            sp.sqrt,
        ),
        FunctionSpec("abs", np.abs, _chain(lambda u: call("sign", u)), sp.Abs),
        FunctionSpec("sign", np.sign, lambda args, d: Constant(0.0), sp.sign),
        FunctionSpec(
            "asin",
            np.arcsin,
            _quotient_chain(
                lambda u: call("sqrt", sub(Constant(1.0), pow_(u, Constant(2.0))))
            ),
            sp.asin,
        ),
        FunctionSpec("acos", np.arccos, _d_acos, sp.acos),
        FunctionSpec(
            "atan",
            np.arctan,
            _quotient_chain(lambda u: add(Constant(1.0), pow_(u, Constant(2.0)))),
            sp.atan,
        ),
        FunctionSpec("sinh", np.sinh, _chain(lambda u: call("cosh", u)), sp.sinh),
        FunctionSpec("cosh", np.cosh, _chain(lambda u: call("sinh", u)), sp.cosh),
        FunctionSpec(
            "tanh",
            np.tanh,
            _quotient_chain(lambda u: pow_(call("cosh", u), Constant(2.0))),
            sp.tanh,
        ),
    )
}


def get_function(name: str) -> FunctionSpec | None:
    return FUNCTIONS.get(name)
