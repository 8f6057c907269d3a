"""Sampling a formula session for plotting.

Produces the curve samples, the evenly spread evaluation points and the
tangent line at each point. Non-finite samples are stored as NaN, which the
renderer draws as gaps.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from . import config
from .expression import evaluate
from .expression.nodes import Node
from .session import FormulaSession
from .types import ErrorKind
from .types import ValidationError
from .utils.formatting import format_fixed


@dataclass(frozen=True)
class CurveSamples:
    xs: np.ndarray
    ys: np.ndarray

    @property
    def finite_mask(self) -> np.ndarray:
        return np.isfinite(self.ys)


@dataclass(frozen=True)
class TangentLine:
    """Tangent to the curve at ``dot``.

    Attributes:
        dot: x coordinate of the point of tangency
        value: f(dot)
        slope: f'(dot)
        intercept: f(dot) - slope * dot
        label: "y = {slope}x + {intercept}" with fixed decimals
        ys: Tangent line sampled on the curve's x grid
    """

    dot: float
    value: float
    slope: float
    intercept: float
    label: str
    ys: np.ndarray

    def at(self, x):
        return self.slope * x + self.intercept


@dataclass(frozen=True)
class GraphData:
    """Everything the renderer needs for one session and point count."""

    session: FormulaSession
    curve: CurveSamples
    tangents: list[TangentLine]

    @property
    def points(self) -> list[float]:
        return [tangent.dot for tangent in self.tangents]


def curve_grid(
    x_min: float | None = None,
    x_max: float | None = None,
    step: float | None = None,
) -> np.ndarray:
    """Evenly spaced x values from ``x_min`` to ``x_max`` inclusive."""
    x_min = config.CURVE_X_MIN if x_min is None else x_min
    x_max = config.CURVE_X_MAX if x_max is None else x_max
    step = config.CURVE_STEP if step is None else step
    if step <= 0 or x_max <= x_min:
        raise ValueError(f"Invalid sampling grid [{x_min}, {x_max}] step {step}")
    count = int(round((x_max - x_min) / step)) + 1
    return np.linspace(x_min, x_max, count)


def _as_samples(values, xs: np.ndarray) -> np.ndarray:
    ys = np.broadcast_to(np.asarray(values, dtype=float), xs.shape).copy()
    ys[~np.isfinite(ys)] = np.nan
    return ys


def sample_curve(
    node: Node, variable: str = "x", xs: np.ndarray | None = None
) -> CurveSamples:
    """Evaluate ``node`` over the sampling grid."""
    if xs is None:
        xs = curve_grid()
    return CurveSamples(xs=xs, ys=_as_samples(evaluate(node, {variable: xs}), xs))


def evaluation_points(n: int) -> list[int]:
    """``n`` points spread evenly over the dot range, rounded half up."""
    if n < 2:
        raise ValidationError(
            ErrorKind.INVALID_POINT_COUNT, f"Need at least 2 points, got {n}"
        )
    spacing = (config.DOT_X_MAX - config.DOT_X_MIN) / (n - 1)
    return [math.floor(config.DOT_X_MIN + i * spacing + 0.5) for i in range(n)]


def tangent_label(slope: float, intercept: float) -> str:
    digits = config.LABEL_PRECISION
    return f"y = {format_fixed(slope, digits)}x + {format_fixed(intercept, digits)}"


def tangent_line(
    session: FormulaSession, dot: float, xs: np.ndarray | None = None
) -> TangentLine:
    """Tangent to ``session``'s curve at ``dot``."""
    if xs is None:
        xs = curve_grid()
    value = session.f(dot)
    slope = session.f_prime(dot)
    # inf * 0 at a pole gives NaN, which becomes a gap like any other
    with np.errstate(all="ignore"):
        intercept = value - slope * dot
        ys = _as_samples(slope * xs + intercept, xs)
    return TangentLine(
        dot=float(dot),
        value=value,
        slope=slope,
        intercept=intercept,
        label=tangent_label(slope, intercept),
        ys=ys,
    )


def tangent_lines(session: FormulaSession, n: int) -> list[TangentLine]:
    xs = curve_grid()
    return [tangent_line(session, dot, xs) for dot in evaluation_points(n)]


def build_graph(session: FormulaSession, n: int) -> GraphData:
    xs = curve_grid()
    return GraphData(
        session=session,
        curve=sample_curve(session.ast, session.variable, xs),
        tangents=[tangent_line(session, dot, xs) for dot in evaluation_points(n)],
    )
