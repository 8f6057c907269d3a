"""Matplotlib rendering of the tangent grid.

Each subplot shows the function (blue), the tangent at one evaluation point
(red) and the point itself, titled with the point's x value and the tangent
equation. Figures are created with ``matplotlib.figure.Figure`` directly so
no pyplot state is kept between renders (Streamlit reruns the page script on
every interaction).
"""

from __future__ import annotations

import numpy as np
from matplotlib.figure import Figure

from . import config
from .layout import GridLayout
from .layout import compute_layout
from .logging_config import get_logger
from .sampling import GraphData
from .sampling import build_graph
from .session import FormulaSession
from .utils.formatting import format_fixed

logger = get_logger("plotting")

CURVE_COLOR = "blue"
TANGENT_COLOR = "red"
MARKER_SIZE = 10


def _y_limits(graph: GraphData) -> tuple[float, float] | None:
    """Y range from the curve's finite samples, padded by 10%."""
    ys = graph.curve.ys[graph.curve.finite_mask]
    if ys.size == 0:
        return None
    low, high = float(np.min(ys)), float(np.max(ys))
    if low == high:
        return (low - 1.0, high + 1.0)
    pad = (high - low) * 0.1
    return (low - pad, high + pad)


def draw_graph(graph: GraphData, layout: GridLayout, dpi: int | None = None) -> Figure:
    """Draw ``graph`` on a new figure arranged by ``layout``."""
    dpi = dpi or config.FIGURE_DPI
    fig = Figure(figsize=layout.figsize(dpi), dpi=dpi)
    digits = config.LABEL_PRECISION
    y_limits = _y_limits(graph)
    xs = graph.curve.xs

    for cell, tangent in zip(layout.cells, graph.tangents):
        ax = fig.add_axes(cell.rect)
        ax.plot(xs, graph.curve.ys, color=CURVE_COLOR, linewidth=1.5, label="f(x)")
        ax.plot(xs, tangent.ys, color=TANGENT_COLOR, linewidth=1.2, label="Tangent")
        if np.isfinite(tangent.value):
            ax.plot(
                [tangent.dot],
                [tangent.value],
                marker="o",
                linestyle="none",
                color=TANGENT_COLOR,
                markersize=MARKER_SIZE,
            )

        ax.set_xlim(float(xs[0]), float(xs[-1]))
        if y_limits is not None:
            ax.set_ylim(*y_limits)
        ax.set_xlabel("x")
        ax.set_ylabel("y")
        ax.grid(True, alpha=0.3, linestyle="--")

        ax.text(
            0.5,
            layout.title_offset,
            f"x = {format_fixed(tangent.dot, digits)}",
            transform=ax.transAxes,
            ha="center",
            fontsize=12,
            color="black",
        )
        ax.text(
            0.5,
            layout.label_offset,
            tangent.label,
            transform=ax.transAxes,
            ha="center",
            fontsize=12,
            color=TANGENT_COLOR,
        )

    return fig


def render_session(session: FormulaSession, n: int, dpi: int | None = None) -> Figure:
    """Sample ``session`` at ``n`` points and draw the full grid."""
    graph = build_graph(session, n)
    layout = compute_layout(n)
    logger.debug(
        "Rendering %s with %d points on a %dx%d grid",
        session.text,
        n,
        layout.rows,
        layout.cols,
    )
    return draw_graph(graph, layout, dpi)


def save_figure(fig: Figure, path: str, dpi: int = 150) -> str:
    """Write ``fig`` to ``path`` (format from the extension)."""
    fig.savefig(path, dpi=dpi)
    logger.info("Plot saved to %s", path)
    return path
