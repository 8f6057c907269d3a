"""Public API for DiffGraph.

Every function returns a plain dict: ``{"ok": True, "type": ..., ...}`` on
success or ``{"ok": False, "error": ..., "error_type": ..., "position": ...}``
when the formula is rejected. Nothing here raises for bad user input.
"""

from __future__ import annotations

import math
from typing import Any

from . import config
from .expression import to_latex
from .layout import clamp_point_count
from .logging_config import get_logger
from .session import FormulaSession
from .session import build_session
from .types import DiffGraphError

logger = get_logger("api")


def _number(value: float) -> float | None:
    """JSON-safe float: non-finite values become None."""
    value = float(value)
    return value if math.isfinite(value) else None


def _with_session(text: str, handler) -> dict[str, Any]:
    try:
        session = build_session(text)
    except DiffGraphError as e:
        logger.info("Formula rejected: %s", e)
        return e.to_dict()
    return handler(session)


def validate_formula(text: str) -> dict[str, Any]:
    """Check that ``text`` is an acceptable formula."""
    return _with_session(
        text, lambda s: {"ok": True, "type": "validation", "formula": s.text}
    )


def evaluate_formula(text: str, x: float) -> dict[str, Any]:
    """Evaluate the formula and its derivative at ``x``."""

    def handler(session: FormulaSession) -> dict[str, Any]:
        return {
            "ok": True,
            "type": "value",
            "formula": session.text,
            "x": float(x),
            "value": _number(session.f(x)),
            "derivative_value": _number(session.f_prime(x)),
        }

    return _with_session(text, handler)


def derivative(text: str) -> dict[str, Any]:
    """Simplified derivative of the formula, as text and LaTeX."""

    def handler(session: FormulaSession) -> dict[str, Any]:
        return {
            "ok": True,
            "type": "derivative",
            "formula": session.text,
            "derivative": session.derivative_text,
            "latex": to_latex(session.simplified_derivative),
        }

    return _with_session(text, handler)


def tangent_lines(text: str, n: Any = None) -> dict[str, Any]:
    """Tangent lines at ``n`` evenly spread points (clamped to [2, 9])."""
    from .sampling import tangent_lines as _tangent_lines

    points = clamp_point_count(config.DEFAULT_POINTS if n is None else n)

    def handler(session: FormulaSession) -> dict[str, Any]:
        tangents = [
            {
                "dot": tangent.dot,
                "value": _number(tangent.value),
                "slope": _number(tangent.slope),
                "intercept": _number(tangent.intercept),
                "label": tangent.label,
            }
            for tangent in _tangent_lines(session, points)
        ]
        return {
            "ok": True,
            "type": "tangents",
            "formula": session.text,
            "derivative": session.derivative_text,
            "points": points,
            "tangents": tangents,
        }

    return _with_session(text, handler)


def plot(text: str, n: Any = None, save_file: str = "diffgraph.png") -> dict[str, Any]:
    """Render the tangent grid for the formula and save it to ``save_file``."""
    from .plotting import render_session
    from .plotting import save_figure

    points = clamp_point_count(config.DEFAULT_POINTS if n is None else n)

    def handler(session: FormulaSession) -> dict[str, Any]:
        fig = render_session(session, points)
        try:
            path = save_figure(fig, save_file)
        except OSError as e:
            logger.warning("Could not save plot to %s", save_file, exc_info=True)
            return {
                "ok": False,
                "error": f"Could not save plot: {e}",
                "error_type": "IOError",
                "position": None,
            }
        return {"ok": True, "type": "plot", "file": path, "points": points}

    return _with_session(text, handler)
