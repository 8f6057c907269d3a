"""DiffGraph package: formula parsing, symbolic differentiation and tangent plots."""

__version__ = "1.0.0"

from . import api, cli, config, expression, layout, logging_config, sampling, session, types
from .api import (
    derivative,
    evaluate_formula,
    plot,
    tangent_lines,
    validate_formula,
)
from .session import FormulaSession, Workspace, build_session

__all__ = [
    "config",
    "expression",
    "session",
    "sampling",
    "layout",
    "cli",
    "types",
    "api",
    "logging_config",
    "validate_formula",
    "evaluate_formula",
    "derivative",
    "tangent_lines",
    "plot",
    "FormulaSession",
    "Workspace",
    "build_session",
]
