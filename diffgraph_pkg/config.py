"""Centralized configuration for DiffGraph.

This module defines:
- Input validation limits (length, nesting depth)
- Simplifier iteration cap
- Sampling domain and tangent point range
- Grid layout and figure geometry
- Regex patterns for the lexer

Configuration can be overridden via:
- CLI flags (see cli/app.py)
- Environment variables (prefixed with DIFFGRAPH_)
"""

import math
import os
import re

VERSION = "1.0.0"

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("DIFFGRAPH_MAX_INPUT_LENGTH", "2000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("DIFFGRAPH_MAX_EXPRESSION_DEPTH", "100")
)  # parser nesting

# Simplifier
SIMPLIFY_MAX_PASSES = int(os.getenv("DIFFGRAPH_SIMPLIFY_MAX_PASSES", "64"))

# Formula defaults
VARIABLE_NAME = os.getenv("DIFFGRAPH_VARIABLE_NAME", "x")
DEFAULT_FORMULA = os.getenv("DIFFGRAPH_DEFAULT_FORMULA", "x^2")
HISTORY_SIZE = int(os.getenv("DIFFGRAPH_HISTORY_SIZE", "50"))  # accepted formulas kept

# Sampling domain for the function curve and tangent lines
CURVE_X_MIN = float(os.getenv("DIFFGRAPH_CURVE_X_MIN", "-11"))
CURVE_X_MAX = float(os.getenv("DIFFGRAPH_CURVE_X_MAX", "11"))
CURVE_STEP = float(os.getenv("DIFFGRAPH_CURVE_STEP", "0.1"))

# Range the tangent points are spread over
DOT_X_MIN = float(os.getenv("DIFFGRAPH_DOT_X_MIN", "-10"))
DOT_X_MAX = float(os.getenv("DIFFGRAPH_DOT_X_MAX", "10"))

# Point count bounds (number of tangent subplots)
MIN_POINTS = 2
MAX_POINTS = 9
DEFAULT_POINTS = int(os.getenv("DIFFGRAPH_DEFAULT_POINTS", "3"))

# Grid layout
GRID_COLUMNS = 3
CELL_PADDING = 0.05
TITLE_OFFSET = 1.12
LABEL_OFFSET = 1.05
FIGURE_WIDTH_PX = int(os.getenv("DIFFGRAPH_FIGURE_WIDTH_PX", "1200"))
ROW_HEIGHT_PX = int(os.getenv("DIFFGRAPH_ROW_HEIGHT_PX", "450"))
FIGURE_DPI = int(os.getenv("DIFFGRAPH_FIGURE_DPI", "100"))

# Decimal places in tangent labels and annotations
LABEL_PRECISION = int(os.getenv("DIFFGRAPH_LABEL_PRECISION", "2"))

# Identifiers the parser folds into constants
NAMED_CONSTANTS = {
    "pi": math.pi,
    "e": math.e,
}

NUMBER_RE = re.compile(r"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
WHITESPACE_RE = re.compile(r"\s+")
OPERATOR_CHARS = "+-*/^"
