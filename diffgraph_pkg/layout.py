"""Grid layout for the tangent subplots.

The layout depends only on the number of points: ``rows = ceil(n / 3)``
rows of three cells, each cell's domain expressed as fractions of the figure
(0 at the left/bottom edge, 1 at the right/top edge).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from . import config


@dataclass(frozen=True)
class SubplotCell:
    """Placement of one subplot.

    Attributes:
        index: Position in reading order (left to right, top to bottom)
        row, col: Grid coordinates, row 0 at the top
        x_domain: (left, right) figure fractions
        y_domain: (bottom, top) figure fractions
    """

    index: int
    row: int
    col: int
    x_domain: tuple[float, float]
    y_domain: tuple[float, float]

    @property
    def rect(self) -> tuple[float, float, float, float]:
        """(left, bottom, width, height) as matplotlib's add_axes expects."""
        left, right = self.x_domain
        bottom, top = self.y_domain
        return (left, bottom, right - left, top - bottom)


@dataclass(frozen=True)
class GridLayout:
    rows: int
    cols: int
    cells: list[SubplotCell]
    width_px: int
    height_px: int
    title_offset: float = config.TITLE_OFFSET
    label_offset: float = config.LABEL_OFFSET

    def figsize(self, dpi: int | None = None) -> tuple[float, float]:
        """Figure size in inches for the given dpi."""
        dpi = dpi or config.FIGURE_DPI
        return (self.width_px / dpi, self.height_px / dpi)


def clamp_point_count(value) -> int:
    """Coerce user input to a point count in [MIN_POINTS, MAX_POINTS].

    Unparsable input (and 0) falls back to the minimum.
    """
    try:
        count = int(float(value))
    except (TypeError, ValueError, OverflowError):
        count = 0
    if not count:
        count = config.MIN_POINTS
    return max(config.MIN_POINTS, min(config.MAX_POINTS, count))


def compute_layout(n: int) -> GridLayout:
    """Lay out ``n`` subplots in rows of ``GRID_COLUMNS``."""
    cols = config.GRID_COLUMNS
    pad = config.CELL_PADDING
    rows = math.ceil(n / cols)
    cells = []
    for i in range(n):
        row, col = divmod(i, cols)
        x_domain = (col / cols + pad, (col + 1) / cols - pad)
        y_domain = (1 - (row + 1) / rows + pad, 1 - row / rows - pad)
        cells.append(SubplotCell(i, row, col, x_domain, y_domain))
    return GridLayout(
        rows=rows,
        cols=cols,
        cells=cells,
        width_px=config.FIGURE_WIDTH_PX,
        height_px=config.ROW_HEIGHT_PX * rows,
    )
