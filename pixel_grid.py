import logging
import math
from typing import NamedTuple, Optional, Tuple

import numpy

from utilities import WHITE, BLUE, to_rgba

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Color = Tuple[int, int, int, int]


class FillRect(NamedTuple):
    x: float
    y: float
    width: float
    height: float
    color: Color


class LineSegment(NamedTuple):
    start: Point
    end: Point
    width: float
    color: Color


class GridStroke(NamedTuple):
    width: float = 2.0
    color: Color = BLUE


class Cell:
    """Handle onto one slot of a grid's color arena."""

    __slots__ = ("_pool", "row", "col")

    def __init__(self, pool, row, col):
        self._pool = pool
        self.row = row
        self.col = col

    @property
    def color(self):
        return tuple(int(c) for c in self._pool[self.row, self.col])

    @color.setter
    def color(self, value):
        self._pool[self.row, self.col] = to_rgba(value)

    def render(self, x, y, width, height):
        return FillRect(x, y, width, height, self.color)

    def __repr__(self):
        return f"Cell({self.row}, {self.col}, color={self.color})"


def _is_valid_size(value):
    try:
        return math.isfinite(value) and value > 0
    except TypeError:
        return False


def _clamp_extent(value, current, limit):
    # non-finite requests keep the current extent
    if not math.isfinite(value):
        return current
    return max(1, min(limit, int(value)))


class Grid:
    """Fixed-capacity arena of cells with a resizable visible window.

    Cells live in a dense ``max_rows x max_cols`` RGBA array. Only the
    top-left ``visible_rows x visible_cols`` block is drawn, hit-tested,
    cleared and rendered; the rest keeps whatever it held, so growing the
    window again shows the old content.
    """

    def __init__(
        self,
        max_rows: int,
        max_cols: int,
        anchor: Point = (0.0, 0.0),
        cell_width: float = 10.0,
        cell_height: float = 10.0,
        visible_rows: Optional[int] = None,
        visible_cols: Optional[int] = None,
    ):
        if max_rows <= 0 or max_cols <= 0:
            raise ValueError(
                f"Grid capacity must be positive, got {max_rows}x{max_cols}"
            )
        if not (_is_valid_size(cell_width) and _is_valid_size(cell_height)):
            raise ValueError(
                f"Cell size must be positive, got {cell_width}x{cell_height}"
            )

        self.max_rows, self.max_cols = int(max_rows), int(max_cols)
        self.anchor = (float(anchor[0]), float(anchor[1]))
        self.cell_width, self.cell_height = float(cell_width), float(cell_height)
        self.cells = numpy.empty((self.max_rows, self.max_cols, 4), dtype=numpy.uint8)
        self.cells[:, :] = WHITE

        self.visible_rows = self.visible_cols = 1
        self.resize(
            self.max_rows // 2 if visible_rows is None else visible_rows,
            self.max_cols // 2 if visible_cols is None else visible_cols,
        )

    @property
    def width(self):
        return self.cell_width * self.visible_cols

    @property
    def height(self):
        return self.cell_height * self.visible_rows

    def contains(self, point):
        x, y = point
        ax, ay = self.anchor
        return ax <= x < ax + self.width and ay <= y < ay + self.height

    def to_grid_space(self, point):
        x, y = point
        ax, ay = self.anchor
        return (x - ax) / self.cell_width, (y - ay) / self.cell_height

    def to_cell(self, point):
        gx, gy = self.to_grid_space(point)
        if not (math.isfinite(gx) and math.isfinite(gy)):
            return None
        row, col = math.floor(gy), math.floor(gx)
        if 0 <= row < self.visible_rows and 0 <= col < self.visible_cols:
            return row, col
        return None

    def cell_origin(self, row, col):
        ax, ay = self.anchor
        return ax + self.cell_width * col, ay + self.cell_height * row

    def is_visible(self, row, col):
        return 0 <= row < self.visible_rows and 0 <= col < self.visible_cols

    def cell(self, row, col):
        if not (0 <= row < self.max_rows and 0 <= col < self.max_cols):
            raise IndexError(
                f"Cell ({row}, {col}) outside capacity {self.max_rows}x{self.max_cols}"
            )
        return Cell(self.cells, row, col)

    def get_cell(self, row, col):
        if not self.is_visible(row, col):
            return None
        return Cell(self.cells, row, col).color

    def set_cell(self, row, col, color):
        if not self.is_visible(row, col):
            return
        self.cells[row, col] = to_rgba(color)

    def clear(self, color=WHITE):
        self.cells[: self.visible_rows, : self.visible_cols] = to_rgba(color)
        logger.debug(
            "Cleared %dx%d visible cells", self.visible_rows, self.visible_cols
        )

    def pan(self, dx, dy):
        if not (math.isfinite(dx) and math.isfinite(dy)):
            logger.debug("Ignoring pan by %r, %r", dx, dy)
            return
        ax, ay = self.anchor
        self.anchor = (ax + dx, ay + dy)

    def resize(self, rows, cols):
        rows = _clamp_extent(rows, self.visible_rows, self.max_rows)
        cols = _clamp_extent(cols, self.visible_cols, self.max_cols)
        if (rows, cols) != (self.visible_rows, self.visible_cols):
            logger.debug("Visible extent %dx%d", rows, cols)
        self.visible_rows, self.visible_cols = rows, cols

    def set_cell_size(self, width, height):
        if not (_is_valid_size(width) and _is_valid_size(height)):
            logger.debug("Ignoring cell size %rx%r", width, height)
            return
        self.cell_width, self.cell_height = float(width), float(height)

    def grid_lines(self, stroke=GridStroke()):
        ax, ay = self.anchor
        width, height = self.width, self.height
        color = to_rgba(stroke.color)
        lines = []

        for j in range(self.visible_cols + 1):
            x = ax + self.cell_width * j
            lines.append(LineSegment((x, ay), (x, ay + height), stroke.width, color))

        for i in range(self.visible_rows + 1):
            y = ay + self.cell_height * i
            lines.append(LineSegment((ax, y), (ax + width, y), stroke.width, color))

        return lines

    def render(self, stroke=GridStroke()):
        items = []
        for i in range(self.visible_rows):
            for j in range(self.visible_cols):
                x, y = self.cell_origin(i, j)
                items.append(
                    Cell(self.cells, i, j).render(
                        x, y, self.cell_width, self.cell_height
                    )
                )
        items.extend(self.grid_lines(stroke))
        return items

    def to_array(self):
        return self.cells[: self.visible_rows, : self.visible_cols].copy()
