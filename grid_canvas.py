import logging
from dataclasses import dataclass

from PIL import Image

from interaction import InteractionMachine, KeyPress, SubMode
from pixel_grid import Grid, GridStroke
from utilities import BLACK, WHITE, to_rgba

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROWS = 200
DEFAULT_MAX_COLS = 200
DEFAULT_ANCHOR = (200.0, 200.0)
DEFAULT_CELL_SIZE = 10.0
DEFAULT_PAN_STEP = 10.0


@dataclass(frozen=True)
class CanvasOptions:
    """Host-owned settings handed to the canvas once per frame."""

    primary_color: tuple = BLACK
    secondary_color: tuple = WHITE
    sub_mode: SubMode = SubMode.DRAW
    visible_rows: int = DEFAULT_MAX_ROWS // 2
    visible_cols: int = DEFAULT_MAX_COLS // 2
    cell_width: float = DEFAULT_CELL_SIZE
    cell_height: float = DEFAULT_CELL_SIZE
    grid_stroke: GridStroke = GridStroke()
    pan_step: float = DEFAULT_PAN_STEP


def _check_stroke(stroke):
    stroke = GridStroke(float(stroke.width), to_rgba(stroke.color))
    if stroke.width < 0:
        raise ValueError(f"Grid stroke width must not be negative, got {stroke.width}")
    return stroke


class GridCanvas:
    """Pixel grid plus the interaction state that edits it.

    The host feeds input events through ``handle_event``/``handle_events``
    and paints whatever ``render`` (or ``to_image``) returns. Nothing here
    raises on runtime input; only bad constructor arguments are rejected.
    """

    def __init__(
        self,
        max_rows=DEFAULT_MAX_ROWS,
        max_cols=DEFAULT_MAX_COLS,
        anchor=DEFAULT_ANCHOR,
        cell_width=DEFAULT_CELL_SIZE,
        cell_height=DEFAULT_CELL_SIZE,
        grid_stroke=GridStroke(),
        primary_color=BLACK,
        secondary_color=WHITE,
        pan_step=DEFAULT_PAN_STEP,
    ):
        self._defaults = dict(
            max_rows=max_rows,
            max_cols=max_cols,
            anchor=anchor,
            cell_width=cell_width,
            cell_height=cell_height,
            grid_stroke=grid_stroke,
            primary_color=primary_color,
            secondary_color=secondary_color,
            pan_step=pan_step,
        )
        self._build(**self._defaults)

    def _build(
        self,
        max_rows,
        max_cols,
        anchor,
        cell_width,
        cell_height,
        grid_stroke,
        primary_color,
        secondary_color,
        pan_step,
    ):
        self.grid = Grid(max_rows, max_cols, anchor, cell_width, cell_height)
        self.machine = InteractionMachine()
        self._grid_stroke = _check_stroke(grid_stroke)
        self._primary_color = to_rgba(primary_color)
        self._secondary_color = to_rgba(secondary_color)
        self.pan_step = float(pan_step)

    @property
    def state(self):
        return self.machine.state

    @property
    def sub_mode(self):
        return self.machine.sub_mode

    @sub_mode.setter
    def sub_mode(self, value):
        self.machine.sub_mode = SubMode(value)

    @property
    def primary_color(self):
        return self._primary_color

    @primary_color.setter
    def primary_color(self, value):
        self._primary_color = to_rgba(value)

    @property
    def secondary_color(self):
        return self._secondary_color

    @secondary_color.setter
    def secondary_color(self, value):
        self._secondary_color = to_rgba(value)

    @property
    def grid_stroke(self):
        return self._grid_stroke

    @grid_stroke.setter
    def grid_stroke(self, value):
        width = max(0.0, float(value.width))
        self._grid_stroke = GridStroke(width, to_rgba(value.color))

    @property
    def anchor(self):
        return self.grid.anchor

    @property
    def visible_rows(self):
        return self.grid.visible_rows

    @property
    def visible_cols(self):
        return self.grid.visible_cols

    def options(self):
        return CanvasOptions(
            primary_color=self._primary_color,
            secondary_color=self._secondary_color,
            sub_mode=self.machine.sub_mode,
            visible_rows=self.grid.visible_rows,
            visible_cols=self.grid.visible_cols,
            cell_width=self.grid.cell_width,
            cell_height=self.grid.cell_height,
            grid_stroke=self._grid_stroke,
            pan_step=self.pan_step,
        )

    def apply_options(self, options):
        self.primary_color = options.primary_color
        self.secondary_color = options.secondary_color
        self.sub_mode = options.sub_mode
        self.grid_stroke = options.grid_stroke
        self.pan_step = float(options.pan_step)
        self.grid.resize(options.visible_rows, options.visible_cols)
        self.grid.set_cell_size(options.cell_width, options.cell_height)

    def reset(self):
        logger.debug("Resetting canvas to defaults")
        self._build(**self._defaults)

    def handle_event(self, event):
        if isinstance(event, KeyPress):
            direction = event.direction
            self.grid.pan(direction.dx * self.pan_step, direction.dy * self.pan_step)
            return
        self.machine.handle(event, self.grid, self._primary_color)

    def handle_events(self, events):
        for event in events:
            self.handle_event(event)

    def contains(self, point):
        return self.grid.contains(point)

    def to_cell(self, point):
        return self.grid.to_cell(point)

    def cell_color(self, row, col):
        return self.grid.get_cell(row, col)

    def clear(self):
        self.grid.clear(WHITE)

    def pan(self, dx, dy):
        self.grid.pan(dx, dy)

    def resize(self, rows, cols):
        self.grid.resize(rows, cols)

    def set_cell_size(self, width, height):
        self.grid.set_cell_size(width, height)

    def render(self):
        return self.grid.render(self._grid_stroke)

    def grid_lines(self):
        return self.grid.grid_lines(self._grid_stroke)

    def to_array(self):
        return self.grid.to_array()

    def to_image(self):
        pixels = self.grid.to_array()
        return Image.frombytes(
            "RGBA",
            (self.grid.visible_cols, self.grid.visible_rows),
            pixels.tobytes(),
        )
