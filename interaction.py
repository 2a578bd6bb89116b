import logging
import math
from dataclasses import dataclass, replace
from enum import Enum

from rasterizer import trace

logger = logging.getLogger(__name__)


class SubMode(Enum):
    DRAW = "draw"
    PAN = "pan"


class PointerButton(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self):
        return self.value[0]

    @property
    def dy(self):
        return self.value[1]


@dataclass(frozen=True)
class PointerPress:
    pos: tuple
    button: PointerButton = PointerButton.PRIMARY


@dataclass(frozen=True)
class PointerRelease:
    pos: tuple
    button: PointerButton = PointerButton.PRIMARY


@dataclass(frozen=True)
class PointerMove:
    pos: tuple


@dataclass(frozen=True)
class KeyPress:
    direction: Direction


@dataclass(frozen=True)
class Idle:
    def __str__(self):
        return "Idle"


@dataclass(frozen=True)
class Dragging:
    drag_anchor: tuple
    last_pointer: tuple

    def __str__(self):
        return "Dragging"


class InteractionMachine:
    """Turns pointer events into grid edits.

    ``state`` is either ``Idle()`` or ``Dragging(drag_anchor, last_pointer)``;
    the drag scratch points only exist inside the ``Dragging`` value.
    ``sub_mode`` picks what a drag does and survives state changes. Only the
    primary button starts or ends a drag. Input that does not apply to the
    current state is dropped without raising.
    """

    def __init__(self, sub_mode=SubMode.DRAW):
        self.state = Idle()
        self.sub_mode = SubMode(sub_mode)

    @property
    def is_dragging(self):
        return isinstance(self.state, Dragging)

    def reset(self):
        self.state = Idle()

    def handle(self, event, grid, draw_color):
        if isinstance(self.state, Idle):
            self._handle_idle(event, grid)
        else:
            self._handle_dragging(event, grid, draw_color)

    def _handle_idle(self, event, grid):
        if not isinstance(event, PointerPress):
            return
        if event.button is not PointerButton.PRIMARY or not grid.contains(event.pos):
            return

        pos = (float(event.pos[0]), float(event.pos[1]))
        self.state = Dragging(drag_anchor=pos, last_pointer=pos)
        logger.debug("Idle -> Dragging at %s (%s)", pos, self.sub_mode.value)

    def _handle_dragging(self, event, grid, draw_color):
        if isinstance(event, PointerRelease):
            if event.button is PointerButton.PRIMARY:
                self.state = Idle()
                logger.debug("Dragging -> Idle")
        elif isinstance(event, PointerMove):
            pos = (float(event.pos[0]), float(event.pos[1]))
            if not (math.isfinite(pos[0]) and math.isfinite(pos[1])):
                return
            if self.sub_mode is SubMode.DRAW:
                self._draw_to(pos, grid, draw_color)
            else:
                self._pan_to(pos, grid)

    def _draw_to(self, pos, grid, draw_color):
        if grid.to_cell(pos) is None:
            return

        for row, col in trace(self.state.last_pointer, pos, grid):
            grid.set_cell(row, col, draw_color)
        self.state = replace(self.state, last_pointer=pos)

    def _pan_to(self, pos, grid):
        ax, ay = self.state.drag_anchor
        grid.pan(pos[0] - ax, pos[1] - ay)
        self.state = replace(self.state, drag_anchor=pos)
