"""
Shared type definitions for the conduit game.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Cardinal direction, used both for pipe openings and water travel."""

    TOP = "top"  # Up (decreasing y)
    RIGHT = "right"  # Increasing x
    BOTTOM = "bottom"  # Down (increasing y)
    LEFT = "left"  # Decreasing x


OPPOSITE_DIRECTION: dict[Direction, Direction] = {
    Direction.TOP: Direction.BOTTOM,
    Direction.BOTTOM: Direction.TOP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

# Direction deltas: (dx, dy)
DIRECTION_OFFSET: dict[Direction, tuple[int, int]] = {
    Direction.TOP: (0, -1),
    Direction.BOTTOM: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


def opposite(direction: Direction) -> Direction:
    return OPPOSITE_DIRECTION[direction]


class PipeType(Enum):
    """Pipe variants. Definition order is the catalog order."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    ELBOW_TL = "elbow_tl"
    ELBOW_TR = "elbow_tr"
    ELBOW_BL = "elbow_bl"
    ELBOW_BR = "elbow_br"
    CROSS = "cross"
    T_TOP = "t_top"
    T_BOTTOM = "t_bottom"
    T_LEFT = "t_left"
    T_RIGHT = "t_right"


class CellState(Enum):
    EMPTY = "empty"
    PIPE = "pipe"
    ENTRY = "entry"
    FLOODED = "flooded"


class GameStatus(Enum):
    """Session phase."""

    WAITING = "waiting"  # Countdown running
    PLAYING = "playing"  # Water flowing
    FLOODED = "flooded"  # Terminal, lost
    WON = "won"  # Terminal, minimum length reached


@dataclass(frozen=True)
class Position:
    """A cell coordinate in the grid."""

    x: int
    y: int

    def step(self, direction: Direction) -> Position:
        dx, dy = DIRECTION_OFFSET[direction]
        return Position(self.x + dx, self.y + dy)


@dataclass
class PipeData:
    """A placed pipe. Owned by the grid cell holding it."""

    type: PipeType
    connections: tuple[Direction, ...]
    water_level: int = 0  # 0 = dry, 1 = filled
    water_from: Direction | None = None  # Travel direction of the water that filled it


@dataclass
class Cell:
    """One grid square. `pipe` is set iff state is PIPE."""

    state: CellState = CellState.EMPTY
    pipe: PipeData | None = None


@dataclass
class GameState:
    """Session snapshot. Game hands out copies, never its own instance."""

    status: GameStatus
    score: int
    length: int
    discards: int
    countdown: float  # Seconds until water flows
    flow_timer: float  # Current seconds per flow tick
    paused: bool
    elapsed_time: float  # Seconds spent playing (excludes countdown and pauses)


@dataclass(frozen=True)
class FlowState:
    x: int
    y: int
    direction: Direction
    segments: int
