"""
Water-advance simulation over a Grid.

Each call to Flow.advance() moves the water front one cell. The front floods
when the next cell is outside the grid, holds no pipe, or holds a pipe with
no opening facing the incoming water. Once flooded, advance() keeps
returning False until start() is called again.
"""

from __future__ import annotations

import logging
from enum import Enum

from grid import Grid
from pipe_catalog import can_enter, exit_directions, is_cross
from pipe_types import Direction, FlowState, Position

logger = logging.getLogger(__name__)


class FloodReason(Enum):
    """Reason why the water stopped."""

    EDGE_REACHED = "edge_reached"  # Next cell is outside the grid
    NO_PIPE = "no_pipe"  # Next cell is empty or the entry
    ENTRY_DENIED = "entry_denied"  # Pipe has no opening facing the water


class Flow:
    """Tracks the water front, its path history and flood status."""

    def __init__(self, grid: Grid) -> None:
        self._grid = grid
        self._position = grid.entry_position
        self._direction = grid.entry_direction
        self._segments = 0
        self._path: list[Position] = []
        self._flooded = False
        self._flood_reason: FloodReason | None = None
        self._flood_position: Position | None = None
        # (position, travel direction) pairs seen entering cross pipes
        self._cross_visited: set[tuple[Position, Direction]] = set()
        self._started = False

    def start(self) -> None:
        """Reset to the grid entry. Safe to call at any time."""
        self._position = self._grid.entry_position
        self._direction = self._grid.entry_direction
        self._segments = 0
        self._path = []
        self._flooded = False
        self._flood_reason = None
        self._flood_position = None
        self._cross_visited.clear()
        self._started = True

    def _flood(self, reason: FloodReason, at: Position, mark: bool) -> bool:
        self._flooded = True
        self._flood_reason = reason
        self._flood_position = at
        if mark:
            self._grid.set_flooded(at.x, at.y)
        logger.info(
            "Flooded at (%d, %d): %s after %d segments", at.x, at.y, reason.value, self._segments
        )
        return False

    def advance(self) -> bool:
        """Move the water one segment. Returns False if it floods (or already has)."""
        if self._flooded:
            return False

        target = self._position.step(self._direction)

        if not self._grid.in_bounds(target.x, target.y):
            # No cell to mark when leaving the grid
            return self._flood(FloodReason.EDGE_REACHED, target, mark=False)

        pipe = self._grid.get_pipe_at(target.x, target.y)
        if pipe is None:
            return self._flood(FloodReason.NO_PIPE, target, mark=True)

        if not can_enter(pipe.type, self._direction):
            return self._flood(FloodReason.ENTRY_DENIED, target, mark=True)

        self._position = target
        self._path.append(target)
        self._segments += 1

        if is_cross(pipe.type):
            self._cross_visited.add((target, self._direction))

        self._grid.set_water_level(target.x, target.y, 1, self._direction)

        # First candidate in catalog order; never empty once can_enter passed
        exits = exit_directions(pipe.type, self._direction)
        self._direction = exits[0]

        logger.debug(
            "Water entered %s at (%d, %d), now heading %s",
            pipe.type.value,
            target.x,
            target.y,
            self._direction.value,
        )
        return True

    @property
    def started(self) -> bool:
        return self._started

    def get_current_position(self) -> Position:
        return self._position

    def get_current_direction(self) -> Direction:
        return self._direction

    def get_segments(self) -> int:
        return self._segments

    def get_path(self) -> tuple[Position, ...]:
        return tuple(self._path)

    def is_flooded(self) -> bool:
        return self._flooded

    @property
    def flood_reason(self) -> FloodReason | None:
        return self._flood_reason

    @property
    def flood_position(self) -> Position | None:
        return self._flood_position

    def has_crossed(self, position: Position, direction: Direction) -> bool:
        """Whether water has entered the cross pipe at `position` travelling `direction`."""
        return (position, direction) in self._cross_visited

    def get_state(self) -> FlowState:
        return FlowState(
            x=self._position.x,
            y=self._position.y,
            direction=self._direction,
            segments=self._segments,
        )
