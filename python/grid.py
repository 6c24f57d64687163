"""
Fixed-size playing field of cells holding pipes, the water entry and floods.
"""

from __future__ import annotations

import logging
import random
from typing import Iterator

from pipe_catalog import create_pipe
from pipe_types import Cell, CellState, Direction, PipeData, PipeType, Position
from rules import GRID_HEIGHT, GRID_WIDTH

logger = logging.getLogger(__name__)


class Grid:
    """
    A width x height array of cells with exactly one entry cell.

    The entry direction is the direction water travels as it leaves the
    entry, not the wall it comes through. By default the entry sits on a
    random row of the left edge with water flowing right.
    """

    def __init__(
        self,
        width: int = GRID_WIDTH,
        height: int = GRID_HEIGHT,
        rng: random.Random | None = None,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self._width = width
        self._height = height
        self._cells = self._create_empty_cells()

        entry_row = (rng or random).randrange(height)
        self._entry_position = Position(0, entry_row)
        self._entry_direction = Direction.RIGHT
        self._cells[entry_row][0].state = CellState.ENTRY

    def _create_empty_cells(self) -> list[list[Cell]]:
        return [[Cell() for _ in range(self._width)] for _ in range(self._height)]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def entry_position(self) -> Position:
        return self._entry_position

    @property
    def entry_direction(self) -> Direction:
        return self._entry_direction

    @property
    def cells(self) -> tuple[tuple[Cell, ...], ...]:
        """Rows of cells, indexed [y][x]. For read-only use by renderers."""
        return tuple(tuple(row) for row in self._cells)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def get_cell(self, x: int, y: int) -> Cell | None:
        if not self.in_bounds(x, y):
            return None
        return self._cells[y][x]

    def iter_cells(self) -> Iterator[tuple[Position, Cell]]:
        """Yield every cell with its position, row by row."""
        for y, row in enumerate(self._cells):
            for x, cell in enumerate(row):
                yield Position(x, y), cell

    def set_entry(self, x: int, y: int, direction: Direction) -> None:
        """Move the water entry. The previous entry cell becomes empty."""
        if not self.in_bounds(x, y):
            raise ValueError(f"Entry ({x}, {y}) outside {self._width}x{self._height} grid")

        old = self._cells[self._entry_position.y][self._entry_position.x]
        if old.state is CellState.ENTRY:
            old.state = CellState.EMPTY

        self._entry_position = Position(x, y)
        self._entry_direction = direction
        self._cells[y][x] = Cell(state=CellState.ENTRY)

    def is_valid_placement(self, x: int, y: int) -> bool:
        cell = self.get_cell(x, y)
        return cell is not None and cell.state is CellState.EMPTY

    def place_pipe(self, x: int, y: int, pipe_type: PipeType) -> bool:
        if not self.is_valid_placement(x, y):
            return False

        self._cells[y][x] = Cell(state=CellState.PIPE, pipe=create_pipe(pipe_type))
        logger.debug("Placed %s at (%d, %d)", pipe_type.value, x, y)
        return True

    def get_pipe_at(self, x: int, y: int) -> PipeData | None:
        cell = self.get_cell(x, y)
        return cell.pipe if cell is not None else None

    def set_water_level(self, x: int, y: int, level: int, from_direction: Direction) -> None:
        pipe = self.get_pipe_at(x, y)
        if pipe is not None:
            pipe.water_level = level
            pipe.water_from = from_direction

    def set_flooded(self, x: int, y: int) -> None:
        """Mark a cell flooded. The entry cell is never overwritten."""
        cell = self.get_cell(x, y)
        if cell is not None and cell.state is not CellState.ENTRY:
            cell.state = CellState.FLOODED
            cell.pipe = None

    def reset(self) -> None:
        """Empty every cell. The entry keeps its position and direction."""
        self._cells = self._create_empty_cells()
        self._cells[self._entry_position.y][self._entry_position.x].state = CellState.ENTRY
