"""
ASCII rendering for conduit grids.

Each cell is drawn three characters wide: the pipe glyph padded with
spaces, or wrapped in brackets when it is under the player's cursor.
Colors come from simple_chalk and can be switched off for plain output.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import simple_chalk as chalk  # type: ignore[import-untyped]

from flow import Flow
from grid import Grid
from pipe_catalog import PIPE_GLYPHS
from pipe_types import Cell, CellState, Direction, PipeType, Position

logger = logging.getLogger(__name__)

ENTRY_ARROWS: dict[Direction, str] = {
    Direction.RIGHT: ">",
    Direction.LEFT: "<",
    Direction.TOP: "^",
    Direction.BOTTOM: "v",
}

EMPTY_CHAR = "·"
FLOOD_CHAR = "≈"

Colorize = Callable[[str], str]


def _plain(s: str) -> str:
    return s


def cell_glyph(cell: Cell, entry_direction: Direction) -> str:
    """The single character standing for a cell."""
    match cell.state:
        case CellState.ENTRY:
            return ENTRY_ARROWS[entry_direction]
        case CellState.FLOODED:
            return FLOOD_CHAR
        case CellState.PIPE if cell.pipe is not None:
            return PIPE_GLYPHS[cell.pipe.type]
        case _:
            return EMPTY_CHAR


def cell_color(cell: Cell, is_front: bool) -> Colorize:
    """Pick a colour by what the cell holds and whether water reached it."""
    match cell.state:
        case CellState.ENTRY:
            return chalk.green
        case CellState.FLOODED:
            return chalk.redBright
        case CellState.PIPE if cell.pipe is not None and cell.pipe.water_level > 0:
            return chalk.cyan if is_front else chalk.blueBright
        case CellState.PIPE:
            return chalk.yellow
        case _:
            return chalk.white


def render(
    grid: Grid,
    flow: Flow | None = None,
    cursor: Position | None = None,
    color: bool = True,
) -> str:
    """
    Render a grid to a multi-line string.

    Args:
        grid: The grid to draw
        flow: Optional flow; its current cell is drawn as the water front
        cursor: Optional cell to highlight in brackets
        color: Emit ANSI colours (default True)

    Returns:
        One line per grid row
    """
    front = flow.get_current_position() if flow is not None and flow.get_segments() > 0 else None
    lines: list[str] = []

    for y, row in enumerate(grid.cells):
        parts: list[str] = []
        for x, cell in enumerate(row):
            pos = Position(x, y)
            glyph = cell_glyph(cell, grid.entry_direction)
            colorize = cell_color(cell, pos == front) if color else _plain

            if pos == cursor:
                bracket = chalk.magenta if color else _plain
                parts.append(bracket("[") + colorize(glyph) + bracket("]"))
            else:
                parts.append(" " + colorize(glyph) + " ")
        lines.append("".join(parts))

    return "\n".join(lines)


def render_queue(queue: Sequence[PipeType], color: bool = True) -> str:
    """Render the upcoming pipes, next one first and highlighted."""
    parts: list[str] = []
    for i, pipe_type in enumerate(queue):
        glyph = PIPE_GLYPHS[pipe_type]
        if i == 0:
            parts.append((chalk.yellowBright if color else _plain)(f"[{glyph}]"))
        else:
            parts.append(f" {glyph} ")
    return "".join(parts)
