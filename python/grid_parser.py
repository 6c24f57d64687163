"""
Grid layout parsing for conduit.

Builds a Grid from a concise text picture, one character per cell. Used for
test fixtures and demo layouts.
"""

from __future__ import annotations

from grid import Grid
from pipe_catalog import PIPE_GLYPHS
from pipe_types import Direction, PipeType

__all__ = ["parse_layout", "ENTRY_GLYPHS", "EMPTY_GLYPHS"]

ENTRY_GLYPHS: dict[str, Direction] = {
    ">": Direction.RIGHT,
    "<": Direction.LEFT,
    "^": Direction.TOP,
    "v": Direction.BOTTOM,
}

EMPTY_GLYPHS = frozenset({"_", "."})

# ASCII stand-ins for the straight and cross pieces
_ASCII_PIPES: dict[str, PipeType] = {
    "-": PipeType.HORIZONTAL,
    "+": PipeType.CROSS,
}

_GLYPH_PIPES: dict[str, PipeType] = {
    **{glyph: pipe_type for pipe_type, glyph in PIPE_GLYPHS.items()},
    **_ASCII_PIPES,
}


def parse_layout(definition: str) -> Grid:
    """
    Parse a grid layout from a concise format.

    Format:
    - Rows separated by newlines or |
    - Leading/trailing whitespace on each row is ignored, blank rows skipped
    - Cell types:
      * Underscore (_) or dot (.): Empty cell
      * One of > < ^ v: The entry, pointing the way water leaves it
      * Box-drawing glyph (─ │ ┘ └ ┐ ┌ ┼ ┴ ┬ ┤ ├): Pipe of that shape
      * Dash (-) or plus (+): Horizontal or cross pipe
    - Short rows are padded with empty cells

    Example:
        \"\"\"
        ______
        >──┐__
        ___└─_
        \"\"\"

        Creates a 6x3 grid with the entry at (0, 1) flowing right, feeding a
        straight run that turns down at (3, 1) and right again at (3, 2).

    Args:
        definition: Layout text

    Returns:
        Grid holding the described pipes and entry (all pipes dry)

    Raises:
        ValueError: On unknown characters, or if there is not exactly one entry
    """
    row_strings = [
        row.strip()
        for line in definition.strip().split("\n")
        for row in line.split("|")
        if row.strip()
    ]
    if not row_strings:
        raise ValueError("Empty layout definition")

    width = max(len(row) for row in row_strings)
    height = len(row_strings)

    entries: list[tuple[int, int, Direction]] = []
    pipes: list[tuple[int, int, PipeType]] = []

    for y, row_str in enumerate(row_strings):
        for x, char in enumerate(row_str):
            if char in EMPTY_GLYPHS:
                continue
            if char in ENTRY_GLYPHS:
                entries.append((x, y, ENTRY_GLYPHS[char]))
            elif char in _GLYPH_PIPES:
                pipes.append((x, y, _GLYPH_PIPES[char]))
            else:
                raise ValueError(
                    f"Invalid character '{char}' in layout\n"
                    f"  Row {y}, column {x}\n"
                    f"  Valid characters: _ . > < ^ v - + {' '.join(PIPE_GLYPHS.values())}"
                )

    if len(entries) != 1:
        raise ValueError(f"Layout must contain exactly one entry (> < ^ v), found {len(entries)}")

    grid = Grid(width, height)
    entry_x, entry_y, entry_direction = entries[0]
    grid.set_entry(entry_x, entry_y, entry_direction)

    for x, y, pipe_type in pipes:
        grid.place_pipe(x, y, pipe_type)

    return grid
