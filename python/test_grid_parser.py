"""Tests for grid_parser module."""

import pytest

from grid_parser import parse_layout
from pipe_types import CellState, Direction, PipeType, Position


class TestParseLayout:
    """Tests for the layout parser."""

    def test_single_row(self) -> None:
        """Parse one row with the entry and two pipes."""
        grid = parse_layout(">─┐")

        assert grid.width == 3
        assert grid.height == 1
        assert grid.entry_position == Position(0, 0)
        assert grid.entry_direction is Direction.RIGHT
        assert grid.get_pipe_at(1, 0).type is PipeType.HORIZONTAL
        assert grid.get_pipe_at(2, 0).type is PipeType.ELBOW_BL

    def test_pipe_separated_rows(self) -> None:
        """Rows can be separated with |."""
        grid = parse_layout("_v_|_│_|_┴_")

        assert grid.height == 3
        assert grid.entry_position == Position(1, 0)
        assert grid.entry_direction is Direction.BOTTOM
        assert grid.get_pipe_at(1, 1).type is PipeType.VERTICAL
        assert grid.get_pipe_at(1, 2).type is PipeType.T_TOP

    def test_multiline_with_indentation(self) -> None:
        """Indentation and blank lines are ignored."""
        grid = parse_layout(
            """

            ┌┬┐
            ├┼┤
            └┴┘<
            """
        )

        assert (grid.width, grid.height) == (4, 3)
        expected = {
            (0, 0): PipeType.ELBOW_BR,
            (1, 0): PipeType.T_BOTTOM,
            (2, 0): PipeType.ELBOW_BL,
            (0, 1): PipeType.T_RIGHT,
            (1, 1): PipeType.CROSS,
            (2, 1): PipeType.T_LEFT,
            (0, 2): PipeType.ELBOW_TR,
            (1, 2): PipeType.T_TOP,
            (2, 2): PipeType.ELBOW_TL,
        }
        for (x, y), pipe_type in expected.items():
            assert grid.get_pipe_at(x, y).type is pipe_type
        assert grid.entry_position == Position(3, 2)
        assert grid.entry_direction is Direction.LEFT

    def test_short_rows_padded(self) -> None:
        """Short rows are filled with empty cells."""
        grid = parse_layout("^|──.─")
        assert grid.width == 4
        assert grid.get_cell(3, 0).state is CellState.EMPTY
        assert grid.get_cell(2, 1).state is CellState.EMPTY

    def test_ascii_aliases(self) -> None:
        """Dash and plus stand for horizontal and cross pipes."""
        grid = parse_layout(">-+")
        assert grid.get_pipe_at(1, 0).type is PipeType.HORIZONTAL
        assert grid.get_pipe_at(2, 0).type is PipeType.CROSS

    def test_pipes_start_dry(self) -> None:
        """Parsed pipes hold no water."""
        grid = parse_layout(">──")
        assert all(
            cell.pipe.water_level == 0 for _, cell in grid.iter_cells() if cell.pipe is not None
        )


class TestParseLayoutErrors:
    """Tests for malformed layouts."""

    def test_invalid_character(self) -> None:
        """Unknown characters are reported with their location."""
        with pytest.raises(ValueError, match="Invalid character 'x'"):
            parse_layout(">─x")

    def test_missing_entry(self) -> None:
        """A layout needs an entry."""
        with pytest.raises(ValueError, match="exactly one entry"):
            parse_layout("──|──")

    def test_two_entries(self) -> None:
        """Only one entry is allowed."""
        with pytest.raises(ValueError, match="found 2"):
            parse_layout(">─<")

    def test_empty_definition(self) -> None:
        """Blank input is rejected."""
        with pytest.raises(ValueError, match="Empty layout"):
            parse_layout("   \n  ")
