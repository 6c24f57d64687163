"""Tests for ASCII rendering."""

from ascii_render import EMPTY_CHAR, FLOOD_CHAR, render, render_queue
from flow import Flow
from grid_parser import parse_layout
from pipe_types import PipeType, Position


class TestRender:
    """Tests for plain and coloured grid output."""

    def test_plain_layout(self) -> None:
        """Each cell becomes its glyph padded to three columns."""
        grid = parse_layout(">─┐|__│")
        assert render(grid, color=False) == f" >  ─  ┐ \n {EMPTY_CHAR}  {EMPTY_CHAR}  │ "

    def test_cursor_brackets(self) -> None:
        """The cursor cell is wrapped in brackets."""
        grid = parse_layout(">__")
        line = render(grid, cursor=Position(1, 0), color=False)
        assert line == f" > [{EMPTY_CHAR}] {EMPTY_CHAR} "

    def test_flood_mark(self) -> None:
        """Flooded cells are drawn as water spill."""
        grid = parse_layout(">─_")
        flow = Flow(grid)
        flow.start()
        while flow.advance():
            pass
        assert render(grid, flow, color=False) == f" >  ─  {FLOOD_CHAR} "

    def test_colour_output_contains_glyphs(self) -> None:
        """Coloured output still carries every glyph."""
        grid = parse_layout(">─┼")
        flow = Flow(grid)
        flow.start()
        flow.advance()
        text = render(grid, flow, cursor=Position(2, 0))
        for glyph in ">─┼":
            assert glyph in text


class TestRenderQueue:
    """Tests for the queue strip."""

    def test_next_pipe_highlighted(self) -> None:
        """The front pipe is bracketed."""
        queue = (PipeType.CROSS, PipeType.HORIZONTAL, PipeType.ELBOW_TL)
        assert render_queue(queue, color=False) == "[┼] ─  ┘ "

    def test_empty_queue(self) -> None:
        """No pipes, no output."""
        assert render_queue((), color=False) == ""
