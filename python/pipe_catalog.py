"""
Pipe catalog: connection sets, entry/exit resolution and weighted generation.

Connection tuples are listed in a fixed order. When a pipe offers more than
one exit (T and cross pieces) the first remaining connection wins, so the
order below is part of the game's behavior.
"""

from __future__ import annotations

import random

from pipe_types import Direction, PipeData, PipeType, opposite

__all__ = [
    "PIPE_CONNECTIONS",
    "PIPE_WEIGHTS",
    "PIPE_GLYPHS",
    "connections_of",
    "can_enter",
    "exit_directions",
    "weighted_random_type",
    "create_pipe",
    "all_pipe_types",
    "is_cross",
]

T, R, B, L = Direction.TOP, Direction.RIGHT, Direction.BOTTOM, Direction.LEFT

PIPE_CONNECTIONS: dict[PipeType, tuple[Direction, ...]] = {
    PipeType.HORIZONTAL: (L, R),
    PipeType.VERTICAL: (T, B),
    PipeType.ELBOW_TL: (T, L),
    PipeType.ELBOW_TR: (T, R),
    PipeType.ELBOW_BL: (B, L),
    PipeType.ELBOW_BR: (B, R),
    PipeType.CROSS: (T, R, B, L),
    PipeType.T_TOP: (L, R, T),
    PipeType.T_BOTTOM: (L, R, B),
    PipeType.T_LEFT: (T, B, L),
    PipeType.T_RIGHT: (T, B, R),
}

# Generation weights, summing to 100
PIPE_WEIGHTS: dict[PipeType, int] = {
    PipeType.HORIZONTAL: 20,
    PipeType.VERTICAL: 20,
    PipeType.ELBOW_TL: 8,
    PipeType.ELBOW_TR: 8,
    PipeType.ELBOW_BL: 8,
    PipeType.ELBOW_BR: 8,
    PipeType.CROSS: 8,
    PipeType.T_TOP: 5,
    PipeType.T_BOTTOM: 5,
    PipeType.T_LEFT: 5,
    PipeType.T_RIGHT: 5,
}

# Box-drawing glyph per pipe, used by the layout parser and the renderer
PIPE_GLYPHS: dict[PipeType, str] = {
    PipeType.HORIZONTAL: "─",
    PipeType.VERTICAL: "│",
    PipeType.ELBOW_TL: "┘",
    PipeType.ELBOW_TR: "└",
    PipeType.ELBOW_BL: "┐",
    PipeType.ELBOW_BR: "┌",
    PipeType.CROSS: "┼",
    PipeType.T_TOP: "┴",
    PipeType.T_BOTTOM: "┬",
    PipeType.T_LEFT: "┤",
    PipeType.T_RIGHT: "├",
}


def connections_of(pipe_type: PipeType) -> tuple[Direction, ...]:
    return PIPE_CONNECTIONS[pipe_type]


def can_enter(pipe_type: PipeType, travel: Direction) -> bool:
    """
    Check whether water travelling in `travel` can enter a pipe.

    Water moving right arrives through the cell's left wall, so the pipe
    needs an opening on the side opposite the travel direction.
    """
    return opposite(travel) in PIPE_CONNECTIONS[pipe_type]


def exit_directions(pipe_type: PipeType, travel: Direction) -> tuple[Direction, ...]:
    """
    Candidate exits for water entering with the given travel direction.

    Returns every opening except the entry wall, in catalog order, or an
    empty tuple if the pipe cannot be entered that way.
    """
    entry_wall = opposite(travel)
    connections = PIPE_CONNECTIONS[pipe_type]
    if entry_wall not in connections:
        return ()
    return tuple(d for d in connections if d != entry_wall)


def weighted_random_type(rng: random.Random | None = None) -> PipeType:
    """Draw a pipe type from the weight table using a cumulative scan."""
    draw = rng.random() if rng is not None else random.random()
    total_weight = sum(PIPE_WEIGHTS.values())
    remaining = draw * total_weight

    for pipe_type, weight in PIPE_WEIGHTS.items():
        remaining -= weight
        if remaining <= 0:
            return pipe_type

    # Only reachable through floating point rounding
    return PipeType.HORIZONTAL


def create_pipe(pipe_type: PipeType) -> PipeData:
    """Create a dry pipe instance for placement in a grid cell."""
    return PipeData(type=pipe_type, connections=PIPE_CONNECTIONS[pipe_type])


def all_pipe_types() -> list[PipeType]:
    return list(PIPE_CONNECTIONS)


def is_cross(pipe_type: PipeType) -> bool:
    """Cross pipes are the only pieces water can usefully pass twice."""
    return pipe_type is PipeType.CROSS
