"""Tests for the pipe catalog."""

import random
from collections import Counter

import pytest

from pipe_catalog import (
    PIPE_CONNECTIONS,
    PIPE_WEIGHTS,
    all_pipe_types,
    can_enter,
    connections_of,
    create_pipe,
    exit_directions,
    is_cross,
    weighted_random_type,
)
from pipe_types import Direction, PipeType


class TestConnections:
    """Tests for the fixed connection table."""

    def test_every_type_has_connections(self) -> None:
        """All eleven pipe types are in the catalog."""
        assert len(PIPE_CONNECTIONS) == 11
        assert set(all_pipe_types()) == set(PipeType)

    def test_straight_pipes(self) -> None:
        """Straight pipes connect opposite walls."""
        assert set(connections_of(PipeType.HORIZONTAL)) == {Direction.LEFT, Direction.RIGHT}
        assert set(connections_of(PipeType.VERTICAL)) == {Direction.TOP, Direction.BOTTOM}

    def test_cross_connects_all_sides(self) -> None:
        """Cross order is top, right, bottom, left."""
        assert connections_of(PipeType.CROSS) == (
            Direction.TOP,
            Direction.RIGHT,
            Direction.BOTTOM,
            Direction.LEFT,
        )

    def test_t_pipes_have_three_openings(self) -> None:
        """Each T pipe has three openings and lacks one side."""
        missing = {
            PipeType.T_TOP: Direction.BOTTOM,
            PipeType.T_BOTTOM: Direction.TOP,
            PipeType.T_LEFT: Direction.RIGHT,
            PipeType.T_RIGHT: Direction.LEFT,
        }
        for pipe_type, absent in missing.items():
            assert len(connections_of(pipe_type)) == 3
            assert absent not in connections_of(pipe_type)

    def test_created_pipe_is_dry(self) -> None:
        """New pipe instances start empty with catalog connections."""
        pipe = create_pipe(PipeType.ELBOW_BR)
        assert pipe.type is PipeType.ELBOW_BR
        assert pipe.connections == (Direction.BOTTOM, Direction.RIGHT)
        assert pipe.water_level == 0
        assert pipe.water_from is None

    def test_is_cross(self) -> None:
        """Only the cross pipe counts as a cross."""
        assert is_cross(PipeType.CROSS)
        assert not any(is_cross(t) for t in PipeType if t is not PipeType.CROSS)


class TestEntryAndExit:
    """Tests for entry checks and exit resolution."""

    def test_travelling_right_enters_through_left_wall(self) -> None:
        """A horizontal pipe accepts water moving right."""
        assert can_enter(PipeType.HORIZONTAL, Direction.RIGHT)
        assert can_enter(PipeType.HORIZONTAL, Direction.LEFT)

    def test_vertical_rejects_horizontal_travel(self) -> None:
        """A vertical pipe has no left or right opening."""
        assert not can_enter(PipeType.VERTICAL, Direction.RIGHT)
        assert not can_enter(PipeType.VERTICAL, Direction.LEFT)

    def test_elbow_entry(self) -> None:
        """elbow_bl takes water moving right (left wall) or moving up (bottom wall)."""
        assert can_enter(PipeType.ELBOW_BL, Direction.RIGHT)
        assert can_enter(PipeType.ELBOW_BL, Direction.TOP)
        assert not can_enter(PipeType.ELBOW_BL, Direction.LEFT)
        assert not can_enter(PipeType.ELBOW_BL, Direction.BOTTOM)

    def test_two_way_pipes_have_single_exit(self) -> None:
        """Straight and elbow pipes always resolve to exactly one exit."""
        two_way = [t for t in PipeType if len(connections_of(t)) == 2]
        for pipe_type in two_way:
            for travel in Direction:
                exits = exit_directions(pipe_type, travel)
                if can_enter(pipe_type, travel):
                    assert len(exits) == 1
                else:
                    assert exits == ()

    def test_elbow_turns(self) -> None:
        """Water moving right into elbow_bl leaves heading down."""
        assert exit_directions(PipeType.ELBOW_BL, Direction.RIGHT) == (Direction.BOTTOM,)
        assert exit_directions(PipeType.ELBOW_TR, Direction.BOTTOM) == (Direction.RIGHT,)

    def test_cross_exits_keep_catalog_order(self) -> None:
        """Cross entered while travelling left offers top, bottom, left in that order."""
        assert exit_directions(PipeType.CROSS, Direction.LEFT) == (
            Direction.TOP,
            Direction.BOTTOM,
            Direction.LEFT,
        )

    def test_t_pipe_exits(self) -> None:
        """t_bottom entered from the left offers right then bottom."""
        assert exit_directions(PipeType.T_BOTTOM, Direction.RIGHT) == (
            Direction.RIGHT,
            Direction.BOTTOM,
        )

    def test_rejected_entry_has_no_exits(self) -> None:
        """A pipe that cannot be entered gives no exits."""
        assert exit_directions(PipeType.T_TOP, Direction.TOP) == ()


class TestWeightedRandom:
    """Tests for weighted pipe generation."""

    def test_weights_sum_to_100(self) -> None:
        """The weight table is a percentage table."""
        assert sum(PIPE_WEIGHTS.values()) == 100

    def test_always_returns_a_pipe_type(self) -> None:
        """Every draw is a valid pipe type."""
        rng = random.Random(7)
        for _ in range(1000):
            assert isinstance(weighted_random_type(rng), PipeType)

    def test_works_without_rng(self) -> None:
        """The module-level generator is used when no rng is given."""
        assert isinstance(weighted_random_type(), PipeType)

    def test_distribution_matches_weights(self) -> None:
        """Frequencies over many draws follow the weight table."""
        rng = random.Random(12345)
        draws = 100_000
        counts = Counter(weighted_random_type(rng) for _ in range(draws))

        for pipe_type, weight in PIPE_WEIGHTS.items():
            assert counts[pipe_type] / draws == pytest.approx(weight / 100, abs=0.01)

    def test_zero_draw_selects_first_type(self) -> None:
        """A draw of exactly zero lands on the first catalog entry."""

        class ZeroRandom(random.Random):
            def random(self) -> float:
                return 0.0

        assert weighted_random_type(ZeroRandom()) is PipeType.HORIZONTAL

    def test_top_of_range_selects_last_type(self) -> None:
        """A draw just under 1 lands on the last catalog entry."""

        class HighRandom(random.Random):
            def random(self) -> float:
                return 0.9999

        assert weighted_random_type(HighRandom()) is PipeType.T_RIGHT
