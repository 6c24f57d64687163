"""
Tuning constants for a conduit session.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GameRules:
    """Rules governing grid size, timing, queue and scoring."""

    grid_width: int = 7
    grid_height: int = 10

    # Timing (seconds)
    start_delay: float = 5.0  # Countdown before water flows
    flow_interval: float = 1.0  # Seconds per segment at score 0
    min_flow_interval: float = 0.3
    flow_speed_scale: float = 0.001  # Interval shrinks by this much per point
    min_length: int = 10  # Segments needed to win

    # Queue
    queue_size: int = 5
    max_discards: int = 3

    # Scoring
    points_per_segment: int = 10
    cross_bonus: int = 25
    no_discard_bonus: int = 200
    speed_bonus_per_second: int = 10
    par_time: float = 30.0

    def __post_init__(self) -> None:
        if self.grid_width <= 0 or self.grid_height <= 0:
            raise ValueError(
                f"Grid dimensions must be positive, got {self.grid_width}x{self.grid_height}"
            )
        if self.min_flow_interval <= 0 or self.flow_interval < self.min_flow_interval:
            raise ValueError(
                f"Invalid flow interval {self.flow_interval} (minimum {self.min_flow_interval})"
            )
        if self.queue_size <= 0:
            raise ValueError(f"Queue size must be positive, got {self.queue_size}")
        if self.start_delay < 0 or self.max_discards < 0:
            raise ValueError("start_delay and max_discards must not be negative")

    def flow_interval_for(self, score: int) -> float:
        """Seconds per flow tick at the given score; shrinks as score grows."""
        return max(self.flow_interval - score * self.flow_speed_scale, self.min_flow_interval)


DEFAULT_RULES = GameRules()

GRID_WIDTH = DEFAULT_RULES.grid_width
GRID_HEIGHT = DEFAULT_RULES.grid_height
START_DELAY = DEFAULT_RULES.start_delay
FLOW_INTERVAL = DEFAULT_RULES.flow_interval
MIN_FLOW_INTERVAL = DEFAULT_RULES.min_flow_interval
FLOW_SPEED_SCALE = DEFAULT_RULES.flow_speed_scale
MIN_LENGTH = DEFAULT_RULES.min_length
QUEUE_SIZE = DEFAULT_RULES.queue_size
MAX_DISCARDS = DEFAULT_RULES.max_discards
POINTS_PER_SEGMENT = DEFAULT_RULES.points_per_segment
CROSS_BONUS = DEFAULT_RULES.cross_bonus
NO_DISCARD_BONUS = DEFAULT_RULES.no_discard_bonus
SPEED_BONUS_PER_SECOND = DEFAULT_RULES.speed_bonus_per_second
PAR_TIME = DEFAULT_RULES.par_time
