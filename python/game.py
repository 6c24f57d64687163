"""
Game session: sequences the countdown, water flow and end of a run.

The session moves waiting -> playing -> (won | flooded). Terminal states are
left only through restart(). A frame loop drives the session by calling
update(delta) with elapsed seconds; flow ticks owed for a long frame are all
processed in that call rather than dropped.
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import replace

from flow import Flow
from grid import Grid
from pipe_catalog import is_cross, weighted_random_type
from pipe_types import GameState, GameStatus, PipeType
from rules import DEFAULT_RULES, GameRules
from sound import SoundCue, SoundFn

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = frozenset({GameStatus.WAITING, GameStatus.PLAYING})


class Game:
    """One player's session over a single grid."""

    def __init__(
        self,
        rules: GameRules = DEFAULT_RULES,
        rng: random.Random | None = None,
        on_sound: SoundFn | None = None,
    ) -> None:
        self.rules = rules
        self._rng = rng or random.Random()
        self._on_sound = on_sound
        self._grid = Grid(rules.grid_width, rules.grid_height, self._rng)
        self._flow = Flow(self._grid)
        self._queue: list[PipeType] = []
        self._flow_accumulator = 0.0
        self._pipes_placed = 0
        self._state = self._create_initial_state()
        self.start()

    def _create_initial_state(self) -> GameState:
        return GameState(
            status=GameStatus.WAITING,
            score=0,
            length=0,
            discards=self.rules.max_discards,
            countdown=self.rules.start_delay,
            flow_timer=self.rules.flow_interval,
            paused=False,
            elapsed_time=0.0,
        )

    def _play(self, cue: SoundCue) -> None:
        if self._on_sound is not None:
            self._on_sound(cue)

    def _next_pipe(self) -> PipeType:
        return weighted_random_type(self._rng)

    def start(self) -> None:
        """Reset grid, flow, queue and state to the beginning of a run."""
        self._grid.reset()
        self._flow.start()
        self._queue = [self._next_pipe() for _ in range(self.rules.queue_size)]
        self._state = self._create_initial_state()
        self._flow_accumulator = 0.0
        self._pipes_placed = 0
        logger.info("New run: entry at %s", self._grid.entry_position)

    def restart(self) -> None:
        self.start()

    # -------------------------------------------------------------------------
    # Read-only views
    # -------------------------------------------------------------------------

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def flow(self) -> Flow:
        return self._flow

    def get_queue(self) -> tuple[PipeType, ...]:
        return tuple(self._queue)

    def get_current_pipe(self) -> PipeType | None:
        return self._queue[0] if self._queue else None

    def get_state(self) -> GameState:
        return replace(self._state)

    def get_status(self) -> GameStatus:
        return self._state.status

    def get_score(self) -> int:
        return self._state.score

    def get_length(self) -> int:
        return self._state.length

    def get_countdown(self) -> float:
        return self._state.countdown

    def get_discards_remaining(self) -> int:
        return self._state.discards

    def get_pipes_placed(self) -> int:
        return self._pipes_placed

    def can_place_at(self, x: int, y: int) -> bool:
        return self._grid.is_valid_placement(x, y)

    # -------------------------------------------------------------------------
    # Player commands
    # -------------------------------------------------------------------------

    def place_pipe(self, x: int, y: int) -> bool:
        """Place the front of the queue at (x, y)."""
        if self._state.status not in ACTIVE_STATUSES:
            return False

        current = self.get_current_pipe()
        if current is None:
            return False

        if not self._grid.place_pipe(x, y, current):
            return False

        self._queue.pop(0)
        self._queue.append(self._next_pipe())
        self._pipes_placed += 1
        self._play(SoundCue.PIPE_PLACE)
        return True

    def discard(self) -> bool:
        """Throw away the front of the queue, spending one discard."""
        if self._state.status not in ACTIVE_STATUSES:
            return False
        if self._state.discards <= 0 or not self._queue:
            return False

        self._queue.pop(0)
        self._queue.append(self._next_pipe())
        self._state.discards -= 1
        self._play(SoundCue.PIPE_DISCARD)
        return True

    def toggle_pause(self) -> bool:
        """Pause or resume. Only has an effect while water is flowing."""
        if self._state.status is not GameStatus.PLAYING:
            return False
        self._state.paused = not self._state.paused
        logger.info("Game %s", "paused" if self._state.paused else "resumed")
        return True

    # -------------------------------------------------------------------------
    # Simulation
    # -------------------------------------------------------------------------

    def update(self, delta_time: float) -> None:
        """Advance the session clock by delta_time seconds."""
        state = self._state
        if state.status not in ACTIVE_STATUSES or state.paused or delta_time <= 0:
            return

        remaining = delta_time

        if state.status is GameStatus.WAITING:
            before = state.countdown
            if remaining < state.countdown:
                state.countdown -= remaining
                if math.ceil(state.countdown) < math.ceil(before):
                    self._play(SoundCue.COUNTDOWN)
                return
            # Countdown over; leftover time goes to the flow
            remaining -= state.countdown
            state.countdown = 0.0
            state.status = GameStatus.PLAYING
            logger.info("Countdown finished, water is flowing")

        state.elapsed_time += remaining
        state.flow_timer = self.rules.flow_interval_for(state.score)
        self._flow_accumulator += remaining

        while self._flow_accumulator >= state.flow_timer:
            self._flow_accumulator -= state.flow_timer
            self._advance_water()
            if state.status is not GameStatus.PLAYING:
                break

    def _advance_water(self) -> None:
        """One flow tick: move the water and score the new segment."""
        if not self._flow.advance():
            self.end_game()
            return

        state = self._state
        state.score += self.rules.points_per_segment
        state.length = self._flow.get_segments()

        pos = self._flow.get_current_position()
        pipe = self._grid.get_pipe_at(pos.x, pos.y)
        if pipe is not None and is_cross(pipe.type):
            visits = self._flow.get_path().count(pos)
            if visits > 1:
                state.score += self.rules.cross_bonus
                logger.debug("Cross bonus at %s (visit %d)", pos, visits)

        self._play(SoundCue.WATER_FLOW)

    def is_win(self) -> bool:
        return self._state.length >= self.rules.min_length

    def calculate_final_score(self) -> int:
        """Accumulated score plus the no-discard and speed bonuses."""
        rules = self.rules
        final_score = self._state.score

        if self._state.discards == rules.max_discards:
            final_score += rules.no_discard_bonus

        seconds_under_par = math.floor(rules.par_time - self._state.elapsed_time)
        if seconds_under_par > 0:
            final_score += rules.speed_bonus_per_second * seconds_under_par

        return final_score

    def end_game(self) -> None:
        """Resolve a finished run to won (with bonuses) or flooded."""
        if self._state.status not in ACTIVE_STATUSES:
            return

        if self.is_win():
            self._state.score = self.calculate_final_score()
            self._state.status = GameStatus.WON
            self._play(SoundCue.LEVEL_COMPLETE)
        else:
            self._state.status = GameStatus.FLOODED
            self._play(SoundCue.LEVEL_FAIL)

        self._state.paused = False
        logger.info(
            "Run ended %s: length %d, score %d",
            self._state.status.value,
            self._state.length,
            self._state.score,
        )
