"""
Audio cues for the terminal front end.

The game core only knows about SoundCue values and a callback; everything
about whether and how a cue is heard lives here. A SoundSystem owns its
SoundConfig, and the entry point that builds it decides its lifetime.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from rich.console import Console

logger = logging.getLogger(__name__)


class SoundCue(Enum):
    """Moments the game signals to the audio layer."""

    PIPE_PLACE = "pipe_place"
    PIPE_DISCARD = "pipe_discard"
    WATER_FLOW = "water_flow"
    COUNTDOWN = "countdown"
    LEVEL_COMPLETE = "level_complete"
    LEVEL_FAIL = "level_fail"


SoundFn = Callable[[SoundCue], None]

# Number of terminal bells per cue; cues missing here are silent
CUE_BELLS: dict[SoundCue, int] = {
    SoundCue.PIPE_DISCARD: 1,
    SoundCue.COUNTDOWN: 1,
    SoundCue.LEVEL_COMPLETE: 2,
    SoundCue.LEVEL_FAIL: 3,
}


@dataclass
class SoundConfig:
    enabled: bool = True
    volume: float = 0.3  # 0.0 - 1.0

    def __post_init__(self) -> None:
        self.set_volume(self.volume)

    def set_volume(self, volume: float) -> None:
        self.volume = max(0.0, min(1.0, volume))

    @property
    def audible(self) -> bool:
        return self.enabled and self.volume > 0


class SoundSystem:
    """Plays cues as terminal bells. Never raises into the caller."""

    def __init__(self, config: SoundConfig | None = None, console: Console | None = None) -> None:
        self.config = config or SoundConfig()
        self._console = console
        self.last_cue: SoundCue | None = None

    @property
    def console(self) -> Console:
        if self._console is None:
            self._console = Console()
        return self._console

    def toggle(self) -> bool:
        self.config.enabled = not self.config.enabled
        return self.config.enabled

    def play(self, cue: SoundCue) -> None:
        self.last_cue = cue
        if not self.config.audible:
            return

        bells = CUE_BELLS.get(cue, 0)
        logger.debug("Sound cue %s (%d bells)", cue.value, bells)
        try:
            for _ in range(bells):
                self.console.bell()
        except (OSError, ValueError) as e:
            # Closed or missing terminal
            logger.warning("Could not play %s: %s", cue.value, e)

    __call__ = play
