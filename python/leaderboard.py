"""
Per-level best scores, optionally persisted to a JSON file.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path

logger = logging.getLogger(__name__)

MAX_SCORES_PER_LEVEL = 5


@dataclass(frozen=True)
class LevelScore:
    name: str
    score: int
    pipes_used: int
    completed_at: str  # ISO 8601, UTC


class Leaderboard:
    """
    Top scores per level, highest first.

    Equal scores keep the order they were recorded in. With no path the
    board lives in memory only.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self._data: dict[int, list[LevelScore]] | None = None

    def load(self) -> dict[int, list[LevelScore]]:
        if self._data is not None:
            return self._data

        self._data = {}
        if self.path is None or not self.path.exists():
            return self._data

        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            self._data = {
                int(level): [LevelScore(**entry) for entry in entries]
                for level, entries in raw.items()
            }
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable leaderboard %s: %s", self.path, e)
            self._data = {}
        return self._data

    def _save(self) -> None:
        if self.path is None:
            return
        raw = {
            str(level): [asdict(entry) for entry in entries]
            for level, entries in self.load().items()
        }
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(raw, indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save leaderboard %s: %s", self.path, e)

    def record_score(self, level: int, name: str, score: int, pipes_used: int) -> int | None:
        """
        Record a finished run.

        Returns:
            1-based rank of the new entry, or None if it did not make the top list
        """
        data = self.load()
        entry = LevelScore(
            name=name,
            score=score,
            pipes_used=pipes_used,
            completed_at=datetime.now(timezone.utc).isoformat(),
        )

        scores = data.setdefault(level, [])
        scores.append(entry)
        scores.sort(key=lambda s: s.score, reverse=True)  # Stable: ties stay in insertion order

        rank = next(i for i, s in enumerate(scores) if s is entry)
        data[level] = scores[:MAX_SCORES_PER_LEVEL]
        self._save()

        logger.info("Recorded %s on level %d: %d (rank %d)", name, level, score, rank + 1)
        return rank + 1 if rank < MAX_SCORES_PER_LEVEL else None

    def get_level_scores(self, level: int) -> list[LevelScore]:
        return list(self.load().get(level, []))

    def get_best(self, level: int) -> LevelScore | None:
        scores = self.get_level_scores(level)
        return scores[0] if scores else None

    def get_total_levels_completed(self) -> int:
        return len(self.load())

    def clear(self) -> None:
        self._data = {}
        self._save()
