"""JSON save file for games, statistics and daily challenge results."""

import datetime
import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from spider_solitaire.models.game_state import GameState

logger = logging.getLogger(__name__)


class Statistics(BaseModel):
    """Lifetime player statistics."""

    games_played: int = 0
    games_won: int = 0
    best_score: int = 0
    fastest_time: float = 0.0  # 0 means no win recorded yet

    def record(self, won: bool, score: int = 0, elapsed_time: float = 0.0) -> None:
        """Count a finished game. Best score and time only ever improve."""
        self.games_played += 1
        if not won:
            return
        self.games_won += 1
        self.best_score = max(self.best_score, score)
        if elapsed_time > 0 and (self.fastest_time == 0 or elapsed_time < self.fastest_time):
            self.fastest_time = elapsed_time


class ChallengeRecord(BaseModel):
    """Result of a daily challenge."""

    completed: bool = False
    best_score: int = 0
    best_time: float = 0.0

    def record(self, score: int, elapsed_time: float) -> None:
        self.completed = True
        self.best_score = max(self.best_score, score)
        if self.best_time == 0 or elapsed_time < self.best_time:
            self.best_time = elapsed_time


class SaveData(BaseModel):
    """Everything kept in the save file."""

    # Kept raw so a damaged game is reported by the engine on restore
    saved_game: dict[str, Any] | None = None
    statistics: Statistics = Field(default_factory=Statistics)
    challenges: dict[str, ChallengeRecord] = Field(default_factory=dict)


class SaveStore:
    """Reads and writes a single JSON save file.

    Every mutating call writes the file immediately.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self.data = self._load()

    def _load(self) -> SaveData:
        if not self.path.exists():
            return SaveData()
        try:
            return SaveData.model_validate_json(self.path.read_text(encoding="utf-8"))
        except ValidationError as e:
            logger.warning(
                f"Unreadable save file {self.path}, starting fresh: {e.error_count()} error(s)"
            )
            return SaveData()

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.data.model_dump_json(indent=2), encoding="utf-8")

    # Saved game

    def save_game(self, state: GameState) -> None:
        self.data.saved_game = state.model_dump(mode="json")
        self._flush()
        logger.debug(f"Saved game to {self.path}")

    def load_game(self) -> dict[str, Any] | None:
        """Raw saved game, to be passed to ``GameEngine.restore``."""
        return self.data.saved_game

    def has_saved_game(self) -> bool:
        return self.data.saved_game is not None

    def clear_saved_game(self) -> None:
        self.data.saved_game = None
        self._flush()

    # Statistics

    @property
    def statistics(self) -> Statistics:
        return self.data.statistics

    def record_game(self, won: bool, score: int = 0, elapsed_time: float = 0.0) -> Statistics:
        self.data.statistics.record(won, score, elapsed_time)
        self._flush()
        return self.data.statistics

    # Daily challenges

    def challenge_record(self, day: datetime.date) -> ChallengeRecord:
        return self.data.challenges.get(day.isoformat(), ChallengeRecord())

    def record_challenge(self, day: datetime.date, score: int, elapsed_time: float) -> ChallengeRecord:
        record = self.data.challenges.setdefault(day.isoformat(), ChallengeRecord())
        record.record(score, elapsed_time)
        self._flush()
        return record

    def completed_challenges(self) -> int:
        return sum(1 for r in self.data.challenges.values() if r.completed)
