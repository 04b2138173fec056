"""Game logger for detailed game replay."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Sequence, TextIO

from pydantic import BaseModel

from spider_solitaire.models.card import Card

from .formatters import format_cards, format_columns


class GameLogConfig(BaseModel):
    """Configuration for game logging."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class GameLogger:
    """Logger for game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    This allows step-by-step replay of the game.
    """

    def __init__(self, config: GameLogConfig | None = None):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
        """
        self.config = config or GameLogConfig()
        self._file: TextIO | None = None

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = Path(self.config.output_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_game_start(
        self,
        difficulty: int,
        seed: int | None,
        is_challenge: bool,
        columns: Sequence[Sequence[Card]],
        stock_count: int,
    ) -> None:
        """Log the initial deal.

        Args:
            difficulty: Number of suits in play.
            seed: Shuffle seed, if any.
            is_challenge: Whether this is a daily challenge deal.
            columns: Dealt columns (face-down cards are hidden).
            stock_count: Cards left in the stock.
        """
        self._write({
            "type": "game_start",
            "timestamp": datetime.now().isoformat(),
            "difficulty": difficulty,
            "seed": seed,
            "challenge": is_challenge,
            "stock": stock_count,
            "columns": format_columns(columns),
        })

    def log_move(
        self,
        move_num: int,
        from_column: int,
        to_column: int,
        cards: Sequence[Card],
        revealed: bool,
        score: int,
    ) -> None:
        """Log an accepted run move.

        Args:
            move_num: Move counter after the move.
            from_column: Source column index.
            to_column: Destination column index.
            cards: Cards moved, bottom first.
            revealed: Whether the source column exposed a new card.
            score: Score after the move.
        """
        self._write({
            "type": "move",
            "move": move_num,
            "from": from_column,
            "to": to_column,
            "cards": format_cards(cards),
            "revealed": revealed,
            "score": score,
        })

    def log_draw(self, move_num: int, cards: Sequence[Card], stock_left: int, score: int) -> None:
        """Log a stock draw (one card per column)."""
        self._write({
            "type": "draw",
            "move": move_num,
            "cards": format_cards(cards),
            "stock": stock_left,
            "score": score,
        })

    def log_undo(self, move_num: int, from_column: int, to_column: int, count: int, score: int) -> None:
        """Log an undone move. Columns are those of the original move."""
        self._write({
            "type": "undo",
            "move": move_num,
            "from": from_column,
            "to": to_column,
            "count": count,
            "score": score,
        })

    def log_complete(self, column: int, cards: Sequence[Card], completed: int, score: int) -> None:
        """Log a completed K..A sequence removed from a column."""
        self._write({
            "type": "complete",
            "column": column,
            "cards": format_cards(cards),
            "completed": completed,
            "score": score,
        })

    def log_game_end(
        self,
        moves: int,
        elapsed_time: float,
        score: int,
        final_score: int,
    ) -> None:
        """Log a won game with its bonus-adjusted score."""
        self._write({
            "type": "game_end",
            "timestamp": datetime.now().isoformat(),
            "moves": moves,
            "elapsed": elapsed_time,
            "score": score,
            "final_score": final_score,
        })
