"""Logging utilities and game state display."""

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from spider_solitaire.game.engine import GameEngine
    from spider_solitaire.game.hints import Hint
    from spider_solitaire.storage.save_store import Statistics


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )


def format_time(seconds: float) -> str:
    """Format elapsed seconds as MM:SS."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class GameDisplay:
    """Display game state to stdout."""

    def __init__(self, show_face_down: bool = False):
        """Initialize display.

        Args:
            show_face_down: Whether to show face-down cards (debugging)
        """
        self.show_face_down = show_face_down

    def print_separator(self) -> None:
        """Print a separator line."""
        print("=" * 60)

    def render_columns(self, engine: "GameEngine") -> list[str]:
        """Render each column as one line, bottom card first."""
        lines = []
        for column in engine.columns:
            cells = []
            for i, card in enumerate(column):
                if card.face_up:
                    cells.append(f"{i}:{card}")
                elif self.show_face_down:
                    cells.append(f"{i}:({card})")
                else:
                    cells.append(f"{i}:##")
            lines.append(f"[{column.index}] " + " ".join(cells) if cells else f"[{column.index}] --")
        return lines

    def print_status(self, engine: "GameEngine") -> None:
        """Print score, moves, time and progress."""
        print(
            f"Score: {engine.score} | Moves: {engine.moves} | "
            f"Time: {format_time(engine.elapsed_time)} | "
            f"Sets: {engine.completed_set_count}/{engine.win_target} | "
            f"Stock: {engine.stock_count}"
        )

    def print_board(self, engine: "GameEngine") -> None:
        """Print the full board."""
        self.print_separator()
        self.print_status(engine)
        for line in self.render_columns(engine):
            print(line)

    def print_error(self, message: str) -> None:
        print(f"  !! {message}")

    def print_hint(self, hint: "Hint | None", can_draw: bool) -> None:
        """Print a move suggestion."""
        if hint is not None:
            print(f"  Hint: m {hint.from_column} {hint.card_index} {hint.to_column}")
        elif can_draw:
            print("  Hint: deal from the stock (d)")
        else:
            print("  No moves found")

    def print_win(self, engine: "GameEngine") -> None:
        """Print the win summary."""
        self.print_separator()
        print("YOU WIN!")
        print(f"  Score: {engine.score}")
        print(f"  Bonus: {engine.win_bonus()}")
        print(f"  Final score: {engine.final_score}")
        print(f"  Moves: {engine.moves}  Time: {format_time(engine.elapsed_time)}")
        self.print_separator()

    def print_statistics(self, stats: "Statistics") -> None:
        """Print lifetime statistics."""
        fastest = format_time(stats.fastest_time) if stats.fastest_time else "-"
        print(
            f"Played: {stats.games_played}  Won: {stats.games_won}  "
            f"Best: {stats.best_score}  Fastest: {fastest}"
        )
