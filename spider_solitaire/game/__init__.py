"""Game logic."""

from .daily import DailyChallenge, daily_challenge, month_challenges
from .deck import Deck, InvalidDifficultyError
from .engine import GameEngine
from .hints import Hint, find_hint
from .result import CompletedSequence, EngineError, EngineResult, MoveRecord
from .tableau import Tableau
from .validator import MovePolicy, ValidationResult, is_valid_run

__all__ = [
    "CompletedSequence",
    "DailyChallenge",
    "Deck",
    "EngineError",
    "EngineResult",
    "GameEngine",
    "Hint",
    "InvalidDifficultyError",
    "MovePolicy",
    "MoveRecord",
    "Tableau",
    "ValidationResult",
    "daily_challenge",
    "find_hint",
    "is_valid_run",
    "month_challenges",
]
