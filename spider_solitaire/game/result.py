"""Result values returned by engine operations."""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING

from spider_solitaire.models.card import Card, Suit

if TYPE_CHECKING:
    from spider_solitaire.models.game_state import GameState


class EngineError(IntEnum):
    """Error codes from engine operations."""

    NONE = 0
    INVALID_DIFFICULTY = 1
    EMPTY_STOCK = 2
    BLOCKED_COLUMN = 3
    NOT_MOVABLE = 4
    ILLEGAL_DESTINATION = 5
    NO_HISTORY = 6
    CORRUPT_STATE = 7
    GAME_NOT_ACTIVE = 8


@dataclass
class CompletedSequence:
    """A K..A run removed from a column."""

    column: int
    suit: Suit
    cards: list[Card]


@dataclass
class MoveRecord:
    """Undo history entry for one accepted move."""

    from_column: int
    to_column: int
    count: int
    revealed: bool  # Source top card was turned face up by the move


@dataclass
class EngineResult:
    """Outcome of an engine operation.

    Failed operations leave the engine untouched.
    """

    error: EngineError = EngineError.NONE
    message: str = ""
    moved: list[Card] = field(default_factory=list)
    completed: list[CompletedSequence] = field(default_factory=list)
    revealed: bool = False
    won: bool = False
    state: "GameState | None" = None

    @property
    def ok(self) -> bool:
        return self.error == EngineError.NONE

    @classmethod
    def failure(cls, error: EngineError, message: str = "") -> "EngineResult":
        return cls(error=error, message=message or error.name.lower())
