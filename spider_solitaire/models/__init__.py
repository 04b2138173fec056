"""Game models."""

from .card import Card, Difficulty, Rank, Suit
from .game_state import CardState, EngineStatus, GameState

__all__ = [
    "Card",
    "CardState",
    "Difficulty",
    "EngineStatus",
    "GameState",
    "Rank",
    "Suit",
]
