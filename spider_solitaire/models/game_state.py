"""Persisted game state models."""

from collections import Counter
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator

from .card import RANK_NAMES, SUIT_SYMBOLS, Card, Difficulty, parse_rank, parse_suit

STATE_VERSION = 1
NUM_COLUMNS = 10
SEQUENCE_LENGTH = 13


class EngineStatus(str, Enum):
    """Lifecycle of a game session."""

    IDLE = "idle"  # No game dealt yet
    DEALING = "dealing"  # Building and dealing the deck
    PLAYING = "playing"
    WON = "won"  # Terminal


class CardState(BaseModel):
    """Persisted (rank, suit, face_up) triple."""

    rank: str
    suit: str
    face_up: bool = False

    @field_validator("rank")
    @classmethod
    def _check_rank(cls, value: str) -> str:
        return RANK_NAMES[parse_rank(value)]

    @field_validator("suit")
    @classmethod
    def _check_suit(cls, value: str) -> str:
        return SUIT_SYMBOLS[parse_suit(value)]

    @classmethod
    def from_card(cls, card: Card) -> "CardState":
        return cls(
            rank=RANK_NAMES[card.rank],
            suit=SUIT_SYMBOLS[card.suit],
            face_up=card.face_up,
        )

    def to_card(self) -> Card:
        return Card(rank=parse_rank(self.rank), suit=parse_suit(self.suit), face_up=self.face_up)


class GameState(BaseModel):
    """Snapshot of a game session.

    Validation rejects anything that could not have come out of a real game:
    wrong column count, suits outside the difficulty, card totals that do not
    add up to the deck size, more copies of a card than the deck holds, or a
    column left with its top card face down.
    """

    version: int = STATE_VERSION

    score: int = 500
    moves: int = 0
    elapsed_time: float = 0.0
    difficulty: Difficulty = Difficulty.EASY
    completed_set_count: int = 0
    deck_size: int = 104

    stock_count: int = 0
    stock: list[CardState] | None = None  # None: identities not saved
    columns: list[list[CardState]] = Field(default_factory=list)

    seed: int | None = None
    is_challenge: bool = False

    won: bool = False
    final_score: int | None = None

    @property
    def win_target(self) -> int:
        """Number of completed sequences needed to win."""
        return self.deck_size // SEQUENCE_LENGTH

    def tableau_count(self) -> int:
        """Total number of cards on the tableau."""
        return sum(len(column) for column in self.columns)

    @model_validator(mode="after")
    def _check_structure(self) -> "GameState":
        if self.version != STATE_VERSION:
            raise ValueError(f"Unsupported state version: {self.version}")

        if len(self.columns) != NUM_COLUMNS:
            raise ValueError(f"Expected {NUM_COLUMNS} columns, got {len(self.columns)}")

        n_suits = self.difficulty.value
        valid_sizes = {2 * n_suits * SEQUENCE_LENGTH, 8 * SEQUENCE_LENGTH}
        if self.deck_size not in valid_sizes:
            raise ValueError(f"Invalid deck size {self.deck_size} for {self.difficulty.name}")

        if not 0 <= self.completed_set_count <= self.win_target:
            raise ValueError(f"Invalid completed set count: {self.completed_set_count}")
        if self.won and self.completed_set_count != self.win_target:
            raise ValueError("Won game must have every sequence completed")

        if self.stock_count < 0 or self.stock_count % NUM_COLUMNS != 0:
            raise ValueError(f"Invalid stock count: {self.stock_count}")
        if self.stock is not None and len(self.stock) != self.stock_count:
            raise ValueError("Stock count does not match stock cards")

        total = (
            self.tableau_count()
            + self.stock_count
            + self.completed_set_count * SEQUENCE_LENGTH
        )
        if total != self.deck_size:
            raise ValueError(f"Card total {total} does not match deck size {self.deck_size}")

        allowed = {SUIT_SYMBOLS[suit] for suit in self.difficulty.suits}
        for card in self._all_cards():
            if card.suit not in allowed:
                raise ValueError(f"Suit {card.suit} not in play at {self.difficulty.name}")

        for index, column in enumerate(self.columns):
            if column and not column[-1].face_up:
                raise ValueError(f"Column {index} has a face-down top card")

        copies = self.copies_per_card
        counts = self.card_counts()
        for (rank, suit), count in counts.items():
            if count > copies:
                raise ValueError(f"{count} copies of {rank}{suit}, the deck holds {copies}")

        # Cards absent from tableau and stock must add up to whole sequences
        collectable = 0
        for suit in allowed:
            missing = {copies - counts[(rank, suit)] for rank in RANK_NAMES.values()}
            if self.stock is not None and len(missing) > 1:
                raise ValueError(f"Missing {suit} cards do not form complete sequences")
            collectable += min(missing)
        if collectable < self.completed_set_count:
            raise ValueError(
                f"Only {collectable} sequences can have been completed, "
                f"got {self.completed_set_count}"
            )

        return self

    @property
    def copies_per_card(self) -> int:
        """How many times each (rank, suit) pair appears in the deck."""
        return self.deck_size // (SEQUENCE_LENGTH * self.difficulty.value)

    def card_counts(self) -> Counter[tuple[str, str]]:
        """Count (rank, suit) pairs on the tableau and in the saved stock."""
        return Counter((card.rank, card.suit) for card in self._all_cards())

    def _all_cards(self) -> list[CardState]:
        cards = [card for column in self.columns for card in column]
        if self.stock:
            cards.extend(self.stock)
        return cards

    def to_json(self) -> str:
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: str | bytes) -> "GameState":
        return cls.model_validate_json(data)
