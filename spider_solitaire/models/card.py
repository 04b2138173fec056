"""Card, suit, rank and difficulty models."""

from enum import IntEnum

from pydantic import BaseModel, Field


class Suit(IntEnum):
    """Card suit (value is the deck-building order)."""

    SPADE = 0
    HEART = 1
    DIAMOND = 2
    CLUB = 3


class Rank(IntEnum):
    """Card rank. Value is the numeric order used for adjacency (A=1 .. K=13)."""

    ACE = 1
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13


class Difficulty(IntEnum):
    """Difficulty level. Value is the number of suits in play."""

    EASY = 1
    MEDIUM = 2
    HARD = 4

    @property
    def suits(self) -> list[Suit]:
        """Suits used at this difficulty (first N in deck order)."""
        return list(Suit)[: self.value]


# Map rank to display string
RANK_NAMES = {
    Rank.ACE: "A",
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
}

SUIT_SYMBOLS = {
    Suit.SPADE: "♠",
    Suit.HEART: "♥",
    Suit.DIAMOND: "♦",
    Suit.CLUB: "♣",
}

_RANKS_BY_NAME = {name: rank for rank, name in RANK_NAMES.items()}
_SUITS_BY_SYMBOL = {symbol: suit for suit, symbol in SUIT_SYMBOLS.items()}


def parse_rank(name: str) -> Rank:
    """Parse a rank display name ("A", "2" .. "10", "J", "Q", "K").

    Raises:
        ValueError: If the name is not a known rank.
    """
    try:
        return _RANKS_BY_NAME[name.strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown rank: {name!r}") from None


def parse_suit(symbol: str) -> Suit:
    """Parse a suit symbol. The emoji variation selector is ignored.

    Raises:
        ValueError: If the symbol is not a known suit.
    """
    try:
        return _SUITS_BY_SYMBOL[symbol.replace("\ufe0f", "").strip()]
    except KeyError:
        raise ValueError(f"Unknown suit: {symbol!r}") from None


class Card(BaseModel):
    """Single playing card.

    Rank and suit never change; only the face-up flag does. Two cards with the
    same rank and suit are interchangeable for the rules, so piles track cards
    by position rather than by equality.
    """

    rank: Rank = Field(frozen=True)
    suit: Suit = Field(frozen=True)
    face_up: bool = False

    def flip(self) -> None:
        """Turn the card over."""
        self.face_up = not self.face_up

    def can_stack_on(self, other: "Card") -> bool:
        """Check rank adjacency only (one lower than ``other``)."""
        return self.rank == other.rank - 1

    def same_suit(self, other: "Card") -> bool:
        return self.suit == other.suit

    def __str__(self) -> str:
        return f"{RANK_NAMES[self.rank]}{SUIT_SYMBOLS[self.suit]}"

    def __repr__(self) -> str:
        state = "up" if self.face_up else "down"
        return f"Card({self}, {state})"
