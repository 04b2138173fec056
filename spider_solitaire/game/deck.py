"""Deck construction and shuffling."""

import random

from spider_solitaire.models.card import Card, Difficulty, Rank

# Spider always plays eight K-to-A sequences worth of cards
FULL_DECK_SEQUENCES = 8


class InvalidDifficultyError(ValueError):
    """Requested suit count is not 1, 2 or 4."""


def parse_difficulty(value: int | Difficulty) -> Difficulty:
    """Convert a suit count to a Difficulty.

    Raises:
        InvalidDifficultyError: If the value is not 1, 2 or 4.
    """
    try:
        return Difficulty(value)
    except ValueError:
        raise InvalidDifficultyError(f"Invalid difficulty: {value!r}") from None


class Deck:
    """Ordered pile of cards; the end of the list is the top."""

    def __init__(self, cards: list[Card] | None = None):
        self.cards: list[Card] = list(cards) if cards else []

    @classmethod
    def build(cls, difficulty: int | Difficulty, packs: int = 2) -> "Deck":
        """Build an unshuffled deck, all cards face down.

        For each pack, one card per rank A..K is emitted for each suit in play
        (spades, hearts, diamonds, clubs, first N). The default of two packs
        gives ``2 * N * 13`` cards.

        Args:
            difficulty: Number of suits (1, 2 or 4).
            packs: Number of passes over the suit set.

        Raises:
            InvalidDifficultyError: If difficulty is not 1, 2 or 4.
        """
        level = parse_difficulty(difficulty)
        cards = [
            Card(rank=rank, suit=suit)
            for _ in range(packs)
            for suit in level.suits
            for rank in Rank
        ]
        return cls(cards)

    @classmethod
    def for_game(cls, difficulty: int | Difficulty, full_deck: bool = True) -> "Deck":
        """Build the deck a game is played with.

        With ``full_deck`` the suits are repeated so the deck always holds
        104 cards; otherwise it is the plain two-pack deck.
        """
        level = parse_difficulty(difficulty)
        if full_deck:
            return cls.build(level, packs=FULL_DECK_SEQUENCES // level.value)
        return cls.build(level)

    def shuffle(self, rng: random.Random | None = None) -> None:
        """Shuffle in place (Fisher-Yates via ``Random.shuffle``).

        Args:
            rng: Random source. Pass ``random.Random(seed)`` for a
                reproducible order.
        """
        (rng or random.Random()).shuffle(self.cards)

    def draw(self) -> Card:
        """Remove and return the top card."""
        return self.cards.pop()

    def is_empty(self) -> bool:
        return not self.cards

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)
