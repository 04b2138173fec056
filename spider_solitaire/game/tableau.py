"""Tableau column: a single pile of cards on the playing field."""

from typing import Iterator, Sequence

from spider_solitaire.models.card import Card, Rank
from spider_solitaire.models.game_state import SEQUENCE_LENGTH

from .validator import MovePolicy, ValidationResult, is_valid_run


class Tableau:
    """One of the ten playing columns.

    Index 0 is the bottom (first dealt) card, the last card is the top.
    """

    def __init__(self, index: int, policy: MovePolicy | None = None):
        self.index = index
        self.policy = policy or MovePolicy()
        self.cards: list[Card] = []

    @property
    def top(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    def is_empty(self) -> bool:
        return not self.cards

    def deal(self, card: Card, face_up: bool = False) -> None:
        """Place a card on top, setting its face."""
        card.face_up = face_up
        self.cards.append(card)

    def accept(self, run: Sequence[Card]) -> None:
        """Append an already validated run."""
        self.cards.extend(run)

    def validate(self, run: Sequence[Card]) -> ValidationResult:
        return self.policy.validate(self.top, run)

    def can_accept(self, run: Sequence[Card]) -> bool:
        """Check whether ``run`` can be dropped on this column."""
        return self.validate(run).is_valid

    def movable_run(self, card_index: int) -> list[Card] | None:
        """Get the run that would be picked up by grabbing ``card_index``.

        The card must be face up and everything from it to the top must form a
        valid run. Returns None otherwise.
        """
        if not 0 <= card_index < len(self.cards):
            return None
        if not self.cards[card_index].face_up:
            return None

        run = self.cards[card_index:]
        if not is_valid_run(run):
            return None
        return list(run)

    def movable_indices(self) -> list[int]:
        """Indices from which a run can be picked up, longest run first."""
        return [i for i in range(len(self.cards)) if self.movable_run(i) is not None]

    def flip_top(self) -> bool:
        """Turn the top card face up if it is face down.

        Returns:
            True if a card was revealed.
        """
        top = self.top
        if top is not None and not top.face_up:
            top.face_up = True
            return True
        return False

    def take(self, length: int) -> list[Card]:
        """Remove the top ``length`` cards without touching the rest."""
        if not 0 < length <= len(self.cards):
            raise ValueError(f"Cannot take {length} cards from {len(self.cards)}")
        taken = self.cards[-length:]
        del self.cards[-length:]
        return taken

    def remove_top_run(self, length: int) -> tuple[list[Card], bool]:
        """Remove the top ``length`` cards and expose the card below.

        Returns:
            (removed cards, whether a face-down card was revealed)
        """
        removed = self.take(length)
        return removed, self.flip_top()

    def find_completed_sequence(self) -> int | None:
        """Find the start index of a face-up K..A same-suit block.

        Every position is scanned, not just the last thirteen cards.
        """
        for start in range(len(self.cards) - SEQUENCE_LENGTH + 1):
            block = self.cards[start:start + SEQUENCE_LENGTH]
            if block[0].rank == Rank.KING and block[-1].rank == Rank.ACE and is_valid_run(block):
                return start
        return None

    def extract_completed_sequence(self) -> list[Card] | None:
        """Remove a completed K..A sequence if the column holds one.

        The new top card is turned face up if needed.

        Returns:
            The thirteen removed cards (K first), or None.
        """
        start = self.find_completed_sequence()
        if start is None:
            return None

        sequence = self.cards[start:start + SEQUENCE_LENGTH]
        del self.cards[start:start + SEQUENCE_LENGTH]
        self.flip_top()
        return sequence

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __str__(self) -> str:
        shown = " ".join(str(c) if c.face_up else "##" for c in self.cards)
        return f"[{self.index}] {shown}"
