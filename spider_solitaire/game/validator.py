"""Run validation and destination acceptance rules."""

from dataclasses import dataclass
from typing import Sequence

from spider_solitaire.models.card import Card, Difficulty


@dataclass
class ValidationResult:
    """Result of checking a run against a destination."""

    is_valid: bool
    error_message: str = ""


def is_valid_run(cards: Sequence[Card]) -> bool:
    """Check that cards form a draggable run.

    Empty and single-card runs are valid. Longer runs must be face up, all one
    suit, and descend by exactly one rank per card.
    """
    if len(cards) <= 1:
        return True

    if not all(card.face_up for card in cards):
        return False

    suit = cards[0].suit
    if any(card.suit != suit for card in cards):
        return False

    return all(
        upper.rank == lower.rank + 1
        for upper, lower in zip(cards, cards[1:])
    )


class MovePolicy:
    """Decides whether a destination pile accepts a run.

    easy: rank adjacency only.
    medium: rank adjacency; same suit only with ``require_same_suit_for_medium``.
    hard: rank adjacency and same suit.
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.EASY,
        require_same_suit_for_medium: bool = False,
    ):
        self.difficulty = difficulty
        self.require_same_suit_for_medium = require_same_suit_for_medium

    @property
    def requires_same_suit(self) -> bool:
        if self.difficulty == Difficulty.HARD:
            return True
        if self.difficulty == Difficulty.MEDIUM:
            return self.require_same_suit_for_medium
        return False

    def validate(self, top: Card | None, run: Sequence[Card]) -> ValidationResult:
        """Check whether ``run`` may be placed on a pile whose top is ``top``.

        Args:
            top: Top card of the destination, or None when the pile is empty.
            run: Cards being moved, bottom-most first.

        Returns:
            ValidationResult
        """
        if not run:
            return ValidationResult(is_valid=False, error_message="Nothing to move")

        # Empty piles accept anything
        if top is None:
            return ValidationResult(is_valid=True)

        if not top.face_up:
            return ValidationResult(
                is_valid=False,
                error_message="Destination top card is face down",
            )

        lead = run[0]
        if not lead.can_stack_on(top):
            return ValidationResult(
                is_valid=False,
                error_message=f"{lead} cannot be placed on {top}",
            )

        if self.requires_same_suit and not lead.same_suit(top):
            return ValidationResult(
                is_valid=False,
                error_message=f"Suit mismatch: {lead} on {top}",
            )

        return ValidationResult(is_valid=True)

    def accepts(self, top: Card | None, run: Sequence[Card]) -> bool:
        return self.validate(top, run).is_valid
