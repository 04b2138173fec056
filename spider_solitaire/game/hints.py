"""Hint search over the tableau."""

from dataclasses import dataclass
from typing import Sequence

from .tableau import Tableau


@dataclass(frozen=True)
class Hint:
    """A legal move suggestion."""

    from_column: int
    card_index: int
    to_column: int


def find_hint(columns: Sequence[Tableau]) -> Hint | None:
    """Find a legal move, preferring non-empty destinations.

    Runs are tried longest first. Moving an entire column into an empty one
    changes nothing and is never suggested.

    Returns:
        The first Hint found, or None if only a stock draw (or nothing) is left.
    """
    fallback: Hint | None = None

    for source in columns:
        for card_index in source.movable_indices():
            run = source.cards[card_index:]
            for dest in columns:
                if dest is source or not dest.can_accept(run):
                    continue
                if not dest.is_empty():
                    return Hint(source.index, card_index, dest.index)
                if card_index > 0 and fallback is None:
                    fallback = Hint(source.index, card_index, dest.index)

    return fallback
