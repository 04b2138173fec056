"""Formatters for game log output."""

from typing import Iterable

from spider_solitaire.models.card import RANK_NAMES, Card, Rank, Suit, parse_rank

# Suit codes for log output
SUIT_CODES: dict[Suit, str] = {
    Suit.SPADE: "S",
    Suit.HEART: "H",
    Suit.DIAMOND: "D",
    Suit.CLUB: "C",
}

_SUITS_BY_CODE = {code: suit for suit, code in SUIT_CODES.items()}

HIDDEN_CARD = "??"


def format_card(card: Card, reveal: bool = False) -> str:
    """Format a single card to string.

    Args:
        card: Card to format.
        reveal: Show face-down cards instead of hiding them.

    Returns:
        Formatted string (e.g., "S10" for ten of spades, "??" if face down).
    """
    if not card.face_up and not reveal:
        return HIDDEN_CARD
    return f"{SUIT_CODES[card.suit]}{RANK_NAMES[card.rank]}"


def format_cards(cards: Iterable[Card], reveal: bool = False) -> str:
    """Format cards to a comma-separated string, bottom first.

    Empty string if no cards.
    """
    return ",".join(format_card(c, reveal) for c in cards)


def format_columns(columns: Iterable[Iterable[Card]], reveal: bool = False) -> dict[str, str]:
    """Format all columns to a dict keyed by column index."""
    return {str(i): format_cards(column, reveal) for i, column in enumerate(columns)}


def parse_card(code: str, face_up: bool = True) -> Card:
    """Parse a log code such as "SK" or "H10" back to a card.

    Raises:
        ValueError: If the code is malformed.
    """
    code = code.strip().upper()
    if len(code) < 2 or code[0] not in _SUITS_BY_CODE:
        raise ValueError(f"Invalid card code: {code!r}")
    rank: Rank = parse_rank(code[1:])
    return Card(rank=rank, suit=_SUITS_BY_CODE[code[0]], face_up=face_up)


def parse_cards(codes: str, face_up: bool = True) -> list[Card]:
    """Parse whitespace or comma separated card codes."""
    return [parse_card(c, face_up) for c in codes.replace(",", " ").split()]
