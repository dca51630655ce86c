"""Formatters for game log output."""

from freecli.models.card import Card, Suit
from freecli.models.move import Move, format_location

# Suit codes for log output
SUIT_CODES: dict[Suit, str] = {
    Suit.SPADES: "S",
    Suit.HEARTS: "H",
    Suit.DIAMONDS: "D",
    Suit.CLUBS: "C",
}


def format_card(card: Card | None) -> str:
    """Format a single card to string.

    Args:
        card: Card to format (None for an empty slot).

    Returns:
        Formatted string (e.g., "SA" for the Ace of Spades, "H10", "" if empty).
    """
    if card is None:
        return ""
    return f"{SUIT_CODES[card.suit]}{card.rank_label}"


def format_cards(cards: list[Card]) -> str:
    """Format a column to comma-separated string.

    Args:
        cards: Cards from bottom to top.

    Returns:
        Comma-separated card strings (e.g., "SK,HQ,C9").
        Empty string if no cards.
    """
    return ",".join(format_card(c) for c in cards)


def format_move(move: Move) -> dict[str, str]:
    """Format a move as location tokens.

    Args:
        move: Move to format.

    Returns:
        Dict with "from" and "to" tokens (e.g., {"from": "c3", "to": "f0"}).
    """
    return {
        "from": format_location(move.from_, move.from_idx),
        "to": format_location(move.to, move.to_idx),
    }
