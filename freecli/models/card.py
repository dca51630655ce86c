"""Card model and deck construction."""

import random
from enum import Enum

from pydantic import BaseModel, Field


class Suit(str, Enum):
    """Card suit (values match the save file tags)."""

    SPADES = "Spades"
    HEARTS = "Hearts"
    DIAMONDS = "Diamonds"
    CLUBS = "Clubs"

    @property
    def color(self) -> "Color":
        """Get the color of this suit."""
        if self in (Suit.HEARTS, Suit.DIAMONDS):
            return Color.RED
        return Color.BLACK

    @property
    def foundation_index(self) -> int:
        """Get the foundation pile index reserved for this suit."""
        return FOUNDATION_INDEX[self]


class Color(str, Enum):
    """Card color."""

    RED = "red"
    BLACK = "black"


# Foundation pile order
FOUNDATION_INDEX = {
    Suit.SPADES: 0,
    Suit.HEARTS: 1,
    Suit.DIAMONDS: 2,
    Suit.CLUBS: 3,
}

# Suit order used when building a fresh deck
DECK_SUIT_ORDER = [Suit.SPADES, Suit.HEARTS, Suit.CLUBS, Suit.DIAMONDS]

ACE = 1
KING = 13

# Map rank to display string
RANK_NAMES = {
    1: "A",
    11: "J",
    12: "Q",
    13: "K",
}

SUIT_SYMBOLS = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}

# Largest seed accepted (unsigned 64-bit)
MAX_SEED = 2**64 - 1


class Card(BaseModel, frozen=True):
    """Single card representation."""

    rank: int = Field(ge=ACE, le=KING)
    suit: Suit

    @property
    def color(self) -> Color:
        """Get card color derived from the suit."""
        return self.suit.color

    @property
    def rank_label(self) -> str:
        """Get rank label (A, 2-10, J, Q, K)."""
        return RANK_NAMES.get(self.rank, str(self.rank))

    @property
    def suit_symbol(self) -> str:
        """Get the unicode suit symbol."""
        return SUIT_SYMBOLS[self.suit]

    def can_stack_onto(self, other: "Card") -> bool:
        """Check if this card may be placed on top of another in a column.

        Args:
            other: Card currently at the top of the destination column.

        Returns:
            True if colors alternate and this card is exactly one rank lower.
        """
        if self.color == other.color:
            return False
        return self.rank == other.rank - 1

    def __str__(self) -> str:
        return f"{self.rank_label}{self.suit_symbol}"

    def __repr__(self) -> str:
        return f"Card(rank={self.rank}, suit={self.suit.value})"


def create_deck() -> list[Card]:
    """Create an ordered 52-card deck."""
    return [
        Card(rank=rank, suit=suit)
        for suit in DECK_SUIT_ORDER
        for rank in range(ACE, KING + 1)
    ]


def generate_shuffled_deck(seed: int) -> list[Card]:
    """Create a deck shuffled deterministically from a seed.

    Args:
        seed: Unsigned 64-bit seed. The same seed always yields the same order.

    Returns:
        List of 52 cards in dealing order.
    """
    deck = create_deck()
    random.Random(seed).shuffle(deck)
    return deck
