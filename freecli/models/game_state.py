"""Game state models."""

from typing import Iterator

from pydantic import BaseModel, Field

from .card import ACE, MAX_SEED, Card, create_deck
from .move import Move

NUM_FREECELLS = 4
NUM_FOUNDATIONS = 4
NUM_COLUMNS = 8
DECK_SIZE = 52


def _empty_slots() -> list[Card | None]:
    return [None] * NUM_FREECELLS


def _empty_columns() -> list[list[Card]]:
    return [[] for _ in range(NUM_COLUMNS)]


class GameState(BaseModel):
    """Board, move history and seed of one Freecell game."""

    # Zones
    freecells: list[Card | None] = Field(
        default_factory=_empty_slots,
        min_length=NUM_FREECELLS,
        max_length=NUM_FREECELLS,
    )
    foundations: list[Card | None] = Field(  # Top card of each suit's pile
        default_factory=_empty_slots,
        min_length=NUM_FOUNDATIONS,
        max_length=NUM_FOUNDATIONS,
    )
    columns: list[list[Card]] = Field(
        default_factory=_empty_columns,
        min_length=NUM_COLUMNS,
        max_length=NUM_COLUMNS,
    )

    # Replay
    history: list[Move] = Field(default_factory=list)
    seed: int = Field(default=0, ge=0, le=MAX_SEED)

    # Feedback from the last rejected move (not part of the board)
    last_move_error: str | None = None

    def is_win(self) -> bool:
        """Check if every column and freecell has been cleared.

        Foundations are not inspected: no move discards a card, so an empty
        tableau means every card reached a foundation.
        """
        return all(not column for column in self.columns) and all(
            cell is None for cell in self.freecells
        )

    def iter_cards(self) -> Iterator[Card]:
        """Iterate over every card on the board.

        A foundation top of rank r stands for ranks 1..r of its suit.
        """
        for cell in self.freecells:
            if cell is not None:
                yield cell
        for top in self.foundations:
            if top is not None:
                for rank in range(ACE, top.rank + 1):
                    yield Card(rank=rank, suit=top.suit)
        for column in self.columns:
            yield from column

    def card_count(self) -> int:
        """Get number of cards on the board."""
        return sum(1 for _ in self.iter_cards())

    def is_consistent(self) -> bool:
        """Check that the board holds each of the 52 cards exactly once.

        Also checks that every foundation pile sits in its suit's slot.
        """
        for index, top in enumerate(self.foundations):
            if top is not None and top.suit.foundation_index != index:
                return False

        return self.card_count() == DECK_SIZE and set(self.iter_cards()) == set(create_deck())

    def clear_error(self) -> None:
        """Drop the last move error."""
        self.last_move_error = None

    def __str__(self) -> str:
        placed = sum(top.rank for top in self.foundations if top is not None)
        return f"Game seed={self.seed}, {len(self.history)} moves, {placed}/{DECK_SIZE} on foundations"
