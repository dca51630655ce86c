"""Move validation for requested transfers."""

from dataclasses import dataclass
from enum import IntEnum

from freecli.models.card import ACE, Card
from freecli.models.game_state import (
    NUM_COLUMNS,
    NUM_FOUNDATIONS,
    NUM_FREECELLS,
    GameState,
)
from freecli.models.move import LocationType, Move, format_location


class MoveError(IntEnum):
    """Error codes for rejected moves."""

    NONE = 0
    INVALID_INDEX = 1  # Index outside its zone
    ILLEGAL_MOVE = 2  # Rule violation (stacking, foundation order, occupied cell, empty source)
    UNSUPPORTED = 3  # (from, to) pair that is never allowed
    INCONSISTENT = 4  # Placement failed after validation passed


@dataclass
class ValidationResult:
    """Result of move validation."""

    is_valid: bool
    error: MoveError = MoveError.NONE
    error_message: str = ""


ZONE_SIZES = {
    LocationType.COLUMN: NUM_COLUMNS,
    LocationType.FREECELL: NUM_FREECELLS,
    LocationType.FOUNDATION: NUM_FOUNDATIONS,
}

SUPPORTED_MOVES = {
    (LocationType.COLUMN, LocationType.COLUMN),
    (LocationType.COLUMN, LocationType.FREECELL),
    (LocationType.FREECELL, LocationType.COLUMN),
    (LocationType.COLUMN, LocationType.FOUNDATION),
    (LocationType.FREECELL, LocationType.FOUNDATION),
}


def check_index(location: LocationType, index: int) -> ValidationResult:
    """Check that an index exists within its zone.

    Args:
        location: Zone type
        index: Index into the zone

    Returns:
        ValidationResult
    """
    size = ZONE_SIZES[location]
    if 0 <= index < size:
        return ValidationResult(is_valid=True)
    return ValidationResult(
        is_valid=False,
        error=MoveError.INVALID_INDEX,
        error_message=f"Invalid {location.value.lower()} index {index} (expected 0-{size - 1})",
    )


def foundation_accepts(card: Card, top: Card | None) -> bool:
    """Check if a card extends a foundation pile.

    Args:
        card: Card to place
        top: Current top card of the card's foundation (None if empty)

    Returns:
        True for an Ace on an empty pile or the next rank of the same suit
    """
    if top is None:
        return card.rank == ACE
    return top.suit == card.suit and top.rank == card.rank - 1


def peek_card(state: GameState, location: LocationType, index: int) -> Card | None:
    """Get the movable card at a location without removing it.

    The index must already be in range.
    """
    if location == LocationType.COLUMN:
        column = state.columns[index]
        return column[-1] if column else None
    if location == LocationType.FREECELL:
        return state.freecells[index]
    return state.foundations[index]


class MoveValidator:
    """Validates requested moves against the board.

    Validation never mutates the game state.
    """

    def validate(self, move: Move, state: GameState) -> ValidationResult:
        """Validate a move.

        Args:
            move: Requested move
            state: Current game state

        Returns:
            ValidationResult
        """
        if (move.from_, move.to) not in SUPPORTED_MOVES:
            return ValidationResult(
                is_valid=False,
                error=MoveError.UNSUPPORTED,
                error_message=f"Moving from {move.from_.value} to {move.to.value} is not supported",
            )

        # Foundation targets are resolved from the card's suit, so to_idx is not checked
        result = check_index(move.from_, move.from_idx)
        if not result.is_valid:
            return result
        if move.to != LocationType.FOUNDATION:
            result = check_index(move.to, move.to_idx)
            if not result.is_valid:
                return result

        if move.to == LocationType.FREECELL and state.freecells[move.to_idx] is not None:
            return ValidationResult(
                is_valid=False,
                error=MoveError.ILLEGAL_MOVE,
                error_message=f"Freecell {move.to_idx} is occupied",
            )

        card = peek_card(state, move.from_, move.from_idx)
        if card is None:
            return ValidationResult(
                is_valid=False,
                error=MoveError.ILLEGAL_MOVE,
                error_message=f"Nothing to move: {format_location(move.from_, move.from_idx)} is empty",
            )

        if move.to == LocationType.COLUMN:
            return self._check_column_target(card, state, move.to_idx)
        if move.to == LocationType.FOUNDATION:
            return self._check_foundation_target(card, state)
        return ValidationResult(is_valid=True)

    def _check_column_target(
        self,
        card: Card,
        state: GameState,
        column_idx: int,
    ) -> ValidationResult:
        """Check the stacking rule against a destination column.

        Args:
            card: Card being moved
            state: Current game state
            column_idx: Destination column

        Returns:
            ValidationResult
        """
        column = state.columns[column_idx]
        # Empty column accepts any card
        if not column:
            return ValidationResult(is_valid=True)

        top = column[-1]
        if not card.can_stack_onto(top):
            return ValidationResult(
                is_valid=False,
                error=MoveError.ILLEGAL_MOVE,
                error_message=f"Cannot stack {card} onto {top}",
            )
        return ValidationResult(is_valid=True)

    def _check_foundation_target(self, card: Card, state: GameState) -> ValidationResult:
        """Check the ascending rule against the card's foundation.

        Args:
            card: Card being moved
            state: Current game state

        Returns:
            ValidationResult
        """
        top = state.foundations[card.suit.foundation_index]
        if foundation_accepts(card, top):
            return ValidationResult(is_valid=True)

        if top is None:
            message = f"Cannot move {card} to an empty foundation (needs an ace)"
        else:
            message = f"Cannot move {card} onto {top} in the foundation"
        return ValidationResult(
            is_valid=False,
            error=MoveError.ILLEGAL_MOVE,
            error_message=message,
        )
