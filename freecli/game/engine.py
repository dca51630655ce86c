"""Game engine for Freecell."""

import logging
import random
from dataclasses import dataclass
from enum import Enum

from freecli.models.card import ACE, Card, generate_shuffled_deck
from freecli.models.game_state import NUM_COLUMNS, GameState
from freecli.models.move import LocationType, Move

from .validator import (
    SUPPORTED_MOVES,
    MoveError,
    MoveValidator,
    ValidationResult,
    check_index,
    foundation_accepts,
)

logger = logging.getLogger(__name__)


@dataclass
class MoveResult:
    """Result of applying a move."""

    success: bool
    move: Move | None = None  # Move as recorded in history
    card: Card | None = None  # Card that was moved
    error: MoveError = MoveError.NONE
    error_message: str = ""


class UndoStatus(str, Enum):
    """Outcome of an undo request."""

    UNDONE = "undone"
    NOTHING_TO_UNDO = "nothing_to_undo"
    FAILED = "failed"


@dataclass
class UndoResult:
    """Result of an undo request."""

    status: UndoStatus
    move: Move | None = None  # History entry that was reverted
    card: Card | None = None
    error_message: str = ""

    @property
    def success(self) -> bool:
        """Check if a move was reverted."""
        return self.status == UndoStatus.UNDONE


def new_seed() -> int:
    """Draw a fresh 64-bit seed from the OS entropy source."""
    return random.SystemRandom().getrandbits(64)


def deal_game(seed: int) -> GameState:
    """Deal a fresh game from a seed.

    Cards are dealt round-robin in deck order, giving columns of
    7, 7, 7, 7, 6, 6, 6, 6 cards.

    Args:
        seed: Shuffle seed

    Returns:
        New GameState with empty freecells, foundations and history
    """
    columns: list[list[Card]] = [[] for _ in range(NUM_COLUMNS)]
    for i, card in enumerate(generate_shuffled_deck(seed)):
        columns[i % NUM_COLUMNS].append(card)
    return GameState(columns=columns, seed=seed)


class GameEngine:
    """Applies moves and undo to a game state."""

    def __init__(
        self,
        state: GameState | None = None,
        validator: MoveValidator | None = None,
    ):
        """Initialize game engine.

        Args:
            state: Game to play (an empty board if not provided; call reset to deal)
            validator: MoveValidator instance (creates one if not provided)
        """
        self.state = state if state is not None else GameState()
        self.validator = validator or MoveValidator()

    def reset(self, seed: int | None = None) -> GameState:
        """Start a new game.

        Args:
            seed: Shuffle seed. A random one is drawn and recorded if omitted.

        Returns:
            The newly dealt GameState
        """
        if seed is None:
            seed = new_seed()
        self.state = deal_game(seed)
        logger.info(f"Dealt new game with seed {seed}")
        return self.state

    def check_move(self, move: Move) -> ValidationResult:
        """Validate a move without changing the board."""
        return self.validator.validate(move, self.state)

    def is_win(self) -> bool:
        """Check if the game has been won."""
        return self.state.is_win()

    def apply_move(self, move: Move) -> MoveResult:
        """Validate and apply a move.

        Either the card is moved and the move is appended to history, or the
        state is left untouched and a failed result is returned.

        Args:
            move: Requested move. For foundation targets to_idx is ignored.

        Returns:
            MoveResult
        """
        validation = self.check_move(move)
        if not validation.is_valid:
            logger.debug(f"Rejected {move}: {validation.error_message}")
            return MoveResult(
                success=False,
                error=validation.error,
                error_message=validation.error_message,
            )

        card = self._take(move.from_, move.from_idx)
        if card is None:
            return self._inconsistent(move, "source became empty")

        placed = self._place(card, move.to, move.to_idx)
        if not placed.is_valid:
            self._put_back(card, move.from_, move.from_idx)
            return self._inconsistent(move, placed.error_message)

        if move.to == LocationType.FOUNDATION:
            move = move.model_copy(update={"to_idx": card.suit.foundation_index})
        self.state.history.append(move)

        logger.debug(f"Moved {card}: {move}")
        return MoveResult(success=True, move=move, card=card)

    def undo(self) -> UndoResult:
        """Revert the last move in history.

        The inverse move is forced: stacking and foundation rules are skipped,
        but indices must be valid, the source must hold a card and a target
        freecell must be empty. Entries that no legal move produces are refused.
        The undo itself is not recorded.

        Returns:
            UndoResult
        """
        if not self.state.history:
            return UndoResult(status=UndoStatus.NOTHING_TO_UNDO)

        last = self.state.history[-1]
        if (last.from_, last.to) not in SUPPORTED_MOVES:
            return self._undo_failed(last, "history entry is not a supported move")
        inverse = last.inverse()

        for location, index in (
            (inverse.from_, inverse.from_idx),
            (inverse.to, inverse.to_idx),
        ):
            checked = check_index(location, index)
            if not checked.is_valid:
                return self._undo_failed(last, checked.error_message)

        card = self._take(inverse.from_, inverse.from_idx)
        if card is None:
            return self._undo_failed(last, f"{inverse.from_.value} {inverse.from_idx} is empty")

        placed = self._place(card, inverse.to, inverse.to_idx, forced=True)
        if not placed.is_valid:
            self._put_back(card, inverse.from_, inverse.from_idx)
            return self._undo_failed(last, placed.error_message)

        self.state.history.pop()
        logger.debug(f"Undid {last}, returned {card}")
        return UndoResult(status=UndoStatus.UNDONE, move=last, card=card)

    def _take(self, location: LocationType, index: int) -> Card | None:
        """Remove and return the movable card at a location.

        Taking from a foundation leaves the previous rank of that suit on top.
        """
        state = self.state
        if location == LocationType.COLUMN:
            column = state.columns[index]
            return column.pop() if column else None

        if location == LocationType.FREECELL:
            card = state.freecells[index]
            state.freecells[index] = None
            return card

        top = state.foundations[index]
        if top is None:
            return None
        if top.rank > ACE:
            state.foundations[index] = Card(rank=top.rank - 1, suit=top.suit)
        else:
            state.foundations[index] = None
        return top

    def _put_back(self, card: Card, location: LocationType, index: int) -> None:
        """Return a taken card to where it came from."""
        state = self.state
        if location == LocationType.COLUMN:
            state.columns[index].append(card)
        elif location == LocationType.FREECELL:
            state.freecells[index] = card
        else:
            state.foundations[index] = card

    def _place(
        self,
        card: Card,
        location: LocationType,
        index: int,
        forced: bool = False,
    ) -> ValidationResult:
        """Place a card at a location.

        Args:
            card: Card to place
            location: Destination zone
            index: Destination index (ignored for foundations)
            forced: Skip stacking and foundation ordering rules

        Returns:
            ValidationResult
        """
        state = self.state
        if location == LocationType.COLUMN:
            column = state.columns[index]
            if not forced and column and not card.can_stack_onto(column[-1]):
                return ValidationResult(
                    is_valid=False,
                    error=MoveError.INCONSISTENT,
                    error_message=f"Cannot stack {card} onto {column[-1]}",
                )
            column.append(card)
            return ValidationResult(is_valid=True)

        if location == LocationType.FREECELL:
            if state.freecells[index] is not None:
                return ValidationResult(
                    is_valid=False,
                    error=MoveError.INCONSISTENT,
                    error_message=f"Freecell {index} is occupied",
                )
            state.freecells[index] = card
            return ValidationResult(is_valid=True)

        foundation_idx = card.suit.foundation_index
        if not forced:
            top = state.foundations[foundation_idx]
            if not foundation_accepts(card, top):
                return ValidationResult(
                    is_valid=False,
                    error=MoveError.INCONSISTENT,
                    error_message=f"Foundation for {card.suit.value} does not accept {card}",
                )
        state.foundations[foundation_idx] = card
        return ValidationResult(is_valid=True)

    def _inconsistent(self, move: Move, reason: str) -> MoveResult:
        logger.error(f"Placement failed after validation for {move}: {reason}")
        return MoveResult(
            success=False,
            error=MoveError.INCONSISTENT,
            error_message=f"Internal error applying {move}: {reason}",
        )

    def _undo_failed(self, move: Move, reason: str) -> UndoResult:
        logger.warning(f"Cannot undo {move}: {reason}")
        return UndoResult(
            status=UndoStatus.FAILED,
            move=move,
            error_message=f"Cannot undo {move}: {reason}",
        )
