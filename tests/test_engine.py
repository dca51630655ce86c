"""Tests for game engine."""

import pytest

from freecli.game.engine import GameEngine, UndoStatus, deal_game
from freecli.game.validator import MoveError, MoveValidator, ValidationResult
from freecli.models.card import MAX_SEED, Card, Suit, create_deck
from freecli.models.game_state import GameState
from freecli.models.move import LocationType, Move

COL = LocationType.COLUMN
CELL = LocationType.FREECELL
FND = LocationType.FOUNDATION


def card(rank: int, suit: Suit) -> Card:
    return Card(rank=rank, suit=suit)


def move(from_: LocationType, from_idx: int, to: LocationType, to_idx: int = 0) -> Move:
    return Move(from_=from_, from_idx=from_idx, to=to, to_idx=to_idx)


def board(columns=None, freecells=None, foundations=None) -> GameState:
    """Build a state from partial zones (missing columns are empty)."""
    full_columns = [[] for _ in range(8)]
    for index, cards in (columns or {}).items():
        full_columns[index] = list(cards)
    return GameState(
        columns=full_columns,
        freecells=freecells or [None] * 4,
        foundations=foundations or [None] * 4,
    )


class AcceptAllValidator(MoveValidator):
    """Validator that lets every move through."""

    def validate(self, move, state):
        return ValidationResult(is_valid=True)


@pytest.fixture
def engine():
    """Engine with a small hand-built board."""
    state = board(
        columns={
            0: [card(9, Suit.CLUBS), card(5, Suit.HEARTS)],
            1: [card(6, Suit.SPADES)],
            2: [card(1, Suit.HEARTS)],
            5: [card(13, Suit.DIAMONDS)],
        },
        freecells=[card(2, Suit.HEARTS), None, None, None],
        foundations=[card(1, Suit.SPADES), None, None, None],
    )
    return GameEngine(state)


class TestReset:
    """Tests for dealing new games."""

    def test_deal_shape(self):
        """Test column sizes and empty zones after a deal."""
        engine = GameEngine()
        state = engine.reset(seed=42)

        assert [len(c) for c in state.columns] == [7, 7, 7, 7, 6, 6, 6, 6]
        assert state.freecells == [None] * 4
        assert state.foundations == [None] * 4
        assert state.history == []
        assert state.seed == 42
        assert state.last_move_error is None
        assert engine.state is state

    def test_deal_holds_full_deck(self):
        """Test that a deal contains all 52 cards once."""
        state = deal_game(7)
        cards = [c for column in state.columns for c in column]
        assert len(cards) == 52
        assert set(cards) == set(create_deck())
        assert state.is_consistent()

    def test_deal_is_round_robin(self):
        """Test that the i-th card lands in column i % 8."""
        from freecli.models.card import generate_shuffled_deck

        deck = generate_shuffled_deck(99)
        state = deal_game(99)
        assert state.columns[0][0] == deck[0]
        assert state.columns[7][0] == deck[7]
        assert state.columns[0][1] == deck[8]
        assert state.columns[3][6] == deck[51]

    def test_same_seed_same_deal(self):
        """Test determinism for an explicit seed."""
        first = GameEngine().reset(seed=123456789)
        second = GameEngine().reset(seed=123456789)

        assert first.columns == second.columns
        assert first.freecells == second.freecells
        assert first.foundations == second.foundations

    def test_random_seed_recorded(self):
        """Test that a generated seed is stored."""
        state = GameEngine().reset()
        assert 0 <= state.seed <= MAX_SEED
        assert deal_game(state.seed).columns == state.columns

    def test_reset_discards_previous_game(self, engine):
        """Test that reset replaces the board and history."""
        engine.apply_move(move(COL, 0, CELL, 1))
        engine.reset(seed=5)
        assert engine.state.history == []
        assert engine.state.seed == 5


class TestApplyMove:
    """Tests for applying moves."""

    def test_column_to_freecell(self, engine):
        """Test moving a column top into a freecell."""
        result = engine.apply_move(move(COL, 0, CELL, 1))

        assert result.success
        assert result.card == card(5, Suit.HEARTS)
        assert engine.state.freecells[1] == card(5, Suit.HEARTS)
        assert engine.state.columns[0] == [card(9, Suit.CLUBS)]
        assert engine.state.history == [move(COL, 0, CELL, 1)]

    def test_column_to_column(self, engine):
        """Test stacking 5H onto 6S."""
        result = engine.apply_move(move(COL, 0, COL, 1))

        assert result.success
        assert engine.state.columns[1] == [card(6, Suit.SPADES), card(5, Suit.HEARTS)]

    def test_freecell_to_column(self, engine):
        """Test moving a freecell card onto an empty column."""
        result = engine.apply_move(move(CELL, 0, COL, 7))

        assert result.success
        assert engine.state.freecells[0] is None
        assert engine.state.columns[7] == [card(2, Suit.HEARTS)]

    def test_column_to_foundation_normalizes_index(self, engine):
        """Test that history records the suit's foundation index."""
        result = engine.apply_move(move(COL, 2, FND, 0))

        assert result.success
        assert engine.state.foundations[1] == card(1, Suit.HEARTS)
        assert result.move.to_idx == 1
        assert engine.state.history[-1].to_idx == 1

    def test_freecell_to_foundation(self, engine):
        """Test building a foundation from a freecell."""
        assert engine.apply_move(move(COL, 2, FND)).success
        result = engine.apply_move(move(CELL, 0, FND))

        assert result.success
        assert engine.state.freecells[0] is None
        assert engine.state.foundations[1] == card(2, Suit.HEARTS)

    def test_history_grows_by_one(self, engine):
        """Test that each applied move adds one history entry."""
        engine.apply_move(move(COL, 0, CELL, 1))
        engine.apply_move(move(COL, 2, FND))
        assert len(engine.state.history) == 2

    @pytest.mark.parametrize(
        "bad_move,error",
        [
            (move(COL, 0, COL, 5), MoveError.ILLEGAL_MOVE),
            (move(COL, 3, CELL, 1), MoveError.ILLEGAL_MOVE),
            (move(COL, 0, CELL, 0), MoveError.ILLEGAL_MOVE),
            (move(CELL, 0, FND), MoveError.ILLEGAL_MOVE),
            (move(FND, 0, COL, 3), MoveError.UNSUPPORTED),
            (move(CELL, 0, CELL, 1), MoveError.UNSUPPORTED),
            (move(COL, 8, CELL, 1), MoveError.INVALID_INDEX),
            (move(COL, 0, CELL, 4), MoveError.INVALID_INDEX),
        ],
    )
    def test_failed_move_leaves_state_unchanged(self, engine, bad_move, error):
        """Test atomicity of rejected moves."""
        before = engine.state.model_copy(deep=True)
        result = engine.apply_move(bad_move)

        assert not result.success
        assert result.error == error
        assert result.error_message
        assert engine.state == before

    def test_failed_move_does_not_set_error_field(self, engine):
        """Test that the engine leaves last_move_error to the caller."""
        engine.apply_move(move(FND, 0, COL, 3))
        assert engine.state.last_move_error is None

    def test_inconsistent_placement_restores_card(self):
        """Test that a placement failing after validation changes nothing."""
        state = board(columns={0: [card(5, Suit.HEARTS)], 1: [card(9, Suit.SPADES)]})
        engine = GameEngine(state, validator=AcceptAllValidator())
        before = state.model_copy(deep=True)

        result = engine.apply_move(move(COL, 0, COL, 1))

        assert not result.success
        assert result.error == MoveError.INCONSISTENT
        assert engine.state == before

    def test_inconsistent_foundation_placement_restores_card(self):
        """Test a foundation placement failing after validation."""
        state = board(freecells=[card(4, Suit.CLUBS), None, None, None])
        engine = GameEngine(state, validator=AcceptAllValidator())
        before = state.model_copy(deep=True)

        result = engine.apply_move(move(CELL, 0, FND))

        assert result.error == MoveError.INCONSISTENT
        assert engine.state == before


class TestUndo:
    """Tests for undo."""

    @pytest.mark.parametrize(
        "forward",
        [
            move(COL, 0, CELL, 1),
            move(COL, 0, COL, 1),
            move(COL, 0, COL, 7),
            move(CELL, 0, COL, 7),
            move(COL, 2, FND),
        ],
    )
    def test_round_trip(self, engine, forward):
        """Test that undo restores the board before a move."""
        before = engine.state.model_copy(deep=True)
        assert engine.apply_move(forward).success

        result = engine.undo()

        assert result.success
        assert result.status == UndoStatus.UNDONE
        assert engine.state.columns == before.columns
        assert engine.state.freecells == before.freecells
        assert engine.state.foundations == before.foundations
        assert engine.state.history == before.history

    def test_undo_foundation_move_restores_lower_rank(self, engine):
        """Test that undoing 2H leaves AH on the foundation."""
        engine.apply_move(move(COL, 2, FND))
        engine.apply_move(move(CELL, 0, FND))

        result = engine.undo()

        assert result.success
        assert result.card == card(2, Suit.HEARTS)
        assert engine.state.foundations[1] == card(1, Suit.HEARTS)
        assert engine.state.freecells[0] == card(2, Suit.HEARTS)

    def test_undo_stacked_card_bypasses_stacking_rule(self):
        """Test putting a card back onto a column it could not legally join."""
        state = board(columns={0: [card(3, Suit.DIAMONDS), card(5, Suit.HEARTS)], 1: [card(6, Suit.CLUBS)]})
        engine = GameEngine(state)
        engine.apply_move(move(COL, 0, COL, 1))

        assert engine.undo().success
        assert engine.state.columns[0] == [card(3, Suit.DIAMONDS), card(5, Suit.HEARTS)]

    def test_undo_drains_history(self, engine):
        """Test repeated undo until history is empty."""
        before = engine.state.model_copy(deep=True)
        engine.apply_move(move(COL, 0, CELL, 1))
        engine.apply_move(move(COL, 2, FND))
        engine.apply_move(move(CELL, 0, FND))

        for remaining in (2, 1, 0):
            assert engine.undo().success
            assert len(engine.state.history) == remaining

        assert engine.state == before

    def test_undo_empty_history(self, engine):
        """Test that undo with no history is informational."""
        before = engine.state.model_copy(deep=True)
        result = engine.undo()

        assert result.status == UndoStatus.NOTHING_TO_UNDO
        assert not result.success
        assert result.error_message == ""
        assert engine.state == before

    def test_undo_refuses_unsupported_history_entry(self):
        """Test that an entry no legal move makes cannot push a card onto a foundation."""
        state = deal_game(42)
        state.history.append(move(FND, 1, COL, 0))
        engine = GameEngine(state)
        before = state.model_copy(deep=True)

        result = engine.undo()

        assert result.status == UndoStatus.FAILED
        assert "not a supported move" in result.error_message
        assert engine.state == before
        assert engine.state.is_consistent()

    def test_undo_blocked_by_occupied_freecell(self):
        """Test that forced placement still requires an empty freecell."""
        state = board(
            columns={0: [card(7, Suit.CLUBS)]},
            freecells=[card(9, Suit.HEARTS), None, None, None],
        )
        state.history.append(move(CELL, 0, COL, 0))
        engine = GameEngine(state)
        before = state.model_copy(deep=True)

        result = engine.undo()

        assert result.status == UndoStatus.FAILED
        assert "occupied" in result.error_message
        assert engine.state == before

    def test_undo_blocked_by_empty_source(self):
        """Test undo when the moved card is no longer there."""
        state = board()
        state.history.append(move(COL, 0, CELL, 2))
        engine = GameEngine(state)

        result = engine.undo()

        assert result.status == UndoStatus.FAILED
        assert len(engine.state.history) == 1

    def test_undo_with_corrupt_index(self):
        """Test undo of a history entry with an out-of-range index."""
        state = board(columns={0: [card(7, Suit.CLUBS)]})
        state.history.append(move(COL, 0, CELL, 9))
        engine = GameEngine(state)

        result = engine.undo()

        assert result.status == UndoStatus.FAILED
        assert engine.state.columns[0] == [card(7, Suit.CLUBS)]


class TestWinDetection:
    """Tests for is_win."""

    def test_empty_board_is_win(self):
        """Test that foundations are not inspected."""
        assert GameEngine(board()).is_win()

    def test_full_foundations_is_win(self):
        """Test a normally finished game."""
        kings = [card(13, suit) for suit in (Suit.SPADES, Suit.HEARTS, Suit.DIAMONDS, Suit.CLUBS)]
        assert GameEngine(board(foundations=kings)).is_win()

    def test_card_in_column_is_not_win(self):
        """Test a single card left in a column."""
        assert not GameEngine(board(columns={6: [card(13, Suit.CLUBS)]})).is_win()

    def test_card_in_freecell_is_not_win(self):
        """Test a single card left in a freecell."""
        assert not GameEngine(board(freecells=[None, None, None, card(13, Suit.CLUBS)])).is_win()

    def test_fresh_deal_is_not_win(self):
        """Test a new game."""
        engine = GameEngine()
        engine.reset(seed=1)
        assert not engine.is_win()

    def test_last_card_to_foundation_wins(self):
        """Test winning with the final foundation move."""
        state = board(
            columns={3: [card(13, Suit.CLUBS)]},
            foundations=[card(13, Suit.SPADES), card(13, Suit.HEARTS), card(13, Suit.DIAMONDS), card(12, Suit.CLUBS)],
        )
        engine = GameEngine(state)

        assert engine.apply_move(move(COL, 3, FND)).success
        assert engine.is_win()
        assert engine.state.is_consistent()
