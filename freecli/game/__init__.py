"""Game logic."""

from .engine import GameEngine, MoveResult, UndoResult, UndoStatus, deal_game
from .validator import MoveError, MoveValidator, ValidationResult

__all__ = [
    "GameEngine",
    "MoveResult",
    "UndoResult",
    "UndoStatus",
    "deal_game",
    "MoveError",
    "MoveValidator",
    "ValidationResult",
]
