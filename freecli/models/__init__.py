"""Game models."""

from .card import Card, Color, Suit, create_deck, generate_shuffled_deck
from .game_state import GameState
from .move import LocationType, Move, MoveParseError, build_move, parse_location
from .stats import GameStats

__all__ = [
    "Card",
    "Color",
    "Suit",
    "create_deck",
    "generate_shuffled_deck",
    "GameState",
    "LocationType",
    "Move",
    "MoveParseError",
    "build_move",
    "parse_location",
    "GameStats",
]
