"""Logging utilities and game state display."""

import logging
import sys
from typing import TYPE_CHECKING

from termcolor import colored

from freecli.models.card import Color
from freecli.models.move import format_location

if TYPE_CHECKING:
    from freecli.models.card import Card
    from freecli.models.game_state import GameState
    from freecli.models.move import Move
    from freecli.models.stats import GameStats

EMPTY_SLOT = "[   ]"


def setup_logging(level: str = "WARNING") -> None:
    """Configure logging for the application.

    Log records go to stderr so they do not mix with the board output.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


class GameDisplay:
    """Display game state to stdout."""

    def __init__(self, color: bool = True, show_seed: bool = True):
        """Initialize display.

        Args:
            color: Whether to print red suits in red
            show_seed: Whether to show the deal seed under the board
        """
        self.color = color
        self.show_seed = show_seed

    def format_card(self, card: "Card") -> str:
        """Format a card as right-aligned rank plus suit symbol."""
        text = f"{card.rank_label:>2}{card.suit_symbol}"
        if self.color and card.color == Color.RED:
            return colored(text, "red")
        return text

    def format_slots(self, slots: list["Card | None"]) -> str:
        """Format freecells or foundations as a row of bracketed slots."""
        return " ".join(
            EMPTY_SLOT if card is None else f"[{self.format_card(card)}]"
            for card in slots
        )

    def format_board(self, state: "GameState") -> str:
        """Format the whole board.

        Args:
            state: Game state to show

        Returns:
            Multi-line board text
        """
        lines = [
            "Freecells:",
            self.format_slots(state.freecells),
            "Foundations:",
            self.format_slots(state.foundations),
            "",
            "Columns:",
        ]
        for i, column in enumerate(state.columns):
            cards = " ".join(self.format_card(card) for card in column)
            lines.append(f"C{i}: {cards}".rstrip())

        if self.show_seed:
            lines.append("")
            lines.append(f"Seed: {state.seed}  Moves: {len(state.history)}")
        if state.last_move_error:
            lines.append(f"Last move error: {state.last_move_error}")
        return "\n".join(lines)

    def print_board(self, state: "GameState") -> None:
        """Print the board."""
        print(self.format_board(state))

    def print_stats(self, stats: "GameStats") -> None:
        """Print aggregate statistics."""
        ratio = "N/A" if stats.win_ratio is None else f"{stats.win_ratio:.2f}"
        print("Stats:")
        print(f"Games started:      {stats.total_games_started}")
        print(f"Games won:          {stats.total_games_won}")
        print(f"Total Moves Made:   {stats.total_moves}")
        print(f"Win ratio:          {ratio}")

    def print_history(self, history: list["Move"]) -> None:
        """Print the moves of the current game, oldest first."""
        if not history:
            print("No moves yet.")
            return

        print("History:")
        for number, move in enumerate(history, 1):
            source = format_location(move.from_, move.from_idx)
            dest = format_location(move.to, move.to_idx)
            print(f"  {number:>3}. {source} -> {dest}")

    def print_message(self, message: str) -> None:
        """Print an informational message."""
        print(message)

    def print_error(self, message: str) -> None:
        """Print an error message to stderr."""
        print(f"Error: {message}", file=sys.stderr)

    def print_win(self, stats: "GameStats") -> None:
        """Print the win banner."""
        print("=" * 40)
        print("You won! All cards are on the foundations.")
        print(f"Games won: {stats.total_games_won}/{stats.total_games_started}")
        print("=" * 40)
