"""Game logger for replaying a game's moves."""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from freecli.config import GameLogConfig
from freecli.models.card import Card
from freecli.models.game_state import GameState
from freecli.models.move import Move
from freecli.models.stats import GameStats

from .formatters import format_card, format_cards, format_move


class GameLogger:
    """Logger for game events in JSONL format.

    Each line in the output file is a JSON object representing one event.
    Events from successive invocations are appended to the same file.
    """

    def __init__(
        self,
        config: GameLogConfig | None = None,
        base_dir: Path | str | None = None,
    ):
        """Initialize game logger.

        Args:
            config: Logging configuration. If None, logging is disabled.
            base_dir: Directory that a relative output path resolves against.
        """
        self.config = config or GameLogConfig()
        self.base_dir = Path(base_dir) if base_dir is not None else None
        self._file: TextIO | None = None

    @property
    def output_path(self) -> Path:
        """Get the resolved log file path."""
        path = Path(self.config.output_path).expanduser()
        if self.base_dir is not None and not path.is_absolute():
            return self.base_dir / path
        return path

    def __enter__(self) -> "GameLogger":
        """Context manager entry."""
        if self.config.enabled and self.config.output_path:
            path = self.output_path
            path.parent.mkdir(parents=True, exist_ok=True)
            self._file = open(path, "a", encoding="utf-8")
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

    def close(self) -> None:
        """Close the log file."""
        if self._file:
            self._file.close()
            self._file = None

    def _write(self, event: dict[str, Any]) -> None:
        """Write an event to the log file.

        Args:
            event: Event dictionary to write as JSON.
        """
        if self._file:
            self._file.write(json.dumps(event, ensure_ascii=False) + "\n")
            self._file.flush()

    def log_game_start(self, state: GameState) -> None:
        """Log a freshly dealt game.

        Args:
            state: Game state right after the deal.
        """
        self._write({
            "type": "game_start",
            "timestamp": datetime.now().isoformat(),
            "seed": state.seed,
            "columns": [format_cards(column) for column in state.columns],
        })

    def log_move(self, seed: int, move: Move, card: Card, move_number: int) -> None:
        """Log an applied move.

        Args:
            seed: Seed of the current game.
            move: Move as recorded in history.
            card: Card that was moved.
            move_number: Length of history after the move.
        """
        self._write({
            "type": "move",
            "seed": seed,
            "move_number": move_number,
            **format_move(move),
            "card": format_card(card),
        })

    def log_rejected(self, seed: int, move: Move, message: str) -> None:
        """Log a rejected move.

        Args:
            seed: Seed of the current game.
            move: Requested move.
            message: Reason the move was rejected.
        """
        self._write({
            "type": "rejected",
            "seed": seed,
            **format_move(move),
            "error": message,
        })

    def log_undo(self, seed: int, move: Move, card: Card | None) -> None:
        """Log an undone move.

        Args:
            seed: Seed of the current game.
            move: History entry that was reverted.
            card: Card that was returned.
        """
        self._write({
            "type": "undo",
            "seed": seed,
            **format_move(move),
            "card": format_card(card),
        })

    def log_win(self, state: GameState, stats: GameStats) -> None:
        """Log a won game.

        Args:
            state: Final game state.
            stats: Statistics after recording the win.
        """
        self._write({
            "type": "win",
            "timestamp": datetime.now().isoformat(),
            "seed": state.seed,
            "moves": len(state.history),
            "games_won": stats.total_games_won,
            "games_started": stats.total_games_started,
        })
