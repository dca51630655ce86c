"""JSON save files for game state and statistics."""

import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

from freecli.config import StorageConfig
from freecli.game.validator import SUPPORTED_MOVES
from freecli.models.game_state import GameState
from freecli.models.stats import GameStats

logger = logging.getLogger(__name__)


class SaveStore:
    """Loads and saves game and stats snapshots in a directory.

    Missing or unreadable snapshots load as absent; write errors propagate.
    """

    def __init__(
        self,
        save_dir: Path | str,
        game_file: str = "game_state.json",
        stats_file: str = "game_stats.json",
    ):
        """Initialize store.

        Args:
            save_dir: Directory holding the save files
            game_file: Game snapshot file name
            stats_file: Stats snapshot file name
        """
        self.save_dir = Path(save_dir)
        self.game_path = self.save_dir / game_file
        self.stats_path = self.save_dir / stats_file

    @classmethod
    def from_config(cls, config: StorageConfig) -> "SaveStore":
        """Create a store from storage configuration."""
        return cls(config.save_path, config.game_file, config.stats_file)

    def load_game(self) -> GameState | None:
        """Load the saved game.

        Returns:
            GameState, or None if there is no usable save.
        """
        state = self._read(self.game_path, GameState)
        if state is not None and not state.is_consistent():
            logger.warning(f"Ignoring inconsistent save {self.game_path}")
            return None
        if state is not None and any((m.from_, m.to) not in SUPPORTED_MOVES for m in state.history):
            logger.warning(f"Ignoring save with unsupported history {self.game_path}")
            return None
        return state

    def save_game(self, state: GameState) -> None:
        """Write the game snapshot."""
        self._write(self.game_path, state)

    def load_stats(self) -> GameStats:
        """Load saved statistics (empty stats if there are none)."""
        stats = self._read(self.stats_path, GameStats)
        return stats if stats is not None else GameStats()

    def save_stats(self, stats: GameStats) -> None:
        """Write the stats snapshot."""
        self._write(self.stats_path, stats)

    def _read(self, path: Path, model: type[BaseModel]):
        """Read and validate a JSON snapshot.

        Args:
            path: Snapshot file
            model: Model class to validate against

        Returns:
            Model instance, or None if missing or corrupt.
        """
        try:
            content = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"No save file at {path}")
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot read {path}: {e}")
            return None

        try:
            return model.model_validate_json(content)
        except ValidationError as e:
            logger.warning(f"Ignoring corrupt save {path}: {e.error_count()} errors")
            return None

    def _write(self, path: Path, snapshot: BaseModel) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(snapshot.model_dump_json(indent=2, by_alias=True), encoding="utf-8")
