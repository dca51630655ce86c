"""Configuration management."""

from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class StorageConfig(BaseModel):
    """Save file locations."""

    save_dir: str = "~/.freecli"
    game_file: str = "game_state.json"
    stats_file: str = "game_stats.json"

    @property
    def save_path(self) -> Path:
        """Get the expanded save directory."""
        return Path(self.save_dir).expanduser()


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"

    @field_validator("level")
    @classmethod
    def check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level


class DisplayConfig(BaseModel):
    """Board display configuration."""

    color: bool = True
    show_seed: bool = True


class GameLogConfig(BaseModel):
    """Game event log configuration."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"  # Relative paths resolve against save_dir


class Config(BaseModel):
    """Root configuration."""

    storage: StorageConfig = StorageConfig()
    logging: LoggingConfig = LoggingConfig()
    display: DisplayConfig = DisplayConfig()
    game_log: GameLogConfig = GameLogConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.

    Raises:
        ValueError: If the file is not a mapping or holds invalid values
        yaml.YAMLError: If the file is not valid YAML
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    if not data:
        return Config()
    if not isinstance(data, dict):
        raise ValueError(f"{config_path} must contain a mapping, got {type(data).__name__}")
    return Config.model_validate(data)
