"""Aggregate play statistics."""

from pydantic import BaseModel, Field


class GameStats(BaseModel):
    """Counters over game lifecycle events."""

    total_moves: int = Field(default=0, ge=0)
    total_games_started: int = Field(default=0, ge=0)
    total_games_won: int = Field(default=0, ge=0)

    @property
    def win_ratio(self) -> float | None:
        """Get games won per game started (None before the first game)."""
        if self.total_games_started == 0:
            return None
        return self.total_games_won / self.total_games_started

    def record_move(self) -> None:
        """Count a successfully applied move."""
        self.total_moves += 1

    def record_game_start(self) -> None:
        """Count a freshly dealt game."""
        self.total_games_started += 1

    def record_win(self) -> None:
        """Count a won game."""
        self.total_games_won += 1

    def __str__(self) -> str:
        ratio = "N/A" if self.win_ratio is None else f"{self.win_ratio:.2f}"
        return (
            f"Stats(started={self.total_games_started}, won={self.total_games_won}, "
            f"moves={self.total_moves}, ratio={ratio})"
        )
