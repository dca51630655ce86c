"""Move model and location token parsing."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LocationType(str, Enum):
    """Zone a card moves from or to."""

    COLUMN = "Column"
    FREECELL = "Freecell"
    FOUNDATION = "Foundation"


class MoveParseError(ValueError):
    """Raised when location tokens do not describe a move."""


# Single-letter token prefixes
TOKEN_PREFIXES = {
    "c": LocationType.COLUMN,
    "f": LocationType.FREECELL,
}

FOUNDATION_TOKENS = ("foundation", "fnd")


class Move(BaseModel):
    """Requested transfer of the top card between two locations.

    For foundation targets ``to_idx`` is a placeholder until the engine
    replaces it with the index derived from the moved card's suit.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: LocationType = Field(alias="from")
    from_idx: int = Field(default=0, ge=0)
    to: LocationType
    to_idx: int = Field(default=0, ge=0)

    def inverse(self) -> "Move":
        """Get the move that transfers the card back."""
        return Move(
            from_=self.to,
            from_idx=self.to_idx,
            to=self.from_,
            to_idx=self.from_idx,
        )

    def __str__(self) -> str:
        return f"{format_location(self.from_, self.from_idx)} -> {format_location(self.to, self.to_idx)}"


def format_location(location: LocationType, index: int) -> str:
    """Format a location the way it is typed on the command line.

    Args:
        location: Zone type.
        index: Index within the zone (ignored for foundations).

    Returns:
        Token string (e.g., "c3", "f0", "foundation").
    """
    if location == LocationType.FOUNDATION:
        return "foundation"
    prefix = "c" if location == LocationType.COLUMN else "f"
    return f"{prefix}{index}"


def parse_location(token: str) -> tuple[LocationType, int]:
    """Parse a location token.

    Index ranges are not checked here; the engine validates them against
    the board.

    Args:
        token: Token such as "c0", "f3" or "foundation" (case-insensitive).

    Returns:
        Tuple of (location type, index). Foundations get index 0.

    Raises:
        MoveParseError: If the token is not a known location.
    """
    text = token.strip().lower()
    if text in FOUNDATION_TOKENS:
        return LocationType.FOUNDATION, 0

    location = TOKEN_PREFIXES.get(text[:1])
    digits = text[1:]
    if location is None or not (digits.isascii() and digits.isdigit()):
        raise MoveParseError(f"Invalid location: {token!r} (expected c0-c7, f0-f3 or foundation)")
    return location, int(digits)


def build_move(tokens: list[str]) -> Move | None:
    """Build a move from positional location tokens.

    Args:
        tokens: Zero or two location tokens (from, to).

    Returns:
        Move, or None when no tokens were given.

    Raises:
        MoveParseError: If the number of tokens is wrong or a token is invalid.
    """
    if not tokens:
        return None
    if len(tokens) == 1:
        raise MoveParseError("A move needs both a source and a destination")
    if len(tokens) > 2:
        raise MoveParseError(f"Too many locations: expected 2, got {len(tokens)}")

    from_type, from_idx = parse_location(tokens[0])
    to_type, to_idx = parse_location(tokens[1])
    return Move(from_=from_type, from_idx=from_idx, to=to_type, to_idx=to_idx)
