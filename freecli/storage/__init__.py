"""Save file persistence."""

from .saves import SaveStore

__all__ = ["SaveStore"]
