# settings.py
# Instance-scoped configuration for a game and for text views of it.

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class GameSettings(BaseModel):
    """Settings for creating a new game."""
    size: int = Field(
        default=4,
        gt=0,
        description="Size of the N x N game board (e.g., 4 for a 4x4 board)."
    )
    win_tile: int = Field(
        default=2048,
        gt=0,
        description="The tile value to achieve for winning the game (e.g., 2048)."
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level name used by drivers (DEBUG, INFO, WARNING, ...)."
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, prefix: str = "GAME2048_") -> "GameSettings":
        """
        Builds settings from environment variables, keeping defaults for unset ones.
        Args:
            prefix (str): Variable name prefix, e.g. GAME2048_SIZE.
        Returns:
            GameSettings: The validated settings.
        """
        overrides = {}
        for field_name in ("size", "win_tile", "log_level"):
            raw: Optional[str] = os.environ.get(prefix + field_name.upper())
            if raw is not None:
                overrides[field_name] = raw
        return cls(**overrides)


class ViewSettings(BaseModel):
    """Display sizing for text renderers."""
    cell_width: int = Field(default=6, gt=0, description="Characters per rendered cell.")
    show_empty_as: str = Field(default=".", description="Text drawn in empty cells.")
