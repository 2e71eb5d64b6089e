# src/blockfall/config/root.py
from __future__ import annotations

from pydantic import Field, field_validator

from blockfall.config.base import ConfigBase
from blockfall.config.game_spec import GameConfig, UiConfig

_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class PlayConfig(ConfigBase):
    log_level: str = "info"
    use_rich: bool = True
    game: GameConfig = Field(default_factory=GameConfig)
    ui: UiConfig = Field(default_factory=UiConfig)

    @field_validator("log_level", mode="before")
    @classmethod
    def _level_lower(cls, v: object) -> str:
        s = str(v).strip().lower()
        if s not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {list(_LOG_LEVELS)!r}, got {v!r}")
        return s


__all__ = ["PlayConfig"]
