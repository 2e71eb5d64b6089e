# src/blockfall/config/__init__.py
from __future__ import annotations

from blockfall.config.base import ConfigBase
from blockfall.config.game_spec import GameConfig, UiConfig
from blockfall.config.io import default_config_path, load_play_config, to_plain_dict
from blockfall.config.root import PlayConfig

__all__ = [
    "ConfigBase",
    "GameConfig",
    "UiConfig",
    "PlayConfig",
    "default_config_path",
    "load_play_config",
    "to_plain_dict",
]
