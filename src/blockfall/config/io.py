# src/blockfall/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel

from blockfall.config.root import PlayConfig
from blockfall.utils.paths import configs_dir


def default_config_path() -> Path:
    return configs_dir() / "play.yaml"


def to_plain_dict(cfg: Any) -> dict[str, Any]:
    if isinstance(cfg, BaseModel):
        return cfg.model_dump(mode="json")
    if isinstance(cfg, DictConfig):
        data = OmegaConf.to_container(cfg, resolve=True)
        if not isinstance(data, dict):
            raise TypeError("config must resolve to a mapping")
        return data
    raise TypeError(f"unsupported config type: {type(cfg).__name__}")


def load_play_config(
        path: Optional[Path] = None,
        *,
        overrides: Optional[Mapping[str, Any]] = None,
) -> PlayConfig:
    """
    Load a play config YAML (bundled default when path is None) and apply dotted overrides.

    overrides keys use OmegaConf dotted paths, e.g. {"game.seed": 7, "ui.cell": 24}.
    None values are skipped so argparse defaults can be passed straight through.
    """
    cfg_path = Path(path) if path is not None else default_config_path()
    cfg = OmegaConf.load(cfg_path)
    if not isinstance(cfg, DictConfig):
        raise TypeError(f"config({cfg_path}) must be a mapping")
    # overrides go in before interpolations are resolved
    for key, value in (overrides or {}).items():
        if value is None:
            continue
        OmegaConf.update(cfg, str(key), value, merge=True)
    return PlayConfig.model_validate(to_plain_dict(cfg))


__all__ = ["default_config_path", "to_plain_dict", "load_play_config"]
