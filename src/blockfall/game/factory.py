# src/blockfall/game/factory.py
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from blockfall.config.game_spec import GameConfig
from blockfall.game.core.game import GameEngine
from blockfall.game.core.shapes import ShapeCatalog, default_catalog
from blockfall.utils.paths import resolve_user_path


def load_catalog(cfg: GameConfig, *, base: Optional[Path] = None) -> ShapeCatalog:
    """
    cfg.shapes=None -> bundled classic 7 catalog; otherwise a user YAML path
    (absolute, cwd-relative, or relative to `base`).
    """
    if cfg.shapes is None:
        return default_catalog()
    return ShapeCatalog.from_yaml(resolve_user_path(cfg.shapes, base=base))


@dataclass
class EngineBuilder:
    """
    Builds one fresh GameEngine per session.

    The RNG lives here, not in the engine, so a reset continues the same random
    stream instead of replaying the previous game.
    """

    cfg: GameConfig
    catalog: ShapeCatalog
    rng: np.random.Generator

    def new_engine(self) -> GameEngine:
        return GameEngine(
            width=int(self.cfg.width),
            height=int(self.cfg.height),
            catalog=self.catalog,
            rng=self.rng,
        )


def make_engine_builder(cfg: GameConfig, *, base: Optional[Path] = None) -> EngineBuilder:
    catalog = load_catalog(cfg, base=base)
    rng = np.random.default_rng(cfg.seed)
    return EngineBuilder(cfg=cfg, catalog=catalog, rng=rng)


def make_engine_from_cfg(cfg: GameConfig, *, base: Optional[Path] = None) -> GameEngine:
    return make_engine_builder(cfg, base=base).new_engine()


__all__ = ["EngineBuilder", "load_catalog", "make_engine_builder", "make_engine_from_cfg"]
