# src/blockfall/apps/play/entrypoint.py
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Optional, Sequence

from blockfall.config.io import default_config_path, load_play_config
from blockfall.config.root import PlayConfig
from blockfall.game.factory import make_engine_builder
from blockfall.utils.logging import setup_logger


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play blockfall (pygame).")
    ap.add_argument("--config", type=str, default=None, help="play config YAML (default: bundled play.yaml)")

    # --- game ---
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--width", type=int, default=None)
    ap.add_argument("--height", type=int, default=None)
    ap.add_argument("--gravity-ms", type=int, default=None, help="ms between gravity ticks")
    ap.add_argument("--fast-gravity-ms", type=int, default=None, help="ms between ticks while soft drop is held")
    ap.add_argument("--shapes", type=str, default=None, help="alternative shape catalog YAML")

    # --- ui ---
    ap.add_argument("--cell", type=int, default=None)
    ap.add_argument("--fps", type=int, default=None)
    ap.add_argument("--show-grid", dest="show_grid", action="store_true", default=None)
    ap.add_argument("--no-grid", dest="show_grid", action="store_false")

    ap.add_argument("--log-level", type=str, default=None, choices=["debug", "info", "warning", "error"])
    ap.add_argument("--no-rich", action="store_true", help="plain logging output")

    return ap.parse_args(argv)


def overrides_from_args(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "game.seed": args.seed,
        "game.width": args.width,
        "game.height": args.height,
        "game.gravity_ms": args.gravity_ms,
        "game.accelerated_gravity_ms": args.fast_gravity_ms,
        "game.shapes": args.shapes,
        "ui.cell": args.cell,
        "ui.fps": args.fps,
        "ui.show_grid": args.show_grid,
        "log_level": args.log_level,
        "use_rich": False if bool(args.no_rich) else None,
    }


def build_config(args: argparse.Namespace) -> tuple[PlayConfig, Path]:
    cfg_path = Path(args.config) if args.config else default_config_path()
    cfg = load_play_config(cfg_path, overrides=overrides_from_args(args))
    return cfg, cfg_path


def run_play(args: argparse.Namespace) -> int:
    cfg, cfg_path = build_config(args)

    setup_logger(name="blockfall", use_rich=bool(cfg.use_rich), level=cfg.log_level)
    logger = logging.getLogger("blockfall.apps.play")
    logger.info("[play] cfg=%s", str(cfg_path))
    logger.info(
        "[play] board=%dx%d seed=%s gravity=%dms fast=%dms",
        cfg.game.width,
        cfg.game.height,
        "random" if cfg.game.seed is None else cfg.game.seed,
        cfg.game.gravity_ms,
        cfg.game.accelerated_gravity_ms,
    )

    builder = make_engine_builder(cfg.game, base=cfg_path.parent)
    logger.info("[play] shapes=%s colors=%d", ",".join(builder.catalog.kinds()), len(builder.catalog.palette))

    # pygame is only needed once we actually open a window
    from blockfall.apps.play.ui import run_play_loop

    return run_play_loop(cfg=cfg, builder=builder, logger=logger)


__all__ = ["parse_args", "overrides_from_args", "build_config", "run_play"]
