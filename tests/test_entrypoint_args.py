# tests/test_entrypoint_args.py
from __future__ import annotations

from pathlib import Path

import pytest

from blockfall.apps.play.entrypoint import build_config, overrides_from_args, parse_args
from blockfall.config.io import default_config_path


def test_no_flags_means_no_overrides() -> None:
    args = parse_args([])
    assert all(v is None for v in overrides_from_args(args).values())

    cfg, path = build_config(args)
    assert path == default_config_path()
    assert cfg.use_rich is True
    assert cfg.ui.show_grid is True


def test_flags_map_to_dotted_keys() -> None:
    args = parse_args(
        ["--seed", "5", "--width", "12", "--fast-gravity-ms", "20", "--no-grid", "--no-rich", "--log-level", "debug"]
    )
    ov = overrides_from_args(args)
    assert ov["game.seed"] == 5
    assert ov["game.width"] == 12
    assert ov["game.accelerated_gravity_ms"] == 20
    assert ov["ui.show_grid"] is False
    assert ov["use_rich"] is False
    assert ov["log_level"] == "debug"

    cfg, _ = build_config(args)
    assert cfg.game.seed == 5
    assert cfg.game.width == 12
    assert cfg.game.accelerated_gravity_ms == 20
    assert cfg.ui.show_grid is False
    assert cfg.ui.title == "blockfall 12x20"


def test_explicit_config_path(tmp_path: Path) -> None:
    p = tmp_path / "small.yaml"
    p.write_text("game:\n  width: 6\n  height: 10\nui:\n  fps: 30\n", encoding="utf-8")
    cfg, path = build_config(parse_args(["--config", str(p), "--height", "14"]))
    assert path == p
    assert (cfg.game.width, cfg.game.height) == (6, 14)
    assert cfg.ui.fps == 30


def test_bad_log_level_is_an_argparse_error() -> None:
    with pytest.raises(SystemExit):
        parse_args(["--log-level", "loud"])
