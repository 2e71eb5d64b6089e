# tests/test_factory.py
from __future__ import annotations

from pathlib import Path

import pytest

from blockfall.config.game_spec import GameConfig
from blockfall.game.core.geometry import Coordinate
from blockfall.game.core.shapes import default_catalog
from blockfall.game.factory import load_catalog, make_engine_builder, make_engine_from_cfg

_DOMINO_YAML = """
expected_cells: 2
pieces:
  D:
    rotation: full
    cells: [[0, 0], [1, 0]]
palette:
  - [200, 10, 10]
  - [10, 200, 10]
"""


def _kinds(seed: int, n: int = 5) -> list[str]:
    builder = make_engine_builder(GameConfig(seed=seed))
    out = []
    for _ in range(n):
        eng = builder.new_engine()
        out.append(eng.active.kind)
    return out


def test_default_catalog_when_no_shapes_file() -> None:
    assert load_catalog(GameConfig()) is default_catalog()


def test_custom_catalog_relative_to_config_dir(tmp_path: Path) -> None:
    (tmp_path / "domino.yaml").write_text(_DOMINO_YAML, encoding="utf-8")
    cfg = GameConfig(shapes="domino.yaml", width=6, height=8)
    eng = make_engine_from_cfg(cfg, base=tmp_path)
    assert eng.active.kind == "D"
    assert eng.active.cells() == (Coordinate(3, 7), Coordinate(4, 7))
    assert (eng.w, eng.h) == (6, 8)


def test_missing_catalog_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_catalog(GameConfig(shapes="nope.yaml"), base=tmp_path)


def test_same_seed_same_games() -> None:
    assert _kinds(11) == _kinds(11)


def test_builder_shares_the_rng_across_resets() -> None:
    builder = make_engine_builder(GameConfig(seed=3, width=8, height=12))
    first = builder.new_engine()
    second = builder.new_engine()
    assert first is not second
    assert second.board is not first.board
    assert (second.w, second.h) == (8, 12)
    assert second.pieces_locked == 0
