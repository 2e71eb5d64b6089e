# src/blockfall/game/core/shapes.py
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import yaml

from blockfall.game.core.geometry import Coordinate, RotationFamily
from blockfall.utils.paths import shapes_dir

Color = Tuple[int, int, int]


def _parse_color(v: object) -> Color:
    if not isinstance(v, (list, tuple)) or len(v) != 3:
        raise ValueError(f"color must be a 3-item list/tuple, got {v!r}")
    r, g, b = v
    for c in (r, g, b):
        if not isinstance(c, int) or isinstance(c, bool) or not (0 <= c <= 255):
            raise ValueError(f"color components must be ints in [0,255], got {v!r}")
    return int(r), int(g), int(b)


def _parse_offsets(kind: str, cells: object) -> Tuple[Coordinate, ...]:
    if not isinstance(cells, (list, tuple)) or len(cells) == 0:
        raise ValueError(f"{kind!r}: 'cells' must be a non-empty list of [x, y] pairs")

    out: List[Coordinate] = []
    for i, pair in enumerate(cells):
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise ValueError(f"{kind!r}: cells[{i}] must be an [x, y] pair, got {pair!r}")
        x, y = pair
        if not isinstance(x, int) or not isinstance(y, int) or isinstance(x, bool) or isinstance(y, bool):
            raise ValueError(f"{kind!r}: cells[{i}] must hold ints, got {pair!r}")
        out.append(Coordinate(int(x), int(y)))

    if len(set(out)) != len(out):
        raise ValueError(f"{kind!r}: duplicate cell offsets in {cells!r}")

    # Spawn contract: the anchor sits on the top row, nothing may stick out above it.
    above = [c for c in out if c.y > 0]
    if above:
        raise ValueError(f"{kind!r}: cell offsets must have y <= 0, got {[(c.x, c.y) for c in above]!r}")
    return tuple(out)


@dataclass(frozen=True)
class ShapeDef:
    kind: str
    offsets: Tuple[Coordinate, ...]
    rotation: RotationFamily

    def cell_count(self) -> int:
        return len(self.offsets)


@dataclass(frozen=True)
class ShapeCatalog:
    """
    Shape geometry + spawn palette, loaded from YAML.

    Provides:
      - stable ordering of kinds (index 0..K-1 used by the piece factory)
      - get(kind) -> ShapeDef
      - palette of RGB colors; board cells store indices into it (color ids)
    """

    shapes: Dict[str, ShapeDef]
    kind_order: Tuple[str, ...]
    palette: Tuple[Color, ...]

    @staticmethod
    def default_classic7_path() -> Path:
        return shapes_dir() / "classic7.yaml"

    @classmethod
    def from_yaml(cls, path: Path, *, expected_cells: Optional[int] = None) -> "ShapeCatalog":
        p = Path(path)
        data = yaml.safe_load(p.read_text(encoding="utf-8"))

        if not isinstance(data, dict):
            raise ValueError(f"shape YAML must be a mapping at top-level, got {type(data)!r}")

        if expected_cells is None:
            v = data.get("expected_cells", None)
            if isinstance(v, int):
                expected_cells = v
            elif isinstance(v, str):
                expected_cells = int(v)
            elif v is not None:
                raise TypeError(f"expected_cells must be int or str, got {type(v)!r}")

        pieces_node = data.get("pieces")
        if not isinstance(pieces_node, dict) or not pieces_node:
            raise ValueError("shape YAML must contain non-empty mapping 'pieces:'")

        shapes: Dict[str, ShapeDef] = {}
        kind_order: List[str] = []

        for kind, spec in pieces_node.items():
            if not isinstance(kind, str) or not kind:
                raise ValueError(f"piece key must be a non-empty string, got {kind!r}")
            if not isinstance(spec, dict):
                raise ValueError(f"piece spec for {kind!r} must be a mapping, got {type(spec)!r}")

            offsets = _parse_offsets(kind, spec.get("cells"))
            if expected_cells is not None and len(offsets) != int(expected_cells):
                raise ValueError(f"{kind!r}: expected {expected_cells} cells, got {len(offsets)}")

            rotation = RotationFamily.parse(spec.get("rotation", "full"))

            shapes[kind] = ShapeDef(kind=kind, offsets=offsets, rotation=rotation)
            kind_order.append(kind)

        palette_node = data.get("palette")
        if not isinstance(palette_node, list) or not palette_node:
            raise ValueError("shape YAML must contain a non-empty list 'palette:'")
        palette = tuple(_parse_color(c) for c in palette_node)

        return cls(shapes=shapes, kind_order=tuple(kind_order), palette=palette)

    @classmethod
    def from_shapes(cls, shapes: Sequence[ShapeDef], *, palette: Sequence[Color]) -> "ShapeCatalog":
        if not shapes:
            raise ValueError("ShapeCatalog requires at least one shape")
        if not palette:
            raise ValueError("ShapeCatalog requires a non-empty palette")
        checked: List[ShapeDef] = []
        for s in shapes:
            if any(c.kind == s.kind for c in checked):
                raise ValueError(f"duplicate shape kind {s.kind!r}")
            pairs = [[o.x, o.y] if isinstance(o, Coordinate) else o for o in s.offsets]
            offsets = _parse_offsets(s.kind, pairs)
            checked.append(ShapeDef(kind=s.kind, offsets=offsets, rotation=RotationFamily.parse(s.rotation)))
        return cls(
            shapes={s.kind: s for s in checked},
            kind_order=tuple(s.kind for s in checked),
            palette=tuple(_parse_color(list(c)) for c in palette),
        )

    def kinds(self) -> Tuple[str, ...]:
        return self.kind_order

    def __contains__(self, kind: str) -> bool:
        return kind in self.shapes

    def __len__(self) -> int:
        return len(self.kind_order)

    def get(self, kind: str) -> ShapeDef:
        try:
            return self.shapes[kind]
        except KeyError as e:
            raise KeyError(f"unknown piece kind {kind!r}. known kinds={list(self.kind_order)!r}") from e

    def by_index(self, idx: int) -> ShapeDef:
        ii = int(idx)
        if ii < 0 or ii >= len(self.kind_order):
            raise ValueError(f"shape index out of range: {ii} (valid 0..{len(self.kind_order) - 1})")
        return self.shapes[self.kind_order[ii]]

    def color_of(self, color_id: int) -> Color:
        ci = int(color_id)
        if ci < 0 or ci >= len(self.palette):
            raise ValueError(f"color id out of range: {ci} (valid 0..{len(self.palette) - 1})")
        return self.palette[ci]


@lru_cache(maxsize=None)
def default_catalog() -> ShapeCatalog:
    """
    The bundled classic 7 tetromino catalog (loaded once per process).
    """
    return ShapeCatalog.from_yaml(ShapeCatalog.default_classic7_path(), expected_cells=4)


__all__ = ["Color", "ShapeDef", "ShapeCatalog", "default_catalog"]
