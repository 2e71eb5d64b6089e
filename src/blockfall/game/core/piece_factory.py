# src/blockfall/game/core/piece_factory.py
from __future__ import annotations

from typing import Optional

import numpy as np

from blockfall.game.core.geometry import Coordinate
from blockfall.game.core.piece import Piece
from blockfall.game.core.shapes import ShapeCatalog, default_catalog


def spawn_anchor_for(*, width: int, height: int) -> Coordinate:
    """Horizontal center of the top row."""
    return Coordinate(int(width) // 2, int(height) - 1)


class PieceFactory:
    """
    Uniform shape + uniform color selection, driven by an injected RNG.

    Shape index and color index are drawn independently. The RNG is owned by the
    caller; the factory keeps no other mutable state.
    """

    def __init__(
            self,
            *,
            width: int,
            height: int,
            catalog: Optional[ShapeCatalog] = None,
            rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.catalog = catalog or default_catalog()
        if len(self.catalog) == 0:
            raise ValueError("PieceFactory requires a non-empty shape catalog")
        if not self.catalog.palette:
            raise ValueError("PieceFactory requires a non-empty palette")
        self._anchor = spawn_anchor_for(width=width, height=height)
        self._rng: np.random.Generator = rng if rng is not None else np.random.default_rng()

    @property
    def spawn_anchor(self) -> Coordinate:
        return self._anchor

    def set_rng(self, rng: np.random.Generator) -> None:
        self._rng = rng

    def next(self) -> Piece:
        si = int(self._rng.integers(0, len(self.catalog)))
        ci = int(self._rng.integers(0, len(self.catalog.palette)))
        return Piece.spawn(self.catalog.by_index(si), anchor=self._anchor, color=ci)


__all__ = ["PieceFactory", "spawn_anchor_for"]
