# src/blockfall/game/core/board.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np

from blockfall.game.core.constants import EMPTY_CELL
from blockfall.game.core.geometry import Coordinate


class OutOfBoundsError(IndexError):
    """A board cell outside [0, width) x [0, height) was queried or written."""


@dataclass
class Board:
    """
    Locked cells only. The active piece is never stored here.

    grid[y, x] layout: row 0 is the bottom row.
      0       = empty
      id + 1  = locked with palette color id `id`
    """

    h: int
    w: int
    grid: np.ndarray

    @classmethod
    def empty(cls, *, height: int, width: int) -> "Board":
        h, w = int(height), int(width)
        if h <= 0 or w <= 0:
            raise ValueError(f"board size must be positive, got width={w} height={h}")
        return cls(h=h, w=w, grid=np.zeros((h, w), dtype=np.uint8))

    def is_inside(self, cell: Coordinate) -> bool:
        return 0 <= cell.x < self.w and 0 <= cell.y < self.h

    def _require_inside(self, cell: Coordinate) -> None:
        if not self.is_inside(cell):
            raise OutOfBoundsError(f"cell ({cell.x}, {cell.y}) is outside the {self.w}x{self.h} board")

    def is_occupied(self, cell: Coordinate) -> bool:
        self._require_inside(cell)
        return bool(self.grid[cell.y, cell.x] != EMPTY_CELL)

    def color_at(self, cell: Coordinate) -> Optional[int]:
        self._require_inside(cell)
        v = int(self.grid[cell.y, cell.x])
        return None if v == EMPTY_CELL else v - 1

    def lock(self, cells: Iterable[Coordinate], color: int) -> None:
        cells = list(cells)
        # validate everything first so a bad cell never leaves a half-written piece
        for c in cells:
            self._require_inside(c)
        cell_id = int(color) + 1
        if not (1 <= cell_id <= 255):
            raise ValueError(f"color id must be in [0, 254], got {color}")
        for c in cells:
            self.grid[c.y, c.x] = cell_id

    def row_is_full(self, y: int) -> bool:
        if not (0 <= int(y) < self.h):
            raise OutOfBoundsError(f"row {y} is outside the {self.w}x{self.h} board")
        return bool(np.all(self.grid[int(y)] != EMPTY_CELL))

    def clear_full_rows_and_compact(self) -> int:
        full = np.all(self.grid != EMPTY_CELL, axis=1)
        cleared = int(full.sum())
        if cleared <= 0:
            return 0
        kept = self.grid[~full]
        new_rows = np.zeros((cleared, self.w), dtype=np.uint8)
        # bottom rows first, fresh empty rows go on top
        self.grid = np.vstack([kept, new_rows])
        return cleared

    def occupied_cells(self) -> List[Tuple[Coordinate, int]]:
        ys, xs = np.nonzero(self.grid != EMPTY_CELL)
        return [(Coordinate(int(x), int(y)), int(self.grid[y, x]) - 1) for y, x in zip(ys, xs)]

    def rows(self) -> Tuple[Tuple[Optional[int], ...], ...]:
        """Bottom-to-top snapshot of color ids (None = empty)."""
        return tuple(
            tuple(None if int(v) == EMPTY_CELL else int(v) - 1 for v in row) for row in self.grid
        )

    def copy(self) -> "Board":
        return Board(h=self.h, w=self.w, grid=self.grid.copy())


__all__ = ["Board", "OutOfBoundsError"]
