# src/blockfall/game/core/piece.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from blockfall.game.core.geometry import Coordinate, RotationFamily
from blockfall.game.core.shapes import ShapeDef


@dataclass(frozen=True)
class Piece:
    """
    A falling piece: shape reference plus per-instance placement.

    Pieces are values. rotated()/translated()/with_color() return new pieces and never
    check legality; the engine decides whether a candidate gets committed.

    Fields:
      - anchor:  absolute board coordinate the offsets are translated by
      - offsets: current relative cell offsets (rotation already applied)
      - parity:  HALF_STEP only; True means the next rotation is the reverse step
      - color:   palette color id, fixed at spawn
    """

    shape: ShapeDef
    anchor: Coordinate
    offsets: Tuple[Coordinate, ...]
    parity: bool = False
    color: int = 0

    @classmethod
    def spawn(cls, shape: ShapeDef, *, anchor: Coordinate, color: int = 0) -> "Piece":
        return cls(shape=shape, anchor=anchor, offsets=tuple(shape.offsets), parity=False, color=int(color))

    @property
    def kind(self) -> str:
        return self.shape.kind

    @property
    def rotation(self) -> RotationFamily:
        return self.shape.rotation

    def cells(self) -> Tuple[Coordinate, ...]:
        a = self.anchor
        return tuple(a + o for o in self.offsets)

    def translated(self, delta: Coordinate) -> "Piece":
        return replace(self, anchor=self.anchor + delta)

    def moved_to(self, anchor: Coordinate) -> "Piece":
        return replace(self, anchor=anchor)

    def with_color(self, color: int) -> "Piece":
        return replace(self, color=int(color))

    def rotated(self) -> "Piece":
        fam = self.shape.rotation
        if fam is RotationFamily.NONE:
            return self

        if fam is RotationFamily.HALF_STEP and self.parity:
            offsets = tuple(o.rotated_reverse() for o in self.offsets)
        else:
            offsets = tuple(o.rotated_forward() for o in self.offsets)

        parity = (not self.parity) if fam is RotationFamily.HALF_STEP else self.parity
        return replace(self, offsets=offsets, parity=parity)


__all__ = ["Piece"]
