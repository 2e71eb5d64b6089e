# src/blockfall/game/core/geometry.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Coordinate:
    """
    Integer board coordinate.

    x is the column, y is the row. Rows increase upward (row 0 is the bottom row).
    """

    x: int
    y: int

    def __add__(self, other: "Coordinate") -> "Coordinate":
        return Coordinate(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Coordinate") -> "Coordinate":
        return Coordinate(self.x - other.x, self.y - other.y)

    def rotated_forward(self) -> "Coordinate":
        # 90 degrees counter-clockwise about the origin
        return Coordinate(-self.y, self.x)

    def rotated_reverse(self) -> "Coordinate":
        return Coordinate(self.y, -self.x)


ORIGIN = Coordinate(0, 0)
LEFT = Coordinate(-1, 0)
RIGHT = Coordinate(1, 0)
DOWN = Coordinate(0, -1)


class RotationFamily(Enum):
    """
    How many distinct orientations a shape shows when rotated.

      NONE      -> 1 (rotation is a no-op)
      HALF_STEP -> 2 (forward / reverse alternate, parity flag tracks which is next)
      FULL      -> 4 (always forward)
    """

    NONE = "none"
    HALF_STEP = "half_step"
    FULL = "full"

    @classmethod
    def parse(cls, value: object) -> "RotationFamily":
        if isinstance(value, RotationFamily):
            return value
        s = str(value).strip().lower().replace("-", "_")
        aliases = {"semi": "half_step", "half": "half_step"}
        s = aliases.get(s, s)
        try:
            return cls(s)
        except ValueError as e:
            known = [m.value for m in cls]
            raise ValueError(f"unknown rotation family {value!r} (known={known!r})") from e


__all__ = ["Coordinate", "RotationFamily", "ORIGIN", "LEFT", "RIGHT", "DOWN"]
