# src/blockfall/game/core/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Tuple

from blockfall.game.core.geometry import Coordinate


class Action(Enum):
    LEFT = auto()
    RIGHT = auto()
    ROTATE = auto()
    SOFT_DROP = auto()
    HARD_DROP = auto()


class EngineState(Enum):
    # SPAWNING and LOCKING only exist inside a single engine call.
    SPAWNING = auto()
    ACTIVE = auto()
    LOCKING = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class State:
    """
    Render-facing snapshot.

    Contracts:
      - locked holds board cells only (no active overlay), bottom row first.
      - active_cells is the active piece (or, after GAME_OVER, the piece that failed to spawn).
      - colors are palette color ids; the renderer owns the RGB mapping.
    """

    width: int
    height: int
    engine_state: EngineState

    locked: Tuple[Tuple[Coordinate, int], ...]

    active_kind: Optional[str]
    active_cells: Tuple[Coordinate, ...]
    active_color: Optional[int]

    accelerate: bool
    lines: int
    pieces_locked: int

    @property
    def game_over(self) -> bool:
        return self.engine_state is EngineState.GAME_OVER


__all__ = ["Action", "EngineState", "State"]
