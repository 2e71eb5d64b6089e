# src/blockfall/game/core/game.py
from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Tuple

import numpy as np

from blockfall.game.core.board import Board
from blockfall.game.core.constants import DEFAULT_HEIGHT, DEFAULT_WIDTH
from blockfall.game.core.geometry import DOWN, Coordinate
from blockfall.game.core.piece import Piece
from blockfall.game.core.piece_factory import PieceFactory
from blockfall.game.core.rotation import is_legal, try_rotate, try_translate
from blockfall.game.core.shapes import ShapeCatalog
from blockfall.game.core.types import Action, EngineState, State

logger = logging.getLogger(__name__)


class PieceSource(Protocol):
    def next(self) -> Piece: ...


_ACTION_ALIASES = {
    "left": Action.LEFT,
    "right": Action.RIGHT,
    "rotate": Action.ROTATE,
    "rot": Action.ROTATE,
    "up": Action.ROTATE,
    "soft_drop": Action.SOFT_DROP,
    "down": Action.SOFT_DROP,
    "tick": Action.SOFT_DROP,
    "gravity": Action.SOFT_DROP,
    "hard_drop": Action.HARD_DROP,
    "drop": Action.HARD_DROP,
}


class GameEngine:
    """
    One game session: the locked board plus the single active piece.

    Contracts:

      - board is the authoritative LOCKED board; the active piece is never written to it
        until it locks.
      - every command is all-or-nothing: a candidate piece is computed, checked, and only
        committed when legal. Illegal moves/rotations are silently dropped.
      - SPAWNING and LOCKING are transient; callers only ever observe ACTIVE or GAME_OVER.
      - GAME_OVER is terminal. Reset means building a new engine.
      - acceleration is bookkeeping for the driver: it changes how often gravity_tick()
        gets called, not what gravity_tick() does.
    """

    def __init__(
            self,
            *,
            width: int = DEFAULT_WIDTH,
            height: int = DEFAULT_HEIGHT,
            catalog: Optional[ShapeCatalog] = None,
            rng: Optional[np.random.Generator] = None,
            piece_source: Optional[PieceSource] = None,
            board: Optional[Board] = None,
    ) -> None:
        self.w = int(width)
        self.h = int(height)
        if self.w <= 0 or self.h <= 0:
            raise ValueError(f"board size must be positive, got width={self.w} height={self.h}")

        if board is not None and (board.w != self.w or board.h != self.h):
            raise ValueError(
                f"board is {board.w}x{board.h} but engine was configured as {self.w}x{self.h}"
            )
        self.board = board if board is not None else Board.empty(height=self.h, width=self.w)

        self.pieces: PieceSource = piece_source or PieceFactory(
            width=self.w,
            height=self.h,
            catalog=catalog,
            rng=rng,
        )

        self.lines = 0
        self.pieces_locked = 0
        self._accelerate = False

        self.active: Optional[Piece] = None
        self.status = EngineState.SPAWNING
        self._spawn()

    # ---- queries -------------------------------------------------------------------

    @property
    def game_over(self) -> bool:
        return self.status is EngineState.GAME_OVER

    @property
    def accelerate(self) -> bool:
        return self._accelerate

    def state(self) -> State:
        ap = self.active
        return State(
            width=self.w,
            height=self.h,
            engine_state=self.status,
            locked=tuple(self.board.occupied_cells()),
            active_kind=None if ap is None else ap.kind,
            active_cells=() if ap is None else ap.cells(),
            active_color=None if ap is None else int(ap.color),
            accelerate=bool(self._accelerate),
            lines=int(self.lines),
            pieces_locked=int(self.pieces_locked),
        )

    # ---- commands ------------------------------------------------------------------

    def move_horizontal(self, direction: int) -> bool:
        d = int(direction)
        if d not in (-1, 1):
            raise ValueError(f"direction must be -1 or +1, got {direction!r}")
        return self._try_move(Coordinate(d, 0))

    def rotate(self) -> bool:
        if self.status is not EngineState.ACTIVE or self.active is None:
            return False
        cand, legal = try_rotate(board=self.board, piece=self.active)
        if not legal:
            return False
        self.active = cand
        return True

    def set_accelerate(self, flag: bool) -> None:
        self._accelerate = bool(flag)

    def gravity_tick(self) -> int:
        """
        Move the active piece one row down, or lock it when it cannot fall.

        Returns the number of rows cleared by this tick (0 when nothing locked).
        """
        if self.status is not EngineState.ACTIVE:
            return 0
        if self._try_move(DOWN):
            return 0
        return self._lock_and_advance()

    def hard_drop(self) -> int:
        if self.status is not EngineState.ACTIVE:
            return 0
        while self._try_move(DOWN):
            pass
        return self._lock_and_advance()

    def step(self, action: Any) -> Tuple[State, int, bool]:
        """
        Apply an action and return (state, cleared_rows, game_over).
        """
        if self.game_over:
            return self.state(), 0, True

        a = self._normalize_action(action)
        cleared = 0

        if a == Action.LEFT:
            self.move_horizontal(-1)
        elif a == Action.RIGHT:
            self.move_horizontal(+1)
        elif a == Action.ROTATE:
            self.rotate()
        elif a == Action.SOFT_DROP:
            cleared = self.gravity_tick()
        elif a == Action.HARD_DROP:
            cleared = self.hard_drop()

        return self.state(), int(cleared), bool(self.game_over)

    # ---- internals -----------------------------------------------------------------

    def _normalize_action(self, action: Any) -> Action:
        if isinstance(action, Action):
            return action
        s = str(action).strip().lower()
        try:
            return _ACTION_ALIASES[s]
        except KeyError as e:
            raise ValueError(f"unknown action {action!r} (known={sorted(_ACTION_ALIASES)!r})") from e

    def _try_move(self, delta: Coordinate) -> bool:
        if self.status is not EngineState.ACTIVE or self.active is None:
            return False
        cand, legal = try_translate(board=self.board, piece=self.active, delta=delta)
        if not legal:
            return False
        self.active = cand
        return True

    def _spawn(self) -> None:
        self.status = EngineState.SPAWNING
        piece = self.pieces.next()
        self.active = piece
        if not is_legal(board=self.board, piece=piece):
            self.status = EngineState.GAME_OVER
            logger.info(
                "game over: %s cannot spawn at (%d, %d) after %d pieces, %d lines",
                piece.kind,
                piece.anchor.x,
                piece.anchor.y,
                self.pieces_locked,
                self.lines,
            )
            return
        self.status = EngineState.ACTIVE

    def _lock_and_advance(self) -> int:
        ap = self.active
        if ap is None:
            raise RuntimeError("no active piece to lock")

        self.status = EngineState.LOCKING
        self.board.lock(ap.cells(), ap.color)
        self.active = None
        self.pieces_locked += 1

        cleared = int(self.board.clear_full_rows_and_compact())
        self.lines += cleared
        logger.debug("locked %s at (%d, %d), cleared %d rows", ap.kind, ap.anchor.x, ap.anchor.y, cleared)

        self._spawn()
        return cleared


__all__ = ["GameEngine", "PieceSource"]
