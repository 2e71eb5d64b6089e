# src/blockfall/game/core/rotation.py
from __future__ import annotations

from typing import Iterable, Tuple

from blockfall.game.core.board import Board
from blockfall.game.core.geometry import Coordinate
from blockfall.game.core.piece import Piece


def collides(*, board: Board, cells: Iterable[Coordinate]) -> bool:
    """True if any cell is off the board or on a locked cell."""
    for c in cells:
        if not board.is_inside(c):
            return True
        if board.is_occupied(c):
            return True
    return False


def is_legal(*, board: Board, piece: Piece) -> bool:
    return not collides(board=board, cells=piece.cells())


def try_translate(*, board: Board, piece: Piece, delta: Coordinate) -> Tuple[Piece, bool]:
    """
    Candidate = piece moved by delta. The caller commits it only when legal.
    """
    cand = piece.translated(delta)
    return cand, is_legal(board=board, piece=cand)


def bounds_correction(*, cells: Iterable[Coordinate], width: int, height: int) -> Coordinate:
    """
    Minimal anchor shift that brings every cell back inside the board, per axis.

    X and Y are corrected independently. An axis already in bounds gets 0. If a shape
    is wider (or taller) than the board both sides are violated; the low side wins and
    the final legality check rejects it.
    """
    cells = list(cells)
    if not cells:
        return Coordinate(0, 0)

    min_x = min(c.x for c in cells)
    max_x = max(c.x for c in cells)
    min_y = min(c.y for c in cells)
    max_y = max(c.y for c in cells)

    def axis(lo: int, hi: int, size: int) -> int:
        if lo < 0:
            return -lo
        if hi >= size:
            return (size - 1) - hi
        return 0

    return Coordinate(axis(min_x, max_x, int(width)), axis(min_y, max_y, int(height)))


def try_rotate(*, board: Board, piece: Piece) -> Tuple[Piece, bool]:
    """
    Rotate, pull the result back inside the board, then check for overlap.

    Returns (candidate, legal). When not legal the caller keeps the original piece, so
    offsets, anchor and parity are all rejected together.
    """
    cand = piece.rotated()
    shift = bounds_correction(cells=cand.cells(), width=board.w, height=board.h)
    if shift != Coordinate(0, 0):
        cand = cand.translated(shift)
    return cand, is_legal(board=board, piece=cand)


__all__ = ["collides", "is_legal", "try_translate", "bounds_correction", "try_rotate"]
