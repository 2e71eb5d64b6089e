# tests/test_engine.py
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import pytest

from blockfall.game.core.board import Board
from blockfall.game.core.game import GameEngine
from blockfall.game.core.geometry import Coordinate
from blockfall.game.core.piece import Piece
from blockfall.game.core.piece_factory import spawn_anchor_for
from blockfall.game.core.shapes import default_catalog
from blockfall.game.core.types import Action, EngineState


class FixedPieces:
    """Deterministic piece source: cycles through the given kinds."""

    def __init__(self, kinds: Sequence[str], *, width: int = 10, height: int = 20) -> None:
        self.kinds = list(kinds)
        self.anchor = spawn_anchor_for(width=width, height=height)
        self.served = 0

    def next(self) -> Piece:
        kind = self.kinds[self.served % len(self.kinds)]
        self.served += 1
        return Piece.spawn(default_catalog().get(kind), anchor=self.anchor, color=self.served % 7)


def _engine(kinds: Sequence[str], *, board: Board | None = None) -> GameEngine:
    return GameEngine(width=10, height=20, piece_source=FixedPieces(kinds), board=board)


def _row(y: int, xs: Sequence[int]) -> list[Coordinate]:
    return [Coordinate(x, y) for x in xs]


def test_new_game_spawns_an_active_piece_at_top_center() -> None:
    eng = GameEngine(rng=np.random.default_rng(0))
    s = eng.state()
    assert s.engine_state is EngineState.ACTIVE
    assert not s.game_over
    assert s.locked == ()
    assert eng.active is not None
    assert eng.active.anchor == Coordinate(5, 19)
    assert len(s.active_cells) == 4
    assert s.lines == 0 and s.pieces_locked == 0


def test_board_size_mismatch_is_rejected() -> None:
    with pytest.raises(ValueError, match="engine was configured as 10x20"):
        GameEngine(width=10, height=20, board=Board.empty(height=10, width=10))


def test_move_horizontal_only_accepts_unit_steps() -> None:
    eng = _engine(["T"])
    with pytest.raises(ValueError, match="direction"):
        eng.move_horizontal(0)
    with pytest.raises(ValueError):
        eng.move_horizontal(2)


def test_horizontal_moves_stop_at_the_walls() -> None:
    eng = _engine(["O"])
    moved = 0
    while eng.move_horizontal(+1):
        moved += 1
    assert moved == 3
    assert max(c.x for c in eng.active.cells()) == 9
    assert eng.move_horizontal(+1) is False
    assert eng.active.anchor == Coordinate(8, 19)


def test_gravity_tick_falls_then_locks_and_respawns() -> None:
    eng = _engine(["O", "T"])
    for _ in range(18):
        assert eng.gravity_tick() == 0
    assert eng.active.kind == "O"
    assert min(c.y for c in eng.active.cells()) == 0

    assert eng.gravity_tick() == 0
    assert eng.pieces_locked == 1
    assert eng.active.kind == "T"
    assert eng.status is EngineState.ACTIVE
    assert {c for c, _ in eng.state().locked} == {
        Coordinate(5, 0), Coordinate(6, 0), Coordinate(5, 1), Coordinate(6, 1)
    }


def test_o_piece_completes_the_bottom_row() -> None:
    board = Board.empty(height=20, width=10)
    board.lock(_row(0, range(8)), 0)
    eng = _engine(["O", "T"], board=board)

    for _ in range(3):
        assert eng.move_horizontal(+1)
    assert eng.hard_drop() == 1

    assert eng.lines == 1
    # the upper half of the O dropped into the bottom row
    assert [c for c, _ in eng.state().locked] == [Coordinate(8, 0), Coordinate(9, 0)]


def test_i_piece_completes_the_bottom_row_and_leaves_an_empty_board() -> None:
    board = Board.empty(height=20, width=10)
    board.lock(_row(0, range(6)), 3)
    eng = _engine(["I", "O"], board=board)

    eng.move_horizontal(+1)
    eng.move_horizontal(+1)
    _, cleared, over = eng.step(Action.HARD_DROP)
    assert cleared == 1
    assert not over
    assert eng.state().locked == ()


def test_blocked_spawn_is_game_over_and_commands_become_no_ops(caplog: pytest.LogCaptureFixture) -> None:
    board = Board.empty(height=20, width=10)
    board.lock([Coordinate(5, 19)], 0)
    with caplog.at_level(logging.INFO, logger="blockfall.game.core.game"):
        eng = _engine(["T"], board=board)
    assert "game over" in caplog.text

    assert eng.game_over
    before = eng.state()
    assert before.engine_state is EngineState.GAME_OVER
    assert before.active_kind == "T"

    assert eng.move_horizontal(-1) is False
    assert eng.rotate() is False
    assert eng.gravity_tick() == 0
    assert eng.hard_drop() == 0
    state, cleared, over = eng.step("left")
    assert over and cleared == 0
    assert state == before


def test_stacking_o_pieces_ends_the_game_after_ten_locks() -> None:
    eng = _engine(["O"])
    drops = 0
    while not eng.game_over:
        eng.hard_drop()
        drops += 1
        assert drops <= 10
    assert eng.pieces_locked == 10
    assert eng.lines == 0
    assert len(eng.state().locked) == 40


def test_rejected_rotation_leaves_the_piece_untouched() -> None:
    board = Board.empty(height=20, width=10)
    board.lock([Coordinate(5, 17)], 0)
    eng = _engine(["T"], board=board)
    # come down left of the obstacle, then slide under it
    eng.move_horizontal(-1)
    eng.move_horizontal(-1)
    for _ in range(3):
        eng.gravity_tick()
    eng.move_horizontal(+1)
    eng.move_horizontal(+1)
    before = eng.active
    assert before.anchor == Coordinate(5, 16)

    assert eng.rotate() is False
    assert eng.active == before
    assert eng.active.parity is False


def test_rotating_o_changes_nothing() -> None:
    eng = _engine(["O"])
    before = eng.active.cells()
    assert eng.rotate() is True
    assert eng.active.cells() == before


def test_half_step_parity_is_committed_only_with_the_rotation() -> None:
    eng = _engine(["I"])
    assert eng.rotate()
    assert eng.active.parity is True
    assert eng.rotate()
    assert eng.active.parity is False


def test_step_accepts_enum_and_aliases() -> None:
    eng = _engine(["T"])
    eng.step(Action.LEFT)
    assert eng.active.anchor == Coordinate(4, 19)
    eng.step("right")
    eng.step(" RIGHT ")
    assert eng.active.anchor == Coordinate(6, 19)
    eng.step("down")
    eng.step("tick")
    assert eng.active.anchor == Coordinate(6, 17)
    state, _, _ = eng.step("rot")
    assert state.active_cells == eng.active.cells()
    eng.step("drop")
    assert eng.pieces_locked == 1


def test_unknown_action_raises() -> None:
    eng = _engine(["T"])
    with pytest.raises(ValueError, match="unknown action"):
        eng.step("teleport")


def test_accelerate_is_reported_but_does_not_move_the_piece() -> None:
    eng = _engine(["T"])
    before = eng.active
    eng.set_accelerate(True)
    assert eng.accelerate
    assert eng.state().accelerate
    assert eng.active == before
    eng.set_accelerate(False)
    assert not eng.state().accelerate


def test_state_snapshot_is_detached_from_the_engine() -> None:
    eng = _engine(["O"])
    snap = eng.state()
    eng.hard_drop()
    assert snap.locked == ()
    assert snap.pieces_locked == 0
    assert len(eng.state().locked) == 4


def test_random_play_keeps_the_board_consistent() -> None:
    rng = np.random.default_rng(2024)
    eng = GameEngine(width=8, height=16, rng=np.random.default_rng(5))
    actions = list(Action)
    for _ in range(2000):
        a = actions[int(rng.integers(0, len(actions)))]
        state, cleared, over = eng.step(a)
        assert cleared >= 0

        locked = {c for c, _ in state.locked}
        assert all(0 <= c.x < 8 and 0 <= c.y < 16 for c in locked)
        assert not any(eng.board.row_is_full(y) for y in range(16))

        if over:
            break
        assert state.engine_state is EngineState.ACTIVE
        assert len(set(state.active_cells)) == len(state.active_cells)
        assert all(eng.board.is_inside(c) for c in state.active_cells)
        assert not (set(state.active_cells) & locked)
