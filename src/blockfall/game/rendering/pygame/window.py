# src/blockfall/game/rendering/pygame/window.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import pygame

# board frame padding, gap to the sidebar, sidebar width (px)
BOARD_PAD = 24
FRAME_MARGIN = 6
SIDEBAR_GAP = 24
SIDEBAR_W = 200


@dataclass(frozen=True)
class Layout:
    """
    Pixel geometry of the play window: the board at `origin`, the stats/controls
    column at (sidebar_x, sidebar_y), and the total window `size`.
    """

    origin: Tuple[int, int]
    margin: int
    sidebar_x: int
    sidebar_y: int
    size: Tuple[int, int]
    title: str = "blockfall"


def compute_layout(*, board_h: int, board_w: int, cell: int, title: str = "blockfall") -> Layout:
    board_px_w = int(board_w) * int(cell)
    board_px_h = int(board_h) * int(cell)

    sidebar_x = BOARD_PAD + board_px_w + SIDEBAR_GAP
    width = sidebar_x + SIDEBAR_W + BOARD_PAD // 2
    height = BOARD_PAD + board_px_h + BOARD_PAD

    return Layout(
        origin=(BOARD_PAD, BOARD_PAD),
        margin=FRAME_MARGIN,
        sidebar_x=sidebar_x,
        sidebar_y=BOARD_PAD - FRAME_MARGIN,
        size=(width, height),
        title=str(title),
    )


def create_window(layout: Layout) -> pygame.Surface:
    pygame.display.set_caption(layout.title)
    return pygame.display.set_mode(layout.size)


__all__ = ["Layout", "compute_layout", "create_window", "SIDEBAR_W"]
