# src/blockfall/game/rendering/pygame/grid.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence, Tuple

import pygame

from blockfall.game.core.geometry import Coordinate
from blockfall.game.core.types import State
from blockfall.game.rendering.pygame.palette import Color, Palette
from blockfall.game.rendering.pygame.surf import SurfaceCache


# -----------------------------------------------------------------------------
# Rendering constants (no inline magic numbers)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class GridRenderCfg:
    border_width: int = 2
    grid_line_width: int = 1
    cell_inset: int = 1


CFG = GridRenderCfg()


def cell_to_screen(*, cell: Coordinate, board_h: int, origin: Tuple[int, int], size: int) -> Tuple[int, int]:
    """
    Board row 0 is the bottom row; screen y grows downward.
    """
    ox, oy = origin
    return ox + int(cell.x) * int(size), oy + (int(board_h) - 1 - int(cell.y)) * int(size)


def color_for(color_id: int | None, *, colors: Sequence[Color], palette: Palette) -> Color:
    if color_id is None:
        return palette.fallback_piece
    ci = int(color_id)
    if 0 <= ci < len(colors):
        return colors[ci]
    return palette.fallback_piece


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------
def draw_grid(
        *,
        screen: pygame.Surface,
        state: State,
        origin: Tuple[int, int],
        margin: int,
        cell: int,
        show_grid_lines: bool,
        palette: Palette,
        colors: Sequence[Color],
        cache: SurfaceCache,
) -> None:
    """
    Draw empty background cells, then locked cells, then the active piece on top.

    The renderer never mutates game state; it reads the State snapshot only.
    """
    ox, oy = origin
    h, w = int(state.height), int(state.width)

    empty = cache.cell(size=cell, color=palette.empty)
    for y in range(h):
        for x in range(w):
            rx, ry = cell_to_screen(cell=Coordinate(x, y), board_h=h, origin=origin, size=cell)
            screen.blit(empty, (rx, ry))
            if show_grid_lines:
                pygame.draw.rect(
                    screen,
                    palette.grid,
                    pygame.Rect(rx, ry, cell, cell),
                    width=int(CFG.grid_line_width),
                )

    _draw_cells(
        screen=screen,
        cells=((c, color_for(cid, colors=colors, palette=palette)) for c, cid in state.locked),
        board_h=h,
        origin=origin,
        cell=cell,
        cache=cache,
    )

    if state.active_cells:
        active_color = color_for(state.active_color, colors=colors, palette=palette)
        _draw_cells(
            screen=screen,
            cells=((c, active_color) for c in state.active_cells),
            board_h=h,
            origin=origin,
            cell=cell,
            cache=cache,
        )

    pygame.draw.rect(
        screen,
        palette.border,
        pygame.Rect(ox - margin, oy - margin, w * cell + 2 * margin, h * cell + 2 * margin),
        width=int(CFG.border_width),
    )


def _draw_cells(
        *,
        screen: pygame.Surface,
        cells: Iterable[Tuple[Coordinate, Color]],
        board_h: int,
        origin: Tuple[int, int],
        cell: int,
        cache: SurfaceCache,
) -> None:
    inset = int(CFG.cell_inset)
    inner = max(1, int(cell) - 2 * inset)
    for c, color in cells:
        # a piece rejected at spawn may hang off the board; skip what cannot be drawn
        if not (0 <= c.y < board_h):
            continue
        rx, ry = cell_to_screen(cell=c, board_h=board_h, origin=origin, size=cell)
        screen.blit(cache.block(size=inner, color=color), (rx + inset, ry + inset))
