# src/blockfall/game/rendering/pygame/renderer.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import pygame

from blockfall.game.core.types import State
from blockfall.game.rendering.pygame.grid import draw_grid
from blockfall.game.rendering.pygame.palette import Color, Palette
from blockfall.game.rendering.pygame.surf import SurfaceCache, blit_text
from blockfall.game.rendering.pygame.window import Layout, compute_layout, create_window

__all__ = ["Color", "Palette", "GameRenderer"]

CONTROLS = (
    ("Left/A", "move left"),
    ("Right/D", "move right"),
    ("Up/E", "rotate"),
    ("Down/S/W", "accelerate"),
    ("Space", "hard drop"),
    ("R", "reset"),
    ("Esc/Q", "quit"),
)


@dataclass(frozen=True)
class Fonts:
    main: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font


class GameRenderer:
    def __init__(
        self,
        *,
        cell: int,
        show_grid_lines: bool,
        colors: Sequence[Color],
        palette: Optional[Palette] = None,
    ) -> None:
        self.cell = int(cell)
        self.show_grid_lines = bool(show_grid_lines)
        self.colors = tuple(colors)
        self.palette = palette or Palette()

        main = pygame.font.SysFont("consolas", 18) or pygame.font.SysFont(None, 18)
        small = pygame.font.SysFont("consolas", 14) or pygame.font.SysFont(None, 14)
        big = pygame.font.SysFont("consolas", 32) or pygame.font.SysFont(None, 32)
        self.fonts = Fonts(main=main, small=small, big=big)

        self.cache = SurfaceCache()

    def init_window(self, *, board_h: int, board_w: int, title: str) -> tuple[pygame.Surface, Layout]:
        layout = compute_layout(board_h=int(board_h), board_w=int(board_w), cell=int(self.cell), title=str(title))
        screen = create_window(layout)
        return screen, layout

    def render(self, *, screen: pygame.Surface, state: State, layout: Layout) -> None:
        screen.fill(self.palette.bg)

        draw_grid(
            screen=screen,
            state=state,
            origin=layout.origin,
            margin=layout.margin,
            cell=self.cell,
            show_grid_lines=self.show_grid_lines,
            palette=self.palette,
            colors=self.colors,
            cache=self.cache,
        )
        self._draw_sidebar(screen=screen, state=state, layout=layout)

        if state.game_over:
            self._draw_game_over(screen=screen, state=state, layout=layout)

    def _draw_sidebar(self, *, screen: pygame.Surface, state: State, layout: Layout) -> None:
        x = layout.sidebar_x
        y = layout.sidebar_y
        rows = (
            ("Lines", str(state.lines)),
            ("Pieces", str(state.pieces_locked)),
            ("Piece", state.active_kind or "-"),
            ("Fast", "yes" if state.accelerate else "no"),
        )
        y += blit_text(screen=screen, font=self.fonts.main, text="STATS", pos=(x, y), color=self.palette.text) + 8
        for k, v in rows:
            blit_text(screen=screen, font=self.fonts.small, text=k, pos=(x, y), color=self.palette.muted)
            blit_text(screen=screen, font=self.fonts.small, text=v, pos=(x + 70, y), color=self.palette.text)
            y += 20

        y += 16
        y += blit_text(screen=screen, font=self.fonts.main, text="CONTROLS", pos=(x, y), color=self.palette.text) + 8
        for k, v in CONTROLS:
            blit_text(screen=screen, font=self.fonts.small, text=k, pos=(x, y), color=self.palette.muted)
            blit_text(screen=screen, font=self.fonts.small, text=v, pos=(x + 90, y), color=self.palette.text)
            y += 20

    def _draw_game_over(self, *, screen: pygame.Surface, state: State, layout: Layout) -> None:
        ox, oy = layout.origin
        bw, bh = state.width * self.cell, state.height * self.cell

        shade = pygame.Surface((bw, bh), pygame.SRCALPHA)
        shade.fill(self.palette.game_over_rgba)
        screen.blit(shade, (ox, oy))

        img = self.fonts.big.render("GAME OVER", True, self.palette.warn)
        screen.blit(img, img.get_rect(center=(ox + bw // 2, oy + bh // 2 - 16)))
        hint = self.fonts.small.render("R to restart", True, self.palette.text)
        screen.blit(hint, hint.get_rect(center=(ox + bw // 2, oy + bh // 2 + 16)))
