# src/blockfall/game/rendering/pygame/surf.py
from __future__ import annotations

from typing import Dict, Tuple

import pygame

from blockfall.game.rendering.pygame.palette import Color

# highlight/shadow strength for block bevels
_BEVEL_LIGHT = 0.35
_BEVEL_DARK = 0.35


def _mix(color: Color, target: int, amount: float) -> Color:
    r, g, b = color
    return (
        int(r + (target - r) * amount),
        int(g + (target - g) * amount),
        int(b + (target - b) * amount),
    )


class SurfaceCache:
    """
    Per-frame blits reuse these; keyed by (kind, size, color).

      - cell():  flat square, used for empty board cells
      - block(): beveled square, used for locked and active piece cells
    """

    def __init__(self) -> None:
        self._surfs: Dict[Tuple[str, int, Color], pygame.Surface] = {}

    def __len__(self) -> int:
        return len(self._surfs)

    def cell(self, *, size: int, color: Color) -> pygame.Surface:
        key = ("cell", int(size), tuple(color))
        surf = self._surfs.get(key)
        if surf is None:
            surf = pygame.Surface((int(size), int(size)))
            surf.fill(color)
            self._surfs[key] = surf
        return surf

    def block(self, *, size: int, color: Color) -> pygame.Surface:
        key = ("block", int(size), tuple(color))
        surf = self._surfs.get(key)
        if surf is None:
            s = int(size)
            surf = pygame.Surface((s, s))
            surf.fill(color)
            bevel = max(1, s // 8)
            if s > 2 * bevel:
                light = _mix(color, 255, _BEVEL_LIGHT)
                dark = _mix(color, 0, _BEVEL_DARK)
                pygame.draw.rect(surf, light, pygame.Rect(0, 0, s, bevel))
                pygame.draw.rect(surf, light, pygame.Rect(0, 0, bevel, s))
                pygame.draw.rect(surf, dark, pygame.Rect(0, s - bevel, s, bevel))
                pygame.draw.rect(surf, dark, pygame.Rect(s - bevel, 0, bevel, s))
            self._surfs[key] = surf
        return surf


def blit_text(
        *,
        screen: pygame.Surface,
        font: pygame.font.Font,
        text: str,
        pos: Tuple[int, int],
        color: Color,
) -> int:
    """Draw one line of text; returns its height in pixels."""
    img = font.render(str(text), True, color)
    screen.blit(img, pos)
    return int(img.get_height())


__all__ = ["SurfaceCache", "blit_text"]
