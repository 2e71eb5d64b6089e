# src/blockfall/apps/play/ui.py
from __future__ import annotations

import logging
from typing import Sequence

import pygame

from blockfall.config.root import PlayConfig
from blockfall.game.factory import EngineBuilder
from blockfall.game.rendering.pygame.renderer import GameRenderer
from blockfall.runtime.gravity_clock import GravityClock

KEYMAP = {
    pygame.K_LEFT: "left",
    pygame.K_a: "left",
    pygame.K_RIGHT: "right",
    pygame.K_d: "right",
    pygame.K_UP: "rotate",
    pygame.K_e: "rotate",
    pygame.K_SPACE: "hard_drop",
    pygame.K_r: "reset",
    pygame.K_ESCAPE: "quit",
    pygame.K_q: "quit",
}

# held keys: soft drop acceleration
ACCEL_KEYS = (pygame.K_DOWN, pygame.K_s, pygame.K_w)


def accel_held(pressed: Sequence[bool]) -> bool:
    """True while any acceleration key is down in a pygame.key.get_pressed() snapshot."""
    return any(pressed[k] for k in ACCEL_KEYS)


def run_play_loop(*, cfg: PlayConfig, builder: EngineBuilder, logger: logging.Logger) -> int:
    pygame.init()
    clock = pygame.time.Clock()

    engine = builder.new_engine()
    gravity = GravityClock(
        gravity_ms=int(cfg.game.gravity_ms),
        accelerated_gravity_ms=int(cfg.game.accelerated_gravity_ms),
    )

    renderer = GameRenderer(
        cell=int(cfg.ui.cell),
        show_grid_lines=bool(cfg.ui.show_grid),
        colors=builder.catalog.palette,
    )
    screen, layout = renderer.init_window(board_h=engine.h, board_w=engine.w, title=cfg.ui.title)

    games = 1
    reported_over = False

    running = True
    while running:
        dt_ms = clock.tick(int(cfg.ui.fps))

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break

            if event.type == pygame.KEYDOWN:
                if event.key in ACCEL_KEYS:
                    engine.set_accelerate(True)
                    continue

                a = KEYMAP.get(event.key)
                if not a:
                    continue
                if a == "quit":
                    running = False
                    break
                if a == "reset":
                    engine = builder.new_engine()
                    engine.set_accelerate(accel_held(pygame.key.get_pressed()))
                    gravity.reset()
                    games += 1
                    reported_over = False
                    logger.info("[play] reset -> game #%d", games)
                    continue
                if a == "hard_drop":
                    engine.hard_drop()
                    gravity.reset()
                else:
                    engine.step(a)

            elif event.type == pygame.KEYUP and event.key in ACCEL_KEYS:
                if not accel_held(pygame.key.get_pressed()):
                    engine.set_accelerate(False)

        if not running:
            break

        if not engine.game_over:
            for _ in range(gravity.advance(dt_ms, accelerated=engine.accelerate)):
                engine.gravity_tick()
                if engine.game_over:
                    break

        if engine.game_over and not reported_over:
            reported_over = True
            logger.info("[play] game #%d over: lines=%d pieces=%d", games, engine.lines, engine.pieces_locked)

        renderer.render(screen=screen, state=engine.state(), layout=layout)
        pygame.display.flip()

    pygame.quit()
    return 0


__all__ = ["run_play_loop", "accel_held", "KEYMAP", "ACCEL_KEYS"]
