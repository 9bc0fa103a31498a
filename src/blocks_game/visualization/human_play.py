from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Sequence

import pygame

from blocks_game.game import Action, BlocksGame, GameConfig
from .renderer import Renderer


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CCW,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_p: Action.PAUSE,
    pygame.K_r: Action.RESET,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the falling-block game with the keyboard.")
    p.add_argument("--cols", type=int, default=13)
    p.add_argument("--rows", type=int, default=23)
    p.add_argument("--cell-size", type=int, default=20, help="Pixel size of one board cell")
    p.add_argument("--seed", type=int, default=None, help="Seed for a reproducible piece sequence")
    p.add_argument("--spawn-y", type=int, default=0, help="Row where new pieces appear")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def run(config: Optional[GameConfig] = None) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = BlocksGame(config)
        renderer = Renderer(cell_size=game.config.cell_size)
        screen = pygame.display.set_mode(renderer.window_size(game.grid.cols, game.grid.rows))
        pygame.display.set_caption("Blocks")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif game.game_over:
                        # Any key starts a new game
                        game.reset()
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            game.step(action)

            game.tick(pygame.time.get_ticks())
            renderer.draw(screen, game.snapshot())
            clock.tick(60)
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    config = GameConfig(
        cols=args.cols,
        rows=args.rows,
        cell_size=args.cell_size,
        spawn_y=args.spawn_y,
        random_seed=args.seed,
    )
    run(config)


if __name__ == "__main__":  # pragma: no cover
    main()
