from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

import pygame

from tetris_sim.game import GameConfig, TetrisGame
from tetris_sim.utils.logging import setup_logger
from .keyboard import KeyboardAdapter
from .renderer import Renderer


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play tetris_sim with the keyboard.")
    p.add_argument("--start-level", type=int, default=0)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--log-level", type=str, default="info")
    return p


def run(config: GameConfig, fps: int = 60, cell_size: int = 30) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = TetrisGame(config)
        renderer = Renderer(cell_size=cell_size)
        keyboard = KeyboardAdapter()

        screen = pygame.display.set_mode(renderer.window_size)
        pygame.display.set_caption("Tetris")
        game.reset(now=pygame.time.get_ticks() / 1000.0)
        logger.info("Started at level %d", config.start_level)

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_r and game.game_over:
                    game.reset(now=pygame.time.get_ticks() / 1000.0)
                    logger.info("Restarted")

            inp = keyboard.poll()
            if keyboard.quit_requested:
                running = False

            game.update(inp, pygame.time.get_ticks() / 1000.0)
            renderer.draw(screen, game.snapshot())

            clock.tick(fps)
    finally:
        pygame.quit()


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logger(name="tetris_sim", level=args.log_level)
    config = GameConfig(start_level=args.start_level, random_seed=args.seed)
    run(config, fps=args.fps, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
