

from __future__ import annotations

import argparse
from typing import Dict, List, Optional

import pygame

from falling_block_rl.game import Action, GameConfig, GameSession
from .renderer import Renderer


# Edge-triggered: one command per key press
KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_UP: Action.ROTATE_CW,
    pygame.K_z: Action.ROTATE_CW,
    pygame.K_x: Action.ROTATE_CCW,
    pygame.K_SPACE: Action.HARD_DROP,
    pygame.K_c: Action.HOLD,
    pygame.K_p: Action.TOGGLE_PAUSE,
}

# Level-triggered: repeated every frame while held, spaced by the session's repeat gate
HELD_KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
}


def run(seed: Optional[int] = None, cell_size: int = 15, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = GameSession(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.board.grid.shape))
        pygame.display.set_caption("Falling Block - Human Play")

        running = True
        while running:
            dt = clock.tick(fps) / 1000.0
            now = pygame.time.get_ticks() / 1000.0

            actions: List[Action] = []
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r:
                        game.reset()
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            actions.append(action)

            keys = pygame.key.get_pressed()
            for key, action in HELD_KEY_TO_ACTION.items():
                if keys[key]:
                    actions.append(action)

            game.tick(actions, now, dt)
            renderer.draw(screen, game.snapshot())

        print(f"Final score: {game.score}  lines: {game.lines_cleared}  level: {game.level}")
    finally:
        pygame.quit()


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=15)
    p.add_argument("--fps", type=int, default=60)
    args = p.parse_args()
    run(args.seed, args.cell_size, args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
