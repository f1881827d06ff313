

from __future__ import annotations

from typing import Tuple

import numpy as np
import pygame

from falling_block_rl.game import GHOST, Snapshot, shape_mask


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (240, 240, 0),  # O
        3: (160, 0, 240),  # T
        4: (0, 240, 0),    # S
        5: (240, 0, 0),    # Z
        6: (0, 0, 240),    # J
        7: (240, 160, 0),  # L
    }
    return palette.get(v, (200, 200, 200))


GHOST_COLOR = (60, 90, 60)
TEXT_COLOR = (0, 220, 0)
LABEL_COLOR = (0, 255, 0)

CONTROLS = (
    "Left/Right: Move",
    "Down: Soft Drop",
    "Up/Z: Rotate CW",
    "X: Rotate CCW",
    "Space: Hard Drop",
    "C: Hold",
    "P: Pause  R: Restart",
)


class Renderer:
    def __init__(self, cell_size: int = 15, margin: int = 20, panel_width: int = 180) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font = None
        self._big_font = None

    def window_size(self, grid_shape: Tuple[int, int]) -> Tuple[int, int]:
        h, w = grid_shape
        return (
            self.margin * 3 + w * self.cell_size + self.panel_width,
            self.margin * 2 + h * self.cell_size,
        )

    def _fonts(self):
        if self._font is None:
            self._font = pygame.font.SysFont(None, 22)
            self._big_font = pygame.font.SysFont(None, 40)
        return self._font, self._big_font

    def _grid_surface(self, state: np.ndarray) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                color = GHOST_COLOR if v == GHOST else _color_for_value(v)
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color, rect)
        return surf

    def _draw_mini_piece(self, screen: pygame.Surface, kind, x: int, y: int) -> None:
        size = max(4, self.cell_size // 2)
        mask = shape_mask(kind)
        for dy in range(mask.shape[0]):
            for dx in range(mask.shape[1]):
                if mask[dy, dx]:
                    rect = pygame.Rect(x + dx * size, y + dy * size, size - 1, size - 1)
                    pygame.draw.rect(screen, _color_for_value(int(kind)), rect)

    def _draw_panel(self, screen: pygame.Surface, snap: Snapshot, x0: int) -> None:
        font, _ = self._fonts()
        y = self.margin
        for label, value in (("SCORE", snap.score), ("LEVEL", snap.level), ("LINES", snap.lines_cleared)):
            screen.blit(font.render(label, True, LABEL_COLOR), (x0, y))
            screen.blit(font.render(str(value), True, TEXT_COLOR), (x0, y + 20))
            y += 50
        screen.blit(font.render("HOLD", True, LABEL_COLOR), (x0, y))
        if snap.held is not None:
            self._draw_mini_piece(screen, snap.held, x0, y + 22)
        y += 70
        screen.blit(font.render("NEXT", True, LABEL_COLOR), (x0, y))
        y += 22
        for kind in snap.next_kinds:
            self._draw_mini_piece(screen, kind, x0, y)
            y += 2 * self.cell_size + 4
        y += 10
        for line in CONTROLS:
            screen.blit(font.render(line, True, TEXT_COLOR), (x0, y))
            y += 18

    def draw(self, screen: pygame.Surface, snap: Snapshot) -> None:
        _, big_font = self._fonts()
        grid_surf = self._grid_surface(snap.grid)
        screen.fill((10, 10, 14))
        screen.blit(grid_surf, (self.margin, self.margin))
        self._draw_panel(screen, snap, self.margin * 2 + grid_surf.get_width())
        center = (self.margin + grid_surf.get_width() // 2, self.margin + grid_surf.get_height() // 2)
        if snap.paused:
            text = big_font.render("PAUSED", True, LABEL_COLOR)
            screen.blit(text, text.get_rect(center=center))
        if snap.game_over:
            text = big_font.render("GAME OVER", True, (255, 0, 0))
            screen.blit(text, text.get_rect(center=center))
        pygame.display.flip()
