

from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .pieces import Piece


Coordinate = Tuple[int, int]

EMPTY = 0
GHOST = -1


class Board:
    """Fixed-size playfield.

    Stored cells are 0 for empty or the placed piece kind (1..7). The ghost
    marker (-1) only exists in composed display grids and is never written
    here. Row 0 is the top; rows above it (y < 0) are open space.
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"board size must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        if not self.is_inside(x, y):
            return False
        return self.grid[y, x] != EMPTY

    def fits(self, cells: Iterable[Coordinate]) -> bool:
        for x, y in cells:
            if x < 0 or x >= self.width or y >= self.height:
                return False
            if y >= 0 and self.grid[y, x] != EMPTY:
                return False
        return True

    def place(self, piece: Piece) -> None:
        value = int(piece.kind)
        for x, y in piece.cells():
            if y < 0:
                continue
            self.grid[y, x] = value

    def full_rows(self) -> np.ndarray:
        return np.where(np.all(self.grid != EMPTY, axis=1))[0]

    def clear_full_lines(self) -> int:
        full_rows = self.full_rows()
        if full_rows.size == 0:
            return 0
        num = int(full_rows.size)
        # Drop the full rows and pad the top with empty ones
        kept = np.delete(self.grid, full_rows, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, kept))
        return num

    def get_max_height(self) -> int:
        # y=0 is top; find first non-empty from top
        non_empty_rows = np.where(np.any(self.grid != EMPTY, axis=1))[0]
        if non_empty_rows.size == 0:
            return 0
        return self.height - int(non_empty_rows[0])

    def count_holes(self) -> int:
        holes = 0
        for x in range(self.width):
            seen_block = False
            for cell in self.grid[:, x]:
                if cell != EMPTY:
                    seen_block = True
                elif seen_block:
                    holes += 1
        return holes

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()


def render_text(grid: np.ndarray) -> str:
    """Terminal dump of a board or display grid."""
    glyphs = {EMPTY: "·", GHOST: "░"}
    return "\n".join("".join(glyphs.get(int(cell), "█") for cell in row) for row in grid)
