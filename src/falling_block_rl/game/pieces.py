

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


class PieceKind(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Offset = Tuple[int, int]
Rotations = Tuple[Tuple[Offset, ...], ...]


# (dx, dy) offsets from the piece origin, one entry per rotation index 0..3
SHAPE_TABLE: Dict[PieceKind, Rotations] = {
    PieceKind.I: (
        ((0, 1), (1, 1), (2, 1), (3, 1)),
        ((2, 0), (2, 1), (2, 2), (2, 3)),
        ((0, 2), (1, 2), (2, 2), (3, 2)),
        ((1, 0), (1, 1), (1, 2), (1, 3)),
    ),
    PieceKind.O: (
        ((1, 0), (2, 0), (1, 1), (2, 1)),
        ((1, 0), (2, 0), (1, 1), (2, 1)),
        ((1, 0), (2, 0), (1, 1), (2, 1)),
        ((1, 0), (2, 0), (1, 1), (2, 1)),
    ),
    PieceKind.T: (
        ((1, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (2, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (1, 2)),
        ((1, 0), (0, 1), (1, 1), (1, 2)),
    ),
    PieceKind.S: (
        ((1, 0), (2, 0), (0, 1), (1, 1)),
        ((1, 0), (1, 1), (2, 1), (2, 2)),
        ((1, 1), (2, 1), (0, 2), (1, 2)),
        ((0, 0), (0, 1), (1, 1), (1, 2)),
    ),
    PieceKind.Z: (
        ((0, 0), (1, 0), (1, 1), (2, 1)),
        ((2, 0), (1, 1), (2, 1), (1, 2)),
        ((0, 1), (1, 1), (1, 2), (2, 2)),
        ((1, 0), (0, 1), (1, 1), (0, 2)),
    ),
    PieceKind.J: (
        ((0, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (2, 0), (1, 1), (1, 2)),
        ((0, 1), (1, 1), (2, 1), (2, 2)),
        ((1, 0), (1, 1), (0, 2), (1, 2)),
    ),
    PieceKind.L: (
        ((2, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (1, 1), (1, 2), (2, 2)),
        ((0, 1), (1, 1), (2, 1), (0, 2)),
        ((0, 0), (1, 0), (1, 1), (1, 2)),
    ),
}


def offsets(kind: PieceKind, rotation: int) -> Tuple[Offset, ...]:
    return SHAPE_TABLE[PieceKind(kind)][rotation % 4]


def shape_mask(kind: PieceKind, rotation: int = 0) -> np.ndarray:
    """4x4 occupancy mask of a kind in one orientation, indexed [dy, dx]."""
    mask = np.zeros((4, 4), dtype=np.int8)
    for dx, dy in offsets(kind, rotation):
        mask[dy, dx] = 1
    return mask


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    x: int = 0
    y: int = 0
    rotation: int = 0  # 0..3

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotation", self.rotation % 4)

    def offsets(self) -> Tuple[Offset, ...]:
        return offsets(self.kind, self.rotation)

    def moved(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self, delta: int) -> "Piece":
        return replace(self, rotation=self.rotation + delta)

    def cells(self) -> List[Tuple[int, int]]:
        return [(self.x + dx, self.y + dy) for dx, dy in self.offsets()]
