

from __future__ import annotations

from typing import Optional, Tuple

from .grid import Board
from .pieces import Piece, PieceKind
from .randomizer import BagQueue


# Tried in order after the in-place rotation fails. A single table for every
# kind and transition, not the per-kind SRS tables.
KICK_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, 0),
    (1, 0),
    (0, -1),
    (-1, -1),
    (1, -1),
)


class PieceController:
    """Owns the falling piece, the hold slot and the lock-delay start time.

    `lock_started` is None while the piece is airborne, otherwise the clock
    value at which it was found resting.
    """

    def __init__(self, board: Board, queue: BagQueue) -> None:
        self.board = board
        self.queue = queue
        self.current: Optional[Piece] = None
        self.held: Optional[PieceKind] = None
        self.can_hold = True
        self.lock_started: Optional[float] = None

    def reset(self) -> None:
        self.current = None
        self.held = None
        self.can_hold = True
        self.lock_started = None

    @property
    def spawn_x(self) -> int:
        return self.board.width // 2 - 1

    def is_valid(self, piece: Piece) -> bool:
        return self.board.fits(piece.cells())

    def spawn(self, kind: PieceKind) -> bool:
        """Place a fresh piece at the spawn origin; False means game over."""
        piece = Piece(PieceKind(kind), self.spawn_x, 0, 0)
        if not self.is_valid(piece):
            self.current = None
            return False
        self.current = piece
        self.can_hold = True
        self.lock_started = None
        return True

    def spawn_next(self) -> bool:
        return self.spawn(self.queue.next())

    def move_by(self, dx: int, dy: int, now: float) -> bool:
        if self.current is None:
            return False
        candidate = self.current.moved(dx, dy)
        if self.is_valid(candidate):
            self.current = candidate
            if dy > 0:
                self.lock_started = None
            return True
        if dy > 0 and self.lock_started is None:
            self.lock_started = now
        return False

    def rotation_target(self, clockwise: bool = True) -> Optional[Piece]:
        """Where a rotation would land: in place first, then each kick in order."""
        if self.current is None:
            return None
        rotated = self.current.rotated(1 if clockwise else -1)
        for dx, dy in ((0, 0),) + KICK_OFFSETS:
            candidate = rotated.moved(dx, dy)
            if self.is_valid(candidate):
                return candidate
        return None

    def rotate(self, clockwise: bool = True) -> bool:
        target = self.rotation_target(clockwise)
        if target is None:
            return False
        self.current = target
        self.lock_started = None
        return True

    def ghost_projection(self) -> Optional[Piece]:
        if self.current is None:
            return None
        ghost = self.current
        while self.is_valid(ghost.moved(0, 1)):
            ghost = ghost.moved(0, 1)
        return ghost

    def hard_drop_distance(self) -> int:
        ghost = self.ghost_projection()
        if ghost is None or self.current is None:
            return 0
        return ghost.y - self.current.y

    def hold_swap(self) -> bool:
        """Set the current kind aside. Returns False when nothing changed.

        A swap that respawns into occupied cells leaves no active piece; the
        caller treats that like any other blocked spawn.
        """
        if not self.can_hold or self.current is None:
            return False
        current_kind = self.current.kind
        held = self.held
        self.held = current_kind
        if held is not None:
            self.spawn(held)
        else:
            self.spawn_next()
        self.can_hold = False
        self.lock_started = None
        return True
