

from __future__ import annotations

import random
import time
from collections import deque
from typing import Deque, List, Optional

from .pieces import PieceKind


LOOKAHEAD_THRESHOLD = 3

_process_rng: Optional[random.Random] = None


def process_rng() -> random.Random:
    """Generator shared by every unseeded queue, seeded once from the clock."""
    global _process_rng
    if _process_rng is None:
        _process_rng = random.Random(time.time_ns())
    return _process_rng


class BagQueue:
    """Upcoming piece kinds drawn from shuffled bags of all seven kinds.

    Whole bags are always appended, so every run of 7 draws that starts on a
    bag boundary contains each kind exactly once.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else process_rng()
        self._queue: Deque[PieceKind] = deque()

    def __len__(self) -> int:
        return len(self._queue)

    def clear(self) -> None:
        self._queue.clear()

    def refill(self) -> None:
        bag = list(PieceKind)
        # Fisher-Yates
        for i in range(len(bag) - 1, 0, -1):
            j = self.rng.randint(0, i)
            bag[i], bag[j] = bag[j], bag[i]
        self._queue.extend(bag)

    def next(self) -> PieceKind:
        if len(self._queue) < LOOKAHEAD_THRESHOLD:
            self.refill()
        return self._queue.popleft()

    def peek(self, count: int) -> List[PieceKind]:
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")
        while len(self._queue) < count:
            self.refill()
        return [self._queue[i] for i in range(count)]
