

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass
class SimulatedClock:
    """Monotonic clock advancing in fixed frame steps, for headless runs."""

    frame_time: float = 1.0 / 60.0
    now: float = 0.0

    def advance(self) -> Tuple[float, float]:
        self.now += self.frame_time
        return self.now, self.frame_time

    def reset(self) -> None:
        self.now = 0.0
