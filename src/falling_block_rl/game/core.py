

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Iterable, Optional, Tuple

import numpy as np

from .controller import PieceController
from .grid import EMPTY, GHOST, Board
from .pieces import Piece, PieceKind
from .randomizer import BagQueue
from .rules import ScoringRules


class Action(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    ROTATE_CW = 3
    ROTATE_CCW = 4
    HARD_DROP = 5
    HOLD = 6
    TOGGLE_PAUSE = 7
    NONE = 8


# Commands sharing the input-repeat gate
REPEAT_GATED = frozenset({Action.MOVE_LEFT, Action.MOVE_RIGHT, Action.SOFT_DROP})


class GamePhase(Enum):
    FALLING = "falling"
    LOCK_PENDING = "lock_pending"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 25
    height: int = 40
    random_seed: Optional[int] = None
    lock_delay: float = 0.5
    input_repeat_delay: float = 0.15
    preview_count: int = 4


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs for one frame."""

    grid: np.ndarray
    score: int
    level: int
    lines_cleared: int
    held: Optional[PieceKind]
    can_hold: bool
    next_kinds: Tuple[PieceKind, ...]
    paused: bool
    game_over: bool
    phase: GamePhase


class GameSession:
    """One game: board, falling piece, bag, timers and score.

    Time never comes from inside the engine. Callers pass the monotonic
    `now` (seconds) to every time-dependent operation, and `dt` to `update`,
    so identical inputs and timestamps replay identically.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        rng = random.Random(self.config.random_seed) if self.config.random_seed is not None else None
        self.board = Board(self.config.width, self.config.height)
        self.queue = BagQueue(rng)
        self.controller = PieceController(self.board, self.queue)
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.game_over = False
        self.paused = False
        self.fall_timer = 0.0
        self.last_input_time: Optional[float] = None
        self.paused_at: Optional[float] = None
        self.reset()

    def reset(self) -> None:
        self.board.reset()
        self.queue.clear()
        self.controller.reset()
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.game_over = False
        self.paused = False
        self.fall_timer = 0.0
        self.last_input_time = None
        self.paused_at = None
        self.queue.refill()
        self._spawn_next()

    # ------------------------------------------------------------------
    # Read-only views

    @property
    def current_piece(self) -> Optional[Piece]:
        return self.controller.current

    @property
    def held(self) -> Optional[PieceKind]:
        return self.controller.held

    @property
    def lock_started(self) -> Optional[float]:
        return self.controller.lock_started

    @property
    def phase(self) -> GamePhase:
        if self.game_over:
            return GamePhase.GAME_OVER
        if self.paused:
            return GamePhase.PAUSED
        if self.controller.lock_started is not None:
            return GamePhase.LOCK_PENDING
        return GamePhase.FALLING

    def fall_delay(self) -> float:
        return self.rules.fall_delay(self.level)

    def next_kinds(self, count: Optional[int] = None) -> Tuple[PieceKind, ...]:
        if count is None:
            count = self.config.preview_count
        return tuple(self.queue.peek(count))

    def display_grid(self) -> np.ndarray:
        """Board with the ghost and the falling piece composed on top."""
        display = self.board.clone_state()
        current = self.controller.current
        if current is None:
            return display
        ghost = self.controller.ghost_projection()
        if ghost is not None and ghost.y != current.y:
            for x, y in ghost.cells():
                if self.board.is_inside(x, y) and display[y, x] == EMPTY:
                    display[y, x] = GHOST
        for x, y in current.cells():
            if self.board.is_inside(x, y):
                display[y, x] = int(current.kind)
        return display

    def get_state(self) -> np.ndarray:
        return self.display_grid()

    def snapshot(self) -> Snapshot:
        return Snapshot(
            grid=self.display_grid(),
            score=self.score,
            level=self.level,
            lines_cleared=self.lines_cleared,
            held=self.controller.held,
            can_hold=self.controller.can_hold,
            next_kinds=self.next_kinds(),
            paused=self.paused,
            game_over=self.game_over,
            phase=self.phase,
        )

    # ------------------------------------------------------------------
    # Commands

    def toggle_pause(self, now: float) -> None:
        if self.game_over:
            return
        if not self.paused:
            self.paused = True
            self.paused_at = now
            return
        # Shift stored timestamps so the timers resume where they stopped
        frozen = now - self.paused_at if self.paused_at is not None else 0.0
        if self.controller.lock_started is not None:
            self.controller.lock_started += frozen
        if self.last_input_time is not None:
            self.last_input_time += frozen
        self.paused = False
        self.paused_at = None

    def input_gate_open(self, now: float) -> bool:
        if self.last_input_time is None:
            return True
        return now - self.last_input_time >= self.config.input_repeat_delay

    def handle_input(self, actions: Iterable[Action], now: float) -> None:
        """Apply one tick's worth of commands.

        The repeat gate is checked once for the whole batch, so a move and a
        soft drop issued in the same tick are both accepted.
        """
        actions = [Action(a) for a in actions]
        gate_open = self.input_gate_open(now)
        for action in actions:
            if action == Action.TOGGLE_PAUSE:
                self.toggle_pause(now)
                # Resuming shifts last_input_time forward
                gate_open = self.input_gate_open(now)
                continue
            if self.game_over or self.paused:
                continue
            if action in REPEAT_GATED:
                if not gate_open:
                    continue
                if action == Action.MOVE_LEFT:
                    self.move(-1, now)
                elif action == Action.MOVE_RIGHT:
                    self.move(1, now)
                else:
                    self.soft_drop(now)
                self.last_input_time = now
            elif action == Action.ROTATE_CW:
                self.rotate(True)
            elif action == Action.ROTATE_CCW:
                self.rotate(False)
            elif action == Action.HARD_DROP:
                self.hard_drop()
            elif action == Action.HOLD:
                self.hold()

    def move(self, dx: int, now: float) -> bool:
        if self._frozen():
            return False
        return self.controller.move_by(dx, 0, now)

    def rotate(self, clockwise: bool = True) -> bool:
        if self._frozen():
            return False
        return self.controller.rotate(clockwise)

    def soft_drop(self, now: float) -> bool:
        """One row down. The step scores whether or not the piece moved."""
        if self._frozen():
            return False
        moved = self.controller.move_by(0, 1, now)
        self.score += self.rules.soft_drop_per_step
        return moved

    def hard_drop(self) -> int:
        """Drop to the ghost row and lock at once; returns rows travelled."""
        if self._frozen():
            return 0
        distance = self.controller.hard_drop_distance()
        if distance > 0:
            self.score += distance * self.rules.hard_drop_per_cell
            self.controller.current = self.controller.current.moved(0, distance)
        self._lock_piece()
        return distance

    def hold(self) -> bool:
        if self._frozen():
            return False
        swapped = self.controller.hold_swap()
        if swapped and self.controller.current is None:
            self.game_over = True
        return swapped

    # ------------------------------------------------------------------
    # Clock

    def update(self, now: float, dt: float) -> None:
        if self._frozen():
            return
        lock_started = self.controller.lock_started
        if lock_started is not None and now - lock_started >= self.config.lock_delay:
            self._lock_piece()
            return
        self.fall_timer += dt
        if self.fall_timer >= self.fall_delay():
            # A blocked step starts the lock timer inside move_by
            self.controller.move_by(0, 1, now)
            self.fall_timer = 0.0

    def tick(self, actions: Iterable[Action], now: float, dt: float) -> None:
        self.handle_input(actions, now)
        self.update(now, dt)

    # ------------------------------------------------------------------
    # Internals

    def _frozen(self) -> bool:
        return self.game_over or self.paused or self.controller.current is None

    def _spawn_next(self) -> None:
        if not self.controller.spawn_next():
            self.game_over = True

    def _lock_piece(self) -> int:
        piece = self.controller.current
        assert piece is not None
        self.board.place(piece)
        self.controller.current = None
        self.controller.lock_started = None
        lines = self.board.clear_full_lines()
        if lines:
            self.score += self.rules.score_for_lines(lines, self.level)
            self.lines_cleared += lines
            self.level = self.rules.level_for_lines(self.lines_cleared)
        self._spawn_next()
        return lines
