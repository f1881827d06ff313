"""Game module for Falling Block RL.

Exports the core game engine and supporting classes:
- Board: 25x40 playfield, collision queries and line clearing
- Piece / PieceKind: tetromino geometry table and piece positions
- BagQueue: 7-bag randomizer with a preview lookahead
- PieceController: movement, rotation with kicks, ghost and hold
- ScoringRules: line-clear points, drop points, levels and gravity
- GameSession: the timed state machine driving all of the above
"""

from .grid import Board, EMPTY, GHOST, render_text
from .pieces import Piece, PieceKind, SHAPE_TABLE, offsets, shape_mask
from .randomizer import BagQueue
from .controller import KICK_OFFSETS, PieceController
from .rules import ScoringRules
from .clock import SimulatedClock
from .core import Action, GameConfig, GamePhase, GameSession, Snapshot

__all__ = [
    "Board",
    "EMPTY",
    "GHOST",
    "render_text",
    "Piece",
    "PieceKind",
    "SHAPE_TABLE",
    "offsets",
    "shape_mask",
    "BagQueue",
    "KICK_OFFSETS",
    "PieceController",
    "ScoringRules",
    "SimulatedClock",
    "Action",
    "GameConfig",
    "GamePhase",
    "GameSession",
    "Snapshot",
]
