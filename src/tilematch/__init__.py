"""Deterministic match-three board engine."""
from __future__ import annotations

from tilematch.engine import GameSession, attempt_swap, find_matches, initialize, symbol_at
from tilematch.errors import BoardBoundsError, TileMatchError
from tilematch.events.bus import EventBus
from tilematch.moves import Accepted, MoveResult, RejectReason, Rejected
from tilematch.systems.board_ops import CascadeStep, GravityMove

__all__ = [
    "Accepted",
    "BoardBoundsError",
    "CascadeStep",
    "EventBus",
    "GameSession",
    "GravityMove",
    "MoveResult",
    "RejectReason",
    "Rejected",
    "TileMatchError",
    "attempt_swap",
    "find_matches",
    "initialize",
    "symbol_at",
]
