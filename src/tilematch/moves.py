"""Outcome of a swap attempt."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple, Union

from tilematch.systems.board_ops import CascadeStep


class RejectReason(Enum):
    INVALID_ADJACENCY = "invalid_adjacency"
    NO_MATCH = "no_match"
    GAME_OVER = "game_over"
    BUSY = "busy"


@dataclass(frozen=True, slots=True)
class Rejected:
    """The swap was refused; the board is exactly as it was before the attempt."""
    reason: RejectReason

    accepted = False

    @property
    def steps(self) -> Tuple[CascadeStep, ...]:
        return ()

    @property
    def score_delta(self) -> int:
        return 0


@dataclass(frozen=True, slots=True)
class Accepted:
    """The swap produced at least one match; steps is the full cascade chain it triggered."""
    steps: Tuple[CascadeStep, ...]

    accepted = True

    @property
    def score_delta(self) -> int:
        return sum(step.score_delta for step in self.steps)


MoveResult = Union[Accepted, Rejected]
