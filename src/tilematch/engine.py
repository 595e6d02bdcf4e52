"""Session object and the public entry points used by front-ends.

A front-end creates one ``GameSession`` per game, forwards clicks (or explicit
swaps) to it and renders the cascade steps it gets back, in order.
"""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Set, Tuple

from tilematch.constants import BASE_POINTS, GRID_COLS, GRID_ROWS, INITIAL_MOVES, MATCH_BONUS
from tilematch.events.bus import EVENT_GAME_STARTED, EVENT_MOVE_RESOLVED, EVENT_TILE_CLICK, EventBus
from tilematch.moves import MoveResult
from tilematch.systems import board_ops
from tilematch.systems.board import BoardSystem
from tilematch.systems.board_ops import CascadeStep, Position, Snapshot
from tilematch.systems.game_flow_system import GameFlowSystem
from tilematch.systems.match import MatchSystem
from tilematch.systems.match_resolution import MatchResolutionSystem, RESOLVE_INITIAL
from tilematch.world import Alphabet, create_world, get_game_state

logger = logging.getLogger("tilematch.session")


class GameSession:
    """One game: the board, its counters and the current tile selection."""

    def __init__(
        self,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        alphabet: Alphabet | None = None,
        *,
        rng: random.Random | None = None,
        moves: int = INITIAL_MOVES,
        base_points: int = BASE_POINTS,
        match_bonus: int = MATCH_BONUS,
        event_bus: EventBus | None = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.initial_moves = moves
        self.world = create_world(
            alphabet=alphabet,
            rng=rng,
            moves=moves,
            base_points=base_points,
            match_bonus=match_bonus,
        )
        self.board_system = BoardSystem(self.world, self.event_bus, rows, cols)
        self.resolution_system = MatchResolutionSystem(self.world, self.event_bus)
        self.match_system = MatchSystem(self.world, self.event_bus, self.resolution_system)
        self.flow_system = GameFlowSystem(self.world, self.event_bus)
        self._last_result: Optional[MoveResult] = None
        self.event_bus.subscribe(EVENT_MOVE_RESOLVED, self._on_move_resolved)
        self.initial_steps: List[CascadeStep] = self._settle()

    def _settle(self) -> List[CascadeStep]:
        steps = self.resolution_system.resolve(reason=RESOLVE_INITIAL)
        logger.info("board %dx%d ready after %d settling step(s)", self.rows, self.cols, len(steps))
        self.event_bus.emit(EVENT_GAME_STARTED, rows=self.rows, cols=self.cols, steps=list(steps))
        return steps

    def _on_move_resolved(self, sender, **payload) -> None:
        self._last_result = payload.get("result")

    def restart(self) -> List[CascadeStep]:
        """Replace the board with a fresh one and reset the counters."""
        logger.debug("restarting session")
        self.board_system.clear_selection(reason='restart')
        self.flow_system.reset(self.initial_moves)
        self.board_system.populate()
        self.initial_steps = self._settle()
        return list(self.initial_steps)

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------

    def attempt_swap(self, pos1: Position, pos2: Position) -> MoveResult:
        self.board_system.clear_selection(reason='swap')
        return self.match_system.attempt_swap(tuple(pos1), tuple(pos2))

    def click(self, row: int, col: int) -> Optional[MoveResult]:
        """Feed a tile click; returns the move result when the click completed a swap."""
        self._last_result = None
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)
        result, self._last_result = self._last_result, None
        return result

    def clear_selection(self) -> None:
        self.board_system.clear_selection()

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def symbol_at(self, row: int, col: int) -> str:
        return board_ops.symbol_at(self.world, row, col)

    def glyph_at(self, row: int, col: int) -> str:
        return board_ops.get_tile_registry(self.world).glyph_for(self.symbol_at(row, col))

    def snapshot(self) -> Snapshot:
        return board_ops.board_snapshot(self.world)

    def find_matches(self) -> Set[Position]:
        return board_ops.find_matches(self.world)

    def format_board(self, *, glyphs: bool = False) -> str:
        return board_ops.format_board(self.world, glyphs=glyphs)

    @property
    def rows(self) -> int:
        return self.board_system.rows

    @property
    def cols(self) -> int:
        return self.board_system.cols

    @property
    def alphabet(self) -> List[str]:
        return board_ops.get_tile_registry(self.world).all_types()

    @property
    def selected(self) -> Optional[Position]:
        return self.board_system.selected

    @property
    def score(self) -> int:
        return get_game_state(self.world).score

    @property
    def moves_remaining(self) -> int:
        return get_game_state(self.world).moves_remaining

    @property
    def level(self) -> int:
        return get_game_state(self.world).level

    @property
    def message(self) -> str:
        return get_game_state(self.world).message

    @property
    def game_over(self) -> bool:
        return get_game_state(self.world).game_over


def initialize(
    width: int,
    height: int,
    alphabet: Alphabet | None = None,
    *,
    rng: random.Random | None = None,
    **options,
) -> Tuple[GameSession, List[CascadeStep]]:
    """Create a settled board; also returns the steps that cleared the initial fill."""
    session = GameSession(height, width, alphabet, rng=rng, **options)
    return session, list(session.initial_steps)


def attempt_swap(session: GameSession, pos1: Position, pos2: Position) -> MoveResult:
    return session.attempt_swap(pos1, pos2)


def symbol_at(session: GameSession, row: int, col: int) -> str:
    return session.symbol_at(row, col)


def find_matches(session: GameSession) -> Set[Position]:
    return session.find_matches()
