"""Keeps the session counters in step with swaps and cascades."""
from __future__ import annotations

import logging

from esper import World

from tilematch.components.game_state import GameMode, GameState
from tilematch.constants import (INITIAL_MOVES, MESSAGE_COMBO, MESSAGE_GAME_OVER, MESSAGE_MATCH,
                                 MESSAGE_NO_MATCH, MESSAGE_READY, STARTING_LEVEL)
from tilematch.events.bus import (
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GAME_OVER,
    EVENT_MOVES_CHANGED,
    EVENT_SCORE_CHANGED,
    EVENT_STATUS_MESSAGE,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_VALID,
    EventBus,
)
from tilematch.moves import RejectReason
from tilematch.systems.match_resolution import RESOLVE_INITIAL, RESOLVE_SWAP
from tilematch.world import get_game_state

logger = logging.getLogger("tilematch.flow")


class GameFlowSystem:
    """Score, move budget, status message and the game-over transition.

    Every cascade step is credited, including the ones that settle a
    freshly generated board after the counters were reset.
    """

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_SWAP_VALID, self._on_swap_valid)
        self.event_bus.subscribe(EVENT_TILE_SWAP_INVALID, self._on_swap_invalid)
        self.event_bus.subscribe(EVENT_CASCADE_STEP, self._on_cascade_step)
        self.event_bus.subscribe(EVENT_CASCADE_COMPLETE, self._on_cascade_complete)

    def _state(self) -> GameState:
        return get_game_state(self.world)

    def reset(self, moves: int = INITIAL_MOVES) -> None:
        state = self._state()
        state.mode = GameMode.PLAYING
        state.score = 0
        state.moves_remaining = moves
        state.level = STARTING_LEVEL
        state.message = ""
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=0, delta=0)
        self.event_bus.emit(EVENT_MOVES_CHANGED, moves_remaining=moves)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_swap_valid(self, sender, **payload) -> None:
        state = self._state()
        state.moves_remaining = max(0, state.moves_remaining - 1)
        self.event_bus.emit(EVENT_MOVES_CHANGED, moves_remaining=state.moves_remaining)
        self._show(MESSAGE_MATCH)

    def _on_swap_invalid(self, sender, **payload) -> None:
        if payload.get("reason") is RejectReason.NO_MATCH:
            self._show(MESSAGE_NO_MATCH)

    def _on_cascade_step(self, sender, **payload) -> None:
        step = payload["step"]
        state = self._state()
        if step.score_delta:
            state.score += step.score_delta
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score, delta=step.score_delta)
        if payload.get("reason") == RESOLVE_SWAP and step.depth > 1:
            self._show(MESSAGE_COMBO)

    def _on_cascade_complete(self, sender, **payload) -> None:
        reason = payload.get("reason")
        if reason == RESOLVE_INITIAL:
            self._show(MESSAGE_READY)
        elif reason == RESOLVE_SWAP:
            self._check_game_end()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _check_game_end(self) -> None:
        state = self._state()
        if state.moves_remaining > 0 or state.game_over:
            return
        state.mode = GameMode.GAME_OVER
        logger.info("game over with score %d", state.score)
        self._show(MESSAGE_GAME_OVER)
        self.event_bus.emit(EVENT_GAME_OVER, score=state.score, level=state.level)

    def _show(self, text: str) -> None:
        self._state().message = text
        self.event_bus.emit(EVENT_STATUS_MESSAGE, text=text)
