import logging
from typing import Tuple

from esper import World

from tilematch.events.bus import (EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID,
                                  EVENT_TILE_SWAP_INVALID, EVENT_MOVE_RESOLVED)
from tilematch.moves import Accepted, MoveResult, RejectReason, Rejected
from tilematch.systems.board_ops import find_matches, is_adjacent, require_in_bounds, swap_tile_types
from tilematch.systems.match_resolution import MatchResolutionSystem, RESOLVE_SWAP
from tilematch.world import get_game_state, get_turn_state

logger = logging.getLogger("tilematch.swap")


class MatchSystem:
    """Validates swap requests and hands accepted swaps to the resolution system."""

    def __init__(self, world: World, event_bus: EventBus, resolver: MatchResolutionSystem):
        self.world = world
        self.event_bus = event_bus
        self.resolver = resolver
        event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        self.attempt_swap(src, dst)

    def attempt_swap(self, src: Tuple[int, int], dst: Tuple[int, int]) -> MoveResult:
        require_in_bounds(self.world, *src)
        require_in_bounds(self.world, *dst)
        if get_turn_state(self.world).cascade_active:
            result: MoveResult = Rejected(RejectReason.BUSY)
        elif get_game_state(self.world).game_over:
            result = Rejected(RejectReason.GAME_OVER)
        elif not is_adjacent(src, dst):
            result = Rejected(RejectReason.INVALID_ADJACENCY)
        else:
            result = self._swap_and_check(src, dst)

        if isinstance(result, Rejected):
            logger.debug("swap %s->%s rejected: %s", src, dst, result.reason.value)
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst, reason=result.reason)
        self.event_bus.emit(EVENT_MOVE_RESOLVED, src=src, dst=dst, result=result)
        return result

    def _swap_and_check(self, src: Tuple[int, int], dst: Tuple[int, int]) -> MoveResult:
        # Speculative swap; undone when it creates nothing
        swap_tile_types(self.world, src, dst)
        if not find_matches(self.world):
            swap_tile_types(self.world, src, dst)
            return Rejected(RejectReason.NO_MATCH)
        logger.debug("swap %s->%s accepted", src, dst)
        self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
        steps = self.resolver.resolve(reason=RESOLVE_SWAP)
        return Accepted(steps=tuple(steps))
