import logging
from typing import List

from esper import World

from tilematch.events.bus import (EventBus, EVENT_MATCH_FOUND, EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED,
                                  EVENT_REFILL_COMPLETED, EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE)
from tilematch.systems.board_ops import CascadeStep, clear_tiles_with_cascade, find_match_groups
from tilematch.world import get_turn_state

RESOLVE_SWAP = "swap"
RESOLVE_INITIAL = "initial"

logger = logging.getLogger("tilematch.cascade")


class MatchResolutionSystem:
    """Runs the remove -> gravity -> refill -> re-detect loop until the board is match-free.

    Every pass is announced on the bus as it happens; the complete chain is
    also returned so callers can replay it at their own pace.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    def resolve(self, reason: str = RESOLVE_SWAP) -> List[CascadeStep]:
        state = get_turn_state(self.world)
        state.cascade_active = True
        state.cascade_depth = 0
        steps: List[CascadeStep] = []
        try:
            groups = find_match_groups(self.world)
            while groups:
                positions = sorted({pos for group in groups for pos in group})
                depth = len(steps) + 1
                state.cascade_depth = depth
                self.event_bus.emit(EVENT_MATCH_FOUND, positions=positions, groups=groups,
                                    size=len(positions), reason=reason, depth=depth)
                step = clear_tiles_with_cascade(self.world, positions, depth=depth)
                self.event_bus.emit(EVENT_MATCH_CLEARED, positions=sorted(step.removed),
                                    types=list(step.removed_types))
                if step.moves:
                    columns = len({move.source[1] for move in step.moves})
                    self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=list(step.moves), columns=columns)
                self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=list(step.new_tiles))
                steps.append(step)
                self.event_bus.emit(EVENT_CASCADE_STEP, step=step, reason=reason)
                groups = find_match_groups(self.world)
        finally:
            state.cascade_active = False
        logger.debug("%s cascade settled after %d step(s)", reason, len(steps))
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=len(steps), steps=list(steps), reason=reason)
        return steps
