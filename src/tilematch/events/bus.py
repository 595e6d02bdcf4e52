from blinker import Signal
from typing import Dict

class EventBus:
    """Simple synchronous event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps bound methods of systems alive even when nobody else holds the system.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# INPUT & SELECTION
# ============================================================================
EVENT_TILE_CLICK = "tile_click"                    # payload: row, col
EVENT_TILE_SELECTED = "tile_selected"              # payload: row, col
EVENT_TILE_DESELECTED = "tile_deselected"          # payload: reason=str, prev_row, prev_col


# ============================================================================
# SWAPS
# ============================================================================
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c), reason=RejectReason
EVENT_MOVE_RESOLVED = "move_resolved"              # payload: src=(r,c), dst=(r,c), result=MoveResult


# ============================================================================
# MATCHES & CASCADES
# ============================================================================
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(r,c),...], groups=[[(r,c),...]], size=int, reason=str
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], types=[(r,c,type_name),...]
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[GravityMove,...], columns=int
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...]
EVENT_CASCADE_STEP = "cascade_step"                # payload: step=CascadeStep, reason=str
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, steps=[CascadeStep,...], reason=str


# ============================================================================
# SESSION COUNTERS & FLOW
# ============================================================================
EVENT_GAME_STARTED = "game_started"                # payload: rows=int, cols=int, steps=[CascadeStep,...]
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_MOVES_CHANGED = "moves_changed"              # payload: moves_remaining=int
EVENT_STATUS_MESSAGE = "status_message"            # payload: text=str
EVENT_GAME_OVER = "game_over"                      # payload: score=int, level=int
