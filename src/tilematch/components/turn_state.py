from dataclasses import dataclass


@dataclass(slots=True)
class TurnState:
    """Tracks the cascade currently being resolved, if any."""

    cascade_active: bool = False
    cascade_depth: int = 0
