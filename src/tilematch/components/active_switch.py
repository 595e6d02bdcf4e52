from dataclasses import dataclass

@dataclass(slots=True)
class ActiveSwitch:
    """Per-tile occupancy flag.

    active: True if the cell currently holds a tile type; False while it is empty
    mid-cascade. Every switch is back to True once a cascade has resolved.
    """
    active: bool = True
