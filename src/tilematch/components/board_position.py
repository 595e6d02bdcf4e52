from dataclasses import dataclass

@dataclass(slots=True)
class BoardPosition:
    """Grid coordinate of a tile entity. Row 0 is the top row, col 0 the left column."""
    row: int
    col: int
