"""Exceptions raised by the tile-matching engine.

Rejected swaps are ordinary game outcomes and are reported as values
(see ``tilematch.moves``), not through these exceptions.
"""


class TileMatchError(Exception):
    """Base class for engine errors."""


class BoardBoundsError(TileMatchError, IndexError):
    """A position lies outside the board."""

    def __init__(self, row: int, col: int, rows: int, cols: int):
        super().__init__(f"position ({row}, {col}) is outside a {rows}x{cols} board")
        self.row = row
        self.col = col
        self.rows = rows
        self.cols = cols
