import logging
from typing import List, Optional, Tuple

from esper import World

from tilematch.components.active_switch import ActiveSwitch
from tilematch.components.board import Board
from tilematch.components.board_position import BoardPosition
from tilematch.components.tile import TileType
from tilematch.events.bus import (EventBus, EVENT_TILE_CLICK, EVENT_TILE_SELECTED,
                                  EVENT_TILE_DESELECTED, EVENT_TILE_SWAP_REQUEST)
from tilematch.systems.board_ops import (fill_initial_layout, get_tile_registry,
                                         is_adjacent, require_in_bounds)
from tilematch.world import get_game_state, get_turn_state

logger = logging.getLogger("tilematch.board")


class BoardSystem:
    """Owns the board entity, its tile entities and the click-to-select flow."""

    def __init__(self, world: World, event_bus: EventBus, rows: int = 8, cols: int = 8):
        if rows < 1 or cols < 1:
            raise ValueError(f"board dimensions must be positive, got {rows}x{cols}")
        self.world = world
        self.event_bus = event_bus
        self.board_entity = self.world.create_entity(Board(rows=rows, cols=cols))
        self.selected: Optional[Tuple[int, int]] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self._init_board()

    @property
    def rows(self) -> int:
        return self.world.component_for_entity(self.board_entity, Board).rows

    @property
    def cols(self) -> int:
        return self.world.component_for_entity(self.board_entity, Board).cols

    def _init_board(self):
        board: Board = self.world.component_for_entity(self.board_entity, Board)
        placeholder = get_tile_registry(self.world).all_types()[0]
        for r in range(board.rows):
            for c in range(board.cols):
                self.world.create_entity(BoardPosition(row=r, col=c), TileType(type_name=placeholder), ActiveSwitch())
        self.populate()

    def populate(self) -> List[Tuple[int, int]]:
        """Re-roll every tile; the result may still hold matches until it is resolved."""
        positions = fill_initial_layout(self.world)
        logger.debug("populated %dx%d board", self.rows, self.cols)
        return positions

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        require_in_bounds(self.world, row, col)
        # Ignore input while a cascade is resolving or once the game has ended
        if get_turn_state(self.world).cascade_active or get_game_state(self.world).game_over:
            return
        if self.selected is None:
            self._select(row, col)
        elif self.selected == (row, col):
            self.clear_selection(reason='reclick')
        elif is_adjacent(self.selected, (row, col)):
            src = self.selected
            dst = (row, col)
            self.selected = None
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=dst)
        else:
            # Non-adjacent click moves the selection
            self._select(row, col)

    def _select(self, row: int, col: int):
        self.selected = (row, col)
        self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)

    def clear_selection(self, reason: str = 'cleared'):
        prev = self.selected
        if prev is None:
            return
        self.selected = None
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev_row=prev[0], prev_col=prev[1])
