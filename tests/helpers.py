from __future__ import annotations

import random
from typing import Sequence

from esper import World

from tilematch.components.active_switch import ActiveSwitch
from tilematch.components.tile import TileType
from tilematch.engine import GameSession
from tilematch.systems.board_ops import position_index
from tilematch.world import get_game_state

ALPHABET = list("abcde")

# 4x4 board without matches; swapping (2,2) and (2,3) lines up a a a in row 2.
SWAP_READY_LAYOUT = [
    "abcd",
    "cdeb",
    "aaca",
    "debc",
]


def make_session(rows: int = 4, cols: int = 4, *, seed: int = 7, layout: Sequence[str] | None = None, **options) -> GameSession:
    """Seeded session over ALPHABET, optionally overwritten with a fixed layout.

    A fixed layout replaces the settled board, so the points credited while
    settling it are dropped as well.
    """
    options.setdefault("alphabet", ALPHABET)
    session = GameSession(rows, cols, rng=random.Random(seed), **options)
    if layout is not None:
        set_layout(session.world, layout)
        get_game_state(session.world).score = 0
    return session


def set_layout(world: World, layout: Sequence[str]) -> None:
    """Overwrite tiles row by row; one character per cell, '.' marks an empty cell."""
    index = position_index(world)
    for r, row in enumerate(layout):
        for c, name in enumerate(row):
            entity = index[(r, c)]
            switch = world.component_for_entity(entity, ActiveSwitch)
            if name == '.':
                switch.active = False
                continue
            world.component_for_entity(entity, TileType).type_name = name
            switch.active = True
