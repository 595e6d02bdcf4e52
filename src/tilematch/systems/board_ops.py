from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Set, Tuple

from esper import World

from tilematch.components.active_switch import ActiveSwitch
from tilematch.components.board import Board
from tilematch.components.board_position import BoardPosition
from tilematch.components.tile import TileType
from tilematch.components.tile_type_registry import TileTypeRegistry
from tilematch.components.tile_types import TileTypes
from tilematch.constants import MIN_MATCH_LENGTH
from tilematch.errors import BoardBoundsError
from tilematch.world import get_score_rules, world_random

Position = Tuple[int, int]
TypeEntry = Tuple[int, int, str]
Snapshot = Tuple[Tuple[Optional[str], ...], ...]

logger = logging.getLogger("tilematch.board")


@dataclass(frozen=True, slots=True)
class GravityMove:
    source: Position
    target: Position
    type_name: str


@dataclass(frozen=True, slots=True)
class CascadeStep:
    """One remove -> gravity -> refill pass of a cascade."""
    depth: int
    removed: FrozenSet[Position]
    removed_types: Tuple[TypeEntry, ...]
    score_delta: int
    moves: Tuple[GravityMove, ...]
    new_tiles: Tuple[Position, ...]
    snapshot: Snapshot


def get_tile_registry(world: World) -> TileTypes:
    for entity, _ in world.get_component(TileTypeRegistry):
        return world.component_for_entity(entity, TileTypes)
    raise RuntimeError("TileTypes definitions not found")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.rows, board.cols
    return None


def require_in_bounds(world: World, row: int, col: int) -> None:
    dims = board_dimensions(world)
    if dims is None:
        raise RuntimeError("Board not found")
    rows, cols = dims
    if not (0 <= row < rows and 0 <= col < cols):
        raise BoardBoundsError(row, col, rows, cols)


def position_index(world: World) -> Dict[Position, int]:
    return {(pos.row, pos.col): entity for entity, pos in world.get_component(BoardPosition)}


def get_entity_at(world: World, row: int, col: int) -> int | None:
    for entity, position in world.get_component(BoardPosition):
        if position.row == row and position.col == col:
            return entity
    return None


def symbol_at(world: World, row: int, col: int) -> str | None:
    """Return the tile type at (row, col), or None while that cell is empty."""
    require_in_bounds(world, row, col)
    entity = get_entity_at(world, row, col)
    if entity is None:
        return None
    if not world.component_for_entity(entity, ActiveSwitch).active:
        return None
    return world.component_for_entity(entity, TileType).type_name


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def swap_tile_types(world: World, src: Position, dst: Position) -> bool:
    """Swap the TileType values for two active tile entities."""

    src_entity = get_entity_at(world, src[0], src[1])
    dst_entity = get_entity_at(world, dst[0], dst[1])
    if src_entity is None or dst_entity is None:
        return False
    src_switch: ActiveSwitch = world.component_for_entity(src_entity, ActiveSwitch)
    dst_switch: ActiveSwitch = world.component_for_entity(dst_entity, ActiveSwitch)
    if not (src_switch.active and dst_switch.active):
        return False
    src_tile: TileType = world.component_for_entity(src_entity, TileType)
    dst_tile: TileType = world.component_for_entity(dst_entity, TileType)
    src_tile.type_name, dst_tile.type_name = dst_tile.type_name, src_tile.type_name
    return True


def active_tile_type_map(world: World) -> Dict[Position, str]:
    """Return mapping of occupied positions to their type names."""
    mapping: Dict[Position, str] = {}
    for entity, (position, switch, tile) in world.get_components(BoardPosition, ActiveSwitch, TileType):
        if switch.active:
            mapping[(position.row, position.col)] = tile.type_name
    return mapping


def board_snapshot(world: World) -> Snapshot:
    """Row-major copy of the grid; empty cells are None."""
    dims = board_dimensions(world)
    if not dims:
        return ()
    rows, cols = dims
    types = active_tile_type_map(world)
    return tuple(tuple(types.get((r, c)) for c in range(cols)) for r in range(rows))


def format_board(world: World, *, glyphs: bool = False) -> str:
    """Plain-text grid, one line per row. Empty cells print as '.'."""
    registry = get_tile_registry(world) if glyphs else None
    lines = []
    for row in board_snapshot(world):
        cells = []
        for type_name in row:
            if type_name is None:
                cells.append('.')
            elif registry is not None:
                cells.append(registry.glyph_for(type_name))
            else:
                cells.append(type_name)
        lines.append(' '.join(cells))
    return '\n'.join(lines)


def _line_runs(line: List[Tuple[Position, str | None]], min_length: int) -> List[List[Position]]:
    runs: List[List[Position]] = []
    run: List[Position] = []
    last_type = None
    for pos, tval in line:
        # Empty cells never extend a run, even next to another empty cell.
        if tval is not None and tval == last_type:
            run.append(pos)
        else:
            if len(run) >= min_length:
                runs.append(run)
            run = [pos] if tval is not None else []
            last_type = tval
    if len(run) >= min_length:
        runs.append(run)
    return runs


def find_runs(world: World, *, min_length: int = MIN_MATCH_LENGTH) -> List[List[Position]]:
    """Every horizontal run (rows left->right) then every vertical run (columns top->bottom)."""
    dims = board_dimensions(world)
    types = active_tile_type_map(world)
    if not dims or not types:
        return []
    rows, cols = dims
    runs: List[List[Position]] = []
    for r in range(rows):
        runs.extend(_line_runs([((r, c), types.get((r, c))) for c in range(cols)], min_length))
    for c in range(cols):
        runs.extend(_line_runs([((r, c), types.get((r, c))) for r in range(rows)], min_length))
    return runs


def find_matches(world: World) -> Set[Position]:
    """Positions belonging to any run of MIN_MATCH_LENGTH or more, each listed once."""
    return {pos for run in find_runs(world) for pos in run}


def find_match_groups(world: World) -> List[List[Position]]:
    """Detect matches and merge runs that share a cell into one group."""
    groups = [set(run) for run in find_runs(world)]
    if not groups:
        return []
    merged: List[Set[Position]] = []
    while groups:
        first = groups.pop(0)
        changed = True
        while changed:
            changed = False
            for g in groups[:]:
                if first & g:
                    first |= g
                    groups.remove(g)
                    changed = True
        merged.append(first)
    return [sorted(group) for group in merged]


def clear_tiles(world: World, positions: List[Position]) -> List[TypeEntry]:
    """Mark the tiles at positions empty and return what they held."""
    index = position_index(world)
    typed: List[TypeEntry] = []
    for row, col in sorted(set(positions)):
        entity = index.get((row, col))
        if entity is None:
            continue
        tile_switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if not tile_switch.active:
            continue
        tile_type: TileType = world.component_for_entity(entity, TileType)
        typed.append((row, col, tile_type.type_name))
        tile_switch.active = False
    return typed


def compute_gravity_moves(world: World) -> List[GravityMove]:
    """Plan a per-column compaction of occupied tiles toward the bottom row.

    Moves are ordered bottom-up within each column so they can be applied in sequence.
    """
    dims = board_dimensions(world)
    if not dims:
        return []
    rows, cols = dims
    types = active_tile_type_map(world)
    moves: List[GravityMove] = []
    for col in range(cols):
        target_row = rows - 1
        for row in range(rows - 1, -1, -1):
            type_name = types.get((row, col))
            if type_name is None:
                continue
            if row != target_row:
                moves.append(GravityMove(source=(row, col), target=(target_row, col), type_name=type_name))
            target_row -= 1
    return moves


def apply_gravity_moves(world: World, moves: List[GravityMove]) -> None:
    index = position_index(world)
    for move in moves:
        src_entity = index.get(move.source)
        dst_entity = index.get(move.target)
        if src_entity is None or dst_entity is None:
            continue
        src_switch: ActiveSwitch = world.component_for_entity(src_entity, ActiveSwitch)
        dst_switch: ActiveSwitch = world.component_for_entity(dst_entity, ActiveSwitch)
        if not src_switch.active:
            continue
        src_tile: TileType = world.component_for_entity(src_entity, TileType)
        dst_tile: TileType = world.component_for_entity(dst_entity, TileType)
        dst_tile.type_name = src_tile.type_name
        dst_switch.active = True
        src_switch.active = False


def refill_inactive_tiles(world: World, *, rng: random.Random | None = None) -> List[Position]:
    """Give every empty cell a uniformly random tile type, in row-major order."""
    rng = rng or world_random(world)
    choices = get_tile_registry(world).all_types()
    spawned: List[Position] = []
    index = position_index(world)
    for position in sorted(index):
        entity = index[position]
        tile_switch: ActiveSwitch = world.component_for_entity(entity, ActiveSwitch)
        if tile_switch.active:
            continue
        tile_type: TileType = world.component_for_entity(entity, TileType)
        tile_type.type_name = rng.choice(choices)
        tile_switch.active = True
        spawned.append(position)
    return spawned


def clear_tiles_with_cascade(
    world: World,
    positions: List[Position],
    *,
    depth: int = 1,
    rng: random.Random | None = None,
) -> CascadeStep:
    """Clear tiles at positions, apply gravity and refill, and describe the step."""
    typed = clear_tiles(world, positions)
    rules = get_score_rules(world)
    moves = compute_gravity_moves(world)
    apply_gravity_moves(world, moves)
    new_tiles = refill_inactive_tiles(world, rng=rng)
    step = CascadeStep(
        depth=depth,
        removed=frozenset((row, col) for row, col, _ in typed),
        removed_types=tuple(typed),
        score_delta=rules.points_for(len(typed)),
        moves=tuple(moves),
        new_tiles=tuple(new_tiles),
        snapshot=board_snapshot(world),
    )
    logger.debug(
        "cascade step %d: removed=%d moved=%d refilled=%d points=%d",
        depth, len(typed), len(moves), len(new_tiles), step.score_delta,
    )
    return step


def fill_initial_layout(world: World, *, rng: random.Random | None = None) -> List[Position]:
    """Assign every tile a random type, avoiding triples with the two cells above or to the left.

    The check only looks back along the fill order, so callers still resolve the board afterwards.
    """
    dims = board_dimensions(world)
    if not dims:
        return []
    rows, cols = dims
    rng = rng or world_random(world)
    choices = get_tile_registry(world).all_types()
    index = position_index(world)
    layout: List[List[str]] = []
    for row in range(rows):
        row_values: List[str] = []
        for col in range(cols):
            available = list(choices)
            if col >= 2:
                left1 = row_values[col - 1]
                left2 = row_values[col - 2]
                if left1 == left2:
                    available = [t for t in available if t != left1]
            if row >= 2:
                up1 = layout[row - 1][col]
                up2 = layout[row - 2][col]
                if up1 == up2:
                    available = [t for t in available if t != up1]
            row_values.append(rng.choice(available) if available else rng.choice(choices))
        layout.append(row_values)

    for (row, col), entity in index.items():
        world.component_for_entity(entity, TileType).type_name = layout[row][col]
        world.component_for_entity(entity, ActiveSwitch).active = True
    return sorted(index)
