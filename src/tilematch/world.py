import random
from typing import Iterable, Mapping, Union

from esper import World

from tilematch.components.game_state import GameState
from tilematch.components.score_rules import ScoreRules
from tilematch.components.tile_type_registry import TileTypeRegistry
from tilematch.components.tile_types import TileTypes
from tilematch.components.turn_state import TurnState
from tilematch.constants import BASE_POINTS, DEFAULT_TILE_TYPES, INITIAL_MOVES, MATCH_BONUS

Alphabet = Union[Mapping[str, str], Iterable[str]]


def create_world(
    *,
    alphabet: Alphabet | None = None,
    rng: random.Random | None = None,
    moves: int = INITIAL_MOVES,
    base_points: int = BASE_POINTS,
    match_bonus: int = MATCH_BONUS,
) -> World:
    """Create a world holding the session state and tile alphabet.

    The board and its tiles are created separately by BoardSystem.
    """
    tile_types = TileTypes.from_alphabet(DEFAULT_TILE_TYPES if alphabet is None else alphabet)
    if len(tile_types.all_types()) < 2:
        raise ValueError("alphabet needs at least two distinct symbols")
    if moves < 0:
        raise ValueError(f"move budget must be non-negative, got {moves}")
    if base_points < 0 or match_bonus < 0:
        raise ValueError("score values must be non-negative")

    world = World()
    setattr(world, "random", rng or random.Random())

    # Session state resource.
    world.create_entity(
        GameState(moves_remaining=moves),
        ScoreRules(base_points=base_points, match_bonus=match_bonus),
        TurnState(),
    )

    # Single registry entity with the canonical tile types.
    world.create_entity(TileTypeRegistry(), tile_types)
    return world


def get_game_state(world: World) -> GameState:
    for _, state in world.get_component(GameState):
        return state
    raise RuntimeError("GameState not found")


def get_score_rules(world: World) -> ScoreRules:
    for _, rules in world.get_component(ScoreRules):
        return rules
    raise RuntimeError("ScoreRules not found")


def get_turn_state(world: World) -> TurnState:
    for _, state in world.get_component(TurnState):
        return state
    raise RuntimeError("TurnState not found")


def world_random(world: World) -> random.Random:
    candidate = getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    rng = random.Random()
    setattr(world, "random", rng)
    return rng
