import random

import pytest
from esper import World

from tilematch import GameSession
from tilematch.components.board import Board
from tilematch.components.tile_types import TileTypes
from tilematch.constants import DEFAULT_TILE_TYPES
from tilematch.world import create_world, get_turn_state
from tests.helpers import make_session, set_layout


def test_board_component_exists():
    session = make_session(6, 7)
    boards = list(session.world.get_component(Board))
    assert boards, 'Board component missing'
    ent, comp = boards[0]
    assert comp.rows == 6 and comp.cols == 7


@pytest.mark.parametrize("rows,cols", [(0, 4), (4, 0), (-1, 3)])
def test_board_rejects_bad_dimensions(rows, cols):
    with pytest.raises(ValueError):
        make_session(rows, cols)


@pytest.mark.parametrize("alphabet", [[], ["a"], ["a", "a", "a"]])
def test_alphabet_needs_two_symbols(alphabet):
    with pytest.raises(ValueError):
        create_world(alphabet=alphabet)


def test_negative_settings_rejected():
    with pytest.raises(ValueError):
        create_world(moves=-1)
    with pytest.raises(ValueError):
        create_world(base_points=-10)


def test_default_alphabet_uses_candy_glyphs():
    session = GameSession(4, 4, rng=random.Random(0))
    assert session.alphabet == list(DEFAULT_TILE_TYPES)
    assert session.glyph_at(0, 0) == DEFAULT_TILE_TYPES[session.symbol_at(0, 0)]


def test_tile_types_from_names_and_mapping():
    names = TileTypes.from_alphabet(["x", "y", "x"])
    assert names.all_types() == ["x", "y"]
    assert names.types == {"x": "x", "y": "y"}
    assert names.glyph_for("x") == "x"
    glyphs = TileTypes.from_alphabet({"x": "*", "y": "#"})
    assert glyphs.glyph_for("y") == "#"
    assert glyphs.all_types() == ["x", "y"]


def test_format_board():
    session = make_session(2, 3)
    set_layout(session.world, ["abc", "d.e"])
    assert session.format_board() == "a b c\nd . e"


def test_turn_state_lookup_requires_world_setup():
    assert get_turn_state(create_world()).cascade_active is False
    with pytest.raises(RuntimeError):
        get_turn_state(World())
