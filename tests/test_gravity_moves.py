from collections import Counter

from tilematch.systems.board_ops import (apply_gravity_moves, board_snapshot, clear_tiles,
                                         compute_gravity_moves, refill_inactive_tiles)
from tests.helpers import make_session, set_layout


def _column(world, col):
    return [row[col] for row in board_snapshot(world)]


def test_single_column_compacts_toward_bottom():
    session = make_session(5, 1)
    set_layout(session.world, ["a", "d", "b", "d", "c"])
    cleared = clear_tiles(session.world, [(1, 0), (3, 0)])
    assert cleared == [(1, 0, 'd'), (3, 0, 'd')]
    assert _column(session.world, 0) == ['a', None, 'b', None, 'c']

    moves = compute_gravity_moves(session.world)
    apply_gravity_moves(session.world, moves)
    assert _column(session.world, 0) == [None, None, 'a', 'b', 'c']

    new_tiles = refill_inactive_tiles(session.world)
    assert new_tiles == [(0, 0), (1, 0)]
    column = _column(session.world, 0)
    assert column[2:] == ['a', 'b', 'c']
    assert all(symbol in session.alphabet for symbol in column[:2])


def test_gravity_moves_are_planned_bottom_up():
    session = make_session(4, 1)
    set_layout(session.world, ["a", "b", ".", "."])
    moves = compute_gravity_moves(session.world)
    assert [(m.source, m.target, m.type_name) for m in moves] == [
        ((1, 0), (3, 0), 'b'),
        ((0, 0), (2, 0), 'a'),
    ]


def test_cascade_conserves_symbols_per_column():
    session = make_session(5, 3)
    set_layout(session.world, [
        "ab.",
        ".cd",
        "e.a",
        "b.c",
        ".d.",
    ])
    before = [Counter(s for s in _column(session.world, c) if s) for c in range(3)]
    order_before = [[s for s in _column(session.world, c) if s] for c in range(3)]
    apply_gravity_moves(session.world, compute_gravity_moves(session.world))
    for c in range(3):
        column = _column(session.world, c)
        occupied = [s for s in column if s]
        assert Counter(occupied) == before[c]
        assert occupied == order_before[c], 'Relative order must be preserved'
        # Empties float to the top
        assert column[:len(column) - len(occupied)] == [None] * (len(column) - len(occupied))


def test_gravity_never_moves_across_columns():
    session = make_session(3, 2)
    set_layout(session.world, [
        "a.",
        ".b",
        "..",
    ])
    moves = compute_gravity_moves(session.world)
    assert all(m.source[1] == m.target[1] for m in moves)
    apply_gravity_moves(session.world, moves)
    assert board_snapshot(session.world) == ((None, None), (None, None), ('a', 'b'))
