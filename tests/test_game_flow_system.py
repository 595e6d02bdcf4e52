from tilematch import Accepted, RejectReason, Rejected
from tilematch.components.game_state import GameMode
from tilematch.events.bus import (EVENT_GAME_OVER, EVENT_GAME_STARTED, EVENT_MOVES_CHANGED,
                                  EVENT_SCORE_CHANGED, EVENT_STATUS_MESSAGE)
from tilematch.systems.board_ops import find_matches
from tilematch.world import get_game_state
from tests.helpers import SWAP_READY_LAYOUT, make_session, set_layout


def test_accepted_swap_costs_exactly_one_move():
    session = make_session(layout=SWAP_READY_LAYOUT, moves=5)
    moves_events = []
    session.event_bus.subscribe(EVENT_MOVES_CHANGED, lambda sender, **p: moves_events.append(p['moves_remaining']))
    result = session.attempt_swap((2, 2), (2, 3))
    assert isinstance(result, Accepted)
    assert session.moves_remaining == 4
    assert moves_events == [4], 'Cascade steps must not cost extra moves'


def test_score_events_follow_cascade_steps():
    session = make_session(layout=SWAP_READY_LAYOUT)
    deltas = []
    session.event_bus.subscribe(EVENT_SCORE_CHANGED, lambda sender, **p: deltas.append((p['delta'], p['score'])))
    result = session.attempt_swap((2, 2), (2, 3))
    assert [d for d, _ in deltas] == [step.score_delta for step in result.steps]
    assert deltas[-1][1] == session.score


def test_status_messages():
    session = make_session(layout=SWAP_READY_LAYOUT)
    messages = []
    session.event_bus.subscribe(EVENT_STATUS_MESSAGE, lambda sender, **p: messages.append(p['text']))
    session.attempt_swap((0, 0), (0, 1))
    assert messages == ["No Match"]
    result = session.attempt_swap((2, 2), (2, 3))
    assert messages[1] == "Match!"
    assert messages[2:] == ["Combo!"] * (len(result.steps) - 1)


def test_game_over_when_moves_run_out():
    session = make_session(layout=SWAP_READY_LAYOUT, moves=1)
    over = []
    session.event_bus.subscribe(EVENT_GAME_OVER, lambda sender, **p: over.append(p))
    result = session.attempt_swap((2, 2), (2, 3))
    assert isinstance(result, Accepted)
    assert session.moves_remaining == 0
    assert session.game_over
    assert get_game_state(session.world).mode is GameMode.GAME_OVER
    assert session.message == "Game Over!"
    assert over == [{'score': session.score, 'level': 1}]

    set_layout(session.world, SWAP_READY_LAYOUT)
    before = session.snapshot()
    late = session.attempt_swap((2, 2), (2, 3))
    assert isinstance(late, Rejected)
    assert late.reason is RejectReason.GAME_OVER
    assert session.snapshot() == before


def test_rejected_swap_does_not_end_game():
    session = make_session(layout=SWAP_READY_LAYOUT, moves=1)
    session.attempt_swap((0, 0), (0, 1))
    assert not session.game_over
    assert session.moves_remaining == 1


def test_restart_replaces_board_and_resets_counters():
    session = make_session(layout=SWAP_READY_LAYOUT, moves=1)
    session.attempt_swap((2, 2), (2, 3))
    assert session.game_over
    started = []
    session.event_bus.subscribe(EVENT_GAME_STARTED, lambda sender, **p: started.append(p))

    steps = session.restart()
    assert not session.game_over
    assert session.score == sum(step.score_delta for step in steps)
    assert session.moves_remaining == 1
    assert session.message == "Ready!"
    assert not find_matches(session.world)
    assert started and started[0]['steps'] == steps
    assert (started[0]['rows'], started[0]['cols']) == (4, 4)
