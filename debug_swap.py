import sys, os, random
ROOT = os.path.dirname(__file__)
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)
from tilematch.engine import GameSession
from tilematch.events.bus import (EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_INVALID,
                                  EVENT_MATCH_FOUND, EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE)
from tilematch.systems.board_ops import format_board

# Prints every event and board state for one scripted swap on a seeded 5x5 board.
session = GameSession(5, 5, list('abcd'), rng=random.Random(int(sys.argv[1]) if len(sys.argv) > 1 else 0))
print('initial board after %d settling step(s):' % len(session.initial_steps))
print(format_board(session.world))

received = []
for ev in [EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_INVALID, EVENT_MATCH_FOUND, EVENT_CASCADE_COMPLETE]:
    session.event_bus.subscribe(ev, lambda s, _ev=ev, **k: received.append(_ev))
session.event_bus.subscribe(EVENT_CASCADE_STEP,
                            lambda s, **k: print('step', k['step'].depth, 'removed', sorted(k['step'].removed),
                                                 '+%d' % k['step'].score_delta))

# Try every horizontal swap until one is accepted
for row in range(session.rows):
    for col in range(session.cols - 1):
        result = session.attempt_swap((row, col), (row, col + 1))
        if result.accepted:
            print('accepted swap', (row, col), (row, col + 1), 'score', session.score, 'moves', session.moves_remaining)
            print(format_board(session.world))
            print('events', received)
            sys.exit(0)
print('no horizontal swap produced a match; events', received)
