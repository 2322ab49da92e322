import sys, os
ROOT = os.path.dirname(__file__)
SRC = os.path.join(ROOT, 'src')
if SRC not in sys.path:
    sys.path.insert(0, SRC)
import logging
import random

from tripletiles.events.bus import (
    EVENT_BOARD_SETTLED,
    EVENT_MATCH_FOUND,
    EVENT_MATCH_REJECTED,
    EVENT_PHASE_CHANGED,
    EVENT_SCORE_CHANGED,
    EVENT_SOUND_PLAY,
)
from tripletiles.session import GameSession

logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s %(message)s")


def dump(snapshot):
    print(f"level={snapshot.level} phase={snapshot.phase.name} score={snapshot.score}/{snapshot.target_score} "
          f"time={snapshot.time_left} processing={snapshot.is_processing} selection={list(snapshot.selection)}")
    for row in snapshot.grid:
        print(' '.join(tile.color[0].upper() + ('*' if tile.is_new else ' ') for tile in row))


def find_triple(snapshot):
    by_color = {}
    for r, row in enumerate(snapshot.grid):
        for c, tile in enumerate(row):
            by_color.setdefault(tile.color, []).append((r, c))
            if len(by_color[tile.color]) == 3:
                return by_color[tile.color]
    return None


session = GameSession(rng=random.Random(7))
received = []
for ev in [EVENT_MATCH_FOUND, EVENT_MATCH_REJECTED, EVENT_BOARD_SETTLED, EVENT_SCORE_CHANGED, EVENT_PHASE_CHANGED, EVENT_SOUND_PLAY]:
    session.event_bus.subscribe(ev, lambda s, _ev=ev, **k: received.append(_ev))

dump(session.snapshot())
# Deliberate mismatch first: the top-left corner cells rarely all share a color.
for pos in [(0, 0), (0, 1), (1, 0)]:
    session.tap_tile(*pos)
print('after mismatch attempt events', received)
received.clear()

for _ in range(3):
    triple = find_triple(session.snapshot())
    for pos in triple:
        session.tap_tile(*pos)
    print('tapped', triple, 'events', received)
    session.advance(0.7, step=0.02)
    print('after settle events', received)
    received.clear()
    dump(session.snapshot())

session.advance(60, step=0.25)
dump(session.snapshot())
session.restart()
dump(session.snapshot())
