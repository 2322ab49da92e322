from __future__ import annotations

import random
from typing import Sequence

from tripletiles.components.board import Board
from tripletiles.components.tile import Tile, TileColor
from tripletiles.config import GameConfig
from tripletiles.events.bus import EVENT_POST_TICK, EVENT_TICK, EventBus
from tripletiles.session import GameSession

LETTERS = {
    'R': TileColor.RED,
    'Y': TileColor.YELLOW,
    'G': TileColor.GREEN,
    'B': TileColor.BLUE,
    'P': TileColor.PURPLE,
}


class ScriptedColors(random.Random):
    """Random source whose ``choice`` replays a script before falling back to the seed."""

    def __init__(self, seed: int = 0):
        super().__init__(seed)
        self.script: list[TileColor] = []

    def choice(self, seq):
        if self.script:
            return self.script.pop(0)
        return super().choice(seq)


def paint_board(board: Board, rows: Sequence[str]) -> None:
    """Overwrite the top-left corner of ``board`` with letter rows such as ``"RRGB"``."""
    for r, line in enumerate(rows):
        for c, letter in enumerate(line):
            board.tiles[r][c] = Tile(color=LETTERS[letter])


def fill_board(board: Board, pattern: Sequence[TileColor] = (TileColor.RED, TileColor.YELLOW, TileColor.GREEN, TileColor.BLUE, TileColor.PURPLE)) -> None:
    """Deterministic fill: color depends on (row + col) so no column is uniform."""
    for r in range(board.size):
        for c in range(board.size):
            board.tiles[r][c] = Tile(color=pattern[(r + c) % len(pattern)])


def colors(board: Board, col: int) -> list[TileColor]:
    return [board.tiles[r][col].color for r in range(board.size)]


def drive_ticks(bus: EventBus, count: int = 60, dt: float = 0.02) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)
        bus.emit(EVENT_POST_TICK, dt=dt)


def make_session(config: GameConfig | None = None, *, seed: int = 0) -> GameSession:
    """Session on a fixed board; refill colors can be scripted via ``session.world.random.script``."""
    session = GameSession(config, rng=ScriptedColors(seed))
    fill_board(session.board)
    return session


def record(bus: EventBus, *names: str) -> list[tuple[str, dict]]:
    """Subscribe to ``names`` and collect ``(name, payload)`` pairs in arrival order."""
    received: list[tuple[str, dict]] = []
    for event_name in names:
        bus.subscribe(event_name, lambda sender, _ev=event_name, **payload: received.append((_ev, payload)))
    return received


def match_three(session: GameSession, positions=((5, 0), (6, 0), (7, 0)), color: TileColor = TileColor.RED) -> None:
    """Paint ``positions`` one color and tap them."""
    for r, c in positions:
        session.board.tiles[r][c] = Tile(color=color)
    for r, c in positions:
        session.tap_tile(r, c)
