import pytest

from tripletiles.components.board import Board
from tripletiles.components.tile import Tile, TileColor
from tripletiles.events.bus import EVENT_MATCH_FOUND, EVENT_MATCH_REJECTED, EVENT_SELECTION_CLEARED
from tripletiles.systems.match import MatchOutcome, evaluate_selection
from tests.helpers import fill_board, make_session, paint_board, record


def _board():
    board = Board(size=8, tiles=[[Tile(color=TileColor.RED) for _ in range(8)] for _ in range(8)])
    fill_board(board)
    return board


def test_same_color_anywhere_on_board_matches():
    board = _board()
    paint_board(board, ["GYR", "BBB"])
    # Non-adjacent tiles still match.
    board.tiles[7][7] = Tile(color=TileColor.GREEN)
    assert evaluate_selection(board, [(0, 0), (7, 7), (1, 2)]) is MatchOutcome.NO_MATCH
    assert evaluate_selection(board, [(1, 0), (1, 1), (1, 2)]) is MatchOutcome.MATCH
    board.tiles[5][6] = Tile(color=TileColor.GREEN)
    assert evaluate_selection(board, [(0, 0), (7, 7), (5, 6)]) is MatchOutcome.MATCH


def test_two_of_three_is_no_match():
    board = _board()
    paint_board(board, ["RRY"])
    assert evaluate_selection(board, [(0, 0), (0, 1), (0, 2)]) is MatchOutcome.NO_MATCH


@pytest.mark.parametrize(
    "positions",
    [
        [(0, 0), (0, 1)],
        [(0, 0), (0, 1), (0, 2), (0, 3)],
        [(0, 0), (0, 0), (0, 1)],
        [(0, 0), (0, 1), (8, 1)],
    ],
)
def test_bad_selection_is_an_error(positions):
    with pytest.raises(ValueError):
        evaluate_selection(_board(), positions)


def test_selection_cleared_before_match_is_reported():
    session = make_session()
    events = record(session.event_bus, EVENT_SELECTION_CLEARED, EVENT_MATCH_FOUND, EVENT_MATCH_REJECTED)

    # (0,0), (0,5) and (5,0) are all red on the fixed board.
    for pos in [(0, 0), (0, 5), (5, 0)]:
        session.tap_tile(*pos)

    assert [name for name, _ in events] == [EVENT_SELECTION_CLEARED, EVENT_MATCH_FOUND]
    assert events[0][1]['reason'] == 'match'
    assert events[1][1] == {'positions': [(0, 0), (0, 5), (5, 0)], 'color': TileColor.RED}
    assert session.selection.positions == []


def test_rejected_selection_reason():
    session = make_session()
    events = record(session.event_bus, EVENT_SELECTION_CLEARED)
    for pos in [(0, 0), (0, 1), (0, 2)]:
        session.tap_tile(*pos)
    assert events == [(EVENT_SELECTION_CLEARED, {'positions': [(0, 0), (0, 1), (0, 2)], 'reason': 'no_match'})]
