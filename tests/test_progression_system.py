from tripletiles.components.game_state import GamePhase
from tripletiles.config import GameConfig
from tripletiles.constants import TIMER_GROUP_PROGRESSION
from tripletiles.events.bus import (
    EVENT_BOARD_RESET,
    EVENT_GAME_COMPLETED,
    EVENT_LEVEL_STARTED,
    EVENT_LEVEL_UP_STARTED,
    EVENT_SCORE_CHANGED,
)
from tripletiles.timer_factory import pending_timers
from tests.helpers import make_session, match_three, record


def _score_to(session, level, score):
    session.state.level = level
    session.state.score = score


def test_reaching_target_starts_level_up_then_next_level():
    session = make_session()
    _score_to(session, 1, 470)
    session.state.time_left = 42
    started = record(session.event_bus, EVENT_LEVEL_UP_STARTED)
    next_level = record(session.event_bus, EVENT_LEVEL_STARTED)
    resets = record(session.event_bus, EVENT_BOARD_RESET)

    match_three(session)
    session.advance(0.7)

    assert session.state.phase == GamePhase.LEVEL_UP
    assert session.state.score == 500
    assert session.snapshot().cleared_level == 1
    assert started == [(EVENT_LEVEL_UP_STARTED, {'cleared_level': 1, 'score': 500})]

    session.advance(1.0)
    assert session.state.phase == GamePhase.LEVEL_UP
    assert session.state.time_left == 42

    session.advance(0.6)
    assert session.state.phase == GamePhase.PLAYING
    assert session.state.level == 2
    assert session.state.score == 0
    assert session.state.time_left == 60
    assert session.snapshot().cleared_level is None
    assert session.snapshot().target_score == 600
    assert next_level == [(EVENT_LEVEL_STARTED, {'level': 2, 'grid_size': 8})]
    assert resets == [(EVENT_BOARD_RESET, {'level': 2, 'size': 8})]


def test_overshoot_does_not_carry_into_next_level():
    session = make_session()
    _score_to(session, 1, 490)
    match_three(session)
    session.advance(2.5)
    assert session.state.level == 2
    assert session.state.score == 0


def test_taps_blocked_during_level_up():
    session = make_session()
    _score_to(session, 1, 470)
    match_three(session)
    session.advance(0.7)
    session.tap_tile(0, 0)
    assert session.selection.positions == []


def test_grid_grows_every_ten_levels():
    session = make_session()
    _score_to(session, 10, 1370)
    match_three(session)
    session.advance(2.5)
    snapshot = session.snapshot()
    assert snapshot.level == 11
    assert snapshot.grid_size == 9
    assert snapshot.tile_size == 44
    assert len(snapshot.grid) == 9 and all(len(row) == 9 for row in snapshot.grid)


def test_final_level_completes_game():
    session = make_session()
    _score_to(session, 100, 10370)
    completed = record(session.event_bus, EVENT_GAME_COMPLETED)
    match_three(session)
    session.advance(0.7)

    assert session.state.transition_pending
    assert session.state.phase == GamePhase.PLAYING
    session.tap_tile(0, 0)
    assert session.selection.positions == []

    session.advance(1.0)
    assert session.state.phase == GamePhase.COMPLETED
    assert session.state.level == 100
    assert completed == [(EVENT_GAME_COMPLETED, {'level': 100, 'score': 10400})]
    # One second elapsed while the completion delay ran; the clock stops once Completed.
    assert session.state.time_left == 59
    session.advance(5.0)
    assert session.state.time_left == 59


def test_level_99_advances_to_100_before_completing():
    session = make_session()
    _score_to(session, 99, 10270)
    match_three(session)
    session.advance(2.5)
    assert session.state.level == 100
    assert session.state.phase == GamePhase.PLAYING


def test_second_score_change_does_not_restart_transition():
    session = make_session()
    _score_to(session, 1, 470)
    match_three(session)
    session.advance(0.7)

    session.event_bus.emit(EVENT_SCORE_CHANGED, score=500, delta=0, level=1, reason='replay')

    assert len(pending_timers(session.world, group=TIMER_GROUP_PROGRESSION)) == 1
    assert not session.progression_system.check_progress()


def test_flat_variant_has_no_cap():
    session = make_session(GameConfig.flat())
    _score_to(session, 150, 970)
    assert session.snapshot().points_remaining is None
    match_three(session)
    session.advance(2.5)
    assert session.state.level == 151
    assert session.state.phase == GamePhase.PLAYING
    assert session.snapshot().max_level is None


def test_clock_can_carry_over_between_levels():
    session = make_session(GameConfig(timer_reset_on_level_up=False))
    _score_to(session, 1, 470)
    session.state.time_left = 42
    match_three(session)
    session.advance(2.2)
    assert session.state.level == 2
    assert session.state.time_left == 42
    # The partial second counted before the level-up still counts afterwards.
    session.advance(0.4)
    assert session.state.time_left == 41


def test_reset_clock_starts_a_fresh_second_on_level_up():
    session = make_session()
    _score_to(session, 1, 470)
    match_three(session)
    session.advance(2.2)
    assert session.state.level == 2
    session.advance(0.4)
    assert session.state.time_left == 60


def test_clock_keeps_running_during_completion_delay():
    session = make_session(GameConfig.scaled(max_level=1, base_score=30))
    match_three(session)
    session.advance(0.7)
    assert session.state.transition_pending
    assert session.state.phase == GamePhase.PLAYING

    session.advance(0.5)
    assert session.state.phase == GamePhase.PLAYING
    assert session.state.time_left == 59

    session.advance(1.0)
    assert session.state.phase == GamePhase.COMPLETED
    session.advance(3.0)
    assert session.state.time_left == 59


def test_time_running_out_during_completion_delay_ends_the_game():
    session = make_session(GameConfig.scaled(max_level=1, base_score=30, game_time=1))
    match_three(session)
    session.advance(0.7)
    assert session.state.transition_pending

    session.advance(1.0)
    assert session.state.phase == GamePhase.GAME_OVER
    session.advance(2.0)
    assert session.state.phase == GamePhase.GAME_OVER
