from tripletiles.constants import SOUND_POP, TIMER_GROUP_SOUND
from tripletiles.events.bus import (
    EVENT_MUTE_CHANGED,
    EVENT_MUTE_TOGGLE_REQUEST,
    EVENT_SOUND_PLAY,
    EVENT_SOUND_REQUEST,
    EVENT_TICK,
    EventBus,
)
from tripletiles.systems.sound_system import SoundSystem, get_sound_settings
from tripletiles.systems.timer_system import TimerSystem
from tripletiles.timer_factory import pending_timers
from tripletiles.world import create_world
from tests.helpers import make_session, match_three, record


def _setup():
    bus = EventBus()
    world = create_world()
    TimerSystem(world, bus)
    SoundSystem(world, bus)
    return world, bus, record(bus, EVENT_SOUND_PLAY)


def test_repeated_cue_is_spaced_by_pop_interval():
    world, bus, plays = _setup()
    bus.emit(EVENT_SOUND_REQUEST, cue=SOUND_POP, repeat=3)
    assert plays == [(EVENT_SOUND_PLAY, {'cue': SOUND_POP})]
    bus.emit(EVENT_TICK, dt=0.1)
    assert len(plays) == 1
    bus.emit(EVENT_TICK, dt=0.05)
    assert len(plays) == 2
    bus.emit(EVENT_TICK, dt=0.15)
    assert len(plays) == 3
    assert pending_timers(world, group=TIMER_GROUP_SOUND) == []


def test_muted_requests_are_dropped():
    world, bus, plays = _setup()
    bus.emit(EVENT_MUTE_TOGGLE_REQUEST)
    bus.emit(EVENT_SOUND_REQUEST, cue=SOUND_POP, repeat=3)
    bus.emit(EVENT_TICK, dt=1.0)
    assert plays == []


def test_muting_cancels_queued_pops():
    world, bus, plays = _setup()
    bus.emit(EVENT_SOUND_REQUEST, cue=SOUND_POP, repeat=3)
    bus.emit(EVENT_MUTE_TOGGLE_REQUEST)
    assert pending_timers(world, group=TIMER_GROUP_SOUND) == []
    bus.emit(EVENT_TICK, dt=1.0)
    assert len(plays) == 1


def test_mute_toggle_round_trip():
    world, bus, _ = _setup()
    changes = record(bus, EVENT_MUTE_CHANGED)
    bus.emit(EVENT_MUTE_TOGGLE_REQUEST)
    assert get_sound_settings(world).muted
    bus.emit(EVENT_MUTE_TOGGLE_REQUEST)
    assert not get_sound_settings(world).muted
    assert [k['muted'] for _, k in changes] == [True, False]


def test_mute_does_not_change_gameplay():
    loud = make_session()
    quiet = make_session()
    quiet.toggle_mute()
    for session in (loud, quiet):
        match_three(session)
        session.advance(0.7)
    assert loud.state.score == quiet.state.score == 30
    assert loud.snapshot().grid == quiet.snapshot().grid
    assert quiet.snapshot().muted and not loud.snapshot().muted


def test_mute_survives_restart():
    session = make_session()
    session.toggle_mute()
    session.restart()
    assert session.snapshot().muted
