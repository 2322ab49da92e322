from typing import Optional

from esper import World

from tripletiles.components.sound_settings import SoundSettings
from tripletiles.config import GameConfig
from tripletiles.constants import TIMER_GROUP_SOUND, TIMER_SOUND_CUE
from tripletiles.events.bus import (
    EVENT_MUTE_CHANGED,
    EVENT_MUTE_TOGGLE_REQUEST,
    EVENT_SOUND_PLAY,
    EVENT_SOUND_REQUEST,
    EVENT_TIMER_EXPIRED,
    EventBus,
)
from tripletiles.timer_factory import cancel_timers, schedule_timer


def get_sound_settings(world: World) -> SoundSettings:
    for _, settings in world.get_component(SoundSettings):
        return settings
    world.create_entity(SoundSettings())
    return list(world.get_component(SoundSettings))[0][1]


class SoundSystem:
    """Turns sound requests into spaced ``sound_play`` cues for the audio collaborator.

    Gameplay never depends on these cues; a muted session simply drops them.
    """

    def __init__(self, world: World, event_bus: EventBus, *, config: Optional[GameConfig] = None):
        self.world = world
        self.event_bus = event_bus
        self.config = config or getattr(world, "config", None) or GameConfig()
        self.event_bus.subscribe(EVENT_SOUND_REQUEST, self.on_sound_request)
        self.event_bus.subscribe(EVENT_TIMER_EXPIRED, self.on_timer_expired)
        self.event_bus.subscribe(EVENT_MUTE_TOGGLE_REQUEST, self.on_mute_toggle)

    @property
    def muted(self) -> bool:
        return get_sound_settings(self.world).muted

    def on_sound_request(self, sender, **kwargs):
        cue = kwargs.get('cue')
        if not cue or self.muted:
            return
        repeat = max(1, int(kwargs.get('repeat', 1)))
        self.event_bus.emit(EVENT_SOUND_PLAY, cue=cue)
        for index in range(1, repeat):
            schedule_timer(
                self.world,
                TIMER_SOUND_CUE,
                self.config.pop_interval * index,
                group=TIMER_GROUP_SOUND,
                cue=cue,
            )

    def on_timer_expired(self, sender, **kwargs):
        if kwargs.get('kind') != TIMER_SOUND_CUE:
            return
        cue = kwargs.get('cue')
        if cue and not self.muted:
            self.event_bus.emit(EVENT_SOUND_PLAY, cue=cue)

    def on_mute_toggle(self, sender, **kwargs):
        settings = get_sound_settings(self.world)
        settings.muted = not settings.muted
        if settings.muted:
            cancel_timers(self.world, group=TIMER_GROUP_SOUND)
        self.event_bus.emit(EVENT_MUTE_CHANGED, muted=settings.muted)
