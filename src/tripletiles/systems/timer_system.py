from __future__ import annotations

from esper import World

from tripletiles.components.pending_timer import PendingTimer
from tripletiles.events.bus import EVENT_TICK, EVENT_TIMER_EXPIRED, EventBus

# Absorbs float drift from summing frame deltas (e.g. 0.1 * 3 > 0.3).
_EPSILON = 1e-9


class TimerSystem:
    """Counts down PendingTimer entities; each fires ``timer_expired`` exactly once."""
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        expired: list[tuple[int, PendingTimer]] = []
        for ent, timer in list(self.world.get_component(PendingTimer)):
            timer.remaining -= dt
            if timer.remaining <= _EPSILON:
                expired.append((ent, timer))
        # Earliest deadline first, creation order breaks ties.
        expired.sort(key=lambda item: (item[1].remaining, item[0]))
        for ent, timer in expired:
            # An earlier handler in this tick may have cancelled it.
            if not self.world.entity_exists(ent):
                continue
            self.world.delete_entity(ent, immediate=True)
            self.event_bus.emit(EVENT_TIMER_EXPIRED, kind=timer.kind, group=timer.group, **timer.payload)
