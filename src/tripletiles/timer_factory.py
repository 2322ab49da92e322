from __future__ import annotations

from typing import Any

from esper import World

from tripletiles.components.pending_timer import PendingTimer


def schedule_timer(world: World, kind: str, delay: float, *, group: str = "default", **payload: Any) -> int:
    ent = world.create_entity()
    world.add_component(ent, PendingTimer(kind=kind, remaining=max(0.0, float(delay)), group=group, payload=payload))
    return ent


def cancel_timers(world: World, *, group: str | None = None, kind: str | None = None) -> int:
    """Delete pending timers matching the filters (all timers when none given)."""
    doomed = [
        ent
        for ent, timer in world.get_component(PendingTimer)
        if (group is None or timer.group == group) and (kind is None or timer.kind == kind)
    ]
    for ent in doomed:
        world.delete_entity(ent, immediate=True)
    return len(doomed)


def pending_timers(world: World, *, group: str | None = None) -> list[PendingTimer]:
    return [timer for _, timer in world.get_component(PendingTimer) if group is None or timer.group == group]
