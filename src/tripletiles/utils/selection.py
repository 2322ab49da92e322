from __future__ import annotations

from typing import List

from esper import World

from tripletiles.components.board import Position
from tripletiles.components.selection import Selection
from tripletiles.events.bus import EVENT_SELECTION_CLEARED, EventBus


def get_selection(world: World) -> Selection:
    for _, selection in world.get_component(Selection):
        return selection
    world.create_entity(Selection())
    return list(world.get_component(Selection))[0][1]


def clear_selection(world: World, event_bus: EventBus, *, reason: str) -> List[Position]:
    selection = get_selection(world)
    if not selection.positions:
        return []
    cleared = list(selection.positions)
    selection.positions.clear()
    event_bus.emit(EVENT_SELECTION_CLEARED, positions=cleared, reason=reason)
    return cleared
