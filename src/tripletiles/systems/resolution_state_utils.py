from esper import World

from tripletiles.components.resolution_state import ResolutionState


def get_or_create_resolution_state(world: World) -> ResolutionState:
    """Return the shared ResolutionState component, creating it if absent."""
    existing = list(world.get_component(ResolutionState))
    if existing:
        return existing[0][1]
    world.create_entity(ResolutionState())
    return list(world.get_component(ResolutionState))[0][1]
