import random

from esper import World

from tripletiles.components.game_state import GameState
from tripletiles.components.resolution_state import ResolutionState
from tripletiles.components.sound_settings import SoundSettings
from tripletiles.config import GameConfig


def create_world(
    *,
    config: GameConfig | None = None,
    rng: random.Random | None = None,
) -> World:
    world = World()
    config = config or GameConfig()
    setattr(world, "random", rng or random.Random())
    setattr(world, "config", config)

    # Register the global session resources; BoardSystem adds the board and selection.
    world.create_entity(GameState(time_left=config.game_time))
    world.create_entity(ResolutionState())
    world.create_entity(SoundSettings())
    return world
