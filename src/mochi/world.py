from __future__ import annotations

from esper import World

from mochi.components.leaderboard import Leaderboard
from mochi.components.session import Session
from mochi.constants import DEFAULT_PLAYER_NAME
from mochi.random_source import RandomSource, SeededRandom


def create_world(
    *,
    rng: RandomSource | None = None,
    seed: int | None = None,
    player_name: str = DEFAULT_PLAYER_NAME,
) -> World:
    """Create the ECS world with its session and leaderboard resources.

    The board entity is created by BoardSystem. ``world.random`` is the single
    random source every system draws from, so one seed replays a whole session.
    """
    world = World()
    setattr(world, "random", rng or SeededRandom(seed))
    world.create_entity(Session(player_name=player_name))
    world.create_entity(Leaderboard())
    return world
