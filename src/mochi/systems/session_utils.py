from esper import World

from mochi.components.leaderboard import Leaderboard
from mochi.components.session import Session


def get_or_create_session(world: World) -> Session:
    """Return the shared Session component, creating it if absent."""
    existing = list(world.get_component(Session))
    if existing:
        return existing[0][1]
    session = Session()
    world.create_entity(session)
    return session


def get_or_create_leaderboard(world: World) -> Leaderboard:
    existing = list(world.get_component(Leaderboard))
    if existing:
        return existing[0][1]
    leaderboard = Leaderboard()
    world.create_entity(leaderboard)
    return leaderboard

