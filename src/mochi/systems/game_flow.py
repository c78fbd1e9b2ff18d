from esper import World

from mochi.constants import DEFAULT_PLAYER_NAME
from mochi.events.bus import (
    EventBus,
    EVENT_BOARD_RESET_REQUEST,
    EVENT_GAME_OVER,
    EVENT_GAME_START,
    EVENT_GAME_STARTED,
    EVENT_GAME_TIME_UP,
)
from mochi.systems.session_utils import get_or_create_leaderboard, get_or_create_session


class GameFlowSystem:
    """Starts and ends game sessions.

    Logic:
      - On EVENT_GAME_START: record the player name, zero the score, ask for a fresh board.
      - On EVENT_GAME_TIME_UP: close the session and rank the final score.
        The countdown itself lives outside the rules engine; whoever runs the
        clock emits the time-up event.
    """
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_GAME_START, self.on_game_start)
        self.event_bus.subscribe(EVENT_GAME_TIME_UP, self.on_time_up)

    def on_game_start(self, sender, **kwargs):
        name = (kwargs.get('player_name') or '').strip() or DEFAULT_PLAYER_NAME
        session = get_or_create_session(self.world)
        session.player_name = name
        session.score = 0
        session.moves = 0
        session.active = True
        self.event_bus.emit(EVENT_BOARD_RESET_REQUEST)
        self.event_bus.emit(EVENT_GAME_STARTED, player_name=name)

    def on_time_up(self, sender, **kwargs):
        session = get_or_create_session(self.world)
        if not session.active:
            return
        session.active = False
        leaderboard = get_or_create_leaderboard(self.world)
        rank = leaderboard.submit(session.player_name, session.score)
        self.event_bus.emit(
            EVENT_GAME_OVER,
            player_name=session.player_name,
            score=session.score,
            rank=rank,
            leaderboard=list(leaderboard.entries),
        )
