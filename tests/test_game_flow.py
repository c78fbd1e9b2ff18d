from mochi.components.leaderboard import Leaderboard, LeaderboardEntry
from mochi.events.bus import (
    EVENT_BOARD_READY,
    EVENT_GAME_OVER,
    EVENT_GAME_START,
    EVENT_GAME_STARTED,
    EVENT_GAME_TIME_UP,
)
from mochi.systems.board import BoardSystem
from mochi.systems.game_flow import GameFlowSystem
from mochi.systems.session_utils import get_or_create_leaderboard, get_or_create_session


def test_game_start_resets_session_and_board(world, bus):
    BoardSystem(world, bus)
    GameFlowSystem(world, bus)
    session = get_or_create_session(world)
    session.score = 340
    session.active = False
    started = []
    ready = []
    bus.subscribe(EVENT_GAME_STARTED, lambda sender, **payload: started.append(payload))
    bus.subscribe(EVENT_BOARD_READY, lambda sender, **payload: ready.append(payload))

    bus.emit(EVENT_GAME_START, player_name='  Suki ')

    assert session.player_name == 'Suki'
    assert session.score == 0
    assert session.active
    assert started == [{'player_name': 'Suki'}]
    assert len(ready) == 1


def test_blank_name_defaults_to_player(world, bus):
    BoardSystem(world, bus)
    GameFlowSystem(world, bus)
    bus.emit(EVENT_GAME_START, player_name='   ')
    assert get_or_create_session(world).player_name == 'Player'


def test_time_up_ranks_score_once(world, bus):
    BoardSystem(world, bus)
    GameFlowSystem(world, bus)
    over = []
    bus.subscribe(EVENT_GAME_OVER, lambda sender, **payload: over.append(payload))
    bus.emit(EVENT_GAME_START, player_name='Ren')
    get_or_create_session(world).score = 120

    bus.emit(EVENT_GAME_TIME_UP)
    bus.emit(EVENT_GAME_TIME_UP)

    assert len(over) == 1
    assert over[0]['player_name'] == 'Ren'
    assert over[0]['score'] == 120
    assert over[0]['rank'] == 1
    assert over[0]['leaderboard'] == [LeaderboardEntry('Ren', 120)]
    assert not get_or_create_session(world).active
    assert get_or_create_leaderboard(world).entries == [LeaderboardEntry('Ren', 120)]


def test_leaderboard_keeps_top_five_best_first():
    board = Leaderboard()
    results = [('a', 50), ('b', 90), ('c', 10), ('d', 90), ('e', 70), ('f', 30), ('g', 60)]
    ranks = [board.submit(name, score) for name, score in results]
    assert [(e.name, e.score) for e in board.entries] == [
        ('b', 90), ('d', 90), ('e', 70), ('g', 60), ('a', 50),
    ]
    assert ranks == [1, 1, 3, 2, 3, 5, 4]


def test_repeated_name_and_score_ranks_the_new_entry():
    board = Leaderboard()
    assert board.submit('Ren', 100) == 1
    assert board.submit('Ren', 100) == 2


def test_tie_trimmed_from_full_board_does_not_place():
    board = Leaderboard(size=2)
    board.submit('Ren', 100)
    board.submit('Ren', 100)
    assert board.submit('Ren', 100) is None
    assert len(board.entries) == 2


def test_game_over_reports_rank_of_this_game(world, bus):
    BoardSystem(world, bus)
    GameFlowSystem(world, bus)
    leaderboard = get_or_create_leaderboard(world)
    for _ in range(leaderboard.size):
        leaderboard.submit('Ren', 100)
    over = []
    bus.subscribe(EVENT_GAME_OVER, lambda sender, **payload: over.append(payload))
    bus.emit(EVENT_GAME_START, player_name='Ren')
    get_or_create_session(world).score = 100

    bus.emit(EVENT_GAME_TIME_UP)

    assert over[0]['rank'] is None
    assert len(over[0]['leaderboard']) == leaderboard.size
