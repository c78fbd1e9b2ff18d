from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # weak=False keeps lambdas and bound methods of unreferenced systems alive.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SWAPS
# ============================================================================
EVENT_TILE_SWAP_REQUEST = "tile_swap_request"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_VALID = "tile_swap_valid"          # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_INVALID = "tile_swap_invalid"      # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_REVERTED = "tile_swap_reverted"    # payload: src=(r,c), dst=(r,c)
EVENT_TILE_SWAP_REJECTED = "tile_swap_rejected"    # payload: src=(r,c), dst=(r,c), reason=str


# ============================================================================
# CASCADE ROUNDS (one group of events per ResolutionStep, in this order)
# ============================================================================
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, step=ResolutionStep
EVENT_MATCH_FOUND = "match_found"                  # payload: positions=[(r,c),...], size=int, depth=int
EVENT_POWER_UP_ACTIVATED = "power_up_activated"    # payload: position=(r,c), kind=PowerUp, depth=int
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], score_delta=int, depth=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: source_rows=dict[(r,c), int]
EVENT_REFILL_COMPLETED = "refill_completed"        # payload: new_tiles=[(r,c),...], power_ups=[PendingPowerUp,...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, score_delta=int


# ============================================================================
# BOARD LIFECYCLE
# ============================================================================
EVENT_BOARD_RESET_REQUEST = "board_reset_request"  # payload: None
EVENT_BOARD_READY = "board_ready"                  # payload: grid=GridState
EVENT_BOARD_SHUFFLED = "board_shuffled"            # payload: grid=GridState


# ============================================================================
# SESSION & SCORE
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int
EVENT_GAME_START = "game_start"                    # payload: player_name=str
EVENT_GAME_STARTED = "game_started"                # payload: player_name=str
EVENT_GAME_TIME_UP = "game_time_up"                # payload: None
EVENT_GAME_OVER = "game_over"                      # payload: player_name=str, score=int, rank=int|None, leaderboard=list[LeaderboardEntry]
