import logging
from typing import Optional, Tuple

from esper import World

from mochi.components.board import Board
from mochi.components.board_state import BoardState
from mochi.components.grid import GridState
from mochi.components.resolution import MoveResult, ResolutionStep
from mochi.components.session import CascadePhase
from mochi.constants import GRID_COLS, GRID_ROWS, NUM_COLORS
from mochi.events.bus import (
    EventBus,
    EVENT_BOARD_READY,
    EVENT_BOARD_RESET_REQUEST,
    EVENT_BOARD_SHUFFLED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_POWER_UP_ACTIVATED,
    EVENT_REFILL_COMPLETED,
    EVENT_SCORE_CHANGED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REJECTED,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_REVERTED,
    EVENT_TILE_SWAP_VALID,
)
from mochi.random_source import RandomSource, SeededRandom
from mochi.systems.board_ops import ensure_playable, init_board, is_move_valid, validate_dimensions
from mochi.systems.cascade import resolve_move
from mochi.systems.session_utils import get_or_create_session

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class BoardSystem:
    """Owns the session board and resolves swap requests arriving on the bus.

    A swap is handled synchronously: the whole cascade is computed first, then
    replayed to listeners as events, one group per ResolutionStep. Requests
    that arrive while that replay is still running (listeners emitting new
    swaps) are rejected, never queued.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        rows: int = GRID_ROWS,
        cols: int = GRID_COLS,
        color_count: int = NUM_COLORS,
    ):
        validate_dimensions(rows, cols, color_count)
        self.world = world
        self.event_bus = event_bus
        self.rng: RandomSource = getattr(world, "random", None) or SeededRandom()
        self.board_entity = self.world.create_entity()
        self.world.add_component(self.board_entity, Board(rows=rows, cols=cols, color_count=color_count))
        self.world.add_component(self.board_entity, BoardState(grid=init_board(rows, cols, color_count, self.rng)))
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)
        self.event_bus.subscribe(EVENT_BOARD_RESET_REQUEST, self.on_reset_request)

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    @property
    def grid(self) -> GridState:
        return self.world.component_for_entity(self.board_entity, BoardState).grid

    def set_grid(self, grid: GridState) -> None:
        board = self.board
        if (grid.rows, grid.cols) != (board.rows, board.cols):
            raise ValueError(f"Grid is {grid.rows}x{grid.cols}, board is {board.rows}x{board.cols}")
        self.world.component_for_entity(self.board_entity, BoardState).grid = grid

    def reset(self) -> GridState:
        board = self.board
        grid = init_board(board.rows, board.cols, board.color_count, self.rng)
        self.set_grid(grid)
        self.event_bus.emit(EVENT_BOARD_READY, grid=grid)
        return grid

    def on_reset_request(self, sender, **kwargs):
        self.reset()

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        self.request_swap(tuple(src), tuple(dst))

    def request_swap(self, src: Position, dst: Position) -> Optional[MoveResult]:
        """Validate and resolve one swap; None when the request was rejected outright."""
        session = get_or_create_session(self.world)
        if not session.active or session.busy:
            reason = 'busy' if session.busy else 'inactive'
            logger.debug("Rejecting swap %s-%s: %s", src, dst, reason)
            self.event_bus.emit(EVENT_TILE_SWAP_REJECTED, src=src, dst=dst, reason=reason)
            return None
        grid = self.grid
        if not is_move_valid(grid, src[0], src[1], dst[0], dst[1]):
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst)
            return None

        board = self.board
        session.phase = CascadePhase.RESOLVING
        try:
            result = resolve_move(grid, src[0], src[1], dst[0], dst[1], self.rng, board.color_count)
            if result.reverted:
                self.event_bus.emit(EVENT_TILE_SWAP_REVERTED, src=src, dst=dst)
                self._keep_playable(result.final_board)
                return result
            self.set_grid(result.final_board)
            session.moves += 1
            self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
            for step in result.steps:
                self._play_step(step)
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=result.chain, score_delta=result.total_score_delta)
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=session.score, delta=result.total_score_delta)
            self._keep_playable(result.final_board)
            return result
        finally:
            session.phase = CascadePhase.IDLE
            session.cascade_depth = 0

    def _keep_playable(self, grid: GridState) -> None:
        playable = ensure_playable(grid, self.rng, self.board.color_count)
        if playable is not grid:
            self.set_grid(playable)
            self.event_bus.emit(EVENT_BOARD_SHUFFLED, grid=playable)

    def _play_step(self, step: ResolutionStep) -> None:
        session = get_or_create_session(self.world)
        session.cascade_depth = step.chain
        session.phase = CascadePhase.DESTROYING
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=step.chain, step=step)
        self.event_bus.emit(EVENT_MATCH_FOUND, positions=sorted(step.matched), size=len(step.matched), depth=step.chain)
        for position, kind in step.activated:
            self.event_bus.emit(EVENT_POWER_UP_ACTIVATED, position=position, kind=kind, depth=step.chain)
        session.score += step.score_delta
        self.event_bus.emit(
            EVENT_MATCH_CLEARED,
            positions=sorted(step.destroyed),
            score_delta=step.score_delta,
            depth=step.chain,
        )
        session.phase = CascadePhase.COLLAPSING
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, source_rows=dict(step.source_rows))
        self.event_bus.emit(
            EVENT_REFILL_COMPLETED,
            new_tiles=list(step.spawned),
            power_ups=list(step.pending_power_ups),
        )
        session.phase = CascadePhase.RESOLVING
