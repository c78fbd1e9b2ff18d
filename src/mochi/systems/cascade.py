"""Swap resolution: destroy, chain-activate, score, collapse and refill until stable."""
from __future__ import annotations

import logging
from typing import Iterator, List

from mochi.components.grid import GridState
from mochi.components.resolution import MoveResult, MoveStatus, ResolutionStep
from mochi.random_source import RandomSource
from mochi.systems.board_ops import is_move_valid
from mochi.systems.gravity import collapse_and_fill
from mochi.systems.match import find_match_groups, has_match, merge_groups
from mochi.systems.powerups import SwapContext, classify_all, expand_chain
from mochi.systems.scoring import calc_score

logger = logging.getLogger(__name__)


def resolve_round(
    grid: GridState,
    chain: int,
    rng: RandomSource,
    color_count: int,
    swap_context: SwapContext = None,
) -> ResolutionStep | None:
    """Run one cascade round on ``grid`` (not mutated). None when the board holds no match."""
    groups = find_match_groups(grid)
    if not groups:
        return None
    matched = frozenset(pos for group in groups for pos in group.cells)
    regions = merge_groups(groups)
    pending = classify_all(regions, swap_context)

    destroyed, activated = expand_chain(grid, matched)
    points = calc_score(len(destroyed), chain)

    cleared = grid.copy()
    for pos in destroyed:
        cleared.clear(pos)
    fill = collapse_and_fill(cleared, pending, rng, color_count)

    return ResolutionStep(
        chain=chain,
        matched=matched,
        regions=tuple(regions),
        activated=tuple(activated),
        destroyed=frozenset(destroyed),
        score_delta=points,
        pending_power_ups=tuple(pending),
        board=fill.grid,
        source_rows=fill.source_rows,
        spawned=fill.spawned,
    )


def iter_cascade(
    grid: GridState,
    rng: RandomSource,
    color_count: int,
    swap_context: SwapContext = None,
) -> Iterator[ResolutionStep]:
    """Yield rounds until the board is stable; only the first round sees the swap cells."""
    chain = 0
    current = grid
    while True:
        step = resolve_round(current, chain + 1, rng, color_count, swap_context if chain == 0 else None)
        if step is None:
            return
        chain = step.chain
        current = step.board
        yield step


def resolve_move(
    grid: GridState,
    r1: int,
    c1: int,
    r2: int,
    c2: int,
    rng: RandomSource,
    color_count: int,
) -> MoveResult:
    """Swap two cells and resolve every cascade the swap sets off.

    ``grid`` is never mutated. Invalid coordinates and swaps that produce no
    match come back as tagged results rather than exceptions.
    """
    if not is_move_valid(grid, r1, c1, r2, c2):
        return MoveResult(status=MoveStatus.INVALID, final_board=grid.copy())

    a, b = (r1, c1), (r2, c2)
    working = grid.copy()
    working.swap(a, b)
    if not has_match(working):
        working.swap(a, b)
        return MoveResult(status=MoveStatus.REVERTED, final_board=working)

    steps: List[ResolutionStep] = list(iter_cascade(working, rng, color_count, (a, b)))
    total = sum(step.score_delta for step in steps)
    logger.debug("Swap %s-%s resolved in %d round(s) for %d points", a, b, len(steps), total)
    return MoveResult(
        status=MoveStatus.RESOLVED,
        final_board=steps[-1].board,
        steps=tuple(steps),
        total_score_delta=total,
    )
