from __future__ import annotations

from typing import Iterable, List, Optional, Set, Tuple

from mochi.components.grid import GridState, Position, PowerUp
from mochi.components.match_group import MergedRegion, PendingPowerUp
from mochi.constants import BOMB_RUN_LENGTH, LINE_RUN_LENGTH, LINE_SHAPE_SIZE

SwapContext = Optional[Tuple[Position, Position]]


def power_up_for_region(region: MergedRegion) -> PowerUp:
    if region.max_run_length >= LINE_RUN_LENGTH or (region.is_l_shape and region.total_size >= LINE_SHAPE_SIZE):
        return PowerUp.LINE
    if region.is_l_shape or region.max_run_length >= BOMB_RUN_LENGTH:
        return PowerUp.BOMB
    return PowerUp.NONE


def spawn_column(region: MergedRegion, swap_context: SwapContext = None) -> int:
    """Column the earned power-up should drop into.

    A region containing one of the swapped cells uses that cell's column (first
    swapped cell wins); otherwise the cell at the middle index of the region.
    """
    if swap_context is not None:
        for pos in swap_context:
            if pos in region:
                return pos[1]
    return region.cells[len(region.cells) // 2][1]


def classify(region: MergedRegion, swap_context: SwapContext = None) -> PendingPowerUp | None:
    kind = power_up_for_region(region)
    if kind is PowerUp.NONE:
        return None
    return PendingPowerUp(kind=kind, target_column=spawn_column(region, swap_context))


def classify_all(regions: Iterable[MergedRegion], swap_context: SwapContext = None) -> List[PendingPowerUp]:
    pending: List[PendingPowerUp] = []
    for region in regions:
        power_up = classify(region, swap_context)
        if power_up is not None:
            pending.append(power_up)
    return pending


def blast_area(grid: GridState, pos: Position, kind: PowerUp) -> List[Position]:
    row, col = pos
    if kind is PowerUp.BOMB:
        return [
            (r, c)
            for r in range(row - 1, row + 2)
            for c in range(col - 1, col + 2)
            if grid.in_bounds(r, c)
        ]
    if kind is PowerUp.LINE:
        return [(row, c) for c in range(grid.cols)] + [(r, col) for r in range(grid.rows)]
    return []


def expand_chain(grid: GridState, matched: Iterable[Position]) -> Tuple[Set[Position], List[Tuple[Position, PowerUp]]]:
    """Grow the destroyed set by activating every power-up caught inside it.

    Each power-up fires once. Passes repeat until one adds nothing; the set only
    grows and is bounded by the board, so this terminates.
    """
    destroyed: Set[Position] = set(matched)
    activated: List[Tuple[Position, PowerUp]] = []
    fired: Set[Position] = set()
    changed = True
    while changed:
        changed = False
        for pos in sorted(destroyed):
            if pos in fired:
                continue
            kind = grid.cell(pos).power_up
            if kind is PowerUp.NONE:
                continue
            fired.add(pos)
            activated.append((pos, kind))
            for target in blast_area(grid, pos, kind):
                if target not in destroyed:
                    destroyed.add(target)
                    changed = True
    return destroyed, activated
