from __future__ import annotations

from typing import Dict, Iterable, List

from mochi.components.grid import EMPTY, Cell, GridState, Position, PowerUp
from mochi.components.match_group import PendingPowerUp
from mochi.components.resolution import FillResult
from mochi.random_source import RandomSource, pick


def fill_color(grid: GridState, row: int, col: int, rng: RandomSource, color_count: int) -> int:
    """Pick a refill color that avoids the obvious immediate runs around (row, col).

    Only cells already resolved in ``grid`` are considered (columns to the left,
    new cells above, survivors below). When every color is excluded any color
    is allowed; later cascade rounds pick up what slips through.
    """
    available = list(range(color_count))

    def exclude(color: int) -> None:
        if color in available:
            available.remove(color)

    left1, left2 = grid.color_at(row, col - 1), grid.color_at(row, col - 2)
    if left1 != EMPTY and left1 == left2:
        exclude(left1)
    up1, up2 = grid.color_at(row - 1, col), grid.color_at(row - 2, col)
    if up1 != EMPTY and up1 == up2:
        exclude(up1)
    if up1 != EMPTY and up1 == grid.color_at(row + 1, col):
        exclude(up1)
    if not available:
        return rng.next_int(color_count)
    return pick(rng, available)


def _power_ups_by_column(pending: Iterable[PendingPowerUp]) -> Dict[int, List[PowerUp]]:
    by_col: Dict[int, List[PowerUp]] = {}
    for power_up in pending:
        by_col.setdefault(power_up.target_column, []).append(power_up.kind)
    return by_col


def collapse_and_fill(
    grid: GridState,
    pending: Iterable[PendingPowerUp],
    rng: RandomSource,
    color_count: int,
) -> FillResult:
    """Drop surviving cells to the bottom of each column and spawn new ones on top.

    Returns a fresh grid; ``grid`` is left untouched. Pending power-ups are
    handed to the new cells of their column top-down, one per cell; any that
    do not fit are dropped.
    """
    result = GridState(rows=grid.rows, cols=grid.cols)
    source_rows: Dict[Position, int] = {}
    spawned: List[Position] = []
    power_ups = _power_ups_by_column(pending)

    for col in range(grid.cols):
        survivors = [
            (row, grid.cells[row][col])
            for row in range(grid.rows)
            if not grid.cells[row][col].is_empty
        ]
        empty = grid.rows - len(survivors)
        # place survivors first so fill_color can see what lies below the gap
        for offset, (from_row, cell) in enumerate(survivors):
            target = empty + offset
            result.cells[target][col] = Cell(cell.color, cell.power_up)
            source_rows[(target, col)] = from_row

        queued = list(power_ups.get(col, ()))
        for row in range(empty):
            color = fill_color(result, row, col, rng, color_count)
            kind = queued.pop(0) if queued else PowerUp.NONE
            result.cells[row][col] = Cell(color, kind)
            source_rows[(row, col)] = -(empty - row)
            spawned.append((row, col))

    return FillResult(grid=result, source_rows=source_rows, spawned=tuple(spawned))
