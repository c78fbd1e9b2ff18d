from __future__ import annotations

import logging
from typing import Iterator, List, Tuple

from mochi.components.grid import Cell, GridState, Position, PowerUp
from mochi.constants import (
    MAX_COLORS,
    MAX_DIMENSION,
    MIN_COLORS,
    MIN_DIMENSION,
    SHUFFLE_MAX_ATTEMPTS,
    SHUFFLE_MAX_EXTRA_COLORS,
)
from mochi.errors import ConstructionError
from mochi.random_source import RandomSource, pick
from mochi.systems.match import has_match

logger = logging.getLogger(__name__)

Swap = Tuple[Position, Position]


def validate_dimensions(rows: int, cols: int, color_count: int) -> None:
    for name, value in (("rows", rows), ("cols", cols)):
        if not MIN_DIMENSION <= value <= MAX_DIMENSION:
            raise ConstructionError(
                f"{name}={value} outside supported range {MIN_DIMENSION}..{MAX_DIMENSION}"
            )
    if not MIN_COLORS <= color_count <= MAX_COLORS:
        raise ConstructionError(
            f"color_count={color_count} outside supported range {MIN_COLORS}..{MAX_COLORS}"
        )


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def is_move_valid(grid: GridState, r1: int, c1: int, r2: int, c2: int) -> bool:
    """Both cells on the board and 4-adjacent. Says nothing about whether a match follows."""
    if not (grid.in_bounds(r1, c1) and grid.in_bounds(r2, c2)):
        return False
    return is_adjacent((r1, c1), (r2, c2))


def safe_color(grid: GridState, row: int, col: int, rng: RandomSource, color_count: int) -> int:
    """Color for (row, col) during a row-major fill that does not finish a run of 3."""
    available = list(range(color_count))
    if col >= 2:
        left1 = grid.cells[row][col - 1].color
        if left1 == grid.cells[row][col - 2].color and left1 in available:
            available.remove(left1)
    if row >= 2:
        up1 = grid.cells[row - 1][col].color
        if up1 == grid.cells[row - 2][col].color and up1 in available:
            available.remove(up1)
    return pick(rng, available)


def _fill_safe(grid: GridState, rng: RandomSource, color_count: int) -> None:
    for row in range(grid.rows):
        for col in range(grid.cols):
            grid.cells[row][col] = Cell(safe_color(grid, row, col, rng, color_count))


def iter_valid_swaps(grid: GridState) -> Iterator[Swap]:
    """Yield every right/down swap that would leave at least one match on the board.

    Each candidate is swapped in place, tested and swapped back before the
    next; the grid is unchanged once the generator is exhausted or closed.
    """
    for row in range(grid.rows):
        for col in range(grid.cols):
            pos = (row, col)
            for other in ((row, col + 1), (row + 1, col)):
                if not grid.in_bounds(*other):
                    continue
                grid.swap(pos, other)
                try:
                    creates = has_match(grid)
                finally:
                    grid.swap(pos, other)
                if creates:
                    yield (pos, other)


def has_valid_move(grid: GridState) -> bool:
    for _ in iter_valid_swaps(grid):
        return True
    return False


def find_valid_swaps(grid: GridState) -> List[Swap]:
    return list(iter_valid_swaps(grid))


def init_board(rows: int, cols: int, color_count: int, rng: RandomSource) -> GridState:
    """Fresh board with no matches and at least one valid move."""
    validate_dimensions(rows, cols, color_count)
    grid = GridState(rows=rows, cols=cols)
    _fill_safe(grid, rng, color_count)
    if not has_valid_move(grid):
        grid = shuffle(grid, rng, color_count)
    return grid


def shuffle(grid: GridState, rng: RandomSource, color_count: int) -> GridState:
    """Permute the board's colors, re-rolling until it is match-free with a valid move.

    Power-ups are dropped. The first try is a Fisher-Yates permutation of the
    existing colors; after that the board is refilled with constrained random
    colors, SHUFFLE_MAX_ATTEMPTS times per palette width. If that still fails
    the palette is widened by one color (up to SHUFFLE_MAX_EXTRA_COLORS).
    """
    shuffled = grid.copy()
    flat = [cell.color for row in shuffled.cells for cell in row]
    for i in range(len(flat) - 1, 0, -1):
        j = rng.next_int(i + 1)
        flat[i], flat[j] = flat[j], flat[i]
    for index, color in enumerate(flat):
        shuffled.cells[index // shuffled.cols][index % shuffled.cols] = Cell(color, PowerUp.NONE)
    if not has_match(shuffled) and has_valid_move(shuffled):
        return shuffled

    widest = min(color_count + SHUFFLE_MAX_EXTRA_COLORS, MAX_COLORS)
    for palette in range(color_count, widest + 1):
        if palette > color_count:
            logger.warning(
                "Shuffle failed %d times with %d colors; widening palette to %d",
                SHUFFLE_MAX_ATTEMPTS, palette - 1, palette,
            )
        for _ in range(SHUFFLE_MAX_ATTEMPTS):
            _fill_safe(shuffled, rng, palette)
            if not has_match(shuffled) and has_valid_move(shuffled):
                return shuffled
    raise RuntimeError("Unable to shuffle board without matches and with a valid swap")


def ensure_playable(grid: GridState, rng: RandomSource, color_count: int) -> GridState:
    """Return ``grid`` itself when a move exists, otherwise a reshuffled board."""
    if has_valid_move(grid):
        return grid
    logger.debug("No valid move on %dx%d board; shuffling", grid.rows, grid.cols)
    return shuffle(grid, rng, color_count)
