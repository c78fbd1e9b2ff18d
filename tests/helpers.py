from __future__ import annotations

from typing import Sequence

from mochi.components.grid import GridState, PowerUp


class ScriptedRandom:
    """RandomSource that replays a fixed list of values (reduced modulo n), cycling."""

    def __init__(self, values: Sequence[int]):
        self.values = list(values) or [0]
        self.calls = 0

    def next_int(self, n: int) -> int:
        value = self.values[self.calls % len(self.values)] % n
        self.calls += 1
        return value


def stalemate_grid(rows: int = 5, cols: int = 5) -> GridState:
    """Diagonal three-color pattern: no matches and no swap that creates one."""
    return GridState.from_colors([[(r + c) % 3 for c in range(cols)] for r in range(rows)])


# Swapping (1,2) and (2,2) turns row 2 into a run of four zeros at columns 0-3.
FOUR_RUN_ROWS = [
    [1, 2, 1, 2, 1],
    [2, 1, 0, 2, 2],
    [0, 0, 1, 0, 2],
    [1, 2, 2, 1, 1],
    [2, 1, 1, 2, 2],
]


def four_run_grid(power_ups: dict[tuple[int, int], PowerUp] | None = None) -> GridState:
    return GridState.from_colors(FOUR_RUN_ROWS, power_ups)


# Swapping (2,2) and (2,3) yields a horizontal run at row 2 (cols 0-2)
# and a separate vertical run at column 3 (rows 1-3).
TWO_RUN_ROWS = [
    [1, 2, 0, 1, 2],
    [2, 1, 1, 2, 0],
    [0, 0, 2, 0, 1],
    [1, 2, 1, 2, 2],
    [2, 1, 2, 1, 0],
]
