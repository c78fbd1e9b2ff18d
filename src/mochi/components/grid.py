from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Sequence, Tuple

Position = Tuple[int, int]

# Sentinel color for a cleared cell; only present between destruction and refill.
EMPTY = -1


class PowerUp(Enum):
    NONE = 0
    BOMB = 1
    LINE = 2


@dataclass(slots=True)
class Cell:
    color: int
    power_up: PowerUp = PowerUp.NONE

    @property
    def is_empty(self) -> bool:
        return self.color == EMPTY


@dataclass(slots=True)
class GridState:
    """Row-major board of cells.

    rows/cols are fixed for a session. ``cells[row][col]``; row 0 is the top,
    gravity pulls towards ``rows - 1``.
    """
    rows: int
    cols: int
    cells: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.cells:
            self.cells = [[Cell(EMPTY) for _ in range(self.cols)] for _ in range(self.rows)]

    @classmethod
    def from_colors(cls, colors: Sequence[Sequence[int]], power_ups: dict[Position, PowerUp] | None = None) -> GridState:
        rows = len(colors)
        cols = len(colors[0]) if rows else 0
        cells = [[Cell(int(value)) for value in row] for row in colors]
        grid = cls(rows=rows, cols=cols, cells=cells)
        for (row, col), kind in (power_ups or {}).items():
            grid.cells[row][col].power_up = kind
        return grid

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def color_at(self, row: int, col: int) -> int:
        if not self.in_bounds(row, col):
            return EMPTY
        return self.cells[row][col].color

    def cell(self, pos: Position) -> Cell:
        return self.cells[pos[0]][pos[1]]

    def swap(self, a: Position, b: Position) -> None:
        """Exchange color and power-up of two cells in place."""
        (ar, ac), (br, bc) = a, b
        self.cells[ar][ac], self.cells[br][bc] = self.cells[br][bc], self.cells[ar][ac]

    def clear(self, pos: Position) -> None:
        cell = self.cells[pos[0]][pos[1]]
        cell.color = EMPTY
        cell.power_up = PowerUp.NONE

    def positions(self) -> Iterator[Position]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield (row, col)

    def has_empty(self) -> bool:
        return any(cell.is_empty for row in self.cells for cell in row)

    def copy(self) -> GridState:
        return GridState(
            rows=self.rows,
            cols=self.cols,
            cells=[[Cell(cell.color, cell.power_up) for cell in row] for row in self.cells],
        )
