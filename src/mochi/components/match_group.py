from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Tuple

from mochi.components.grid import Position, PowerUp


@dataclass(slots=True, frozen=True)
class MatchGroup:
    """One contiguous run of >= 3 same-colored cells in a single orientation."""
    cells: Tuple[Position, ...]
    run_length: int
    horizontal: bool


@dataclass(slots=True, frozen=True)
class MergedRegion:
    """Union of overlapping match groups.

    ``cells`` keeps first-seen order (scan order of the groups, then merge
    order); power-up spawn selection indexes into it.
    """
    cells: Tuple[Position, ...]
    max_run_length: int
    has_horizontal: bool
    has_vertical: bool

    @property
    def total_size(self) -> int:
        return len(self.cells)

    @property
    def is_l_shape(self) -> bool:
        return self.has_horizontal and self.has_vertical

    @property
    def cell_set(self) -> FrozenSet[Position]:
        return frozenset(self.cells)

    def __contains__(self, pos: object) -> bool:
        return pos in self.cells


@dataclass(slots=True, frozen=True)
class PendingPowerUp:
    kind: PowerUp
    target_column: int
