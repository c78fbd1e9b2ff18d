from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Tuple

from mochi.components.grid import GridState, Position, PowerUp
from mochi.components.match_group import MergedRegion, PendingPowerUp


class MoveStatus(Enum):
    RESOLVED = "resolved"
    REVERTED = "reverted"   # legal swap that produced no match; swapped back
    INVALID = "invalid"     # non-adjacent or out-of-bounds request; nothing touched


@dataclass(slots=True)
class FillResult:
    """Board after collapse/refill plus presentation metadata.

    source_rows maps each destination cell to the row it fell from; spawned
    cells carry negative rows (-1 is directly above the board).
    """
    grid: GridState
    source_rows: Dict[Position, int]
    spawned: Tuple[Position, ...]


@dataclass(slots=True, frozen=True)
class ResolutionStep:
    """Effects of one cascade round, in the order a renderer should play them."""
    chain: int
    matched: FrozenSet[Position]
    regions: Tuple[MergedRegion, ...]
    activated: Tuple[Tuple[Position, PowerUp], ...]
    destroyed: FrozenSet[Position]
    score_delta: int
    pending_power_ups: Tuple[PendingPowerUp, ...]
    board: GridState
    source_rows: Dict[Position, int] = field(default_factory=dict)
    spawned: Tuple[Position, ...] = ()

    def activated_kinds(self) -> FrozenSet[PowerUp]:
        return frozenset(kind for _, kind in self.activated)


@dataclass(slots=True)
class MoveResult:
    status: MoveStatus
    final_board: GridState
    steps: Tuple[ResolutionStep, ...] = ()
    total_score_delta: int = 0

    @property
    def reverted(self) -> bool:
        return self.status is MoveStatus.REVERTED

    @property
    def chain(self) -> int:
        return self.steps[-1].chain if self.steps else 0
