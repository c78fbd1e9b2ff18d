"""Per-game session resource: score, player identity and cascade progress."""
from dataclasses import dataclass
from enum import Enum, auto

from mochi.constants import DEFAULT_PLAYER_NAME


class CascadePhase(Enum):
    IDLE = auto()
    RESOLVING = auto()
    DESTROYING = auto()
    COLLAPSING = auto()


@dataclass(slots=True)
class Session:
    player_name: str = DEFAULT_PLAYER_NAME
    score: int = 0
    active: bool = True
    phase: CascadePhase = CascadePhase.IDLE
    cascade_depth: int = 0
    moves: int = 0

    @property
    def busy(self) -> bool:
        return self.phase is not CascadePhase.IDLE
