from dataclasses import dataclass, field
from typing import List, Optional

from mochi.constants import LEADERBOARD_SIZE


@dataclass(slots=True, frozen=True)
class LeaderboardEntry:
    name: str
    score: int


@dataclass(slots=True)
class Leaderboard:
    """Top scores for the running process, best first.

    Storage beyond the process lifetime belongs to whoever listens for the
    game-over event; this component only ranks.
    """
    size: int = LEADERBOARD_SIZE
    entries: List[LeaderboardEntry] = field(default_factory=list)

    def submit(self, name: str, score: int) -> Optional[int]:
        """Record a result and return its 1-based rank, or None if it did not place."""
        new = LeaderboardEntry(name=name, score=score)
        self.entries.append(new)
        # sorted() is stable, so earlier submissions win ties
        self.entries = sorted(self.entries, key=lambda entry: -entry.score)[: self.size]
        for index, entry in enumerate(self.entries):
            if entry is new:
                return index + 1
        return None
