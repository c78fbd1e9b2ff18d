from __future__ import annotations

import random
from typing import Protocol, Sequence, TypeVar

T = TypeVar("T")


class RandomSource(Protocol):
    """Uniform integer generator used for every random decision on the board."""

    def next_int(self, n: int) -> int:
        ...


class SeededRandom:
    """RandomSource backed by ``random.Random`` so sessions can be replayed from a seed."""

    def __init__(self, seed: int | None = None, *, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random(seed)

    def next_int(self, n: int) -> int:
        if n <= 0:
            raise ValueError("next_int requires a positive bound")
        return self._rng.randrange(n)


def pick(rng: RandomSource, choices: Sequence[T]) -> T:
    return choices[rng.next_int(len(choices))]
