import math

from mochi.constants import CHAIN_BONUS, POINTS_PER_CELL


def calc_score(destroyed_count: int, chain: int) -> int:
    """Points for one cascade round; every chain step past the first adds half the base again."""
    base = destroyed_count * POINTS_PER_CELL
    # round half up so totals match across platforms
    return int(math.floor(base * (1 + (chain - 1) * CHAIN_BONUS) + 0.5))
