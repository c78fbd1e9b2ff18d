from dataclasses import dataclass

from mochi.components.grid import GridState


@dataclass(slots=True)
class BoardState:
    """Holds the live GridState for the session entity.

    The grid value is replaced wholesale after every resolved move; systems
    never keep a reference to an old grid.
    """
    grid: GridState
