from dataclasses import dataclass

@dataclass(slots=True)
class Board:
    rows: int
    cols: int
    color_count: int
