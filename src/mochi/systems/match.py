from __future__ import annotations

from typing import Iterable, List, Set

from mochi.components.grid import EMPTY, GridState, Position
from mochi.components.match_group import MatchGroup, MergedRegion


def _scan_lines(grid: GridState, horizontal: bool) -> List[MatchGroup]:
    """Emit every run of >= 3 equal, non-empty colors along rows or columns."""
    groups: List[MatchGroup] = []
    outer, inner = (grid.rows, grid.cols) if horizontal else (grid.cols, grid.rows)
    for a in range(outer):
        run: List[Position] = []
        last_color = EMPTY
        for b in range(inner):
            pos = (a, b) if horizontal else (b, a)
            color = grid.cells[pos[0]][pos[1]].color
            if color != EMPTY and color == last_color:
                run.append(pos)
                continue
            if len(run) >= 3:
                groups.append(MatchGroup(cells=tuple(run), run_length=len(run), horizontal=horizontal))
            run = [pos] if color != EMPTY else []
            last_color = color
        if len(run) >= 3:
            groups.append(MatchGroup(cells=tuple(run), run_length=len(run), horizontal=horizontal))
    return groups


def find_match_groups(grid: GridState) -> List[MatchGroup]:
    """Horizontal runs (top to bottom) followed by vertical runs (left to right)."""
    return _scan_lines(grid, horizontal=True) + _scan_lines(grid, horizontal=False)


def find_matches(grid: GridState) -> Set[Position]:
    """Flat set of every cell that belongs to some run of >= 3."""
    matched: Set[Position] = set()
    for group in find_match_groups(grid):
        matched.update(group.cells)
    return matched


def has_match(grid: GridState) -> bool:
    return bool(find_matches(grid))


def _union(first: MergedRegion, second: MergedRegion) -> MergedRegion:
    cells = list(first.cells)
    seen = set(cells)
    for pos in second.cells:
        if pos not in seen:
            cells.append(pos)
            seen.add(pos)
    return MergedRegion(
        cells=tuple(cells),
        max_run_length=max(first.max_run_length, second.max_run_length),
        has_horizontal=first.has_horizontal or second.has_horizontal,
        has_vertical=first.has_vertical or second.has_vertical,
    )


def merge_groups(groups: Iterable[MatchGroup]) -> List[MergedRegion]:
    """Union groups that share a cell into connected regions (L and T shapes).

    Restarts the pair scan after every union; each union removes a region so
    the loop ends after at most len(groups) - 1 merges.
    """
    regions = [
        MergedRegion(
            cells=group.cells,
            max_run_length=group.run_length,
            has_horizontal=group.horizontal,
            has_vertical=not group.horizontal,
        )
        for group in groups
    ]
    merged = True
    while merged:
        merged = False
        for i in range(len(regions)):
            cells_i = regions[i].cell_set
            for j in range(i + 1, len(regions)):
                if cells_i.isdisjoint(regions[j].cells):
                    continue
                regions[i] = _union(regions[i], regions[j])
                del regions[j]
                merged = True
                break
            if merged:
                break
    return regions
