from mochi.components.grid import GridState, PowerUp
from mochi.components.match_group import MatchGroup
from mochi.systems.match import find_match_groups, merge_groups
from mochi.systems.powerups import blast_area, classify, expand_chain, power_up_for_region, spawn_column


def _straight(length):
    return MatchGroup(cells=tuple((0, c) for c in range(length)), run_length=length, horizontal=True)


def _region(*groups):
    regions = merge_groups(groups)
    assert len(regions) == 1
    return regions[0]


def test_straight_runs_classification():
    assert power_up_for_region(_region(_straight(3))) is PowerUp.NONE
    assert power_up_for_region(_region(_straight(4))) is PowerUp.BOMB
    assert power_up_for_region(_region(_straight(5))) is PowerUp.BOMB
    assert power_up_for_region(_region(_straight(6))) is PowerUp.LINE


def test_l_shape_of_five_is_bomb():
    grid = GridState.from_colors([
        [0, 0, 0],
        [0, 1, 2],
        [0, 2, 1],
    ])
    regions = merge_groups(find_match_groups(grid))
    assert len(regions) == 1
    region = regions[0]
    assert region.is_l_shape
    assert region.total_size == 5
    assert region.max_run_length == 3
    assert power_up_for_region(region) is PowerUp.BOMB


def test_l_shape_of_six_is_line():
    grid = GridState.from_colors([
        [0, 0, 0, 0],
        [0, 1, 2, 1],
        [0, 2, 1, 2],
    ])
    region = merge_groups(find_match_groups(grid))[0]
    assert region.is_l_shape
    assert region.total_size == 6
    assert power_up_for_region(region) is PowerUp.LINE


def test_disjoint_groups_stay_separate():
    grid = GridState.from_colors([
        [0, 0, 0, 1],
        [1, 2, 1, 2],
        [1, 1, 1, 2],
    ])
    regions = merge_groups(find_match_groups(grid))
    assert len(regions) == 2
    assert not any(region.is_l_shape for region in regions)


def test_merge_chains_through_intermediate_group():
    a = MatchGroup(cells=((0, 0), (0, 1), (0, 2)), run_length=3, horizontal=True)
    b = MatchGroup(cells=((2, 0), (2, 1), (2, 2)), run_length=3, horizontal=True)
    bridge = MatchGroup(cells=((0, 2), (1, 2), (2, 2)), run_length=3, horizontal=False)
    regions = merge_groups([a, b, bridge])
    assert len(regions) == 1
    assert regions[0].total_size == 7
    assert regions[0].is_l_shape


def test_spawn_column_prefers_swapped_cell():
    region = _region(_straight(4))
    assert spawn_column(region, ((1, 3), (0, 2))) == 2
    assert spawn_column(region, ((0, 1), (0, 2))) == 1


def test_spawn_column_uses_middle_cell_without_swap():
    region = _region(_straight(5))
    assert spawn_column(region) == 2
    assert spawn_column(region, ((3, 3), (3, 4))) == 2


def test_classify_returns_pending_power_up():
    pending = classify(_region(_straight(4)), ((0, 3), (1, 3)))
    assert pending is not None
    assert pending.kind is PowerUp.BOMB
    assert pending.target_column == 3
    assert classify(_region(_straight(3))) is None


def _plain(rows, cols):
    return GridState.from_colors([[(r * 2 + c) % 3 for c in range(cols)] for r in range(rows)])


def test_bomb_blast_is_clipped_to_board():
    grid = _plain(5, 5)
    assert len(blast_area(grid, (2, 2), PowerUp.BOMB)) == 9
    assert sorted(blast_area(grid, (0, 0), PowerUp.BOMB)) == [(0, 0), (0, 1), (1, 0), (1, 1)]


def test_line_activation_clears_row_and_column():
    grid = _plain(4, 5)
    grid.cells[1][1].power_up = PowerUp.LINE
    destroyed, activated = expand_chain(grid, {(1, 1)})
    assert activated == [((1, 1), PowerUp.LINE)]
    assert destroyed == {(1, c) for c in range(5)} | {(r, 1) for r in range(4)}


def test_chain_reaction_reaches_every_power_up():
    grid = _plain(5, 5)
    grid.cells[0][0].power_up = PowerUp.BOMB
    grid.cells[1][1].power_up = PowerUp.BOMB
    grid.cells[2][2].power_up = PowerUp.LINE
    grid.cells[4][0].power_up = PowerUp.BOMB  # out of reach
    matched = {(0, 0)}
    destroyed, activated = expand_chain(grid, matched)
    assert destroyed >= matched
    assert activated == [
        ((0, 0), PowerUp.BOMB),
        ((1, 1), PowerUp.BOMB),
        ((2, 2), PowerUp.LINE),
    ]
    block = {(r, c) for r in range(3) for c in range(3)}
    assert destroyed == block | {(2, 3), (2, 4), (3, 2), (4, 2)}
    assert (4, 0) not in destroyed


def test_expand_chain_without_power_ups_is_identity():
    grid = _plain(4, 4)
    matched = {(0, 0), (0, 1), (0, 2)}
    destroyed, activated = expand_chain(grid, matched)
    assert destroyed == matched
    assert activated == []
