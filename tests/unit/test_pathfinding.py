"""
寻路与移动判断单元测试.
"""

import random

import pytest

from card_engine.games.gridrunner import (
    CellType,
    HexGrid,
    MovementSpecial,
    Position,
    SquareGrid,
    calculate_position_score,
    find_path,
    get_closest_position,
    get_random_position,
    get_reachable_positions,
    is_valid_move,
    positions_equal,
)


def _walled_grid():
    """3x3方格，中间一列除底部外都被阻挡"""
    grid = SquareGrid(3, 3)
    grid.set_cell_type(Position(1, 0), CellType.BLOCKED)
    grid.set_cell_type(Position(1, 1), CellType.BLOCKED)
    return grid


def _split_grid():
    """3x3方格，中间一列全部被阻挡"""
    grid = _walled_grid()
    grid.set_cell_type(Position(1, 2), CellType.BLOCKED)
    return grid


@pytest.mark.unit
@pytest.mark.fast
class TestFindPath:
    """A*寻路测试类."""

    def test_same_position(self):
        """测试起点等于终点."""
        assert find_path(SquareGrid(3, 3), Position(1, 1), Position(1, 1), 0) == [Position(1, 1)]

    def test_out_of_bounds(self):
        """测试端点越界返回None."""
        assert find_path(SquareGrid(3, 3), Position(0, 0), Position(5, 5), 10) is None

    def test_straight_path(self):
        """测试直线路径."""
        path = find_path(SquareGrid(5, 5), Position(0, 0), Position(3, 0), 3)
        assert path == [Position(0, 0), Position(1, 0), Position(2, 0), Position(3, 0)]

    def test_detour_around_wall(self):
        """测试绕过阻挡格."""
        path = find_path(_walled_grid(), Position(0, 0), Position(2, 0), 10)
        assert path is not None
        assert len(path) == 7
        assert path[0] == Position(0, 0)
        assert path[-1] == Position(2, 0)
        assert Position(1, 2) in path

    def test_distance_limit(self):
        """测试超出步数限制时不返回部分路径."""
        assert find_path(_walled_grid(), Position(0, 0), Position(2, 0), 5) is None

    def test_jump_over_wall(self):
        """测试跳跃可以经过阻挡格."""
        path = find_path(_split_grid(), Position(0, 0), Position(2, 0), 2, can_jump=True)
        assert path == [Position(0, 0), Position(1, 0), Position(2, 0)]
        assert find_path(_split_grid(), Position(0, 0), Position(2, 0), 10) is None

    def test_path_on_hex_grid(self):
        """测试六边形网格上的路径."""
        path = find_path(HexGrid(5, 5), Position(0, 2), Position(2, 0), 2)
        assert path == [Position(0, 2), Position(1, 1), Position(2, 0)]


@pytest.mark.unit
@pytest.mark.fast
class TestReachablePositions:
    """BFS可达集合测试类."""

    def test_distance_one(self):
        """测试一步可达."""
        reachable = get_reachable_positions(SquareGrid(3, 3), Position(0, 0), 1)
        assert reachable == [Position(0, 1), Position(1, 0)]

    def test_zero_distance(self):
        """测试0步没有可达位置."""
        assert get_reachable_positions(SquareGrid(3, 3), Position(0, 0), 0) == []

    def test_excludes_start_and_unique(self):
        """测试不包含起点且没有重复."""
        reachable = get_reachable_positions(SquareGrid(3, 3), Position(1, 1), 4)
        assert Position(1, 1) not in reachable
        assert len(reachable) == len(set(reachable)) == 8

    def test_respects_blocked(self):
        """测试不经过阻挡格，跳跃时可以."""
        grid = _split_grid()
        reachable = get_reachable_positions(grid, Position(0, 0), 4)
        assert all(p.q == 0 for p in reachable)
        jumped = get_reachable_positions(grid, Position(0, 0), 2, can_jump=True)
        assert Position(2, 0) in jumped


@pytest.mark.unit
@pytest.mark.fast
class TestIsValidMove:
    """移动合法性测试类."""

    def test_basic_move(self):
        """测试普通移动."""
        grid = SquareGrid(5, 5)
        card = {'distance': 2}
        assert is_valid_move(grid, Position(0, 0), Position(1, 1), card)
        assert not is_valid_move(grid, Position(0, 0), Position(2, 1), card)
        assert not is_valid_move(grid, Position(0, 0), Position(7, 0), card)

    def test_target_must_be_walkable(self):
        """测试目标格必须可通行."""
        grid = SquareGrid(5, 5)
        grid.occupy_cell(Position(1, 0), "p2")
        assert not is_valid_move(grid, Position(0, 0), Position(1, 0), {'distance': 1})
        grid.set_cell_type(Position(0, 1), CellType.BLOCKED)
        assert not is_valid_move(grid, Position(0, 0), Position(0, 1), {'distance': 1})

    def test_special_cards(self):
        """测试JUMP和TELEPORT."""
        grid = _split_grid()
        start, end = Position(0, 0), Position(2, 0)

        assert not is_valid_move(grid, start, end, {'distance': 2})
        assert is_valid_move(grid, start, end, {'distance': 2, 'special': MovementSpecial.JUMP})
        assert is_valid_move(grid, start, end, {'distance': 3, 'special': MovementSpecial.TELEPORT})
        assert is_valid_move(grid, start, end, {'distance': 2, 'special': "JUMP"})

    def test_teleport_still_limited_by_distance(self):
        """测试传送仍受距离限制."""
        grid = SquareGrid(5, 5)
        card = {'distance': 3, 'special': MovementSpecial.TELEPORT}
        assert not is_valid_move(grid, Position(0, 0), Position(4, 4), card)


@pytest.mark.unit
@pytest.mark.fast
class TestPositionHelpers:
    """坐标工具函数测试类."""

    def test_positions_equal(self):
        """测试坐标比较."""
        assert positions_equal(Position(1, 2), Position(1, 2))
        assert not positions_equal(Position(1, 2), Position(2, 1))

    def test_position_score(self):
        """测试格子分值."""
        grid = SquareGrid(3, 3)
        grid.set_cell_type(Position(2, 2), CellType.GOAL)
        grid.set_cell_type(Position(1, 1), CellType.CHECKPOINT)
        assert calculate_position_score(grid, Position(2, 2)) == 100
        assert calculate_position_score(grid, Position(1, 1)) == 25
        assert calculate_position_score(grid, Position(0, 0)) == 0
        assert calculate_position_score(grid, Position(8, 8)) == 0

    def test_closest_position(self):
        """测试最近目标，距离相同取先出现的."""
        grid = SquareGrid(5, 5)
        targets = [Position(4, 4), Position(0, 2), Position(2, 0)]
        assert get_closest_position(grid, Position(0, 0), targets) == (Position(0, 2), 2)
        assert get_closest_position(grid, Position(0, 0), []) is None

    def test_random_position(self):
        """测试随机位置."""
        grid = SquareGrid(2, 1)
        grid.set_cell_type(Position(0, 0), CellType.BLOCKED)
        assert get_random_position(grid, rng=random.Random(1)) == Position(1, 0)

        grid.set_cell_type(Position(1, 0), CellType.BLOCKED)
        assert get_random_position(grid) is None
        assert get_random_position(grid, must_be_walkable=False) is not None
