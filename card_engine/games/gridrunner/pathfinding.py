"""
网格寻路

A*最短路径、BFS可达集合以及基于移动卡的移动合法性判断.
所有函数都是网格上的纯函数，不修改网格.
"""

from collections import deque
from dataclasses import dataclass
import random
from typing import List, Mapping, Optional, Sequence, Set, Tuple

from ...core.cards.shuffle import resolve_rng
from .grid import Grid
from .types import CellType, MovementSpecial, Position

GOAL_POINTS = 100
CHECKPOINT_POINTS = 25


@dataclass
class _PathNode:
    position: Position
    g_cost: int
    h_cost: int
    f_cost: int
    parent: Optional["_PathNode"] = None


def positions_equal(first: Position, second: Position) -> bool:
    return first.q == second.q and first.r == second.r


def _reconstruct_path(node: _PathNode) -> List[Position]:
    path = []
    current: Optional[_PathNode] = node
    while current is not None:
        path.append(current.position)
        current = current.parent
    path.reverse()
    return path


def find_path(grid: Grid, start: Position, end: Position, max_distance: int,
              can_jump: bool = False) -> Optional[List[Position]]:
    """
    A*寻路

    每次取出f值最小的节点，f相同时按进入开放列表的顺序. 已关闭的格子不再访问；
    不能跳跃时跳过不可通行的格子；g值达到max_distance的节点不再展开.

    Args:
        grid: 网格
        start: 起点
        end: 终点
        max_distance: 最大步数
        can_jump: 是否可以经过不可通行的格子

    Returns:
        Optional[List[Position]]: 从start到end(含两端)的路径，
        端点越界或在限制内不可达时返回None，不返回部分路径
    """
    if not grid.is_valid_position(start) or not grid.is_valid_position(end):
        return None

    if positions_equal(start, end):
        return [start]

    start_h = grid.get_distance(start, end)
    open_list: List[_PathNode] = [_PathNode(start, 0, start_h, start_h)]
    closed: Set[Position] = set()

    while open_list:
        # 稳定排序，f相同的节点保持原有顺序
        open_list.sort(key=lambda node: node.f_cost)
        current = open_list.pop(0)

        if positions_equal(current.position, end):
            return _reconstruct_path(current)

        closed.add(current.position)

        if current.g_cost >= max_distance:
            continue

        for neighbor in grid.get_neighbors(current.position):
            if neighbor in closed:
                continue

            if not can_jump and not grid.is_walkable(neighbor):
                continue

            g_cost = current.g_cost + 1
            h_cost = grid.get_distance(neighbor, end)
            f_cost = g_cost + h_cost

            existing = next((node for node in open_list if positions_equal(node.position, neighbor)), None)
            if existing is not None:
                if g_cost < existing.g_cost:
                    existing.g_cost = g_cost
                    existing.f_cost = f_cost
                    existing.parent = current
            else:
                open_list.append(_PathNode(neighbor, g_cost, h_cost, f_cost, current))

    return None


def get_reachable_positions(grid: Grid, start: Position, max_distance: int,
                            can_jump: bool = False) -> List[Position]:
    """
    BFS求max_distance步以内可到达的所有坐标

    Returns:
        List[Position]: 按BFS顺序，不包含start，每个坐标只出现一次
    """
    reachable: List[Position] = []
    visited: Set[Position] = {start}
    queue = deque([(start, 0)])

    while queue:
        position, distance = queue.popleft()

        if distance > 0:
            reachable.append(position)

        if distance >= max_distance:
            continue

        for neighbor in grid.get_neighbors(position):
            if neighbor in visited:
                continue
            if not can_jump and not grid.is_walkable(neighbor):
                continue
            visited.add(neighbor)
            queue.append((neighbor, distance + 1))

    return reachable


def _special_of(card: Mapping) -> Optional[MovementSpecial]:
    special = card.get('special')
    if special is None or isinstance(special, MovementSpecial):
        return special
    return MovementSpecial(special)


def is_valid_move(grid: Grid, start: Position, end: Position, card: Mapping) -> bool:
    """
    判断使用移动卡从start移动到end是否合法

    两点都在范围内、终点可通行、距离不超过卡牌距离. TELEPORT不需要路径；
    JUMP需要存在可跳跃的路径；其他卡需要存在只经过可通行格子的路径.

    Args:
        grid: 网格
        start: 当前位置
        end: 目标位置
        card: 移动卡属性(至少包含distance，可选special)
    """
    if not grid.is_valid_position(start) or not grid.is_valid_position(end):
        return False

    if not grid.is_walkable(end):
        return False

    card_distance = card['distance']
    if grid.get_distance(start, end) > card_distance:
        return False

    special = _special_of(card)
    if special == MovementSpecial.TELEPORT:
        return True

    can_jump = special == MovementSpecial.JUMP
    return find_path(grid, start, end, card_distance, can_jump) is not None


def calculate_position_score(grid: Grid, position: Position) -> int:
    """终点100分，检查点25分，其他格子0分"""
    cell = grid.get_cell(position)
    if cell is None:
        return 0
    if cell.cell_type == CellType.GOAL:
        return GOAL_POINTS
    if cell.cell_type == CellType.CHECKPOINT:
        return CHECKPOINT_POINTS
    return 0


def get_closest_position(grid: Grid, start: Position,
                         targets: Sequence[Position]) -> Optional[Tuple[Position, int]]:
    """
    离start最近的目标

    Returns:
        Optional[Tuple[Position, int]]: (目标, 距离)，距离相同取先出现的，targets为空时返回None
    """
    closest: Optional[Tuple[Position, int]] = None
    for target in targets:
        distance = grid.get_distance(start, target)
        if closest is None or distance < closest[1]:
            closest = (target, distance)
    return closest


def get_random_position(grid: Grid, must_be_walkable: bool = True,
                        rng: Optional[random.Random] = None) -> Optional[Position]:
    """随机选取一个格子的坐标，没有候选格子时返回None"""
    cells = grid.get_all_cells()
    if must_be_walkable:
        cells = [cell for cell in cells if grid.is_walkable(cell.position)]
    if not cells:
        return None
    return resolve_rng(rng).choice(cells).position
