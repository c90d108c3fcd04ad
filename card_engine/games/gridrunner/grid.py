"""
网格拓扑

Grid为方格和六边形网格的公共基类，保存以Position为键的格子表.
具体变体只有SquareGrid和HexGrid两种，由create_grid按GridType选择.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from .types import CellType, Direction, GridCell, GridType, Position, SquareDirection

# 顺序即邻居的枚举顺序，会影响寻路时的平局顺序
SQUARE_ORTHOGONAL_OFFSETS: List[Tuple[SquareDirection, int, int]] = [
    (SquareDirection.NORTH, 0, -1),
    (SquareDirection.SOUTH, 0, 1),
    (SquareDirection.EAST, 1, 0),
    (SquareDirection.WEST, -1, 0),
]

SQUARE_DIAGONAL_OFFSETS: List[Tuple[SquareDirection, int, int]] = [
    (SquareDirection.NORTHEAST, 1, -1),
    (SquareDirection.NORTHWEST, -1, -1),
    (SquareDirection.SOUTHEAST, 1, 1),
    (SquareDirection.SOUTHWEST, -1, 1),
]


class Grid(ABC):
    """
    网格基类

    Invariant:
        每个格子最多一个占据者；格子可通行当且仅当不是BLOCKED且未被占据.
    """

    def __init__(self, width: int, height: int):
        self._width = width
        self._height = height
        self._cells: Dict[Position, GridCell] = {}
        for r in range(height):
            for q in range(width):
                position = Position(q, r)
                self._cells[position] = GridCell(position)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def dimensions(self) -> Tuple[int, int]:
        """(宽, 高)"""
        return self._width, self._height

    def is_valid_position(self, position: Position) -> bool:
        """坐标是否在网格范围内"""
        return 0 <= position.q < self._width and 0 <= position.r < self._height

    @abstractmethod
    def get_neighbors(self, position: Position) -> List[Position]:
        """范围内的相邻坐标"""

    @abstractmethod
    def get_distance(self, start: Position, end: Position) -> int:
        """两点之间的步数距离，与邻居模型一致"""

    @abstractmethod
    def get_direction(self, start: Position, end: Position) -> Optional[Direction]:
        """相邻两点之间的方向，不相邻时返回None"""

    @abstractmethod
    def get_position_in_direction(self, start: Position, direction: Direction) -> Optional[Position]:
        """沿方向走一步的坐标，越界或方向不可用时返回None"""

    def get_cell(self, position: Position) -> Optional[GridCell]:
        return self._cells.get(position)

    def set_cell(self, position: Position, cell: GridCell) -> None:
        self._cells[position] = cell

    def set_cell_type(self, position: Position, cell_type: CellType) -> None:
        """设置格子类型，坐标不存在时不做任何操作"""
        cell = self.get_cell(position)
        if cell is not None:
            cell.cell_type = cell_type

    def is_walkable(self, position: Position) -> bool:
        """不是BLOCKED且未被占据"""
        cell = self.get_cell(position)
        if cell is None:
            return False
        return cell.cell_type != CellType.BLOCKED and not cell.is_occupied

    def occupy_cell(self, position: Position, player_id: str) -> bool:
        """
        玩家占据格子

        Returns:
            bool: 格子不存在或已被占据时返回False
        """
        cell = self.get_cell(position)
        if cell is None or cell.is_occupied:
            return False
        cell.occupied_by = player_id
        return True

    def free_cell(self, position: Position) -> None:
        cell = self.get_cell(position)
        if cell is not None:
            cell.occupied_by = None

    def get_cells_by_type(self, cell_type: CellType) -> List[GridCell]:
        return [cell for cell in self._cells.values() if cell.cell_type == cell_type]

    def get_all_cells(self) -> List[GridCell]:
        return list(self._cells.values())

    def clear_occupations(self) -> None:
        for cell in self._cells.values():
            cell.occupied_by = None


class SquareGrid(Grid):
    """
    方格

    不允许斜向时为4邻居+曼哈顿距离，允许斜向时为8邻居+切比雪夫距离.
    """

    def __init__(self, width: int, height: int, allow_diagonal: bool = False):
        super().__init__(width, height)
        self._allow_diagonal = allow_diagonal

    @property
    def allow_diagonal(self) -> bool:
        return self._allow_diagonal

    def _offsets(self) -> List[Tuple[SquareDirection, int, int]]:
        if self._allow_diagonal:
            return SQUARE_ORTHOGONAL_OFFSETS + SQUARE_DIAGONAL_OFFSETS
        return SQUARE_ORTHOGONAL_OFFSETS

    def get_neighbors(self, position: Position) -> List[Position]:
        neighbors = []
        for _, dq, dr in self._offsets():
            neighbor = Position(position.q + dq, position.r + dr)
            if self.is_valid_position(neighbor):
                neighbors.append(neighbor)
        return neighbors

    def get_distance(self, start: Position, end: Position) -> int:
        dq = abs(end.q - start.q)
        dr = abs(end.r - start.r)
        if self._allow_diagonal:
            return max(dq, dr)
        return dq + dr

    def get_direction(self, start: Position, end: Position) -> Optional[SquareDirection]:
        delta = (end.q - start.q, end.r - start.r)
        for direction, dq, dr in self._offsets():
            if delta == (dq, dr):
                return direction
        return None

    def get_position_in_direction(self, start: Position,
                                  direction: SquareDirection) -> Optional[Position]:
        for candidate, dq, dr in self._offsets():
            if candidate == direction:
                position = Position(start.q + dq, start.r + dr)
                return position if self.is_valid_position(position) else None
        return None


def create_grid(grid_type: GridType, width: int, height: int,
                allow_diagonal: bool = False) -> Grid:
    """
    按类型创建网格

    Args:
        grid_type: SQUARE或HEXAGONAL
        width: 宽
        height: 高
        allow_diagonal: 方格是否允许斜向移动，对六边形网格无效

    Returns:
        Grid: 新网格，所有格子为EMPTY
    """
    if grid_type == GridType.HEXAGONAL:
        from .hex_grid import HexGrid
        return HexGrid(width, height)
    return SquareGrid(width, height, allow_diagonal)
