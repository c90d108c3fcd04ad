"""
GridRunner - 网格移动卡牌游戏

Classes:
    GridGame: 游戏
    SquareGrid / HexGrid: 两种网格拓扑

Functions:
    create_grid: 按GridType创建网格
    find_path / get_reachable_positions / is_valid_move: 寻路与移动判断
    create_standard_deck / create_directional_deck / create_custom_deck: 牌组生成
"""

from .deck_builder import (
    create_custom_deck,
    create_directional_deck,
    create_movement_card,
    create_standard_deck,
)
from .game import GridGame
from .grid import Grid, SquareGrid, create_grid
from .hex_grid import HexGrid
from .pathfinding import (
    calculate_position_score,
    find_path,
    get_closest_position,
    get_random_position,
    get_reachable_positions,
    is_valid_move,
    positions_equal,
)
from .types import (
    CellType,
    GridCell,
    GridGameConfig,
    GridGamePhase,
    GridPlayerState,
    GridType,
    HexDirection,
    MoveResult,
    MovementSpecial,
    Position,
    SquareDirection,
)

__all__ = [
    "GridGame",
    "Grid",
    "SquareGrid",
    "HexGrid",
    "create_grid",
    "find_path",
    "get_reachable_positions",
    "is_valid_move",
    "positions_equal",
    "calculate_position_score",
    "get_closest_position",
    "get_random_position",
    "create_movement_card",
    "create_standard_deck",
    "create_directional_deck",
    "create_custom_deck",
    "CellType",
    "GridCell",
    "GridGameConfig",
    "GridGamePhase",
    "GridPlayerState",
    "GridType",
    "HexDirection",
    "MoveResult",
    "MovementSpecial",
    "Position",
    "SquareDirection",
]
