"""
GridRunner类型定义
包含网格坐标、格子、移动卡属性、玩家扩展状态、配置和移动结果
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ...core.exceptions import GameConfigError
from ...core.game.types import GameConfig
from ...core.result import OperationResult


class GridType(Enum):
    """网格拓扑"""
    SQUARE = "SQUARE"
    HEXAGONAL = "HEXAGONAL"


class SquareDirection(Enum):
    """方格方向，后四个为斜向"""
    NORTH = "NORTH"
    SOUTH = "SOUTH"
    EAST = "EAST"
    WEST = "WEST"
    NORTHEAST = "NORTHEAST"
    NORTHWEST = "NORTHWEST"
    SOUTHEAST = "SOUTHEAST"
    SOUTHWEST = "SOUTHWEST"


class HexDirection(Enum):
    """六边形方向(尖顶朝上)"""
    EAST = "EAST"
    WEST = "WEST"
    NORTHEAST = "NORTHEAST"
    NORTHWEST = "NORTHWEST"
    SOUTHEAST = "SOUTHEAST"
    SOUTHWEST = "SOUTHWEST"


Direction = Union[SquareDirection, HexDirection]


@dataclass(frozen=True)
class Position:
    """
    网格坐标

    方格中q为列、r为行；六边形网格中为轴向坐标(q, r).
    """
    q: int
    r: int

    def __str__(self) -> str:
        return f"({self.q}, {self.r})"


class CellType(Enum):
    """格子类型"""
    EMPTY = "EMPTY"
    BLOCKED = "BLOCKED"
    START = "START"
    GOAL = "GOAL"
    CHECKPOINT = "CHECKPOINT"


@dataclass
class GridCell:
    """
    网格中的一个格子

    每个格子最多被一名玩家占据.
    """
    position: Position
    cell_type: CellType = CellType.EMPTY
    occupied_by: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_occupied(self) -> bool:
        return self.occupied_by is not None


class MovementSpecial(Enum):
    """移动卡的特殊能力"""
    JUMP = "JUMP"              # 可以越过阻挡格
    TELEPORT = "TELEPORT"      # 不需要连通路径
    DIAGONAL = "DIAGONAL"      # 方格中可斜向移动
    MULTI_TURN = "MULTI_TURN"  # 每一步可以换方向


# 移动卡的属性键
MOVEMENT_CARD_TYPE = "movement"


@dataclass
class GridPlayerState:
    """玩家在GridRunner中的扩展状态"""
    position: Position
    checkpoints_reached: List[int] = field(default_factory=list)


class GridGamePhase(Enum):
    """GridRunner阶段"""
    SETUP = "SETUP"
    PLAYING = "PLAYING"
    ENDED = "ENDED"


@dataclass
class GridGameConfig(GameConfig):
    """
    GridRunner配置

    起点、终点、阻挡格和检查点必须都在网格范围内.
    """
    min_players: int = 1
    max_players: int = 4
    grid_type: GridType = GridType.SQUARE
    width: int = 10
    height: int = 10
    allow_diagonal_movement: bool = False   # 仅对方格有效
    start_positions: List[Position] = field(default_factory=lambda: [Position(0, 0)])
    goal_positions: List[Position] = field(default_factory=lambda: [Position(9, 9)])
    blocked_cells: List[Position] = field(default_factory=list)
    checkpoints: List[Position] = field(default_factory=list)
    deck_size: int = 40
    hand_size: int = 5

    def __post_init__(self):
        """验证配置的有效性"""
        super().__post_init__()

        if self.width < 1 or self.height < 1:
            raise GameConfigError(f"网格尺寸必须大于0: {self.width}x{self.height}")

        if not self.start_positions:
            raise GameConfigError("至少需要一个起点")

        if not self.goal_positions:
            raise GameConfigError("至少需要一个终点")

        if self.deck_size < 0:
            raise GameConfigError(f"牌组大小不能为负数: {self.deck_size}")

        if self.hand_size < 0:
            raise GameConfigError(f"手牌数不能为负数: {self.hand_size}")

        for name in ("start_positions", "goal_positions", "blocked_cells", "checkpoints"):
            for position in getattr(self, name):
                if not self.contains(position):
                    raise GameConfigError(f"{name}中的坐标{position}超出网格范围")

    def contains(self, position: Position) -> bool:
        """坐标是否在配置的矩形范围内"""
        return 0 <= position.q < self.width and 0 <= position.r < self.height


@dataclass
class MoveResult(OperationResult):
    """
    play_card的结果

    被拒绝的移动返回success=False和原因，不修改任何状态.
    """
    start_position: Optional[Position] = None
    end_position: Optional[Position] = None
    path: List[Position] = field(default_factory=list)
    cells_reached: List[GridCell] = field(default_factory=list)

    @staticmethod
    def rejected(message: str, start_position: Optional[Position] = None,
                 end_position: Optional[Position] = None) -> 'MoveResult':
        """创建一个表示拒绝的实例"""
        return MoveResult.failure_result(message, start_position=start_position,
                                         end_position=end_position)

    @staticmethod
    def moved(start_position: Position, end_position: Position, path: List[Position],
              cells_reached: List[GridCell]) -> 'MoveResult':
        """创建一个表示移动成功的实例"""
        return MoveResult.success_result(message="Move successful",
                                         start_position=start_position, end_position=end_position,
                                         path=path, cells_reached=cells_reached)
