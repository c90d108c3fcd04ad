"""
游戏生命周期相关的类型定义
包含游戏状态、玩家状态、通用配置和结算结果
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
import random
from typing import Any, Dict, List, Optional

from ..exceptions import GameConfigError


class GameState(Enum):
    """游戏状态. PLAYING与PAUSED之间是唯一的循环"""
    SETUP = "SETUP"
    READY = "READY"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    ENDED = "ENDED"


class PlayerStatus(Enum):
    """玩家状态"""
    ACTIVE = "ACTIVE"
    WAITING = "WAITING"
    FOLDED = "FOLDED"
    DISCONNECTED = "DISCONNECTED"


@dataclass
class GameConfig:
    """
    通用游戏配置

    具体游戏的配置继承此类并追加各自的字段.
    """
    min_players: int = 1               # 最小玩家数
    max_players: int = 8               # 最大玩家数
    random_seed: Optional[int] = None  # 随机种子，用于可重现的游戏

    def __post_init__(self):
        """验证配置的有效性"""
        if self.min_players < 1:
            raise GameConfigError(f"最小玩家数必须至少为1: {self.min_players}")

        if self.max_players < self.min_players:
            raise GameConfigError(
                f"最大玩家数({self.max_players})不能小于最小玩家数({self.min_players})"
            )

    def create_rng(self) -> random.Random:
        """
        根据random_seed创建随机数生成器

        Returns:
            random.Random: 设置了种子时结果可重现
        """
        return random.Random(self.random_seed)


@dataclass
class PlayerResult:
    """单个玩家的结算结果"""
    player_id: str
    score: int
    winner: bool = False


@dataclass
class GameResult:
    """整局游戏的结算结果"""
    game_id: str
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    players: List[PlayerResult] = field(default_factory=list)

    @property
    def winners(self) -> List[PlayerResult]:
        """获胜者列表"""
        return [p for p in self.players if p.winner]

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            'game_id': self.game_id,
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'end_time': self.end_time.isoformat() if self.end_time else None,
            'players': [
                {'player_id': p.player_id, 'score': p.score, 'winner': p.winner}
                for p in self.players
            ],
        }
