"""
21点相关类型定义
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...core.exceptions import GameConfigError
from ...core.game.types import GameConfig


class BlackjackAction(Enum):
    """玩家行动"""
    HIT = "HIT"
    STAND = "STAND"
    DOUBLE = "DOUBLE"
    SPLIT = "SPLIT"


class HandResult(Enum):
    """一手牌的结算结果"""
    WIN = "WIN"
    LOSE = "LOSE"
    PUSH = "PUSH"
    BLACKJACK = "BLACKJACK"
    BUST = "BUST"
    IN_PROGRESS = "IN_PROGRESS"


@dataclass(frozen=True)
class HandScore:
    """
    手牌点数

    每次查询都从手牌重新计算，不缓存.
    """
    value: int
    is_soft: bool = False       # 有一张A按11计
    is_bust: bool = False       # 超过21点
    is_blackjack: bool = False  # 恰好两张牌且为21点


@dataclass
class BlackjackConfig(GameConfig):
    """
    21点配置
    """
    min_players: int = 1
    max_players: int = 7
    num_decks: int = 6                     # 牌靴中的整副牌数
    dealer_stands_on_soft17: bool = True   # 庄家软17停牌
    blackjack_payout: float = 1.5          # Blackjack赔率

    def __post_init__(self):
        """验证配置的有效性"""
        super().__post_init__()

        if self.num_decks < 1:
            raise GameConfigError(f"牌副数必须至少为1: {self.num_decks}")

        if self.blackjack_payout <= 0:
            raise GameConfigError(f"Blackjack赔率必须大于0: {self.blackjack_payout}")


@dataclass
class BlackjackPlayerState:
    """玩家在21点中的扩展状态"""
    last_result: Optional[HandResult] = None
    last_hand_value: Optional[int] = None
