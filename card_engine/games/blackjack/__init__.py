"""
21点游戏

Classes:
    BlackjackGame: 游戏
    BlackjackConfig: 配置

Functions:
    calculate_hand_score, should_dealer_hit, compare_hands 等计分规则
"""

from .game import BlackjackGame
from .scoring import (
    calculate_hand_score,
    can_double,
    can_split,
    card_value,
    compare_hands,
    format_hand_score,
    should_dealer_hit,
)
from .types import (
    BlackjackAction,
    BlackjackConfig,
    BlackjackPlayerState,
    HandResult,
    HandScore,
)

__all__ = [
    "BlackjackGame",
    "BlackjackConfig",
    "BlackjackAction",
    "BlackjackPlayerState",
    "HandResult",
    "HandScore",
    "calculate_hand_score",
    "can_double",
    "can_split",
    "card_value",
    "compare_hands",
    "format_hand_score",
    "should_dealer_hit",
]
