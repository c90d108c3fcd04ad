"""
Game Module - 玩家与游戏生命周期

Classes:
    Player: 玩家
    GameLifecycle: 通用生命周期状态机
    GameHooks: 具体游戏实现的回调协议
    LifecycleFacade: 把生命周期接口暴露到游戏对象上的mixin
"""

from .facade import LifecycleFacade
from .lifecycle import GameHooks, GameLifecycle
from .player import Player
from .types import GameConfig, GameResult, GameState, PlayerResult, PlayerStatus

__all__ = [
    "Player",
    "GameLifecycle",
    "GameHooks",
    "LifecycleFacade",
    "GameConfig",
    "GameResult",
    "GameState",
    "PlayerResult",
    "PlayerStatus",
]
