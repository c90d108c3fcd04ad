"""
卡牌引擎核心

包含卡牌与集合、玩家、生命周期状态机、事件总线和异常定义.
"""

from .cards import Card, CardCollection, Deck, DiscardPile, Hand, fisher_yates_shuffle
from .events import EventBus, GameEvent, GameEventType
from .exceptions import (
    CapacityExceededError,
    CardEngineError,
    GameConfigError,
    InvalidActionError,
    InvalidArgumentError,
    NotFoundError,
    PlayerNotFoundError,
    StateConflictError,
)
from .game import (
    GameConfig,
    GameHooks,
    GameLifecycle,
    GameResult,
    GameState,
    LifecycleFacade,
    Player,
    PlayerResult,
    PlayerStatus,
)
from .result import OperationResult

__all__ = [
    'Card', 'CardCollection', 'Deck', 'DiscardPile', 'Hand', 'fisher_yates_shuffle',
    'EventBus', 'GameEvent', 'GameEventType',
    'CardEngineError', 'StateConflictError', 'NotFoundError', 'PlayerNotFoundError',
    'CapacityExceededError', 'InvalidArgumentError', 'InvalidActionError', 'GameConfigError',
    'GameConfig', 'GameHooks', 'GameLifecycle', 'GameResult', 'GameState',
    'LifecycleFacade', 'Player', 'PlayerResult', 'PlayerStatus',
    'OperationResult',
]
