"""
卡牌引擎业务异常定义

硬错误(状态/前置条件违反)在任何修改之前抛出，按种类区分，
以便调用方的界面可以分别处理(重新渲染 vs. 提示消息)。
软失败(集合越界、空牌组、无效移动)不使用异常，而是返回None或失败结果。
"""


class CardEngineError(Exception):
    """卡牌引擎基础异常类"""
    pass


class StateConflictError(CardEngineError):
    """生命周期状态冲突异常(在错误的状态下尝试转换或行动)"""
    pass


class NotFoundError(CardEngineError):
    """查找对象不存在异常"""
    pass


class PlayerNotFoundError(NotFoundError):
    """玩家不存在异常"""

    def __init__(self, player_id: str):
        super().__init__(f"Player {player_id} not found")
        self.player_id = player_id


class CapacityExceededError(CardEngineError):
    """容量超限异常(手牌已满、玩家数已满)"""
    pass


class InvalidArgumentError(CardEngineError, ValueError):
    """无效参数异常"""
    pass


class InvalidActionError(InvalidArgumentError):
    """当前手牌不允许该行动"""
    pass


class GameConfigError(InvalidArgumentError):
    """游戏配置错误异常"""
    pass
