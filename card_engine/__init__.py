"""
card_engine - 回合制卡牌与网格移动游戏引擎

核心模块见card_engine.core，示例游戏见card_engine.games.
"""

__version__ = "1.0.0"
