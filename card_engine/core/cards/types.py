"""
标准扑克牌相关类型定义.

定义花色枚举和点数表，供标准52张牌组工厂和各游戏规则使用.
"""

from enum import Enum
from typing import Any, Dict, List


class Suit(Enum):
    """
    扑克牌花色枚举.

    值为卡牌属性中保存的花色字符串，symbol为显示用的Unicode符号.
    """

    HEARTS = "hearts"        # 红桃
    DIAMONDS = "diamonds"    # 方块
    CLUBS = "clubs"          # 梅花
    SPADES = "spades"        # 黑桃

    def __str__(self) -> str:
        return self.value

    @property
    def symbol(self) -> str:
        """返回花色符号"""
        symbols = {
            Suit.HEARTS: "♥",
            Suit.DIAMONDS: "♦",
            Suit.CLUBS: "♣",
            Suit.SPADES: "♠",
        }
        return symbols[self]

    @property
    def is_red(self) -> bool:
        """红色花色(红桃、方块)"""
        return self in (Suit.HEARTS, Suit.DIAMONDS)


# 点数按A到K排列，通用牌值即位置序号(1..13)
RANKS: List[str] = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]

FACE_RANKS = ("J", "Q", "K")
TEN_VALUE_RANKS = ("10", "J", "Q", "K")


def get_all_suits() -> List[Suit]:
    """
    获取所有花色.

    Returns:
        List[Suit]: 包含所有四种花色的列表
    """
    return list(Suit)


def standard_card_properties(suit: Suit, rank: str) -> Dict[str, Any]:
    """
    构造标准扑克牌的属性字典.

    Args:
        suit: 花色
        rank: 点数字符串，必须在RANKS中

    Returns:
        Dict[str, Any]: {"suit", "rank", "value"}，value为通用位置值1..13

    Raises:
        ValueError: 当点数无效时
    """
    if rank not in RANKS:
        raise ValueError(f"无效的点数: {rank}")
    return {"suit": suit.value, "rank": rank, "value": RANKS.index(rank) + 1}


def suit_symbol(suit_value: str) -> str:
    """根据属性中的花色字符串返回显示符号，未知花色原样返回"""
    try:
        return Suit(suit_value).symbol
    except ValueError:
        return suit_value
