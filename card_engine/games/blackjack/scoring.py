"""
21点计分规则

纯函数：手牌点数、可选行动判断、庄家策略和比牌.
"""

from typing import Sequence

from ...core.cards.card import Card
from ...core.cards.types import FACE_RANKS, TEN_VALUE_RANKS
from .types import HandResult, HandScore


def card_value(card: Card) -> int:
    """
    单张牌的基础点数，A按1计

    Args:
        card: 带有rank属性的卡牌

    Returns:
        int: A为1，J/Q/K为10，其余为牌面数字
    """
    rank = card.get_property('rank')
    if rank == 'A':
        return 1
    if rank in FACE_RANKS:
        return 10
    return int(rank)


def calculate_hand_score(cards: Sequence[Card]) -> HandScore:
    """
    计算手牌点数

    所有A先按1计；若有A且再加10不超过21，则把其中一张A按11计并标记为软牌.
    无论有几张A，最多只有一张按11计. 爆牌在软牌调整之后判断.

    Args:
        cards: 手牌

    Returns:
        HandScore: 点数信息，空手牌的点数为0
    """
    if not cards:
        return HandScore(value=0)

    total = sum(card_value(card) for card in cards)
    has_ace = any(card.get_property('rank') == 'A' for card in cards)

    is_soft = False
    if has_ace and total + 10 <= 21:
        total += 10
        is_soft = True

    return HandScore(
        value=total,
        is_soft=is_soft,
        is_bust=total > 21,
        is_blackjack=len(cards) == 2 and total == 21,
    )


def can_split(cards: Sequence[Card]) -> bool:
    """两张同点数的牌，或两张都是10点牌"""
    if len(cards) != 2:
        return False

    first, second = (card.get_property('rank') for card in cards)
    if first == second:
        return True
    return first in TEN_VALUE_RANKS and second in TEN_VALUE_RANKS


def can_double(cards: Sequence[Card]) -> bool:
    """只能在起手两张牌时加倍"""
    return len(cards) == 2


def should_dealer_hit(score: HandScore, stands_on_soft17: bool) -> bool:
    """
    庄家是否要牌

    Args:
        score: 庄家当前点数
        stands_on_soft17: 庄家是否在软17停牌

    Returns:
        bool: 16及以下要牌，18及以上停牌；恰好17时，
        规则为软17停牌则停牌，否则只有软17要牌
    """
    if score.is_bust:
        return False

    if score.value < 17:
        return True

    if score.value > 17:
        return False

    if stands_on_soft17:
        return False
    return score.is_soft


def compare_hands(player_score: HandScore, dealer_score: HandScore) -> HandResult:
    """
    比较玩家与庄家的手牌

    Args:
        player_score: 玩家点数
        dealer_score: 庄家点数

    Returns:
        HandResult: WIN、LOSE、PUSH或BLACKJACK之一
    """
    # 玩家爆牌无论庄家如何都输
    if player_score.is_bust:
        return HandResult.LOSE

    if player_score.is_blackjack:
        if dealer_score.is_blackjack:
            return HandResult.PUSH
        return HandResult.BLACKJACK

    if dealer_score.is_bust:
        return HandResult.WIN

    if player_score.value > dealer_score.value:
        return HandResult.WIN
    if player_score.value < dealer_score.value:
        return HandResult.LOSE
    return HandResult.PUSH


def format_hand_score(score: HandScore) -> str:
    """
    格式化点数用于显示

    Examples:
        >>> format_hand_score(HandScore(value=23, is_bust=True))
        'BUST (23)'
        >>> format_hand_score(HandScore(value=17, is_soft=True))
        'Soft 17'
    """
    if score.is_bust:
        return f"BUST ({score.value})"

    if score.is_blackjack:
        return "BLACKJACK!"

    if score.is_soft and score.value != 21:
        return f"Soft {score.value}"

    return str(score.value)
