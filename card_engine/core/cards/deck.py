"""
牌组.

在有序集合的基础上提供洗牌、摸牌、轮流发牌和切牌. 列表末尾是牌顶.
"""

import logging
import random
from typing import Any, Callable, Iterable, List, Optional

from .card import Card
from .collection import CardCollection, CardComparator
from .shuffle import fisher_yates_shuffle
from .types import RANKS, get_all_suits, standard_card_properties

logger = logging.getLogger(__name__)


class Deck(CardCollection):
    """
    表示一副可洗牌和发牌的牌组.

    使用可选的随机数生成器以支持确定性测试.

    Examples:
        >>> deck = Deck.create_standard(random.Random(42))
        >>> deck.shuffle().size
        52
        >>> card = deck.draw()
        >>> len(deck)
        51
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None,
                 rng: Optional[random.Random] = None) -> None:
        """
        初始化牌组.

        Args:
            cards: 初始卡牌(从底到顶)
            rng: 洗牌用的随机数生成器，为None时使用共享的默认生成器
        """
        super().__init__(cards)
        self._rng = rng

    def shuffle(self) -> "Deck":
        """
        Fisher-Yates洗牌.

        Returns:
            Deck: 牌组本身，便于链式调用
        """
        fisher_yates_shuffle(self._cards, self._rng)
        logger.debug("Deck shuffled (%d cards)", len(self._cards))
        return self

    def draw(self) -> Optional[Card]:
        """摸牌顶的一张牌，牌组为空时返回None"""
        return self.remove_at()

    def draw_many(self, count: int) -> List[Card]:
        """
        摸多张牌.

        Args:
            count: 要摸的牌数

        Returns:
            List[Card]: 摸到的牌，牌不够时少于count张
        """
        drawn: List[Card] = []
        while len(drawn) < count and self._cards:
            drawn.append(self._cards.pop())
        return drawn

    def deal(self, recipient_count: int, cards_per_recipient: int) -> List[List[Card]]:
        """
        轮流发牌.

        每一轮给每个接收者各发一张，共cards_per_recipient轮.
        牌组耗尽时提前停止，靠后的接收者可能比靠前的少.

        Args:
            recipient_count: 接收者数量
            cards_per_recipient: 每个接收者应得的牌数

        Returns:
            List[List[Card]]: 每个接收者的牌
        """
        hands: List[List[Card]] = [[] for _ in range(recipient_count)]
        for _ in range(cards_per_recipient):
            for recipient in range(recipient_count):
                card = self.draw()
                if card is not None:
                    hands[recipient].append(card)
        return hands

    def peek_top(self) -> Optional[Card]:
        """查看牌顶的牌"""
        return self.peek()

    def peek_bottom(self) -> Optional[Card]:
        """查看牌底的牌"""
        return self.peek(0)

    def cut(self, position: Optional[int] = None) -> "Deck":
        """
        切牌：把前position张牌移到末尾.

        Args:
            position: 切牌位置，默认为中间. <=0 或 >=size 时不做任何操作

        Returns:
            Deck: 牌组本身
        """
        cut_position = len(self._cards) // 2 if position is None else position
        if cut_position <= 0 or cut_position >= len(self._cards):
            return self
        self._cards = self._cards[cut_position:] + self._cards[:cut_position]
        return self

    def sort(self, key: Optional[Callable[[Card], Any]] = None,
             cmp: Optional[CardComparator] = None,
             reverse: bool = False) -> "Deck":
        """按key或cmp原地稳定排序"""
        self._sort_cards(key=key, cmp=cmp, reverse=reverse)
        return self

    @classmethod
    def create_standard(cls, rng: Optional[random.Random] = None) -> "Deck":
        """
        创建标准52张牌组(未洗牌).

        4种花色 × 13种点数(A,2..10,J,Q,K)，value为位置值1..13.
        该值与具体游戏无关，例如21点会自行计算牌值.

        Args:
            rng: 随机数生成器

        Returns:
            Deck: 新牌组
        """
        cards = [
            Card(standard_card_properties(suit, rank))
            for suit in get_all_suits()
            for rank in RANKS
        ]
        return cls(cards, rng=rng)
