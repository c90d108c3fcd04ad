"""
弃牌堆.

打出的牌在此累积，牌组耗尽时可以整体取回并洗牌.
"""

import random
from typing import Iterable, List, Optional

from .card import Card
from .collection import CardCollection
from .shuffle import fisher_yates_shuffle


class DiscardPile(CardCollection):
    """弃牌堆，末尾为最近弃掉的牌"""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        super().__init__()
        self._rng = rng

    def discard(self, card: Card) -> None:
        """弃一张牌"""
        self.add(card)

    def discard_many(self, cards: Iterable[Card]) -> None:
        """弃多张牌"""
        self.add_many(cards)

    def peek_top(self) -> Optional[Card]:
        """查看最近弃掉的牌"""
        return self.peek()

    def peek_bottom(self) -> Optional[Card]:
        """查看最早弃掉的牌"""
        return self.peek(0)

    def take_all(self, keep_top: bool = False) -> List[Card]:
        """
        取走弃牌堆中的牌.

        Args:
            keep_top: 为True时保留最近弃掉的那一张

        Returns:
            List[Card]: 取走的牌
        """
        if keep_top and self._cards:
            top = self._cards.pop()
            taken = self.clear()
            self._cards.append(top)
            return taken
        return self.clear()

    def take_top(self, count: int) -> List[Card]:
        """从顶部取count张牌，不够时取完为止"""
        taken: List[Card] = []
        while len(taken) < count and self._cards:
            taken.append(self._cards.pop())
        return taken

    def take_bottom(self, count: int) -> List[Card]:
        """从底部取count张牌，不够时取完为止"""
        taken: List[Card] = []
        while len(taken) < count and self._cards:
            taken.append(self._cards.pop(0))
        return taken

    def shuffle(self) -> "DiscardPile":
        """原地洗弃牌堆"""
        fisher_yates_shuffle(self._cards, self._rng)
        return self

    def take_all_and_shuffle(self, keep_top: bool = False) -> List[Card]:
        """
        取走全部牌并洗乱取出的这一批.

        牌组耗尽时重新洗牌的标准做法. 留在弃牌堆中的牌不受影响.

        Args:
            keep_top: 是否保留最近弃掉的那一张

        Returns:
            List[Card]: 洗乱后的牌
        """
        return fisher_yates_shuffle(self.take_all(keep_top), self._rng)
