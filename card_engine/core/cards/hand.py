"""
手牌.

带可选容量上限的卡牌集合.
"""

from typing import Any, Callable, Iterable, List, Optional

from ..exceptions import CapacityExceededError
from .card import Card
from .collection import CardCollection, CardComparator, CardPredicate


class Hand(CardCollection):
    """
    玩家手牌.

    Invariant:
        设置了max_size时，只有add/add_many会检查上限；
        把max_size调小到当前张数以下是合法的，已有的牌不会被移除，只是不能再添加.
    """

    def __init__(self, max_size: Optional[int] = None) -> None:
        """
        Args:
            max_size: 最大手牌数，None表示不限
        """
        super().__init__()
        self.max_size = max_size

    @property
    def is_full(self) -> bool:
        """是否已达到上限"""
        return self.max_size is not None and self.size >= self.max_size

    @property
    def remaining_slots(self) -> Optional[int]:
        """剩余空位数，不限容量时返回None"""
        if self.max_size is None:
            return None
        return max(0, self.max_size - self.size)

    def can_accept(self, count: int) -> bool:
        """检查能否再放入count张牌(不修改手牌)"""
        return self.max_size is None or self.size + count <= self.max_size

    def add(self, card: Card) -> None:
        """
        添加一张牌.

        Raises:
            CapacityExceededError: 手牌已满
        """
        if self.is_full:
            raise CapacityExceededError(f"Hand is full (max size: {self.max_size})")
        super().add(card)

    def add_many(self, cards: Iterable[Card]) -> None:
        """
        添加多张牌，超出上限时一张都不添加.

        Raises:
            CapacityExceededError: 添加后会超过上限
        """
        batch = list(cards)
        if not self.can_accept(len(batch)):
            raise CapacityExceededError(
                f"Cannot add {len(batch)} cards. Hand would exceed max size ({self.max_size}). "
                f"Current: {self.size}, Remaining slots: {self.remaining_slots}"
            )
        super().add_many(batch)

    def try_add(self, card: Card) -> bool:
        """尝试添加一张牌，手牌已满时返回False"""
        if self.is_full:
            return False
        super().add(card)
        return True

    def try_add_many(self, cards: Iterable[Card]) -> int:
        """
        逐张尝试添加，遇到已满即停止.

        Returns:
            int: 成功添加的张数
        """
        added = 0
        for card in cards:
            if not self.try_add(card):
                break
            added += 1
        return added

    def play(self, index: int) -> Optional[Card]:
        """打出指定下标的牌，下标无效时返回None"""
        return self.remove_at(index)

    def play_card(self, predicate: CardPredicate) -> Optional[Card]:
        """打出第一张满足条件的牌"""
        return self.remove(predicate)

    def sort(self, key: Optional[Callable[[Card], Any]] = None,
             cmp: Optional[CardComparator] = None,
             reverse: bool = False) -> "Hand":
        """按key或cmp原地稳定排序"""
        self._sort_cards(key=key, cmp=cmp, reverse=reverse)
        return self

    def discard_all(self) -> List[Card]:
        """弃掉全部手牌并返回"""
        return self.clear()
