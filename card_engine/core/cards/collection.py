"""
有序卡牌集合.

Deck、Hand、DiscardPile共同的基类：按插入顺序保存卡牌引用，
支持LIFO/FIFO访问. 空集合上的查询和越界下标都返回None而不是抛出异常.
"""

from functools import cmp_to_key
from typing import Any, Callable, Iterable, Iterator, List, Optional, TypeVar

from ..exceptions import InvalidArgumentError
from .card import Card

U = TypeVar("U")

CardPredicate = Callable[[Card], bool]
CardComparator = Callable[[Card, Card], int]


class CardCollection:
    """
    卡牌集合基类.

    卡牌在集合之间以引用转移，不会复制. 引擎本身不强制跨集合的唯一性.

    Invariant:
        size == len(self._cards)
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None) -> None:
        self._cards: List[Card] = []
        if cards is not None:
            self._cards.extend(cards)

    @property
    def size(self) -> int:
        """集合中的卡牌数"""
        return len(self._cards)

    @property
    def is_empty(self) -> bool:
        """集合是否为空"""
        return not self._cards

    @property
    def all_cards(self) -> List[Card]:
        """全部卡牌的副本(从底到顶)"""
        return list(self._cards)

    def _normalize_index(self, index: int) -> Optional[int]:
        """
        将负下标换算为正下标.

        Returns:
            Optional[int]: 有效下标，越界时返回None
        """
        normalized = index + len(self._cards) if index < 0 else index
        if normalized < 0 or normalized >= len(self._cards):
            return None
        return normalized

    def add(self, card: Card) -> None:
        """在末尾添加一张牌"""
        self._cards.append(card)

    def add_many(self, cards: Iterable[Card]) -> None:
        """按顺序在末尾添加多张牌"""
        self._cards.extend(cards)

    def remove_at(self, index: int = -1) -> Optional[Card]:
        """
        移除并返回指定下标的牌.

        Args:
            index: 下标，负数从末尾计数，默认最后一张

        Returns:
            Optional[Card]: 被移除的牌，集合为空或下标越界时返回None
        """
        normalized = self._normalize_index(index)
        if normalized is None:
            return None
        return self._cards.pop(normalized)

    def remove(self, predicate: CardPredicate) -> Optional[Card]:
        """移除并返回第一张满足条件的牌，没有匹配时返回None"""
        for index, card in enumerate(self._cards):
            if predicate(card):
                return self._cards.pop(index)
        return None

    def remove_card(self, card: Card) -> bool:
        """
        按id移除指定的牌实例.

        Returns:
            bool: 是否移除成功
        """
        for index, existing in enumerate(self._cards):
            if existing.id == card.id:
                del self._cards[index]
                return True
        return False

    def peek(self, index: int = -1) -> Optional[Card]:
        """查看指定下标的牌但不移除，下标规则与remove_at相同"""
        normalized = self._normalize_index(index)
        if normalized is None:
            return None
        return self._cards[normalized]

    def find(self, predicate: CardPredicate) -> Optional[Card]:
        """返回第一张满足条件的牌"""
        return next((card for card in self._cards if predicate(card)), None)

    def find_all(self, predicate: CardPredicate) -> List[Card]:
        """返回所有满足条件的牌"""
        return [card for card in self._cards if predicate(card)]

    def contains(self, card: Card) -> bool:
        """按id检查集合是否包含指定的牌"""
        return any(existing.id == card.id for existing in self._cards)

    def has_any(self, predicate: CardPredicate) -> bool:
        """是否有任意一张牌满足条件"""
        return any(predicate(card) for card in self._cards)

    def clear(self) -> List[Card]:
        """
        移除全部卡牌.

        Returns:
            List[Card]: 被移除的全部卡牌
        """
        removed = self._cards
        self._cards = []
        return removed

    def for_each(self, fn: Callable[[Card, int], Any]) -> None:
        """对每张牌调用fn(card, index)"""
        for index, card in enumerate(list(self._cards)):
            fn(card, index)

    def map(self, fn: Callable[[Card, int], U]) -> List[U]:
        """将每张牌映射为fn(card, index)的结果"""
        return [fn(card, index) for index, card in enumerate(self._cards)]

    def _sort_cards(self,
                    key: Optional[Callable[[Card], Any]] = None,
                    cmp: Optional[CardComparator] = None,
                    reverse: bool = False) -> None:
        """
        原地稳定排序.

        Args:
            key: 排序键函数
            cmp: 比较函数(返回负数/0/正数)，与key二选一
            reverse: 是否降序
        """
        if cmp is not None:
            key = cmp_to_key(cmp)
        if key is None:
            raise InvalidArgumentError("排序需要提供key或cmp")
        self._cards.sort(key=key, reverse=reverse)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))

    def __contains__(self, card: object) -> bool:
        return isinstance(card, Card) and self.contains(card)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.size} cards)"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(size={self.size})"
