"""
玩家相关类的实现
包含手牌、状态、分数以及按游戏类型附加的扩展状态
"""

from typing import Any, Callable, Dict, Iterable, List, Optional

from ..cards.card import Card
from ..cards.collection import CardComparator, CardPredicate
from ..cards.hand import Hand
from ..exceptions import InvalidArgumentError
from .types import PlayerStatus


class Player:
    """
    游戏中的一个座位

    持有一副手牌，以及状态、分数和元数据. 具体游戏的逐玩家状态放在
    extension中(例如BlackjackPlayerState、GridPlayerState).
    """

    def __init__(self, player_id: str, name: str, max_hand_size: Optional[int] = None):
        """
        初始化玩家

        Args:
            player_id: 玩家ID，在一局游戏内唯一，创建后不可修改
            name: 显示名称
            max_hand_size: 手牌上限，None表示不限

        Raises:
            InvalidArgumentError: player_id为空
        """
        if not player_id:
            raise InvalidArgumentError("玩家ID不能为空")
        self._id = player_id
        self.name = name
        self._hand = Hand(max_hand_size)
        self.status = PlayerStatus.ACTIVE
        self._score = 0
        self._metadata: Dict[str, Any] = {}
        self.extension: Optional[Any] = None

    @property
    def id(self) -> str:
        """玩家ID"""
        return self._id

    @property
    def hand(self) -> Hand:
        """玩家手牌"""
        return self._hand

    @property
    def score(self) -> int:
        """当前分数"""
        return self._score

    @property
    def is_active(self) -> bool:
        """检查玩家是否处于ACTIVE状态"""
        return self.status == PlayerStatus.ACTIVE

    @property
    def has_cards(self) -> bool:
        """检查玩家是否有手牌"""
        return not self._hand.is_empty

    @property
    def card_count(self) -> int:
        """手牌数量"""
        return self._hand.size

    def add_card(self, card: Card) -> None:
        """
        添加一张手牌

        Raises:
            CapacityExceededError: 手牌已满
        """
        self._hand.add(card)

    def add_cards(self, cards: Iterable[Card]) -> None:
        """添加多张手牌，超出上限时一张都不添加"""
        self._hand.add_many(cards)

    def play_card(self, index: int) -> Optional[Card]:
        """按下标打出一张牌，下标无效时返回None"""
        return self._hand.play(index)

    def play_card_where(self, predicate: CardPredicate) -> Optional[Card]:
        """打出第一张满足条件的牌"""
        return self._hand.play_card(predicate)

    def discard_hand(self) -> List[Card]:
        """弃掉全部手牌"""
        return self._hand.discard_all()

    def sort_hand(self, key: Optional[Callable[[Card], Any]] = None,
                  cmp: Optional[CardComparator] = None,
                  reverse: bool = False) -> None:
        """整理手牌"""
        self._hand.sort(key=key, cmp=cmp, reverse=reverse)

    def add_score(self, points: int = 1) -> None:
        """增加分数"""
        self._score += points

    def reset_score(self) -> None:
        """分数清零"""
        self._score = 0

    def set_metadata(self, key: str, value: Any) -> None:
        self._metadata[key] = value

    def get_metadata(self, key: str, default: Any = None) -> Any:
        return self._metadata.get(key, default)

    def has_metadata(self, key: str) -> bool:
        return key in self._metadata

    def clear_metadata(self) -> None:
        self._metadata.clear()

    def reset(self) -> None:
        """
        为新的一轮重置玩家

        清空手牌并把状态置为ACTIVE，保留分数、元数据和扩展状态.
        """
        self._hand.clear()
        self.status = PlayerStatus.ACTIVE

    def full_reset(self) -> None:
        """为新的一局完全重置，分数清零并清除元数据和扩展状态"""
        self.reset()
        self._score = 0
        self._metadata.clear()
        self.extension = None

    def to_dict(self) -> Dict[str, Any]:
        """
        转换为字典格式

        Returns:
            Dict[str, Any]: 用于事件数据和界面展示的快照
        """
        return {
            'id': self._id,
            'name': self.name,
            'card_count': self.card_count,
            'status': self.status.value,
            'score': self._score,
            'metadata': dict(self._metadata),
        }

    def __str__(self) -> str:
        return f"{self.name} ({self.card_count} cards, score: {self._score})"

    def __repr__(self) -> str:
        return f"Player(id={self._id!r}, name={self.name!r}, status={self.status.name})"
