"""
通用卡牌数据结构.

Card由不透明的唯一标识和冻结的属性字典组成，属性的形状由具体游戏决定.
"""

import uuid
from types import MappingProxyType
from typing import Any, Mapping, Optional


class Card:
    """
    表示一张卡牌.

    创建后不可变：属性字典在构造时复制并以只读视图暴露，实例属性不可重新赋值.
    相等性区分两种语义：
    - equals: 属性相同即相等(不同id的两张"红桃A"相等)
    - is_identical: id与属性都相同

    Attributes:
        id: 唯一标识
        properties: 只读属性视图

    Examples:
        >>> card = Card({"suit": "hearts", "rank": "A"})
        >>> card.get_property("rank")
        'A'
        >>> card.equals(card.clone())
        True
    """

    __slots__ = ("_id", "_properties")

    def __init__(self, properties: Mapping[str, Any], card_id: Optional[str] = None) -> None:
        """
        初始化卡牌.

        Args:
            properties: 定义卡牌的属性
            card_id: 可选的唯一标识，未提供时自动生成
        """
        object.__setattr__(self, "_properties", MappingProxyType(dict(properties)))
        object.__setattr__(self, "_id", card_id if card_id is not None else self._generate_id())

    @staticmethod
    def _generate_id() -> str:
        return f"card_{uuid.uuid4().hex}"

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Card是不可变对象，不能设置属性: {name}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Card是不可变对象，不能删除属性: {name}")

    @property
    def id(self) -> str:
        """卡牌唯一标识"""
        return self._id

    @property
    def properties(self) -> Mapping[str, Any]:
        """卡牌全部属性(只读)"""
        return self._properties

    def get_property(self, key: str, default: Any = None) -> Any:
        """
        获取单个属性值.

        Args:
            key: 属性名
            default: 属性不存在时返回的默认值

        Returns:
            属性值或默认值
        """
        return self._properties.get(key, default)

    def has_property(self, key: str) -> bool:
        """检查卡牌是否包含指定属性"""
        return key in self._properties

    def equals(self, other: "Card") -> bool:
        """
        按属性判断两张牌是否相等(不比较id).

        Args:
            other: 另一张牌

        Returns:
            bool: 属性完全相同则返回True
        """
        return dict(self._properties) == dict(other.properties)

    def is_identical(self, other: "Card") -> bool:
        """
        判断两张牌是否为同一张牌(id与属性都相同).

        Args:
            other: 另一张牌

        Returns:
            bool: id与属性都相同则返回True
        """
        return self._id == other.id and self.equals(other)

    def clone(self) -> "Card":
        """返回属性相同但id不同的新卡牌"""
        return Card(self._properties)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self._id == other.id

    def __hash__(self) -> int:
        return hash(self._id)

    def __str__(self) -> str:
        props = ", ".join(f"{key}: {value}" for key, value in self._properties.items())
        return f"Card({props})"

    def __repr__(self) -> str:
        return f"Card(id={self._id!r}, properties={dict(self._properties)!r})"
