"""
Fisher-Yates洗牌.

所有洗牌调用点都显式接收随机数生成器，测试可以传入确定性的random.Random.
"""

import random
from typing import List, Optional, TypeVar

T = TypeVar("T")

# 未指定随机源时共享的默认生成器
_default_rng = random.Random()


def resolve_rng(rng: Optional[random.Random]) -> random.Random:
    """返回传入的随机数生成器，未提供时返回模块共享的默认生成器"""
    return rng if rng is not None else _default_rng


def fisher_yates_shuffle(items: List[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    原地均匀随机打乱列表.

    从最后一个下标向下迭代到1，每次与[0, i]中均匀选出的下标交换.
    0或1个元素时不做任何操作.

    Args:
        items: 要打乱的列表
        rng: 随机数生成器

    Returns:
        List[T]: 同一个列表对象(便于链式使用)
    """
    generator = resolve_rng(rng)
    for i in range(len(items) - 1, 0, -1):
        j = generator.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items
