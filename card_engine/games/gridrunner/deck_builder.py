"""
移动卡牌组生成

卡牌的id属性与Card.id一致，可以直接按id在手牌中查找.
"""

import math
import random
from typing import Any, Dict, List, Optional, Sequence

from ...core.cards.card import Card
from ...core.cards.deck import Deck
from .types import (
    MOVEMENT_CARD_TYPE,
    Direction,
    GridType,
    HexDirection,
    MovementSpecial,
    SquareDirection,
)

# 基础移动卡按距离1..5的占比
DISTANCE_DISTRIBUTION = [(1, 0.4), (2, 0.3), (3, 0.2), (4, 0.05), (5, 0.05)]
JUMP_SHARE = 0.3
TELEPORT_SHARE = 0.2

SQUARE_CARD_DIRECTIONS = [
    SquareDirection.NORTH,
    SquareDirection.SOUTH,
    SquareDirection.EAST,
    SquareDirection.WEST,
]

HEX_CARD_DIRECTIONS = [
    HexDirection.EAST,
    HexDirection.WEST,
    HexDirection.NORTHEAST,
    HexDirection.NORTHWEST,
    HexDirection.SOUTHEAST,
    HexDirection.SOUTHWEST,
]


def _cells(distance: int) -> str:
    return "cell" if distance == 1 else "cells"


def create_movement_card(card_id: str, distance: int,
                         name: Optional[str] = None,
                         description: Optional[str] = None,
                         direction: Optional[Direction] = None,
                         special: Optional[MovementSpecial] = None) -> Card:
    """
    创建一张移动卡

    Args:
        card_id: 卡牌ID
        distance: 最多可移动的格数
        name: 名称，默认"Move {distance}"
        description: 描述
        direction: 限定方向
        special: 特殊能力

    Returns:
        Card: 属性包含id、type、distance、name、description以及可选的direction、special
    """
    properties: Dict[str, Any] = {
        'id': card_id,
        'type': MOVEMENT_CARD_TYPE,
        'distance': distance,
        'name': name or f"Move {distance}",
        'description': description or f"Move up to {distance} {_cells(distance)}",
    }
    if direction is not None:
        properties['direction'] = direction
    if special is not None:
        properties['special'] = special
    return Card(properties, card_id=card_id)


def create_standard_deck(deck_size: int = 40, grid_type: GridType = GridType.SQUARE,
                         rng: Optional[random.Random] = None) -> Deck:
    """
    创建标准移动牌组(未洗牌)

    距离1..5的基础卡分别占40%、30%、20%、5%、5%(向下取整)，
    剩余位置中30%为JUMP、20%为TELEPORT，其余为MULTI_TURN.
    """
    cards: List[Card] = []
    card_number = 0

    for distance, share in DISTANCE_DISTRIBUTION:
        for _ in range(math.floor(deck_size * share)):
            cards.append(create_movement_card(f"move_{distance}_{card_number}", distance))
            card_number += 1

    remaining_slots = deck_size - len(cards)
    jump_count = math.floor(remaining_slots * JUMP_SHARE)
    teleport_count = math.floor(remaining_slots * TELEPORT_SHARE)
    multi_turn_count = remaining_slots - jump_count - teleport_count

    for _ in range(jump_count):
        cards.append(create_movement_card(
            f"jump_{card_number}", 2, "Jump",
            "Move 2 cells, can jump over blocked cells",
            special=MovementSpecial.JUMP,
        ))
        card_number += 1

    for _ in range(teleport_count):
        cards.append(create_movement_card(
            f"teleport_{card_number}", 3, "Teleport",
            "Teleport to any valid cell within 3 cells",
            special=MovementSpecial.TELEPORT,
        ))
        card_number += 1

    for _ in range(multi_turn_count):
        cards.append(create_movement_card(
            f"multiturn_{card_number}", 3, "Multi-Turn",
            "Move 3 cells, choose direction at each step",
            special=MovementSpecial.MULTI_TURN,
        ))
        card_number += 1

    return Deck(cards, rng=rng)


def create_directional_deck(deck_size: int = 40, grid_type: GridType = GridType.SQUARE,
                            rng: Optional[random.Random] = None) -> Deck:
    """
    创建带方向的移动牌组

    方格使用4个方向，六边形网格使用6个方向；每个方向的距离按1、2、3循环.
    不能整除的剩余位置用距离2的万能卡补齐.
    """
    directions = HEX_CARD_DIRECTIONS if grid_type == GridType.HEXAGONAL else SQUARE_CARD_DIRECTIONS
    cards_per_direction = deck_size // len(directions)

    cards: List[Card] = []
    card_number = 0

    for direction in directions:
        for i in range(cards_per_direction):
            distance = (i % 3) + 1
            cards.append(create_movement_card(
                f"dir_{direction.value}_{card_number}", distance,
                f"Move {direction.value}",
                f"Move {distance} {_cells(distance)} {direction.value}",
                direction=direction,
            ))
            card_number += 1

    while len(cards) < deck_size:
        cards.append(create_movement_card(
            f"wildcard_{card_number}", 2, "Wildcard Move",
            "Move 2 cells in any direction",
        ))
        card_number += 1

    return Deck(cards, rng=rng)


def create_custom_deck(card_config: Sequence[Dict[str, Any]],
                       rng: Optional[random.Random] = None) -> Deck:
    """
    按配置创建牌组

    Args:
        card_config: 每项包含distance和count，可选direction、special、name、description
        rng: 随机数生成器

    Examples:
        >>> deck = create_custom_deck([{'distance': 2, 'count': 3}])
        >>> deck.size
        3
    """
    cards: List[Card] = []
    card_number = 0

    for entry in card_config:
        for _ in range(entry['count']):
            cards.append(create_movement_card(
                f"custom_{card_number}", entry['distance'],
                entry.get('name'), entry.get('description'),
                entry.get('direction'), entry.get('special'),
            ))
            card_number += 1

    return Deck(cards, rng=rng)
