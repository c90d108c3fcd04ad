"""
Card Engine Test Configuration - pytest配置文件

提供测试共用的fixture：
- 固定种子的随机数生成器
- 标准扑克牌构造
- 21点牌靴叠牌(用于确定性地控制发牌顺序)
"""

import random
from typing import Callable, List, Sequence

import pytest

from card_engine.core.cards import Card
from card_engine.core.cards.types import Suit, standard_card_properties
from card_engine.core.game import Player
from card_engine.games.blackjack import BlackjackConfig, BlackjackGame

# 叠牌时垫在牌靴底部的牌数，保证不会触发换牌靴(1副牌时阈值为13)
FILLER_SIZE = 20


def make_card(rank: str, suit: Suit = Suit.SPADES) -> Card:
    """构造一张标准扑克牌"""
    return Card(standard_card_properties(suit, rank))


def stack_shoe(game: BlackjackGame, draw_order: Sequence[str], filler_rank: str = "10") -> None:
    """
    重新摆放牌靴，使接下来摸到的牌依次为draw_order

    单个玩家时deal_round的摸牌顺序为: 玩家1, 庄家1, 玩家2, 庄家2.
    叠的牌摸完之后摸到的是filler_rank.
    """
    game.shoe.clear()
    game.shoe.add_many(make_card(filler_rank, Suit.CLUBS) for _ in range(FILLER_SIZE))
    game.shoe.add_many(make_card(rank) for rank in reversed(list(draw_order)))


@pytest.fixture
def rng() -> random.Random:
    """固定种子的随机数生成器"""
    return random.Random(42)


@pytest.fixture
def card_factory() -> Callable[..., Card]:
    return make_card


@pytest.fixture
def blackjack_game() -> BlackjackGame:
    """已开始的单人21点(1副牌)"""
    game = BlackjackGame(BlackjackConfig(num_decks=1, random_seed=1))
    game.add_player(Player("p1", "Alice"))
    game.start()
    return game


@pytest.fixture
def stacked_round(blackjack_game) -> Callable[[List[str]], BlackjackGame]:
    """按指定顺序叠牌后开始新的一轮"""
    def _deal(draw_order: List[str], filler_rank: str = "10") -> BlackjackGame:
        stack_shoe(blackjack_game, draw_order, filler_rank)
        blackjack_game.new_round()
        return blackjack_game
    return _deal


def pytest_configure(config):
    """pytest配置"""
    config.addinivalue_line("markers", "unit: 单元测试")
    config.addinivalue_line("markers", "fast: 快速测试")
    config.addinivalue_line("markers", "integration: 标记集成测试")
    config.addinivalue_line("markers", "property_test: 标记基于属性的测试")
