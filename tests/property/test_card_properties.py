"""
Property-based Tests - 卡牌与规则的属性测试

使用hypothesis验证在任意输入下都成立的性质：
- 洗牌和发牌不增不减任何一张牌
- 手牌永远不超过上限
- 21点点数的软牌和爆牌标记与点数一致
- 寻路结果是合法的相邻步序列
"""

import random
from typing import List

import pytest
from hypothesis import given, strategies as st

from card_engine.core.cards import Card, Deck, Hand, fisher_yates_shuffle
from card_engine.core.cards.types import RANKS, Suit, standard_card_properties
from card_engine.core.exceptions import CapacityExceededError
from card_engine.games.blackjack import calculate_hand_score, compare_hands, HandResult
from card_engine.games.gridrunner import (
    CellType,
    HexGrid,
    Position,
    SquareGrid,
    find_path,
    get_reachable_positions,
)

# Hypothesis策略定义
seed_strategy = st.integers(min_value=0, max_value=2 ** 32 - 1)
rank_strategy = st.sampled_from(RANKS)
hand_strategy = st.lists(rank_strategy, min_size=0, max_size=8)


def _cards(ranks: List[str]) -> List[Card]:
    return [Card(standard_card_properties(Suit.SPADES, rank)) for rank in ranks]


@pytest.mark.property_test
@given(st.lists(st.integers(), max_size=60), seed_strategy)
def test_shuffle_preserves_multiset(items, seed):
    """Property test: 洗牌只改变顺序"""
    shuffled = fisher_yates_shuffle(list(items), random.Random(seed))
    assert sorted(shuffled) == sorted(items)


@pytest.mark.property_test
@given(st.integers(min_value=1, max_value=8), st.integers(min_value=0, max_value=10), seed_strategy)
def test_deal_conserves_cards(recipients, per_recipient, seed):
    """Property test: 发出的牌加上剩余的牌等于原来的牌"""
    deck = Deck.create_standard(random.Random(seed)).shuffle()
    original_ids = {card.id for card in deck}

    hands = deck.deal(recipients, per_recipient)

    dealt_ids = [card.id for hand in hands for card in hand]
    remaining_ids = [card.id for card in deck]
    assert len(dealt_ids) == min(52, recipients * per_recipient)
    assert set(dealt_ids) | set(remaining_ids) == original_ids
    assert len(dealt_ids) + len(remaining_ids) == 52
    # 靠前的接收者不会比靠后的少
    sizes = [len(hand) for hand in hands]
    assert sizes == sorted(sizes, reverse=True)


@pytest.mark.property_test
@given(st.integers(min_value=0, max_value=10), st.lists(st.booleans(), max_size=30))
def test_hand_never_exceeds_max_size(max_size, operations):
    """Property test: 无论如何添加，手牌都不超过上限"""
    hand = Hand(max_size=max_size)
    for use_try in operations:
        card = Card({"n": 0})
        if use_try:
            hand.try_add(card)
        else:
            try:
                hand.add(card)
            except CapacityExceededError:
                pass
        assert hand.size <= max_size


@pytest.mark.property_test
@given(hand_strategy)
def test_hand_score_flags_consistent(ranks):
    """Property test: 点数标记与点数一致"""
    score = calculate_hand_score(_cards(ranks))

    assert score.is_bust == (score.value > 21)
    assert score.is_blackjack == (len(ranks) == 2 and score.value == 21)
    if score.is_soft:
        assert "A" in ranks
        assert score.value <= 21

    hard_total = sum(1 if r == "A" else 10 if r in ("J", "Q", "K") else int(r) for r in ranks)
    assert score.value in (hard_total, hard_total + 10)


@pytest.mark.property_test
@given(hand_strategy, hand_strategy)
def test_bust_player_always_loses(player_ranks, dealer_ranks):
    """Property test: 玩家爆牌时无论庄家如何都输"""
    player = calculate_hand_score(_cards(player_ranks))
    dealer = calculate_hand_score(_cards(dealer_ranks))
    result = compare_hands(player, dealer)

    if player.is_bust:
        assert result == HandResult.LOSE
    assert result in (HandResult.WIN, HandResult.LOSE, HandResult.PUSH, HandResult.BLACKJACK)


@pytest.mark.property_test
@given(
    st.booleans(),
    st.sets(st.tuples(st.integers(0, 5), st.integers(0, 5)), max_size=12),
    st.tuples(st.integers(0, 5), st.integers(0, 5)),
    st.tuples(st.integers(0, 5), st.integers(0, 5)),
    st.integers(min_value=0, max_value=12),
)
def test_path_is_connected_and_bounded(hexagonal, blocked, start, end, max_distance):
    """Property test: 找到的路径由相邻且可通行的格子组成，且不超过步数限制"""
    grid = HexGrid(6, 6) if hexagonal else SquareGrid(6, 6)
    for q, r in blocked:
        grid.set_cell_type(Position(q, r), CellType.BLOCKED)

    start_position = Position(*start)
    end_position = Position(*end)
    path = find_path(grid, start_position, end_position, max_distance)

    if path is None:
        return

    assert path[0] == start_position
    assert path[-1] == end_position
    assert len(path) - 1 <= max(max_distance, 0)
    for previous, current in zip(path, path[1:]):
        assert current in grid.get_neighbors(previous)
        assert grid.is_walkable(current)


@pytest.mark.property_test
@given(st.integers(0, 4), st.integers(0, 4), st.integers(min_value=0, max_value=6))
def test_reachable_within_distance(q, r, max_distance):
    """Property test: 可达位置都在距离限制内且不包含起点"""
    grid = SquareGrid(5, 5)
    start = Position(q, r)
    reachable = get_reachable_positions(grid, start, max_distance)

    assert start not in reachable
    assert len(reachable) == len(set(reachable))
    for position in reachable:
        assert 0 < grid.get_distance(start, position) <= max_distance
