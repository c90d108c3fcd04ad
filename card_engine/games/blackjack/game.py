"""
21点游戏

在通用生命周期之上实现牌靴、庄家、发牌、玩家行动和结算.
玩家之间没有严格的行动顺序，每位玩家独立行动直到停牌或爆牌；
所有玩家结束后庄家补牌并结算本轮.
"""

import logging
import math
import random
from typing import Any, Dict, List, Optional

from ...core.cards.card import Card
from ...core.cards.deck import Deck
from ...core.events import EventBus
from ...core.exceptions import CapacityExceededError, InvalidActionError, StateConflictError
from ...core.game.facade import LifecycleFacade
from ...core.game.lifecycle import GameLifecycle
from ...core.game.player import Player
from ...core.game.types import GameState, PlayerStatus
from .scoring import (
    calculate_hand_score,
    can_double,
    compare_hands,
    should_dealer_hit,
)
from .types import (
    BlackjackAction,
    BlackjackConfig,
    BlackjackPlayerState,
    HandResult,
    HandScore,
)

# 牌靴剩余不足该比例时在发牌前换一副新牌靴
RESHUFFLE_THRESHOLD = 0.25
WIN_POINTS = 100


class BlackjackGame(LifecycleFacade):
    """
    21点游戏

    Examples:
        >>> game = BlackjackGame(BlackjackConfig(random_seed=7))
        >>> game.add_player(Player("p1", "Alice"))
        >>> game.start()      # 开始时自动发第一轮
        >>> game.stand("p1")  # 所有玩家结束后庄家补牌并结算
        >>> game.is_round_over
        True
    """

    def __init__(self, config: Optional[BlackjackConfig] = None,
                 rng: Optional[random.Random] = None,
                 event_bus: Optional[EventBus] = None):
        """
        初始化21点游戏

        Args:
            config: 游戏配置，默认1-7人、6副牌、庄家软17停牌、赔率1.5
            rng: 随机数生成器，为None时根据config.random_seed创建
            event_bus: 事件总线
        """
        self._config = config or BlackjackConfig()
        self._rng = rng if rng is not None else self._config.create_rng()
        self._lifecycle = GameLifecycle(self._config, hooks=self, event_bus=event_bus)
        self._logger = logging.getLogger(__name__)

        self._shoe = self._create_shoe()
        self._dealer = Player("dealer", "Dealer")
        self._round = 0
        self._dealer_revealed = False
        self._round_over = False

    # ---- 属性 ----

    @property
    def config(self) -> BlackjackConfig:
        return self._config

    @property
    def dealer(self) -> Player:
        return self._dealer

    @property
    def shoe(self) -> Deck:
        """牌靴(牌顶在末尾)"""
        return self._shoe

    @property
    def round(self) -> int:
        """已发的轮数"""
        return self._round

    @property
    def is_dealer_revealed(self) -> bool:
        return self._dealer_revealed

    @property
    def is_round_over(self) -> bool:
        """本轮是否已经结算"""
        return self._round_over

    # ---- 牌靴 ----

    def _create_shoe(self) -> Deck:
        """把num_decks副标准牌合并并洗牌"""
        shoe = Deck(rng=self._rng)
        for _ in range(self._config.num_decks):
            shoe.add_many(Deck.create_standard().all_cards)
        return shoe.shuffle()

    def _reshuffle_if_needed(self) -> None:
        threshold = self._config.num_decks * 52 * RESHUFFLE_THRESHOLD
        if self._shoe.size < threshold:
            self._logger.debug(f"Shoe has {self._shoe.size} cards left (< {threshold}), creating new shoe")
            self._shoe = self._create_shoe()

    # ---- 生命周期回调 ----

    def on_start(self) -> None:
        for player in self._lifecycle.players:
            if not isinstance(player.extension, BlackjackPlayerState):
                player.extension = BlackjackPlayerState()
        self.deal_round()

    def on_end(self) -> None:
        self._logger.info(f"Blackjack game ended after {self._round} round(s)")

    def on_turn_changed(self) -> None:
        pass

    # ---- 发牌与行动 ----

    def _require_playing(self, action: str) -> None:
        if self._lifecycle.state != GameState.PLAYING:
            raise StateConflictError(
                f"Cannot {action} when game is not in PLAYING state (state: {self._lifecycle.state.value})"
            )

    def deal_round(self) -> None:
        """
        发新的一轮

        两轮发牌，每轮先给每位玩家一张，再给庄家一张.
        庄家起手为Blackjack时立即翻牌并结算.

        Raises:
            StateConflictError: 游戏不在PLAYING状态
            CapacityExceededError: 某位玩家的手牌上限放不下两张起手牌
        """
        self._require_playing("deal")
        for player in self._lifecycle.players:
            if player.hand.max_size is not None and player.hand.max_size < 2:
                raise CapacityExceededError(f"Hand of player {player.id} cannot hold the 2 starting cards")

        self._reshuffle_if_needed()
        self._round += 1
        self._dealer_revealed = False
        self._round_over = False

        self._dealer.discard_hand()
        players = self._lifecycle.players
        for player in players:
            player.discard_hand()
            player.status = PlayerStatus.ACTIVE

        for _ in range(2):
            for player in players:
                card = self._shoe.draw()
                if card is not None:
                    player.add_card(card)

            dealer_card = self._shoe.draw()
            if dealer_card is not None:
                self._dealer.add_card(dealer_card)

        self._logger.debug(f"Round {self._round} dealt to {len(players)} player(s)")

        if self.get_dealer_score().is_blackjack:
            self._logger.debug("Dealer has blackjack")
            self._dealer_revealed = True
            self._resolve_round()

    def new_round(self) -> None:
        """
        开始新的一轮

        Raises:
            StateConflictError: 游戏不在PLAYING状态
        """
        self._require_playing("start new round")
        self.deal_round()

    def _require_active_player(self, player_id: str, action: str) -> Player:
        self._require_playing(action)
        player = self._lifecycle.require_player(player_id)
        if self._round_over:
            raise StateConflictError(f"Cannot {action}: round {self._round} is over")
        if player.status != PlayerStatus.ACTIVE:
            raise StateConflictError(
                f"Cannot {action}: player {player_id} is not active (status: {player.status.value})"
            )
        return player

    def hit(self, player_id: str) -> Optional[Card]:
        """
        要一张牌，爆牌时玩家状态变为FOLDED

        Args:
            player_id: 玩家ID

        Returns:
            Optional[Card]: 摸到的牌，牌靴为空时返回None

        Raises:
            StateConflictError: 游戏不在PLAYING状态、本轮已结算或玩家不是ACTIVE
            PlayerNotFoundError: 玩家不存在
            CapacityExceededError: 玩家手牌已满
        """
        player = self._require_active_player(player_id, "hit")
        card = self._draw_to(player)
        self._finish_round_if_done()
        return card

    def _draw_to(self, player: Player) -> Optional[Card]:
        if not player.hand.can_accept(1):
            raise CapacityExceededError(f"Hand of player {player.id} is full (max size: {player.hand.max_size})")
        card = self._shoe.draw()
        if card is not None:
            player.add_card(card)
            if self.get_player_score(player.id).is_bust:
                player.status = PlayerStatus.FOLDED
                self._logger.debug(f"Player {player.id} busted")
        return card

    def stand(self, player_id: str) -> None:
        """
        停牌，玩家状态变为WAITING

        Raises:
            StateConflictError: 游戏不在PLAYING状态、本轮已结算或玩家不是ACTIVE
            PlayerNotFoundError: 玩家不存在
        """
        player = self._require_active_player(player_id, "stand")
        player.status = PlayerStatus.WAITING
        self._finish_round_if_done()

    def double(self, player_id: str) -> Optional[Card]:
        """
        加倍：要一张牌后自动停牌(爆牌则为FOLDED)

        Returns:
            Optional[Card]: 摸到的牌

        Raises:
            StateConflictError: 游戏不在PLAYING状态、本轮已结算或玩家不是ACTIVE
            PlayerNotFoundError: 玩家不存在
            CapacityExceededError: 玩家手牌已满
            InvalidActionError: 手牌不是恰好两张
        """
        player = self._require_active_player(player_id, "double")
        if not can_double(player.hand.all_cards):
            raise InvalidActionError(
                f"Cannot double on this hand ({player.card_count} cards)"
            )

        card = self._draw_to(player)
        if player.status == PlayerStatus.ACTIVE:
            player.status = PlayerStatus.WAITING
        self._finish_round_if_done()
        return card

    def _all_players_finished(self) -> bool:
        return all(
            p.status in (PlayerStatus.WAITING, PlayerStatus.FOLDED)
            for p in self._lifecycle.players
        )

    def _finish_round_if_done(self) -> None:
        if self._all_players_finished():
            self._play_dealer_hand()
            self._resolve_round()

    def _play_dealer_hand(self) -> None:
        """庄家按规则补牌直到停牌或牌靴耗尽"""
        self._dealer_revealed = True
        dealer_score = self.get_dealer_score()

        while should_dealer_hit(dealer_score, self._config.dealer_stands_on_soft17):
            card = self._shoe.draw()
            if card is None:
                break
            self._dealer.add_card(card)
            dealer_score = self.get_dealer_score()

        self._logger.debug(f"Dealer stands with {dealer_score.value}")

    def _resolve_round(self) -> None:
        dealer_score = self.get_dealer_score()

        for player in self._lifecycle.players:
            player_score = calculate_hand_score(player.hand.all_cards)
            result = compare_hands(player_score, dealer_score)

            if result == HandResult.BLACKJACK:
                player.add_score(math.floor(self._config.blackjack_payout * WIN_POINTS))
            elif result == HandResult.WIN:
                player.add_score(WIN_POINTS)

            state = self._player_state(player)
            state.last_result = result
            state.last_hand_value = player_score.value
            self._logger.debug(f"Player {player.id}: {result.value} ({player_score.value} vs {dealer_score.value})")

        self._round_over = True

    @staticmethod
    def _player_state(player: Player) -> BlackjackPlayerState:
        if not isinstance(player.extension, BlackjackPlayerState):
            player.extension = BlackjackPlayerState()
        return player.extension

    # ---- 查询 ----

    def get_player_score(self, player_id: str) -> HandScore:
        """
        Raises:
            PlayerNotFoundError: 玩家不存在
        """
        player = self._lifecycle.require_player(player_id)
        return calculate_hand_score(player.hand.all_cards)

    def get_dealer_score(self) -> HandScore:
        return calculate_hand_score(self._dealer.hand.all_cards)

    def get_dealer_visible_card(self) -> Optional[Card]:
        """庄家的明牌(第一张)"""
        return self._dealer.hand.peek(0)

    def get_available_actions(self, player_id: str) -> List[BlackjackAction]:
        """
        玩家当前可用的行动

        玩家不存在、不是ACTIVE或本轮已结算时返回空列表.
        不提供SPLIT：分牌没有对应的执行操作.
        """
        player = self._lifecycle.get_player(player_id)
        if player is None or player.status != PlayerStatus.ACTIVE or self._round_over:
            return []

        actions = [BlackjackAction.HIT, BlackjackAction.STAND]
        if can_double(player.hand.all_cards):
            actions.append(BlackjackAction.DOUBLE)
        return actions

    def get_last_result(self, player_id: str) -> Optional[HandResult]:
        """上一轮结算结果，玩家不存在或尚未结算时返回None"""
        player = self._lifecycle.get_player(player_id)
        if player is None or not isinstance(player.extension, BlackjackPlayerState):
            return None
        return player.extension.last_result

    def get_game_state(self) -> Dict[str, Any]:
        """
        获取游戏状态快照

        庄家未翻牌时只包含明牌.

        Returns:
            Dict[str, Any]: 供界面渲染的状态
        """
        dealer_cards = self._dealer.hand.all_cards
        if not self._dealer_revealed:
            dealer_cards = dealer_cards[:1]
        dealer_score = self.get_dealer_score() if self._dealer_revealed else None

        players = []
        for player in self._lifecycle.players:
            last_result = self.get_last_result(player.id)
            players.append({
                'id': player.id,
                'name': player.name,
                'cards': [dict(card.properties) for card in player.hand],
                'hand_value': calculate_hand_score(player.hand.all_cards).value,
                'status': player.status.value,
                'score': player.score,
                'last_result': last_result.value if last_result else None,
                'available_actions': [a.value for a in self.get_available_actions(player.id)],
            })

        return {
            'game_id': self._lifecycle.game_id,
            'state': self._lifecycle.state.value,
            'round': self._round,
            'round_over': self._round_over,
            'shoe_size': self._shoe.size,
            'dealer': {
                'cards': [dict(card.properties) for card in dealer_cards],
                'revealed': self._dealer_revealed,
                'hand_value': dealer_score.value if dealer_score else None,
            },
            'players': players,
        }
