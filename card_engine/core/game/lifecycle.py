"""
Game Lifecycle - 游戏生命周期状态机

所有游戏共用的状态机：管理玩家的加入与离开、状态转换、回合顺序和事件通知.
具体游戏通过GameHooks协议接入开始、结束和回合切换三个时机.

状态转换:
    SETUP -> READY     玩家数达到min_players时自动转换
    READY -> SETUP     移除玩家后不足min_players时自动转换
    READY -> PLAYING   start()
    PLAYING <-> PAUSED pause() / resume()
    PLAYING/PAUSED -> ENDED  end()
"""

from datetime import datetime
import logging
from typing import List, Optional, Protocol
import uuid

from ..events import EventBus, EventListener, GameEvent, GameEventType
from ..exceptions import (
    CapacityExceededError,
    InvalidArgumentError,
    PlayerNotFoundError,
    StateConflictError,
)
from .player import Player
from .types import GameConfig, GameResult, GameState, PlayerResult


class GameHooks(Protocol):
    """具体游戏实现的生命周期回调"""

    def on_start(self) -> None:
        """游戏进入PLAYING之后调用，用于发初始手牌等"""
        ...

    def on_end(self) -> None:
        """游戏进入ENDED之后调用"""
        ...

    def on_turn_changed(self) -> None:
        """next_turn()切换当前玩家之后调用"""
        ...


class GameLifecycle:
    """
    游戏生命周期状态机

    所有非法的状态转换都会抛出StateConflictError，且不产生任何修改.
    """

    def __init__(self, config: GameConfig, hooks: GameHooks,
                 event_bus: Optional[EventBus] = None):
        """
        初始化状态机

        Args:
            config: 游戏配置
            hooks: 生命周期回调
            event_bus: 事件总线，为None时创建新的
        """
        self._game_id = f"game_{uuid.uuid4().hex[:12]}"
        self._config = config
        self._hooks = hooks
        self._event_bus = event_bus if event_bus is not None else EventBus()
        self._state = GameState.SETUP
        self._players: List[Player] = []
        self._current_player_index = 0
        self._start_time: Optional[datetime] = None
        self._end_time: Optional[datetime] = None
        self._logger = logging.getLogger(__name__)

    # ---- 属性 ----

    @property
    def game_id(self) -> str:
        return self._game_id

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def players(self) -> List[Player]:
        """玩家列表的副本(按加入顺序)"""
        return list(self._players)

    @property
    def current_player(self) -> Optional[Player]:
        if 0 <= self._current_player_index < len(self._players):
            return self._players[self._current_player_index]
        return None

    @property
    def current_player_index(self) -> int:
        return self._current_player_index

    @property
    def player_count(self) -> int:
        return len(self._players)

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def has_started(self) -> bool:
        """游戏是否已经开始过(PLAYING、PAUSED或ENDED)"""
        return self._state in (GameState.PLAYING, GameState.PAUSED, GameState.ENDED)

    @property
    def has_ended(self) -> bool:
        return self._state == GameState.ENDED

    @property
    def start_time(self) -> Optional[datetime]:
        return self._start_time

    @property
    def end_time(self) -> Optional[datetime]:
        return self._end_time

    # ---- 玩家管理 ----

    def add_player(self, player: Player) -> None:
        """
        添加玩家

        Args:
            player: 要加入的玩家

        Raises:
            StateConflictError: 游戏已经开始
            CapacityExceededError: 已达到最大玩家数
            InvalidArgumentError: 玩家ID重复
        """
        if self.has_started:
            raise StateConflictError(
                f"Cannot add player after game has started (state: {self._state.value})"
            )

        if len(self._players) >= self._config.max_players:
            raise CapacityExceededError(
                f"Maximum number of players ({self._config.max_players}) reached"
            )

        if any(p.id == player.id for p in self._players):
            raise InvalidArgumentError(f"Player with ID {player.id} already exists in game")

        self._players.append(player)
        self._logger.debug(f"Player {player.id} joined game {self._game_id}")
        self.emit(GameEventType.PLAYER_JOINED, {'player': player.to_dict()})

        if len(self._players) >= self._config.min_players and self._state == GameState.SETUP:
            self._change_state(GameState.READY)

    def remove_player(self, player_id: str) -> Player:
        """
        移除玩家

        Args:
            player_id: 玩家ID

        Returns:
            Player: 被移除的玩家

        Raises:
            StateConflictError: 游戏已经开始
            PlayerNotFoundError: 玩家不存在
        """
        if self.has_started:
            raise StateConflictError(
                f"Cannot remove player after game has started (state: {self._state.value})"
            )

        player = self.require_player(player_id)
        self._players.remove(player)
        self._logger.debug(f"Player {player_id} left game {self._game_id}")
        self.emit(GameEventType.PLAYER_LEFT, {'player': player.to_dict()})

        if len(self._players) < self._config.min_players and self._state == GameState.READY:
            self._change_state(GameState.SETUP)

        return player

    def get_player(self, player_id: str) -> Optional[Player]:
        """按ID查找玩家，不存在时返回None"""
        return next((p for p in self._players if p.id == player_id), None)

    def require_player(self, player_id: str) -> Player:
        """
        按ID查找玩家

        Raises:
            PlayerNotFoundError: 玩家不存在
        """
        player = self.get_player(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return player

    # ---- 状态转换 ----

    def start(self) -> None:
        """
        开始游戏

        Raises:
            StateConflictError: 当前不是READY状态或玩家不足
        """
        if self._state != GameState.READY:
            raise StateConflictError(f"Cannot transition to PLAYING from state: {self._state.value}")

        if len(self._players) < self._config.min_players:
            raise StateConflictError(
                f"Cannot transition to PLAYING: minimum {self._config.min_players} players required"
            )

        self._state = GameState.PLAYING
        self._start_time = datetime.now()
        self._current_player_index = 0
        self._logger.info(f"Game {self._game_id} started with {len(self._players)} player(s)")
        self.emit(GameEventType.GAME_STARTED, {'timestamp': self._start_time})
        self.emit(GameEventType.STATE_CHANGED, {'state': self._state.value})

        self._hooks.on_start()

    def pause(self) -> None:
        """
        暂停游戏

        Raises:
            StateConflictError: 当前不是PLAYING状态
        """
        if self._state != GameState.PLAYING:
            raise StateConflictError(f"Cannot transition to PAUSED from state: {self._state.value}")

        self._state = GameState.PAUSED
        self.emit(GameEventType.GAME_PAUSED)

    def resume(self) -> None:
        """
        恢复游戏

        Raises:
            StateConflictError: 当前不是PAUSED状态
        """
        if self._state != GameState.PAUSED:
            raise StateConflictError(f"Cannot transition to PLAYING from state: {self._state.value}")

        self._state = GameState.PLAYING
        self.emit(GameEventType.GAME_RESUMED)

    def end(self) -> None:
        """
        结束游戏

        Raises:
            StateConflictError: 游戏尚未开始或已经结束
        """
        if not self.has_started or self.has_ended:
            raise StateConflictError(f"Cannot transition to ENDED from state: {self._state.value}")

        self._state = GameState.ENDED
        self._end_time = datetime.now()
        self._logger.info(f"Game {self._game_id} ended")
        self.emit(GameEventType.GAME_ENDED, {'timestamp': self._end_time})

        self._hooks.on_end()

    def _change_state(self, new_state: GameState) -> None:
        old_state = self._state
        self._state = new_state
        self._logger.debug(f"Game {self._game_id}: {old_state.value} -> {new_state.value}")
        self.emit(GameEventType.STATE_CHANGED, {'state': new_state.value})

    # ---- 回合 ----

    def next_turn(self) -> None:
        """
        轮到下一位玩家，最后一位之后回到0

        Raises:
            StateConflictError: 没有玩家
        """
        if not self._players:
            raise StateConflictError("Cannot advance turn: no players in game")

        previous_index = self._current_player_index
        self._current_player_index = (self._current_player_index + 1) % len(self._players)
        self._emit_turn_changed(previous_index)

        self._hooks.on_turn_changed()

    def set_current_player(self, index: int) -> None:
        """
        直接指定当前玩家，不触发on_turn_changed回调

        Raises:
            InvalidArgumentError: 下标越界
        """
        if index < 0 or index >= len(self._players):
            raise InvalidArgumentError(f"Invalid player index: {index}")

        previous_index = self._current_player_index
        self._current_player_index = index
        self._emit_turn_changed(previous_index)

    def _emit_turn_changed(self, previous_index: int) -> None:
        previous = self._players[previous_index] if previous_index < len(self._players) else None
        current = self.current_player
        self.emit(GameEventType.TURN_CHANGED, {
            'previous_player': previous.to_dict() if previous else None,
            'current_player': current.to_dict() if current else None,
            'turn_index': self._current_player_index,
        })

    # ---- 事件 ----

    def on(self, event_type: GameEventType, listener: EventListener) -> None:
        """注册监听器，同一类型的监听器按注册顺序调用"""
        self._event_bus.subscribe(event_type, listener)

    def off(self, event_type: GameEventType, listener: EventListener) -> None:
        """注销监听器，未注册过时不做任何操作"""
        self._event_bus.unsubscribe(event_type, listener)

    def emit(self, event_type: GameEventType, data: Optional[dict] = None) -> GameEvent:
        """构造事件记录并分发给监听器"""
        return self._event_bus.emit(event_type, data)

    # ---- 结算 ----

    def get_result(self) -> GameResult:
        """
        获取结算结果

        分数最高且大于0的玩家(可能并列)标记为获胜者.

        Raises:
            StateConflictError: 游戏尚未结束
        """
        if not self.has_ended:
            raise StateConflictError(
                f"Cannot get result before game has ended (state: {self._state.value})"
            )

        best_score = max((p.score for p in self._players), default=0)
        return GameResult(
            game_id=self._game_id,
            start_time=self._start_time,
            end_time=self._end_time,
            players=[
                PlayerResult(
                    player_id=p.id,
                    score=p.score,
                    winner=best_score > 0 and p.score == best_score,
                )
                for p in self._players
            ],
        )
