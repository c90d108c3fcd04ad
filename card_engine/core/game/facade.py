"""
具体游戏对外暴露的生命周期接口

游戏类持有一个GameLifecycle(self._lifecycle)，继承LifecycleFacade后
即可直接在游戏对象上调用add_player、start、on等方法.
"""

from datetime import datetime
from typing import List, Optional

from ..events import EventListener, GameEventType
from .lifecycle import GameLifecycle
from .player import Player
from .types import GameResult, GameState


class LifecycleFacade:
    """把生命周期操作委托给self._lifecycle"""

    _lifecycle: GameLifecycle

    @property
    def lifecycle(self) -> GameLifecycle:
        return self._lifecycle

    @property
    def game_id(self) -> str:
        return self._lifecycle.game_id

    @property
    def state(self) -> GameState:
        return self._lifecycle.state

    @property
    def players(self) -> List[Player]:
        return self._lifecycle.players

    @property
    def current_player(self) -> Optional[Player]:
        return self._lifecycle.current_player

    @property
    def current_player_index(self) -> int:
        return self._lifecycle.current_player_index

    @property
    def player_count(self) -> int:
        return self._lifecycle.player_count

    @property
    def has_started(self) -> bool:
        return self._lifecycle.has_started

    @property
    def has_ended(self) -> bool:
        return self._lifecycle.has_ended

    @property
    def start_time(self) -> Optional[datetime]:
        return self._lifecycle.start_time

    @property
    def end_time(self) -> Optional[datetime]:
        return self._lifecycle.end_time

    def add_player(self, player: Player) -> None:
        self._lifecycle.add_player(player)

    def remove_player(self, player_id: str) -> Player:
        return self._lifecycle.remove_player(player_id)

    def get_player(self, player_id: str) -> Optional[Player]:
        return self._lifecycle.get_player(player_id)

    def require_player(self, player_id: str) -> Player:
        return self._lifecycle.require_player(player_id)

    def start(self) -> None:
        self._lifecycle.start()

    def pause(self) -> None:
        self._lifecycle.pause()

    def resume(self) -> None:
        self._lifecycle.resume()

    def end(self) -> None:
        self._lifecycle.end()

    def next_turn(self) -> None:
        self._lifecycle.next_turn()

    def set_current_player(self, index: int) -> None:
        self._lifecycle.set_current_player(index)

    def on(self, event_type: GameEventType, listener: EventListener) -> None:
        self._lifecycle.on(event_type, listener)

    def off(self, event_type: GameEventType, listener: EventListener) -> None:
        self._lifecycle.off(event_type, listener)

    def get_result(self) -> GameResult:
        return self._lifecycle.get_result()
