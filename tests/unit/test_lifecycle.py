"""
游戏生命周期状态机单元测试.

测试玩家管理、状态转换、回合轮转、事件通知和结算。
"""

from unittest.mock import Mock

import pytest

from card_engine.core.events import EventBus, GameEventType
from card_engine.core.exceptions import (
    CapacityExceededError,
    GameConfigError,
    InvalidArgumentError,
    PlayerNotFoundError,
    StateConflictError,
)
from card_engine.core.game import (
    GameConfig,
    GameLifecycle,
    GameState,
    LifecycleFacade,
    Player,
)


def _lifecycle(min_players=2, max_players=3, hooks=None):
    return GameLifecycle(GameConfig(min_players=min_players, max_players=max_players),
                         hooks=hooks or Mock())


@pytest.mark.unit
@pytest.mark.fast
class TestGameConfig:
    """GameConfig测试类."""

    def test_defaults(self):
        """测试默认值."""
        config = GameConfig()
        assert config.min_players == 1
        assert config.max_players == 8
        assert config.random_seed is None

    def test_invalid_config(self):
        """测试无效配置."""
        with pytest.raises(GameConfigError):
            GameConfig(min_players=0)
        with pytest.raises(GameConfigError):
            GameConfig(min_players=3, max_players=2)

    def test_seeded_rng(self):
        """测试设置种子后随机数可重现."""
        config = GameConfig(random_seed=9)
        assert config.create_rng().random() == config.create_rng().random()


@pytest.mark.unit
@pytest.mark.fast
class TestGameLifecycle:
    """GameLifecycle测试类."""

    def setup_method(self):
        """测试前设置."""
        self.hooks = Mock()
        self.lifecycle = _lifecycle(hooks=self.hooks)

    def _add_players(self, count):
        for i in range(count):
            self.lifecycle.add_player(Player(f"p{i + 1}", f"Player {i + 1}"))

    def test_initial_state(self):
        """测试初始状态."""
        assert self.lifecycle.state == GameState.SETUP
        assert self.lifecycle.game_id.startswith("game_")
        assert self.lifecycle.players == []
        assert self.lifecycle.current_player is None
        assert not self.lifecycle.has_started

    def test_auto_ready_when_min_players_reached(self):
        """测试达到最小人数时自动进入READY."""
        self._add_players(1)
        assert self.lifecycle.state == GameState.SETUP
        self._add_players(2)
        assert self.lifecycle.state == GameState.READY

    def test_back_to_setup_when_player_removed(self):
        """测试移除玩家后人数不足回到SETUP."""
        self._add_players(2)
        removed = self.lifecycle.remove_player("p1")
        assert removed.id == "p1"
        assert self.lifecycle.state == GameState.SETUP

    def test_add_player_errors(self):
        """测试添加玩家的各种错误."""
        self._add_players(2)
        with pytest.raises(InvalidArgumentError):
            self.lifecycle.add_player(Player("p1", "Duplicate"))

        self.lifecycle.add_player(Player("p3", "Third"))
        with pytest.raises(CapacityExceededError):
            self.lifecycle.add_player(Player("p4", "Fourth"))

    def test_add_player_after_start(self):
        """测试开始后不能添加或移除玩家."""
        self._add_players(2)
        self.lifecycle.start()
        with pytest.raises(StateConflictError):
            self.lifecycle.add_player(Player("p3", "Late"))
        with pytest.raises(StateConflictError):
            self.lifecycle.remove_player("p1")
        assert self.lifecycle.player_count == 2

    def test_remove_unknown_player(self):
        """测试移除不存在的玩家."""
        with pytest.raises(PlayerNotFoundError) as exc_info:
            self.lifecycle.remove_player("ghost")
        assert exc_info.value.player_id == "ghost"
        assert "Player ghost not found" in str(exc_info.value)

    def test_get_and_require_player(self):
        """测试查找玩家."""
        self._add_players(2)
        assert self.lifecycle.get_player("p2").name == "Player 2"
        assert self.lifecycle.get_player("ghost") is None
        with pytest.raises(PlayerNotFoundError):
            self.lifecycle.require_player("ghost")

    def test_players_property_is_copy(self):
        """测试玩家列表返回副本."""
        self._add_players(2)
        self.lifecycle.players.clear()
        assert self.lifecycle.player_count == 2

    def test_start(self):
        """测试开始游戏调用on_start."""
        self._add_players(2)
        self.lifecycle.start()

        assert self.lifecycle.state == GameState.PLAYING
        assert self.lifecycle.has_started
        assert self.lifecycle.start_time is not None
        assert self.lifecycle.current_player.id == "p1"
        self.hooks.on_start.assert_called_once()

    def test_start_from_setup_fails(self):
        """测试玩家不足时不能开始."""
        self._add_players(1)
        with pytest.raises(StateConflictError, match="Cannot transition to PLAYING from state: SETUP"):
            self.lifecycle.start()
        self.hooks.on_start.assert_not_called()

    def test_pause_and_resume(self):
        """测试暂停和恢复."""
        self._add_players(2)
        with pytest.raises(StateConflictError):
            self.lifecycle.pause()

        self.lifecycle.start()
        self.lifecycle.pause()
        assert self.lifecycle.state == GameState.PAUSED
        with pytest.raises(StateConflictError):
            self.lifecycle.pause()

        self.lifecycle.resume()
        assert self.lifecycle.state == GameState.PLAYING
        with pytest.raises(StateConflictError):
            self.lifecycle.resume()

    def test_end(self):
        """测试结束游戏."""
        self._add_players(2)
        with pytest.raises(StateConflictError):
            self.lifecycle.end()

        self.lifecycle.start()
        self.lifecycle.pause()
        self.lifecycle.end()

        assert self.lifecycle.state == GameState.ENDED
        assert self.lifecycle.has_ended
        assert self.lifecycle.end_time is not None
        self.hooks.on_end.assert_called_once()

        with pytest.raises(StateConflictError):
            self.lifecycle.end()
        with pytest.raises(StateConflictError):
            self.lifecycle.start()

    def test_next_turn_wraps(self):
        """测试回合轮转在最后一位之后回到第一位."""
        self._add_players(3)
        self.lifecycle.start()

        order = []
        for _ in range(4):
            self.lifecycle.next_turn()
            order.append(self.lifecycle.current_player.id)

        assert order == ["p2", "p3", "p1", "p2"]
        assert self.hooks.on_turn_changed.call_count == 4

    def test_next_turn_without_players(self):
        """测试没有玩家时不能轮转."""
        with pytest.raises(StateConflictError):
            self.lifecycle.next_turn()

    def test_set_current_player(self):
        """测试直接指定当前玩家不触发回调."""
        self._add_players(3)
        self.lifecycle.set_current_player(2)
        assert self.lifecycle.current_player_index == 2
        self.hooks.on_turn_changed.assert_not_called()

        with pytest.raises(InvalidArgumentError):
            self.lifecycle.set_current_player(3)
        with pytest.raises(InvalidArgumentError):
            self.lifecycle.set_current_player(-1)

    def test_event_sequence(self):
        """测试状态转换发出的事件顺序."""
        received = []
        for event_type in GameEventType:
            self.lifecycle.on(event_type, lambda e: received.append(e.event_type))

        self._add_players(2)
        self.lifecycle.start()
        self.lifecycle.next_turn()
        self.lifecycle.end()

        assert received == [
            GameEventType.PLAYER_JOINED,
            GameEventType.PLAYER_JOINED,
            GameEventType.STATE_CHANGED,
            GameEventType.GAME_STARTED,
            GameEventType.STATE_CHANGED,
            GameEventType.TURN_CHANGED,
            GameEventType.GAME_ENDED,
        ]

    def test_turn_changed_payload(self):
        """测试回合切换事件数据."""
        listener = Mock()
        self._add_players(2)
        self.lifecycle.on(GameEventType.TURN_CHANGED, listener)
        self.lifecycle.start()
        self.lifecycle.next_turn()

        data = listener.call_args[0][0].data
        assert data['previous_player']['id'] == "p1"
        assert data['current_player']['id'] == "p2"
        assert data['turn_index'] == 1

    def test_off(self):
        """测试注销监听器."""
        listener = Mock()
        self.lifecycle.on(GameEventType.PLAYER_JOINED, listener)
        self.lifecycle.off(GameEventType.PLAYER_JOINED, listener)
        self.lifecycle.off(GameEventType.PLAYER_JOINED, listener)
        self._add_players(1)
        listener.assert_not_called()

    def test_shared_event_bus(self):
        """测试使用外部事件总线."""
        bus = EventBus()
        lifecycle = GameLifecycle(GameConfig(), hooks=Mock(), event_bus=bus)
        lifecycle.add_player(Player("p1", "Solo"))
        assert lifecycle.event_bus is bus
        assert len(bus.get_history(GameEventType.PLAYER_JOINED)) == 1

    def test_result_requires_ended(self):
        """测试结束前不能获取结算."""
        self._add_players(2)
        self.lifecycle.start()
        with pytest.raises(StateConflictError):
            self.lifecycle.get_result()

    def test_result_winners(self):
        """测试最高分且大于0的玩家获胜，可以并列."""
        self._add_players(3)
        self.lifecycle.start()
        self.lifecycle.get_player("p1").add_score(50)
        self.lifecycle.get_player("p3").add_score(50)
        self.lifecycle.end()

        result = self.lifecycle.get_result()
        assert [p.player_id for p in result.winners] == ["p1", "p3"]
        assert result.to_dict()['players'][1] == {'player_id': 'p2', 'score': 0, 'winner': False}

    def test_result_no_winner_when_all_zero(self):
        """测试全部0分时没有获胜者."""
        self._add_players(2)
        self.lifecycle.start()
        self.lifecycle.end()
        assert self.lifecycle.get_result().winners == []


class _CountingGame(LifecycleFacade):
    """只记录回调次数的最小游戏"""

    def __init__(self):
        self.started = 0
        self.turns = 0
        self._lifecycle = GameLifecycle(GameConfig(min_players=1, max_players=2), hooks=self)

    def on_start(self):
        self.started += 1

    def on_end(self):
        pass

    def on_turn_changed(self):
        self.turns += 1


@pytest.mark.unit
@pytest.mark.fast
class TestLifecycleFacade:
    """LifecycleFacade测试类."""

    def test_delegates_to_lifecycle(self):
        """测试生命周期接口委托."""
        game = _CountingGame()
        game.add_player(Player("a", "A"))
        game.add_player(Player("b", "B"))
        assert game.player_count == 2
        assert game.state == GameState.READY

        game.start()
        game.next_turn()
        assert game.started == 1
        assert game.turns == 1
        assert game.current_player.id == "b"
        assert game.lifecycle.game_id == game.game_id

        game.end()
        assert game.has_ended
        assert game.get_result().winners == []
