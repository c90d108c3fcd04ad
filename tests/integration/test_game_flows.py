"""
游戏流程集成测试.

从建局到结算完整地运行21点和GridRunner，验证生命周期、事件和计分的协作。
"""

import pytest

from card_engine.core.events import EventBus, GameEventType
from card_engine.core.exceptions import StateConflictError
from card_engine.core.game import GameState, Player, PlayerStatus
from card_engine.games.blackjack import BlackjackConfig, BlackjackGame, HandResult
from card_engine.games.gridrunner import (
    GridGame,
    GridGameConfig,
    MovementSpecial,
    Position,
    create_movement_card,
)


@pytest.mark.integration
class TestBlackjackFlow:
    """21点多轮流程测试类."""

    def test_several_rounds_with_seed(self):
        """测试多轮游戏中每轮都能结算，分数只增不减."""
        game = BlackjackGame(BlackjackConfig(num_decks=1, random_seed=2024))
        game.add_player(Player("p1", "Alice"))
        game.add_player(Player("p2", "Bob"))
        game.start()

        previous_scores = {"p1": 0, "p2": 0}
        for _ in range(10):
            for player in game.players:
                if game.get_available_actions(player.id):
                    game.stand(player.id)
            assert game.is_round_over

            for player in game.players:
                assert game.get_last_result(player.id) in (
                    HandResult.WIN, HandResult.LOSE, HandResult.PUSH, HandResult.BLACKJACK,
                )
                assert player.score >= previous_scores[player.id]
                previous_scores[player.id] = player.score

            game.new_round()

        assert game.round == 11
        game.end()
        result = game.get_result()
        assert {p.player_id for p in result.players} == {"p1", "p2"}

    def test_shoe_replaced_when_low(self):
        """测试牌靴不足时发牌前换新牌靴."""
        game = BlackjackGame(BlackjackConfig(num_decks=1, random_seed=8))
        game.add_player(Player("p1", "Alice"))
        game.start()

        game.shoe.draw_many(game.shoe.size - 5)
        game.new_round()

        assert game.shoe.size == 52 - 4

    def test_pause_blocks_actions(self):
        """测试暂停时不能行动，恢复后可以."""
        game = BlackjackGame(BlackjackConfig(num_decks=1, random_seed=21))
        game.add_player(Player("p1", "Alice"))
        game.start()
        game.pause()

        with pytest.raises(StateConflictError):
            game.new_round()

        game.resume()
        game.new_round()
        assert game.state == GameState.PLAYING


@pytest.mark.integration
class TestGridRunnerFlow:
    """GridRunner完整流程测试类."""

    def test_race_to_goal(self):
        """测试两名玩家轮流移动，先到达终点者获胜."""
        bus = EventBus()
        game = GridGame(GridGameConfig(
            width=3, height=3,
            start_positions=[Position(0, 0), Position(2, 0)],
            goal_positions=[Position(2, 2)],
            checkpoints=[Position(0, 1)],
            random_seed=3,
        ), event_bus=bus)
        game.add_player(Player("p1", "Alice"))
        game.add_player(Player("p2", "Bob"))
        game.start()

        p1 = game.get_player("p1")
        p2 = game.get_player("p2")
        p1.hand.add(create_movement_card("a1", 1))
        p2.hand.add(create_movement_card("b1", 1))

        assert game.play_card("p1", "a1", Position(0, 1)).success
        assert game.play_card("p2", "b1", Position(2, 1)).success

        p1.hand.add(create_movement_card("a2", 2, special=MovementSpecial.TELEPORT))
        assert game.play_card("p1", "a2", Position(1, 2)).success
        assert not game.has_ended

        p2.hand.add(create_movement_card("b2", 1))
        result = game.play_card("p2", "b2", Position(2, 2))

        assert result.success
        assert game.has_ended
        assert game.get_player_score("p1") == 25
        assert game.get_player_score("p2") == 100
        assert [w.player_id for w in game.get_result().winners] == ["p2"]

        turn_events = bus.get_history(GameEventType.TURN_CHANGED)
        assert len(turn_events) == 3
        assert bus.get_history(GameEventType.GAME_ENDED)

    def test_player_blocks_path(self):
        """测试被其他玩家占据的格子不可经过."""
        game = GridGame(GridGameConfig(
            width=3, height=1,
            start_positions=[Position(0, 0), Position(1, 0)],
            goal_positions=[Position(2, 0)],
            random_seed=4,
        ))
        game.add_player(Player("p1", "Alice"))
        game.add_player(Player("p2", "Bob"))
        game.start()

        game.get_player("p1").hand.add(create_movement_card("a1", 2))
        result = game.play_card("p1", "a1", Position(2, 0))
        assert not result.success
        assert game.current_player.id == "p1"

        game.get_player("p1").hand.add(create_movement_card("j1", 2, special=MovementSpecial.JUMP))
        assert game.play_card("p1", "j1", Position(2, 0)).success
        assert game.has_ended


@pytest.mark.integration
def test_blackjack_all_players_folded_round():
    """测试唯一的玩家爆牌后庄家仍翻牌结算."""
    game = BlackjackGame(BlackjackConfig(num_decks=1, random_seed=99))
    game.add_player(Player("p1", "Alice"))
    game.start()

    while not game.is_round_over:
        game.hit("p1")

    player = game.get_player("p1")
    assert game.is_dealer_revealed
    assert player.status in (PlayerStatus.FOLDED, PlayerStatus.ACTIVE)
