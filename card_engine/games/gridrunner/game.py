"""
GridRunner游戏

玩家轮流打出移动卡在网格上移动，第一个到达任意终点的玩家获胜并立即结束游戏.
"""

import logging
import random
from typing import Any, Dict, List, Optional

from ...core.cards.card import Card
from ...core.cards.deck import Deck
from ...core.events import EventBus
from ...core.game.facade import LifecycleFacade
from ...core.game.lifecycle import GameLifecycle
from ...core.game.player import Player
from ...core.game.types import GameState
from .deck_builder import create_standard_deck
from .grid import Grid, create_grid
from .pathfinding import (
    calculate_position_score,
    find_path,
    get_reachable_positions,
    is_valid_move,
)
from .types import (
    CellType,
    GridCell,
    GridGameConfig,
    GridGamePhase,
    GridPlayerState,
    MoveResult,
    MovementSpecial,
    Position,
)


class GridGame(LifecycleFacade):
    """
    GridRunner游戏

    回合严格轮转，只有当前玩家可以出牌. 每次轮到新玩家时，牌组不为空则该玩家摸一张.
    """

    def __init__(self, config: Optional[GridGameConfig] = None,
                 rng: Optional[random.Random] = None,
                 event_bus: Optional[EventBus] = None):
        """
        初始化游戏

        Args:
            config: 游戏配置，默认10x10方格、1-4人、起点(0,0)、终点(9,9)
            rng: 随机数生成器，为None时根据config.random_seed创建
            event_bus: 事件总线
        """
        self._grid_config = config or GridGameConfig()
        self._rng = rng if rng is not None else self._grid_config.create_rng()
        self._lifecycle = GameLifecycle(self._grid_config, hooks=self, event_bus=event_bus)
        self._logger = logging.getLogger(__name__)

        self._phase = GridGamePhase.SETUP
        self._turn_count = 0

        self._grid = create_grid(
            self._grid_config.grid_type,
            self._grid_config.width,
            self._grid_config.height,
            self._grid_config.allow_diagonal_movement,
        )
        self._setup_grid()

        self._deck = create_standard_deck(self._grid_config.deck_size,
                                          self._grid_config.grid_type,
                                          rng=self._rng)
        self._deck.shuffle()

    def _setup_grid(self) -> None:
        config = self._grid_config
        for position in config.start_positions:
            self._grid.set_cell_type(position, CellType.START)
        for position in config.goal_positions:
            self._grid.set_cell_type(position, CellType.GOAL)
        for position in config.blocked_cells:
            self._grid.set_cell_type(position, CellType.BLOCKED)
        for position in config.checkpoints:
            self._grid.set_cell_type(position, CellType.CHECKPOINT)

    # ---- 属性 ----

    @property
    def grid_config(self) -> GridGameConfig:
        return self._grid_config

    @property
    def config(self) -> GridGameConfig:
        return self._grid_config

    @property
    def deck(self) -> Deck:
        return self._deck

    @property
    def turn_count(self) -> int:
        return self._turn_count

    def get_grid(self) -> Grid:
        return self._grid

    def get_phase(self) -> GridGamePhase:
        return self._phase

    # ---- 生命周期回调 ----

    def on_start(self) -> None:
        """把玩家放到起点并发初始手牌"""
        self._phase = GridGamePhase.PLAYING
        self._turn_count = 0

        start_positions = self._grid_config.start_positions
        for index, player in enumerate(self._lifecycle.players):
            start = start_positions[index % len(start_positions)]
            player.extension = GridPlayerState(position=start)
            if not self._grid.occupy_cell(start, player.id):
                self._logger.warning(f"Start cell {start} already occupied, {player.id} shares it")
            self._deal_cards(player, self._grid_config.hand_size)

    def on_end(self) -> None:
        self._phase = GridGamePhase.ENDED

    def on_turn_changed(self) -> None:
        self._turn_count += 1
        current = self._lifecycle.current_player
        if current is not None and not self._deck.is_empty:
            self._deal_cards(current, 1)

    def _deal_cards(self, player: Player, count: int) -> None:
        for _ in range(count):
            card = self._deck.draw()
            if card is None:
                break
            if not player.hand.try_add(card):
                self._deck.add(card)
                break

    # ---- 出牌 ----

    @staticmethod
    def _state_of(player: Player) -> Optional[GridPlayerState]:
        if isinstance(player.extension, GridPlayerState):
            return player.extension
        return None

    @staticmethod
    def _find_card(player: Player, card_id: str) -> Optional[Card]:
        return player.hand.find(lambda card: card.get_property('id') == card_id)

    def play_card(self, player_id: str, card_id: str, target: Position) -> MoveResult:
        """
        打出移动卡移动到目标位置

        被拒绝时返回success=False的结果且不修改状态. 成功时移动玩家，
        到达终点则加分并结束游戏，首次到达某个检查点则加分，然后轮到下一位玩家.

        Args:
            player_id: 玩家ID
            card_id: 手牌中卡牌的id
            target: 目标位置

        Returns:
            MoveResult: 移动结果，成功时包含路径和到达的格子
        """
        player = self._lifecycle.get_player(player_id)
        if player is None:
            return MoveResult.rejected("Player not found", end_position=target)

        state = self._state_of(player)
        if self._lifecycle.state != GameState.PLAYING or state is None:
            return MoveResult.rejected("Game is not in progress", end_position=target)

        start = state.position
        current = self._lifecycle.current_player
        if current is None or current.id != player_id:
            return MoveResult.rejected("Not your turn", start, target)

        card = self._find_card(player, card_id)
        if card is None:
            return MoveResult.rejected("Card not found in hand", start, target)

        if not is_valid_move(self._grid, start, target, card.properties):
            self._logger.debug(f"Rejected move of {player_id} from {start} to {target} with {card_id}")
            return MoveResult.rejected("Invalid move for this card", start, target)

        special = card.get_property('special')
        if special == MovementSpecial.TELEPORT:
            path: Optional[List[Position]] = [start, target]
        else:
            path = find_path(self._grid, start, target, card.get_property('distance'),
                             can_jump=special == MovementSpecial.JUMP)
        if path is None:
            return MoveResult.rejected("No valid path to target position", start, target)

        state.position = target
        self._release_cell(start)
        self._grid.occupy_cell(target, player_id)

        cells_reached: List[GridCell] = []
        reached_goal = False
        target_cell = self._grid.get_cell(target)
        if target_cell is not None:
            cells_reached.append(target_cell)
            if target_cell.cell_type == CellType.GOAL:
                player.add_score(calculate_position_score(self._grid, target))
                reached_goal = True
            elif target_cell.cell_type == CellType.CHECKPOINT:
                self._score_checkpoint(player, state, target)

        player.hand.remove_card(card)
        self._logger.debug(f"Player {player_id} moved {start} -> {target}")

        if reached_goal:
            self._logger.info(f"Player {player_id} reached goal {target}")
            self._lifecycle.end()
        else:
            self._lifecycle.next_turn()

        return MoveResult.moved(start, target, path, cells_reached)

    def _release_cell(self, position: Position) -> None:
        """离开格子. 共享起点时格子交给仍停在那里的下一位玩家"""
        self._grid.free_cell(position)
        for other in self._lifecycle.players:
            other_state = self._state_of(other)
            if other_state is not None and other_state.position == position:
                self._grid.occupy_cell(position, other.id)
                self._logger.debug(f"Cell {position} handed over to {other.id}")
                break

    def _score_checkpoint(self, player: Player, state: GridPlayerState, target: Position) -> None:
        checkpoint_index = self._grid_config.checkpoints.index(target)
        if checkpoint_index not in state.checkpoints_reached:
            state.checkpoints_reached.append(checkpoint_index)
            player.add_score(calculate_position_score(self._grid, target))

    # ---- 查询 ----

    def get_reachable_positions(self, player_id: str, card_id: str) -> List[Position]:
        """玩家使用某张手牌可以到达的坐标，玩家或卡牌不存在时返回空列表"""
        player = self._lifecycle.get_player(player_id)
        if player is None:
            return []
        state = self._state_of(player)
        card = self._find_card(player, card_id)
        if state is None or card is None:
            return []

        return get_reachable_positions(
            self._grid,
            state.position,
            card.get_property('distance'),
            can_jump=card.get_property('special') == MovementSpecial.JUMP,
        )

    def get_player_position(self, player_id: str) -> Optional[Position]:
        player = self._lifecycle.get_player(player_id)
        if player is None:
            return None
        state = self._state_of(player)
        return state.position if state else None

    def get_player_score(self, player_id: str) -> int:
        player = self._lifecycle.get_player(player_id)
        return player.score if player else 0

    def get_game_state(self) -> Dict[str, Any]:
        """
        获取游戏状态快照

        Returns:
            Dict[str, Any]: 阶段、回合数、当前玩家和每位玩家的位置与分数
        """
        current = self._lifecycle.current_player
        players = []
        for player in self._lifecycle.players:
            state = self._state_of(player)
            players.append({
                'id': player.id,
                'name': player.name,
                'position': state.position if state else None,
                'score': player.score,
                'hand_size': player.card_count,
                'checkpoints_reached': list(state.checkpoints_reached) if state else [],
            })

        return {
            'game_id': self._lifecycle.game_id,
            'phase': self._phase.value,
            'turn_count': self._turn_count,
            'current_player_id': current.id if current and self._lifecycle.has_started else None,
            'players': players,
            'grid_type': self._grid_config.grid_type.value,
            'grid_dimensions': self._grid.dimensions,
            'deck_size': self._deck.size,
        }
