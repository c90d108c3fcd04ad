"""卡牌引擎CLI游戏界面.

提供21点和GridRunner的命令行交互，以及自动进行的演示模式。

用法:
    card-engine blackjack [--players N] [--seed S] [--debug]
    card-engine gridrunner [--players N] [--size N] [--hex] [--seed S] [--debug]
    card-engine demo [--seed S]
"""

import argparse
import logging
from typing import Callable, List, Optional, Sequence

from card_engine.core.exceptions import CardEngineError
from card_engine.core.game import Player
from card_engine.games.blackjack import BlackjackConfig, BlackjackGame
from card_engine.games.gridrunner import (
    GridGame,
    GridGameConfig,
    GridType,
    Position,
    get_closest_position,
)
from card_engine.ui.cli.render import CLIRenderer

InputFunc = Callable[[str], str]


class BlackjackCLI:
    """21点CLI.

    每轮依次询问每位ACTIVE玩家的行动，所有玩家结束后显示结算。
    """

    def __init__(self, num_players: int = 1, seed: Optional[int] = None,
                 input_func: Optional[InputFunc] = None):
        self.logger = logging.getLogger(__name__)
        self.input = input_func or input
        self.game = BlackjackGame(BlackjackConfig(random_seed=seed))
        for i in range(num_players):
            name = "You" if num_players == 1 else f"Player {i + 1}"
            self.game.add_player(Player(f"p{i + 1}", name))

    def run(self) -> None:
        """运行游戏主循环."""
        self.logger.info("=== 21点 ===")
        self.game.start()

        while True:
            self._play_round()
            self.logger.info(CLIRenderer.render_blackjack_table(self.game.get_game_state()))
            if not self._ask_yes_no("\n继续下一轮？(y/n): "):
                break
            self.game.new_round()

        self.game.end()
        self._display_result()

    def _play_round(self) -> None:
        while not self.game.is_round_over:
            for player in self.game.players:
                actions = self.game.get_available_actions(player.id)
                if not actions:
                    continue
                self.logger.info(CLIRenderer.render_blackjack_table(self.game.get_game_state()))
                self._handle_player_action(player.id, player.name, [a.value for a in actions])
                if self.game.is_round_over:
                    break

    def _handle_player_action(self, player_id: str, name: str, actions: List[str]) -> None:
        prompt = f"{name} 的行动 ({'/'.join(a.lower() for a in actions)}): "
        while True:
            choice = self.input(prompt).strip().upper()
            if choice not in actions:
                self.logger.info(CLIRenderer.render_error_message(f"无效的行动: {choice}"))
                continue
            try:
                if choice == "HIT":
                    self.game.hit(player_id)
                elif choice == "STAND":
                    self.game.stand(player_id)
                else:
                    self.game.double(player_id)
                return
            except CardEngineError as e:
                self.logger.info(CLIRenderer.render_error_message(str(e)))
                return

    def _ask_yes_no(self, prompt: str) -> bool:
        while True:
            choice = self.input(prompt).strip().lower()
            if choice in ('y', 'yes'):
                return True
            if choice in ('n', 'no'):
                return False
            self.logger.info("请输入 y 或 n")

    def _display_result(self) -> None:
        result = self.game.get_result()
        self.logger.info(CLIRenderer.render_game_over(f"共 {self.game.round} 轮"))
        for entry in result.players:
            marker = " (获胜)" if entry.winner else ""
            self.logger.info(f"  {entry.player_id}: {entry.score}{marker}")


class GridRunnerCLI:
    """GridRunner CLI.

    当前玩家选择一张手牌，然后从可到达的位置中选择目标。
    """

    def __init__(self, num_players: int = 2, size: int = 10, hex_grid: bool = False,
                 seed: Optional[int] = None, input_func: Optional[InputFunc] = None):
        self.logger = logging.getLogger(__name__)
        self.input = input_func or input
        config = GridGameConfig(
            grid_type=GridType.HEXAGONAL if hex_grid else GridType.SQUARE,
            width=size,
            height=size,
            start_positions=[Position(0, i) for i in range(min(num_players, size))],
            goal_positions=[Position(size - 1, size - 1)],
            blocked_cells=[Position(size // 2, r) for r in range(1, size - 1)],
            random_seed=seed,
        )
        self.game = GridGame(config)
        for i in range(num_players):
            self.game.add_player(Player(f"p{i + 1}", f"Runner {i + 1}"))

    def _positions(self) -> List[Optional[Position]]:
        return [self.game.get_player_position(p.id) for p in self.game.players]

    def run(self) -> None:
        """运行游戏主循环."""
        self.logger.info("=== GridRunner ===")
        self.game.start()

        while not self.game.has_ended:
            self.logger.info(CLIRenderer.render_grid(self.game.get_grid(), self._positions()))
            self.logger.info(CLIRenderer.render_gridrunner_status(self.game.get_game_state()))
            if not self._take_turn():
                self.game.end()

        self.logger.info(CLIRenderer.render_grid(self.game.get_grid(), self._positions()))
        winners = [p.player_id for p in self.game.get_result().winners]
        self.logger.info(CLIRenderer.render_game_over(f"获胜者: {', '.join(winners) or '无'}"))

    def _take_turn(self) -> bool:
        """处理当前玩家的一回合，输入q时返回False."""
        player = self.game.current_player
        cards = player.hand.all_cards
        self.logger.info(f"\n{player.name} 的手牌:\n{CLIRenderer.render_hand(cards, numbered=True)}")

        if not cards:
            self.logger.info("没有手牌，跳过回合")
            self.game.next_turn()
            return True

        choice = self.input("选择卡牌编号 (p跳过, q退出): ").strip().lower()
        if choice == 'q':
            return False
        if choice == 'p':
            self.game.next_turn()
            return True
        if not choice.isdigit() or not 1 <= int(choice) <= len(cards):
            self.logger.info(CLIRenderer.render_error_message(f"无效的编号: {choice}"))
            return True

        card_id = cards[int(choice) - 1].id
        reachable = self.game.get_reachable_positions(player.id, card_id)
        self.logger.info(CLIRenderer.render_grid(self.game.get_grid(), self._positions(), reachable))

        target_text = self.input("目标坐标 q,r: ").strip()
        try:
            q, r = (int(part) for part in target_text.split(','))
        except ValueError:
            self.logger.info(CLIRenderer.render_error_message(f"无效的坐标: {target_text}"))
            return True

        result = self.game.play_card(player.id, card_id, Position(q, r))
        if not result.success:
            self.logger.info(CLIRenderer.render_error_message(result.message))
        return True


def run_demo(seed: Optional[int] = None) -> None:
    """自动演示：一轮21点(全部停牌)和一局小型GridRunner."""
    logger = logging.getLogger(__name__)

    blackjack = BlackjackGame(BlackjackConfig(num_decks=1, random_seed=seed))
    blackjack.add_player(Player("p1", "Alice"))
    blackjack.add_player(Player("p2", "Bob"))
    blackjack.start()
    for player in blackjack.players:
        if blackjack.get_available_actions(player.id):
            blackjack.stand(player.id)
    logger.info(CLIRenderer.render_blackjack_table(blackjack.get_game_state()))
    blackjack.end()

    grid_game = GridGame(GridGameConfig(
        width=5,
        height=5,
        start_positions=[Position(0, 0), Position(0, 4)],
        goal_positions=[Position(4, 4)],
        blocked_cells=[Position(2, 1), Position(2, 2), Position(2, 3)],
        checkpoints=[Position(2, 0)],
        deck_size=30,
        random_seed=seed,
    ))
    grid_game.add_player(Player("p1", "Alice"))
    grid_game.add_player(Player("p2", "Bob"))
    grid_game.start()

    goal = Position(4, 4)
    max_turns = 100
    while not grid_game.has_ended and grid_game.turn_count < max_turns:
        player = grid_game.current_player
        best = None
        for card in player.hand:
            reachable = [
                p for p in grid_game.get_reachable_positions(player.id, card.id)
                if grid_game.get_grid().is_walkable(p)
            ]
            closest = get_closest_position(grid_game.get_grid(), goal, reachable)
            if closest is not None and (best is None or closest[1] < best[2]):
                best = (card.id, closest[0], closest[1])

        if best is None or not grid_game.play_card(player.id, best[0], best[1]).success:
            grid_game.next_turn()

    logger.info(CLIRenderer.render_grid(
        grid_game.get_grid(),
        [grid_game.get_player_position(p.id) for p in grid_game.players],
    ))
    logger.info(CLIRenderer.render_gridrunner_status(grid_game.get_game_state()))
    if not grid_game.has_ended:
        grid_game.end()


def build_parser() -> argparse.ArgumentParser:
    """创建命令行参数解析器."""
    parser = argparse.ArgumentParser(prog="card-engine", description="回合制卡牌游戏引擎")
    parser.add_argument("--debug", action="store_true", help="输出调试日志")
    parser.add_argument("--seed", type=int, default=None, help="随机种子，用于可重现的游戏")

    subparsers = parser.add_subparsers(dest="game", required=True)

    blackjack = subparsers.add_parser("blackjack", help="21点")
    blackjack.add_argument("--players", type=int, default=1, help="玩家数 (1-7)")

    gridrunner = subparsers.add_parser("gridrunner", help="GridRunner")
    gridrunner.add_argument("--players", type=int, default=2, help="玩家数 (1-4)")
    gridrunner.add_argument("--size", type=int, default=10, help="网格边长")
    gridrunner.add_argument("--hex", action="store_true", help="使用六边形网格")

    subparsers.add_parser("demo", help="自动演示")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI游戏主入口."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    else:
        logging.basicConfig(level=logging.INFO, format='%(message)s')

    try:
        if args.game == "blackjack":
            BlackjackCLI(args.players, args.seed).run()
        elif args.game == "gridrunner":
            GridRunnerCLI(args.players, args.size, args.hex, args.seed).run()
        else:
            run_demo(args.seed)
    except (KeyboardInterrupt, EOFError):
        print("\n游戏被中断")
        return 130
    except CardEngineError as e:
        print(f"游戏出错: {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
