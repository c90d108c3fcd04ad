"""卡牌引擎CLI渲染模块.

这个模块负责将卡牌、手牌、游戏状态快照和网格渲染为命令行文本，
实现显示逻辑与核心游戏逻辑的分离。
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from card_engine.core.cards import Card, CardCollection
from card_engine.core.cards.types import suit_symbol
from card_engine.games.gridrunner import CellType, Grid, HexGrid, Position

CELL_SYMBOLS = {
    CellType.EMPTY: '·',
    CellType.BLOCKED: '█',
    CellType.START: 'S',
    CellType.GOAL: 'G',
    CellType.CHECKPOINT: 'C',
}
HIGHLIGHT_SYMBOL = '*'


class CLIRenderer:
    """CLI渲染器.

    所有渲染方法都是纯函数，仅依赖传入的数据，返回字符串。
    """

    @staticmethod
    def format_properties(properties: Mapping[str, Any]) -> str:
        """格式化卡牌属性.

        标准扑克牌显示为点数加花色符号，移动卡显示名称和距离，
        其他卡牌按 key: value 列出。

        Args:
            properties: 卡牌属性

        Returns:
            格式化的牌面字符串
        """
        if 'rank' in properties and 'suit' in properties:
            return f"{properties['rank']}{suit_symbol(properties['suit'])}"

        if properties.get('type') == 'movement':
            text = f"{properties.get('name')} [{properties.get('distance')}]"
            special = properties.get('special')
            if special is not None:
                text += f" ({getattr(special, 'value', special)})"
            return text

        return ", ".join(f"{key}: {value}" for key, value in properties.items())

    @staticmethod
    def format_card(card: Card) -> str:
        """格式化单张牌的显示."""
        return CLIRenderer.format_properties(card.properties)

    @staticmethod
    def render_hand(cards: Iterable[Card], numbered: bool = False) -> str:
        """渲染一组牌.

        Args:
            cards: 卡牌
            numbered: 为True时每张牌一行并带编号(从1开始)

        Returns:
            格式化的手牌字符串，没有牌时为"(空)"
        """
        formatted = [CLIRenderer.format_card(card) for card in cards]
        if not formatted:
            return "(空)"
        if numbered:
            return "\n".join(f"  {i + 1}. {text}" for i, text in enumerate(formatted))
        return " ".join(formatted)

    @staticmethod
    def render_collection_summary(name: str, collection: CardCollection) -> str:
        """渲染牌组/弃牌堆摘要."""
        top = collection.peek()
        top_text = CLIRenderer.format_card(top) if top is not None else "-"
        return f"{name}: {collection.size} 张 (顶部: {top_text})"

    @staticmethod
    def render_blackjack_table(state: Dict[str, Any]) -> str:
        """渲染21点牌桌.

        Args:
            state: BlackjackGame.get_game_state() 返回的快照

        Returns:
            格式化的牌桌字符串
        """
        dealer = state['dealer']
        dealer_cards = " ".join(CLIRenderer.format_properties(c) for c in dealer['cards'])
        if not dealer['revealed'] and dealer['cards']:
            dealer_cards += " ??"
        dealer_value = dealer['hand_value'] if dealer['hand_value'] is not None else "?"

        lines = [
            f"=== 第 {state['round']} 轮 ===",
            f"庄家: {dealer_cards} ({dealer_value})",
            "",
        ]

        for player in state['players']:
            cards = " ".join(CLIRenderer.format_properties(c) for c in player['cards'])
            line = f"{player['name']}: {cards} ({player['hand_value']}) [{player['status']}] 分数: {player['score']}"
            if state['round_over'] and player['last_result']:
                line += f" -> {player['last_result']}"
            lines.append(line)

        return "\n".join(lines)

    @staticmethod
    def render_grid(grid: Grid, player_positions: Sequence[Optional[Position]] = (),
                    highlight: Optional[Iterable[Position]] = None) -> str:
        """渲染网格.

        玩家显示为编号(从1开始)，格子按类型显示 S/G/C/█/·，
        高亮的空格子显示为 *。六边形网格每行向右缩进一格。

        Args:
            grid: 网格
            player_positions: 按玩家顺序排列的位置
            highlight: 需要高亮的坐标(例如可到达位置)

        Returns:
            格式化的网格字符串
        """
        players = {pos: str(i + 1) for i, pos in enumerate(player_positions) if pos is not None}
        highlighted = set(highlight or ())
        is_hex = isinstance(grid, HexGrid)

        lines = []
        for r in range(grid.height):
            symbols = []
            for q in range(grid.width):
                position = Position(q, r)
                cell = grid.get_cell(position)
                if position in players:
                    symbols.append(players[position])
                elif cell is None:
                    symbols.append(' ')
                elif position in highlighted and cell.cell_type != CellType.BLOCKED:
                    symbols.append(HIGHLIGHT_SYMBOL)
                else:
                    symbols.append(CELL_SYMBOLS[cell.cell_type])
            indent = " " * r if is_hex else ""
            lines.append(f"{r:2d} {indent}{' '.join(symbols)}")

        column_numbers = "   " + " ".join(str(q % 10) for q in range(grid.width))
        lines.append(column_numbers)
        return "\n".join(lines)

    @staticmethod
    def render_gridrunner_status(state: Dict[str, Any]) -> str:
        """渲染GridRunner玩家状态.

        Args:
            state: GridGame.get_game_state() 返回的快照
        """
        lines = [f"阶段: {state['phase']}  回合: {state['turn_count']}  牌组: {state['deck_size']} 张"]
        for i, player in enumerate(state['players']):
            marker = " <-- 当前" if player['id'] == state['current_player_id'] else ""
            lines.append(
                f"  {i + 1}. {player['name']} 位置: {player['position']} "
                f"分数: {player['score']} 手牌: {player['hand_size']}{marker}"
            )
        return "\n".join(lines)

    @staticmethod
    def render_positions(positions: List[Position]) -> str:
        """渲染坐标列表."""
        if not positions:
            return "(无)"
        return " ".join(str(p) for p in positions)

    @staticmethod
    def render_error_message(error: str) -> str:
        """渲染错误信息."""
        return f"错误: {error}"

    @staticmethod
    def render_game_over(reason: str) -> str:
        """渲染游戏结束信息."""
        return f"游戏结束: {reason}"
