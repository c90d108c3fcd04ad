"""
Streamlit web interface for the card engine.

This module provides a browser UI for playing Blackjack and GridRunner.
Run with: streamlit run card_engine/ui/streamlit/app.py
"""

import logging
import os
import tempfile

import streamlit as st

from card_engine.core.exceptions import CardEngineError
from card_engine.core.game import Player
from card_engine.games.blackjack import BlackjackConfig, BlackjackGame
from card_engine.games.gridrunner import GridGame, GridGameConfig, Position
from card_engine.ui.cli.render import CLIRenderer

GAME_BLACKJACK = "21点"
GAME_GRIDRUNNER = "GridRunner"


def setup_file_logging():
    """设置文件日志记录器."""
    if 'log_file_path' not in st.session_state:
        log_file_path = os.path.join(tempfile.gettempdir(), 'card_engine_debug.log')
        st.session_state.log_file_path = log_file_path

        file_handler = logging.FileHandler(log_file_path, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%H:%M:%S'
        ))

        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            if isinstance(handler, logging.FileHandler):
                root_logger.removeHandler(handler)
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG)


def read_log_file_tail(file_path: str, max_lines: int = 50) -> list:
    """读取日志文件的最后几行."""
    if not file_path or not os.path.exists(file_path):
        return ["日志文件不存在"]
    with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
        lines = f.readlines()
    return [line.rstrip('\n') for line in lines[-max_lines:]]


def create_blackjack_game(num_players: int = 1) -> BlackjackGame:
    """创建并开始一局21点."""
    game = BlackjackGame(BlackjackConfig())
    for i in range(num_players):
        game.add_player(Player(f"p{i + 1}", "You" if i == 0 else f"Player {i + 1}"))
    game.start()
    return game


def create_gridrunner_game(num_players: int = 2, size: int = 8) -> GridGame:
    """创建并开始一局GridRunner."""
    config = GridGameConfig(
        width=size,
        height=size,
        start_positions=[Position(0, i) for i in range(num_players)],
        goal_positions=[Position(size - 1, size - 1)],
        blocked_cells=[Position(size // 2, r) for r in range(1, size - 1)],
        checkpoints=[Position(size // 2, 0)],
    )
    game = GridGame(config)
    for i in range(num_players):
        game.add_player(Player(f"p{i + 1}", f"Runner {i + 1}"))
    game.start()
    return game


def initialize_session_state():
    """初始化session state."""
    if 'game_kind' not in st.session_state:
        st.session_state.game_kind = GAME_BLACKJACK
    if 'blackjack' not in st.session_state:
        st.session_state.blackjack = None
    if 'gridrunner' not in st.session_state:
        st.session_state.gridrunner = None
    if 'events' not in st.session_state:
        st.session_state.events = []
    if 'selected_card' not in st.session_state:
        st.session_state.selected_card = None
    if 'debug_mode' not in st.session_state:
        st.session_state.debug_mode = False


def add_event(message: str) -> None:
    """记录一条UI事件，最多保留50条."""
    st.session_state.events.append(message)
    st.session_state.events = st.session_state.events[-50:]


def render_header():
    """渲染页面头部."""
    st.title("🃏 Card Engine")
    st.markdown("---")


def render_blackjack(game):
    """渲染21点牌桌."""
    if game is None:
        st.info("点击 '开始新游戏' 开始21点")
        return

    st.code(CLIRenderer.render_blackjack_table(game.get_game_state()))


def render_blackjack_actions(game):
    """渲染21点行动按钮."""
    if game is None:
        return

    if game.is_round_over:
        if st.button("🔄 下一轮", key="next_round"):
            game.new_round()
            add_event(f"第 {game.round} 轮开始")
            st.rerun()
        return

    for player in game.players:
        actions = [a.value for a in game.get_available_actions(player.id)]
        if not actions:
            continue
        st.subheader(f"🎯 {player.name}")
        columns = st.columns(len(actions))
        for column, action in zip(columns, actions):
            with column:
                if st.button(action, key=f"{action}_{player.id}"):
                    try:
                        if action == "HIT":
                            game.hit(player.id)
                        elif action == "STAND":
                            game.stand(player.id)
                        else:
                            game.double(player.id)
                        add_event(f"{player.name}: {action}")
                    except CardEngineError as e:
                        st.error(str(e))
                    st.rerun()


def render_gridrunner(game):
    """渲染GridRunner网格与状态."""
    if game is None:
        st.info("点击 '开始新游戏' 开始GridRunner")
        return

    positions = [game.get_player_position(p.id) for p in game.players]
    highlight = []
    current = game.current_player
    if st.session_state.selected_card and current is not None and not game.has_ended:
        highlight = game.get_reachable_positions(current.id, st.session_state.selected_card)

    st.code(CLIRenderer.render_grid(game.get_grid(), positions, highlight))
    st.text(CLIRenderer.render_gridrunner_status(game.get_game_state()))

    if game.has_ended:
        winners = [p.player_id for p in game.get_result().winners]
        st.success(CLIRenderer.render_game_over(f"获胜者: {', '.join(winners) or '无'}"))


def render_gridrunner_actions(game):
    """渲染GridRunner出牌控件."""
    if game is None or game.has_ended:
        return

    player = game.current_player
    cards = player.hand.all_cards
    st.subheader(f"🎯 {player.name} 的回合")

    if not cards:
        if st.button("⏭️ 跳过", key="skip_turn"):
            game.next_turn()
            st.rerun()
        return

    labels = {card.id: CLIRenderer.format_card(card) for card in cards}
    card_id = st.selectbox("选择卡牌", list(labels), format_func=lambda cid: labels[cid])
    st.session_state.selected_card = card_id

    col1, col2 = st.columns(2)
    with col1:
        q = st.number_input("q", min_value=0, max_value=game.get_grid().width - 1, step=1)
    with col2:
        r = st.number_input("r", min_value=0, max_value=game.get_grid().height - 1, step=1)

    if st.button("✅ 出牌", key="play_card"):
        result = game.play_card(player.id, card_id, Position(int(q), int(r)))
        if result.success:
            add_event(f"{player.name}: {result.start_position} -> {result.end_position}")
            st.session_state.selected_card = None
            st.rerun()
        else:
            st.error(result.message)


def render_sidebar():
    """渲染侧边栏，包含游戏选择、调试开关和事件日志."""
    st.sidebar.title("🎮 游戏控制")

    game_kind = st.sidebar.radio("游戏", [GAME_BLACKJACK, GAME_GRIDRUNNER])
    st.session_state.game_kind = game_kind

    num_players = st.sidebar.number_input("玩家数", min_value=1, max_value=4, value=1, step=1)
    if st.sidebar.button("🆕 开始新游戏"):
        if game_kind == GAME_BLACKJACK:
            st.session_state.blackjack = create_blackjack_game(int(num_players))
        else:
            st.session_state.gridrunner = create_gridrunner_game(int(num_players))
        st.session_state.selected_card = None
        add_event(f"新游戏: {game_kind}")
        st.rerun()

    debug_mode = st.sidebar.checkbox("🐛 调试模式", value=st.session_state.debug_mode)
    if debug_mode != st.session_state.debug_mode:
        st.session_state.debug_mode = debug_mode
        logging.getLogger().setLevel(logging.DEBUG if debug_mode else logging.INFO)

    if debug_mode:
        st.sidebar.subheader("📝 日志")
        for line in read_log_file_tail(st.session_state.get('log_file_path'), max_lines=10):
            st.sidebar.text(line)

    if st.session_state.events:
        st.sidebar.write("**UI事件:**")
        for event in reversed(st.session_state.events[-5:]):
            st.sidebar.text(event)

    if st.sidebar.button("🗑️ 清除日志"):
        st.session_state.events = []
        st.rerun()


def main():
    """应用入口."""
    st.set_page_config(page_title="Card Engine", page_icon="🃏", layout="wide")
    initialize_session_state()
    setup_file_logging()

    render_header()
    render_sidebar()

    if st.session_state.game_kind == GAME_BLACKJACK:
        render_blackjack(st.session_state.blackjack)
        render_blackjack_actions(st.session_state.blackjack)
    else:
        render_gridrunner(st.session_state.gridrunner)
        render_gridrunner_actions(st.session_state.gridrunner)


if __name__ == "__main__":
    main()
