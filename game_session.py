"""
一局游戏的状态管理。
棋盘规则全部在 tile_engine 中，这里只负责按顺序调用：
移动 -> 生成新数字 -> 判断胜负，并保存分数和状态标记。
"""

import random
from typing import Any, Dict, Optional

from tile_engine import (
    SIZE,
    WIN_TILE,
    Board,
    InvalidArgument,
    copy_board,
    get_max_tile,
    get_move,
    has_legal_moves,
    has_winning_tile,
    random_start_board,
    spawn_tile,
    validate_board,
    validate_size,
)

# 游戏状态
PLAYING = "playing"
WON = "won"
OVER = "over"

GameState = Dict[str, Any]


class GameSession:
    """
    持有当前棋盘、分数和胜负标记。
    game_won / game_over 一旦为 True，只有 restart() 能清除。
    """

    def __init__(self, size: int = SIZE, rng=None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.size = validate_size(size)
        self.board: Board = []
        self.score = 0
        self.moves = 0
        self.game_over = False
        self.game_won = False
        self.restart(size)

    @classmethod
    def from_state(cls, state: GameState, rng=None) -> "GameSession":
        """根据 get_state() 的快照重建一局游戏。"""
        if not isinstance(state, dict):
            raise InvalidArgument("游戏快照必须是字典")
        board = validate_board(state.get("board"))
        score = state.get("score", 0)
        if isinstance(score, bool) or not isinstance(score, int) or score < 0:
            raise InvalidArgument(f"非法分数: {score!r}")
        moves = state.get("moves", 0)
        if isinstance(moves, bool) or not isinstance(moves, int) or moves < 0:
            raise InvalidArgument(f"非法步数: {moves!r}")
        game_over = state.get("game_over", False)
        game_won = state.get("game_won", False)
        if not isinstance(game_over, bool) or not isinstance(game_won, bool):
            raise InvalidArgument(f"非法状态标记: {game_over!r}, {game_won!r}")

        session = cls.__new__(cls)
        session.rng = rng if rng is not None else random.Random()
        session.size = len(board)
        session.board = board
        session.score = score
        session.moves = moves
        session.game_over = game_over
        session.game_won = game_won
        return session

    @property
    def status(self) -> str:
        if self.game_won:
            return WON
        if self.game_over:
            return OVER
        return PLAYING

    def move(self, direction: str) -> bool:
        """
        向指定方向移动一次。
        返回 True 表示这一步生效；游戏已结束或棋盘没有变化时返回 False。
        """
        move_func = get_move(direction)
        if self.status != PLAYING:
            return False

        new_board, points = move_func(self.board)
        if new_board == self.board:
            return False

        self.score += points
        self.moves += 1
        self.board = spawn_tile(new_board, self.rng)

        if has_winning_tile(self.board, WIN_TILE):
            self.game_won = True
        if not has_legal_moves(self.board):
            self.game_over = True
        return True

    def restart(self, size: Optional[int] = None) -> None:
        """重新开始一局，可以顺便修改棋盘大小。"""
        size = self.size if size is None else validate_size(size)
        self.board = random_start_board(size, self.rng)
        self.size = size
        self.score = 0
        self.moves = 0
        self.game_over = False
        self.game_won = False

    def get_state(self) -> GameState:
        """当前状态的只读快照。"""
        return {
            "board": copy_board(self.board),
            "score": self.score,
            "game_over": self.game_over,
            "game_won": self.game_won,
            "size": self.size,
            "moves": self.moves,
            "max_tile": get_max_tile(self.board),
            "status": self.status,
        }


def create_session(size: int = SIZE, rng=None) -> GameSession:
    """新建一局游戏。"""
    return GameSession(size, rng)
