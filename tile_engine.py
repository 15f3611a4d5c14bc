import random
from typing import Dict, Callable, List, NamedTuple, Tuple

SIZE = 4            # 默认棋盘边长：4x4
MIN_SIZE = 2        # 最小棋盘边长
WIN_TILE = 2048     # 胜利目标数字
FOUR_PROBABILITY = 0.1  # 新数字为 4 的概率

Board = List[List[int]]
Row = List[int]
Cell = Tuple[int, int]


class InvalidArgument(ValueError):
    """非法参数：方向、棋盘大小或棋盘结构不合法。"""


class MoveResult(NamedTuple):
    """一次移动的结果：新棋盘和本次合并得分。"""
    board: Board
    points: int


def validate_size(size: int) -> int:
    """检查棋盘边长，必须是不小于 MIN_SIZE 的整数。"""
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidArgument(f"棋盘大小必须是整数: {size!r}")
    if size < MIN_SIZE:
        raise InvalidArgument(f"棋盘大小不能小于 {MIN_SIZE}: {size}")
    return size


def validate_board(board: Board) -> Board:
    """
    检查棋盘结构：正方形、不能参差不齐、格子为非负整数。
    返回棋盘的拷贝。
    """
    if not isinstance(board, (list, tuple)):
        raise InvalidArgument("棋盘必须是二维列表")
    size = validate_size(len(board))
    for row in board:
        if not isinstance(row, (list, tuple)) or len(row) != size:
            raise InvalidArgument("棋盘每一行的长度必须等于棋盘大小")
        for value in row:
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidArgument(f"非法格子数值: {value!r}")
    return copy_board(board)


def new_board(size: int = SIZE) -> Board:
    """创建一个空棋盘。"""
    return [[0] * size for _ in range(size)]


def copy_board(board: Board) -> Board:
    """深拷贝棋盘。"""
    return [list(row) for row in board]


# ---------------------------------------------------------------- 单行变换

def compress_row(row: Row) -> Row:
    """去掉 0 并把数字挤到左边，右侧补 0。"""
    arr = [x for x in row if x != 0]
    return arr + [0] * (len(row) - len(arr))


def merge_row(row: Row) -> Tuple[Row, int]:
    """
    对已挤压的一行从左到右合并一次。
    被合并掉的格子本轮不再参与合并，所以 [2, 2, 2, 2] 合并成 [4, 0, 4, 0]。
    """
    out = list(row)
    score_gain = 0
    i = 0

    while i < len(out) - 1:
        if out[i] != 0 and out[i] == out[i + 1]:
            out[i] *= 2
            out[i + 1] = 0
            score_gain += out[i]
            i += 2
        else:
            i += 1

    return out, score_gain


def transform_row(row: Row) -> Tuple[Row, int]:
    """
    向左挤压、合并、再挤压一行，同时返回本行增加的分数。
    例如: [2, 0, 2, 4] -> [4, 4, 0, 0], score_gain = 4
    """
    merged, score_gain = merge_row(compress_row(row))
    return compress_row(merged), score_gain


# ---------------------------------------------------------------- 整盘移动

def reverse_rows(board: Board) -> Board:
    """每一行做反转。"""
    return [list(reversed(row)) for row in board]


def transpose(board: Board) -> Board:
    """矩阵转置。"""
    return [list(row) for row in zip(*board)]


def move_left(board: Board) -> MoveResult:
    """整盘向左移动。"""
    new_board_state: Board = []
    total_gain = 0
    for row in board:
        new_row, gain = transform_row(row)
        new_board_state.append(new_row)
        total_gain += gain
    return MoveResult(new_board_state, total_gain)


def move_right(board: Board) -> MoveResult:
    """整盘向右移动。"""
    moved, gain = move_left(reverse_rows(board))
    return MoveResult(reverse_rows(moved), gain)


def move_up(board: Board) -> MoveResult:
    """整盘向上移动。"""
    moved, gain = move_left(transpose(board))
    return MoveResult(transpose(moved), gain)


def move_down(board: Board) -> MoveResult:
    """整盘向下移动。"""
    moved, gain = move_right(transpose(board))
    return MoveResult(transpose(moved), gain)


# 移动方向映射
MOVES: Dict[str, Callable[[Board], MoveResult]] = {
    "up": move_up,
    "down": move_down,
    "left": move_left,
    "right": move_right,
}
DIRECTIONS = tuple(MOVES)


def get_move(direction: str) -> Callable[[Board], MoveResult]:
    """按方向名取得移动函数，方向非法时抛出 InvalidArgument。"""
    move_func = MOVES.get(direction) if isinstance(direction, str) else None
    if move_func is None:
        raise InvalidArgument(
            f"非法方向: {direction!r}，必须是 {', '.join(DIRECTIONS)} 之一"
        )
    return move_func


def apply_move(board: Board, direction: str) -> MoveResult:
    return get_move(direction)(board)


# ---------------------------------------------------------------- 随机生成

def empty_cells(board: Board) -> List[Cell]:
    """列出所有空格的位置 (r, c)。"""
    return [
        (r, c)
        for r, row in enumerate(board)
        for c, value in enumerate(row)
        if value == 0
    ]


def spawn_tile(board: Board, rng=random) -> Board:
    """
    在一个随机空格生成 2 或 4，返回新棋盘，原棋盘不变。
    棋盘已满时返回原样的拷贝。
    rng 需要提供 choice() 和 random()，测试时可以传入带种子的 random.Random。
    """
    result = copy_board(board)
    cells = empty_cells(result)
    if not cells:
        return result

    r, c = rng.choice(cells)
    result[r][c] = 4 if rng.random() < FOUR_PROBABILITY else 2
    return result


def random_start_board(size: int = SIZE, rng=random) -> Board:
    """新游戏初始棋盘：随机出现两个数字。"""
    board = new_board(validate_size(size))
    board = spawn_tile(board, rng)
    return spawn_tile(board, rng)


# ---------------------------------------------------------------- 终局判断

def has_legal_moves(board: Board) -> bool:
    """判断是否还能继续游戏。"""
    if empty_cells(board):
        return True

    size = len(board)
    for r in range(size):
        for c in range(size):
            value = board[r][c]
            if value == 0:
                continue
            if c + 1 < size and board[r][c + 1] == value:
                return True
            if r + 1 < size and board[r + 1][c] == value:
                return True

    return False


def has_winning_tile(board: Board, target: int = WIN_TILE) -> bool:
    """棋盘上是否出现了目标数字。"""
    return any(value == target for row in board for value in row)


def get_max_tile(board: Board) -> int:
    """取得当前最大的数字。"""
    return max(max(row) for row in board)
