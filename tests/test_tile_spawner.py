import copy
import random

import pytest

from tile_engine import InvalidArgument, empty_cells, new_board, random_start_board, spawn_tile
from tests.helpers import FixedRandom, tile_count


def test_spawn_changes_exactly_one_empty_cell():
    rng = random.Random(42)
    board = [[2, 0, 0, 4], [0, 0, 8, 0], [0, 0, 0, 0], [16, 0, 0, 2]]
    for _ in range(50):
        spawned = spawn_tile(board, rng)
        changed = [
            (r, c)
            for r in range(4)
            for c in range(4)
            if spawned[r][c] != board[r][c]
        ]
        assert len(changed) == 1
        r, c = changed[0]
        assert board[r][c] == 0
        assert spawned[r][c] in (2, 4)


def test_spawn_does_not_mutate_input():
    board = [[0, 2], [0, 0]]
    before = copy.deepcopy(board)
    spawn_tile(board, random.Random(0))
    assert board == before


def test_spawn_on_full_board_returns_unchanged_copy():
    board = [[2, 4], [8, 16]]
    spawned = spawn_tile(board, random.Random(0))
    assert spawned == board
    assert spawned is not board


@pytest.mark.parametrize("roll, expected", [(0.0, 4), (0.09, 4), (0.1, 2), (0.5, 2), (0.99, 2)])
def test_spawn_value_follows_roll(roll, expected):
    spawned = spawn_tile(new_board(2), FixedRandom(roll=roll, index=3))
    assert spawned == [[0, 0], [0, expected]]


def test_spawn_picks_among_empty_cells():
    board = [[2, 0], [4, 0]]
    spawned = spawn_tile(board, FixedRandom(index=1))
    assert empty_cells(board) == [(0, 1), (1, 1)]
    assert spawned == [[2, 0], [4, 2]]


def test_spawn_value_distribution():
    rng = random.Random(1234)
    values = [spawn_tile(new_board(2), rng) for _ in range(2000)]
    fours = sum(1 for b in values if 4 in b[0] + b[1])
    assert 100 < fours < 320


def test_random_start_board_has_two_tiles():
    for size in (2, 4, 7):
        board = random_start_board(size, random.Random(size))
        assert len(board) == size
        assert all(len(row) == size for row in board)
        assert tile_count(board) == 2


@pytest.mark.parametrize("size", [0, 1, -4, 2.5, "4", True, None])
def test_random_start_board_rejects_bad_size(size):
    with pytest.raises(InvalidArgument):
        random_start_board(size)
