from typing import Sequence


class FixedRandom:
    """Deterministic stand-in for random.Random: picks seq[index], fixed roll."""

    def __init__(self, roll: float = 0.5, index: int = 0) -> None:
        self.roll = roll
        self.index = index

    def choice(self, seq: Sequence):
        return seq[self.index]

    def random(self) -> float:
        return self.roll


def tile_count(board) -> int:
    return sum(1 for row in board for value in row if value)


def tile_sum(board) -> int:
    return sum(value for row in board for value in row)
