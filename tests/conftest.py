import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from tetris_config import BOARD_WIDTH
from tetris_board import create_empty_board


class ScriptedRandom:
    """Hands out piece types from a fixed list, cycling when it runs out."""
    def __init__(self, *types):
        self.types = list(types)
        self.i = 0

    def next_piece(self):
        t = self.types[self.i % len(self.types)]
        self.i += 1
        return t


def board_with(rows):
    """Empty board with the given {row_index: row_tuple} overrides."""
    board = list(create_empty_board())
    for y, row in rows.items():
        board[y] = tuple(row)
    return tuple(board)


def full_row(t="X"):
    return (t,) * BOARD_WIDTH


def row_with_gap(gap_x, t="X"):
    return tuple(None if x == gap_x else t for x in range(BOARD_WIDTH))


@pytest.fixture
def scripted():
    return ScriptedRandom
