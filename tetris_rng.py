"""Piece randomizer: uniform choice behind a small injectable interface.

Anything with a ``next_piece() -> str`` method can stand in for
``UniformRandom``; tests pass scripted sequences that way.
"""
import random
from typing import Optional

from tetris_piece import TYPES

class UniformRandom:
    PIECES = TYPES

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_piece(self) -> str:
        return self._rng.choice(self.PIECES)

_default = UniformRandom()

def get_random_tetromino_type(rng=None) -> str:
    return (rng or _default).next_piece()
