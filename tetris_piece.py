"""Tetromino types, rotation tables and piece construction"""
from dataclasses import dataclass, replace
from typing import Dict, List, Tuple

from tetris_config import BOARD_WIDTH

Shape = Tuple[Tuple[bool, ...], ...]

TYPES = ("I", "O", "T", "S", "Z", "J", "L")

BASE_SHAPES = {
    "I": [[1,1,1,1]],
    "O": [[1,1],[1,1]],
    "T": [[0,1,0],[1,1,1]],
    "S": [[0,1,1],[1,1,0]],
    "Z": [[1,1,0],[0,1,1]],
    "J": [[1,0,0],[1,1,1]],
    "L": [[0,0,1],[1,1,1]],
}

# distinct orientations per type
ROTATION_COUNT = {"I": 2, "O": 1, "T": 4, "S": 2, "Z": 2, "J": 4, "L": 4}

def rotate_cw(m): return [list(r) for r in zip(*m[::-1])]

def _freeze(m) -> Shape:
    return tuple(tuple(bool(v) for v in r) for r in m)

def _build_rotations() -> Dict[str, Tuple[Shape, ...]]:
    table = {}
    for t, base in BASE_SHAPES.items():
        seq: List[Shape] = []
        m = base
        for _ in range(ROTATION_COUNT[t]):
            seq.append(_freeze(m))
            m = rotate_cw(m)
        table[t] = tuple(seq)
    return table

TETROMINO_SHAPES: Dict[str, Tuple[Shape, ...]] = _build_rotations()

@dataclass(frozen=True)
class Tetromino:
    type: str
    shape: Shape
    x: int
    y: int
    rotation: int = 0

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def moved(self, dx: int, dy: int) -> "Tetromino":
        return replace(self, x=self.x + dx, y=self.y + dy)


def create_tetromino(t: str) -> Tetromino:
    """Spawn a piece of type ``t`` at the top centre in its first orientation."""
    return Tetromino(t, TETROMINO_SHAPES[t][0], BOARD_WIDTH // 2 - 1, 0, 0)


def rotate_tetromino(piece: Tetromino) -> Tetromino:
    # no kicks: the caller rejects an invalid result wholesale
    shapes = TETROMINO_SHAPES[piece.type]
    nxt = (piece.rotation + 1) % len(shapes)
    return replace(piece, shape=shapes[nxt], rotation=nxt)


def get_tetromino_blocks(piece: Tetromino) -> List[Tuple[int, int]]:
    """Absolute (x, y) board cells covered by the piece."""
    return [(piece.x + x, piece.y + y)
            for y, row in enumerate(piece.shape)
            for x, v in enumerate(row) if v]
