"""Game state and pure state transitions.

Every public transition takes a ``GameState`` and returns a new one. The
input is never mutated, so a caller can keep the previous snapshot around
(for undo, replay or comparison in tests). Transitions are no-ops while the
game is paused, over, or has no active piece.

A lock only ever happens inside ``game_step``: moving down into the floor
or hard-dropping just settles the piece, and the next tick bakes it in.
"""
import logging
from dataclasses import dataclass, replace
from typing import Optional

from tetris_board import (Board, create_empty_board, is_valid_position,
                          place_tetromino, clear_lines)
from tetris_piece import Tetromino, create_tetromino, rotate_tetromino
from tetris_rng import get_random_tetromino_type

logger = logging.getLogger(__name__)

LINES_PER_LEVEL = 10
SCORE_TABLE = {0: 0, 1: 40, 2: 100, 3: 300, 4: 1200}   # multiplied by level+1

DIRECTIONS = {
    "left": (-1, 0),
    "right": (1, 0),
    "down": (0, 1),
}

@dataclass(frozen=True)
class GameState:
    board: Board
    current_piece: Optional[Tetromino]
    next_piece: Tetromino
    score: int = 0
    level: int = 0
    lines: int = 0
    game_over: bool = False
    is_paused: bool = False

    @property
    def active(self) -> bool:
        return self.current_piece is not None and not self.game_over and not self.is_paused


# ---------- scoring ----------

def calculate_score(lines_cleared: int, level: int) -> int:
    return SCORE_TABLE[lines_cleared] * (level + 1)

def calculate_level(total_lines: int) -> int:
    return total_lines // LINES_PER_LEVEL

def get_drop_speed(level: int) -> int:
    """Milliseconds between automatic downward steps at ``level``."""
    return max(50, 500 - level * 50)


# ---------- transitions ----------

def initialize_game(rng=None) -> GameState:
    return GameState(
        board=create_empty_board(),
        current_piece=create_tetromino(get_random_tetromino_type(rng)),
        next_piece=create_tetromino(get_random_tetromino_type(rng)),
    )

def move_tetromino(state: GameState, direction: str) -> GameState:
    if direction not in DIRECTIONS:
        raise ValueError(f"unknown direction: {direction!r}")
    if not state.active:
        return state
    dx, dy = DIRECTIONS[direction]
    if is_valid_position(state.board, state.current_piece, (dx, dy)):
        return replace(state, current_piece=state.current_piece.moved(dx, dy))
    return state

def rotate_piece(state: GameState) -> GameState:
    if not state.active:
        return state
    rotated = rotate_tetromino(state.current_piece)
    if is_valid_position(state.board, rotated):
        return replace(state, current_piece=rotated)
    return state

def drop_tetromino(state: GameState) -> GameState:
    """Hard drop: settle the piece as deep as it goes. Does not lock."""
    if not state.active:
        return state
    piece = state.current_piece
    while is_valid_position(state.board, piece, (0, 1)):
        piece = piece.moved(0, 1)
    return replace(state, current_piece=piece)

def game_step(state: GameState, rng=None) -> GameState:
    """Advance one gravity tick: fall one row, or lock and spawn the next piece."""
    if not state.active:
        return state
    if is_valid_position(state.board, state.current_piece, (0, 1)):
        return move_tetromino(state, "down")

    piece = state.current_piece
    logger.debug("locked %s at (%d, %d)", piece.type, piece.x, piece.y)
    placed = place_tetromino(state.board, piece)
    board, cleared = clear_lines(placed)
    lines = state.lines + cleared
    # score uses the level in effect before this clear
    score = state.score + calculate_score(cleared, state.level)
    level = calculate_level(lines)
    if cleared:
        logger.debug("cleared %d line(s): lines=%d level=%d score=%d", cleared, lines, level, score)

    promoted = state.next_piece
    game_over = not is_valid_position(board, promoted)
    if game_over:
        logger.debug("spawn of %s blocked, game over at score %d", promoted.type, score)

    return GameState(
        board=board,
        current_piece=None if game_over else promoted,
        next_piece=create_tetromino(get_random_tetromino_type(rng)),
        score=score,
        level=level,
        lines=lines,
        game_over=game_over,
        is_paused=False,
    )
