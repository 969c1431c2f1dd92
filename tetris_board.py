"""Board helpers: create, collide, place, clear"""
from typing import Optional, Tuple

from tetris_config import BOARD_WIDTH, BOARD_HEIGHT
from tetris_piece import Tetromino, get_tetromino_blocks

Row = Tuple[Optional[str], ...]
Board = Tuple[Row, ...]

EMPTY_ROW: Row = (None,) * BOARD_WIDTH

def create_empty_board() -> Board:
    return (EMPTY_ROW,) * BOARD_HEIGHT

def is_valid_position(board: Board, piece: Tetromino, offset: Tuple[int, int] = (0, 0)) -> bool:
    """True if ``piece`` shifted by ``offset`` fits on ``board``.

    Cells above the top row (y < 0) only have to respect the side walls.
    """
    dx, dy = offset
    for bx, by in get_tetromino_blocks(piece):
        bx += dx; by += dy
        if bx < 0 or bx >= BOARD_WIDTH or by >= BOARD_HEIGHT: return False
        if by >= 0 and board[by][bx] is not None: return False
    return True

def _stamp(board: Board, piece: Tetromino) -> Board:
    rows = [list(r) for r in board]
    for bx, by in get_tetromino_blocks(piece):
        if 0 <= by < BOARD_HEIGHT and 0 <= bx < BOARD_WIDTH:
            rows[by][bx] = piece.type
    return tuple(tuple(r) for r in rows)

def place_tetromino(board: Board, piece: Tetromino) -> Board:
    """Return a new board with the piece baked in.

    Cells with y < 0 are never written; a piece locked partly above the
    board loses those cells.
    """
    return _stamp(board, piece)

def overlay_piece(board: Board, piece: Optional[Tetromino]) -> Board:
    """Board as it should be drawn: locked cells plus the falling piece."""
    if piece is None: return board
    return _stamp(board, piece)

def clear_lines(board: Board) -> Tuple[Board, int]:
    kept = [row for row in board if not all(c is not None for c in row)]
    cleared = len(board) - len(kept)
    return (EMPTY_ROW,) * cleared + tuple(kept), cleared
