"""
Rendering helpers for the pygame front end.

- Cell sprites are pre-rendered per piece type and blitted.
- The static background (grid + panel frame) is drawn once per Dims.
- The board (locked blocks plus the falling piece) lives on a cached surface,
  rebuilt only when the board or the piece changes.
- HUD text surfaces are re-rendered only when the value they show changes.
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, Tuple, Optional
from tetris_config import BOARD_WIDTH, BOARD_HEIGHT
from tetris_layout import Dims
from tetris_board import Board, overlay_piece
from tetris_engine import GameState
from tetris_piece import Tetromino

# Colors per tetromino type
COLORS: Dict[str, Tuple[int,int,int]] = {
    "I": (102,224,255),
    "J": (106,119,255),
    "L": (255,158,94),
    "O": (255,224,102),
    "S": (94,224,142),
    "T": (200,119,255),
    "Z": (255,102,119),
}
BG = (10,13,34)
TEXT = (200,210,240)

@dataclass
class HudCache:
    score: int = -1
    level: int = -1
    lines: int = -1
    next_piece: Optional[Tetromino] = None
    title: Optional[pygame.Surface] = None
    score_s: Optional[pygame.Surface] = None
    level_s: Optional[pygame.Surface] = None
    lines_s: Optional[pygame.Surface] = None
    preview: Optional[pygame.Surface] = None
    controls: Optional[list] = None

class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: Optional[pygame.font.Font] = None):
        self.dims = dims
        self.font = font
        self.big_font = big_font or font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self._board_src: Optional[Board] = None
        self._piece_src: Optional[Tetromino] = None

    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill(BG)
        grid_col = (40,50,90)
        for x in range(BOARD_WIDTH+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(BOARD_HEIGHT+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        panel_rect = pygame.Rect(d.panel_x, d.panel_y, d.panel_w, d.board_h)
        pygame.draw.rect(self.bg, (21,25,53), panel_rect)
        pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)
        self.pv_cell = max(12, int(d.cell*0.75))
        self.pv_x = d.panel_x + 12
        self.pv_y = d.panel_y + 150
        frame = pygame.Rect(self.pv_x-6, self.pv_y-6, self.pv_cell*4+12, self.pv_cell*4+12)
        pygame.draw.rect(self.bg, (15,18,40), frame)
        pygame.draw.rect(self.bg, (55,65,110), frame, 1)

    def _make_cells(self):
        self.cell_surf: Dict[str, pygame.Surface] = {}
        c = self.dims.cell
        for t, col in COLORS.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            self.cell_surf[t] = s

    # ---------- Board surface cache ----------
    def rebuild_board_surface(self, board: Board, piece: Optional[Tetromino] = None):
        """Redraws the board surface (locked blocks plus the falling piece)
        when either ``board`` or ``piece`` is a new value."""
        if board is self._board_src and piece == self._piece_src: return
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for y, row in enumerate(overlay_piece(board, piece)):
            for x, t in enumerate(row):
                if t:
                    self.board_surface.blit(self.cell_surf[t], (x*c + 1, y*c + 1))
        self._board_src = board
        self._piece_src = piece

    # ---------- HUD / Panel ----------
    def _render_preview(self, piece: Tetromino) -> pygame.Surface:
        s = pygame.Surface((self.pv_cell*4, self.pv_cell*4), pygame.SRCALPHA)
        shape = piece.shape
        offx = (4 - len(shape[0])) // 2
        offy = max(0, (4 - len(shape)) // 2)
        for y, row in enumerate(shape):
            for x, v in enumerate(row):
                if v:
                    block = pygame.Surface((self.pv_cell-2, self.pv_cell-2))
                    block.fill(COLORS[piece.type])
                    s.blit(block, ((x + offx)*self.pv_cell + 1, (y + offy)*self.pv_cell + 1))
        return s

    def draw_panel_hud(self, screen: pygame.Surface, state: GameState):
        d = self.dims
        f = self.font
        if self.hud.title is None:
            self.hud.title = f.render("Tetris", True, (197,202,233))
        if state.score != self.hud.score:
            self.hud.score = state.score
            self.hud.score_s = f.render(f"Score: {state.score:,}", True, TEXT)
        if state.level != self.hud.level:
            self.hud.level = state.level
            self.hud.level_s = f.render(f"Level: {state.level}", True, TEXT)
        if state.lines != self.hud.lines:
            self.hud.lines = state.lines
            self.hud.lines_s = f.render(f"Lines: {state.lines}", True, TEXT)
        if state.next_piece is not self.hud.next_piece:
            self.hud.next_piece = state.next_piece
            self.hud.preview = self._render_preview(state.next_piece)
        screen.blit(self.hud.title, (d.panel_x + 12, d.panel_y + 12))
        screen.blit(self.hud.score_s, (d.panel_x + 12, d.panel_y + 44))
        screen.blit(self.hud.level_s, (d.panel_x + 12, d.panel_y + 68))
        screen.blit(self.hud.lines_s, (d.panel_x + 12, d.panel_y + 92))
        screen.blit(f.render("Next:", True, TEXT), (d.panel_x + 12, d.panel_y + 126))
        screen.blit(self.hud.preview, (self.pv_x, self.pv_y))
        if not self.hud.controls:
            self.hud.controls = [
                f.render("Controls:", True, TEXT),
                f.render("←/→ Move", True, (165,175,215)),
                f.render("↓ Soft drop", True, (165,175,215)),
                f.render("↑ Rotate", True, (165,175,215)),
                f.render("Space Hard drop", True, (165,175,215)),
                f.render("P Pause • R Restart", True, (165,175,215)),
            ]
        y = d.panel_y + 260
        for surf in self.hud.controls:
            screen.blit(surf, (d.panel_x + 12, y)); y += 20

    def draw_banner(self, screen: pygame.Surface, text: str, color, dy: int = 0):
        d = self.dims
        msg = self.big_font.render(text, True, color)
        screen.blit(msg, msg.get_rect(center=(d.board_x + d.board_w // 2, d.board_y + d.board_h // 2 + dy)))

    def draw(self, screen: pygame.Surface, state: GameState):
        """Full frame: background, board with active piece, panel, banners."""
        screen.blit(self.bg, (0,0))
        self.rebuild_board_surface(state.board, state.current_piece)
        screen.blit(self.board_surface, (self.dims.board_x, self.dims.board_y))
        self.draw_panel_hud(screen, state)
        if state.game_over:
            self.draw_banner(screen, "GAME OVER (R)", (255,220,220))
        elif state.is_paused:
            self.draw_banner(screen, "PAUSED (P)", (220,240,255), -40)
