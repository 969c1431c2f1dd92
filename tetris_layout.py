"""Window geometry: board on the left, info panel on the right"""
from dataclasses import dataclass
from tetris_config import CONFIG, BOARD_WIDTH, BOARD_HEIGHT

@dataclass
class Dims:
    cell: int
    margin: int
    panel_w: int
    board_x: int
    board_y: int
    panel_x: int
    panel_y: int

    @property
    def board_w(self) -> int: return BOARD_WIDTH * self.cell

    @property
    def board_h(self) -> int: return BOARD_HEIGHT * self.cell

    @property
    def total_w(self) -> int: return self.panel_x + self.panel_w + self.margin

    @property
    def total_h(self) -> int: return self.board_y + self.board_h + self.margin

def compute_dims(cell=None) -> Dims:
    cell = int(cell or CONFIG["CELL_SIZE"])
    m = int(CONFIG["MARGIN"])
    return Dims(cell=cell, margin=m, panel_w=int(CONFIG["PANEL_W"]),
                board_x=m, board_y=m,
                panel_x=m + BOARD_WIDTH * cell + m, panel_y=m)
