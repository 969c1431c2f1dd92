BOARD_WIDTH, BOARD_HEIGHT = 10, 20

CONFIG = {
    "CELL_SIZE": 28,
    "MARGIN": 16,
    "PANEL_W": 200,
    "SEED": None,
    "LOG_LEVEL": "INFO",
}
