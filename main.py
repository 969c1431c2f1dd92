import argparse
import logging
import sys

import pygame

from tetris_config import CONFIG
from tetris_engine import initialize_game, game_step, get_drop_speed
from tetris_input import handle_key
from tetris_layout import compute_dims
from tetris_render import RenderAssets
from tetris_rng import UniformRandom

logger = logging.getLogger("tetris")

GRAVITY_EVENT = pygame.USEREVENT + 1


def get_args(argv=None):
    parser = argparse.ArgumentParser(description="Falling-block puzzle game")
    parser.add_argument("--seed", type=int, default=CONFIG["SEED"],
                        help="seed for a reproducible piece sequence")
    parser.add_argument("--cell-size", type=int, default=CONFIG["CELL_SIZE"])
    parser.add_argument("--log-level", default=CONFIG["LOG_LEVEL"],
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def timer_key(state):
    """What the gravity timer depends on; re-arm whenever it changes."""
    return state.level, state.is_paused, state.game_over


def arm_timer(state):
    if state.game_over or state.is_paused:
        pygame.time.set_timer(GRAVITY_EVENT, 0)
    else:
        pygame.time.set_timer(GRAVITY_EVENT, get_drop_speed(state.level))


def apply_args(args):
    """Copy command-line overrides into CONFIG; the rest of startup reads CONFIG."""
    CONFIG["SEED"] = args.seed
    CONFIG["CELL_SIZE"] = args.cell_size
    CONFIG["LOG_LEVEL"] = args.log_level


def main(argv=None):
    args = get_args(argv)
    apply_args(args)
    logging.basicConfig(level=getattr(logging, CONFIG["LOG_LEVEL"]),
                        format='[TETRIS] %(asctime)s - %(levelname)s: %(message)s')

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, GRAVITY_EVENT])

    dims = compute_dims()
    screen = pygame.display.set_mode((dims.total_w, dims.total_h))
    pygame.display.set_caption("Tetris")
    render = RenderAssets(dims, pygame.font.SysFont(None, 22), pygame.font.SysFont(None, 40))
    clock = pygame.time.Clock()

    rng = UniformRandom(CONFIG["SEED"])
    state = initialize_game(rng)
    logger.info("new game (seed=%s)", CONFIG["SEED"])
    armed = timer_key(state)
    arm_timer(state)

    while True:
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            prev = state
            if e.type == GRAVITY_EVENT:
                state = game_step(state, rng)
            elif e.type == pygame.KEYDOWN:
                state = handle_key(state, e.key, rng)
                if e.key == pygame.K_r:
                    logger.info("restart")
            if state.game_over and not prev.game_over:
                logger.info("game over: score=%d lines=%d level=%d", state.score, state.lines, state.level)
            if timer_key(state) != armed:
                armed = timer_key(state)
                arm_timer(state)

        render.draw(screen, state)
        pygame.display.flip()
        clock.tick(60)


if __name__ == '__main__':
    main()
