"""Keyboard bindings: pygame key -> state transition"""
from dataclasses import replace

import pygame

from tetris_engine import (GameState, initialize_game, move_tetromino,
                           rotate_piece, drop_tetromino)

KEY_ACTIONS = {
    pygame.K_LEFT: lambda s: move_tetromino(s, "left"),
    pygame.K_RIGHT: lambda s: move_tetromino(s, "right"),
    pygame.K_DOWN: lambda s: move_tetromino(s, "down"),
    pygame.K_UP: rotate_piece,
    pygame.K_SPACE: drop_tetromino,
}

def toggle_pause(state: GameState) -> GameState:
    if state.game_over: return state
    return replace(state, is_paused=not state.is_paused)

def handle_key(state: GameState, key: int, rng=None) -> GameState:
    if key == pygame.K_r:
        return initialize_game(rng)
    if key == pygame.K_p:
        return toggle_pause(state)
    action = KEY_ACTIONS.get(key)
    if action is None: return state
    return action(state)
