# src/snakecore/config.py
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple
import os

# Keep the pygame banner out of stdout; only key codes are needed here.
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # type: ignore  # noqa: E402

# ----- Directions (dx, dy) -----
NORTH, SOUTH, WEST, EAST = (0, -1), (0, 1), (-1, 0), (1, 0)
DIRECTIONS = (NORTH, EAST, SOUTH, WEST)

def opposite(direction: Tuple[int, int]) -> Tuple[int, int]:
    """Direction pointing the other way (north <-> south, east <-> west)."""
    dx, dy = direction
    return (-dx, -dy)

# ----- Game states -----
FRESH = "fresh"
PLAYING = "playing"
GAME_OVER = "gameOver"
RESTARTING = "restarting"

# ----- Tile states -----
BLANK, BOMB = "blank", "bomb"
COVERED, UNCOVERED, FLAGGED = "covered", "uncovered", "flagged"

# ----- Difficulties -----
@dataclass(frozen=True)
class DifficultySettings:
    columns: int
    rows: int
    bomb_odds: float = 0.0

DIFFICULTIES = MappingProxyType({
    "easy":   DifficultySettings(columns=16, rows=16, bomb_odds=0.10),
    "medium": DifficultySettings(columns=24, rows=20, bomb_odds=0.15),
    "hard":   DifficultySettings(columns=32, rows=24, bomb_odds=0.20),
})

# ----- Keys (pygame key codes) -----
KEYS_TO_DIRECTIONS = MappingProxyType({
    pygame.K_UP: NORTH,    pygame.K_w: NORTH,
    pygame.K_DOWN: SOUTH,  pygame.K_s: SOUTH,
    pygame.K_LEFT: WEST,   pygame.K_a: WEST,
    pygame.K_RIGHT: EAST,  pygame.K_d: EAST,
})

# ----- Tunables -----
@dataclass(frozen=True)
class Config:
    seed: int = 0
    start_length: int = 5
    start_tail: Tuple[int, int] = (3, 10)
    start_direction: Tuple[int, int] = EAST
    tween_frames: int = 12
    strict_start: bool = False   # raise instead of warn when the start body is off-board
    difficulties: Mapping[str, DifficultySettings] = field(default_factory=lambda: DIFFICULTIES)
    keys: Mapping[int, Tuple[int, int]] = field(default_factory=lambda: KEYS_TO_DIRECTIONS)

CFG = Config()
