# src/snakehost/session.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Optional
import random

import numpy as np  # type: ignore

from snakecore.config import CFG, Config, GAME_OVER
from snakecore.game import (
    GameState, apply_update, begin_restart, change_snake_direction,
    complete_restart, load, restart, tick,
)
from snakecore.snake import in_bounds

# ----- Occupancy grid cell values -----
EMPTY, BODY, HEAD, FOOD = 0, 1, 2, 3

def occupancy(state: GameState) -> np.ndarray:
    """
    rows x columns uint8 snapshot of the board, indexed [y, x].
    Body cells outside the board (oversized start on a small tween frame) are skipped.
    """
    grid = np.full((state.rows, state.columns), EMPTY, dtype=np.uint8)
    for xy in state.snake1.tail_to_head:
        if in_bounds(xy, state.columns, state.rows):
            grid[xy[1], xy[0]] = BODY
    hx, hy = state.snake1.head
    if in_bounds((hx, hy), state.columns, state.rows):
        grid[hy, hx] = HEAD
    fx, fy = state.food_xy
    grid[fy, fx] = FOOD
    return grid

# ---------- Host loop ----------
@dataclass
class Session:
    """
    Owns the current GameState for a host loop and feeds it the three
    events the core understands: key presses, ticks and difficulty changes.
    """
    difficulty: str = "easy"
    seed: Optional[int] = None   # None -> cfg.seed
    cfg: Config = CFG

    def __post_init__(self):
        self.rng = random.Random(self.cfg.seed if self.seed is None else self.seed)
        self.state: GameState = restart(self.difficulty, cfg=self.cfg, rng=self.rng)
        self.ticks = 0

    def press(self, key: int) -> bool:
        """Feed a key code; False when it was unmapped or a reversal."""
        update = change_snake_direction(self.state, key, cfg=self.cfg)
        self.state = apply_update(self.state, update)
        return update is not None

    def tick(self) -> bool:
        """Advance one step; False once the game is over or restarting."""
        update = tick(self.state, rng=self.rng)
        if update is None:
            return False
        self.state = apply_update(self.state, update)
        self.ticks += 1
        return True

    def restart(self) -> GameState:
        self.state = apply_update(self.state, begin_restart())
        self.state = complete_restart(self.difficulty, cfg=self.cfg, rng=self.rng)
        self.ticks = 0
        return self.state

    def change_difficulty(self, difficulty_id: str) -> Iterator[GameState]:
        """
        Yield the resize animation, installing each frame as the current
        state. The new difficulty is adopted once the frames run out.
        """
        for frame in load(difficulty_id, self.difficulty, cfg=self.cfg, rng=self.rng):
            self.state = frame
            self.ticks = 0
            yield frame
        self.difficulty = difficulty_id

    @property
    def over(self) -> bool:
        return self.state.game_state == GAME_OVER

    @property
    def length(self) -> int:
        return len(self.state.snake1.tail_to_head)
