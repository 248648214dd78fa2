# src/snakehost/autopilot.py
from typing import Optional

from snakecore.config import CFG, Config, DIRECTIONS, opposite
from snakecore.game import GameState
from snakehost.session import EMPTY, FOOD, occupancy


def _is_free(grid, x: int, y: int) -> bool:
    rows, columns = grid.shape
    return 0 <= x < columns and 0 <= y < rows and grid[y, x] in (EMPTY, FOOD)


def choose_direction(state: GameState):
    """
    Pick the turn whose next cell is free and closest to the food,
    keeping the current heading on ties. Boxed in: keep going.
    """
    grid = occupancy(state)
    hx, hy = state.snake1.head
    fx, fy = state.food_xy
    heading = state.snake1.head_direction

    options = []
    for d in DIRECTIONS:
        if d == opposite(heading):
            continue
        nx, ny = hx + d[0], hy + d[1]
        if _is_free(grid, nx, ny):
            options.append((abs(nx - fx) + abs(ny - fy), d != heading, d))

    if not options:
        return heading
    return min(options)[2]


def key_for(direction, cfg: Config = CFG) -> Optional[int]:
    """First key code in the key table bound to `direction`."""
    for key, d in cfg.keys.items():
        if d == direction:
            return key
    return None


def choose_key(state: GameState, cfg: Config = CFG) -> Optional[int]:
    return key_for(choose_direction(state), cfg)
