# src/snakecore/game.py
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Mapping, Optional, Tuple
import logging
import math
import random

from . import snake as snake_engine
from .config import (
    CFG, Config, DifficultySettings,
    FRESH, PLAYING, GAME_OVER, RESTARTING,
    BLANK, COVERED,
    opposite,
)
from .errors import BoardFullError, StartPlacementError, UnknownDifficultyError
from .snake import Coord, SnakeState

logger = logging.getLogger(__name__)

# ---------- State ----------
@dataclass(frozen=True)
class Tile:
    bomb_state: str = BLANK
    user_state: str = COVERED

Board = Tuple[Tuple[Tile, ...], ...]

@dataclass(frozen=True)
class GameState:
    game_state: str
    columns: int
    rows: int
    snake1: SnakeState
    food_xy: Coord
    board: Board
    bombs_count: int = 0
    uncovered_count: int = 0
    flags_count: int = 0
    moves_count: int = 0
    started_at: Optional[float] = None
    game_state_data: Mapping[str, Any] = field(default_factory=dict)
    difficulty_id: Optional[str] = None

@dataclass(frozen=True)
class StateUpdate:
    """The top-level GameState fields a tick or key press replaces."""
    changes: Mapping[str, Any]

    def __post_init__(self):
        object.__setattr__(self, "changes", MappingProxyType(dict(self.changes)))

    def apply(self, state: GameState) -> GameState:
        return replace(state, **self.changes)

def apply_update(state: GameState, update: Optional[StateUpdate]) -> GameState:
    """Merge `update` over `state`; None means nothing changed."""
    if update is None:
        return state
    return update.apply(state)

# ---------- Helpers ----------
def _round_half_up(value: float) -> int:
    # Halves go towards +inf, so -0.5 -> 0 and 0.5 -> 1.
    return int(math.floor(value + 0.5))

def _rng(rng: Optional[random.Random]):
    return random if rng is None else rng

def build_board(columns: int, rows: int) -> Board:
    # No obstacles are generated yet: every tile starts blank and covered.
    return tuple(
        tuple(Tile(bomb_state=BLANK, user_state=COVERED) for _ in range(columns))
        for _ in range(rows)
    )

def place_food(
    columns: int,
    rows: int,
    is_valid: Callable[[Coord], bool],
    rng: Optional[random.Random] = None,
) -> Coord:
    """Pick cells uniformly at random until one satisfies `is_valid`."""
    r = _rng(rng)
    while True:
        food_xy = (r.randint(0, columns - 1), r.randint(0, rows - 1))
        if is_valid(food_xy):
            return food_xy

def place_food_for_snake(
    columns: int,
    rows: int,
    snake: SnakeState,
    rng: Optional[random.Random] = None,
) -> Coord:
    occupied = set(snake.tail_to_head)
    on_board = sum(1 for xy in occupied if snake_engine.in_bounds(xy, columns, rows))
    if on_board >= columns * rows:
        raise BoardFullError(f"snake covers all {columns * rows} cells of a {columns}x{rows} board")
    return place_food(columns, rows, lambda xy: xy not in occupied, rng)

def resolve_settings(
    difficulty_id: Optional[str],
    settings: Optional[DifficultySettings] = None,
    cfg: Config = CFG,
) -> DifficultySettings:
    if settings is None:
        settings = cfg.difficulties.get(difficulty_id)
    if settings is None:
        raise UnknownDifficultyError(difficulty_id)
    return settings

# ---------- Restart ----------
def restart(
    difficulty_id: Optional[str] = None,
    settings: Optional[DifficultySettings] = None,
    cfg: Config = CFG,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Build a fresh game for a difficulty id, or for explicit settings when given.
    Raises UnknownDifficultyError if neither resolves to settings.
    """
    from_table = settings is None
    settings = resolve_settings(difficulty_id, settings, cfg)
    columns, rows = settings.columns, settings.rows

    # Informational only; tiles never receive bombs.
    bombs_count = _round_half_up(settings.bomb_odds * columns * rows)
    board = build_board(columns, rows)

    snake1 = snake_engine.initial(
        length=cfg.start_length,
        tail_xy=cfg.start_tail,
        head_direction=cfg.start_direction,
    )
    if not all(snake_engine.in_bounds(xy, columns, rows) for xy in snake1.tail_to_head):
        msg = f"starting snake {snake1.tail_to_head} does not fit a {columns}x{rows} board"
        if cfg.strict_start:
            raise StartPlacementError(msg)
        logger.warning(msg)

    food_xy = place_food_for_snake(columns, rows, snake1, rng)

    return GameState(
        game_state=FRESH,
        game_state_data={},
        columns=columns,
        rows=rows,
        snake1=snake1,
        food_xy=food_xy,
        board=board,
        bombs_count=bombs_count,
        uncovered_count=0,
        flags_count=0,
        moves_count=0,
        started_at=None,
        difficulty_id=difficulty_id if from_table else None,
    )

initial = restart
complete_restart = restart

def begin_restart() -> StateUpdate:
    return StateUpdate({"game_state": RESTARTING})

# ---------- Difficulty transition ----------
def tween_settings(
    prev: DifficultySettings,
    nxt: DifficultySettings,
    frame: int,
    total: int,
) -> DifficultySettings:
    """Next settings with columns/rows blended `frame/total` of the way from prev."""
    return replace(
        nxt,
        columns=prev.columns + _round_half_up((nxt.columns - prev.columns) * frame / total),
        rows=prev.rows + _round_half_up((nxt.rows - prev.rows) * frame / total),
    )

def tween_frame(
    prev_id: str,
    next_id: str,
    frame: int,
    cfg: Config = CFG,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    GameState for one frame of a difficulty change.
    Frames 0..tween_frames-1 are fresh boards at interpolated sizes;
    frame tween_frames is the exact restart at next_id.
    """
    total = cfg.tween_frames
    if not 0 <= frame <= total:
        raise IndexError(f"frame {frame} outside 0..{total}")
    if frame == total:
        return restart(next_id, cfg=cfg, rng=rng)
    prev = resolve_settings(prev_id, cfg=cfg)
    nxt = resolve_settings(next_id, cfg=cfg)
    return restart(settings=tween_settings(prev, nxt, frame, total), cfg=cfg, rng=rng)

def load(
    next_id: str,
    prev_id: Optional[str] = None,
    cfg: Config = CFG,
    rng: Optional[random.Random] = None,
) -> Iterator[GameState]:
    """Yield the animated resize from prev_id to next_id; nothing if unchanged."""
    if prev_id is None or prev_id == next_id:
        return
    logger.info("Difficulty %s -> %s over %d frames", prev_id, next_id, cfg.tween_frames)
    for frame in range(cfg.tween_frames + 1):
        yield tween_frame(prev_id, next_id, frame, cfg=cfg, rng=rng)

# ---------- Tick / Input ----------
def tick(state: GameState, rng: Optional[random.Random] = None) -> Optional[StateUpdate]:
    """
    Advance the game by one step.
    Returns None outside fresh/playing, a game-over update on any collision,
    otherwise the moved snake and (possibly regenerated) food.
    """
    if state.game_state not in (FRESH, PLAYING):
        return None

    changes = snake_engine.move(
        state.snake1,
        food_xy=state.food_xy,
        columns=state.columns,
        rows=state.rows,
        mirror=False,
    )
    new_snake1 = replace(state.snake1, **changes)

    # Collisions win over eating.
    if new_snake1.hit_self or new_snake1.hit_wall:
        logger.debug("Game over at %s (hit_self=%s, hit_wall=%s)",
                     state.snake1.head, new_snake1.hit_self, new_snake1.hit_wall)
        return StateUpdate({"game_state": GAME_OVER})

    food_xy = state.food_xy
    if new_snake1.moves_since_food == 0:
        food_xy = place_food_for_snake(state.columns, state.rows, new_snake1, rng)
        logger.debug("Food eaten at %s, new food at %s", new_snake1.head, food_xy)

    return StateUpdate({
        "game_state": PLAYING,
        "snake1": new_snake1,
        "food_xy": food_xy,
    })

def steer(state: GameState, direction: Coord) -> Optional[StateUpdate]:
    """Turn the snake unless that would reverse it onto itself."""
    if state.snake1.head_direction == opposite(direction):
        return None
    changes: Dict[str, Any] = snake_engine.change_direction(direction)
    return StateUpdate({"snake1": replace(state.snake1, **changes)})

def change_snake_direction(state: GameState, key: int, cfg: Config = CFG) -> Optional[StateUpdate]:
    direction = cfg.keys.get(key)
    if direction is None:
        return None
    return steer(state, direction)
