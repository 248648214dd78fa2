# src/snakecore/snake.py
from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple

Coord = Tuple[int, int]

# ---------- State ----------
@dataclass(frozen=True)
class SnakeState:
    tail_to_head: Tuple[Coord, ...]   # head is the last element
    head_direction: Coord
    moves_since_food: int = 0
    hit_self: bool = False
    hit_wall: bool = False

    @property
    def head(self) -> Coord:
        return self.tail_to_head[-1]

def initial(length: int, tail_xy: Coord, head_direction: Coord) -> SnakeState:
    """Lay out a straight body of `length` cells from the tail towards the heading."""
    tx, ty = tail_xy
    dx, dy = head_direction
    body = tuple((tx + dx * i, ty + dy * i) for i in range(length))
    return SnakeState(tail_to_head=body, head_direction=head_direction)

# ---------- Movement ----------
def in_bounds(xy: Coord, columns: int, rows: int) -> bool:
    x, y = xy
    return 0 <= x < columns and 0 <= y < rows

def move(
    snake: SnakeState,
    food_xy: Optional[Coord],
    columns: int,
    rows: int,
    mirror: bool = False,
) -> Dict[str, Any]:
    """
    Advance the snake one cell along its heading.
    Returns only the fields that changed:
      - {"hit_wall": True} when the head leaves the board (mirror=False)
      - {"hit_self": True} when the head runs into the body
      - otherwise the new body and moves_since_food (0 when food was eaten)
    With mirror=True the head wraps to the opposite edge instead of hitting the wall.
    """
    hx, hy = snake.head
    dx, dy = snake.head_direction
    new_head = (hx + dx, hy + dy)

    if mirror:
        new_head = (new_head[0] % columns, new_head[1] % rows)
    elif not in_bounds(new_head, columns, rows):
        return {"hit_wall": True}

    ate = new_head == food_xy
    # The tail only stays put when growing, so its cell is free otherwise.
    body = snake.tail_to_head if ate else snake.tail_to_head[1:]
    if new_head in body:
        return {"hit_self": True}

    return {
        "tail_to_head": body + (new_head,),
        "moves_since_food": 0 if ate else snake.moves_since_food + 1,
    }

def change_direction(direction: Coord) -> Dict[str, Any]:
    return {"head_direction": direction}
