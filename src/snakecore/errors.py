# src/snakecore/errors.py


class SnakeCoreError(Exception):
    """Base class for configuration errors raised by the simulation core."""


class UnknownDifficultyError(SnakeCoreError, LookupError):
    def __init__(self, difficulty_id):
        super().__init__(f"Unknown difficulty {difficulty_id!r}")
        self.difficulty_id = difficulty_id


class StartPlacementError(SnakeCoreError, ValueError):
    """The starting snake body does not fit on the board (strict mode only)."""


class BoardFullError(SnakeCoreError, RuntimeError):
    """No free cell is left to place food on."""
