"""Board placement for displaying many matches on one grid."""

from typing import Tuple

from deckbattle.simulation.state import BOARD_PADDING, BOARD_SIZE, SQRT_NUMBER_OF_GAMES


def board_position(
    game_id: int,
    grid_width: int = SQRT_NUMBER_OF_GAMES,
    board_size: float = BOARD_SIZE,
    padding: float = BOARD_PADDING,
) -> Tuple[float, float]:
    """Return the (x, y) origin of a match board, filled row by row."""
    if grid_width <= 0:
        raise ValueError(f"grid_width must be positive, got {grid_width}")
    x = game_id % grid_width
    y = game_id // grid_width
    stride = board_size + padding
    return (x * stride, y * stride)
