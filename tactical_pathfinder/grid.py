# region Imports
import math
from typing import Tuple
from .models import GridCell, Point
# endregion

# region Index Helpers
def cell_index(row: int, col: int, N: int) -> int:
    return row * N + col


def index_cell(i: int, N: int) -> GridCell:
    return (i // N, i % N)


def in_grid(row: int, col: int, N: int) -> bool:
    return 0 <= row < N and 0 <= col < N
# endregion

# region Normalized <-> Cell
def normalized_to_grid(x: float, y: float, N: int) -> GridCell:
    col = int(math.floor(max(0.0, min(N - 1, x * N))))
    row = int(math.floor(max(0.0, min(N - 1, y * N))))
    return (row, col)


def grid_to_normalized(row: int, col: int, N: int) -> Point:
    """Center-of-cell mapping from grid (row, col) to normalized (x, y)."""
    return Point((col + 0.5) / N, (row + 0.5) / N)


def cell_distance(a: Tuple[int, int], b: Tuple[int, int]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])
# endregion
