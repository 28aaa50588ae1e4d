# region Imports
from typing import Iterator, Tuple
import numpy as np
# endregion

# region Bresenham
def bresenham_cells(a: Tuple[int, int], b: Tuple[int, int]) -> Iterator[Tuple[int, int]]:
    """Cells on the rasterized line from a to b, both included, as (row, col)."""
    r, c = a
    r1, c1 = b
    dc, dr = abs(c1 - c), abs(r1 - r)
    sc = 1 if c < c1 else -1
    sr = 1 if r < r1 else -1
    err = dc - dr
    while True:
        yield (r, c)
        if r == r1 and c == c1:
            return
        e2 = 2 * err
        if e2 > -dr:
            err -= dr
            c += sc
        if e2 < dc:
            err += dc
            r += sr


def segment_crosses_wall(a: Tuple[int, int], b: Tuple[int, int], walkable: np.ndarray) -> bool:
    H, W = walkable.shape
    for r, c in bresenham_cells(a, b):
        if 0 <= r < H and 0 <= c < W and not walkable[r, c]:
            return True
    return False
# endregion
