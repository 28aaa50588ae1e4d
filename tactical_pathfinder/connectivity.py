# region Imports
from collections import deque
from typing import Optional, Tuple
import numpy as np
from .config import NEAREST_WALKABLE_RADIUS
# endregion

# region Nearest Walkable Cell Search
def nearest_walkable(
    rc: Tuple[int, int],
    walkable: np.ndarray,
    max_radius: int = NEAREST_WALKABLE_RADIUS,
) -> Optional[Tuple[int, int]]:
    """
    Breadth-first search outward from `rc` for the closest open cell.
    Gives up after 4 * max_radius**2 dequeues and returns None.
    """
    r, c = rc
    H, W = walkable.shape
    if 0 <= r < H and 0 <= c < W and walkable[r, c]:
        return rc

    visited = np.zeros(H * W, dtype=bool)
    if 0 <= r < H and 0 <= c < W:
        visited[r * W + c] = True
    queue = deque([rc])
    cap = 4 * max_radius * max_radius
    iterations = 0

    while queue and iterations < cap:
        iterations += 1
        cr, cc = queue.popleft()
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if dr == 0 and dc == 0:
                    continue
                rr, nc = cr + dr, cc + dc
                if not (0 <= rr < H and 0 <= nc < W):
                    continue
                i = rr * W + nc
                if visited[i]:
                    continue
                visited[i] = True
                if walkable[rr, nc]:
                    return (rr, nc)
                queue.append((rr, nc))

    return None
# endregion
