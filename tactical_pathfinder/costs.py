# region Imports
import math
from typing import Optional, Tuple
import numpy as np
# endregion

SQRT2 = math.sqrt(2.0)

# region Move-cost Factory
def move_cost_factory(walkable: np.ndarray):
    """
    Edge cost for 8-directional grid moves: 1 orthogonal, sqrt(2) diagonal.
    Returns None for walls and for diagonals that would cut a wall corner.
    """
    H, W = walkable.shape

    # region Move-cost Function
    def move_cost(u: Tuple[int, int], v: Tuple[int, int]) -> Optional[float]:
        r0, c0 = u
        r1, c1 = v
        if not (0 <= r1 < H and 0 <= c1 < W) or not walkable[r1, c1]:
            return None
        dr, dc = r1 - r0, c1 - c0
        if dr != 0 and dc != 0:
            # both orthogonal neighbours must be open
            if not walkable[r0 + dr, c0] or not walkable[r0, c0 + dc]:
                return None
            return SQRT2
        return 1.0
    # endregion

    return move_cost
# endregion
