# region Imports and Typing
import heapq
import logging
import math
from typing import Any, Callable, List, Optional, Tuple

import numpy as np

from .connectivity import nearest_walkable
from .costs import move_cost_factory
from .grid import cell_index, in_grid, index_cell
# endregion

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

# region Neighbor Generation
def neighbors_8(u, N):
    r, c = u
    for dr in (-1, 0, 1):
        for dc in (-1, 0, 1):
            if dr == 0 and dc == 0:
                continue
            rr, cc = r + dr, c + dc
            if in_grid(rr, cc, N):
                yield (rr, cc)


def euclid(a: Cell, b: Cell) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])
# endregion

# region Path Reconstruction
def reconstruct(parent: np.ndarray, goal_i: int, W: int) -> List[Cell]:
    path = []
    i = goal_i
    while i >= 0:
        path.append(index_cell(i, W))
        i = int(parent[i])
    path.reverse()
    return path
# endregion

# region A* Algorithm
def astar(
    start: Cell,
    goal: Cell,
    neighbors_fn: Callable[[Cell], Any],
    edge_cost_fn: Callable[[Cell, Cell], Optional[float]],
    heuristic_fn: Callable[[Cell, Cell], float],
    *,
    grid_size: int,
    max_expansions: Optional[int] = None,
):
    """
    A* over a square grid of `grid_size` cells per side.

    Open set is a binary heap of (f, h, counter, node): ties on f go to the
    lower h, then to the earlier push. g, parent and closed live in flat
    arrays indexed by row * grid_size + col.

    Returns (path, cost, expansions); path is None when the goal is not
    reached before the heap drains or `max_expansions` nodes are expanded.
    """
    if start == goal:
        return [start], 0.0, 0

    W = grid_size
    g = np.full(W * W, np.inf)
    parent = np.full(W * W, -1, dtype=np.int64)
    closed = np.zeros(W * W, dtype=bool)

    counter = 0
    h0 = heuristic_fn(start, goal)
    openh: List[Tuple[float, float, int, Cell]] = [(h0, h0, counter, start)]
    g[cell_index(start[0], start[1], W)] = 0.0
    expansions = 0

    while openh:
        _, _, _, u = heapq.heappop(openh)
        ui = cell_index(u[0], u[1], W)
        if closed[ui]:
            continue
        closed[ui] = True
        expansions += 1

        if u == goal:
            return reconstruct(parent, ui, W), float(g[ui]), expansions

        # region Expansion Limits
        if max_expansions is not None and expansions >= max_expansions:
            return None, float("inf"), expansions
        # endregion

        gu = g[ui]
        # region Neighbor Loop
        for v in neighbors_fn(u):
            vi = cell_index(v[0], v[1], W)
            if closed[vi]:
                continue
            c = edge_cost_fn(u, v)
            if c is None:
                continue
            alt = gu + c
            if alt < g[vi] - 1e-12:
                g[vi] = alt
                parent[vi] = ui
                hv = heuristic_fn(v, goal)
                counter += 1
                heapq.heappush(openh, (alt + hv, hv, counter, v))
        # endregion

    return None, float("inf"), expansions
# endregion

# region Grid Pathfinder
def find_grid_path(start: Cell, end: Cell, walkable: np.ndarray) -> Optional[List[Cell]]:
    """
    Wall-aware path between two cells, inclusive of both ends.

    Wall endpoints are first moved to the nearest open cell. None means no
    path: the endpoints could not be resolved or the search hit its cap of
    N*N expansions. Callers fall back to a straight [start, end] line.
    """
    N = walkable.shape[0]
    s = nearest_walkable(start, walkable)
    t = nearest_walkable(end, walkable)
    if s is None or t is None:
        logger.debug("No walkable cell near %s", start if s is None else end)
        return None

    path, cost, expansions = astar(
        start=s, goal=t,
        neighbors_fn=lambda u: neighbors_8(u, N),
        edge_cost_fn=move_cost_factory(walkable),
        heuristic_fn=euclid,
        grid_size=N,
        max_expansions=N * N,
    )
    if path is None:
        logger.debug("A* found no path %s -> %s after %d expansions", s, t, expansions)
    else:
        logger.debug("A* path %s -> %s: %d cells, cost %.2f, %d expansions",
                     s, t, len(path), cost, expansions)
    return path


def path_length(path: List[Cell]) -> float:
    return sum(euclid(a, b) for a, b in zip(path, path[1:]))
# endregion
