"""
Wall-aware queries on a map's navigation grid, in the terms the overlay
needs: normalized waypoint paths, ghost-teammate positions, walkability.

Every entry point takes world (telemetry) coordinates. An unknown map gives
None. A map without a nav grid is treated as open ground.
"""
from __future__ import annotations
import logging
from functools import lru_cache
from typing import List, Optional, Sequence

import numpy as np

from .astar_core import find_grid_path
from .bounds import BoundaryValidator
from .config import GRID_SIZE, TRADE_SAFETY_FACTOR
from .connectivity import nearest_walkable
from .grid import cell_distance, grid_to_normalized, normalized_to_grid
from .models import GhostValidation, Point
from .navgrid import NavigationGridStore
from .simplify import simplify_for_display
from .transform import CoordinateTransformer
from .visibility import segment_crosses_wall

logger = logging.getLogger(__name__)


@lru_cache(maxsize=4)
def open_grid(n: int = GRID_SIZE) -> np.ndarray:
    g = np.ones((n, n), dtype=bool)
    g.flags.writeable = False
    return g


class TacticalPositionSolver:
    def __init__(
        self,
        store: Optional[NavigationGridStore] = None,
        transformer: Optional[CoordinateTransformer] = None,
        validator: Optional[BoundaryValidator] = None,
    ):
        self.store = store or NavigationGridStore()
        self.transformer = transformer or CoordinateTransformer()
        self.registry = self.transformer.registry
        self.validator = validator or BoundaryValidator(self.transformer)

    # region Helpers
    def _walkable(self, map_name: str) -> Optional[np.ndarray]:
        grid = self.store.get(map_name)
        return None if grid is None else grid.walkable

    def _cell(self, p: Sequence[float], map_name: str, n: int):
        return self.transformer.world_to_grid(p[0], p[1], map_name, n)
    # endregion

    # region Paths
    def find_path(self, start: Sequence[float], end: Sequence[float], map_name: str) -> Optional[List[Point]]:
        """Normalized waypoints from start to end; a straight line when no path exists."""
        s_norm = self.transformer.world_to_normalized(start[0], start[1], map_name)
        e_norm = self.transformer.world_to_normalized(end[0], end[1], map_name)
        if s_norm is None or e_norm is None:
            logger.debug("find_path: unknown map %r", map_name)
            return None

        walkable = self._walkable(map_name)
        if walkable is None:
            return [s_norm, e_norm]

        N = walkable.shape[0]
        s_cell = normalized_to_grid(s_norm.x, s_norm.y, N)
        e_cell = normalized_to_grid(e_norm.x, e_norm.y, N)
        logger.debug("find_path %s: start %s walkable=%s, end %s walkable=%s", map_name,
                     s_cell, bool(walkable[s_cell]), e_cell, bool(walkable[e_cell]))

        raw = find_grid_path(s_cell, e_cell, walkable)
        if not raw:
            logger.info("No path on %s between %s and %s; using a straight line", map_name, s_cell, e_cell)
            return [s_norm, e_norm]
        if len(raw) < 2:
            # both ends resolved to one cell
            return [s_norm, e_norm]

        cells = simplify_for_display(raw)
        logger.debug("find_path %s: raw %d cells, final %d", map_name, len(raw), len(cells))
        out = [grid_to_normalized(r, c, N) for r, c in cells]
        out[0] = s_norm
        out[-1] = e_norm
        return out
    # endregion

    # region Ghost Teammate
    def find_optimal_ghost_position(
        self,
        death: Sequence[float],
        teammate: Sequence[float],
        trade_distance: float,
        map_name: str,
    ) -> Optional[Point]:
        """
        Where the teammate should have stood: the first cell along the walkable
        path from the death toward the teammate whose path distance reaches
        80% of the trade distance. None when there is no usable path.

        The chosen cell is the first one at or past the target (walked >=
        target), not the last one short of it, so the ghost never stands
        closer to the death than the safety margin allows. When the whole
        path is shorter than the target the teammate's own cell is used.
        """
        cfg = self.registry.get(map_name)
        if cfg is None:
            return None
        walkable = self._walkable(map_name)
        if walkable is None:
            walkable = open_grid()
        N = walkable.shape[0]

        d_cell = self._cell(death, map_name, N)
        t_cell = self._cell(teammate, map_name, N)
        path = find_grid_path(d_cell, t_cell, walkable)
        if not path or len(path) < 2:
            return None

        target = trade_distance * (N / cfg.world_span) * TRADE_SAFETY_FACTOR
        chosen = path[-1]
        walked = 0.0
        for prev, cur in zip(path, path[1:]):
            walked += cell_distance(prev, cur)
            if walked >= target:
                chosen = cur
                break
        return grid_to_normalized(chosen[0], chosen[1], N)

    def recommend_ghost(
        self,
        death: Sequence[float],
        teammate: Sequence[float],
        trade_distance: float,
        map_name: str,
    ) -> Optional[GhostValidation]:
        """Ghost position in world coordinates, kept inside the playable bounds."""
        ghost = self.find_optimal_ghost_position(death, teammate, trade_distance, map_name)
        if ghost is None:
            return None
        return self.validate_ghost(ghost, death, map_name)

    def validate_ghost(self, ghost: Point, death: Sequence[float], map_name: str) -> Optional[GhostValidation]:
        world = self.transformer.normalized_to_world(ghost.x, ghost.y, map_name)
        if world is None:
            return None
        return self.validator.validate_ghost_position(world, death, map_name)
    # endregion

    # region Walkability
    def is_walkable(self, point: Sequence[float], map_name: str) -> bool:
        walkable = self._walkable(map_name)
        if walkable is None:
            return True
        cell = self._cell(point, map_name, walkable.shape[0])
        if cell is None:
            return True
        return bool(walkable[cell])

    def find_nearest_walkable_position(self, point: Sequence[float], map_name: str) -> Optional[Point]:
        norm = self.transformer.world_to_normalized(point[0], point[1], map_name)
        if norm is None:
            return None
        walkable = self._walkable(map_name)
        if walkable is None:
            return norm
        N = walkable.shape[0]
        cell = normalized_to_grid(norm.x, norm.y, N)
        if walkable[cell]:
            return norm
        nearest = nearest_walkable(cell, walkable)
        if nearest is None:
            return norm
        return grid_to_normalized(nearest[0], nearest[1], N)

    def path_crosses_wall(self, p1: Sequence[float], p2: Sequence[float], map_name: str) -> bool:
        walkable = self._walkable(map_name)
        if walkable is None:
            return False
        N = walkable.shape[0]
        a = self._cell(p1, map_name, N)
        b = self._cell(p2, map_name, N)
        if a is None or b is None:
            return False
        return segment_crosses_wall(a, b, walkable)
    # endregion
