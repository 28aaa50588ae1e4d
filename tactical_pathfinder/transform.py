# region Imports
from __future__ import annotations
from typing import Optional
from .config import NORMALIZED_MAX, NORMALIZED_MIN
from .grid import grid_to_normalized, normalized_to_grid
from .maps import MapCoordinateRegistry
from .models import GridCell, Point
# endregion


def _clamp_unit(v: float) -> float:
    return max(NORMALIZED_MIN, min(NORMALIZED_MAX, v))


class CoordinateTransformer:
    """World telemetry coordinates <-> normalized minimap coordinates."""

    def __init__(self, registry: Optional[MapCoordinateRegistry] = None):
        self.registry = registry or MapCoordinateRegistry()

    # region World <-> Normalized
    def world_to_normalized(self, x: float, y: float, map_name: str) -> Optional[Point]:
        """
        Swap axes, apply the map's affine calibration, then clamp to
        [0.01, 0.99] so markers stay on screen. None for an unknown map.
        """
        cal = self.registry.calibration(map_name)
        if cal is None:
            return None
        nx = y * cal.x_multiplier + cal.x_scalar_to_add
        ny = x * cal.y_multiplier + cal.y_scalar_to_add
        return Point(_clamp_unit(nx), _clamp_unit(ny))

    def normalized_to_world(self, nx: float, ny: float, map_name: str) -> Optional[Point]:
        """Exact inverse of world_to_normalized, without clamping."""
        cal = self.registry.calibration(map_name)
        if cal is None:
            return None
        wy = (nx - cal.x_scalar_to_add) / cal.x_multiplier
        wx = (ny - cal.y_scalar_to_add) / cal.y_multiplier
        return Point(wx, wy)
    # endregion

    # region Grid
    def world_to_grid(self, x: float, y: float, map_name: str, grid_size: int) -> Optional[GridCell]:
        norm = self.world_to_normalized(x, y, map_name)
        if norm is None:
            return None
        return normalized_to_grid(norm.x, norm.y, grid_size)

    @staticmethod
    def grid_to_normalized(cell: GridCell, grid_size: int) -> Point:
        return grid_to_normalized(cell[0], cell[1], grid_size)

    def grid_to_world(self, cell: GridCell, map_name: str, grid_size: int) -> Optional[Point]:
        norm = grid_to_normalized(cell[0], cell[1], grid_size)
        return self.normalized_to_world(norm.x, norm.y, map_name)
    # endregion

    # region Pixels
    @staticmethod
    def normalized_to_pixel(point: Point, width: int, height: int) -> Point:
        return Point(point.x * width, point.y * height)

    def world_to_pixel(self, x: float, y: float, map_name: str, width: int, height: int) -> Optional[Point]:
        norm = self.world_to_normalized(x, y, map_name)
        if norm is None:
            return None
        return self.normalized_to_pixel(norm, width, height)
    # endregion
