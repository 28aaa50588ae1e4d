"""Spatial navigation and tactical positioning for match-replay minimap overlays."""

from .astar_core import find_grid_path
from .bounds import BoundaryValidator
from .maps import MAP_CONFIGS, MapCoordinateRegistry
from .models import Callout, GhostValidation, MapCalibration, MapConfig, NavGrid, PlayableBounds, Point
from .navgrid import DirectoryAssetSource, MemoryAssetSource, NavGridFormatError, NavigationGridStore
from .simplify import simplify_for_display, simplify_path
from .tactical import TacticalPositionSolver
from .transform import CoordinateTransformer

__version__ = "0.1.0"

__all__ = [
    "BoundaryValidator",
    "Callout",
    "CoordinateTransformer",
    "DirectoryAssetSource",
    "GhostValidation",
    "MAP_CONFIGS",
    "MapCalibration",
    "MapConfig",
    "MapCoordinateRegistry",
    "MemoryAssetSource",
    "NavGrid",
    "NavGridFormatError",
    "NavigationGridStore",
    "PlayableBounds",
    "Point",
    "TacticalPositionSolver",
    "find_grid_path",
    "simplify_for_display",
    "simplify_path",
]
