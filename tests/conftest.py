"""Shared fixtures: a synthetic map with simple calibration and small grids."""

import numpy as np
import pytest

from tactical_pathfinder.maps import MAP_CONFIGS, MapCoordinateRegistry
from tactical_pathfinder.models import Callout, MapCalibration, MapConfig
from tactical_pathfinder.navgrid import MemoryAssetSource, NavigationGridStore
from tactical_pathfinder.tactical import TacticalPositionSolver
from tactical_pathfinder.transform import CoordinateTransformer

GRID_N = 16

# nx = y * 1e-4 + 0.5, ny = -x * 1e-4 + 0.5
TEST_MAP = MapConfig(
    key="testmap",
    display_name="Test Map",
    uuid="test",
    calibration=MapCalibration(1e-4, -1e-4, 0.5, 0.5),
    callouts=(Callout("Site", "A", 0.2, 0.2), Callout("Site", "B", 0.8, 0.8)),
    world_span=16000.0,
)

# Callouts span world X in [4000, 9500] and Y in [-6000, -1000]
BOUNDS_MAP = MapConfig(
    key="boundsmap",
    display_name="Bounds Map",
    uuid="bounds",
    calibration=MapCalibration(1e-4, -1e-4, 0.7, 1.0),
    callouts=(Callout("Site", "A", 0.1, 0.6), Callout("Site", "B", 0.6, 0.05)),
)

NO_CALLOUT_MAP = MapConfig(
    key="bare",
    display_name="Bare",
    uuid="bare",
    calibration=MapCalibration(1e-4, -1e-4, 0.5, 0.5),
)


def open_grid(n=GRID_N):
    return np.ones((n, n), dtype=bool)


def walled_grid(n=GRID_N, col=8, gap_rows=(13, 14, 15)):
    """Vertical wall down `col`, open only at `gap_rows`."""
    g = open_grid(n)
    g[:, col] = False
    for r in gap_rows:
        g[r, col] = True
    return g


@pytest.fixture
def registry():
    return MapCoordinateRegistry(list(MAP_CONFIGS.values()) + [TEST_MAP, BOUNDS_MAP, NO_CALLOUT_MAP])


@pytest.fixture
def transformer(registry):
    return CoordinateTransformer(registry)


@pytest.fixture
def make_solver(transformer):
    """Build a solver whose testmap grid is the given array (None = no grid)."""
    def _make(grid=None):
        grids = {} if grid is None else {"testmap": grid}
        store = NavigationGridStore().init(MemoryAssetSource(grids))
        return TacticalPositionSolver(store, transformer)
    return _make


@pytest.fixture
def cell_world(transformer):
    """World coordinates of a testmap grid cell's centre."""
    def _world(cell, n=GRID_N):
        return tuple(transformer.grid_to_world(cell, "testmap", n))
    return _world
