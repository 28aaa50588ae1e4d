"""Tests for TacticalPositionSolver queries."""

import numpy as np
import pytest

from tactical_pathfinder.astar_core import find_grid_path
from tactical_pathfinder.grid import cell_distance, grid_to_normalized, normalized_to_grid
from tactical_pathfinder.models import GhostValidation

from .conftest import GRID_N, open_grid, walled_grid

# testmap: world_span 16000 on a 16-cell grid -> 0.001 cells per world unit,
# so a 5000-unit trade distance is 5 * 0.8 = 4 cells.
TRADE_4_CELLS = 5000.0


class TestGhostPosition:
    """Tests for find_optimal_ghost_position."""

    def test_stops_at_trade_distance(self, make_solver, cell_world):
        """Verify the ghost sits where the walked distance first reaches the target."""
        solver = make_solver(open_grid())
        g = solver.find_optimal_ghost_position(cell_world((8, 2)), cell_world((8, 14)), TRADE_4_CELLS, "testmap")
        assert g == pytest.approx(grid_to_normalized(8, 6, GRID_N))

    def test_short_path_uses_teammate(self, make_solver, cell_world):
        """Verify a path shorter than the target ends at the teammate."""
        solver = make_solver(open_grid())
        g = solver.find_optimal_ghost_position(cell_world((8, 2)), cell_world((8, 5)), 50000.0, "testmap")
        assert g == pytest.approx(grid_to_normalized(8, 5, GRID_N))

    def test_on_path_around_wall(self, make_solver, cell_world):
        """Verify the ghost lies on the wall-aware path within one step past the target."""
        grid = walled_grid()
        solver = make_solver(grid)
        death, mate = (2, 2), (2, 14)
        g = solver.find_optimal_ghost_position(cell_world(death), cell_world(mate), 20000.0, "testmap")
        cell = normalized_to_grid(g.x, g.y, GRID_N)
        path = find_grid_path(death, mate, grid)
        assert cell in path
        assert grid[cell]
        i = path.index(cell)
        walked = sum(cell_distance(a, b) for a, b in zip(path[:i], path[1:i + 1]))
        target = 20000.0 * (GRID_N / 16000.0) * 0.8
        assert walked >= target
        assert walked - cell_distance(path[i - 1], path[i]) < target

    def test_no_path(self, make_solver, cell_world):
        """Verify a sealed wall gives no recommendation."""
        solver = make_solver(walled_grid(gap_rows=()))
        assert solver.find_optimal_ghost_position(cell_world((2, 2)), cell_world((2, 14)), 2500.0, "testmap") is None

    def test_same_cell(self, make_solver, cell_world):
        """Verify death and teammate in one cell give no recommendation."""
        solver = make_solver(open_grid())
        assert solver.find_optimal_ghost_position(cell_world((4, 4)), cell_world((4, 4)), 2500.0, "testmap") is None

    def test_unknown_map(self, make_solver):
        """Verify unknown maps give None."""
        assert make_solver(open_grid()).find_optimal_ghost_position((0, 0), (1, 1), 2500.0, "nowhere") is None

    def test_no_grid_uses_open_ground(self, make_solver, transformer):
        """Verify a map without a grid still gets a straight-line recommendation."""
        solver = make_solver(None)
        g = solver.find_optimal_ghost_position((0, -3000), (0, 3000), 2500.0, "testmap")
        assert g is not None
        # death and teammate share a minimap row, so the ghost does too
        death_n = transformer.world_to_normalized(0, -3000, "testmap")
        assert g.y == pytest.approx(death_n.y, abs=1.0 / 128)

    def test_recommend_ghost_validates(self, make_solver, cell_world):
        """Verify the recommendation is returned in world space with its adjustment flag."""
        solver = make_solver(open_grid())
        rec = solver.recommend_ghost(cell_world((8, 2)), cell_world((8, 14)), TRADE_4_CELLS, "testmap")
        assert isinstance(rec, GhostValidation)
        expected = cell_world((8, 6))
        if not rec.was_adjusted:
            assert rec.point.x == pytest.approx(expected[0])
            assert rec.point.y == pytest.approx(expected[1])


class TestFindPath:
    """Tests for normalized display paths."""

    def test_exact_endpoints(self, make_solver, transformer):
        """Verify the path starts and ends at the exact normalized endpoints."""
        solver = make_solver(walled_grid())
        start, end = (-2000, -3000), (-2000, 3000)
        pts = solver.find_path(start, end, "testmap")
        assert pts[0] == transformer.world_to_normalized(*start, "testmap")
        assert pts[-1] == transformer.world_to_normalized(*end, "testmap")
        assert len(pts) > 2

    def test_waypoints_avoid_walls(self, make_solver, cell_world):
        """Verify intermediate waypoints are open cells."""
        grid = walled_grid()
        solver = make_solver(grid)
        pts = solver.find_path(cell_world((2, 2)), cell_world((2, 14)), "testmap")
        for p in pts[1:-1]:
            assert grid[normalized_to_grid(p.x, p.y, GRID_N)]

    def test_both_ends_in_one_cell(self, make_solver, cell_world):
        """Verify endpoints sharing a cell still give a start and an end."""
        solver = make_solver(open_grid())
        cx, cy = cell_world((4, 4))
        start, end = (cx - 100, cy - 100), (cx + 100, cy + 100)
        pts = solver.find_path(start, end, "testmap")
        assert pts == [solver.transformer.world_to_normalized(*start, "testmap"),
                       solver.transformer.world_to_normalized(*end, "testmap")]

    def test_straight_line_without_path(self, make_solver, cell_world):
        """Verify a blocked query falls back to two points."""
        solver = make_solver(walled_grid(gap_rows=()))
        pts = solver.find_path(cell_world((2, 2)), cell_world((2, 14)), "testmap")
        assert len(pts) == 2

    def test_straight_line_without_grid(self, make_solver):
        """Verify maps without nav data draw a straight line."""
        assert len(make_solver(None).find_path((0, 0), (1000, 1000), "testmap")) == 2

    def test_unknown_map(self, make_solver):
        """Verify unknown maps give None."""
        assert make_solver(open_grid()).find_path((0, 0), (1, 1), "nowhere") is None


class TestWalkability:
    """Tests for walkability, nearest open position and wall crossing."""

    def test_is_walkable(self, make_solver, cell_world):
        """Verify lookups follow the grid."""
        solver = make_solver(walled_grid())
        assert solver.is_walkable(cell_world((2, 2)), "testmap")
        assert not solver.is_walkable(cell_world((2, 8)), "testmap")

    def test_permissive_without_data(self, make_solver):
        """Verify missing grids and unknown maps count as walkable."""
        assert make_solver(None).is_walkable((0, 0), "testmap")
        assert make_solver(open_grid()).is_walkable((0, 0), "nowhere")

    def test_nearest_walkable_from_wall(self, make_solver, cell_world):
        """Verify a point in a wall is moved to an open cell centre."""
        grid = walled_grid()
        solver = make_solver(grid)
        p = solver.find_nearest_walkable_position(cell_world((4, 8)), "testmap")
        cell = normalized_to_grid(p.x, p.y, GRID_N)
        assert grid[cell]
        assert max(abs(cell[0] - 4), abs(cell[1] - 8)) == 1
        assert p == pytest.approx(grid_to_normalized(cell[0], cell[1], GRID_N))

    def test_nearest_walkable_when_open(self, make_solver, transformer, cell_world):
        """Verify an open point keeps its exact normalized position."""
        solver = make_solver(walled_grid())
        w = cell_world((2, 2))
        assert solver.find_nearest_walkable_position(w, "testmap") == transformer.world_to_normalized(*w, "testmap")

    def test_nearest_walkable_without_grid(self, make_solver, transformer):
        """Verify missing grids return the point itself and unknown maps None."""
        assert make_solver(None).find_nearest_walkable_position((0, 0), "testmap") == \
            transformer.world_to_normalized(0, 0, "testmap")
        assert make_solver(None).find_nearest_walkable_position((0, 0), "nowhere") is None

    def test_path_crosses_wall(self, make_solver, cell_world):
        """Verify a segment through a single wall cell is blocked and an open one is not."""
        grid = open_grid()
        grid[5, 5] = False
        solver = make_solver(grid)
        assert solver.path_crosses_wall(cell_world((0, 0)), cell_world((10, 10)), "testmap")
        assert not solver.path_crosses_wall(cell_world((0, 0)), cell_world((0, 10)), "testmap")

    def test_crosses_wall_without_grid(self, make_solver):
        """Verify missing grids never report a wall."""
        assert not make_solver(None).path_crosses_wall((0, 0), (3000, 3000), "testmap")
        assert not make_solver(np.zeros((GRID_N, GRID_N), dtype=bool)).path_crosses_wall((0, 0), (1, 1), "nowhere")
