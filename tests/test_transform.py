"""Tests for the map registry and world/normalized coordinate transforms."""

import pytest

from tactical_pathfinder.grid import cell_index, grid_to_normalized, in_grid, index_cell, normalized_to_grid
from tactical_pathfinder.maps import MapCoordinateRegistry, normalize_map_name
from tactical_pathfinder.models import MapCalibration, Point
from tactical_pathfinder.transform import CoordinateTransformer


class TestRegistry:
    """Tests for map lookup."""

    def test_name_normalization(self):
        """Verify case, spaces and punctuation are ignored."""
        assert normalize_map_name(" Ascent ") == "ascent"
        assert normalize_map_name("ICE-box") == "icebox"

    def test_known_maps(self):
        """Verify the shipped configurations are reachable by display name."""
        reg = MapCoordinateRegistry()
        assert "Ascent" in reg
        assert reg.get("HAVEN").display_name == "Haven"
        assert len(reg.callouts("haven")) == 3
        assert reg.image_url("ascent").endswith("/displayicon.png")

    def test_unknown_map(self):
        """Verify unknown maps give None or empty results."""
        reg = MapCoordinateRegistry()
        assert reg.get("dust2") is None
        assert reg.calibration("dust2") is None
        assert reg.callouts("dust2") == []

    def test_zero_multiplier_rejected(self):
        """Verify a calibration that cannot be inverted is refused."""
        with pytest.raises(ValueError):
            MapCalibration(0.0, -7e-05, 0.5, 0.5)


class TestWorldToNormalized:
    """Tests for world -> normalized conversion."""

    def test_axes_are_swapped(self):
        """Verify world Y drives minimap X and world X drives minimap Y."""
        t = CoordinateTransformer()
        p = t.world_to_normalized(0.0, 1000.0, "ascent")
        assert p.x == pytest.approx(1000.0 * 7e-05 + 0.813895)
        assert p.y == pytest.approx(0.573242)

    def test_clamped_to_visible_range(self):
        """Verify far-off points are pinned inside [0.01, 0.99]."""
        t = CoordinateTransformer()
        p = t.world_to_normalized(-1e7, 1e7, "ascent")
        assert p == Point(0.99, 0.99)
        p = t.world_to_normalized(1e7, -1e7, "ascent")
        assert p == Point(0.01, 0.01)

    def test_unknown_map_returns_none(self):
        """Verify unknown maps give None in both directions."""
        t = CoordinateTransformer()
        assert t.world_to_normalized(0, 0, "nowhere") is None
        assert t.normalized_to_world(0.5, 0.5, "nowhere") is None


class TestNormalizedToWorld:
    """Tests for the inverse transform."""

    @pytest.mark.parametrize("map_name", ["ascent", "bind", "lotus", "abyss"])
    def test_interior_round_trip(self, map_name):
        """Verify interior points survive world -> normalized -> world."""
        t = CoordinateTransformer()
        cal = t.registry.calibration(map_name)
        # world point that lands at (0.4, 0.6) on the minimap
        wy = (0.4 - cal.x_scalar_to_add) / cal.x_multiplier
        wx = (0.6 - cal.y_scalar_to_add) / cal.y_multiplier
        n = t.world_to_normalized(wx, wy, map_name)
        back = t.normalized_to_world(n.x, n.y, map_name)
        assert back.x == pytest.approx(wx, abs=1e-6)
        assert back.y == pytest.approx(wy, abs=1e-6)

    def test_no_clamping(self):
        """Verify the inverse accepts coordinates outside the unit square."""
        t = CoordinateTransformer()
        w = t.normalized_to_world(1.5, -0.5, "ascent")
        n = Point(w.y * 7e-05 + 0.813895, w.x * -7e-05 + 0.573242)
        assert n.x == pytest.approx(1.5)
        assert n.y == pytest.approx(-0.5)

    def test_edge_round_trip_is_lossy(self):
        """Verify clamped edge points do not come back unchanged."""
        t = CoordinateTransformer()
        n = t.world_to_normalized(0.0, 1e6, "ascent")
        back = t.normalized_to_world(n.x, n.y, "ascent")
        assert back.y != pytest.approx(1e6)


class TestGridAndPixels:
    """Tests for grid and pixel projections."""

    def test_world_to_grid(self, transformer):
        """Verify a world point lands in the expected cell."""
        # testmap: world (0, 0) -> normalized (0.5, 0.5)
        assert transformer.world_to_grid(0.0, 0.0, "testmap", 16) == (8, 8)

    def test_grid_to_world_round_trip(self, transformer):
        """Verify cell centres map back into the same cell."""
        for cell in [(0, 0), (3, 12), (15, 15)]:
            w = transformer.grid_to_world(cell, "testmap", 16)
            assert transformer.world_to_grid(w.x, w.y, "testmap", 16) == cell

    def test_world_to_pixel(self, transformer):
        """Verify pixel positions scale the normalized point."""
        p = transformer.world_to_pixel(0.0, 0.0, "testmap", 1024, 512)
        assert p == Point(512.0, 256.0)
        assert transformer.world_to_pixel(0.0, 0.0, "nowhere", 10, 10) is None

    def test_normalized_to_grid_edges(self):
        """Verify cell lookup clamps to the grid and 1.0 falls in the last cell."""
        assert normalized_to_grid(0.0, 0.0, 128) == (0, 0)
        assert normalized_to_grid(1.0, 1.0, 128) == (127, 127)
        assert normalized_to_grid(0.5, 0.25, 128) == (32, 64)
        assert grid_to_normalized(32, 64, 128) == Point(64.5 / 128, 32.5 / 128)

    def test_index_helpers(self):
        """Verify flat indices are row-major."""
        assert cell_index(2, 3, 10) == 23
        assert index_cell(23, 10) == (2, 3)
        assert in_grid(9, 0, 10) and not in_grid(10, 0, 10) and not in_grid(0, -1, 10)
