"""Playable-region checks for recommended positions, in world coordinates."""
from __future__ import annotations
import logging
from typing import Optional, Sequence, Tuple

from .config import BOUNDS_PADDING, GHOST_ADJUST_FRACTION
from .geometry import dist, lerp_point
from .models import Callout, GhostValidation, PlayableBounds, Point
from .transform import CoordinateTransformer

logger = logging.getLogger(__name__)


class BoundaryValidator:
    def __init__(self, transformer: Optional[CoordinateTransformer] = None):
        self.transformer = transformer or CoordinateTransformer()
        self.registry = self.transformer.registry

    def callout_world_points(self, map_name: str):
        out = []
        for co in self.registry.callouts(map_name):
            w = self.transformer.normalized_to_world(co.normalized_x, co.normalized_y, map_name)
            if w is not None:
                out.append((co, w))
        return out

    def compute_playable_bounds(self, map_name: str) -> Optional[PlayableBounds]:
        """Callout bounding box padded by 15% of its span per axis; None without callouts."""
        pts = [w for _, w in self.callout_world_points(map_name)]
        if not pts:
            return None
        xs = [p.x for p in pts]
        ys = [p.y for p in pts]
        pad_x = (max(xs) - min(xs)) * BOUNDS_PADDING
        pad_y = (max(ys) - min(ys)) * BOUNDS_PADDING
        return PlayableBounds(min(xs) - pad_x, max(xs) + pad_x, min(ys) - pad_y, max(ys) + pad_y)

    def is_within_bounds(self, point: Sequence[float], map_name: str) -> bool:
        b = self.compute_playable_bounds(map_name)
        return True if b is None else b.contains(point[0], point[1])

    def clamp_to_bounds(self, point: Sequence[float], map_name: str) -> Point:
        b = self.compute_playable_bounds(map_name)
        if b is None:
            return Point(point[0], point[1])
        return b.clamp(point[0], point[1])

    def nearest_callout(self, point: Sequence[float], map_name: str) -> Optional[Tuple[Callout, Point]]:
        pts = self.callout_world_points(map_name)
        if not pts:
            return None
        return min(pts, key=lambda cw: dist(point[0], point[1], cw[1].x, cw[1].y))

    def validate_ghost_position(
        self, candidate: Sequence[float], death: Sequence[float], map_name: str
    ) -> GhostValidation:
        """
        Keep an in-bounds candidate as is. Otherwise pull it to 70% of the way
        from the death toward the closest callout, or clamp the original
        candidate if that is still outside.
        """
        cand = Point(candidate[0], candidate[1])
        b = self.compute_playable_bounds(map_name)
        if b is None or b.contains(cand.x, cand.y):
            return GhostValidation(cand, False)

        near = self.nearest_callout(death, map_name)
        if near is not None:
            co, anchor = near
            adjusted = lerp_point(death, anchor, GHOST_ADJUST_FRACTION)
            if b.contains(adjusted.x, adjusted.y):
                logger.debug("Ghost %s out of bounds; moved toward %s", cand, co.label)
                return GhostValidation(adjusted, True)

        logger.debug("Ghost %s out of bounds; clamped", cand)
        return GhostValidation(b.clamp(cand.x, cand.y), True)
