# region Imports
import math
from typing import Sequence
from .models import Point
# endregion

# region Distances
def dist(ax: float, ay: float, bx: float, by: float) -> float:
    return math.hypot(bx - ax, by - ay)


def point_to_segment_distance(p: Sequence[float], a: Sequence[float], b: Sequence[float]) -> float:
    """Distance from p to the segment a-b (to a itself when a == b)."""
    dx, dy = b[0] - a[0], b[1] - a[1]
    len2 = dx * dx + dy * dy
    if len2 == 0:
        return math.hypot(p[0] - a[0], p[1] - a[1])
    t = ((p[0] - a[0]) * dx + (p[1] - a[1]) * dy) / len2
    t = max(0.0, min(1.0, t))
    return math.hypot(p[0] - (a[0] + t * dx), p[1] - (a[1] + t * dy))
# endregion

# region Interpolation
def lerp_point(a: Sequence[float], b: Sequence[float], t: float) -> Point:
    return Point(a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)
# endregion
