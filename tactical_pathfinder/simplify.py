# region Imports
from typing import List, Sequence, TypeVar
from .config import RESAMPLE_DIVISOR, SIMPLIFY_DETAIL_LIMIT, SIMPLIFY_TOL_LONG, SIMPLIFY_TOL_SHORT
from .geometry import point_to_segment_distance
# endregion

P = TypeVar("P", bound=Sequence[float])

# region Douglas-Peucker
def simplify_path(path: Sequence[P], tolerance: float) -> List[P]:
    """
    Douglas-Peucker reduction. Each range (lo, hi) of the one input list
    keeps its farthest interior point when that point lies more than
    `tolerance` from the lo-hi segment, and is split there; otherwise only
    its endpoints survive.
    """
    n = len(path)
    if n <= 2:
        return list(path)

    keep = bytearray(n)
    keep[0] = keep[n - 1] = 1
    stack = [(0, n - 1)]
    while stack:
        lo, hi = stack.pop()
        if hi - lo < 2:
            continue
        a, b = path[lo], path[hi]
        max_d, max_i = 0.0, lo
        for i in range(lo + 1, hi):
            d = point_to_segment_distance(path[i], a, b)
            if d > max_d:
                max_d, max_i = d, i
        if max_d > tolerance:
            keep[max_i] = 1
            stack.append((max_i, hi))
            stack.append((lo, max_i))

    return [p for p, k in zip(path, keep) if k]
# endregion

# region Display Policy
def tolerance_for(raw_length: int) -> float:
    return SIMPLIFY_TOL_SHORT if raw_length <= SIMPLIFY_DETAIL_LIMIT else SIMPLIFY_TOL_LONG


def resample(path: Sequence[P]) -> List[P]:
    step = max(1, len(path) // RESAMPLE_DIVISOR)
    out = list(path[::step])
    if out[-1] != path[-1]:
        out.append(path[-1])
    return out


def simplify_for_display(path: Sequence[P]) -> List[P]:
    """Simplify a raw cell path, resampling if nothing but the ends survived."""
    out = simplify_path(path, tolerance_for(len(path)))
    if len(path) > 2 and len(out) <= 2:
        out = resample(path)
    return out
# endregion
