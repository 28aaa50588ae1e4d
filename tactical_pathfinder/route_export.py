# region Imports
from __future__ import annotations
import json
import logging
from typing import Optional, Sequence, Tuple
# endregion

logger = logging.getLogger(__name__)

# region Positions
def route_positions(
    path: Sequence[Tuple[float, float]],
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> list:
    """Normalized (x, y) points as dicts; pixel coords added when an image size is given."""
    positions = []
    for x, y in path:
        pos = {"x": float(x), "y": float(y)}
        if width and height:
            pos["px"] = float(x) * width
            pos["py"] = float(y) * height
        positions.append(pos)
    return positions
# endregion

# region File Export
def write_route_json(
    path: Sequence[Tuple[float, float]],
    out_path: str = "route.json",
    map_name: Optional[str] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> None:
    doc = {"positions": route_positions(path, width, height)}
    if map_name:
        doc["map"] = map_name
    with open(out_path, "w") as f:
        json.dump(doc, f, indent=2)
    logger.info("Wrote %d points to %s", len(doc["positions"]), out_path)
# endregion
