# config.py
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

# Minimap images are served per map uuid
MINIMAP_URL = "https://media.valorant-api.com/maps/{uuid}/displayicon.png"

# Keep markers visible at the map edges
NORMALIZED_MIN = 0.01
NORMALIZED_MAX = 0.99

# Playable bounds = callout bounding box padded by this fraction of its span
BOUNDS_PADDING = 0.15
# Out-of-bounds ghosts are re-placed this far from the death toward the nearest callout
GHOST_ADJUST_FRACTION = 0.70

# Average map extent in world units; MapConfig.world_span overrides it per map
DEFAULT_WORLD_SPAN = 15000.0
TRADE_SAFETY_FACTOR = 0.8

NEAREST_WALKABLE_RADIUS = 20

SIMPLIFY_DETAIL_LIMIT = 100
SIMPLIFY_TOL_SHORT = 0.1
SIMPLIFY_TOL_LONG = 0.3
RESAMPLE_DIVISOR = 5

# region Nav-grid baking
GRID_SIZE = 128
BAKE_PROCESS_SIZE = 1024      # work at high resolution so thin walls survive
BAKE_BRIGHTNESS = 50          # walls are ~0-20, floor is 100+
BAKE_DILATION_RADIUS = 6
BAKE_WALL_FRACTION = 0.10     # cell is a wall if >10% of its pixels are
DOWNLOAD_TIMEOUT = 15
# endregion


# region Runtime settings
@dataclass
class Settings:
    navgrid_dir: Optional[str] = None
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8081


def load_settings(env=None) -> Settings:
    """Read TACNAV_* environment variables over the defaults."""
    env = os.environ if env is None else env
    s = Settings()
    if env.get("TACNAV_NAVGRID_DIR"):
        s.navgrid_dir = env["TACNAV_NAVGRID_DIR"]
    if env.get("TACNAV_LOG_LEVEL"):
        s.log_level = env["TACNAV_LOG_LEVEL"].upper()
    if env.get("TACNAV_HOST"):
        s.host = env["TACNAV_HOST"]
    if env.get("TACNAV_PORT"):
        try:
            s.port = int(env["TACNAV_PORT"])
        except ValueError:
            raise ValueError(f"TACNAV_PORT must be an integer, got {env['TACNAV_PORT']!r}") from None
    return s
# endregion
