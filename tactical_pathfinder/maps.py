"""Per-map calibration constants and callouts.

World telemetry coordinates map onto the minimap with the axes SWAPPED:

    minimap_x = world_y * x_multiplier + x_scalar_to_add
    minimap_y = world_x * y_multiplier + y_scalar_to_add

Callout positions are stored already normalized (0-1) on the minimap image.
"""
from __future__ import annotations
import re
from typing import Dict, Iterable, List, Optional

from .config import MINIMAP_URL
from .models import Callout, MapCalibration, MapConfig


def _site(region: str, x: float, y: float) -> Callout:
    return Callout("Site", region, x, y)


def _map(key, display_name, uuid, mult, add_x, add_y, callouts) -> MapConfig:
    return MapConfig(
        key=key,
        display_name=display_name,
        uuid=uuid,
        calibration=MapCalibration(mult, -mult, add_x, add_y),
        callouts=tuple(callouts),
        image_url=MINIMAP_URL.format(uuid=uuid),
    )


MAP_CONFIGS: Dict[str, MapConfig] = {m.key: m for m in (
    _map("ascent", "Ascent", "7eaecc1b-4337-bbf6-6ab9-04b8f06b3319", 7e-05, 0.813895, 0.573242,
         [_site("A", 0.350, 0.142), _site("B", 0.285, 0.737)]),
    _map("split", "Split", "d960549e-485c-e861-8d71-aa9d1aed12a2", 7.8e-05, 0.842188, 0.697578,
         [_site("A", 0.315, 0.184), _site("B", 0.354, 0.867)]),
    _map("bind", "Bind", "2c9d57ec-4431-9c5e-2939-8f9ef6dd5cba", 5.9e-05, 0.576941, 0.967566,
         [_site("A", 0.734, 0.333), _site("B", 0.292, 0.312)]),
    _map("haven", "Haven", "2bee0dc9-4ffe-519b-1cbd-7fbe763a6047", 7.5e-05, 1.09345, 0.642728,
         [_site("A", 0.402, 0.170), _site("B", 0.401, 0.501), _site("C", 0.418, 0.821)]),
    _map("breeze", "Breeze", "2fb9a4fd-47b8-4e7d-a969-74b4046ebd53", 7e-05, 0.465123, 0.833078,
         [_site("A", 0.908, 0.495), _site("B", 0.070, 0.382)]),
    _map("icebox", "Icebox", "e2ad5c54-4114-a870-9641-8ea21279579a", 7.2e-05, 0.460214, 0.304687,
         [_site("A", 0.691, 0.765), _site("B", 0.646, 0.180)]),
    _map("fracture", "Fracture", "b529448b-4d60-346e-e89e-00a4c527a405", 7.8e-05, 0.556952, 1.155886,
         [_site("A", 0.820, 0.522), _site("B", 0.093, 0.518)]),
    _map("pearl", "Pearl", "fd267378-4d1d-484f-ff52-77821ed10dc2", 7.8e-05, 0.480469, 0.916016,
         [_site("A", 0.915, 0.400), _site("B", 0.258, 0.464)]),
    _map("lotus", "Lotus", "2fe4ed3a-450a-948b-6d6b-e89a78e680a9", 7.2e-05, 0.454789, 0.917752,
         [_site("A", 0.855, 0.361), _site("B", 0.503, 0.459), _site("C", 0.148, 0.437)]),
    _map("sunset", "Sunset", "92584fbe-486a-b1b2-9faa-39b0f486b498", 7.8e-05, 0.5, 0.515625,
         [_site("A", 0.750, 0.438), _site("B", 0.044, 0.562)]),
    _map("abyss", "Abyss", "224b0a95-48b9-f703-1bd8-67aca101a61f", 8.1e-05, 0.5, 0.5,
         [_site("A", 0.484, 0.152), _site("B", 0.405, 0.858)]),
    _map("corrode", "Corrode", "1c18ab1f-420d-0d8b-71d0-77ad3c439115", 7e-05, 0.526158, 0.5,
         [_site("A", 0.398, 0.258), _site("B", 0.444, 0.690)]),
)}


def normalize_map_name(map_name: str) -> str:
    """'Ascent', ' ASCENT ' and 'as-cent' all resolve to 'ascent'."""
    return re.sub(r"[^a-z]", "", (map_name or "").lower())


class MapCoordinateRegistry:
    """Read-only lookup over the known map configurations."""

    def __init__(self, configs: Optional[Iterable[MapConfig]] = None):
        configs = MAP_CONFIGS.values() if configs is None else configs
        self._configs: Dict[str, MapConfig] = {normalize_map_name(c.key): c for c in configs}

    def get(self, map_name: str) -> Optional[MapConfig]:
        return self._configs.get(normalize_map_name(map_name))

    def __contains__(self, map_name: str) -> bool:
        return self.get(map_name) is not None

    def map_names(self) -> List[str]:
        return sorted(self._configs)

    def calibration(self, map_name: str) -> Optional[MapCalibration]:
        cfg = self.get(map_name)
        return cfg.calibration if cfg else None

    def callouts(self, map_name: str) -> List[Callout]:
        cfg = self.get(map_name)
        return list(cfg.callouts) if cfg else []

    def image_url(self, map_name: str) -> Optional[str]:
        cfg = self.get(map_name)
        return cfg.image_url if cfg else None
