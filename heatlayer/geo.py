"""Geographic points, Web Mercator projection and bounding boxes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple

TILE_SIZE = 256
MAX_LAT = 85.0511287798


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float


@dataclass(frozen=True)
class XY:
    x: int
    y: int


def _world_xy(latlng: LatLng, zoom: float, tile_size: int) -> Tuple[float, float]:
    """Project to absolute world pixels at ``zoom``."""
    scale = tile_size * (2.0 ** zoom)
    lat = max(-MAX_LAT, min(MAX_LAT, latlng.lat))
    lat_r = math.radians(lat)
    x = (latlng.lng + 180.0) / 360.0 * scale
    y = (1.0 - math.log(math.tan(math.pi / 4 + lat_r / 2.0)) / math.pi) / 2.0 * scale
    return x, y


def _world_latlng(x: float, y: float, zoom: float, tile_size: int) -> LatLng:
    scale = tile_size * (2.0 ** zoom)
    lng = x / scale * 360.0 - 180.0
    n = math.pi * (1.0 - 2.0 * y / scale)
    lat = math.degrees(math.atan(math.sinh(n)))
    return LatLng(lat, lng)


def bounding_box(points: Iterable[LatLng]) -> List[LatLng]:
    """Return ``[south_west, north_east]`` enclosing ``points``."""
    pts = list(points)
    if not pts:
        raise ValueError("bounding box of an empty point list")
    lats = [p.lat for p in pts]
    lngs = [p.lng for p in pts]
    return [LatLng(min(lats), min(lngs)), LatLng(max(lats), max(lngs))]


@dataclass(frozen=True)
class MapData:
    """Viewport of a static map: center, zoom and output image size.

    ``latlng_to_px`` gives positions relative to the image's top-left corner.
    Points outside the viewport project to coordinates outside
    ``[0, width) x [0, height)``; callers clip.
    """

    center: LatLng
    zoom: float
    width: int
    height: int
    tile_size: int = TILE_SIZE

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def _origin(self) -> Tuple[float, float]:
        cx, cy = _world_xy(self.center, self.zoom, self.tile_size)
        return cx - self.width / 2.0, cy - self.height / 2.0

    def latlng_to_px(self, latlng: LatLng) -> XY:
        ox, oy = self._origin()
        x, y = _world_xy(latlng, self.zoom, self.tile_size)
        return XY(int(round(x - ox)), int(round(y - oy)))

    def px_to_latlng(self, xy: XY) -> LatLng:
        ox, oy = self._origin()
        return _world_latlng(xy.x + ox, xy.y + oy, self.zoom, self.tile_size)

    @classmethod
    def fit(cls, points: Iterable[LatLng], width: int, height: int, padding: int = 0,
            max_zoom: int = 19, tile_size: int = TILE_SIZE) -> "MapData":
        """Center on the points' bounding box at the largest zoom that shows all of it."""
        sw, ne = bounding_box(points)
        center = _world_latlng(
            *[(a + b) / 2.0 for a, b in zip(_world_xy(sw, 0, tile_size), _world_xy(ne, 0, tile_size))],
            0,
            tile_size,
        )
        avail_w = max(1, width - 2 * padding)
        avail_h = max(1, height - 2 * padding)
        zoom = 0
        for z in range(max_zoom, -1, -1):
            x0, y0 = _world_xy(sw, z, tile_size)
            x1, y1 = _world_xy(ne, z, tile_size)
            if abs(x1 - x0) <= avail_w and abs(y1 - y0) <= avail_h:
                zoom = z
                break
        return cls(center=center, zoom=zoom, width=width, height=height, tile_size=tile_size)
