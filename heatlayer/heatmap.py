"""Heatmap layer for static maps.

Points are collected through the fluent ``add_point`` API; ``render`` turns
them into a colored ``IndexedCanvas`` without touching any image and ``draw``
merges that canvas onto a map image.

Based on the approach of https://github.com/xird/gd-heatmap: black alpha
stamps accumulate into gray levels which are then recolored from a gradient
ramp.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

from PIL import Image

from .compose import paste_placeholder, paste_with_opacity
from .config import SHADES8, SHADES16, SHADES25, SHADES32, HeatmapConfig
from .errors import EmptyHeatmapError, HeatmapError
from .geo import LatLng, MapData, bounding_box
from .render import PixelPoint, RenderResult, render_heatmap


@dataclass(frozen=True)
class WeightedPoint:
    position: LatLng
    weight: int = 1


class Heatmap:
    SHADES8 = SHADES8
    SHADES16 = SHADES16
    SHADES25 = SHADES25
    SHADES32 = SHADES32

    def __init__(self, config: Optional[HeatmapConfig] = None, **options):
        if config is None:
            config = HeatmapConfig(**options)
        elif options:
            config = replace(config, **options)
        self.config = config
        self._points: List[WeightedPoint] = []
        self.last_result: Optional[RenderResult] = None

    @property
    def points(self) -> Tuple[WeightedPoint, ...]:
        return tuple(self._points)

    @property
    def last_error(self) -> Optional[HeatmapError]:
        return self.last_result.error if self.last_result is not None else None

    def add_point(self, latlng: LatLng, weight: int = 1) -> "Heatmap":
        """Add a weighted point; ``weight`` must be an integer >= 1."""
        if isinstance(weight, bool) or not isinstance(weight, numbers.Integral) or weight < 1:
            raise ValueError(f"weight must be a positive integer, got {weight!r}")
        self._points.append(WeightedPoint(latlng, int(weight)))
        return self

    def get_bounding_box(self) -> List[LatLng]:
        return bounding_box(p.position for p in self._points)

    def project(self, map_data: MapData) -> List[PixelPoint]:
        out = []
        for p in self._points:
            xy = map_data.latlng_to_px(p.position)
            out.append(PixelPoint(xy.x, xy.y, p.weight))
        return out

    def render(self, size: Tuple[int, int], map_data: MapData) -> RenderResult:
        if not self._points:
            raise EmptyHeatmapError("add at least one point before drawing the heatmap")
        return render_heatmap(self.project(map_data), size, self.config)

    def draw(self, image: Image.Image, map_data: MapData) -> "Heatmap":
        """Render onto ``image`` in place.

        If the gradient ramp is unavailable a red error panel is pasted
        instead and the error is kept in ``last_error``.
        """
        result = self.render(image.size, map_data)
        self.last_result = result
        if result.error is not None:
            paste_placeholder(image, str(result.error))
            return self
        paste_with_opacity(image, result.canvas, 0, 0, self.config.opacity)
        return self
