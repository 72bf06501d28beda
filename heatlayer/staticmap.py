"""Compose drawable layers over a base map image."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Protocol

from PIL import Image

from .geo import LatLng, MapData, bounding_box

logger = logging.getLogger(__name__)


class Drawable(Protocol):
    def get_bounding_box(self) -> List[LatLng]: ...

    def draw(self, image: Image.Image, map_data: MapData): ...


class StaticMap:
    """A base image plus an ordered list of layers drawn on top of it.

    The base image is supplied by the caller (tile fetching is out of scope);
    without one a plain ``background`` canvas of the viewport size is used.
    """

    def __init__(self, map_data: MapData, base: Optional[Image.Image] = None, background="white"):
        if base is not None and base.size != map_data.size:
            raise ValueError(f"base image size {base.size} does not match map size {map_data.size}")
        self.map_data = map_data
        self.base = base
        self.background = background
        self.layers: List[Drawable] = []
        self.layer_errors: List[Dict[str, Any]] = []

    @classmethod
    def fitted(cls, layers: Iterable[Drawable], width: int, height: int, padding: int = 0,
               base: Optional[Image.Image] = None, max_zoom: int = 19) -> "StaticMap":
        """Build a map whose viewport shows every layer's bounding box."""
        layers = list(layers)
        corners = [pt for layer in layers for pt in layer.get_bounding_box()]
        sm = cls(MapData.fit(corners, width, height, padding=padding, max_zoom=max_zoom), base=base)
        for layer in layers:
            sm.add_layer(layer)
        return sm

    def add_layer(self, layer: Drawable) -> "StaticMap":
        self.layers.append(layer)
        return self

    def get_bounding_box(self) -> List[LatLng]:
        return bounding_box(pt for layer in self.layers for pt in layer.get_bounding_box())

    def render(self) -> Image.Image:
        """Draw every layer in order; a failing layer is logged and skipped."""
        if self.base is not None:
            image = self.base.copy()
        else:
            image = Image.new("RGBA", self.map_data.size, self.background)
        self.layer_errors = []
        for i, layer in enumerate(self.layers):
            name = type(layer).__name__
            try:
                layer.draw(image, self.map_data)
            except Exception as e:
                logger.error("Layer %d (%s) failed: %s", i, name, e)
                self.layer_errors.append({"layer": i, "name": name, "error": str(e)})
                continue
            degraded = getattr(layer, "last_error", None)
            if degraded is not None:
                self.layer_errors.append({"layer": i, "name": name, "error": str(degraded)})
        return image
