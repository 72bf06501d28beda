"""Public package interface for heatlayer."""

from .config import HeatmapConfig, Style
from .errors import (
    ConfigError,
    EmptyHeatmapError,
    GradientError,
    GradientNotFoundError,
    HeatmapError,
)
from .geo import LatLng, MapData, XY, bounding_box
from .heatmap import Heatmap, WeightedPoint
from .render import PixelPoint, RenderResult, render_heatmap
from .staticmap import StaticMap

__all__ = [
    "ConfigError",
    "EmptyHeatmapError",
    "GradientError",
    "GradientNotFoundError",
    "Heatmap",
    "HeatmapConfig",
    "HeatmapError",
    "LatLng",
    "MapData",
    "PixelPoint",
    "RenderResult",
    "StaticMap",
    "Style",
    "WeightedPoint",
    "XY",
    "bounding_box",
    "render_heatmap",
]
