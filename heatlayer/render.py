"""Density-to-color pipeline: stamp, reduce, remap, finalize."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .config import HeatmapConfig
from .errors import EmptyHeatmapError, GradientError, HeatmapError
from .metrics import StageMetrics, measure
from .palette import IndexedCanvas, gradient_path, load_gradient, reduce_palette, remap_gradient
from .stamps import accumulate, make_stamper, new_canvas

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PixelPoint:
    x: int
    y: int
    weight: int


@dataclass
class RenderResult:
    canvas: Optional[IndexedCanvas] = None
    error: Optional[HeatmapError] = None
    metrics: List[StageMetrics] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None and self.canvas is not None


def render_heatmap(points: Sequence[PixelPoint], size: Tuple[int, int], cfg: HeatmapConfig) -> RenderResult:
    """Render projected ``points`` into a colored ``IndexedCanvas`` of ``size``.

    A missing or unusable gradient ramp is returned as ``RenderResult.error``
    rather than raised; an empty point list raises ``EmptyHeatmapError``.
    """
    if not points:
        raise EmptyHeatmapError("heatmap has no points to render")

    metrics: List[StageMetrics] = []
    path = gradient_path(cfg)
    try:
        ramp = load_gradient(path)
    except GradientError as e:
        logger.warning("Heatmap skipped: %s", e)
        return RenderResult(error=e, metrics=metrics)

    width, height = size
    work = new_canvas(width, height)
    with measure("stamping", metrics):
        accumulate(work, make_stamper(cfg), points, cfg.shade_count)

    with measure("reduction", metrics):
        indexed = reduce_palette(work, cfg.shade_count, cfg.dither)

    try:
        with measure("remap", metrics):
            remap_gradient(indexed, ramp)
    except GradientError as e:
        logger.warning("Heatmap skipped: %s (%s)", e, path)
        return RenderResult(error=e, metrics=metrics)

    with measure("transparency", metrics):
        indexed.finalize_transparency(cfg.fill_with_smallest)

    logger.info(
        "Heatmap rendered: points=%d size=%dx%d shades=%d palette=%d style=%s",
        len(points), width, height, cfg.shade_count, len(indexed.palette), cfg.style.value,
    )
    return RenderResult(canvas=indexed, metrics=metrics)
