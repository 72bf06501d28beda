"""Per-shade alpha stamps and their placement on the working canvas.

A stamp is a black RGBA image whose alpha channel carries the shade. Darker
accumulated gray means more (or heavier) points; the color is assigned later
by the gradient remap.
"""

from __future__ import annotations

import math
from typing import List, Protocol, Sequence, Tuple

import numpy as np
from PIL import Image

from .config import HeatmapConfig, Style
from .scale import map_range, shade_index


def alpha_end(shade: int, shade_count: int) -> float:
    # alpha below shade_count barely registers after quantization
    return map_range(shade, 0, shade_count - 1, shade_count, 255)


class Stamper(Protocol):
    size: int

    def stamp(self, shade: int, shade_count: int) -> Image.Image: ...

    def placement(self, x: int, y: int) -> Tuple[int, int]: ...


class SpotStamper:
    """Radial stamps: alpha falls from ``alpha_end`` at the center to 0 at the inscribed ellipse."""

    def __init__(self, size: int):
        self.size = int(size)

    def stamp(self, shade: int, shade_count: int) -> Image.Image:
        n = self.size
        c = (n - 1) / 2.0
        semi = n / 2.0
        yy, xx = np.mgrid[0:n, 0:n].astype(np.float32)
        d = np.sqrt(((xx - c) / semi) ** 2 + ((yy - c) / semi) ** 2)
        alpha = np.clip(1.0 - d, 0.0, 1.0) * alpha_end(shade, shade_count)
        out = np.zeros((n, n, 4), dtype=np.uint8)
        out[..., 3] = np.round(alpha).astype(np.uint8)
        return Image.fromarray(out)

    def placement(self, x: int, y: int) -> Tuple[int, int]:
        return int(x), int(y)


class SquareStamper:
    """Flat square stamps placed on a ``grid``-pixel grid."""

    def __init__(self, size: int, grid: int = 40):
        self.size = int(size)
        self.grid = int(grid)

    def stamp(self, shade: int, shade_count: int) -> Image.Image:
        a = int(round(alpha_end(shade, shade_count)))
        return Image.new("RGBA", (self.size, self.size), (0, 0, 0, a))

    def _snap(self, v: int) -> int:
        # nearest grid line, ties away from zero
        return int(math.copysign(math.floor(abs(v) / self.grid + 0.5), v)) * self.grid

    def placement(self, x: int, y: int) -> Tuple[int, int]:
        return self._snap(x), self._snap(y)


def make_stamper(cfg: HeatmapConfig) -> Stamper:
    if cfg.style == Style.SQUARES:
        return SquareStamper(cfg.stamp_radius, cfg.grid_size)
    return SpotStamper(cfg.stamp_radius)


def generate_stamps(stamper: Stamper, shade_count: int) -> List[Image.Image]:
    return [stamper.stamp(i, shade_count) for i in range(shade_count)]


def composite_over(canvas: Image.Image, stamp: Image.Image, x: int, y: int) -> None:
    """Alpha-composite ``stamp`` onto the RGBA ``canvas`` with its top-left at ``(x, y)``.

    The part of the stamp outside the canvas is cropped through ``source``;
    a stamp entirely outside is a no-op.
    """
    W, H = canvas.size
    w, h = stamp.size
    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + w, W), min(y + h, H)
    if x0 >= x1 or y0 >= y1:
        return
    canvas.alpha_composite(stamp, dest=(x0, y0), source=(x0 - x, y0 - y, x1 - x, y1 - y))


def new_canvas(width: int, height: int) -> Image.Image:
    """Opaque white working canvas."""
    return Image.new("RGBA", (width, height), (255, 255, 255, 255))


def accumulate(canvas: Image.Image, stamper: Stamper, points: Sequence, shade_count: int) -> List[int]:
    """Stamp every point onto ``canvas``; return the shade used for each point.

    ``points`` are objects with ``x``, ``y`` and ``weight`` attributes.
    """
    stamps = generate_stamps(stamper, shade_count)
    max_weight = max(p.weight for p in points)
    shades = []
    for p in points:
        shade = shade_index(p.weight, max_weight, shade_count)
        x, y = stamper.placement(p.x, p.y)
        composite_over(canvas, stamps[shade], x, y)
        shades.append(shade)
    return shades
