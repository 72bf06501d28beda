"""Indexed canvas, palette reduction and gradient recoloring."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np
from PIL import Image

from .config import HeatmapConfig
from .errors import GradientError, GradientNotFoundError

RGB = Tuple[int, int, int]

RESOURCES_DIR = Path(__file__).resolve().parent / "resources"


@dataclass
class IndexedCanvas:
    """Palette table plus a per-pixel index buffer.

    Recoloring a shade is a write to ``palette``; ``indices`` is never touched
    by the remap or transparency steps.
    """

    palette: List[RGB]
    indices: np.ndarray
    transparent: Optional[int] = None

    @property
    def size(self) -> Tuple[int, int]:
        h, w = self.indices.shape[:2]
        return (w, h)

    def sort_key(self, index: int) -> int:
        r, g, b = self.palette[index]
        return r * 65536 + g * 256 + b

    def sorted_entries(self) -> List[int]:
        """Palette indices ordered from darkest to lightest."""
        return sorted(range(len(self.palette)), key=lambda i: (self.sort_key(i), i))

    def set_color(self, index: int, rgb: RGB) -> None:
        self.palette[index] = tuple(int(c) for c in rgb)

    def closest(self, rgb: RGB) -> int:
        pal = np.asarray(self.palette, dtype=np.int64)
        d = ((pal - np.asarray(rgb, dtype=np.int64)) ** 2).sum(axis=1)
        return int(np.argmin(d))

    def finalize_transparency(self, fill_with_smallest: bool) -> None:
        self.transparent = None if fill_with_smallest else self.closest((255, 255, 255))

    def to_rgba(self) -> np.ndarray:
        lut = np.zeros((len(self.palette), 4), dtype=np.uint8)
        lut[:, :3] = np.asarray(self.palette, dtype=np.uint8).reshape(-1, 3)
        lut[:, 3] = 255
        if self.transparent is not None:
            lut[self.transparent, 3] = 0
        return lut[self.indices]

    def to_image(self) -> Image.Image:
        """Mode ``P`` image carrying the palette and transparency index."""
        im = Image.fromarray(self.indices.astype(np.uint8))
        # putpalette turns the L image into P
        im.putpalette([c for rgb in self.palette for c in rgb])
        if self.transparent is not None:
            im.info["transparency"] = self.transparent
        return im


def _compact(indices: np.ndarray, palette: np.ndarray) -> IndexedCanvas:
    """Drop unused entries and merge entries sharing a color."""
    lut = np.zeros(256, dtype=np.uint8)
    table: List[RGB] = []
    seen = {}
    for i in np.unique(indices):
        c = tuple(int(v) for v in palette[i])
        if c not in seen:
            seen[c] = len(table)
            table.append(c)
        lut[i] = seen[c]
    return IndexedCanvas(palette=table, indices=lut[indices])


def reduce_palette(canvas: Image.Image, shade_count: int, dither: bool = False) -> IndexedCanvas:
    """Quantize the RGBA working canvas to at most ``shade_count`` colors."""
    img = canvas.convert("RGB")
    q = img.quantize(colors=shade_count, method=Image.Quantize.MEDIANCUT)
    if dither:
        # quantize() only diffuses error when mapping onto a given palette
        q = img.quantize(palette=q, dither=Image.Dither.FLOYDSTEINBERG)
    pal = np.asarray(q.getpalette(), dtype=np.int64).reshape(-1, 3)
    return _compact(np.asarray(q, dtype=np.uint8), pal)


def gradient_path(cfg: HeatmapConfig) -> Path:
    base = cfg.gradient_dir or os.getenv("HEATLAYER_GRADIENT_DIR") or RESOURCES_DIR
    return Path(base) / cfg.gradient_name


def load_gradient(path) -> List[RGB]:
    """Colors of the ramp's first row, left to right."""
    path = Path(path)
    if not path.is_file():
        raise GradientNotFoundError(path)
    with Image.open(path) as im:
        row = np.asarray(im.convert("RGB"))[0]
    return [tuple(int(c) for c in px) for px in row]


def remap_gradient(canvas: IndexedCanvas, ramp: List[RGB]) -> None:
    """Recolor gray entries in place: the k-th darkest entry takes ramp color k.

    A palette with fewer entries than the ramp uses only the leading colors.
    Raises ``GradientError`` when the ramp is shorter than the palette.
    """
    order = canvas.sorted_entries()
    if len(order) > len(ramp):
        raise GradientError(f"gradient has {len(ramp)} colors, {len(order)} needed")
    for k, index in enumerate(order):
        canvas.set_color(index, ramp[k])
