"""Merge rendered layers onto a destination image."""

from __future__ import annotations

import textwrap
from typing import Tuple, Union

import numpy as np
from PIL import Image, ImageDraw

from .palette import IndexedCanvas

ALIGN_LEFT = "left"
ALIGN_CENTER = "center"
ALIGN_RIGHT = "right"
ALIGN_TOP = "top"
ALIGN_MIDDLE = "middle"
ALIGN_BOTTOM = "bottom"

PLACEHOLDER_SIZE = (600, 480)

Position = Union[int, float, str]


def convert_pos_x(pos: Position, width: int, dest_width: int) -> int:
    """Horizontal pixel position of an element ``width`` wide."""
    if pos == ALIGN_LEFT:
        return 0
    if pos == ALIGN_CENTER:
        return int(round(dest_width / 2 - width / 2))
    if pos == ALIGN_RIGHT:
        return dest_width - width
    if isinstance(pos, str):
        raise ValueError(f"unknown horizontal anchor {pos!r}")
    return int(round(pos))


def convert_pos_y(pos: Position, height: int, dest_height: int) -> int:
    """Vertical pixel position of an element ``height`` tall."""
    if pos == ALIGN_TOP:
        return 0
    if pos == ALIGN_MIDDLE:
        return int(round(dest_height / 2 - height / 2))
    if pos == ALIGN_BOTTOM:
        return dest_height - height
    if isinstance(pos, str):
        raise ValueError(f"unknown vertical anchor {pos!r}")
    return int(round(pos))


def _source_rgba(src) -> np.ndarray:
    if isinstance(src, IndexedCanvas):
        return src.to_rgba()
    return np.asarray(src.convert("RGBA"))


def paste_with_opacity(dest: Image.Image, src: Union[IndexedCanvas, Image.Image],
                       pos_x: Position = 0, pos_y: Position = 0, opacity: float = 100) -> Image.Image:
    """Merge ``src`` onto ``dest`` in place at ``opacity`` percent.

    Every non-transparent source pixel becomes ``src*pct + dst*(1-pct)`` on the
    RGB channels. The destination's own alpha channel is left as it was.
    """
    s = _source_rgba(src)
    h, w = s.shape[:2]
    W, H = dest.size
    x = convert_pos_x(pos_x, w, W)
    y = convert_pos_y(pos_y, h, H)

    x0, y0 = max(x, 0), max(y, 0)
    x1, y1 = min(x + w, W), min(y + h, H)
    if x0 >= x1 or y0 >= y1:
        return dest

    dst = np.array(dest.convert("RGBA"))
    region = dst[y0:y1, x0:x1, :3].astype(np.float32)
    s = s[y0 - y : y1 - y, x0 - x : x1 - x]
    mask = s[..., 3] > 0
    pct = float(opacity) / 100.0
    blended = s[..., :3].astype(np.float32) * pct + region * (1.0 - pct)
    region[mask] = blended[mask]
    dst[y0:y1, x0:x1, :3] = np.round(region).astype(np.uint8)

    out = Image.fromarray(dst)
    if dest.mode != "RGBA":
        out = out.convert(dest.mode)
    dest.paste(out)
    return dest


def error_placeholder(message: str, size: Tuple[int, int] = PLACEHOLDER_SIZE) -> Image.Image:
    """Red panel with ``message`` in black, used in place of a layer that failed."""
    im = Image.new("RGB", size, (255, 0, 0))
    dr = ImageDraw.Draw(im)
    dr.multiline_text((5, 5), "\n".join(textwrap.wrap(message, width=90)), fill=(0, 0, 0))
    return im


def paste_placeholder(dest: Image.Image, message: str) -> Image.Image:
    ph = error_placeholder(message)
    dest.paste(ph.convert(dest.mode), (0, 0))
    return dest
