"""Heatmap rendering configuration."""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Dict, Optional

from .errors import ConfigError

SHADES8 = 8
SHADES16 = 16
SHADES25 = 25
SHADES32 = 32
SHADE_COUNTS = (SHADES8, SHADES16, SHADES25, SHADES32)


class Style(str, Enum):
    SPOTS = "spots"
    SQUARES = "squares"


@dataclass
class HeatmapConfig:
    """Configuration of a heatmap layer.

    Attributes
    ----------
    shade_count:
        Number of density buckets, one of 8, 16, 25 or 32. Selects the
        gradient ramp resource as well.
    stamp_radius:
        Side of the square stamp in pixels.
    dither:
        Apply Floyd-Steinberg dithering during palette reduction.
    fill_with_smallest:
        Keep the lightest shade opaque so the heatmap covers the whole image,
        using the ``-fill`` ramp.
    opacity:
        Percentage (0-100) used when merging the heatmap onto the map.
    style:
        ``spots`` (radial stamps at the point) or ``squares`` (flat stamps
        snapped to a ``grid_size`` grid).
    grid_size:
        Grid cell size in pixels for the squares style.
    gradient_dir:
        Directory holding ``gradient-*.png`` ramps; defaults to the bundled
        resources or ``HEATLAYER_GRADIENT_DIR``.
    """

    shade_count: int = SHADES32
    stamp_radius: int = 50
    dither: bool = False
    fill_with_smallest: bool = False
    opacity: float = 30
    style: Style = Style.SPOTS
    grid_size: int = 40
    gradient_dir: Optional[str] = None

    def __post_init__(self):
        if self.shade_count not in SHADE_COUNTS:
            raise ConfigError(f"shade_count must be one of {SHADE_COUNTS}, got {self.shade_count!r}")
        if isinstance(self.stamp_radius, bool) or not isinstance(self.stamp_radius, int) or self.stamp_radius <= 0:
            raise ConfigError(f"stamp_radius must be a positive int, got {self.stamp_radius!r}")
        if isinstance(self.grid_size, bool) or not isinstance(self.grid_size, int) or self.grid_size <= 0:
            raise ConfigError(f"grid_size must be a positive int, got {self.grid_size!r}")
        try:
            opacity = float(self.opacity)
        except (TypeError, ValueError):
            raise ConfigError(f"opacity must be a number, got {self.opacity!r}") from None
        if not 0 <= opacity <= 100:
            raise ConfigError(f"opacity must be within 0-100, got {self.opacity!r}")
        try:
            self.style = Style(self.style)
        except ValueError:
            raise ConfigError(f"style must be one of {[s.value for s in Style]}, got {self.style!r}") from None
        self.dither = bool(self.dither)
        self.fill_with_smallest = bool(self.fill_with_smallest)

    @property
    def gradient_name(self) -> str:
        return f"gradient-{self.shade_count}{'-fill' if self.fill_with_smallest else ''}.png"

    @classmethod
    def check_keys(cls, data: Dict[str, Any], source: str = "profile") -> None:
        unknown = sorted(set(data) - {f.name for f in fields(cls)})
        if unknown:
            raise ConfigError(f"{source}: unknown heatmap option(s) {unknown}")

    @classmethod
    def from_profile(cls, profile: Dict[str, Any], **overrides) -> "HeatmapConfig":
        """Build from a profile dict; ``None`` overrides are skipped.

        Unknown keys, in the profile or the overrides, raise ``ConfigError``.
        """
        data = dict(profile)
        data.update({k: v for k, v in overrides.items() if v is not None})
        cls.check_keys(data)
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d["style"] = self.style.value
        return d
