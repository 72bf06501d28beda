"""Error kinds raised or reported by the heatmap renderer."""


class HeatmapError(Exception):
    """Base class for heatmap rendering errors."""


class ConfigError(HeatmapError, ValueError):
    """Invalid heatmap configuration (shade count, radius, opacity...)."""


class EmptyHeatmapError(HeatmapError, ValueError):
    """A render was requested before any point was added."""


class GradientError(HeatmapError):
    """The gradient ramp image cannot recolor the canvas palette."""


class GradientNotFoundError(GradientError, FileNotFoundError):
    """No gradient ramp file exists for the requested shade/fill combination."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Can't find gradient file {path} in resource folder")
