"""Linear range mapping used to bucket weights into shade levels."""

from __future__ import annotations


def map_range(value: float, from_low: float, from_high: float, to_low: float, to_high: float) -> float:
    """Map ``value`` linearly from ``[from_low, from_high]`` onto ``[to_low, to_high]``.

    No rounding is applied. An empty source range is a caller error.
    """
    from_range = from_high - from_low
    if from_range == 0:
        raise ValueError(f"cannot map from an empty range [{from_low}, {from_high}]")
    return to_low + (value - from_low) * (to_high - to_low) / from_range


def shade_index(weight: int, max_weight: int, shade_count: int) -> int:
    """Bucket ``weight`` into ``[0, shade_count - 1]`` against ``max_weight``.

    Weight 1 is normally the bottom of the scale (shade 0). The exception is
    ``max_weight == 1``: the weight range is then empty and every point lands
    on the top shade, ``shade_count - 1``, instead of shade 0.
    """
    top = shade_count - 1
    if max_weight <= 1:
        return top
    idx = int(round(map_range(weight, 1, max_weight, 0, top)))
    return max(0, min(top, idx))
