from __future__ import annotations

"""Timing and resource usage of the render stages."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List
import contextlib
import time
import psutil


@dataclass
class StageMetrics:
    name: str
    ms: float
    cpu_percent: float
    rss_bytes: int


@contextlib.contextmanager
def measure(name: str, sink: List[StageMetrics]) -> Iterator[None]:
    """Record wall time and process CPU/RSS deltas of the enclosed block.

    Parameters
    ----------
    name:
        Name of the render stage.
    sink:
        List the resulting :class:`StageMetrics` is appended to. Nothing is
        recorded when the block raises.
    """

    proc = psutil.Process()
    cpu_before = proc.cpu_percent(interval=None)
    rss_before = proc.memory_info().rss
    start = time.perf_counter()
    yield
    end = time.perf_counter()
    sink.append(
        StageMetrics(
            name=name,
            ms=(end - start) * 1000.0,
            cpu_percent=max(0.0, proc.cpu_percent(interval=None) - cpu_before),
            rss_bytes=max(0, proc.memory_info().rss - rss_before),
        )
    )


def summarize(stages: Iterable[StageMetrics]) -> Dict[str, Any]:
    stages = list(stages)
    return {
        "total_ms": sum(s.ms for s in stages),
        "stages": [s.__dict__ for s in stages],
        "hw": {"cpu_count": psutil.cpu_count(), "ram_gb": psutil.virtual_memory().total / 1e9},
    }
