# Copyright (c) 2026 Frame Contributors. All Rights Reserved.

"""
Metrics — In-memory counters for catalog and build observability.

Counters: entities_loaded, documents_skipped, duplicate_ids, curations,
map_builds, summaries_reused, summaries_recomputed, bundles_built.
Gauges:   catalog_size.
Timings:  map_build_ms, bundle_build_ms.

Usage:
    frame_metrics.inc("curations")
    with frame_metrics.timed("map_build_ms"):
        ...
"""

from __future__ import annotations

import time
from collections import Counter, deque
from contextlib import contextmanager
from typing import Any, Deque, Dict, Iterator

MAX_OBSERVATIONS = 1000


class Metrics:
    """Process-local metrics; reset() between tests."""

    def __init__(self) -> None:
        self._counters: Counter[str] = Counter()
        self._gauges: Dict[str, float] = {}
        self._timings: Dict[str, Deque[float]] = {}
        self._started = time.time()

    def inc(self, name: str, amount: int = 1) -> None:
        self._counters[name] += amount

    def get_counter(self, name: str) -> int:
        return self._counters[name]

    def set_gauge(self, name: str, value: float) -> None:
        self._gauges[name] = value

    def get_gauge(self, name: str) -> float:
        return self._gauges.get(name, 0.0)

    def observe(self, name: str, value: float) -> None:
        """Record one timing observation in milliseconds."""
        self._timings.setdefault(name, deque(maxlen=MAX_OBSERVATIONS)).append(value)

    @contextmanager
    def timed(self, name: str) -> Iterator[None]:
        """Observe the wall time of the block under ``name``, in ms."""
        start = time.perf_counter()
        try:
            yield
        finally:
            self.observe(name, (time.perf_counter() - start) * 1000)

    def reset(self) -> None:
        self._counters.clear()
        self._gauges.clear()
        self._timings.clear()

    def snapshot(self) -> Dict[str, Any]:
        """Plain-dict export for /health."""
        result: Dict[str, Any] = {
            "uptime_seconds": round(time.time() - self._started, 1),
            "counters": dict(self._counters),
            "gauges": dict(self._gauges),
        }
        for name, values in self._timings.items():
            if not values:
                continue
            result[f"histogram_{name}"] = {
                "count": len(values),
                "avg": round(sum(values) / len(values), 2),
                "max": round(max(values), 2),
                "min": round(min(values), 2),
            }
        return result


frame_metrics = Metrics()
