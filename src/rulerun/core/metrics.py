"""
Metrics sinks.

The controller reports one counter increment per terminal execution status.
The sink is an injected collaborator so hosts can forward counts to their own
metrics backend.
"""

from __future__ import annotations

import threading
from collections import Counter
from typing import Dict, Tuple

LabelSet = Tuple[Tuple[str, str], ...]


class MetricsSink:
    def increment(self, name: str, value: int = 1, **labels: str) -> None:
        raise NotImplementedError


class NullMetricsSink(MetricsSink):
    def increment(self, name: str, value: int = 1, **labels: str) -> None:
        return None


class InMemoryMetricsSink(MetricsSink):
    """Thread-safe counter store keyed by metric name and label set."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: Counter = Counter()

    def increment(self, name: str, value: int = 1, **labels: str) -> None:
        key = (name, tuple(sorted(labels.items())))
        with self._lock:
            self._counts[key] += value

    def get(self, name: str, **labels: str) -> int:
        key = (name, tuple(sorted(labels.items())))
        with self._lock:
            return self._counts.get(key, 0)

    def snapshot(self) -> Dict[Tuple[str, LabelSet], int]:
        with self._lock:
            return dict(self._counts)
