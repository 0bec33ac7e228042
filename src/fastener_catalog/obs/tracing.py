"""Timing and search metrics."""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(slots=True)
class SearchMetrics:
    candidate_count: int
    reranked_count: int
    returned_count: int
    exact_match_count: int
    elapsed_ms: float


class Timer:
    """Simple context timer used by the search facade."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0
