"""In-process counters describing what merges copied and skipped."""
from __future__ import annotations

import contextlib
import time
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterator

from fieldmerge.observability.log import get_logger

LOGGER = get_logger(__name__)

COUNTERS = (
    "merges",
    "pairs_matched",
    "fields_copied",
    "skipped_absent",
    "skipped_restricted",
    "merge_duration_ms",
)


@dataclass
class MergeOutcome:
    """Tally for a single merge call."""

    pairs: int = 0
    copied: int = 0
    skipped_absent: int = 0
    skipped_restricted: int = 0


class MetricsRegistry:
    """Accumulates merge outcomes for the current process."""

    def __init__(self) -> None:
        self._counters: Counter[str] = Counter(dict.fromkeys(COUNTERS, 0))

    def incr(self, name: str, value: int = 1) -> None:
        if name not in self._counters:
            raise KeyError(f"Unknown merge counter: {name}")
        self._counters[name] += value

    def record_merge(self, outcome: MergeOutcome) -> None:
        """Fold one merge call into the running totals."""
        self.incr("merges")
        self.incr("pairs_matched", outcome.pairs)
        self.incr("fields_copied", outcome.copied)
        self.incr("skipped_absent", outcome.skipped_absent)
        self.incr("skipped_restricted", outcome.skipped_restricted)

    def get(self, name: str) -> int:
        return self._counters[name]

    def snapshot(self) -> Dict[str, int]:
        return dict(self._counters)


@contextlib.contextmanager
def record_duration(registry: MetricsRegistry, metric_name: str = "merge_duration_ms") -> Iterator[None]:
    """Add the elapsed milliseconds of the block to ``metric_name``."""
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = int((time.perf_counter() - start) * 1000)
        registry.incr(metric_name, elapsed_ms)
        LOGGER.debug("merge_timed", metric=metric_name, duration_ms=elapsed_ms)
