# callmetrics/observability/metrics.py
# minimal prometheus instrumentation

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import Counter, Histogram

ROWS_TOTAL = Counter(
    "callmetrics_rows_total",
    "Raw rows seen by the normalizer",
    ["result"],  # kept | unanswered | malformed
)

ENGINE_FAILURES = Counter(
    "callmetrics_engine_failures_total",
    "Calculations that raised internally and were converted to invalid results",
    ["engine"],
)

AGGREGATION_LATENCY = Histogram(
    "callmetrics_aggregation_seconds",
    "Time spent in aggregator operations",
    ["operation"],
    buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
)


def record_rows(result: str, count: int = 1) -> None:
    if count:
        ROWS_TOTAL.labels(result=result).inc(count)


def record_engine_failure(engine: str) -> None:
    ENGINE_FAILURES.labels(engine=engine).inc()


@contextmanager
def observe_latency(operation: str) -> Iterator[None]:
    start = time.perf_counter()
    try:
        yield
    finally:
        AGGREGATION_LATENCY.labels(operation=operation).observe(time.perf_counter() - start)
