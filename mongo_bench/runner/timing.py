r"""
Timing utilities for benchmarks.

    from mongo_bench.runner.timing import Timer, TimingAccumulator

    acc = TimingAccumulator()
    with Timer() as t:
        run_query()
    acc.record(t.elapsed_ns)
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from mongo_bench.types import BenchmarkResult, QueryDefinition

__all__ = ["Clock", "Timer", "TimingAccumulator"]

Clock = Callable[[], int]


class Timer:
    """Context manager for timing code blocks.

        with Timer() as t:
            do_something()
        print(f"Elapsed: {t.elapsed_ms}ms")

    The end time is recorded even when the block raises.
    """

    def __init__(self, *, clock: Clock = time.perf_counter_ns) -> None:
        self._clock = clock
        self._start: int = 0
        self._end: int = 0

    def __enter__(self) -> "Timer":
        self._start = self._clock()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self._end = self._clock()

    @property
    def elapsed_ns(self) -> int:
        """Elapsed time in nanoseconds."""
        return self._end - self._start

    @property
    def elapsed_ms(self) -> float:
        """Elapsed time in milliseconds."""
        return self.elapsed_ns / 1_000_000


@dataclass
class TimingAccumulator:
    """Running min/max/total over the iterations of one query.

    Attributes:
        total_ns: Sum of recorded elapsed times.
        min_ns: Fastest recorded time (None until one is recorded).
        max_ns: Slowest recorded time.
        successes: Recorded iterations.
        failures: Failed iterations.
    """

    total_ns: int = 0
    min_ns: int | None = None
    max_ns: int = 0
    successes: int = 0
    failures: int = 0

    def record(self, elapsed_ns: int) -> None:
        """Add a successful iteration."""
        self.total_ns += elapsed_ns
        self.successes += 1
        if self.min_ns is None or elapsed_ns < self.min_ns:
            self.min_ns = elapsed_ns
        if elapsed_ns > self.max_ns:
            self.max_ns = elapsed_ns

    def record_failure(self) -> None:
        """Count a failed iteration; it does not touch the timings."""
        self.failures += 1

    def finalize(
        self,
        definition: QueryDefinition,
        *,
        iterations: int,
        average_over_successful: bool = False,
    ) -> BenchmarkResult:
        """Build the immutable result.

        The average divides by the configured iteration count unless
        average_over_successful is set. A zero divisor gives a zero average.
        """
        divisor = self.successes if average_over_successful else iterations
        avg_ns = self.total_ns // divisor if divisor > 0 else 0

        return BenchmarkResult(
            name=definition.name,
            description=definition.description,
            collection=definition.collection,
            kind=definition.kind,
            iterations=iterations,
            total_ns=self.total_ns,
            min_ns=self.min_ns or 0,
            max_ns=self.max_ns,
            avg_ns=avg_ns,
            failed_iterations=self.failures,
        )
