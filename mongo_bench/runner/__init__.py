r"""
Benchmark runner and timing.

Connects to the database, times repeated query execution,
and aggregates per-query statistics.

    from mongo_bench.runner import BenchmarkRunner, RunnerConfig

    with BenchmarkRunner.open(RunnerConfig(database="shop")) as runner:
        results = runner.run(definitions)
"""

from mongo_bench.runner.benchmark import BenchmarkRunner, RunnerConfig, drain_cursor
from mongo_bench.runner.timing import Timer, TimingAccumulator

__all__ = [
    "BenchmarkRunner",
    "RunnerConfig",
    "Timer",
    "TimingAccumulator",
    "drain_cursor",
]
