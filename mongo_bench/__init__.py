r"""
mongo-bench: latency benchmark for predefined MongoDB queries.

Runs each query definition a fixed number of times and reports
total, average, min and max wall-clock time.

    from mongo_bench import BenchmarkRunner, RunnerConfig, load_definitions, render_report

    definitions = load_definitions("queries/sample_queries.json")
    with BenchmarkRunner.open(RunnerConfig(database="shop", iterations=5)) as runner:
        print(render_report(runner.run(definitions)))
"""

from mongo_bench.exceptions import (
    ConversionError,
    DatabaseConnectionError,
    ExecutionError,
    LoadError,
    LoadErrorKind,
    MongoBenchError,
)
from mongo_bench.queries import load_definitions
from mongo_bench.reporting import render_report
from mongo_bench.runner import BenchmarkRunner, RunnerConfig
from mongo_bench.types import BenchmarkResult, QueryDefinition, QueryKind, classify_query

__all__ = [
    "BenchmarkResult",
    "BenchmarkRunner",
    "ConversionError",
    "DatabaseConnectionError",
    "ExecutionError",
    "LoadError",
    "LoadErrorKind",
    "MongoBenchError",
    "QueryDefinition",
    "QueryKind",
    "RunnerConfig",
    "classify_query",
    "load_definitions",
    "render_report",
]

__version__ = "0.1.0"
