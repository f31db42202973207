r"""
Benchmark runner for MongoDB queries.

    from mongo_bench.queries import load_definitions
    from mongo_bench.runner import BenchmarkRunner, RunnerConfig

    definitions = load_definitions("queries/sample_queries.json")
    with BenchmarkRunner.open(RunnerConfig(database="shop", iterations=5)) as runner:
        results = runner.run(definitions)
"""

import logging
import time
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeout
from dataclasses import dataclass
from typing import Any

from mongo_bench.adapters import AdapterRegistry
from mongo_bench.config import (
    DEFAULT_ADAPTER,
    DEFAULT_DATABASE,
    DEFAULT_ITERATIONS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_URI,
    get_env,
    get_env_float,
    get_env_int,
)
from mongo_bench.convert import to_filter_document, to_pipeline
from mongo_bench.exceptions import ConversionError, DatabaseConnectionError, ExecutionError
from mongo_bench.protocols import DocumentDatabaseAdapter, ResultCursor
from mongo_bench.runner.timing import Clock, Timer, TimingAccumulator
from mongo_bench.types import BenchmarkResult, QueryDefinition, QueryKind, classify_query

__all__ = ["BenchmarkRunner", "RunnerConfig", "ProgressCallback", "drain_cursor"]

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, str], None]


@dataclass
class RunnerConfig:
    """Configuration for a benchmark session.

    Attributes:
        uri: Connection URI.
        database: Target database name.
        iterations: Timed executions per query.
        connect_timeout_seconds: Deadline for connect and ping.
        disconnect_timeout_seconds: Deadline for disconnect.
        average_over_successful: Divide the average by successful iterations
            instead of the configured count.
        adapter: Registered adapter name.
    """

    uri: str = DEFAULT_URI
    database: str = DEFAULT_DATABASE
    iterations: int = DEFAULT_ITERATIONS
    connect_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    disconnect_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    average_over_successful: bool = False
    adapter: str = DEFAULT_ADAPTER

    def __post_init__(self) -> None:
        if self.iterations < 0:
            msg = f"iterations must be >= 0, got {self.iterations}"
            raise ValueError(msg)
        if self.connect_timeout_seconds <= 0 or self.disconnect_timeout_seconds <= 0:
            msg = "timeouts must be positive"
            raise ValueError(msg)

    @classmethod
    def from_env(cls, **overrides: Any) -> "RunnerConfig":
        """Build a config from MONGO_BENCH_* variables; overrides that are not None win."""
        values: dict[str, Any] = {
            "uri": get_env("URI", default=DEFAULT_URI),
            "database": get_env("DATABASE", default=DEFAULT_DATABASE),
            "iterations": get_env_int("ITERATIONS", default=DEFAULT_ITERATIONS),
            "connect_timeout_seconds": get_env_float("CONNECT_TIMEOUT", default=DEFAULT_TIMEOUT_SECONDS),
            "disconnect_timeout_seconds": get_env_float("DISCONNECT_TIMEOUT", default=DEFAULT_TIMEOUT_SECONDS),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def drain_cursor(cursor: ResultCursor) -> int:
    """Advance a cursor to exhaustion and close it, returning the document count."""
    count = 0
    try:
        for _ in cursor:
            count += 1
    finally:
        cursor.close()
    return count


def _run_with_timeout(func: Callable[[], Any], timeout_seconds: float) -> Any:
    """Run func on a worker thread and wait at most timeout_seconds.

    Raises:
        TimeoutError: If func does not finish in time. The worker is abandoned.
    """
    executor = ThreadPoolExecutor(max_workers=1)
    future = executor.submit(func)
    try:
        return future.result(timeout=timeout_seconds)
    except FuturesTimeout:
        raise TimeoutError(f"timed out after {timeout_seconds}s") from None
    finally:
        executor.shutdown(wait=False)


def _abandon(adapter: DocumentDatabaseAdapter, timeout_seconds: float) -> None:
    """Release a half-opened adapter; its disconnect error is logged, not raised."""
    try:
        _run_with_timeout(adapter.disconnect, timeout_seconds)
    except (DatabaseConnectionError, TimeoutError) as e:
        logger.debug("Cleanup after failed connect to %s failed: %s", adapter.name, e)


class BenchmarkRunner:
    """Times repeated execution of query definitions against one database."""

    def __init__(
        self,
        adapter: DocumentDatabaseAdapter,
        *,
        config: RunnerConfig | None = None,
        clock: Clock = time.perf_counter_ns,
    ) -> None:
        self._adapter = adapter
        self._config = config or RunnerConfig()
        self._clock = clock
        self._closed = False
        self._progress_callback: ProgressCallback | None = None

    @classmethod
    def open(
        cls,
        config: RunnerConfig,
        *,
        adapter: DocumentDatabaseAdapter | None = None,
        clock: Clock = time.perf_counter_ns,
    ) -> "BenchmarkRunner":
        """Connect and ping within the connect deadline.

        Raises:
            DatabaseConnectionError: If connecting or pinging fails or times out.
        """
        if adapter is None:
            adapter = AdapterRegistry.create(config.adapter)

        def connect() -> None:
            adapter.connect(uri=config.uri, timeout_seconds=config.connect_timeout_seconds)
            adapter.ping()

        try:
            _run_with_timeout(connect, config.connect_timeout_seconds)
        except DatabaseConnectionError:
            _abandon(adapter, config.disconnect_timeout_seconds)
            raise
        except TimeoutError as e:
            _abandon(adapter, config.disconnect_timeout_seconds)
            msg = f"failed to connect to {adapter.name}: {e}"
            raise DatabaseConnectionError(msg) from e

        logger.debug("Connected to %s, database %s", adapter.name, config.database)
        return cls(adapter, config=config, clock=clock)

    @property
    def adapter(self) -> DocumentDatabaseAdapter:
        return self._adapter

    @property
    def config(self) -> RunnerConfig:
        return self._config

    def set_progress_callback(self, callback: ProgressCallback) -> None:
        """Set callback for progress updates."""
        self._progress_callback = callback

    def close(self) -> None:
        """Disconnect within the disconnect deadline. Later calls do nothing.

        Raises:
            DatabaseConnectionError: If disconnecting fails or times out.
        """
        if self._closed:
            return
        self._closed = True

        try:
            _run_with_timeout(self._adapter.disconnect, self._config.disconnect_timeout_seconds)
        except TimeoutError as e:
            msg = f"failed to disconnect from {self._adapter.name}: {e}"
            raise DatabaseConnectionError(msg) from e

    def __enter__(self) -> "BenchmarkRunner":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def _execute(self, definition: QueryDefinition) -> int:
        database = self._config.database
        if classify_query(definition.query) == QueryKind.PIPELINE:
            pipeline = to_pipeline(definition.query)
            cursor = self._adapter.aggregate(database, definition.collection, pipeline)
        else:
            filter_doc = to_filter_document(definition.query)
            cursor = self._adapter.find(database, definition.collection, filter_doc)
        return drain_cursor(cursor)

    def run_query(self, definition: QueryDefinition) -> BenchmarkResult:
        """Run the configured number of timed iterations for one query.

        Failed iterations are logged and left out of the timings.
        """
        iterations = self._config.iterations
        acc = TimingAccumulator()

        for i in range(1, iterations + 1):
            try:
                with Timer(clock=self._clock) as timer:
                    self._execute(definition)
            except (ConversionError, ExecutionError) as e:
                acc.record_failure()
                logger.warning("Query %s iteration %d/%d failed: %s", definition.name, i, iterations, e)
                continue
            acc.record(timer.elapsed_ns)

        return acc.finalize(
            definition,
            iterations=iterations,
            average_over_successful=self._config.average_over_successful,
        )

    def run(self, definitions: Iterable[QueryDefinition]) -> list[BenchmarkResult]:
        """Run every definition in order and return results in the same order."""
        results = []

        for definition in definitions:
            logger.info("Running query: %s", definition.name)
            if self._progress_callback:
                self._progress_callback(definition.name, "running")

            result = self.run_query(definition)
            results.append(result)

            if self._progress_callback:
                self._progress_callback(definition.name, "done" if result.ok else "failed")

        return results
