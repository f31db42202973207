r"""
Result collection for a benchmark session.

    from mongo_bench.reporting.collector import ResultCollector

    collector = ResultCollector()
    collector.start_session(database="shop", iterations=10)
    collector.add_results(results)
    collector.end_session()
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from mongo_bench.types import BenchmarkResult

__all__ = ["ResultCollector", "SessionInfo"]


@dataclass
class SessionInfo:
    """Information about a benchmark session.

    Attributes:
        session_id: Unique session identifier.
        started_at: Session start timestamp.
        completed_at: Session end timestamp (empty if ongoing).
        database: Database benchmarked.
        iterations: Configured iterations per query.
        definitions_path: Definitions file the queries came from.
    """

    session_id: str = ""
    started_at: str = ""
    completed_at: str = ""
    database: str = ""
    iterations: int = 0
    definitions_path: str = ""


class ResultCollector:
    """Collects benchmark results for export."""

    def __init__(self) -> None:
        self._results: list[BenchmarkResult] = []
        self._session = SessionInfo()

    def start_session(self, *, database: str, iterations: int, definitions_path: str = "") -> None:
        """Start a new benchmark session."""
        started_at = datetime.now(UTC)
        self._session = SessionInfo(
            session_id=f"bench_{started_at.strftime('%Y%m%d_%H%M%S')}",
            started_at=started_at.isoformat(),
            database=database,
            iterations=iterations,
            definitions_path=definitions_path,
        )

    def end_session(self) -> None:
        """End the current benchmark session."""
        self._session.completed_at = datetime.now(UTC).isoformat()

    def add_result(self, result: BenchmarkResult) -> None:
        """Add a benchmark result."""
        self._results.append(result)

    def add_results(self, results: list[BenchmarkResult]) -> None:
        """Add multiple benchmark results."""
        self._results.extend(results)

    @property
    def results(self) -> list[BenchmarkResult]:
        """Get all collected results."""
        return self._results

    @property
    def session(self) -> SessionInfo:
        """Get session information."""
        return self._session

    @property
    def failed_iterations(self) -> int:
        """Failed iterations across all queries."""
        return sum(r.failed_iterations for r in self._results)

    def to_dict(self) -> dict[str, Any]:
        """Convert collected data to dictionary."""
        return {
            "session": {
                "id": self._session.session_id,
                "started_at": self._session.started_at,
                "completed_at": self._session.completed_at,
                "database": self._session.database,
                "iterations": self._session.iterations,
                "definitions_path": self._session.definitions_path,
            },
            "results": [self._result_to_dict(r) for r in self._results],
        }

    def _result_to_dict(self, result: BenchmarkResult) -> dict[str, Any]:
        return {
            "name": result.name,
            "description": result.description,
            "collection": result.collection,
            "kind": result.kind.name.lower(),
            "iterations": result.iterations,
            "failed_iterations": result.failed_iterations,
            "total_ns": result.total_ns,
            "avg_ns": result.avg_ns,
            "min_ns": result.min_ns,
            "max_ns": result.max_ns,
        }
