r"""
Core types for MongoDB query benchmarks.

    from mongo_bench.types import QueryDefinition, QueryKind

    definition = QueryDefinition.from_dict({"name": "byId", "query": {"_id": 1}, "collection": "users"})
    if definition.kind == QueryKind.PIPELINE:
        ...
"""

from dataclasses import dataclass
from enum import IntEnum, auto
from typing import Any

__all__ = [
    "QueryKind",
    "QueryDefinition",
    "BenchmarkResult",
    "classify_query",
]


class QueryKind(IntEnum):
    """Execution path for a query body."""

    FILTER = auto()
    PIPELINE = auto()


def classify_query(query: Any) -> QueryKind:
    """Classify a query body by its shape.

    A non-empty list is an aggregation pipeline; anything else
    (objects, empty lists) is treated as a find filter.
    """
    if isinstance(query, list) and query:
        return QueryKind.PIPELINE
    return QueryKind.FILTER


@dataclass(frozen=True, slots=True)
class QueryDefinition:
    """A named query to benchmark.

    Attributes:
        name: Query identifier.
        collection: Target collection name.
        query: Filter document (dict) or pipeline stages (list of dicts).
        description: Free text description.
    """

    name: str
    collection: str
    query: dict[str, Any] | list[dict[str, Any]]
    description: str = ""

    @property
    def kind(self) -> QueryKind:
        """Execution path chosen for this query."""
        return classify_query(self.query)

    @classmethod
    def from_dict(cls, data: Any) -> "QueryDefinition":
        """Build a definition from a decoded JSON object.

        Raises:
            ValueError: If the object does not have the expected shape.
        """
        if not isinstance(data, dict):
            msg = f"expected an object, got {type(data).__name__}"
            raise ValueError(msg)

        for key in ("name", "collection"):
            if not isinstance(data.get(key), str):
                msg = f"'{key}' must be a string"
                raise ValueError(msg)

        description = data.get("description", "")
        if not isinstance(description, str):
            msg = "'description' must be a string"
            raise ValueError(msg)

        query = data.get("query")
        if isinstance(query, list):
            if not all(isinstance(stage, dict) for stage in query):
                msg = f"query '{data['name']}': pipeline stages must be objects"
                raise ValueError(msg)
        elif not isinstance(query, dict):
            msg = f"query '{data['name']}': 'query' must be an object or an array of objects"
            raise ValueError(msg)

        return cls(
            name=data["name"],
            collection=data["collection"],
            query=query,
            description=description,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the definitions file representation."""
        return {
            "name": self.name,
            "description": self.description,
            "query": self.query,
            "collection": self.collection,
        }


@dataclass(frozen=True, slots=True)
class BenchmarkResult:
    """Timing result for one query definition.

    Attributes:
        name: Query name.
        description: Query description.
        collection: Target collection.
        kind: Execution path used.
        iterations: Configured iteration count.
        total_ns: Sum of successful iteration times in nanoseconds.
        min_ns: Fastest successful iteration in nanoseconds.
        max_ns: Slowest successful iteration in nanoseconds.
        avg_ns: Average iteration time in nanoseconds.
        failed_iterations: Iterations that raised a conversion or execution error.
    """

    name: str
    description: str
    collection: str
    kind: QueryKind
    iterations: int
    total_ns: int
    min_ns: int
    max_ns: int
    avg_ns: int
    failed_iterations: int = 0

    @property
    def successful_iterations(self) -> int:
        """Iterations that contributed to the timing statistics."""
        return self.iterations - self.failed_iterations

    @property
    def ok(self) -> bool:
        """True if no iteration failed."""
        return self.failed_iterations == 0

    @property
    def total_ms(self) -> float:
        """Total time in milliseconds."""
        return self.total_ns / 1_000_000

    @property
    def avg_ms(self) -> float:
        """Average time in milliseconds."""
        return self.avg_ns / 1_000_000

    @property
    def min_ms(self) -> float:
        """Minimum time in milliseconds."""
        return self.min_ns / 1_000_000

    @property
    def max_ms(self) -> float:
        """Maximum time in milliseconds."""
        return self.max_ns / 1_000_000
