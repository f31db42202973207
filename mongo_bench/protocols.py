r"""
Protocol definitions for document database adapters.

All adapters must implement DocumentDatabaseAdapter protocol.
Cursors returned by find and aggregate implement ResultCursor.

    from mongo_bench.protocols import DocumentDatabaseAdapter

    class MyAdapter(DocumentDatabaseAdapter):
        ...
"""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

__all__ = [
    "DocumentDatabaseAdapter",
    "ResultCursor",
]


@runtime_checkable
class ResultCursor(Protocol):
    """Lazily consumed handle over query results."""

    def __iter__(self) -> Iterator[Mapping[str, Any]]:
        """Advance through result documents."""
        ...

    def close(self) -> None:
        """Release server-side cursor resources."""
        ...


@runtime_checkable
class DocumentDatabaseAdapter(Protocol):
    """Protocol for document database adapters."""

    @property
    def name(self) -> str:
        """Human-readable adapter name."""
        ...

    @property
    def version(self) -> str:
        """Database version string."""
        ...

    def connect(self, *, uri: str | None = None, timeout_seconds: float | None = None, **kwargs: Any) -> None:
        """Establish connection to the database."""
        ...

    def ping(self) -> None:
        """Verify the server answers a lightweight round trip."""
        ...

    def disconnect(self) -> None:
        """Close connection to the database."""
        ...

    def find(self, database: str, collection: str, filter_doc: Mapping[str, Any]) -> ResultCursor:
        """Run a find query and return a cursor over matching documents."""
        ...

    def aggregate(self, database: str, collection: str, pipeline: Sequence[Mapping[str, Any]]) -> ResultCursor:
        """Run an aggregation pipeline and return a cursor over its output."""
        ...
