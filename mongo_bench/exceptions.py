r"""
Exception hierarchy for mongo-bench.

Connection and load errors are fatal to a benchmark session.
Conversion and execution errors only fail a single iteration.

    from mongo_bench.exceptions import LoadError, LoadErrorKind

    try:
        definitions = load_definitions("queries.json")
    except LoadError as e:
        if e.kind == LoadErrorKind.PARSE_FAILURE:
            ...
"""

from enum import IntEnum, auto
from pathlib import Path

__all__ = [
    "MongoBenchError",
    "DatabaseConnectionError",
    "LoadErrorKind",
    "LoadError",
    "ConversionError",
    "ExecutionError",
]


class MongoBenchError(Exception):
    """Base exception for all mongo-bench errors."""


class DatabaseConnectionError(MongoBenchError):
    """Raised when connecting, pinging or disconnecting fails or times out."""


class LoadErrorKind(IntEnum):
    """Reason a definitions file could not be loaded."""

    IO_FAILURE = auto()
    PARSE_FAILURE = auto()


class LoadError(MongoBenchError):
    """Raised when query definitions cannot be loaded.

    Attributes:
        kind: Whether reading or parsing failed.
        path: Definitions file path.
    """

    def __init__(self, message: str, *, kind: LoadErrorKind, path: str | Path | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.path = Path(path) if path is not None else None


class ConversionError(MongoBenchError):
    """Raised when a query body cannot be converted to native BSON documents."""


class ExecutionError(MongoBenchError):
    """Raised when the database rejects a query or a cursor fails while draining."""
