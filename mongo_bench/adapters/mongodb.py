r"""
MongoDB database adapter.

Requires: pip install pymongo

Environment variables:
    MONGO_BENCH_URI: Connection URI (default: mongodb://localhost:27017)

    from mongo_bench.adapters.mongodb import MongoDBAdapter

    adapter = MongoDBAdapter()
    adapter.connect(uri="mongodb://localhost:27017", timeout_seconds=10)
    adapter.ping()
"""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from bson.errors import BSONError
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from mongo_bench.adapters.base import AdapterRegistry, BaseAdapter
from mongo_bench.config import DEFAULT_TIMEOUT_SECONDS, DEFAULT_URI, get_env
from mongo_bench.exceptions import DatabaseConnectionError, ExecutionError

__all__ = ["MongoDBAdapter", "MongoCursor"]


class MongoCursor:
    """Wraps a pymongo cursor so driver failures surface as ExecutionError."""

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor

    def __iter__(self) -> Iterator[Mapping[str, Any]]:
        try:
            yield from self._cursor
        except (PyMongoError, BSONError, OverflowError) as e:
            msg = f"cursor failed: {e}"
            raise ExecutionError(msg) from e

    def close(self) -> None:
        try:
            self._cursor.close()
        except PyMongoError as e:
            msg = f"failed to close cursor: {e}"
            raise ExecutionError(msg) from e


@AdapterRegistry.register("mongodb")
class MongoDBAdapter(BaseAdapter):
    """MongoDB document database adapter."""

    def __init__(self) -> None:
        self._client: Any = None
        self._connected = False

    @property
    def name(self) -> str:
        return "MongoDB"

    @property
    def version(self) -> str:
        if not self._connected or self._client is None:
            return "unknown"
        try:
            return self._client.server_info()["version"]
        except PyMongoError:
            return "unknown"

    def connect(self, *, uri: str | None = None, timeout_seconds: float | None = None, **kwargs: Any) -> None:
        uri = uri or get_env("URI", default=DEFAULT_URI)
        timeout_ms = int((timeout_seconds or DEFAULT_TIMEOUT_SECONDS) * 1000)

        try:
            self._client = MongoClient(
                uri,
                serverSelectionTimeoutMS=timeout_ms,
                connectTimeoutMS=timeout_ms,
                **kwargs,
            )
        except (PyMongoError, ValueError) as e:
            msg = f"failed to connect to MongoDB: {e}"
            raise DatabaseConnectionError(msg) from e
        self._connected = True

    def ping(self) -> None:
        if self._client is None:
            msg = "failed to ping MongoDB: not connected"
            raise DatabaseConnectionError(msg)
        try:
            self._client.admin.command("ping")
        except PyMongoError as e:
            msg = f"failed to ping MongoDB: {e}"
            raise DatabaseConnectionError(msg) from e

    def disconnect(self) -> None:
        if self._client is not None:
            try:
                self._client.close()
            except PyMongoError as e:
                msg = f"failed to disconnect from MongoDB: {e}"
                raise DatabaseConnectionError(msg) from e
            finally:
                self._client = None
        self._connected = False

    def _collection(self, database: str, collection: str) -> Any:
        if self._client is None:
            msg = "MongoDB adapter is not connected"
            raise ExecutionError(msg)
        return self._client[database][collection]

    def find(self, database: str, collection: str, filter_doc: Mapping[str, Any]) -> MongoCursor:
        coll = self._collection(database, collection)
        try:
            return MongoCursor(coll.find(filter_doc))
        except (PyMongoError, BSONError, OverflowError) as e:
            msg = f"find on {database}.{collection} failed: {e}"
            raise ExecutionError(msg) from e

    def aggregate(self, database: str, collection: str, pipeline: Sequence[Mapping[str, Any]]) -> MongoCursor:
        coll = self._collection(database, collection)
        try:
            return MongoCursor(coll.aggregate(list(pipeline)))
        except (PyMongoError, BSONError, OverflowError) as e:
            msg = f"aggregate on {database}.{collection} failed: {e}"
            raise ExecutionError(msg) from e
