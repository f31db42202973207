r"""
Shared pytest fixtures for mongo-bench tests.
"""

import json
import time
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import pytest

from mongo_bench.adapters import AdapterRegistry, BaseAdapter
from mongo_bench.exceptions import DatabaseConnectionError, ExecutionError
from mongo_bench.types import QueryDefinition

MS = 1_000_000


class FakeClock:
    """Nanosecond clock that only moves when advanced."""

    def __init__(self) -> None:
        self.now = 0

    def __call__(self) -> int:
        return self.now

    def advance(self, ns: int) -> None:
        self.now += ns


class FakeCursor:
    """Cursor that advances the clock by its elapsed time when drained."""

    def __init__(self, documents: list[dict], *, clock: FakeClock | None = None, elapsed_ns: int = 0) -> None:
        self._documents = documents
        self._clock = clock
        self._elapsed_ns = elapsed_ns
        self.consumed = 0
        self.closed = False

    def __iter__(self):
        if self._clock is not None:
            self._clock.advance(self._elapsed_ns)
        for doc in self._documents:
            self.consumed += 1
            yield doc

    def close(self) -> None:
        self.closed = True


@AdapterRegistry.register("fake")
class FakeAdapter(BaseAdapter):
    """In-process adapter with scripted timings and failures.

    timings_ms and failures are indexed by query call number (0-based).
    """

    instances: list["FakeAdapter"] = []

    def __init__(
        self,
        *,
        clock: FakeClock | None = None,
        timings_ms: Sequence[int] = (),
        failures: set[int] | None = None,
        documents: list[dict] | None = None,
        connect_delay: float = 0.0,
        ping_error: bool = False,
        disconnect_delay: float = 0.0,
        disconnect_error: bool = False,
    ) -> None:
        self._clock = clock
        self._timings_ms = list(timings_ms)
        self._failures = failures or set()
        self._documents = documents if documents is not None else [{"_id": 1}, {"_id": 2}]
        self._connect_delay = connect_delay
        self._ping_error = ping_error
        self._disconnect_delay = disconnect_delay
        self._disconnect_error = disconnect_error
        self._connected = False
        self.uri: str | None = None
        self.calls: list[tuple[str, str, str, Any]] = []
        self.cursors: list[FakeCursor] = []
        self.disconnect_calls = 0
        FakeAdapter.instances.append(self)

    @property
    def name(self) -> str:
        return "Fake"

    @property
    def version(self) -> str:
        return "7.0.0-fake" if self._connected else "unknown"

    def connect(self, *, uri: str | None = None, timeout_seconds: float | None = None, **kwargs: Any) -> None:
        if self._connect_delay:
            time.sleep(self._connect_delay)
        self.uri = uri
        self._connected = True

    def ping(self) -> None:
        if self._ping_error:
            msg = "failed to ping Fake: server unavailable"
            raise DatabaseConnectionError(msg)

    def disconnect(self) -> None:
        if self._disconnect_delay:
            time.sleep(self._disconnect_delay)
        self.disconnect_calls += 1
        self._connected = False
        if self._disconnect_error:
            msg = "failed to disconnect from Fake: connection reset"
            raise DatabaseConnectionError(msg)

    def _cursor(self) -> FakeCursor:
        index = len(self.calls) - 1
        if index in self._failures:
            msg = f"scripted failure on call {index}"
            raise ExecutionError(msg)
        elapsed_ms = self._timings_ms[index] if index < len(self._timings_ms) else 1
        cursor = FakeCursor(self._documents, clock=self._clock, elapsed_ns=elapsed_ms * MS)
        self.cursors.append(cursor)
        return cursor

    def find(self, database: str, collection: str, filter_doc: Mapping[str, Any]) -> FakeCursor:
        self.calls.append(("find", database, collection, filter_doc))
        return self._cursor()

    def aggregate(self, database: str, collection: str, pipeline: Sequence[Mapping[str, Any]]) -> FakeCursor:
        self.calls.append(("aggregate", database, collection, pipeline))
        return self._cursor()


@AdapterRegistry.register("fake-bad-disconnect")
class BadDisconnectAdapter(FakeAdapter):
    """Fake adapter whose disconnect always fails."""

    def __init__(self, **kwargs: Any) -> None:
        kwargs.setdefault("disconnect_error", True)
        super().__init__(**kwargs)


@pytest.fixture(autouse=True)
def reset_fake_instances():
    FakeAdapter.instances.clear()
    yield
    FakeAdapter.instances.clear()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def by_id() -> QueryDefinition:
    return QueryDefinition(name="byId", collection="users", query={"_id": 1}, description="Lookup by id")


@pytest.fixture
def agg() -> QueryDefinition:
    return QueryDefinition(name="agg", collection="orders", query=[{"$match": {}}])


@pytest.fixture
def sample_definitions() -> list[dict]:
    return [
        {"name": "byId", "description": "Lookup by id", "query": {"_id": 1}, "collection": "users"},
        {"name": "agg", "description": "Match all", "query": [{"$match": {}}], "collection": "orders"},
    ]


@pytest.fixture
def definitions_file(tmp_path: Path, sample_definitions: list[dict]) -> Path:
    path = tmp_path / "queries.json"
    path.write_text(json.dumps(sample_definitions))
    return path


@pytest.fixture
def sample_queries_path() -> Path:
    return Path(__file__).parent.parent / "queries" / "sample_queries.json"


@pytest.fixture
def fake_adapter_cls() -> type[FakeAdapter]:
    return FakeAdapter


@pytest.fixture
def make_adapter(clock: FakeClock):
    """Factory for fake adapters sharing the test clock."""

    def factory(**kwargs: Any) -> FakeAdapter:
        kwargs.setdefault("clock", clock)
        return FakeAdapter(**kwargs)

    return factory
