r"""
Base adapter implementation with common functionality.

    from mongo_bench.adapters.base import AdapterRegistry, BaseAdapter

    @AdapterRegistry.register("mydb")
    class MyAdapter(BaseAdapter):
        def connect(self, *, uri: str | None = None, **kwargs) -> None:
            ...
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from mongo_bench.protocols import ResultCursor

__all__ = ["BaseAdapter", "AdapterRegistry"]


class AdapterRegistry:
    """Registry for database adapters."""

    _adapters: dict[str, type["BaseAdapter"]] = {}

    @classmethod
    def register(cls, name: str) -> Any:
        """Decorator to register an adapter class."""

        def decorator(adapter_cls: type["BaseAdapter"]) -> type["BaseAdapter"]:
            cls._adapters[name] = adapter_cls
            return adapter_cls

        return decorator

    @classmethod
    def get(cls, name: str) -> type["BaseAdapter"] | None:
        """Get adapter class by name."""
        return cls._adapters.get(name)

    @classmethod
    def list(cls) -> list[str]:
        """List registered adapter names."""
        return list(cls._adapters.keys())

    @classmethod
    def create(cls, name: str, **kwargs: Any) -> "BaseAdapter":
        """Create adapter instance by name."""
        adapter_cls = cls.get(name)
        if adapter_cls is None:
            valid = ", ".join(cls.list()) or "none"
            msg = f"Unknown adapter '{name}'. Registered: {valid}"
            raise ValueError(msg)
        return adapter_cls(**kwargs)


class BaseAdapter(ABC):
    """Base class for document database adapters."""

    _connected: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable adapter name."""
        ...

    @property
    def version(self) -> str:
        """Database version string."""
        return "unknown"

    @property
    def connected(self) -> bool:
        """Whether adapter is currently connected."""
        return self._connected

    @abstractmethod
    def connect(self, *, uri: str | None = None, timeout_seconds: float | None = None, **kwargs: Any) -> None:
        """Establish connection to the database."""
        ...

    @abstractmethod
    def ping(self) -> None:
        """Verify the server answers a lightweight round trip."""
        ...

    @abstractmethod
    def disconnect(self) -> None:
        """Close connection to the database."""
        ...

    @abstractmethod
    def find(self, database: str, collection: str, filter_doc: Mapping[str, Any]) -> ResultCursor:
        """Run a find query and return a cursor over matching documents."""
        ...

    @abstractmethod
    def aggregate(self, database: str, collection: str, pipeline: Sequence[Mapping[str, Any]]) -> ResultCursor:
        """Run an aggregation pipeline and return a cursor over its output."""
        ...

    def __repr__(self) -> str:
        status = "connected" if self._connected else "disconnected"
        return f"{self.__class__.__name__}({self.name}, {status})"
