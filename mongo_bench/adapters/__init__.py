r"""
Database adapters for mongo-bench.

Each adapter implements the DocumentDatabaseAdapter protocol
to provide a consistent interface to the benchmark runner.

    from mongo_bench.adapters import MongoDBAdapter

    adapter = MongoDBAdapter()
    adapter.connect(uri="mongodb://localhost:27017")
"""

from mongo_bench.adapters.base import AdapterRegistry, BaseAdapter
from mongo_bench.adapters.mongodb import MongoCursor, MongoDBAdapter

__all__ = [
    "AdapterRegistry",
    "BaseAdapter",
    "MongoCursor",
    "MongoDBAdapter",
]
