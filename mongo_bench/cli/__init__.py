r"""
Command-line interface for mongo-bench.

    mongo-bench run queries/sample_queries.json -d shop -n 20
    mongo-bench check
"""

from mongo_bench.cli.main import app, main

__all__ = [
    "app",
    "main",
]
