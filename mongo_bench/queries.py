r"""
Query definition loading.

A definitions file is a JSON array of objects:

    [
        {"name": "byId", "description": "...", "query": {"_id": 1}, "collection": "users"},
        {"name": "agg", "description": "...", "query": [{"$match": {}}], "collection": "orders"}
    ]

    from mongo_bench.queries import load_definitions

    definitions = load_definitions("queries/sample_queries.json")
"""

import json
from pathlib import Path

from mongo_bench.exceptions import LoadError, LoadErrorKind
from mongo_bench.types import QueryDefinition, classify_query

__all__ = ["load_definitions", "classify_query"]


def load_definitions(path: str | Path) -> list[QueryDefinition]:
    """Load query definitions from a JSON file.

    Either every definition loads or none does.

    Args:
        path: Path to the definitions file.

    Returns:
        Definitions in file order.

    Raises:
        LoadError: With kind IO_FAILURE if the file cannot be read,
            PARSE_FAILURE if it is not a valid definitions array.
    """
    path = Path(path)

    try:
        raw = path.read_bytes()
    except OSError as e:
        msg = f"failed to read file {path}: {e}"
        raise LoadError(msg, kind=LoadErrorKind.IO_FAILURE, path=path) from e

    try:
        data = json.loads(raw)
    except ValueError as e:
        msg = f"failed to parse JSON in {path}: {e}"
        raise LoadError(msg, kind=LoadErrorKind.PARSE_FAILURE, path=path) from e

    if not isinstance(data, list):
        msg = f"failed to parse JSON in {path}: expected an array of query definitions"
        raise LoadError(msg, kind=LoadErrorKind.PARSE_FAILURE, path=path)

    definitions = []
    for index, item in enumerate(data):
        try:
            definitions.append(QueryDefinition.from_dict(item))
        except ValueError as e:
            msg = f"invalid query definition at index {index} in {path}: {e}"
            raise LoadError(msg, kind=LoadErrorKind.PARSE_FAILURE, path=path) from e

    return definitions
