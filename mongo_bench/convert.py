r"""
Conversion of query bodies to native BSON documents.

Query bodies go through a text round trip: serialized with json.dumps,
then parsed with bson.json_util so MongoDB Extended JSON markers
({"$oid": ...}, {"$date": ...}, {"$numberLong": ...}) become native types.

    from mongo_bench.convert import to_filter_document, to_pipeline

    doc = to_filter_document({"_id": {"$oid": "5f0c6a2e9d1b2c3d4e5f6a7b"}})
"""

import json
from collections.abc import Mapping
from typing import Any

import bson
from bson import json_util
from bson.errors import BSONError

from mongo_bench.exceptions import ConversionError

__all__ = ["to_filter_document", "to_pipeline"]


def _round_trip(query: Any) -> Any:
    try:
        text = json.dumps(query)
    except (TypeError, ValueError) as e:
        msg = f"failed to serialize query: {e}"
        raise ConversionError(msg) from e

    try:
        return json_util.loads(text)
    except (BSONError, KeyError, TypeError, ValueError) as e:
        msg = f"failed to parse extended JSON: {e}"
        raise ConversionError(msg) from e


def _ensure_encodable(document: dict[str, Any], what: str) -> None:
    try:
        bson.encode(document)
    except (BSONError, OverflowError) as e:
        msg = f"{what} cannot be encoded as BSON: {e}"
        raise ConversionError(msg) from e


def to_filter_document(query: Any) -> dict[str, Any]:
    """Convert a filter query body to a native document.

    Raises:
        ConversionError: If the body is not an object, holds invalid extended JSON,
            or cannot be encoded as BSON.
    """
    document = _round_trip(query)
    if not isinstance(document, Mapping):
        msg = f"filter must be an object, got {type(query).__name__}"
        raise ConversionError(msg)
    document = dict(document)
    _ensure_encodable(document, "filter")
    return document


def to_pipeline(query: Any) -> list[dict[str, Any]]:
    """Convert a pipeline query body to a list of native stage documents.

    Raises:
        ConversionError: If the body is not an array of objects, holds invalid extended JSON,
            or cannot be encoded as BSON.
    """
    stages = _round_trip(query)
    if not isinstance(stages, list):
        msg = f"pipeline must be an array, got {type(query).__name__}"
        raise ConversionError(msg)

    for index, stage in enumerate(stages):
        if not isinstance(stage, Mapping):
            msg = f"pipeline stage {index} must be an object, got {type(stage).__name__}"
            raise ConversionError(msg)
    pipeline = [dict(stage) for stage in stages]
    for index, stage in enumerate(pipeline):
        _ensure_encodable(stage, f"pipeline stage {index}")
    return pipeline
