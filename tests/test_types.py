r"""
Tests for mongo_bench.types module.
"""

import pytest

from mongo_bench.types import BenchmarkResult, QueryDefinition, QueryKind, classify_query


class TestClassifyQuery:
    def test_non_empty_list_is_pipeline(self):
        assert classify_query([{"$match": {}}]) == QueryKind.PIPELINE
        assert classify_query([{"$match": {}}, {"$limit": 5}]) == QueryKind.PIPELINE

    def test_object_is_filter(self):
        assert classify_query({"_id": 1}) == QueryKind.FILTER
        assert classify_query({}) == QueryKind.FILTER

    def test_empty_list_is_filter(self):
        assert classify_query([]) == QueryKind.FILTER

    def test_other_shapes_are_filter(self):
        assert classify_query(None) == QueryKind.FILTER
        assert classify_query("text") == QueryKind.FILTER


class TestQueryDefinition:
    def test_from_dict(self):
        definition = QueryDefinition.from_dict(
            {"name": "byId", "description": "Lookup", "query": {"_id": 1}, "collection": "users"}
        )
        assert definition.name == "byId"
        assert definition.description == "Lookup"
        assert definition.collection == "users"
        assert definition.query == {"_id": 1}
        assert definition.kind == QueryKind.FILTER

    def test_description_defaults_to_empty(self):
        definition = QueryDefinition.from_dict({"name": "a", "query": {}, "collection": "c"})
        assert definition.description == ""

    def test_pipeline_kind(self):
        definition = QueryDefinition.from_dict({"name": "agg", "query": [{"$match": {}}], "collection": "orders"})
        assert definition.kind == QueryKind.PIPELINE

    def test_rejects_non_object(self):
        with pytest.raises(ValueError, match="expected an object"):
            QueryDefinition.from_dict(["not", "an", "object"])

    def test_rejects_missing_name(self):
        with pytest.raises(ValueError, match="'name'"):
            QueryDefinition.from_dict({"query": {}, "collection": "c"})

    def test_rejects_missing_collection(self):
        with pytest.raises(ValueError, match="'collection'"):
            QueryDefinition.from_dict({"name": "a", "query": {}})

    def test_rejects_scalar_query(self):
        with pytest.raises(ValueError, match="'query' must be"):
            QueryDefinition.from_dict({"name": "a", "query": 42, "collection": "c"})

    def test_rejects_non_object_stage(self):
        with pytest.raises(ValueError, match="pipeline stages"):
            QueryDefinition.from_dict({"name": "a", "query": [{"$match": {}}, 1], "collection": "c"})

    def test_definition_immutable(self, by_id):
        with pytest.raises(AttributeError):
            by_id.name = "other"  # type: ignore

    def test_to_dict(self, by_id):
        assert by_id.to_dict() == {
            "name": "byId",
            "description": "Lookup by id",
            "query": {"_id": 1},
            "collection": "users",
        }


class TestBenchmarkResult:
    def _result(self, **kwargs):
        values = dict(
            name="q",
            description="",
            collection="c",
            kind=QueryKind.FILTER,
            iterations=4,
            total_ns=40_000_000,
            min_ns=5_000_000,
            max_ns=15_000_000,
            avg_ns=10_000_000,
        )
        values.update(kwargs)
        return BenchmarkResult(**values)

    def test_millisecond_conversions(self):
        result = self._result()
        assert result.total_ms == 40.0
        assert result.avg_ms == 10.0
        assert result.min_ms == 5.0
        assert result.max_ms == 15.0

    def test_ok_without_failures(self):
        result = self._result()
        assert result.ok is True
        assert result.successful_iterations == 4

    def test_failed_iterations(self):
        result = self._result(failed_iterations=1)
        assert result.ok is False
        assert result.successful_iterations == 3
