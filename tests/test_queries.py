r"""
Tests for mongo_bench.queries module.
"""

import json

import pytest

from mongo_bench.exceptions import LoadError, LoadErrorKind
from mongo_bench.queries import load_definitions
from mongo_bench.types import QueryKind


class TestLoadDefinitions:
    def test_load_in_file_order(self, definitions_file):
        definitions = load_definitions(definitions_file)

        assert [d.name for d in definitions] == ["byId", "agg"]
        assert definitions[0].collection == "users"
        assert definitions[0].kind == QueryKind.FILTER
        assert definitions[1].kind == QueryKind.PIPELINE

    def test_load_accepts_str_path(self, definitions_file):
        definitions = load_definitions(str(definitions_file))
        assert len(definitions) == 2

    def test_load_twice_is_identical(self, definitions_file):
        assert load_definitions(definitions_file) == load_definitions(definitions_file)

    def test_empty_array(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("[]")
        assert load_definitions(path) == []

    def test_missing_file(self, tmp_path):
        path = tmp_path / "missing.json"

        with pytest.raises(LoadError) as exc_info:
            load_definitions(path)

        assert exc_info.value.kind == LoadErrorKind.IO_FAILURE
        assert exc_info.value.path == path
        assert "failed to read file" in str(exc_info.value)

    def test_directory_is_io_failure(self, tmp_path):
        with pytest.raises(LoadError) as exc_info:
            load_definitions(tmp_path)
        assert exc_info.value.kind == LoadErrorKind.IO_FAILURE

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('[{"name": "byId", ')

        with pytest.raises(LoadError) as exc_info:
            load_definitions(path)

        assert exc_info.value.kind == LoadErrorKind.PARSE_FAILURE
        assert "failed to parse JSON" in str(exc_info.value)

    def test_top_level_object_rejected(self, tmp_path):
        path = tmp_path / "object.json"
        path.write_text(json.dumps({"name": "byId", "query": {}, "collection": "users"}))

        with pytest.raises(LoadError) as exc_info:
            load_definitions(path)
        assert exc_info.value.kind == LoadErrorKind.PARSE_FAILURE

    def test_invalid_entry_fails_whole_file(self, tmp_path, sample_definitions):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps(sample_definitions + [{"name": "broken", "query": 3, "collection": "c"}]))

        with pytest.raises(LoadError, match="index 2") as exc_info:
            load_definitions(path)
        assert exc_info.value.kind == LoadErrorKind.PARSE_FAILURE

    def test_sample_queries_load(self, sample_queries_path):
        definitions = load_definitions(sample_queries_path)

        assert len(definitions) == 4
        kinds = {d.name: d.kind for d in definitions}
        assert kinds["userById"] == QueryKind.FILTER
        assert kinds["revenueByCustomer"] == QueryKind.PIPELINE
