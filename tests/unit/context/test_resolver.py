"""Unit tests for range context resolution and sheet payload selection."""

import pytest

from xltemplate.context import (
    MappingValue,
    Scalar,
    SequenceValue,
    ingest,
    ingest_context,
    is_array_property,
    load_payload,
    merge_contexts,
    resolve_range_contexts,
    select_sheet_context,
)
from xltemplate.errors import XLTError


class TestResolveRangeContexts:
    """Tests for resolve_range_contexts."""

    def test_list_of_mappings(self):
        ctx = ingest_context({"items": [{"sku": "A"}, {"sku": "B"}]})
        contexts = resolve_range_contexts(ctx, "items")
        assert [c.to_python() for c in contexts] == [{"sku": "A"}, {"sku": "B"}]

    def test_empty_list(self):
        assert resolve_range_contexts(ingest_context({"items": []}), "items") == []

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"items": None},
            {"items": "AB"},
            {"items": {"sku": "A"}},
            {"items": [1, 2]},
            {"items": [{"sku": "A"}, None]},
        ],
    )
    def test_unusable_values(self, data):
        assert resolve_range_contexts(ingest_context(data), "items") is None


class TestIsArrayProperty:
    """Tests for is_array_property."""

    def test_list_of_anything(self):
        ctx = ingest_context({"a": [1], "b": [{"x": 1}], "c": []})
        assert is_array_property(ctx, "a")
        assert is_array_property(ctx, "b")
        assert is_array_property(ctx, "c")

    def test_non_lists(self):
        ctx = ingest_context({"a": "text", "b": {"x": 1}})
        assert not is_array_property(ctx, "a")
        assert not is_array_property(ctx, "b")
        assert not is_array_property(ctx, "missing")


class TestMergeContexts:
    """Tests for merge_contexts."""

    def test_local_wins(self):
        outer = ingest_context({"title": "Eng", "name": "outer"})
        local = ingest_context({"name": "Ann"})
        merged = merge_contexts(local, outer)
        assert merged.to_python() == {"title": "Eng", "name": "Ann"}


class TestSelectSheetContext:
    """Tests for select_sheet_context."""

    def test_mapping_shared_by_every_sheet(self):
        payload = ingest({"a": 1})
        assert select_sheet_context(payload, 0).to_python() == {"a": 1}
        assert select_sheet_context(payload, 3).to_python() == {"a": 1}

    def test_list_indexed_by_sheet(self):
        payload = ingest([{"a": 1}, {"a": 2}])
        assert select_sheet_context(payload, 1).to_python() == {"a": 2}

    def test_sheet_past_end_gets_empty_context(self):
        payload = ingest([{"a": 1}])
        assert len(select_sheet_context(payload, 1)) == 0

    def test_non_mapping_entry_gets_empty_context(self):
        payload = ingest([{"a": 1}, "oops"])
        assert len(select_sheet_context(payload, 1)) == 0

    def test_scalar_payload_gets_empty_context(self):
        assert len(select_sheet_context(Scalar(None), 0)) == 0


class TestLoadPayload:
    """Tests for load_payload."""

    def test_yaml_mapping(self, tmp_path):
        path = tmp_path / "data.yaml"
        path.write_text("customer: ACME\nlines:\n  - sku: A1\n    qty: 2\n")
        payload = load_payload(path)
        assert isinstance(payload, MappingValue)
        assert payload.to_python() == {"customer": "ACME", "lines": [{"sku": "A1", "qty": 2}]}

    def test_json_list(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('[{"a": 1}, {"a": 2}]')
        payload = load_payload(str(path))
        assert isinstance(payload, SequenceValue)
        assert payload.to_python() == [{"a": 1}, {"a": 2}]

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_payload(path).to_python() == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(XLTError) as exc_info:
            load_payload(tmp_path / "nope.yaml")
        assert exc_info.value.code == "PAYLOAD_INVALID"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("a: [1, 2\n")
        with pytest.raises(XLTError) as exc_info:
            load_payload(path)
        assert exc_info.value.code == "PAYLOAD_INVALID"
        assert "Invalid YAML" in exc_info.value.detail

    def test_scalar_root(self, tmp_path):
        path = tmp_path / "scalar.yaml"
        path.write_text("just text\n")
        with pytest.raises(XLTError) as exc_info:
            load_payload(path)
        assert exc_info.value.code == "PAYLOAD_INVALID"
