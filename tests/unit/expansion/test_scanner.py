"""Unit tests for directive scanning."""

import pytest

from xltemplate.expansion import (
    ListField,
    RangeEnd,
    RangeStart,
    classify,
    classify_list_field,
    classify_range_end,
    classify_range_start,
)
from xltemplate.types import DirectiveKind


class TestClassifyRangeStart:
    """Tests for classify_range_start."""

    @pytest.mark.parametrize(
        "text",
        ["{{range items}}", "{{ range items }}", "{{  range   items  }}", "Name: {{range items}}"],
    )
    def test_detects_range_start(self, make_rows, text):
        """Range start is whitespace tolerant and may sit inside other text."""
        (row,) = make_rows([[text]])
        assert classify_range_start(row) == "items"

    def test_only_first_cell_is_inspected(self, make_rows):
        """A range directive outside the first cell is not a range start."""
        (row,) = make_rows([["Label", "{{ range items }}"]])
        assert classify_range_start(row) is None

    def test_unicode_property_name(self, make_rows):
        """Property names are word characters, including non-ASCII letters."""
        (row,) = make_rows([["{{ range сотрудники }}"]])
        assert classify_range_start(row) == "сотрудники"

    def test_empty_row_has_no_directive(self, make_rows):
        """A row with no cells is never a directive."""
        rows = make_rows([["x"], [], ["y"]])
        assert len(rows[1]) == 0
        assert classify_range_start(rows[1]) is None
        assert classify_range_end(rows[1]) is False

    def test_non_text_cell_ignored(self, make_rows):
        """Numeric first cells are not scanned."""
        (row,) = make_rows([[42, "{{ range items }}"]])
        assert classify_range_start(row) is None


class TestClassifyRangeEnd:
    """Tests for classify_range_end."""

    @pytest.mark.parametrize("text", ["{{end}}", "{{ end }}", "  {{   end  }} "])
    def test_detects_range_end(self, make_rows, text):
        (row,) = make_rows([[text]])
        assert classify_range_end(row) is True

    def test_end_in_second_cell_is_not_range_end(self, make_rows):
        (row,) = make_rows([["x", "{{ end }}"]])
        assert classify_range_end(row) is False

    def test_plain_text_is_not_range_end(self, make_rows):
        (row,) = make_rows([["the end"]])
        assert classify_range_end(row) is False


class TestClassifyListField:
    """Tests for classify_list_field."""

    def test_detects_first_dotted_placeholder(self, make_rows):
        """The first {{ prop.field }} found left to right wins."""
        (row,) = make_rows([["{{ title }}", "{{ lines.sku }}", "{{ other.qty }}"]])
        assert classify_list_field(row) == "lines"

    def test_ignores_plain_placeholders(self, make_rows):
        (row,) = make_rows([["{{ title }}", "{{ total }}"]])
        assert classify_list_field(row) is None

    def test_skips_empty_cells(self, make_rows):
        (row,) = make_rows([[None, "", "{{ lines.sku }}"]])
        assert classify_list_field(row) == "lines"

    def test_deeper_paths_are_not_list_fields(self, make_rows):
        """Only a single dotted segment marks a list row."""
        (row,) = make_rows([["{{ a.b.c }}"]])
        assert classify_list_field(row) is None


class TestClassify:
    """Tests for combined classification."""

    def test_range_start_takes_precedence(self, make_rows):
        (row,) = make_rows([["{{ range items }}", "{{ items.name }}"]])
        directive = classify(row)
        assert directive == RangeStart("items")
        assert directive.kind == DirectiveKind.RANGE_START

    def test_range_end(self, make_rows):
        (row,) = make_rows([["{{ end }}"]])
        assert classify(row) == RangeEnd()

    def test_list_field(self, make_rows):
        (row,) = make_rows([["{{ lines.sku }}"]])
        directive = classify(row)
        assert directive == ListField("lines")
        assert directive.kind == DirectiveKind.LIST_FIELD

    def test_plain_row(self, make_rows):
        (row,) = make_rows([["Invoice", "{{ number }}"]])
        assert classify(row) is None
