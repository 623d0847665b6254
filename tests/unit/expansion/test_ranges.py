"""Unit tests for range end matching."""

from xltemplate.expansion import find_range_end


class TestFindRangeEnd:
    """Tests for find_range_end."""

    def test_simple_range(self, make_rows):
        rows = make_rows([["body"], ["{{ end }}"], ["after"]])
        assert find_range_end(rows) == 1

    def test_empty_body(self, make_rows):
        rows = make_rows([["{{end}}"]])
        assert find_range_end(rows) == 0

    def test_skips_nested_range(self, make_rows):
        """The inner end must not close the outer range."""
        rows = make_rows(
            [
                ["Dept: {{ title }}"],
                ["{{ range staff }}"],
                ["{{ name }}"],
                ["{{ end }}"],
                ["Subtotal"],
                ["{{ end }}"],
                ["Total"],
            ]
        )
        assert find_range_end(rows) == 5

    def test_sibling_ranges(self, make_rows):
        """Two sibling ranges inside the body are both skipped."""
        rows = make_rows(
            [
                ["{{ range a }}"],
                ["{{ end }}"],
                ["{{ range b }}"],
                ["x"],
                ["{{ end }}"],
                ["{{ end }}"],
            ]
        )
        assert find_range_end(rows) == 5

    def test_sibling_ranges_at_top_level(self, make_rows):
        """Scanning after the first start stops at that range's own end."""
        rows = make_rows(
            [
                ["a"],
                ["{{ end }}"],
                ["{{ range b }}"],
                ["b"],
                ["{{ end }}"],
            ]
        )
        assert find_range_end(rows) == 1
        assert find_range_end(rows[3:]) == 1

    def test_deeply_nested(self, make_rows):
        rows = make_rows(
            [
                ["{{ range a }}"],
                ["{{ range b }}"],
                ["{{ range c }}"],
                ["{{ end }}"],
                ["{{ end }}"],
                ["{{ end }}"],
                ["{{ end }}"],
            ]
        )
        assert find_range_end(rows) == 6

    def test_not_closed(self, make_rows):
        rows = make_rows([["body"], ["{{ range inner }}"], ["{{ end }}"]])
        assert find_range_end(rows) is None

    def test_empty_rows_are_skipped(self, make_rows):
        rows = make_rows([[], ["body"], [], ["{{ end }}"]])
        assert find_range_end(rows) == 3

    def test_end_outside_first_cell_ignored(self, make_rows):
        rows = make_rows([["note", "{{ end }}"], ["{{ end }}"]])
        assert find_range_end(rows) == 1

    def test_no_rows(self):
        assert find_range_end([]) is None
