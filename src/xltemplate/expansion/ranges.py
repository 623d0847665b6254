"""Matching range-start directives to their end rows."""

from collections.abc import Sequence

from xltemplate.document import TemplateRow

from .scanner import classify_range_end, classify_range_start


def find_range_end(rows: Sequence[TemplateRow]) -> int | None:
    """Find the end row closing the range opened just before rows.

    Nested ranges are skipped with a nesting counter: an inner start
    increments it, and each end decrements it until the counter is back
    at zero.

    Args:
        rows: Rows following the range-start row

    Returns:
        Index of the matching end row within rows, or None if the range is
        never closed
    """
    nesting = 0
    for index, row in enumerate(rows):
        if not row.cells:
            continue

        if classify_range_end(row):
            if nesting == 0:
                return index
            nesting -= 1
            continue

        if classify_range_start(row) is not None:
            nesting += 1

    return None
