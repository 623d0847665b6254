"""Directive detection on template rows."""

import re

from xltemplate.document import TemplateRow

from .types import Directive, ListField, RangeEnd, RangeStart

RANGE_START_PATTERN = re.compile(r"\{\{\s*range\s+(\w+)\s*\}\}")
RANGE_END_PATTERN = re.compile(r"\{\{\s*end\s*\}\}")
LIST_FIELD_PATTERN = re.compile(r"\{\{\s*(\w+)\.\w+\s*\}\}")


def classify_range_start(row: TemplateRow) -> str | None:
    """Return the property named by a range-start directive in the first cell."""
    text = row.text_at(0)
    if not text:
        return None
    match = RANGE_START_PATTERN.search(text)
    return match.group(1) if match else None


def classify_range_end(row: TemplateRow) -> bool:
    """True when the first cell holds a range-end directive."""
    text = row.text_at(0)
    return bool(text) and RANGE_END_PATTERN.search(text) is not None


def classify_list_field(row: TemplateRow) -> str | None:
    """Return the property of the first {{ prop.field }} placeholder in the row.

    Cells are scanned left to right; only the first match counts.
    """
    for cell in row.cells:
        text = cell.text
        if not text:
            continue
        match = LIST_FIELD_PATTERN.search(text)
        if match:
            return match.group(1)
    return None


def classify(row: TemplateRow) -> Directive | None:
    """Classify a row, checking range-start, range-end, then list-field."""
    range_property = classify_range_start(row)
    if range_property is not None:
        return RangeStart(range_property)
    if classify_range_end(row):
        return RangeEnd()
    list_property = classify_list_field(row)
    if list_property is not None:
        return ListField(list_property)
    return None
