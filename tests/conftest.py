"""
Pytest configuration and shared fixtures for xltemplate tests.
"""

import sys
from collections.abc import Callable
from io import BytesIO
from pathlib import Path
from typing import Any

import pytest
from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from xltemplate.document import TemplateRow, read_rows  # noqa: E402

SheetSpec = list[list[Any]]


# =============================================================================
# Workbook Fixtures
# =============================================================================


def _build_workbook(*sheets: SheetSpec, titles: list[str] | None = None) -> Workbook:
    workbook = Workbook()
    workbook.remove(workbook.active)
    for index, rows in enumerate(sheets):
        title = titles[index] if titles else f"Sheet{index + 1}"
        sheet = workbook.create_sheet(title=title)
        for row in rows:
            sheet.append(row)
    return workbook


@pytest.fixture
def build_template() -> Callable[..., Workbook]:
    """Build an in-memory template workbook, one row list per sheet."""
    return _build_workbook


@pytest.fixture
def template_bytes() -> Callable[..., bytes]:
    """Build a template workbook and serialize it to .xlsx bytes."""

    def _to_bytes(*sheets: SheetSpec, titles: list[str] | None = None) -> bytes:
        buffer = BytesIO()
        _build_workbook(*sheets, titles=titles).save(buffer)
        return buffer.getvalue()

    return _to_bytes


@pytest.fixture
def make_rows() -> Callable[[SheetSpec], list[TemplateRow]]:
    """Turn plain value lists into TemplateRows read from a real worksheet."""

    def _make_rows(rows: SheetSpec) -> list[TemplateRow]:
        return read_rows(_build_workbook(rows).worksheets[0])

    return _make_rows


@pytest.fixture
def sheet_values() -> Callable[[Worksheet], list[list[Any]]]:
    """Read back a sheet's values, trailing empty cells trimmed."""

    def _values(sheet: Worksheet) -> list[list[Any]]:
        if not sheet._cells:
            return []
        rows = []
        for row in sheet.iter_rows(values_only=True):
            values = list(row)
            while values and values[-1] is None:
                values.pop()
            rows.append(values)
        return rows

    return _values


# =============================================================================
# Markers Configuration
# =============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "property: Property-based tests")
