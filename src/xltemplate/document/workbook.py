"""Loading, creating and saving workbooks."""

import zipfile
from io import BytesIO
from pathlib import Path
from typing import BinaryIO

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.worksheet.worksheet import Worksheet

from xltemplate.errors import create_error, get_error_factory

TemplateSource = str | Path | bytes | BinaryIO


def load_template(source: TemplateSource) -> Workbook:
    """Open a template workbook.

    Args:
        source: File path, raw bytes or a binary file object

    Returns:
        Loaded workbook (rich text preserved)

    Raises:
        XLTError(DOCUMENT_FORMAT_ERROR): If the input is not a readable .xlsx
    """
    if isinstance(source, (bytes, bytearray)):
        source = BytesIO(source)
    elif isinstance(source, Path):
        source = str(source)
    try:
        return load_workbook(source, rich_text=True)
    except (zipfile.BadZipFile, InvalidFileException) as e:
        raise get_error_factory().from_exception(e) from e
    except KeyError as e:
        raise create_error(
            "DOCUMENT_FORMAT_ERROR",
            detail=f"Missing workbook part: {e}",
        ) from e


def new_report() -> Workbook:
    """Create an empty output workbook with no sheets."""
    report = Workbook()
    report.remove(report.active)
    return report


def add_sheet(report: Workbook, template: Worksheet) -> Worksheet:
    """Add an output sheet mirroring the template sheet's title and columns."""
    sheet = report.create_sheet(title=template.title)
    copy_columns(template, sheet)
    sheet.sheet_format.defaultRowHeight = template.sheet_format.defaultRowHeight
    sheet.sheet_properties.tabColor = template.sheet_properties.tabColor
    return sheet


def copy_columns(source: Worksheet, target: Worksheet) -> None:
    """Copy column widths, visibility and outline levels."""
    for key, dimension in source.column_dimensions.items():
        column = target.column_dimensions[key]
        column.width = dimension.width
        column.hidden = dimension.hidden
        column.outlineLevel = dimension.outlineLevel
        column.collapsed = dimension.collapsed
        column.min = dimension.min
        column.max = dimension.max


def save_workbook(workbook: Workbook, path: str | Path) -> None:
    workbook.save(str(path))


def write_workbook(workbook: Workbook, stream: BinaryIO) -> None:
    """Serialize a workbook into a binary stream."""
    workbook.save(stream)


def workbook_to_bytes(workbook: Workbook) -> bytes:
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
