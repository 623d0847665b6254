"""Spreadsheet document model backed by openpyxl."""

from .model import TemplateCell, TemplateRow, read_rows, render_rich_text
from .workbook import (
    TemplateSource,
    add_sheet,
    copy_columns,
    load_template,
    new_report,
    save_workbook,
    workbook_to_bytes,
    write_workbook,
)
from .writer import SheetWriter, clone_cell, to_cell_value

__all__ = [
    "TemplateCell",
    "TemplateRow",
    "read_rows",
    "render_rich_text",
    "SheetWriter",
    "clone_cell",
    "to_cell_value",
    "TemplateSource",
    "load_template",
    "new_report",
    "add_sheet",
    "copy_columns",
    "save_workbook",
    "write_workbook",
    "workbook_to_bytes",
]
