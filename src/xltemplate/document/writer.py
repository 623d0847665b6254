"""Appending cloned rows to an output worksheet."""

from collections import defaultdict
from collections.abc import Iterable
from copy import copy
from datetime import datetime, time
from typing import Any

from openpyxl.cell.cell import KNOWN_TYPES, Cell
from openpyxl.cell.rich_text import CellRichText
from openpyxl.utils.exceptions import IllegalCharacterError
from openpyxl.worksheet.cell_range import CellRange
from openpyxl.worksheet.worksheet import Worksheet

from xltemplate.config.models import RenderOptions
from xltemplate.errors import create_error, get_error_factory
from xltemplate.template import format_value

from .model import TemplateRow


def clone_cell(source: Cell, target: Cell, options: RenderOptions) -> None:
    """Copy style, hyperlink and comment from a template cell.

    Style objects are copied rather than the style array, since the target
    belongs to a different workbook.
    """
    if source.has_style:
        target.font = copy(source.font)
        target.border = copy(source.border)
        target.fill = copy(source.fill)
        target.number_format = source.number_format
        target.protection = copy(source.protection)
        target.alignment = copy(source.alignment)

    if options.wrap_text_in_all_cells:
        alignment = copy(target.alignment)
        alignment.wrap_text = True
        target.alignment = alignment

    if source.hyperlink is not None:
        target.hyperlink = copy(source.hyperlink)
    if source.comment is not None:
        target.comment = copy(source.comment)


def to_cell_value(value: Any) -> Any:
    """Coerce a rendered value into something a cell can hold.

    Containers become JSON text and any type openpyxl can't store becomes
    its text form.

    Raises:
        TypeError: For timezone-aware datetimes and times
    """
    if isinstance(value, CellRichText):
        return value
    if isinstance(value, (dict, list, tuple)):
        return format_value(list(value) if isinstance(value, tuple) else value)
    if not isinstance(value, KNOWN_TYPES):
        return format_value(value)
    if isinstance(value, (datetime, time)) and value.tzinfo is not None:
        raise TypeError(f"Timezone-aware value {value.isoformat()} can't be stored in a cell")
    if value == "":
        return None
    return value


class SheetWriter:
    """Appends rendered rows to an output worksheet."""

    def __init__(self, sheet: Worksheet, options: RenderOptions | None = None):
        """Initialize sheet writer.

        Args:
            sheet: Output worksheet, initially empty
            options: Render options
        """
        self.sheet = sheet
        self.options = options or RenderOptions()
        self.row_count = 0
        # Source row index -> output rows written from it, in order
        self._targets: dict[int, list[int]] = defaultdict(list)

    def append(self, row: TemplateRow, values: list[Any]) -> None:
        """Append a clone of row carrying the rendered values.

        Rendered text is always stored as text; a formula or error value is
        kept only when the template cell itself held one.

        Args:
            row: Template row providing styles and height
            values: Rendered value for each of row's cells

        Raises:
            XLTError(CELL_VALUE_INVALID): If a value can't be stored
        """
        target_index = self.row_count + 1
        if row.height:
            self.sheet.row_dimensions[target_index].height = row.height

        for template_cell, value in zip(row.cells, values, strict=True):
            target = self.sheet.cell(row=target_index, column=template_cell.column)
            clone_cell(template_cell.source, target, self.options)
            try:
                target.value = to_cell_value(value)
            except IllegalCharacterError as e:
                raise get_error_factory().from_exception(
                    e, sheet=self.sheet.title, cell=template_cell.coordinate
                ) from e
            except (TypeError, ValueError) as e:
                raise create_error(
                    "CELL_VALUE_INVALID",
                    sheet=self.sheet.title,
                    cell=template_cell.coordinate,
                    detail=str(e),
                ) from e

            if isinstance(target.value, str) and target.data_type != template_cell.source.data_type:
                target.data_type = "s"

        self._targets[row.index].append(target_index)
        self.row_count = target_index

    def copy_merged_cells(self, ranges: Iterable[CellRange]) -> None:
        """Recreate template merges on the output rows.

        A single-row merge is applied to every copy of its row. A taller
        merge is kept only when each of its rows was written exactly once,
        to consecutive output rows; merges across repeated or skipped rows
        are dropped.

        Args:
            ranges: Merged ranges of the template sheet
        """
        for merged in ranges:
            if merged.min_row == merged.max_row:
                for target_row in self._targets.get(merged.min_row, []):
                    self._merge(target_row, target_row, merged)
                continue

            written = [self._targets.get(r, []) for r in range(merged.min_row, merged.max_row + 1)]
            if any(len(targets) != 1 for targets in written):
                continue
            first = written[0][0]
            if [targets[0] for targets in written] != list(range(first, first + len(written))):
                continue
            self._merge(first, first + len(written) - 1, merged)

    def _merge(self, start_row: int, end_row: int, merged: CellRange) -> None:
        self.sheet.merge_cells(
            start_row=start_row,
            start_column=merged.min_col,
            end_row=end_row,
            end_column=merged.max_col,
        )
