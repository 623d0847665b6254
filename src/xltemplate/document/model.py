"""Template rows and cells read from an openpyxl worksheet."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from openpyxl.cell.cell import Cell
from openpyxl.cell.rich_text import CellRichText, TextBlock
from openpyxl.worksheet.worksheet import Worksheet


@dataclass
class TemplateCell:
    """A read-only source cell."""

    column: int  # 1-based column index
    coordinate: str  # e.g. "B3"
    value: Any
    source: Cell

    @property
    def text(self) -> str | None:
        """Plain text used for directive scanning, or None for non-text values."""
        if isinstance(self.value, str):
            return self.value
        if isinstance(self.value, CellRichText):
            return str(self.value)
        return None


@dataclass
class TemplateRow:
    """A read-only source row."""

    index: int  # 1-based source row index
    cells: list[TemplateCell] = field(default_factory=list)
    height: float | None = None

    def __len__(self) -> int:
        return len(self.cells)

    def text_at(self, position: int) -> str | None:
        """Text of the cell at a 0-based position in the row."""
        if position >= len(self.cells):
            return None
        return self.cells[position].text


def _is_blank(cell: Cell) -> bool:
    return cell.value is None and not cell.has_style


def _cell_at(sheet: Worksheet, row: int, column: int) -> Cell:
    # sheet.cell() and iter_rows() store a new cell for every gap they visit
    existing = sheet._cells.get((row, column))
    if existing is not None:
        return existing
    return Cell(sheet, row=row, column=column)


def read_rows(sheet: Worksheet) -> list[TemplateRow]:
    """Read every row of a worksheet, top to bottom.

    Trailing cells with neither value nor style are dropped, so a row
    nobody touched has no cells at all. The sheet itself is left as it
    was; gaps are filled with detached blank cells.

    Args:
        sheet: Template worksheet

    Returns:
        Rows in sheet order
    """
    rows: list[TemplateRow] = []
    if not sheet._cells:
        return rows
    max_column = sheet.max_column
    for index in range(1, sheet.max_row + 1):
        cells = [_cell_at(sheet, index, column) for column in range(1, max_column + 1)]
        while cells and _is_blank(cells[-1]):
            cells.pop()

        dimension = sheet.row_dimensions.get(index)
        height = dimension.height if dimension is not None else None

        rows.append(
            TemplateRow(
                index=index,
                cells=[
                    TemplateCell(
                        column=cell.column,
                        coordinate=cell.coordinate,
                        value=cell.value,
                        source=cell,
                    )
                    for cell in cells
                ],
                height=height or None,
            )
        )
    return rows


def render_rich_text(value: CellRichText, render: Callable[[str], str]) -> CellRichText:
    """Render each run of a rich-text value, keeping every run's font.

    Args:
        value: Source rich text
        render: Function turning a run's template text into output text

    Returns:
        New rich text with rendered runs
    """
    runs: list[str | TextBlock] = []
    for run in value:
        if isinstance(run, TextBlock):
            runs.append(TextBlock(run.font, render(run.text)))
        else:
            runs.append(render(run))
    return CellRichText(runs)
