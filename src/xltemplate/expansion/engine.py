"""Row Expansion Engine.

Walks a sheet's template rows and writes the expanded rows:

- a range block ({{ range items }} ... {{ end }}) is rendered once per
  mapping in ``items``, each time with that mapping merged over the
  enclosing context; the marker rows themselves produce no output
- a list row (a cell holding {{ items.field }} where ``items`` is a
  sequence) is repeated once per element, with ``items`` rebound to the
  element for that copy
- every other row is rendered once
"""

from collections.abc import Sequence
from typing import Any, cast

from openpyxl.cell.rich_text import CellRichText

from xltemplate.config.models import RenderOptions
from xltemplate.context import (
    Context,
    SequenceValue,
    is_array_property,
    merge_contexts,
    resolve_range_contexts,
)
from xltemplate.document import SheetWriter, TemplateCell, TemplateRow, render_rich_text
from xltemplate.errors import XLTError, create_error
from xltemplate.logging import SheetLogger
from xltemplate.template import TemplateEngine, format_value

from .ranges import find_range_end
from .scanner import classify_list_field, classify_range_start


def escape_directives(text: str) -> str:
    """Turn every {{ }} into {{{ }}} before evaluation.

    Placeholders then render raw, and directive text such as {{ end }} left
    in a rendered cell is an ordinary lookup for the evaluator.
    """
    return text.replace("{{", "{{{").replace("}}", "}}}")


class RowExpander:
    """Expand template rows into an output sheet."""

    def __init__(
        self,
        engine: TemplateEngine | None = None,
        options: RenderOptions | None = None,
        logger: SheetLogger | None = None,
    ):
        """Initialize row expander.

        Args:
            engine: Expression evaluator for cell text
            options: Render options
            logger: Optional sheet logger
        """
        self.engine = engine or TemplateEngine()
        self.options = options or RenderOptions()
        self._logger = logger

    def expand(self, writer: SheetWriter, rows: Sequence[TemplateRow], ctx: Context) -> None:
        """Expand rows against ctx, appending output rows to writer.

        Rows are processed depth-first, top to bottom; the first failure
        aborts the expansion.

        Args:
            writer: Output sheet writer
            rows: Template rows of the current scope
            ctx: Active context

        Raises:
            XLTError: RANGE_NOT_CLOSED, INVALID_RANGE_CONTEXT,
                EVALUATION_ERROR or CELL_VALUE_INVALID
        """
        ri = 0
        while ri < len(rows):
            row = rows[ri]

            range_property = classify_range_start(row)
            if range_property is not None:
                ri += 1
                end_offset = find_range_end(rows[ri:])
                if end_offset is None:
                    raise create_error(
                        "RANGE_NOT_CLOSED",
                        property_name=range_property,
                        sheet=writer.sheet.title,
                        cell=row.cells[0].coordinate,
                    )
                end_index = ri + end_offset

                sub_contexts = resolve_range_contexts(ctx, range_property)
                if sub_contexts is None:
                    raise create_error(
                        "INVALID_RANGE_CONTEXT",
                        property_name=range_property,
                        sheet=writer.sheet.title,
                        cell=row.cells[0].coordinate,
                    )

                if self._logger:
                    self._logger.range_expanded(range_property, len(sub_contexts))

                body = rows[ri:end_index]
                for sub_context in sub_contexts:
                    self.expand(writer, body, merge_contexts(sub_context, ctx))

                # Skip the end marker row
                ri = end_index + 1
                continue

            list_property = classify_list_field(row)
            if list_property is not None and is_array_property(ctx, list_property):
                array = cast(SequenceValue, ctx[list_property])
                for element in array.items:
                    self._emit(writer, row, ctx.bind(list_property, element))
                if self._logger:
                    self._logger.list_fanout(list_property, len(array))
            else:
                self._emit(writer, row, ctx)

            ri += 1

    def _emit(self, writer: SheetWriter, row: TemplateRow, ctx: Context) -> None:
        values = [self.render_cell(cell, ctx, sheet=writer.sheet.title) for cell in row.cells]
        writer.append(row, values)

    def render_cell(self, cell: TemplateCell, ctx: Context, sheet: str | None = None) -> Any:
        """Render one template cell against ctx.

        Text is escaped and evaluated; rich text is evaluated run by run;
        any other value is returned unchanged.

        Raises:
            XLTError(EVALUATION_ERROR): If the evaluator rejects the text
        """
        value = cell.value
        try:
            if isinstance(value, str):
                return self.engine.render(escape_directives(value), ctx)
            if isinstance(value, CellRichText):
                return render_rich_text(
                    value,
                    lambda text: format_value(self.engine.render(escape_directives(text), ctx)),
                )
        except XLTError as e:
            raise create_error(
                "EVALUATION_ERROR",
                sheet=sheet,
                cell=cell.coordinate,
                detail=e.detail,
                cause=e,
            ) from e
        return value
