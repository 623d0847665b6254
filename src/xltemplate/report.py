"""Report facade: load a template, render it against data, save the result."""

import time
from pathlib import Path
from typing import Any, BinaryIO

from openpyxl import Workbook

from xltemplate.config import ConfigLoader, RenderOptions, XLTConfig
from xltemplate.context import ingest, select_sheet_context
from xltemplate.document import (
    SheetWriter,
    TemplateSource,
    add_sheet,
    load_template,
    new_report,
    read_rows,
    save_workbook,
    workbook_to_bytes,
    write_workbook,
)
from xltemplate.errors import XLTError, create_error
from xltemplate.expansion import RowExpander
from xltemplate.logging import XLTLogger
from xltemplate.template import TemplateEngine


class Xlst:
    """A template workbook and the report rendered from it.

    Usage:
        xlst = Xlst.from_file("invoice.xlsx")
        xlst.render({"customer": "ACME", "lines": [...]})
        xlst.save("invoice-acme.xlsx")
    """

    def __init__(
        self,
        template: Workbook | None = None,
        name: str = "<template>",
        options: RenderOptions | None = None,
        logger: XLTLogger | None = None,
    ):
        """Initialize report facade.

        Args:
            template: Loaded template workbook, if any
            name: Template name used in log messages
            options: Default render options
            logger: Optional logger; rendering is silent without one
        """
        self.template = template
        self.name = name
        self.options = options or RenderOptions()
        self.report: Workbook | None = None
        self.engine = TemplateEngine()
        self._logger = logger

    @classmethod
    def new(cls, **kwargs: Any) -> "Xlst":
        """Create a facade with no template loaded."""
        return cls(**kwargs)

    @classmethod
    def from_binary(cls, content: bytes, **kwargs: Any) -> "Xlst":
        """Create a facade from template bytes.

        Raises:
            XLTError(DOCUMENT_FORMAT_ERROR): If content is not an .xlsx workbook
        """
        kwargs.setdefault("name", "<binary>")
        return cls(template=load_template(content), **kwargs)

    @classmethod
    def from_file(cls, path: str | Path, **kwargs: Any) -> "Xlst":
        xlst = cls(**kwargs)
        xlst.read_template(path)
        return xlst

    @classmethod
    def from_config(cls, config: XLTConfig | str | Path | None = None, **kwargs: Any) -> "Xlst":
        """Create a facade whose options and logger come from configuration.

        Args:
            config: Loaded config, a config file path, or None for the
                default resolution order
        """
        if not isinstance(config, XLTConfig):
            config = ConfigLoader().load(config)
        kwargs.setdefault("options", config.render)
        kwargs.setdefault("logger", XLTLogger(config.logging.to_log_config()))
        return cls(**kwargs)

    def read_template(self, source: TemplateSource) -> None:
        """Load the template workbook from a path, bytes or binary stream.

        Raises:
            XLTError(DOCUMENT_FORMAT_ERROR): If the input is not an .xlsx workbook
        """
        self.template = load_template(source)
        if isinstance(source, (str, Path)):
            self.name = Path(source).name

    def render(self, payload: Any) -> None:
        """Render the report with the default options."""
        self.render_with_options(payload, None)

    def render_with_options(self, payload: Any, options: RenderOptions | None = None) -> None:
        """Render the report and keep it on self.report.

        Args:
            payload: A mapping applied to every sheet, or a list of mappings
                (one per sheet, by position)
            options: Render options; defaults to self.options

        Raises:
            XLTError: On the first failure; self.report is left as None
        """
        if self.template is None:
            raise create_error("NO_TEMPLATE_LOADED")

        options = options or self.options
        self.report = None
        contexts = ingest(payload)
        report_logger = self._logger.report(self.name) if self._logger else None
        started = time.monotonic()

        if report_logger:
            report_logger.started(len(self.template.worksheets))

        report = new_report()
        row_count = 0
        try:
            for index, template_sheet in enumerate(self.template.worksheets):
                sheet_logger = report_logger.sheet(template_sheet.title) if report_logger else None
                rows = read_rows(template_sheet)
                if sheet_logger:
                    sheet_logger.started(len(rows))

                writer = SheetWriter(add_sheet(report, template_sheet), options)
                expander = RowExpander(self.engine, options, sheet_logger)
                try:
                    expander.expand(writer, rows, select_sheet_context(contexts, index))
                except XLTError as e:
                    if sheet_logger:
                        sheet_logger.failed(e)
                    raise
                writer.copy_merged_cells(template_sheet.merged_cells.ranges)

                if sheet_logger:
                    sheet_logger.completed(writer.row_count)
                row_count += writer.row_count
        except XLTError as e:
            if report_logger:
                report_logger.failed(e, self._elapsed_ms(started))
            raise

        self.report = report
        if report_logger:
            report_logger.completed(self._elapsed_ms(started), row_count)

    def save(self, path: str | Path) -> None:
        """Save the rendered report to disk.

        Raises:
            XLTError(NO_REPORT_GENERATED): If nothing has been rendered
        """
        save_workbook(self._require_report(), path)

    def write(self, stream: BinaryIO) -> None:
        """Write the rendered report to a binary stream.

        Raises:
            XLTError(NO_REPORT_GENERATED): If nothing has been rendered
        """
        write_workbook(self._require_report(), stream)

    def to_bytes(self) -> bytes:
        return workbook_to_bytes(self._require_report())

    def _require_report(self) -> Workbook:
        if self.report is None:
            raise create_error("NO_REPORT_GENERATED")
        return self.report

    @staticmethod
    def _elapsed_ms(started: float) -> int:
        return int((time.monotonic() - started) * 1000)


def render_template(
    source: TemplateSource,
    payload: Any,
    options: RenderOptions | None = None,
    logger: XLTLogger | None = None,
) -> Workbook:
    """Load a template, render it and return the report workbook."""
    xlst = Xlst(options=options, logger=logger)
    xlst.read_template(source)
    xlst.render(payload)
    return xlst._require_report()
