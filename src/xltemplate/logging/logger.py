"""xltemplate logger - Hierarchical colored logging for report rendering."""

import json
import sys
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, TextIO

from xltemplate.logging.colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    RED,
    RESET,
    YELLOW,
)
from xltemplate.types import LogFormat, LogLevel


@dataclass
class LogConfig:
    """Logger configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_context: bool = True
    truncate_at: int = 200
    components: dict[str, bool] = field(default_factory=dict)
    output: TextIO = field(default=sys.stdout)

    def __post_init__(self) -> None:
        """Initialize default components if not provided."""
        if not self.components:
            self.components = {
                "report": True,
                "sheet": True,
                "range": True,
            }


class XLTLogger:
    """Main logger facade. Creates report-scoped loggers."""

    def __init__(self, config: LogConfig | None = None):
        """Initialize logger with configuration.

        Args:
            config: Logger configuration (defaults to LogConfig())
        """
        self.config = config or LogConfig()
        self._level_order = {
            LogLevel.DEBUG: 0,
            LogLevel.INFO: 1,
            LogLevel.WARN: 2,
            LogLevel.ERROR: 3,
        }

    def report(self, name: str) -> "ReportLogger":
        """Get a logger scoped to one render of a template.

        Args:
            name: Template name (file name or "<binary>")

        Returns:
            ReportLogger instance
        """
        return ReportLogger(self, name)

    def configure(self, config: LogConfig) -> None:
        """Replace the logger configuration."""
        self.config = config

    def _should_log(self, level: LogLevel) -> bool:
        return self._level_order.get(level, 0) >= self._level_order.get(self.config.level, 1)

    def _log(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Internal logging method.

        Args:
            level: Log level
            component: Component name (report, sheet, range)
            message: Log message
            context: Additional context data
        """
        if not self._should_log(level):
            return

        if not self.config.components.get(component, True):
            return

        if self.config.format == LogFormat.JSON:
            self._log_json(level, component, message, context)
        else:
            self._log_colored(level, component, message, context)

    def _log_json(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat().replace("+00:00", "Z"),
            "level": level.value,
            "component": component,
            "message": message,
        }
        if context:
            log_entry.update(context)

        print(json.dumps(log_entry, default=str), file=self.config.output)

    def _log_colored(
        self,
        level: LogLevel,
        component: str,
        message: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        level_colors = {
            LogLevel.DEBUG: LIGHT_BLUE,
            LogLevel.INFO: CYAN,
            LogLevel.WARN: YELLOW,
            LogLevel.ERROR: RED,
        }

        color = level_colors.get(level, RESET)
        component_color = {
            "report": MAGENTA,
            "sheet": CYAN,
            "range": GREEN,
        }.get(component, RESET)

        # Format: [COMPONENT] message
        output = f"{component_color}[{component.upper()}]{RESET} {color}{message}{RESET}"

        if context and self.config.show_context:
            context_str = str(context)
            if len(context_str) > self.config.truncate_at:
                context_str = context_str[: self.config.truncate_at] + "..."
            output += f" {LIGHT_BLUE}{context_str}{RESET}"

        print(output, file=self.config.output)


class ReportLogger:
    """Logger for report-level events."""

    def __init__(self, parent: XLTLogger, name: str):
        """Initialize report logger.

        Args:
            parent: Parent XLTLogger instance
            name: Template name
        """
        self.parent = parent
        self.name = name

    def started(self, sheet_count: int) -> None:
        """Log render start."""
        context = {
            "template": self.name,
            "event": "report_started",
            "sheet_count": sheet_count,
        }
        message = f"Rendering '{self.name}' ({sheet_count} sheets)"
        self.parent._log(LogLevel.INFO, "report", message, context)

    def completed(self, duration_ms: int, row_count: int) -> None:
        """Log render completion with summary.

        Args:
            duration_ms: Render duration in milliseconds
            row_count: Total rows written across all sheets
        """
        context = {
            "template": self.name,
            "event": "report_completed",
            "duration_ms": duration_ms,
            "row_count": row_count,
        }

        duration_s = duration_ms / 1000
        message = f"Report '{self.name}' rendered ({row_count} rows, {duration_s:.2f}s) ✓"

        self.parent._log(LogLevel.INFO, "report", message, context)

    def failed(self, error: Exception, duration_ms: int) -> None:
        """Log render failure.

        Args:
            error: Exception that aborted the render
            duration_ms: Render duration in milliseconds
        """
        context = {
            "template": self.name,
            "event": "report_failed",
            "duration_ms": duration_ms,
            "error": str(error),
            "error_type": type(error).__name__,
        }
        code = getattr(error, "code", None)
        if code:
            context["error_code"] = code

        duration_s = duration_ms / 1000
        message = f"Report '{self.name}' failed ({duration_s:.2f}s): {error}"

        self.parent._log(LogLevel.ERROR, "report", message, context)

    def sheet(self, title: str) -> "SheetLogger":
        """Get a logger scoped to a sheet.

        Args:
            title: Sheet title

        Returns:
            SheetLogger instance
        """
        return SheetLogger(self, title)


class SheetLogger:
    """Logger for sheet-level and expansion events."""

    def __init__(self, parent: ReportLogger, title: str):
        """Initialize sheet logger.

        Args:
            parent: Parent ReportLogger instance
            title: Sheet title
        """
        self.parent = parent
        self.title = title

    def _context(self, event: str) -> dict[str, Any]:
        return {
            "template": self.parent.name,
            "sheet": self.title,
            "event": event,
        }

    def started(self, row_count: int) -> None:
        """Log start of a sheet."""
        context = self._context("sheet_started")
        context["row_count"] = row_count
        message = f"Sheet '{self.title}' started ({row_count} template rows)"
        self.parent.parent._log(LogLevel.DEBUG, "sheet", message, context)

    def completed(self, rows_out: int) -> None:
        """Log completion of a sheet."""
        context = self._context("sheet_completed")
        context["rows_out"] = rows_out
        message = f"Sheet '{self.title}' rendered ({rows_out} rows) ✓"
        self.parent.parent._log(LogLevel.INFO, "sheet", message, context)

    def range_expanded(self, property_name: str, iterations: int) -> None:
        """Log a range block expansion.

        Args:
            property_name: Context property driving the range
            iterations: Number of sub-contexts iterated
        """
        context = self._context("range_expanded")
        context["property"] = property_name
        context["iterations"] = iterations
        message = f"Range '{property_name}' expanded x{iterations}"
        self.parent.parent._log(LogLevel.DEBUG, "range", message, context)

    def list_fanout(self, property_name: str, count: int) -> None:
        """Log a list-row fan-out.

        Args:
            property_name: Array property driving the row
            count: Number of rows produced
        """
        context = self._context("list_fanout")
        context["property"] = property_name
        context["count"] = count
        message = f"Row fanned out over '{property_name}' x{count}"
        self.parent.parent._log(LogLevel.DEBUG, "range", message, context)

    def failed(self, error: Exception) -> None:
        """Log sheet failure."""
        context = self._context("sheet_failed")
        context["error"] = str(error)
        context["error_type"] = type(error).__name__
        message = f"Sheet '{self.title}' failed: {error}"
        self.parent.parent._log(LogLevel.ERROR, "sheet", message, context)
