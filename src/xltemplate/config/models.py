"""xltemplate configuration data models."""

from dataclasses import dataclass, field

from xltemplate.logging import LogConfig
from xltemplate.types import LogFormat, LogLevel


@dataclass
class RenderOptions:
    """Options applied while rendering a template."""

    wrap_text_in_all_cells: bool = False  # Force wrap_text on every cloned cell


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.COLORED
    show_context: bool = True
    truncate_at: int = 200
    components: dict[str, bool] = field(
        default_factory=lambda: {
            "report": True,
            "sheet": True,
            "range": True,
        }
    )

    def to_log_config(self) -> LogConfig:
        """Build the logger configuration for this section."""
        return LogConfig(
            level=self.level,
            format=self.format,
            show_context=self.show_context,
            truncate_at=self.truncate_at,
            components=dict(self.components),
        )


@dataclass
class XLTConfig:
    """Root configuration."""

    render: RenderOptions = field(default_factory=RenderOptions)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
