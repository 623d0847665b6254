"""xltemplate logging - Hierarchical colored logging for report rendering."""

from .colors import (
    CYAN,
    GREEN,
    LIGHT_BLUE,
    MAGENTA,
    RED,
    RESET,
    YELLOW,
)
from .logger import (
    LogConfig,
    ReportLogger,
    SheetLogger,
    XLTLogger,
)

__all__ = [
    # Logger classes
    "XLTLogger",
    "ReportLogger",
    "SheetLogger",
    "LogConfig",
    # Colors
    "RESET",
    "GREEN",
    "RED",
    "YELLOW",
    "LIGHT_BLUE",
    "CYAN",
    "MAGENTA",
]
