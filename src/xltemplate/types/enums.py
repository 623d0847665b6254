"""Shared enumerations for xltemplate."""

from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    COLORED = "colored"
    JSON = "json"


class DirectiveKind(str, Enum):
    """Control directive found on a template row."""

    RANGE_START = "range_start"
    RANGE_END = "range_end"
    LIST_FIELD = "list_field"


class ValueKind(str, Enum):
    """Shape of a context value."""

    SCALAR = "scalar"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
