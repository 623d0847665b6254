"""Shared types for xltemplate.

Import from here rather than submodules:
    from xltemplate.types import LogLevel, ValidationResult
"""

from .enums import DirectiveKind, LogFormat, LogLevel, ValueKind
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Enums
    "LogLevel",
    "LogFormat",
    "DirectiveKind",
    "ValueKind",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
