"""Template expression evaluator for cell text."""

from .engine import TemplateEngine, format_value
from .parser import extract_templates, has_templates, is_pure_template, validate_syntax

__all__ = [
    "TemplateEngine",
    "format_value",
    "extract_templates",
    "has_templates",
    "is_pure_template",
    "validate_syntax",
]
