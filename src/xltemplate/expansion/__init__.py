"""Row expansion: directive scanning, range matching and the expansion engine."""

from .engine import RowExpander, escape_directives
from .ranges import find_range_end
from .scanner import classify, classify_list_field, classify_range_end, classify_range_start
from .types import Directive, ListField, RangeEnd, RangeStart

__all__ = [
    "RowExpander",
    "escape_directives",
    "find_range_end",
    "classify",
    "classify_range_start",
    "classify_range_end",
    "classify_list_field",
    "Directive",
    "RangeStart",
    "RangeEnd",
    "ListField",
]
