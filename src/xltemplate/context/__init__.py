"""Data contexts: tagged payload values, scoping and resolution."""

from .ingest import ingest, ingest_context, load_payload, select_sheet_context
from .resolver import is_array_property, merge_contexts, resolve_range_contexts
from .types import Context, ContextValue, MappingValue, Scalar, SequenceValue

__all__ = [
    "Context",
    "ContextValue",
    "Scalar",
    "MappingValue",
    "SequenceValue",
    "ingest",
    "ingest_context",
    "load_payload",
    "select_sheet_context",
    "resolve_range_contexts",
    "is_array_property",
    "merge_contexts",
]
