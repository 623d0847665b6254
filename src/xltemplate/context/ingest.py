"""Payload ingestion: raw Python data -> tagged context values."""

import dataclasses
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from xltemplate.errors import create_error, get_error_factory

from .types import Context, ContextValue, MappingValue, Scalar, SequenceValue

_SCALAR_SEQUENCES = (str, bytes, bytearray)


def ingest(data: Any) -> ContextValue:
    """Convert a raw payload value into a tagged context value.

    - Mappings (and dataclass instances) become MappingValue; keys are
      converted to str
    - lists, tuples and other non-string sequences become SequenceValue
    - everything else is a Scalar

    Args:
        data: Raw value

    Returns:
        Tagged context value
    """
    if isinstance(data, (Scalar, MappingValue, SequenceValue)):
        return data
    if isinstance(data, Context):
        return MappingValue(data)
    if isinstance(data, Mapping):
        return MappingValue(ingest_context(data))
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        fields = {f.name: getattr(data, f.name) for f in dataclasses.fields(data)}
        return MappingValue(ingest_context(fields))
    if isinstance(data, Sequence) and not isinstance(data, _SCALAR_SEQUENCES):
        return SequenceValue(tuple(ingest(item) for item in data))
    return Scalar(data)


def ingest_context(data: Mapping[Any, Any] | Context | None) -> Context:
    """Convert a raw mapping into a Context."""
    if data is None:
        return Context.empty()
    if isinstance(data, Context):
        return data
    return Context({str(key): ingest(value) for key, value in data.items()})


def select_sheet_context(payload: ContextValue, index: int) -> Context:
    """Pick the context for the sheet at index.

    A mapping payload is shared by every sheet. A sequence payload is
    indexed by sheet position; sheets past its end, or whose entry is not a
    mapping, get an empty context. Any other payload gives every sheet an
    empty context.

    Args:
        payload: Ingested payload
        index: Zero-based sheet index

    Returns:
        Context for that sheet
    """
    if isinstance(payload, MappingValue):
        return payload.context
    if isinstance(payload, SequenceValue):
        if index < len(payload.items):
            entry = payload.items[index]
            if isinstance(entry, MappingValue):
                return entry.context
    return Context.empty()


def load_payload(path: str | Path) -> ContextValue:
    """Read a YAML or JSON data file and ingest it.

    Args:
        path: Path to the data file

    Returns:
        Ingested payload

    Raises:
        XLTError(PAYLOAD_INVALID): If the file can't be read or parsed
    """
    payload_path = Path(path)
    try:
        with payload_path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise create_error(
            "PAYLOAD_INVALID",
            detail=f"Cannot read data file {payload_path}: {e.strerror or e}",
        ) from e
    except yaml.YAMLError as e:
        raise get_error_factory().from_exception(e) from e

    if data is None:
        return MappingValue(Context.empty())
    if not isinstance(data, (Mapping, list)):
        raise create_error(
            "PAYLOAD_INVALID",
            detail=f"Data file {payload_path} must hold a mapping or a list of mappings",
        )
    return ingest(data)
