"""Context value types.

Payload data is converted once, at ingestion, into a small tagged tree:

- Scalar: str, numbers, bools, dates, None and any opaque object
- MappingValue: a nested Context
- SequenceValue: an ordered tuple of values

Nothing downstream inspects raw Python types again.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Union

from xltemplate.types import ValueKind


@dataclass(frozen=True)
class Scalar:
    """A leaf value."""

    kind: ClassVar[ValueKind] = ValueKind.SCALAR
    value: Any

    def to_python(self) -> Any:
        return self.value


@dataclass(frozen=True)
class MappingValue:
    """A nested context."""

    kind: ClassVar[ValueKind] = ValueKind.MAPPING
    context: "Context"

    def to_python(self) -> dict[str, Any]:
        return self.context.to_python()


@dataclass(frozen=True)
class SequenceValue:
    """An ordered sequence of values."""

    kind: ClassVar[ValueKind] = ValueKind.SEQUENCE
    items: tuple["ContextValue", ...]

    def is_range(self) -> bool:
        """True when every item is a mapping (vacuously true when empty)."""
        return all(isinstance(item, MappingValue) for item in self.items)

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]

    def __len__(self) -> int:
        return len(self.items)


ContextValue = Union[Scalar, MappingValue, SequenceValue]


class Context(Mapping[str, ContextValue]):
    """Immutable mapping of property names to context values.

    Scopes are never modified in place: merge() and bind() return new
    contexts and leave the receiver untouched.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, ContextValue] | None = None):
        self._entries: dict[str, ContextValue] = dict(entries or {})

    @classmethod
    def empty(cls) -> "Context":
        return cls()

    def __getitem__(self, key: str) -> ContextValue:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"Context({self.to_python()!r})"

    def merge(self, local: "Context") -> "Context":
        """Return a child scope: this context's keys overlaid with local's.

        Args:
            local: Keys of the inner scope; they shadow keys of self

        Returns:
            New Context
        """
        entries = dict(self._entries)
        entries.update(local._entries)
        return Context(entries)

    def bind(self, name: str, value: ContextValue) -> "Context":
        """Return a child scope with a single key rebound."""
        entries = dict(self._entries)
        entries[name] = value
        return Context(entries)

    def to_python(self) -> dict[str, Any]:
        """Unwrap into plain dicts, lists and scalars."""
        return {key: value.to_python() for key, value in self._entries.items()}
