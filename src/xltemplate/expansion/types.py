"""Directive types recognized on template rows."""

from dataclasses import dataclass
from typing import ClassVar, Union

from xltemplate.types import DirectiveKind


@dataclass(frozen=True)
class RangeStart:
    """Opens a block repeated once per mapping in property_name."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.RANGE_START
    property_name: str


@dataclass(frozen=True)
class RangeEnd:
    """Closes the innermost open range block."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.RANGE_END


@dataclass(frozen=True)
class ListField:
    """Marks a row repeated once per element of property_name."""

    kind: ClassVar[DirectiveKind] = DirectiveKind.LIST_FIELD
    property_name: str


Directive = Union[RangeStart, RangeEnd, ListField]
