"""xltemplate error types."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Error source categories."""

    TEMPLATE = "TEMPLATE"
    CONTEXT = "CONTEXT"
    DOCUMENT = "DOCUMENT"
    RENDER = "RENDER"
    SYSTEM = "SYSTEM"


@dataclass
class XLTError(Exception):
    """Structured error with context. Base exception for all xltemplate errors."""

    # Identity
    code: str  # e.g., "RANGE_NOT_CLOSED"
    category: ErrorCategory

    # Messages
    message: str  # Human-readable summary
    detail: str | None = None  # Extended explanation
    suggestion: str | None = None  # Actionable fix

    # Context
    sheet: str | None = None  # Sheet being rendered
    cell: str | None = None  # Source cell coordinate, e.g. "B3"
    property_name: str | None = None  # Context property involved

    # Error chain
    cause: "XLTError | None" = None

    # Metadata
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        """Set Exception message."""
        super().__init__(self.message)

    def __str__(self) -> str:
        location = ""
        if self.sheet and self.cell:
            location = f" [{self.sheet}!{self.cell}]"
        elif self.sheet:
            location = f" [{self.sheet}]"
        text = f"{self.message}{location}"
        if self.detail:
            text += f": {self.detail}"
        return text

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary.

        Returns:
            Dictionary representation of the error
        """
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "detail": self.detail,
            "suggestion": self.suggestion,
            "sheet": self.sheet,
            "cell": self.cell,
            "property_name": self.property_name,
            "timestamp": self.timestamp.isoformat(),
            "cause": self.cause.to_dict() if self.cause else None,
        }

    def with_context(
        self,
        sheet: str | None = None,
        cell: str | None = None,
        property_name: str | None = None,
    ) -> "XLTError":
        """Return copy with additional context.

        Args:
            sheet: Optional sheet title
            cell: Optional cell coordinate
            property_name: Optional context property

        Returns:
            New XLTError instance with updated context
        """
        return XLTError(
            code=self.code,
            category=self.category,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
            sheet=sheet or self.sheet,
            cell=cell or self.cell,
            property_name=property_name or self.property_name,
            cause=self.cause,
            timestamp=self.timestamp,
        )


@dataclass
class ErrorTemplate:
    """Template for creating errors."""

    code: str
    category: ErrorCategory
    message_template: str  # "Range '{property_name}' is not closed"
    detail_template: str | None = None
    suggestion_template: str | None = None


@dataclass
class MatchResult:
    """Result of matching an exception."""

    code: str
    context: dict[str, Any]


class ErrorMatcher(ABC):
    """Base class for exception matchers."""

    @abstractmethod
    def matches(self, error: Exception) -> bool:
        """Check if this matcher handles the error.

        Args:
            error: Exception to check

        Returns:
            True if this matcher can handle the error
        """

    @abstractmethod
    def extract(self, error: Exception) -> MatchResult:
        """Extract error info from the exception.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with error code and context
        """
