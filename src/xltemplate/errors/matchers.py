"""Error matchers for converting foreign exceptions to XLTErrors."""

import zipfile
from typing import Any

import yaml
from openpyxl.utils.exceptions import IllegalCharacterError, InvalidFileException

from .errors import ErrorMatcher, MatchResult


class DocumentFormatMatcher(ErrorMatcher):
    """Matches errors raised while opening a workbook."""

    def matches(self, error: Exception) -> bool:
        """Check if error comes from a malformed or unsupported workbook.

        Args:
            error: Exception to check

        Returns:
            True if error is a workbook format error
        """
        return isinstance(error, (zipfile.BadZipFile, InvalidFileException))

    def extract(self, error: Exception) -> MatchResult:
        """Extract workbook format error info.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with DOCUMENT_FORMAT_ERROR code
        """
        return MatchResult(
            code="DOCUMENT_FORMAT_ERROR",
            context={"detail": str(error) or type(error).__name__},
        )


class CellValueMatcher(ErrorMatcher):
    """Matches values openpyxl refuses to store in a cell."""

    def matches(self, error: Exception) -> bool:
        return isinstance(error, IllegalCharacterError)

    def extract(self, error: Exception) -> MatchResult:
        context: dict[str, Any] = {}
        if str(error):
            context["detail"] = f"Illegal characters in value: {error}"
        return MatchResult(code="CELL_VALUE_INVALID", context=context)


class PayloadMatcher(ErrorMatcher):
    """Matches YAML/JSON parse errors from payload and config files."""

    def matches(self, error: Exception) -> bool:
        return isinstance(error, yaml.YAMLError)

    def extract(self, error: Exception) -> MatchResult:
        return MatchResult(
            code="PAYLOAD_INVALID",
            context={"detail": f"Invalid YAML/JSON: {error}"},
        )


class GenericErrorMatcher(ErrorMatcher):
    """Fallback matcher for any exception."""

    def matches(self, error: Exception) -> bool:
        """Always matches.

        Args:
            error: Exception to check

        Returns:
            Always True (fallback matcher)
        """
        return True

    def extract(self, error: Exception) -> MatchResult:
        """Extract generic error info.

        Args:
            error: Exception to extract from

        Returns:
            MatchResult with INTERNAL_ERROR code
        """
        return MatchResult(
            code="INTERNAL_ERROR",
            context={
                "detail": str(error),
                "error_type": type(error).__name__,
            },
        )


class ErrorMatcherChain:
    """Ordered chain of matchers. First match wins."""

    def __init__(self) -> None:
        """Initialize matcher chain with built-in matchers."""
        self.matchers: list[ErrorMatcher] = []
        self._load_builtin_matchers()

    def match(self, error: Exception) -> MatchResult:
        """Find first matching matcher and extract result.

        Args:
            error: Exception to match

        Returns:
            MatchResult from first matching matcher
        """
        for matcher in self.matchers:
            if matcher.matches(error):
                return matcher.extract(error)

        # Should never reach here due to GenericErrorMatcher
        return MatchResult(code="INTERNAL_ERROR", context={"detail": str(error)})

    def _load_builtin_matchers(self) -> None:
        """Load built-in matchers in priority order."""
        # Order matters - more specific matchers first
        self.matchers = [
            DocumentFormatMatcher(),
            CellValueMatcher(),
            PayloadMatcher(),
            GenericErrorMatcher(),  # Fallback - must be last
        ]
