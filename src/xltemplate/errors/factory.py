"""Error factory for creating XLTErrors from any exception type."""

from typing import Any

from .errors import XLTError
from .matchers import ErrorMatcherChain
from .registry import ErrorRegistry


class ErrorFactory:
    """Creates XLTErrors from any exception type."""

    def __init__(
        self,
        registry: ErrorRegistry | None = None,
        matcher_chain: ErrorMatcherChain | None = None,
    ):
        """Initialize error factory.

        Args:
            registry: Error registry (defaults to new ErrorRegistry())
            matcher_chain: Matcher chain (defaults to new ErrorMatcherChain())
        """
        self.registry = registry or ErrorRegistry()
        self.matcher_chain = matcher_chain or ErrorMatcherChain()

    def from_exception(
        self,
        error: Exception,
        sheet: str | None = None,
        cell: str | None = None,
    ) -> XLTError:
        """Convert any exception to XLTError.

        Args:
            error: Exception to convert
            sheet: Optional sheet title
            cell: Optional cell coordinate

        Returns:
            XLTError instance
        """
        # If already an XLTError, just add context
        if isinstance(error, XLTError):
            return error.with_context(sheet=sheet, cell=cell)

        match_result = self.matcher_chain.match(error)

        context = match_result.context.copy()
        if sheet:
            context["sheet"] = sheet
        if cell:
            context["cell"] = cell

        return self.registry.create(code=match_result.code, context=context)

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> XLTError:
        """Create XLTError directly from code.

        Args:
            code: Error code
            context: Context variables for template interpolation
            **kwargs: Additional context variables

        Returns:
            XLTError instance
        """
        merged_context = dict(context or {})
        merged_context.update(kwargs)

        return self.registry.create(code=code, context=merged_context)


# Convenience singleton
_default_factory: ErrorFactory | None = None


def get_error_factory() -> ErrorFactory:
    """Get default error factory singleton.

    Returns:
        Default ErrorFactory instance
    """
    global _default_factory  # noqa: PLW0603
    if _default_factory is None:
        _default_factory = ErrorFactory()
    return _default_factory


def create_error(code: str, **context: Any) -> XLTError:
    """Convenience function to create error.

    Args:
        code: Error code
        **context: Context variables for template interpolation

    Returns:
        XLTError instance
    """
    return get_error_factory().create(code, context)
