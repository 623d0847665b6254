"""Error registry for creating errors from templates."""

from typing import Any

from .errors import ErrorCategory, ErrorTemplate, XLTError


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code.

        Args:
            code: Error code to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error codes."""
        return list(self._templates.keys())

    def register(self, template: ErrorTemplate) -> None:
        """Register (or replace) an error template."""
        self._templates[template.code] = template

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: XLTError | None = None,
    ) -> XLTError:
        """Create error instance from template + context.

        Args:
            code: Error code
            context: Context variables for template interpolation
            cause: Optional cause error

        Returns:
            XLTError instance

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = self._interpolate(template.message_template, context)
        # An explicit detail always wins over the template's generic one
        detail = context.get("detail") or self._interpolate(template.detail_template, context)
        suggestion = self._interpolate(template.suggestion_template, context)

        if message is None:
            message = f"Error {code}"

        return XLTError(
            code=template.code,
            category=template.category,
            message=message,
            detail=detail,
            suggestion=suggestion,
            sheet=context.get("sheet"),
            cell=context.get("cell"),
            property_name=context.get("property_name"),
            cause=cause if cause is not None else context.get("cause"),
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except KeyError:
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        # TEMPLATE Errors
        self._templates["RANGE_NOT_CLOSED"] = ErrorTemplate(
            code="RANGE_NOT_CLOSED",
            category=ErrorCategory.TEMPLATE,
            message_template="End of range '{property_name}' not found",
            detail_template="No matching '{{{{ end }}}}' row follows the range start in its scope",
            suggestion_template="Add an '{{{{ end }}}}' row in the first column after the range body",
        )

        self._templates["TEMPLATE_ERROR"] = ErrorTemplate(
            code="TEMPLATE_ERROR",
            category=ErrorCategory.TEMPLATE,
            message_template="Template expression failed",
            detail_template="The expression could not be parsed or evaluated",
            suggestion_template="Check template syntax, filter names and variable paths",
        )

        self._templates["EVALUATION_ERROR"] = ErrorTemplate(
            code="EVALUATION_ERROR",
            category=ErrorCategory.TEMPLATE,
            message_template="Failed to render cell",
            detail_template="The cell template was rejected by the expression evaluator",
            suggestion_template="Fix the placeholder text in the reported cell",
        )

        # CONTEXT Errors
        self._templates["INVALID_RANGE_CONTEXT"] = ErrorTemplate(
            code="INVALID_RANGE_CONTEXT",
            category=ErrorCategory.CONTEXT,
            message_template="Not expected context property for range '{property_name}'",
            detail_template="The property is missing or is not a list of mappings",
            suggestion_template="Provide '{property_name}' as a list of objects in the data",
        )

        self._templates["PAYLOAD_INVALID"] = ErrorTemplate(
            code="PAYLOAD_INVALID",
            category=ErrorCategory.CONTEXT,
            message_template="Invalid data payload",
            detail_template="The data file could not be read",
            suggestion_template="Provide a YAML or JSON mapping, or a list of mappings",
        )

        # DOCUMENT Errors
        self._templates["DOCUMENT_FORMAT_ERROR"] = ErrorTemplate(
            code="DOCUMENT_FORMAT_ERROR",
            category=ErrorCategory.DOCUMENT,
            message_template="Template is not a readable workbook",
            detail_template="The input could not be opened as an .xlsx workbook",
            suggestion_template="Check that the template is a valid .xlsx file",
        )

        self._templates["CELL_VALUE_INVALID"] = ErrorTemplate(
            code="CELL_VALUE_INVALID",
            category=ErrorCategory.DOCUMENT,
            message_template="Rendered value cannot be stored in a cell",
            detail_template="The value has characters or a type a worksheet cannot hold",
            suggestion_template="Strip control characters and drop timezones before rendering",
        )

        # RENDER Errors
        self._templates["NO_REPORT_GENERATED"] = ErrorTemplate(
            code="NO_REPORT_GENERATED",
            category=ErrorCategory.RENDER,
            message_template="Report was not generated",
            detail_template="Save or write was requested before a successful render",
            suggestion_template="Call render() first and check that it succeeded",
        )

        self._templates["NO_TEMPLATE_LOADED"] = ErrorTemplate(
            code="NO_TEMPLATE_LOADED",
            category=ErrorCategory.RENDER,
            message_template="No template loaded",
            detail_template="Render was requested before a template was read",
            suggestion_template="Use read_template() or from_binary() first",
        )

        # SYSTEM Errors
        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.SYSTEM,
            message_template="Invalid configuration",
            detail_template="The xltemplate configuration is invalid",
            suggestion_template="Check the configuration file and fix errors",
        )

        self._templates["INTERNAL_ERROR"] = ErrorTemplate(
            code="INTERNAL_ERROR",
            category=ErrorCategory.SYSTEM,
            message_template="Internal xltemplate error",
            detail_template="An unexpected {error_type} occurred",
            suggestion_template="Check the logs and report this issue",
        )
