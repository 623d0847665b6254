"""Template Engine implementation."""

import html
import json
import re
from typing import Any

from xltemplate.context import Context, MappingValue, SequenceValue
from xltemplate.context.types import ContextValue
from xltemplate.errors import create_error

from .filters import FILTERS
from .parser import (
    TEMPLATE_PATTERN,
    has_templates,
    is_pure_template,
    iter_tokens,
    validate_syntax,
)

_INDEX_PATTERN = re.compile(r"^(\w*)\[(\d+)\]$")


def format_value(value: Any) -> str:
    """Convert a resolved value to its text form.

    None renders as "", booleans as "true"/"false", integral floats without
    a trailing ".0", mappings and lists as JSON.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, default=str)
    return str(value)


class TemplateEngine:
    """Render {{ }} expressions in a single cell's text.

    Supports:
    - Variable access: {{ total }}
    - Nested access: {{ employee.address.city }}, {{ items[0] }}, {{ items.0 }}
    - Raw output: {{{ note }}} (no HTML escaping)
    - Filters: {{ items | length }}, {{ x | default('n/a') }}, {{ when | date('%d.%m.%Y') }}

    Undefined variables render as empty text.

    Does NOT support:
    - Block helpers ({{#each}}, {{#if}})
    - Arbitrary Python expressions
    - Function calls
    """

    def __init__(self) -> None:
        """Initialize template engine."""
        self._filters = FILTERS

    def render(self, template: Any, context: Context) -> Any:
        """Render template expressions in a value.

        Non-string values are returned unchanged.

        Args:
            template: Value that may contain {{ }} expressions
            context: Active context

        Returns:
            Rendered value (type preserved for pure templates)

        Raises:
            XLTError(TEMPLATE_ERROR) if the template is invalid
        """
        if not isinstance(template, str):
            return template

        errors = validate_syntax(template)
        if errors:
            raise create_error("TEMPLATE_ERROR", detail="; ".join(errors))

        if not has_templates(template):
            return template

        return self.render_string(template, context)

    def render_string(self, template_str: str, context: Context) -> Any:
        """Render a single template string.

        If string is entirely a template (e.g., "{{{ count }}}"),
        returns the actual type (int, date, list, etc.).

        If string contains mixed content (e.g., "Total: {{ count }}"),
        returns string.

        Args:
            template_str: String with {{ }} templates
            context: Active context

        Returns:
            Rendered value

        Raises:
            XLTError(TEMPLATE_ERROR) on rendering errors
        """
        if is_pure_template(template_str):
            token = next(iter_tokens(template_str.strip()))
            value = self._evaluate_expression(token.expression, context)
            if isinstance(value, str) and not token.raw:
                return html.escape(value)
            return value

        def substitute(match: re.Match[str]) -> str:
            raw = match.group(1) is not None
            expression = (match.group(1) if raw else match.group(2)).strip()
            text = format_value(self._evaluate_expression(expression, context))
            return text if raw else html.escape(text)

        return TEMPLATE_PATTERN.sub(substitute, template_str)

    def validate(self, template: str) -> list[str]:
        """Validate template syntax without rendering.

        Does NOT check variable existence.

        Returns:
            List of error messages (empty if valid)
        """
        return validate_syntax(template)

    def _evaluate_expression(self, expression: str, context: Context) -> Any:
        """Evaluate a template expression.

        Args:
            expression: Expression to evaluate (without braces)
            context: Active context

        Returns:
            Evaluated value

        Raises:
            XLTError(TEMPLATE_ERROR) on evaluation errors
        """
        parts = [p.strip() for p in expression.split("|")]
        var_path = parts[0]
        filters = parts[1:]

        resolved = self._resolve_variable(var_path, context)
        value = resolved.to_python() if resolved is not None else None

        for filter_expr in filters:
            value = self._apply_filter(filter_expr, value)

        return value

    def _resolve_variable(self, path: str, context: Context) -> ContextValue | None:
        """Resolve a variable path like 'employee.name' or 'items[0]'.

        "this" as the first segment refers to the whole active context.

        Args:
            path: Dot-separated path
            context: Active context

        Returns:
            Resolved value, or None when any segment is missing
        """
        current: ContextValue | None = MappingValue(context)
        segments = path.split(".")
        if segments[0] == "this":
            segments = segments[1:]

        for segment in segments:
            index_match = _INDEX_PATTERN.match(segment)
            if index_match:
                key, index = index_match.group(1), int(index_match.group(2))
                if key:
                    current = self._lookup(current, key)
                current = self._index(current, index)
            elif segment.isdecimal() and isinstance(current, SequenceValue):
                current = self._index(current, int(segment))
            else:
                current = self._lookup(current, segment)
            if current is None:
                return None

        return current

    @staticmethod
    def _lookup(current: ContextValue | None, key: str) -> ContextValue | None:
        if isinstance(current, MappingValue):
            return current.context.get(key)
        return None

    @staticmethod
    def _index(current: ContextValue | None, index: int) -> ContextValue | None:
        if isinstance(current, SequenceValue) and index < len(current.items):
            return current.items[index]
        return None

    def _apply_filter(self, filter_expr: str, value: Any) -> Any:
        """Apply a filter to a value.

        Args:
            filter_expr: Filter expression (e.g., "default(0)" or "length")
            value: Value to filter

        Returns:
            Filtered value

        Raises:
            XLTError(TEMPLATE_ERROR) if filter is unknown or fails
        """
        if "(" in filter_expr:
            if not filter_expr.endswith(")"):
                raise create_error(
                    "TEMPLATE_ERROR",
                    detail=f"Unbalanced parentheses in filter: {filter_expr}",
                )
            filter_name = filter_expr[: filter_expr.index("(")].strip()
            args_str = filter_expr[filter_expr.index("(") + 1 : filter_expr.rindex(")")].strip()
            args = [self._parse_filter_arg(args_str)] if args_str else []
        else:
            filter_name = filter_expr.strip()
            args = []

        if filter_name not in self._filters:
            raise create_error(
                "TEMPLATE_ERROR",
                detail=(
                    f"Unknown filter '{filter_name}' "
                    f"(supported: {', '.join(self._filters.keys())})"
                ),
            )

        filter_func = self._filters[filter_name]
        try:
            return filter_func(value, *args)
        except (TypeError, ValueError) as e:
            raise create_error(
                "TEMPLATE_ERROR",
                detail=f"Filter '{filter_name}' failed: {e}",
            ) from e

    def _parse_filter_arg(self, arg_str: str) -> Any:
        """Parse a filter argument.

        Returns:
            Parsed value (str, int, float, or bool)
        """
        arg_str = arg_str.strip()

        # String literal
        if (arg_str.startswith("'") and arg_str.endswith("'")) or (
            arg_str.startswith('"') and arg_str.endswith('"')
        ):
            return arg_str[1:-1]

        if arg_str == "true":
            return True
        if arg_str == "false":
            return False

        try:
            if "." in arg_str:
                return float(arg_str)
            return int(arg_str)
        except ValueError:
            return arg_str
