"""Template parsing utilities."""

import re
from collections.abc import Iterator
from dataclasses import dataclass

# {{{ raw }}} is tried before {{ escaped }} at every position
TEMPLATE_PATTERN = re.compile(r"\{\{\{(.*?)\}\}\}|\{\{(.*?)\}\}", re.DOTALL)

_BLOCK_PREFIXES = ("#", "/", "^", ">", "!", "else")
_PATH_PATTERN = re.compile(r"^[\w]+(\[\d+\])?(\.[\w]+(\[\d+\])?)*$")
_CONTROL_KEYWORDS = ("if", "for", "while", "import")


@dataclass(frozen=True)
class TemplateToken:
    """A single {{ }} or {{{ }}} occurrence."""

    start: int
    end: int
    expression: str  # Stripped text between the braces
    raw: bool  # True for {{{ }}}, whose output is not HTML-escaped


def iter_tokens(text: str) -> Iterator[TemplateToken]:
    """Yield every template expression in text, left to right."""
    for match in TEMPLATE_PATTERN.finditer(text):
        raw = match.group(1) is not None
        body = match.group(1) if raw else match.group(2)
        yield TemplateToken(
            start=match.start(),
            end=match.end(),
            expression=body.strip(),
            raw=raw,
        )


def extract_templates(text: str) -> list[str]:
    """Extract all template expressions from text.

    Args:
        text: Text to search

    Returns:
        List of template expressions (without braces)
    """
    return [token.expression for token in iter_tokens(text)]


def has_templates(text: str) -> bool:
    """Check if text contains any {{ }} templates."""
    return bool(TEMPLATE_PATTERN.search(text))


def is_pure_template(text: str) -> bool:
    """Check if text is entirely a single template.

    E.g., "{{ amount }}" is pure, "Total: {{ amount }}" is not.

    Args:
        text: Text to check

    Returns:
        True if text is a single template with no surrounding text
    """
    stripped = text.strip()
    tokens = list(iter_tokens(stripped))
    if len(tokens) != 1:
        return False
    return tokens[0].start == 0 and tokens[0].end == len(stripped)


def validate_syntax(text: str) -> list[str]:
    """Validate template syntax without rendering.

    Args:
        text: Text to validate

    Returns:
        List of error messages (empty if valid)
    """
    errors: list[str] = []

    remainder = TEMPLATE_PATTERN.sub("", text)
    if "{{" in remainder:
        errors.append(f"Unclosed template expression in: {text}")

    for template in extract_templates(text):
        if not template:
            errors.append("Empty template expression")
            continue

        if template.startswith(_BLOCK_PREFIXES):
            errors.append(f"Block helpers are not supported: {template}")
            continue

        parts = [p.strip() for p in template.split("|")]
        var_part = parts[0]

        for filter_part in parts[1:]:
            if not filter_part:
                errors.append(f"Empty filter in template: {template}")

        if not var_part:
            errors.append(f"Missing variable before filter: {template}")
            continue

        if "(" in var_part:
            errors.append(f"Function calls not supported: {template}")
            continue

        if any(op in var_part for op in ["+", "-", "*", "/", "%"]):
            errors.append(f"Arithmetic expressions not supported: {template}")
            continue

        # Word boundaries so "format" or "ifrs" are not mistaken for keywords
        if any(re.search(rf"\b{kw}\b", var_part) for kw in _CONTROL_KEYWORDS):
            errors.append(f"Control flow not supported: {template}")
            continue

        if not _PATH_PATTERN.match(var_part):
            errors.append(f"Invalid variable path: {var_part}")

    return errors
