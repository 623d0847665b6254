"""xltemplate configuration loader."""

import os
import re
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from xltemplate.errors import create_error
from xltemplate.types import LogFormat, LogLevel, ValidationIssue, ValidationResult

from .models import LoggingConfig, RenderOptions, XLTConfig

CONFIG_PATH_ENV = "XLTEMPLATE_CONFIG_PATH"
LOCAL_CONFIG_NAME = "xltemplate.yaml"

_SECTION_KEYS = {
    "render": {"wrap_text_in_all_cells"},
    "logging": {"level", "format", "show_context", "truncate_at", "components"},
}


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        XLTError: If required var not set
    """
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)
        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        if operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        raise create_error(
            "CONFIG_INVALID",
            detail=f"Required environment variable {var_name} not set",
        )

    return re.sub(pattern, replacer, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    else:
        return data


def _text(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _as_bool(value: Any) -> Any:
    """Accept the string forms env var substitution produces."""
    if isinstance(value, str) and value.lower() in ("true", "false", "1", "0", "yes", "no"):
        return value.lower() in ("true", "1", "yes")
    return value


class ConfigLoader:
    """Load and validate xltemplate configuration."""

    def __init__(self, logger: Any = None):
        """Initialize config loader.

        Args:
            logger: Optional XLTLogger instance
        """
        self._config: XLTConfig | None = None
        self._config_path: Path | None = None
        self._logger = logger

    def load(self, path: str | Path | None = None, use_defaults: bool = True) -> XLTConfig:
        """Load configuration from file.

        Resolution order if path not specified:
        1. XLTEMPLATE_CONFIG_PATH environment variable
        2. ./xltemplate.yaml
        3. ~/.xltemplate/config.yaml
        4. If use_defaults=True and no file found, use default configuration

        Args:
            path: Optional path to config file
            use_defaults: If True, use default config when no file found

        Returns:
            Loaded XLTConfig instance

        Raises:
            XLTError: If file not found (when use_defaults=False) or invalid
        """
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            if use_defaults:
                return self.load_defaults()
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration root must be a mapping",
            )

        data = _resolve_env_vars_recursive(data)
        return self.load_from_dict(data, config_path)

    def load_defaults(self) -> XLTConfig:
        """Load default configuration without a file."""
        return self.load_from_dict({})

    def load_from_dict(self, data: dict[str, Any], config_path: Path | None = None) -> XLTConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded XLTConfig instance

        Raises:
            XLTError: If configuration is invalid
        """
        validation = self.validate(data)
        if not validation.valid:
            error_messages = [f"- {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )

        config = self._dict_to_config(data)
        self._config = config
        self._config_path = config_path
        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        for key, section in data.items():
            if key not in _SECTION_KEYS:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )
                continue
            if not isinstance(section, dict):
                errors.append(
                    ValidationIssue(path=key, message=f"{key} must be a dictionary")
                )
                continue
            for sub_key in section:
                if sub_key not in _SECTION_KEYS[key]:
                    warnings.append(
                        ValidationIssue(
                            path=f"{key}.{sub_key}",
                            message=f"Unknown configuration key: {key}.{sub_key}",
                            severity="warning",
                        )
                    )

        render = data.get("render")
        if isinstance(render, dict) and "wrap_text_in_all_cells" in render:
            if not isinstance(_as_bool(render["wrap_text_in_all_cells"]), bool):
                errors.append(
                    ValidationIssue(
                        path="render.wrap_text_in_all_cells",
                        message="wrap_text_in_all_cells must be a boolean",
                    )
                )

        logging_section = data.get("logging")
        if isinstance(logging_section, dict):
            level = logging_section.get("level")
            if level is not None and _text(level).upper() not in LogLevel.__members__:
                errors.append(
                    ValidationIssue(
                        path="logging.level",
                        message=f"level must be one of {', '.join(LogLevel.__members__)}",
                    )
                )
            fmt = logging_section.get("format")
            if fmt is not None and _text(fmt).lower() not in {f.value for f in LogFormat}:
                errors.append(
                    ValidationIssue(
                        path="logging.format",
                        message="format must be 'colored' or 'json'",
                    )
                )
            truncate_at = logging_section.get("truncate_at")
            if truncate_at is not None and (
                not isinstance(truncate_at, int) or isinstance(truncate_at, bool) or truncate_at <= 0
            ):
                errors.append(
                    ValidationIssue(
                        path="logging.truncate_at",
                        message="truncate_at must be a positive integer",
                    )
                )
            components = logging_section.get("components")
            if components is not None and not isinstance(components, dict):
                errors.append(
                    ValidationIssue(
                        path="logging.components",
                        message="components must be a dictionary",
                    )
                )

        return ValidationResult(valid=True, errors=errors, warnings=warnings)

    def get(self) -> XLTConfig:
        """Get current configuration.

        Raises:
            XLTError: If configuration not loaded
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config

    def _resolve_config_path(self) -> Path:
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path)

        local_path = Path(LOCAL_CONFIG_NAME)
        if local_path.exists():
            return local_path

        home_path = Path.home() / ".xltemplate" / "config.yaml"
        if home_path.exists():
            return home_path

        # Not found - use local path as default
        return local_path

    def _dict_to_config(self, data: dict[str, Any]) -> XLTConfig:
        config = XLTConfig()

        render = data.get("render") or {}
        if "wrap_text_in_all_cells" in render:
            config.render = RenderOptions(
                wrap_text_in_all_cells=_as_bool(render["wrap_text_in_all_cells"])
            )

        logging_section = data.get("logging") or {}
        defaults = LoggingConfig()
        components = dict(defaults.components)
        components.update(
            {name: bool(_as_bool(enabled)) for name, enabled in (logging_section.get("components") or {}).items()}
        )
        config.logging = LoggingConfig(
            level=LogLevel(_text(logging_section.get("level", defaults.level)).upper()),
            format=LogFormat(_text(logging_section.get("format", defaults.format)).lower()),
            show_context=bool(_as_bool(logging_section.get("show_context", defaults.show_context))),
            truncate_at=logging_section.get("truncate_at", defaults.truncate_at),
            components=components,
        )
        return config
