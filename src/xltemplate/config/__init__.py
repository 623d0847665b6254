"""xltemplate configuration."""

from .loader import ConfigLoader, resolve_env_vars
from .models import LoggingConfig, RenderOptions, XLTConfig

__all__ = [
    "ConfigLoader",
    "resolve_env_vars",
    "XLTConfig",
    "RenderOptions",
    "LoggingConfig",
]
