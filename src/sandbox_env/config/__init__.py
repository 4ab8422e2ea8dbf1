"""Configuration for sandbox_env itself.

Example:
    from sandbox_env.config import get_settings

    settings = get_settings()
    settings.resolver.passthrough  # extra host variables to forward
"""

from sandbox_env.config.env_loader import EnvLoader
from sandbox_env.config.settings import (
    DEFAULT_PREFIX,
    LogSettings,
    ResolverSettings,
    Settings,
    get_settings,
    reset_settings,
)

__all__ = [
    "EnvLoader",
    "DEFAULT_PREFIX",
    "LogSettings",
    "ResolverSettings",
    "Settings",
    "get_settings",
    "reset_settings",
]
