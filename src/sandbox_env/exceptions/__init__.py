"""Exceptions for sandbox_env.

Usage:
    from sandbox_env.exceptions import (
        SandboxEnvError,
        ValidationError,
        ConfigurationError,
    )
"""

from sandbox_env.exceptions.base import (
    ConfigurationError,
    SandboxEnvError,
    ValidationError,
)

__all__ = [
    "SandboxEnvError",
    "ValidationError",
    "ConfigurationError",
]
