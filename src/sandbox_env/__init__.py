"""sandbox_env - resolve the environment injected into a sandbox container.

This package provides:
- environment: `.env` parsing and the precedence engine that merges host,
  credential, file and config sources
- config: Settings for the package itself (python-dotenv backed)
- logger: Structured logging with secret redaction
- exceptions: Exception classes with structured error info
"""

__version__ = "1.0.0"

from dataclasses import replace
from typing import Mapping, Optional

from sandbox_env.config import (
    LogSettings,
    ResolverSettings,
    Settings,
    get_settings,
    reset_settings,
)
from sandbox_env.environment import (
    ClaudeCredentials,
    ClaudeCredentialType,
    DiscoveredCredentials,
    EnvFileDiagnostic,
    EnvFileParser,
    EnvironmentResolver,
    GitHubCredentials,
    ResolutionConfig,
    ResolvedEnvironment,
    parse_env_file,
)
from sandbox_env.exceptions import (
    ConfigurationError,
    SandboxEnvError,
    ValidationError,
)
from sandbox_env.logger import (
    Logger,
    StructuredLogger,
    create_logger,
    get_logger,
)


def resolve_environment(
    config: ResolutionConfig,
    credentials: Optional[DiscoveredCredentials] = None,
    host_env: Optional[Mapping[str, str]] = None,
    settings: Optional[Settings] = None,
) -> ResolvedEnvironment:
    """Resolve a sandbox environment using the package settings.

    Settings supply extra passthrough names, a fallback `.env` path for
    configs that name none, and the logger configuration.

    Args:
        config: Sandbox configuration
        credentials: Discovered credentials, if any
        host_env: Host environment snapshot (defaults to ``os.environ``)
        settings: Package settings (defaults to :func:`get_settings`)

    Returns:
        ``KEY=VALUE`` entries ready to hand to the container runtime
    """
    settings = settings or get_settings()

    if config.env_file is None and settings.resolver.default_env_file is not None:
        config = replace(config, env_file=settings.resolver.default_env_file)

    resolver = EnvironmentResolver(
        host_env=host_env,
        passthrough=settings.resolver.passthrough,
        logger=settings.logger,
    )
    return resolver.resolve(config, credentials)


__all__ = [
    "__version__",
    "resolve_environment",
    # Environment
    "EnvironmentResolver",
    "EnvFileParser",
    "parse_env_file",
    "ResolutionConfig",
    "DiscoveredCredentials",
    "GitHubCredentials",
    "ClaudeCredentials",
    "ClaudeCredentialType",
    "EnvFileDiagnostic",
    "ResolvedEnvironment",
    # Config
    "Settings",
    "ResolverSettings",
    "LogSettings",
    "get_settings",
    "reset_settings",
    # Logger
    "Logger",
    "StructuredLogger",
    "create_logger",
    "get_logger",
    # Exceptions
    "SandboxEnvError",
    "ValidationError",
    "ConfigurationError",
]
