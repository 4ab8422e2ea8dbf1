"""Dataclass-based settings for sandbox_env.

All settings classes accept a parameterized env prefix (default
``SANDBOX_ENV``) and read through :class:`EnvLoader`, so they can come from
the process environment or a settings ``.env`` file.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from typing import Mapping, Optional, Tuple

from sandbox_env.config.env_loader import EnvLoader
from sandbox_env.exceptions import ConfigurationError
from sandbox_env.logger import Logger, create_logger

DEFAULT_PREFIX = "SANDBOX_ENV"

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
_ALLOWED_LOG_FORMATS = {"console", "json"}
_VAR_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _split_names(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return ()
    return tuple(name.strip() for name in raw.split(",") if name.strip())


@dataclass
class LogSettings:
    """Logging configuration

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Log format (console or json)
        file: Optional log file path
    """

    level: str = "WARNING"
    format: str = "console"
    file: Optional[str] = None

    def __post_init__(self) -> None:
        self.level = self.level.upper()
        self.format = self.format.lower()
        if self.level not in _ALLOWED_LOG_LEVELS:
            raise ConfigurationError(
                "INVALID_LOG_LEVEL",
                f"Invalid log level '{self.level}'",
                {"allowed": sorted(_ALLOWED_LOG_LEVELS)},
            )
        if self.format not in _ALLOWED_LOG_FORMATS:
            raise ConfigurationError(
                "INVALID_LOG_FORMAT",
                f"Invalid log format '{self.format}'",
                {"allowed": sorted(_ALLOWED_LOG_FORMATS)},
            )

    @property
    def level_number(self) -> int:
        return getattr(logging, self.level)

    @property
    def json_format(self) -> bool:
        return self.format == "json"

    @classmethod
    def from_mapping(cls, data: Mapping[str, str], prefix: str = DEFAULT_PREFIX) -> "LogSettings":
        """Build log settings from already-loaded key/value data

        Keys read:
            {prefix}_LOG_LEVEL: Logging level
            {prefix}_LOG_FORMAT: Log format
            {prefix}_LOG_FILE: Log file path
        """
        return cls(
            level=data.get(f"{prefix}_LOG_LEVEL", "WARNING"),
            format=data.get(f"{prefix}_LOG_FORMAT", "console"),
            file=data.get(f"{prefix}_LOG_FILE") or None,
        )

    @classmethod
    def from_env(cls, prefix: str = DEFAULT_PREFIX, env_file: Optional[Path] = None) -> "LogSettings":
        return cls.from_mapping(EnvLoader(env_file).load(), prefix)


@dataclass
class ResolverSettings:
    """Tuning for the environment resolver

    Attributes:
        passthrough: Extra host variable names copied into the sandbox on top
            of the built-in allow-list
        default_env_file: `.env` path used when a resolution config names none
    """

    passthrough: Tuple[str, ...] = ()
    default_env_file: Optional[Path] = None

    def __post_init__(self) -> None:
        self.passthrough = tuple(self.passthrough)
        bad = [name for name in self.passthrough if not _VAR_NAME_RE.match(name)]
        if bad:
            raise ConfigurationError(
                "INVALID_PASSTHROUGH",
                "Passthrough entries must be plain variable names",
                {"invalid": bad},
            )
        if isinstance(self.default_env_file, str):
            self.default_env_file = Path(self.default_env_file)

    @classmethod
    def from_mapping(
        cls, data: Mapping[str, str], prefix: str = DEFAULT_PREFIX
    ) -> "ResolverSettings":
        """Build resolver settings from already-loaded key/value data

        Keys read:
            {prefix}_PASSTHROUGH: Comma-separated host variable names
            {prefix}_ENV_FILE: Default sandbox `.env` path
        """
        env_file = data.get(f"{prefix}_ENV_FILE")
        return cls(
            passthrough=_split_names(data.get(f"{prefix}_PASSTHROUGH")),
            default_env_file=Path(env_file) if env_file else None,
        )

    @classmethod
    def from_env(
        cls, prefix: str = DEFAULT_PREFIX, env_file: Optional[Path] = None
    ) -> "ResolverSettings":
        return cls.from_mapping(EnvLoader(env_file).load(), prefix)


@dataclass
class Settings:
    """Complete package settings

    Attributes:
        resolver: Resolver tuning
        log: Logging settings
        prefix: Environment variable prefix used
    """

    resolver: ResolverSettings = field(default_factory=ResolverSettings)
    log: LogSettings = field(default_factory=LogSettings)
    prefix: str = DEFAULT_PREFIX

    @classmethod
    def from_env(
        cls,
        prefix: str = DEFAULT_PREFIX,
        env_file: Optional[Path] = None,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """
        Load complete settings from a settings `.env` file and the environment

        Args:
            prefix: Environment variable prefix (default: SANDBOX_ENV)
            env_file: Optional settings `.env` file (lowest precedence)
            overrides: Explicit values (highest precedence)

        Raises:
            ConfigurationError: If any value is invalid
        """
        data = EnvLoader(env_file).load(overrides)
        return cls(
            resolver=ResolverSettings.from_mapping(data, prefix),
            log=LogSettings.from_mapping(data, prefix),
            prefix=prefix,
        )

    @cached_property
    def logger(self) -> Logger:
        """Logger built from :attr:`log`, once per settings instance."""
        return create_logger(
            name="sandbox-env",
            level=self.log.level_number,
            log_file=self.log.file,
            json_format=self.log.json_format,
        )


# Global settings storage per prefix
_global_settings: dict[str, Settings] = {}


def get_settings(prefix: str = DEFAULT_PREFIX, reload: bool = False) -> Settings:
    """
    Get or create the settings instance for a given prefix

    Args:
        prefix: Environment variable prefix
        reload: If True, reload settings from environment
    """
    if prefix not in _global_settings or reload:
        _global_settings[prefix] = Settings.from_env(prefix=prefix)
    return _global_settings[prefix]


def reset_settings(prefix: Optional[str] = None) -> None:
    """Reset settings (primarily for testing)

    Args:
        prefix: Specific prefix to reset, or None to reset all
    """
    if prefix:
        _global_settings.pop(prefix, None)
    else:
        _global_settings.clear()
