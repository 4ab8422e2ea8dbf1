"""Base exception classes for sandbox_env.

Every error carries structured information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context for debugging/recovery

Resolution itself never raises; these errors surface only when collaborators
hand over malformed input or the package's own settings are invalid.
"""

from typing import Any, Dict, Optional


class SandboxEnvError(Exception):
    """Base exception for all sandbox_env errors.

    Attributes:
        code: Machine-readable error code (e.g., "INVALID_CREDENTIAL_TYPE")
        message: Human-readable error message
        details: Optional additional context for debugging/recovery
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize error with structured information.

        Args:
            code: Machine-readable error code
            message: Human-readable error message
            details: Optional additional context
        """
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(SandboxEnvError):
    """Raised when a config or credentials payload has the wrong shape."""

    pass


class ConfigurationError(SandboxEnvError):
    """Raised when the package's own settings are invalid or incomplete."""

    pass
