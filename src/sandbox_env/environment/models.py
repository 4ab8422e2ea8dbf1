"""Inputs and outputs of environment resolution.

``ResolutionConfig`` and ``DiscoveredCredentials`` are built by collaborators
(config loading, credential discovery). The ``from_dict`` constructors accept
the camelCase JSON shape those collaborators produce.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from sandbox_env.exceptions import ValidationError

PathLike = Union[str, Path]


class ClaudeCredentialType(str, Enum):
    """How the AI service is authenticated inside the sandbox."""

    API_KEY = "api_key"
    OAUTH = "oauth"
    BEDROCK = "bedrock"
    VERTEX = "vertex"


@dataclass(frozen=True)
class GitHubCredentials:
    token: Optional[str] = None
    git_config: Optional[str] = None


@dataclass(frozen=True)
class ClaudeCredentials:
    """Discovered AI-service credential.

    Attributes:
        type: Credential flavour, decides which variables get set
        value: Key or token (unused for bedrock/vertex)
        region: Cloud region for bedrock/vertex
        project: Cloud project for vertex
    """

    type: ClaudeCredentialType
    value: str
    region: Optional[str] = None
    project: Optional[str] = None


@dataclass(frozen=True)
class DiscoveredCredentials:
    """Credentials found on the host by discovery probes."""

    github: Optional[GitHubCredentials] = None
    claude: Optional[ClaudeCredentials] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "DiscoveredCredentials":
        """Build credentials from the discovery JSON shape.

        Raises:
            ValidationError: If a section is not an object or the claude
                credential type is unknown
        """
        if not data:
            return cls()

        github_data = _optional_section(data, "github")
        github = None
        if github_data is not None:
            github = GitHubCredentials(
                token=_optional_str(github_data, "token", "github"),
                git_config=_optional_str(github_data, "gitConfig", "github"),
            )

        claude_data = _optional_section(data, "claude")
        claude = None
        if claude_data is not None:
            raw_type = claude_data.get("type")
            try:
                cred_type = ClaudeCredentialType(raw_type)
            except ValueError:
                raise ValidationError(
                    "INVALID_CREDENTIAL_TYPE",
                    f"Unknown claude credential type: {raw_type!r}",
                    {"allowed": [t.value for t in ClaudeCredentialType]},
                ) from None
            value = claude_data.get("value")
            if not isinstance(value, str):
                raise ValidationError(
                    "INVALID_CREDENTIALS",
                    "claude.value must be a string",
                    {"field": "claude.value"},
                )
            claude = ClaudeCredentials(
                type=cred_type,
                value=value,
                region=_optional_str(claude_data, "region", "claude"),
                project=_optional_str(claude_data, "project", "claude"),
            )

        return cls(github=github, claude=claude)


@dataclass
class ResolutionConfig:
    """The part of a sandbox configuration that shapes its environment.

    Attributes:
        env_file: Path of a `.env` file to overlay
        environment: Explicit variables, highest precedence
        max_thinking_tokens: Forwarded as MAX_THINKING_TOKENS
        bash_timeout: Forwarded as BASH_MAX_TIMEOUT_MS
        docker_image: Carried through, ignored by resolution
        extras: Any other sandbox config keys, ignored by resolution
    """

    env_file: Optional[PathLike] = None
    environment: Optional[Dict[str, str]] = None
    max_thinking_tokens: Optional[int] = None
    bash_timeout: Optional[int] = None
    docker_image: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ResolutionConfig":
        """Build a config from the sandbox config JSON shape.

        Raises:
            ValidationError: If a field used by resolution has the wrong type
        """
        if not data:
            return cls()

        known = {"envFile", "environment", "maxThinkingTokens", "bashTimeout", "dockerImage"}

        environment = data.get("environment")
        if environment is not None:
            if not isinstance(environment, Mapping):
                raise ValidationError(
                    "INVALID_CONFIG",
                    "environment must be an object of name to value",
                    {"field": "environment"},
                )
            environment = {str(k): str(v) for k, v in environment.items()}

        return cls(
            env_file=_optional_str(data, "envFile", "config"),
            environment=environment,
            max_thinking_tokens=_optional_int(data, "maxThinkingTokens"),
            bash_timeout=_optional_int(data, "bashTimeout"),
            docker_image=_optional_str(data, "dockerImage", "config"),
            extras={k: v for k, v in data.items() if k not in known},
        )


@dataclass(frozen=True)
class EnvFileDiagnostic:
    """A `.env` line or file that contributed nothing.

    Never carries the offending value, only where and why.
    """

    path: str
    reason: str
    line_number: Optional[int] = None


ResolvedEnvironment = List[str]


def _optional_section(data: Mapping[str, Any], name: str) -> Optional[Mapping[str, Any]]:
    section = data.get(name)
    if section is None:
        return None
    if not isinstance(section, Mapping):
        raise ValidationError(
            "INVALID_CREDENTIALS", f"{name} must be an object", {"field": name}
        )
    return section


def _optional_str(data: Mapping[str, Any], key: str, section: str) -> Optional[str]:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ValidationError(
        "INVALID_FIELD_TYPE",
        f"{section}.{key} must be a string",
        {"field": f"{section}.{key}", "type": type(value).__name__},
    )


def _optional_int(data: Mapping[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            "INVALID_FIELD_TYPE",
            f"config.{key} must be an integer",
            {"field": f"config.{key}", "type": type(value).__name__},
        )
    return value
