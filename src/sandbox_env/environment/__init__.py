"""Sandbox environment resolution.

Example:
    from sandbox_env.environment import (
        DiscoveredCredentials,
        EnvironmentResolver,
        ResolutionConfig,
    )

    config = ResolutionConfig.from_dict({"envFile": ".env"})
    credentials = DiscoveredCredentials.from_dict({"github": {"token": "gho_x"}})
    env = EnvironmentResolver().resolve(config, credentials)
"""

from sandbox_env.environment.env_file import (
    EMPTY_KEY,
    MISSING_SEPARATOR,
    UNREADABLE,
    EnvFileParser,
    parse_env_file,
    unquote,
)
from sandbox_env.environment.models import (
    ClaudeCredentials,
    ClaudeCredentialType,
    DiscoveredCredentials,
    EnvFileDiagnostic,
    GitHubCredentials,
    ResolutionConfig,
    ResolvedEnvironment,
)
from sandbox_env.environment.resolver import (
    HOST_PASSTHROUGH,
    EnvironmentResolver,
    claude_variables,
    serialize,
)
from sandbox_env.environment.synonyms import (
    DEFAULT_SYNONYM_GROUPS,
    GITHUB_TOKEN_GROUP,
    SynonymGroup,
    normalize_synonyms,
)

__all__ = [
    # Parser
    "EnvFileParser",
    "parse_env_file",
    "unquote",
    "MISSING_SEPARATOR",
    "EMPTY_KEY",
    "UNREADABLE",
    # Models
    "ResolutionConfig",
    "DiscoveredCredentials",
    "GitHubCredentials",
    "ClaudeCredentials",
    "ClaudeCredentialType",
    "EnvFileDiagnostic",
    "ResolvedEnvironment",
    # Resolver
    "EnvironmentResolver",
    "HOST_PASSTHROUGH",
    "claude_variables",
    "serialize",
    # Synonyms
    "SynonymGroup",
    "GITHUB_TOKEN_GROUP",
    "DEFAULT_SYNONYM_GROUPS",
    "normalize_synonyms",
]
