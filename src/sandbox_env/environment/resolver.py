"""Environment resolution for sandboxed execution.

Sources are applied as overlays onto one ordered accumulator. Later layers
overwrite earlier ones key by key:

    rank 1  host passthrough    allow-listed variables from the host snapshot
    rank 2  credentials         discovered tokens/keys plus derived settings
    rank 3  env file            ``config.env_file`` parsed by EnvFileParser
    rank 4  explicit config     ``config.environment``

Synonym groups are normalised after ranks 1 and 2 only, so a `.env` file or
explicit config can still set ``GITHUB_TOKEN`` and ``GH_TOKEN`` separately.
"""

from __future__ import annotations

import os
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from sandbox_env.environment.env_file import DiagnosticCallback, EnvFileParser
from sandbox_env.environment.models import (
    ClaudeCredentialType,
    ClaudeCredentials,
    DiscoveredCredentials,
    ResolutionConfig,
    ResolvedEnvironment,
)
from sandbox_env.environment.synonyms import (
    DEFAULT_SYNONYM_GROUPS,
    GITHUB_TOKEN_GROUP,
    SynonymGroup,
    normalize_synonyms,
)
from sandbox_env.logger import Logger, get_logger

HOST_PASSTHROUGH: Tuple[str, ...] = (
    "GITHUB_TOKEN",
    "GH_TOKEN",
    "GIT_AUTHOR_NAME",
    "GIT_AUTHOR_EMAIL",
    "GIT_COMMITTER_NAME",
    "GIT_COMMITTER_EMAIL",
    "ANTHROPIC_API_KEY",
)

Layer = Tuple[str, Callable[[ResolutionConfig, DiscoveredCredentials], Dict[str, str]], bool]


def claude_variables(claude: ClaudeCredentials) -> Dict[str, str]:
    """Variables that authenticate the AI service for one credential type.

    An empty key or token sets nothing, same as an empty GitHub token.
    """
    if claude.type is ClaudeCredentialType.API_KEY:
        return {"ANTHROPIC_API_KEY": claude.value} if claude.value else {}
    if claude.type is ClaudeCredentialType.OAUTH:
        return {"CLAUDE_CODE_OAUTH_TOKEN": claude.value} if claude.value else {}
    if claude.type is ClaudeCredentialType.BEDROCK:
        env = {"CLAUDE_CODE_USE_BEDROCK": "1"}
        if claude.region:
            env["AWS_REGION"] = claude.region
        return env

    env = {"CLAUDE_CODE_USE_VERTEX": "1"}
    if claude.region:
        env["CLOUD_ML_REGION"] = claude.region
    if claude.project:
        env["ANTHROPIC_VERTEX_PROJECT_ID"] = claude.project
    return env


def serialize(env: Mapping[str, str]) -> ResolvedEnvironment:
    """Render a mapping as ``KEY=VALUE`` entries, values unquoted."""
    return [f"{key}={value}" for key, value in env.items()]


class EnvironmentResolver:
    """Merge every environment source for a sandbox under fixed precedence.

    Precedence (high -> low): config.environment, `.env` file, discovered
    credentials, host passthrough.

    Args:
        host_env: Snapshot of the host environment; ``os.environ`` is copied
            at each call when omitted
        passthrough: Extra host variable names forwarded after the built-in
            allow-list
        synonym_groups: Names kept in sync after the host and credential layers
        logger: Logger for per-layer key names (values are never logged)
        on_diagnostic: Forwarded to the `.env` parser

    Example:
        resolver = EnvironmentResolver(host_env={"GH_TOKEN": "abc"})
        resolver.resolve(ResolutionConfig(), DiscoveredCredentials())
        # ['GITHUB_TOKEN=abc', 'GH_TOKEN=abc']
    """

    def __init__(
        self,
        host_env: Optional[Mapping[str, str]] = None,
        passthrough: Iterable[str] = (),
        synonym_groups: Sequence[SynonymGroup] = DEFAULT_SYNONYM_GROUPS,
        logger: Optional[Logger] = None,
        on_diagnostic: Optional[DiagnosticCallback] = None,
    ) -> None:
        self._host_env = dict(host_env) if host_env is not None else None
        extra = [name for name in passthrough if name not in HOST_PASSTHROUGH]
        self._passthrough: Tuple[str, ...] = HOST_PASSTHROUGH + tuple(dict.fromkeys(extra))
        self._synonym_groups = tuple(synonym_groups)
        self._logger = logger or get_logger("sandbox-env")
        self._parser = EnvFileParser(logger=self._logger, on_diagnostic=on_diagnostic)

    @property
    def passthrough(self) -> Tuple[str, ...]:
        return self._passthrough

    def resolve(
        self,
        config: ResolutionConfig,
        credentials: Optional[DiscoveredCredentials] = None,
    ) -> ResolvedEnvironment:
        """Resolve the sandbox environment as ``KEY=VALUE`` entries.

        Order: host passthrough keys in allow-list order, then keys first
        introduced by later layers in the order they appeared.
        """
        return serialize(self.resolve_mapping(config, credentials))

    def resolve_mapping(
        self,
        config: ResolutionConfig,
        credentials: Optional[DiscoveredCredentials] = None,
    ) -> Dict[str, str]:
        """Resolve the sandbox environment as an ordered mapping."""
        credentials = credentials or DiscoveredCredentials()
        env: Dict[str, str] = {}

        for name, layer, normalize in self._layers():
            values = layer(config, credentials)
            env.update(values)
            if normalize:
                normalize_synonyms(env, self._synonym_groups)
            if values:
                self._logger.debug("Applied environment layer", layer=name, keys=list(values))

        return env

    def _layers(self) -> List[Layer]:
        return [
            ("host", self._host_layer, True),
            ("credentials", self._credentials_layer, True),
            ("env_file", self._env_file_layer, False),
            ("config", self._config_layer, False),
        ]

    def _host_layer(self, config: ResolutionConfig, credentials: DiscoveredCredentials) -> Dict[str, str]:
        host = self._host_env if self._host_env is not None else dict(os.environ)
        found = {name: host[name] for name in self._passthrough if host.get(name)}
        normalize_synonyms(found, self._synonym_groups)

        # Synonyms filled in above keep their allow-list position
        ordered = {name: found.pop(name) for name in self._passthrough if name in found}
        ordered.update(found)
        return ordered

    def _credentials_layer(
        self, config: ResolutionConfig, credentials: DiscoveredCredentials
    ) -> Dict[str, str]:
        env: Dict[str, str] = {}

        if credentials.claude is not None:
            env.update(claude_variables(credentials.claude))

        if credentials.github is not None and credentials.github.token:
            for name in GITHUB_TOKEN_GROUP:
                env[name] = credentials.github.token

        if config.max_thinking_tokens is not None:
            env["MAX_THINKING_TOKENS"] = str(config.max_thinking_tokens)
        if config.bash_timeout is not None:
            env["BASH_MAX_TIMEOUT_MS"] = str(config.bash_timeout)

        return env

    def _env_file_layer(self, config: ResolutionConfig, credentials: DiscoveredCredentials) -> Dict[str, str]:
        if not config.env_file:
            return {}
        return self._parser.parse(config.env_file)

    def _config_layer(self, config: ResolutionConfig, credentials: DiscoveredCredentials) -> Dict[str, str]:
        if not config.environment:
            return {}
        return {key: str(value) for key, value in config.environment.items()}
