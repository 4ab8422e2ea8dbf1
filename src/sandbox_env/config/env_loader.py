"""Settings source for sandbox_env itself, with optional .env support.

Loads the package's own configuration values in deterministic order:
1) .env file (if provided and exists)
2) OS environment variables
3) Explicit overrides (highest precedence)

This reads settings that tune the resolver (log level, passthrough list). It
is unrelated to the sandbox `.env` file, which goes through
``sandbox_env.environment.env_file`` and its stricter grammar.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

from dotenv import dotenv_values


class EnvLoader:
    """Load environment-style key/value pairs with .env support."""

    def __init__(self, env_file: Optional[Path | str] = None) -> None:
        self.env_file = Path(env_file) if env_file else None

    def load(
        self,
        overrides: Optional[Mapping[str, str]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> MutableMapping[str, str]:
        """Load settings data with deterministic precedence.

        Precedence (low -> high): .env file, OS env vars, overrides

        Args:
            overrides: Explicit values that beat every other source
            environ: Environment snapshot to use instead of ``os.environ``
        """
        data: MutableMapping[str, str] = {}

        if self.env_file is not None and self.env_file.is_file():
            file_values = dotenv_values(self.env_file)
            data.update({k: v for k, v in file_values.items() if v is not None})

        data.update(os.environ if environ is None else environ)

        if overrides:
            data.update({k: str(v) for k, v in overrides.items()})

        return data


__all__ = ["EnvLoader"]
