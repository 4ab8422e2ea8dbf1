"""Parser for sandbox `.env` files.

Grammar, one assignment per line:
  - blank lines and lines whose first non-blank character is ``#`` are skipped
  - the line is split on the first ``=``; the left side (trimmed) is the key
  - a value wrapped in one matching pair of ``"`` or ``'`` loses that pair,
    the interior is kept verbatim (no escapes, no interpolation)
  - any other value is kept as trimmed text, embedded ``=`` included
  - lines end at ``\n`` only; other line-break characters stay in the value
  - lines without ``=`` are dropped
  - a repeated key keeps the last value

A missing or unreadable file parses to an empty mapping.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, Optional

from sandbox_env.environment.models import EnvFileDiagnostic, PathLike
from sandbox_env.logger import Logger, get_logger

DiagnosticCallback = Callable[[EnvFileDiagnostic], None]

MISSING_SEPARATOR = "missing_separator"
EMPTY_KEY = "empty_key"
UNREADABLE = "unreadable"

_QUOTES = ('"', "'")


def unquote(value: str) -> str:
    """Strip one matching pair of outer quotes spanning the whole value."""
    if len(value) >= 2 and value[0] in _QUOTES and value[-1] == value[0]:
        return value[1:-1]
    return value


class EnvFileParser:
    """Parse `.env` files into ordered key/value mappings.

    Args:
        logger: Logger for dropped lines; line numbers only, never content
        on_diagnostic: Optional callback told about every line or file that
            contributed nothing
    """

    def __init__(
        self,
        logger: Optional[Logger] = None,
        on_diagnostic: Optional[DiagnosticCallback] = None,
    ) -> None:
        self._logger = logger or get_logger("sandbox-env")
        self._on_diagnostic = on_diagnostic

    def parse(self, path: PathLike) -> Dict[str, str]:
        """Read and parse a `.env` file.

        Returns:
            Mapping of key to value in first-seen order; empty if the file is
            missing, unreadable or not valid UTF-8
        """
        env_path = Path(path)
        try:
            with open(env_path, encoding="utf-8", newline="") as handle:
                text = handle.read()
        except FileNotFoundError:
            self._logger.debug("Env file not found", path=str(env_path))
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            self._logger.debug(
                "Env file unreadable", path=str(env_path), error=type(exc).__name__
            )
            self._report(EnvFileDiagnostic(path=str(env_path), reason=UNREADABLE))
            return {}

        return self.parse_text(text, source=str(env_path))

    def parse_text(self, text: str, source: str = "<string>") -> Dict[str, str]:
        """Parse `.env` content that is already in memory."""
        values: Dict[str, str] = {}

        for line_number, raw in enumerate(text.split("\n"), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                self._drop(source, line_number, MISSING_SEPARATOR)
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            if not key:
                self._drop(source, line_number, EMPTY_KEY)
                continue

            values[key] = unquote(value.strip())

        return values

    def _drop(self, source: str, line_number: int, reason: str) -> None:
        self._logger.debug("Skipping env file line", path=source, line=line_number, reason=reason)
        self._report(EnvFileDiagnostic(path=source, reason=reason, line_number=line_number))

    def _report(self, diagnostic: EnvFileDiagnostic) -> None:
        if self._on_diagnostic is not None:
            self._on_diagnostic(diagnostic)


def parse_env_file(path: PathLike, on_diagnostic: Optional[DiagnosticCallback] = None) -> Dict[str, str]:
    """Convenience wrapper around :meth:`EnvFileParser.parse`."""
    return EnvFileParser(on_diagnostic=on_diagnostic).parse(path)
