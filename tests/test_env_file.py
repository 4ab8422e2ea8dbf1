"""Tests for sandbox_env.environment.env_file.

Covers the `.env` grammar: comments, blanks, quoting, embedded equals signs,
malformed lines, duplicates, and unreadable files.
"""

import logging
import os
from pathlib import Path
from typing import List

import pytest

from sandbox_env.environment import (
    EMPTY_KEY,
    MISSING_SEPARATOR,
    UNREADABLE,
    EnvFileDiagnostic,
    EnvFileParser,
    parse_env_file,
    unquote,
)
from sandbox_env.logger import create_logger


class TestUnquote:
    """Tests for outer quote stripping."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ('"a b"', "a b"),
            ("'a b'", "a b"),
            ("a b", "a b"),
            ('""', ""),
            ('"', '"'),
            ("'abc\"", "'abc\""),
            ('"abc', '"abc'),
            ("'it''s'", "it''s"),
            ('"a\\nb"', "a\\nb"),
        ],
    )
    def test_unquote(self, raw, expected):
        """Only one matching pair spanning the whole value is removed."""
        assert unquote(raw) == expected


class TestParseText:
    """Tests for parsing in-memory content."""

    def test_simple_assignments(self):
        parser = EnvFileParser()
        assert parser.parse_text("FOO=bar\nBAZ=qux\n") == {"FOO": "bar", "BAZ": "qux"}

    def test_quoted_values(self):
        """Single, double and unquoted values all resolve to the same text."""
        parser = EnvFileParser()
        values = parser.parse_text(
            "SINGLE_QUOTED='single quoted value'\n"
            'DOUBLE_QUOTED="double quoted value"\n'
            "UNQUOTED=unquoted value\n"
        )
        assert values == {
            "SINGLE_QUOTED": "single quoted value",
            "DOUBLE_QUOTED": "double quoted value",
            "UNQUOTED": "unquoted value",
        }

    def test_comments_and_blank_lines_contribute_nothing(self):
        parser = EnvFileParser()
        assert parser.parse_text("# comment\n\n   \n\t\n  # indented comment\n") == {}

    def test_comments_between_values(self):
        parser = EnvFileParser()
        values = parser.parse_text(
            "# This is a comment\n"
            "\n"
            "VALID_VAR=valid_value\n"
            "# Another comment\n"
            "   \n"
            "ANOTHER_VAR=another_value\n"
        )
        assert values == {"VALID_VAR": "valid_value", "ANOTHER_VAR": "another_value"}

    def test_value_keeps_embedded_equals(self):
        parser = EnvFileParser()
        values = parser.parse_text(
            "URL_WITH_PARAMS=https://example.com?param1=value1&param2=value2\n"
        )
        assert values["URL_WITH_PARAMS"] == "https://example.com?param1=value1&param2=value2"

    def test_key_and_value_are_trimmed(self):
        parser = EnvFileParser()
        assert parser.parse_text("  KEY  =  some value  \n") == {"KEY": "some value"}

    def test_hash_inside_value_is_kept(self):
        """Inline comments are not a thing; the text after # is value."""
        parser = EnvFileParser()
        assert parser.parse_text("COLOR=#fff # white\n") == {"COLOR": "#fff # white"}

    def test_empty_value(self):
        parser = EnvFileParser()
        assert parser.parse_text("EMPTY=\n") == {"EMPTY": ""}

    def test_export_prefix_is_not_special(self):
        parser = EnvFileParser()
        assert parser.parse_text("export FOO=bar\n") == {"export FOO": "bar"}

    def test_no_interpolation(self):
        parser = EnvFileParser()
        assert parser.parse_text("A=1\nB=${A}\n") == {"A": "1", "B": "${A}"}

    def test_last_duplicate_wins(self):
        parser = EnvFileParser()
        values = parser.parse_text("KEY=first\nOTHER=x\nKEY=second\n")
        assert values == {"KEY": "second", "OTHER": "x"}
        assert list(values) == ["KEY", "OTHER"]

    def test_crlf_line_endings(self):
        parser = EnvFileParser()
        assert parser.parse_text("A=1\r\nB='two'\r\n") == {"A": "1", "B": "two"}

    def test_only_newline_ends_a_line(self):
        """Form feed and Unicode separators are value text, not line breaks."""
        parser = EnvFileParser()
        values = parser.parse_text("KEY=a\x0cb\nSEP=x\u2028y\x85z\nNEXT=1\n")
        assert values == {"KEY": "a\x0cb", "SEP": "x\u2028y\x85z", "NEXT": "1"}

    def test_malformed_line_is_isolated(self):
        parser = EnvFileParser()
        values = parser.parse_text(
            "VALID_VAR=valid_value\n"
            "INVALID_LINE_NO_EQUALS\n"
            "ANOTHER_VALID_VAR=another_value\n"
        )
        assert values == {"VALID_VAR": "valid_value", "ANOTHER_VALID_VAR": "another_value"}
        assert not any("INVALID_LINE_NO_EQUALS" in k or "INVALID_LINE_NO_EQUALS" in v
                       for k, v in values.items())

    def test_empty_key_is_dropped(self):
        parser = EnvFileParser()
        assert parser.parse_text("=value\nOK=1\n") == {"OK": "1"}


class TestDiagnostics:
    """Tests for the optional diagnostics callback."""

    def test_reports_dropped_lines(self):
        seen: List[EnvFileDiagnostic] = []
        parser = EnvFileParser(on_diagnostic=seen.append)

        parser.parse_text("A=1\nNO_EQUALS\n=orphan\n# comment\nB=2\n", source="test.env")

        assert seen == [
            EnvFileDiagnostic(path="test.env", reason=MISSING_SEPARATOR, line_number=2),
            EnvFileDiagnostic(path="test.env", reason=EMPTY_KEY, line_number=3),
        ]

    def test_diagnostics_never_carry_values(self):
        seen: List[EnvFileDiagnostic] = []
        EnvFileParser(on_diagnostic=seen.append).parse_text("SECRET_WITHOUT_EQUALS\n")

        assert len(seen) == 1
        assert "SECRET_WITHOUT_EQUALS" not in repr(seen[0])

    def test_missing_file_is_not_reported(self, tmp_path: Path):
        seen: List[EnvFileDiagnostic] = []
        EnvFileParser(on_diagnostic=seen.append).parse(tmp_path / "missing.env")
        assert seen == []

    def test_unreadable_file_is_reported(self, tmp_path: Path):
        seen: List[EnvFileDiagnostic] = []
        EnvFileParser(on_diagnostic=seen.append).parse(tmp_path)
        assert [d.reason for d in seen] == [UNREADABLE]


class TestParseFile:
    """Tests for reading from disk."""

    def test_parse_file(self, write_env):
        env_file = write_env("FOO=bar\n")
        assert EnvFileParser().parse(env_file) == {"FOO": "bar"}

    def test_parse_accepts_string_path(self, write_env):
        env_file = write_env("FOO=bar\n")
        assert parse_env_file(str(env_file)) == {"FOO": "bar"}

    def test_missing_file_returns_empty(self):
        assert parse_env_file("/nonexistent/file.env") == {}

    def test_directory_returns_empty(self, tmp_path: Path):
        assert parse_env_file(tmp_path) == {}

    def test_invalid_utf8_returns_empty(self, tmp_path: Path):
        env_file = tmp_path / ".env"
        env_file.write_bytes(b"KEY=\xff\xfe\n")
        assert parse_env_file(env_file) == {}

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="permission bits are ignored for root",
    )
    def test_permission_denied_returns_empty(self, write_env):
        env_file = write_env("FOO=bar\n")
        env_file.chmod(0)
        try:
            assert parse_env_file(env_file) == {}
        finally:
            env_file.chmod(0o600)

    def test_lone_carriage_return_stays_in_value(self, tmp_path: Path):
        env_file = tmp_path / ".env"
        env_file.write_bytes(b"KEY=a\rb\nNEXT=1\r\n")
        assert parse_env_file(env_file) == {"KEY": "a\rb", "NEXT": "1"}

    def test_form_feed_in_file_value(self, tmp_path: Path):
        env_file = tmp_path / ".env"
        env_file.write_bytes(b"KEY=a\x0cb\nNEXT=1\n")
        assert parse_env_file(env_file) == {"KEY": "a\x0cb", "NEXT": "1"}

    def test_utf8_values(self, write_env):
        env_file = write_env("GREETING='héllo wörld'\n")
        assert parse_env_file(env_file) == {"GREETING": "héllo wörld"}

    def test_dropped_lines_are_logged_without_content(self, write_env, capsys):
        logger = create_logger("test-env-file", level=logging.DEBUG)
        env_file = write_env("GOOD=1\nHUSH_HUSH_CONTENT\n")

        EnvFileParser(logger=logger).parse(env_file)

        err = capsys.readouterr().err
        assert "Skipping env file line" in err
        assert "line=2" in err
        assert "HUSH_HUSH_CONTENT" not in err
