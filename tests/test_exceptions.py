"""Tests for the sandbox_env exception hierarchy."""

import pytest

from sandbox_env.exceptions import (
    ConfigurationError,
    SandboxEnvError,
    ValidationError,
)


class TestSandboxEnvError:
    """Tests for the base error class."""

    def test_basic_construction(self):
        error = SandboxEnvError("TEST_CODE", "Test message")

        assert error.code == "TEST_CODE"
        assert error.message == "Test message"
        assert error.details == {}

    def test_none_details_becomes_empty_dict(self):
        assert SandboxEnvError("TEST_CODE", "Test message", details=None).details == {}

    def test_str_without_details(self):
        assert str(SandboxEnvError("TEST_CODE", "Test message")) == "TEST_CODE: Test message"

    def test_str_with_details(self):
        error = SandboxEnvError("TEST_CODE", "Test message", details={"foo": "bar"})
        assert str(error) == "TEST_CODE: Test message (details: {'foo': 'bar'})"

    def test_to_dict(self):
        error = SandboxEnvError("TEST_CODE", "Test message", details={"field": "environment"})
        assert error.to_dict() == {
            "code": "TEST_CODE",
            "message": "Test message",
            "details": {"field": "environment"},
        }


class TestHierarchy:
    @pytest.mark.parametrize("cls", [ValidationError, ConfigurationError])
    def test_subclasses(self, cls):
        error = cls("CODE", "message")
        assert isinstance(error, SandboxEnvError)
        assert isinstance(error, Exception)

    def test_catch_as_base(self):
        with pytest.raises(SandboxEnvError) as exc_info:
            raise ValidationError("BAD", "bad input", {"field": "x"})
        assert exc_info.value.details["field"] == "x"
