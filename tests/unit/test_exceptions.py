"""Tests for exception hierarchy."""

import pytest

from cmdbox.exceptions import (
    ActionError,
    ActionNotFoundError,
    CmdBoxError,
    ConfigError,
    ConfigNotFoundError,
    ConfigValidationError,
    DownloadError,
    ExtractError,
    InvalidPatternError,
    PluginError,
    PluginLoadError,
    PluginNotFoundError,
    ProviderAuthError,
    ProviderError,
    ProviderNotAvailableError,
    ProviderRateLimitError,
    ProviderTimeoutError,
)


class TestCmdBoxError:
    """Tests for base CmdBoxError."""

    def test_default_message(self) -> None:
        """Test default error message."""
        error = CmdBoxError()
        assert str(error) == "An error occurred"
        assert error.user_message == "An error occurred"
        assert error.exit_code == 1

    def test_custom_message(self) -> None:
        """Test custom error message."""
        error = CmdBoxError("Custom error")
        assert str(error) == "Custom error"

    def test_custom_user_message(self) -> None:
        """Test custom user message."""
        error = CmdBoxError("Internal", user_message="User-friendly message")
        assert error.user_message == "User-friendly message"
        assert str(error) == "Internal"

    def test_user_message_is_per_instance(self) -> None:
        CmdBoxError(user_message="changed")
        assert CmdBoxError().user_message == "An error occurred"


class TestProviderErrors:
    """Tests for provider-related errors."""

    def test_provider_error(self) -> None:
        """Test base provider error."""
        error = ProviderError()
        assert error.exit_code == 2
        assert "provider" in error.user_message.lower()

    def test_provider_not_available(self) -> None:
        """Test provider not available error."""
        error = ProviderNotAvailableError()
        assert "not available" in error.user_message.lower()

    def test_provider_rate_limit(self) -> None:
        """Test rate limit error."""
        error = ProviderRateLimitError()
        assert error.exit_code == 3
        assert "rate limit" in error.user_message.lower()

    def test_provider_auth_error(self) -> None:
        """Test auth error."""
        error = ProviderAuthError()
        assert error.exit_code == 4
        assert "authentication" in error.user_message.lower()

    def test_provider_timeout(self) -> None:
        assert ProviderTimeoutError().exit_code == 5


class TestActionErrors:
    """Tests for action and dispatch errors."""

    def test_action_error(self) -> None:
        assert ActionError().exit_code == 40

    def test_action_not_found(self) -> None:
        """Test the message shown when nothing matches."""
        error = ActionNotFoundError()
        assert error.exit_code == 41
        assert "Run without arguments" in str(error)

    def test_invalid_pattern(self) -> None:
        assert InvalidPatternError().exit_code == 42


class TestOtherErrors:
    """Tests for config, plugin and download errors."""

    @pytest.mark.parametrize(
        "error_class,exit_code",
        [
            (ConfigError, 20),
            (ConfigNotFoundError, 21),
            (ConfigValidationError, 22),
            (PluginError, 50),
            (PluginNotFoundError, 51),
            (PluginLoadError, 52),
            (DownloadError, 60),
            (ExtractError, 61),
        ],
    )
    def test_exit_codes(self, error_class: type[CmdBoxError], exit_code: int) -> None:
        assert error_class().exit_code == exit_code


class TestExceptionHierarchy:
    """Tests for exception inheritance."""

    def test_all_inherit_from_base(self) -> None:
        """Test that all exceptions inherit from CmdBoxError."""
        for error_class in (
            ProviderAuthError,
            ConfigValidationError,
            ActionNotFoundError,
            PluginLoadError,
            ExtractError,
        ):
            assert issubclass(error_class, CmdBoxError)

    def test_families(self) -> None:
        assert issubclass(ProviderTimeoutError, ProviderError)
        assert issubclass(ConfigNotFoundError, ConfigError)
        assert issubclass(InvalidPatternError, ActionError)
        assert issubclass(PluginNotFoundError, PluginError)
        assert issubclass(ExtractError, DownloadError)

    def test_catch_by_base(self) -> None:
        """Test catching specific errors by base class."""
        with pytest.raises(CmdBoxError):
            raise ExtractError("bad archive")

        with pytest.raises(ProviderError):
            raise ProviderRateLimitError("Too many requests")
