"""Exception hierarchy for cmdbox."""


class CmdBoxError(Exception):
    """Base exception for all cmdbox errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Provider Errors
class ProviderError(CmdBoxError):
    """LLM provider-related errors."""

    exit_code = 2
    user_message = "LLM provider error"


class ProviderNotAvailableError(ProviderError):
    """Provider is not reachable or not configured."""

    exit_code = 2
    user_message = "LLM provider is not available"


class ProviderRateLimitError(ProviderError):
    """Rate limit exceeded."""

    exit_code = 3
    user_message = "Rate limit exceeded. Try again later."


class ProviderAuthError(ProviderError):
    """Authentication failed."""

    exit_code = 4
    user_message = "Authentication failed. Check your API key."


class ProviderTimeoutError(ProviderError):
    """Request timed out."""

    exit_code = 5
    user_message = "Request timed out. Try again."


# Config Errors
class ConfigError(CmdBoxError):
    """Configuration errors."""

    exit_code = 20
    user_message = "Configuration error"


class ConfigNotFoundError(ConfigError):
    """Configuration file not found."""

    exit_code = 21
    user_message = "Configuration file not found"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    exit_code = 22
    user_message = "Invalid configuration"


# Action Errors
class ActionError(CmdBoxError):
    """Action execution errors."""

    exit_code = 40
    user_message = "Action failed"


class ActionNotFoundError(ActionError):
    """No registered action matches the arguments."""

    exit_code = 41
    user_message = "No matching action. Run without arguments to list actions."


class InvalidPatternError(ActionError):
    """An action was registered with unusable patterns."""

    exit_code = 42
    user_message = "Invalid action pattern"


# Plugin Errors
class PluginError(CmdBoxError):
    """Plugin-related errors."""

    exit_code = 50
    user_message = "Plugin error"


class PluginNotFoundError(PluginError):
    """Plugin not found."""

    exit_code = 51
    user_message = "Plugin not found"


class PluginLoadError(PluginError):
    """Failed to load plugin."""

    exit_code = 52
    user_message = "Failed to load plugin"


# Download Errors
class DownloadError(CmdBoxError):
    """Fetching a remote resource failed."""

    exit_code = 60
    user_message = "Download failed"


class ExtractError(DownloadError):
    """Extracting an archive failed."""

    exit_code = 61
    user_message = "Could not extract archive"
