"""Configuration loading from TOML files and environment variables."""

import contextlib
import os
import sys
from pathlib import Path

from pydantic import ValidationError

from cmdbox.config.defaults import (
    DEFAULT_CONFIG_TOML,
    ENV_ANTHROPIC_API_KEY,
    ENV_DEFAULT_MODEL,
    ENV_DEFAULT_PROVIDER,
    ENV_LOG_LEVEL,
    ENV_OLLAMA_HOST,
    ENV_OPENAI_API_KEY,
    ENV_RENDERER,
    get_config_path,
)
from cmdbox.config.schema import CmdBoxConfig, ProviderType, RendererChoice
from cmdbox.exceptions import ConfigError, ConfigNotFoundError, ConfigValidationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

# Global config instance (singleton)
_config: CmdBoxConfig | None = None


def load_config(
    config_path: Path | None = None,
    *,
    create_if_missing: bool = True,
) -> CmdBoxConfig:
    """Load configuration from a TOML file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default.
        create_if_missing: Write the default config if the file doesn't exist.

    Returns:
        Loaded and validated configuration.

    Raises:
        ConfigNotFoundError: If the file is missing and cannot be created.
        ConfigError: If the file cannot be read or parsed.
        ConfigValidationError: If the configuration is invalid.
    """
    path = config_path or get_config_path()

    if not path.exists():
        if not create_if_missing:
            return _apply_env_overrides(CmdBoxConfig())
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(DEFAULT_CONFIG_TOML)
        except OSError as e:
            raise ConfigNotFoundError(
                f"No config at {path} and the default could not be written: {e}"
            ) from e

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    try:
        config = CmdBoxConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid configuration in {path}: {e}") from e

    return _apply_env_overrides(config)


def _apply_env_overrides(config: CmdBoxConfig) -> CmdBoxConfig:
    """Apply environment variable overrides to configuration."""
    provider_env = os.environ.get(ENV_DEFAULT_PROVIDER)
    if provider_env:
        with contextlib.suppress(ValueError):
            config.default_provider = ProviderType(provider_env.lower())

    # Model override applies to the default provider only
    model_env = os.environ.get(ENV_DEFAULT_MODEL)
    if model_env:
        if config.default_provider == ProviderType.OLLAMA:
            config.providers.ollama.default_model = model_env
        elif config.default_provider == ProviderType.OPENAI:
            config.providers.openai.default_model = model_env
        elif config.default_provider == ProviderType.ANTHROPIC:
            config.providers.anthropic.default_model = model_env

    log_level = os.environ.get(ENV_LOG_LEVEL)
    if log_level:
        config.logging.level = log_level.upper()

    renderer = os.environ.get(ENV_RENDERER)
    if renderer:
        with contextlib.suppress(ValueError):
            config.render.renderer = RendererChoice(renderer.lower())

    openai_key = os.environ.get(ENV_OPENAI_API_KEY)
    if openai_key and not config.providers.openai.api_key:
        config.providers.openai.api_key = openai_key

    anthropic_key = os.environ.get(ENV_ANTHROPIC_API_KEY)
    if anthropic_key and not config.providers.anthropic.api_key:
        config.providers.anthropic.api_key = anthropic_key

    ollama_host = os.environ.get(ENV_OLLAMA_HOST)
    if ollama_host:
        config.providers.ollama.base_url = ollama_host

    return config


def get_config() -> CmdBoxConfig:
    """Get the current configuration, loading it on first access."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the configuration singleton (mainly for testing)."""
    global _config
    _config = None
