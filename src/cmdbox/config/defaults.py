"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "cmdbox"
DEFAULT_PLUGINS_DIR: Final[Path] = DEFAULT_CONFIG_DIR / "actions"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "CMDBOX_CONFIG"
ENV_LOG_LEVEL: Final[str] = "CMDBOX_LOG_LEVEL"
ENV_DEFAULT_PROVIDER: Final[str] = "CMDBOX_PROVIDER"
ENV_DEFAULT_MODEL: Final[str] = "CMDBOX_MODEL"
ENV_RENDERER: Final[str] = "CMDBOX_RENDERER"

# Provider environment variables
ENV_OPENAI_API_KEY: Final[str] = "OPENAI_API_KEY"
ENV_ANTHROPIC_API_KEY: Final[str] = "ANTHROPIC_API_KEY"
ENV_OLLAMA_HOST: Final[str] = "OLLAMA_HOST"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# cmdbox configuration

default_provider = "ollama"

[providers.ollama]
default_model = "llama3"
base_url = "http://localhost:11434"
timeout = 120.0

[providers.openai]
default_model = "gpt-4o-mini"
# api_key = ""  # Use OPENAI_API_KEY env var

[providers.anthropic]
default_model = "claude-sonnet-4-20250514"
# api_key = ""  # Use ANTHROPIC_API_KEY env var

[render]
renderer = "rich"
code_theme = "monokai"
color = true

[downloads]
# directory = "~/Downloads"
mirror = "https://mirrors.tuna.tsinghua.edu.cn"
timeout = 60.0
retries = 3

[plugins]
enabled = true
# directory = "~/.config/cmdbox/actions"

[logging]
level = "WARNING"
json_format = false
"""


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE
