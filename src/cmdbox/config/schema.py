"""Pydantic models for cmdbox configuration."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ProviderType(str, Enum):
    """Supported LLM providers."""

    OLLAMA = "ollama"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    MOCK = "mock"


class RendererChoice(str, Enum):
    """Markdown engines selectable from config."""

    RICH = "rich"
    PLAIN = "plain"


class OllamaConfig(BaseModel):
    """Ollama provider configuration."""

    default_model: str = "llama3"
    base_url: str = "http://localhost:11434"
    timeout: float = 120.0


class OpenAIConfig(BaseModel):
    """OpenAI provider configuration."""

    default_model: str = "gpt-4o-mini"
    api_key: str | None = None  # Use OPENAI_API_KEY env var
    base_url: str | None = None
    timeout: float = 60.0


class AnthropicConfig(BaseModel):
    """Anthropic provider configuration."""

    default_model: str = "claude-sonnet-4-20250514"
    api_key: str | None = None  # Use ANTHROPIC_API_KEY env var
    max_tokens: int = 4096
    timeout: float = 60.0


class ProvidersConfig(BaseModel):
    """Configuration for all LLM providers."""

    ollama: OllamaConfig = Field(default_factory=OllamaConfig)
    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    anthropic: AnthropicConfig = Field(default_factory=AnthropicConfig)


class RenderConfig(BaseModel):
    """Streaming Markdown output."""

    renderer: RendererChoice = RendererChoice.RICH
    code_theme: str = "monokai"
    width: int | None = None  # Default: terminal width
    color: bool = True


class DownloadsConfig(BaseModel):
    """Download actions."""

    directory: Path = Field(default_factory=lambda: Path.home() / "Downloads")
    mirror: str = "https://mirrors.tuna.tsinghua.edu.cn"
    timeout: float = 60.0
    retries: int = Field(default=3, ge=1)


class PluginsConfig(BaseModel):
    """Private action modules."""

    enabled: bool = True
    directory: Path | None = None  # Default: ~/.config/cmdbox/actions


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False


class CmdBoxConfig(BaseModel):
    """Root configuration for cmdbox."""

    model_config = ConfigDict(use_enum_values=True)

    default_provider: ProviderType = ProviderType.OLLAMA
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    downloads: DownloadsConfig = Field(default_factory=DownloadsConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
