"""Configuration management."""

from cmdbox.config.loader import get_config, load_config, reset_config
from cmdbox.config.schema import CmdBoxConfig

__all__ = ["CmdBoxConfig", "get_config", "load_config", "reset_config"]
