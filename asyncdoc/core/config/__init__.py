"""Configuration loading and management for asyncdoc."""

from asyncdoc.core.config.loader import (
    ConfigLoader,
    clear_config_cache,
    get_default_config,
    load_config,
)
from asyncdoc.core.config.models import AsyncDocConfig, LoggingConfig

__all__ = [
    "AsyncDocConfig",
    "ConfigLoader",
    "LoggingConfig",
    "clear_config_cache",
    "get_default_config",
    "load_config",
]
