"""Configuration module for Newsreel."""

from newsreel.config.factory import create_cache, create_client, create_from_config
from newsreel.config.loader import get_default_config_path, load_config
from newsreel.config.models import ApiConfig, CacheConfig, LoggingConfig, NewsreelConfig

__all__ = [
    "ApiConfig",
    "CacheConfig",
    "LoggingConfig",
    "NewsreelConfig",
    "create_cache",
    "create_client",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
