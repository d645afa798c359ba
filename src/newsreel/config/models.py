"""Pydantic configuration models for Newsreel components."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

# ============================================================
# Remote API
# ============================================================


class ApiConfig(BaseModel):
    """Configuration for NewsAPIClient."""

    base_url: str = "https://newsapi.org/v2"
    user_agent: str = "Newsreel"
    default_category: str = "general"
    timeout_seconds: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True}


# ============================================================
# Image Cache
# ============================================================


class CacheConfig(BaseModel):
    """Configuration for DiskImageCache.

    ``cache_root`` of None selects a directory under the OS temp directory.
    """

    cache_root: Path | None = None
    timeout_seconds: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True}


# ============================================================
# Logging Config
# ============================================================


class LoggingConfig(BaseModel):
    """Configuration for console logging."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class NewsreelConfig(BaseModel):
    """Root configuration for Newsreel."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
