"""Factory functions to create components from configuration."""

from newsreel.cache.disk import DiskImageCache, default_cache_root
from newsreel.client.newsapi import NewsAPIClient
from newsreel.config.models import ApiConfig, CacheConfig, NewsreelConfig
from newsreel.orchestrator import ImageFetchOrchestrator
from newsreel.sources import SourceFilter
from newsreel.state import ResultStateMachine


def create_client(config: ApiConfig, *, api_key: str | None = None) -> NewsAPIClient:
    """Create the remote client from config."""
    return NewsAPIClient(
        api_key=api_key,
        base_url=config.base_url,
        user_agent=config.user_agent,
        default_category=config.default_category,
        timeout=config.timeout_seconds,
    )


def create_cache(config: CacheConfig) -> DiskImageCache:
    """Create the image cache from config."""
    return DiskImageCache(
        config.cache_root or default_cache_root(),
        timeout=config.timeout_seconds,
    )


def create_from_config(
    config: NewsreelConfig,
    *,
    api_key: str | None = None,
) -> tuple[NewsAPIClient, DiskImageCache, ResultStateMachine]:
    """Create the complete fetch-and-cache pipeline from root config.

    Args:
        config: Root configuration.
        api_key: NewsAPI key; falls back to the NEWS_API_TOKEN env var.

    Returns:
        Tuple of (client, cache, state machine). The caller closes the client
        and the cache when done.

    Raises:
        ValueError: If no API key is available.
    """
    client = create_client(config.api, api_key=api_key)
    cache = create_cache(config.cache)
    machine = ResultStateMachine(
        client=client,
        orchestrator=ImageFetchOrchestrator(cache),
        sources=SourceFilter(client),
    )
    return (client, cache, machine)
