"""Newsreel: NewsAPI search with a content-addressed image cache."""

from newsreel.cache import DiskImageCache, ImageStore, cache_key, sniff_image_format
from newsreel.client import NewsAPIClient, NewsClient
from newsreel.config import NewsreelConfig, create_from_config, load_config
from newsreel.data import (
    Article,
    ArticleListing,
    ArticleSource,
    ImageCompletion,
    ImageFormat,
    ImageHandle,
    Phase,
    Source,
    SourceCatalog,
    StateSnapshot,
)
from newsreel.errors import (
    ApiError,
    CacheError,
    CacheIOError,
    DecodeError,
    ImageFetchError,
    InvalidImageError,
    NewsreelError,
    RemoteError,
    TransportError,
)
from newsreel.orchestrator import ImageFetchOrchestrator
from newsreel.screens import CredentialEntry, Results, Screen, navigate_back, submit_credentials
from newsreel.sources import SourceFilter
from newsreel.state import ResultStateMachine

__all__ = [
    # Models
    "Article",
    "ArticleListing",
    "ArticleSource",
    "ImageCompletion",
    "ImageFormat",
    "ImageHandle",
    "Phase",
    "Source",
    "SourceCatalog",
    "StateSnapshot",
    # Errors
    "ApiError",
    "CacheError",
    "CacheIOError",
    "DecodeError",
    "ImageFetchError",
    "InvalidImageError",
    "NewsreelError",
    "RemoteError",
    "TransportError",
    # Protocols
    "ImageStore",
    "NewsClient",
    # Components
    "DiskImageCache",
    "ImageFetchOrchestrator",
    "NewsAPIClient",
    "ResultStateMachine",
    "SourceFilter",
    # Functions
    "cache_key",
    "sniff_image_format",
    # Screens
    "CredentialEntry",
    "Results",
    "Screen",
    "navigate_back",
    "submit_credentials",
    # Config
    "NewsreelConfig",
    "create_from_config",
    "load_config",
]
