"""Data models for Newsreel."""

from newsreel.data.models import (
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

__all__ = [
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
]
