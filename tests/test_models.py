"""Tests for data models and errors."""

import dataclasses

import pytest

from newsreel.data import (
    Article,
    ArticleListing,
    ArticleSource,
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
    InvalidImageError,
    NewsreelError,
    RemoteError,
    TransportError,
)


class TestArticle:
    def test_defaults(self) -> None:
        article = Article(title="Headline")
        assert article.source == ArticleSource()
        assert article.url_to_image is None
        assert article.author is None

    def test_is_frozen(self) -> None:
        article = Article(title="Headline")
        with pytest.raises(dataclasses.FrozenInstanceError):
            article.title = "Changed"  # type: ignore[misc]


class TestListing:
    def test_defaults_to_no_articles(self) -> None:
        listing = ArticleListing(status="ok", total_results=0)
        assert listing.articles == ()

    def test_catalog_by_id(self) -> None:
        catalog = SourceCatalog(
            status="ok",
            sources=(Source(id="cnn", name="CNN"), Source(id="bbc-news", name="BBC News")),
        )
        assert catalog.by_id()["cnn"].name == "CNN"


def test_image_handle_len() -> None:
    handle = ImageHandle(data=b"GIF89a1234", format=ImageFormat.GIF)
    assert len(handle) == 10


def test_snapshot_loaded_image_count() -> None:
    snapshot = StateSnapshot(
        phase=Phase.LOADED_OK, query="", generation=1, image_slots=(True, False, True)
    )
    assert snapshot.loaded_image_count == 2


def test_phase_values() -> None:
    assert Phase.IDLE == "idle"
    assert Phase.LOADED_OK == "loaded_ok"


class TestErrors:
    def test_hierarchy(self) -> None:
        for cls in (RemoteError, TransportError, DecodeError):
            assert issubclass(cls, ApiError)
        for cls in (CacheIOError, InvalidImageError):
            assert issubclass(cls, CacheError)
        assert issubclass(ApiError, NewsreelError)
        assert issubclass(CacheError, NewsreelError)

    def test_remote_error_message(self) -> None:
        error = RemoteError("apiKeyInvalid", "Bad key")
        assert error.code == "apiKeyInvalid"
        assert error.message == "Bad key"
        assert str(error) == "API returned an error: Bad key (code apiKeyInvalid)"

    def test_cache_error_carries_url(self) -> None:
        error = InvalidImageError("https://img/x", "Not an image")
        assert error.url == "https://img/x"
        assert str(error) == "Not an image: https://img/x"
