"""Tests for ImageFetchOrchestrator."""

import asyncio
import logging
from pathlib import Path

import httpx
import pytest

from newsreel.cache.disk import DiskImageCache
from newsreel.data import Article, ImageCompletion, ImageFormat, ImageHandle
from newsreel.errors import CacheIOError, ImageFetchError, InvalidImageError
from newsreel.orchestrator import ImageFetchOrchestrator


def image(tag: bytes) -> ImageHandle:
    return ImageHandle(data=b"\x89PNG\r\n\x1a\n" + tag, format=ImageFormat.PNG)


class FakeStore:
    """ImageStore returning canned results, optionally gated per URL."""

    def __init__(self, results: dict[str, ImageHandle | Exception]) -> None:
        self.results = results
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[str] = []

    async def resolve(self, url: str) -> ImageHandle:
        self.calls.append(url)
        gate = self.gates.get(url)
        if gate is not None:
            await gate.wait()
        result = self.results[url]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def articles() -> list[Article]:
    return [
        Article(title="A", url_to_image="https://img/a"),
        Article(title="B"),
        Article(title="C", url_to_image="https://img/c"),
        Article(title="D", url_to_image=""),
    ]


async def test_one_unit_per_article_with_image(articles: list[Article]) -> None:
    store = FakeStore({"https://img/a": image(b"a"), "https://img/c": image(b"c")})
    completions: list[ImageCompletion] = []

    tasks = ImageFetchOrchestrator(store).launch(articles, 7, completions.append)
    await asyncio.gather(*tasks)

    assert len(tasks) == 2
    assert sorted(store.calls) == ["https://img/a", "https://img/c"]
    assert sorted(c.index for c in completions) == [0, 2]
    assert all(c.generation == 7 for c in completions)
    by_index = {c.index: c for c in completions}
    assert by_index[0].image == image(b"a")
    assert by_index[2].image == image(b"c")


async def test_no_articles_no_tasks() -> None:
    store = FakeStore({})
    tasks = ImageFetchOrchestrator(store).launch([], 1, lambda c: None)
    assert tasks == []
    assert store.calls == []


async def test_failure_emits_empty_completion(
    articles: list[Article], caplog: pytest.LogCaptureFixture
) -> None:
    store = FakeStore(
        {
            "https://img/a": InvalidImageError("https://img/a", "Payload is not an image"),
            "https://img/c": image(b"c"),
        }
    )
    completions: list[ImageCompletion] = []

    with caplog.at_level(logging.WARNING, logger="newsreel.orchestrator"):
        tasks = ImageFetchOrchestrator(store).launch(articles, 1, completions.append)
        await asyncio.gather(*tasks)

    by_index = {c.index: c for c in completions}
    assert by_index[0].image is None
    assert by_index[2].image == image(b"c")
    assert "https://img/a" in caplog.text


@pytest.mark.parametrize(
    "error",
    [
        CacheIOError("https://img/a", "Cannot create cache directory"),
        ImageFetchError("https://img/a", "Image download failed"),
    ],
)
async def test_every_cache_error_is_local(articles: list[Article], error: Exception) -> None:
    store = FakeStore({"https://img/a": error, "https://img/c": image(b"c")})
    completions: list[ImageCompletion] = []

    tasks = ImageFetchOrchestrator(store).launch(articles, 1, completions.append)
    results = await asyncio.gather(*tasks, return_exceptions=True)

    assert results == [None, None]
    assert {c.index: c.image for c in completions} == {0: None, 2: image(b"c")}


async def test_malformed_image_url_emits_empty_completion(tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"\xff\xd8\xff\xe0" + b"\x00" * 16)

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    cache = DiskImageCache(tmp_path, http=http)
    articles = [
        Article(title="Bad", url_to_image="http://[::1/a.jpg"),
        Article(title="Good", url_to_image="https://example.com/a.jpg"),
    ]
    completions: list[ImageCompletion] = []

    tasks = ImageFetchOrchestrator(cache).launch(articles, 3, completions.append)
    results = await asyncio.gather(*tasks, return_exceptions=True)
    await cache.aclose()
    await http.aclose()

    assert results == [None, None]
    by_index = {c.index: c for c in completions}
    assert by_index[0].image is None
    assert by_index[1].image is not None
    assert by_index[1].image.format == ImageFormat.JPEG


async def test_hung_unit_does_not_block_others(articles: list[Article]) -> None:
    store = FakeStore({"https://img/a": image(b"a"), "https://img/c": image(b"c")})
    store.gates["https://img/a"] = asyncio.Event()
    completions: list[ImageCompletion] = []

    tasks = ImageFetchOrchestrator(store).launch(articles, 1, completions.append)
    await tasks[1]

    assert [c.index for c in completions] == [2]
    assert not tasks[0].done()

    store.gates["https://img/a"].set()
    await tasks[0]
    assert [c.index for c in completions] == [2, 0]
