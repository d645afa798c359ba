"""Content-addressed on-disk image cache with fire-and-forget write-through."""

import asyncio
import hashlib
import logging
import os
import tempfile
import uuid
from pathlib import Path

import httpx

from newsreel.cache.sniff import sniff_image_format
from newsreel.data import ImageHandle
from newsreel.errors import CacheIOError, ImageFetchError, InvalidImageError

CACHE_KEY_BYTES = 8

logger = logging.getLogger(__name__)


def cache_key(url: str) -> str:
    """Return the 16 hex character cache key for ``url``.

    The key is the first 8 bytes of the SHA-256 digest of the UTF-8 encoded
    URL, hex-encoded.
    """
    return hashlib.sha256(url.encode("utf-8")).digest()[:CACHE_KEY_BYTES].hex()


def default_cache_root() -> Path:
    """Per-user default cache directory under the OS temp directory."""
    return Path(tempfile.gettempdir()) / "newsreel-image-cache"


class DiskImageCache:
    """Resolve image URLs through a flat directory of content-addressed files.

    A file named ``cache_key(url)`` under ``cache_root`` is the cached copy of
    ``url``; the directory has no index. On a miss the image is downloaded,
    validated, and returned at once while a background task writes it to
    disk. Entries are never expired or evicted.

    Concurrent resolutions of the same URL are not deduplicated: each may
    download and write independently. Writes go through a temp file and an
    atomic rename, so a reader sees either nothing or the whole entry.

    Args:
        cache_root: Directory holding cache entries, created on first use.
        http: Optional HTTP client for downloads. When omitted the cache
            creates and owns one.
        timeout: Download timeout in seconds for an owned client.
    """

    def __init__(
        self,
        cache_root: Path,
        *,
        http: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._root = Path(cache_root)
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._pending_writes: set[asyncio.Task[None]] = set()

    @property
    def cache_root(self) -> Path:
        return self._root

    @property
    def pending_writes(self) -> int:
        """Number of background writes not yet finished."""
        return len(self._pending_writes)

    def path_for(self, url: str) -> Path:
        return self._root / cache_key(url)

    async def resolve(self, url: str) -> ImageHandle:
        """Return the image for ``url`` from disk, downloading it on a miss.

        Args:
            url: Absolute image URL.

        Returns:
            The validated image.

        Raises:
            CacheIOError: The cache directory could not be created.
            ImageFetchError: The download failed.
            InvalidImageError: The downloaded payload is not an image.
        """
        await self._ensure_root(url)
        path = self.path_for(url)

        cached = await asyncio.to_thread(_read_entry, path)
        if cached is not None:
            image_format = sniff_image_format(cached)
            if image_format is not None:
                logger.debug(f"Cache hit {path.name} for {url}")
                return ImageHandle(data=cached, format=image_format)
            logger.warning(f"Cache entry {path.name} is not a valid image, refetching {url}")

        data = await self._download(url)
        image_format = sniff_image_format(data)
        if image_format is None:
            raise InvalidImageError(url, "Payload is not a recognised image format")

        self._schedule_write(path, data)
        return ImageHandle(data=data, format=image_format)

    async def drain(self) -> None:
        """Wait for every background write scheduled so far."""
        while self._pending_writes:
            await asyncio.gather(*list(self._pending_writes), return_exceptions=True)

    async def aclose(self) -> None:
        await self.drain()
        if self._owns_http:
            await self._http.aclose()

    async def _ensure_root(self, url: str) -> None:
        try:
            await asyncio.to_thread(self._root.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            raise CacheIOError(url, f"Cannot create cache directory {self._root} ({e})") from e

    async def _download(self, url: str) -> bytes:
        try:
            response = await self._http.get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ImageFetchError(url, f"Image download failed ({e})") from e
        return response.content

    def _schedule_write(self, path: Path, data: bytes) -> None:
        task = asyncio.create_task(self._write_through(path, data))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)

    async def _write_through(self, path: Path, data: bytes) -> None:
        try:
            await asyncio.to_thread(_write_entry, path, data)
        except OSError as e:
            logger.error(f"Failed to write cache entry {path}: {e}")
            return
        logger.debug(f"Cached {len(data)} bytes as {path.name}")


def _read_entry(path: Path) -> bytes | None:
    """Read a cache entry, returning None when it is absent or unreadable."""
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning(f"Cannot read cache entry {path}: {e}")
        return None


def _write_entry(path: Path, data: bytes) -> None:
    tmp = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
    try:
        tmp.write_bytes(data)
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
