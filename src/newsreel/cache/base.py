from typing import Protocol

from newsreel.data import ImageHandle


class ImageStore(Protocol):
    """Interface for resolving an image URL to validated image bytes."""

    async def resolve(self, url: str) -> ImageHandle:
        """Return the image stored under ``url``, fetching it on a miss.

        Raises:
            CacheError: If the image cannot be resolved.
        """
        ...
