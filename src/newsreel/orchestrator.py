"""Concurrent per-article image resolution."""

import asyncio
import logging
from collections.abc import Callable, Sequence

from newsreel.cache.base import ImageStore
from newsreel.data import Article, ImageCompletion
from newsreel.errors import CacheError

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[ImageCompletion], None]


class ImageFetchOrchestrator:
    """Launch one image resolution per article and report each as it finishes.

    Every unit runs as its own task: there is no concurrency cap, no timeout
    and no batching, so a slow download never delays the others. Completions
    are delivered one at a time through ``on_complete`` in whatever order the
    units finish, each tagged with the generation it was launched under.

    Args:
        store: Image store used to resolve each URL.
    """

    def __init__(self, store: ImageStore) -> None:
        self._store = store

    def launch(
        self,
        articles: Sequence[Article],
        generation: int,
        on_complete: CompletionCallback,
    ) -> list[asyncio.Task[None]]:
        """Start resolving the image of every article that has one.

        Args:
            articles: Articles of the current listing, in slot order.
            generation: Search generation the work belongs to.
            on_complete: Called once per launched unit with its outcome.

        Returns:
            The launched tasks, one per article with an image URL.
        """
        tasks: list[asyncio.Task[None]] = []
        for index, article in enumerate(articles):
            if not article.url_to_image:
                continue
            tasks.append(
                asyncio.create_task(
                    self._resolve_one(index, article.url_to_image, generation, on_complete)
                )
            )
        logger.debug(f"Launched {len(tasks)} image resolutions for generation {generation}")
        return tasks

    async def _resolve_one(
        self,
        index: int,
        url: str,
        generation: int,
        on_complete: CompletionCallback,
    ) -> None:
        try:
            image = await self._store.resolve(url)
        except CacheError as e:
            logger.warning(f"Error getting image for article {index}: {e}")
            on_complete(ImageCompletion(generation=generation, index=index))
            return
        on_complete(ImageCompletion(generation=generation, index=index, image=image))
