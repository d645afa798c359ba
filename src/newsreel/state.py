"""State machine owning the current search result and its image slots."""

import asyncio
import logging

from newsreel.client.base import NewsClient
from newsreel.data import ArticleListing, ImageCompletion, ImageHandle, Phase, StateSnapshot
from newsreel.errors import ApiError
from newsreel.orchestrator import ImageFetchOrchestrator
from newsreel.sources import SourceFilter

logger = logging.getLogger(__name__)


class ResultStateMachine:
    """Owns the current listing, its image slots and the overlay flags.

    Every search submission bumps ``generation``. Image work is tagged with
    the generation it was launched under, and a completion is applied only
    while that generation is still current, so late results of a superseded
    search can never land in a slot of the new one. Search results are
    guarded the same way: a response that arrives after a newer submission is
    dropped.

    All transitions are plain methods meant to be called from one event loop;
    each is fully applied before the next one runs.

    Args:
        client: Remote client used for searches.
        orchestrator: Launches image resolutions for a new listing.
        sources: Source filter shaping the next search. A new one backed by
            ``client`` is created when omitted.
    """

    def __init__(
        self,
        client: NewsClient,
        orchestrator: ImageFetchOrchestrator,
        sources: SourceFilter | None = None,
    ) -> None:
        self._client = client
        self._orchestrator = orchestrator
        self._sources = sources or SourceFilter(client)
        self._phase = Phase.IDLE
        self._query = ""
        self._generation = 0
        self._listing: ArticleListing | None = None
        self._error: str | None = None
        self._slots: list[ImageHandle | None] = []
        self._active_article: int | None = None
        self._source_panel_open = False
        self._source_error: str | None = None

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def query(self) -> str:
        return self._query

    @property
    def listing(self) -> ArticleListing | None:
        return self._listing

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def image_slots(self) -> tuple[ImageHandle | None, ...]:
        return tuple(self._slots)

    @property
    def active_article(self) -> int | None:
        return self._active_article

    @property
    def source_panel_open(self) -> bool:
        return self._source_panel_open

    @property
    def sources(self) -> SourceFilter:
        return self._sources

    # ------------------------------------------------------------------
    # Searching
    # ------------------------------------------------------------------

    def set_query(self, text: str) -> None:
        """Update the query text used by the next submission."""
        self._query = text

    async def submit_search(self) -> list[asyncio.Task[None]]:
        """Run a search with the current query and enabled sources.

        The generation is bumped before the request is sent, which makes any
        image work still running for the previous listing stale from this
        point on.

        Returns:
            Image tasks launched for the new listing (empty on failure, or if
            a newer search was submitted while this one was in flight).
        """
        query = self._query
        source_filter = self._sources.filter_string()
        self._generation += 1
        generation = self._generation

        mode = "search" if query else "listing"
        logger.info(
            f"Submitting {mode} #{generation}: query={query!r} sources={source_filter or '-'}"
        )
        try:
            listing = await self._client.search(query, source_filter)
        except ApiError as e:
            logger.warning(f"Search #{generation} failed: {e}")
            return self.apply_search_result(generation, e)
        return self.apply_search_result(generation, listing)

    def apply_search_result(
        self,
        generation: int,
        outcome: ArticleListing | ApiError,
    ) -> list[asyncio.Task[None]]:
        """Apply the outcome of the search submitted as ``generation``.

        On success the listing is replaced, the image slots are reset to one
        empty slot per article, the active article is cleared and image
        resolution starts. On failure the error message becomes the result
        and no image work starts.

        Returns:
            Image tasks launched for the new listing.
        """
        if generation != self._generation:
            logger.debug(
                f"Dropping result of search #{generation}, current is #{self._generation}"
            )
            return []

        self._active_article = None
        if isinstance(outcome, ApiError):
            self._phase = Phase.LOADED_ERR
            self._listing = None
            self._error = str(outcome)
            self._slots = []
            return []

        self._phase = Phase.LOADED_OK
        self._listing = outcome
        self._error = None
        self._slots = [None] * len(outcome.articles)
        logger.info(
            f"Search #{generation} returned {len(outcome.articles)} of "
            f"{outcome.total_results} articles"
        )
        return self._orchestrator.launch(outcome.articles, generation, self.apply_image_completion)

    def apply_image_completion(self, completion: ImageCompletion) -> bool:
        """Store a resolved image in its slot if it belongs to the current search.

        Returns:
            True if the slot was written.
        """
        if completion.generation != self._generation:
            logger.debug(
                f"Discarding image {completion.index} of stale search "
                f"#{completion.generation} (current #{self._generation})"
            )
            return False
        if not 0 <= completion.index < len(self._slots):
            logger.warning(f"Image completion index {completion.index} out of range")
            return False
        if completion.image is None:
            return False
        self._slots[completion.index] = completion.image
        return True

    # ------------------------------------------------------------------
    # Overlays
    # ------------------------------------------------------------------

    def set_active_article(self, index: int | None) -> None:
        """Expand the article at ``index``, or collapse with None.

        Raises:
            IndexError: If ``index`` is not an article of the current listing.
        """
        if index is not None:
            count = len(self._listing.articles) if self._listing else 0
            if not 0 <= index < count:
                raise IndexError(f"Article index {index} out of range ({count} articles)")
        self._active_article = index

    async def open_source_panel(self) -> None:
        """Open the source panel, fetching the catalog the first time."""
        self._source_panel_open = True
        if self._sources.catalog is None:
            await self.refresh_sources()

    async def refresh_sources(self) -> None:
        """Reload the catalog; every source starts disabled again."""
        try:
            await self._sources.fetch_catalog()
        except ApiError as e:
            logger.warning(f"Failed to refresh sources: {e}")
            self._source_error = str(e)
            return
        self._source_error = None

    def close_source_panel(self) -> None:
        self._source_panel_open = False

    async def toggle_source_panel(self) -> None:
        if self._source_panel_open:
            self.close_source_panel()
        else:
            await self.open_source_panel()

    def dismiss_overlays(self) -> None:
        """Close the topmost overlay: the expanded article, else the source panel."""
        if self._active_article is not None:
            self._active_article = None
        elif self._source_panel_open:
            self._source_panel_open = False

    # ------------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------------

    def toggle_source(self, source_id: str, state: bool) -> None:
        """Enable or disable a source for the next submission."""
        self._sources.set_enabled(source_id, state)

    def disable_all_sources(self) -> None:
        self._sources.disable_all()

    def set_source_filter_text(self, text: str) -> None:
        self._sources.filter_text = text

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def snapshot(self) -> StateSnapshot:
        catalog = self._sources.catalog
        return StateSnapshot(
            phase=self._phase,
            query=self._query,
            generation=self._generation,
            listing=self._listing,
            error=self._error,
            image_slots=tuple(slot is not None for slot in self._slots),
            active_article=self._active_article,
            source_panel_open=self._source_panel_open,
            source_error=self._source_error,
            enabled_source_count=self._sources.enabled_count(),
            total_source_count=len(catalog.sources) if catalog else 0,
        )
