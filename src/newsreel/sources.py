"""Source catalog and per-source enablement."""

import logging

from newsreel.client.base import NewsClient
from newsreel.data import Source, SourceCatalog

logger = logging.getLogger(__name__)


class SourceFilter:
    """Tracks the source catalog and which sources restrict the next search.

    ``enabled`` maps source ids to flags. Ids that are not (or no longer) in
    the catalog are accepted and simply never match a catalog entry.

    Args:
        client: Client used to fetch the catalog.
    """

    def __init__(self, client: NewsClient) -> None:
        self._client = client
        self._catalog: SourceCatalog | None = None
        self._enabled: dict[str, bool] = {}
        self._filter_text = ""

    @property
    def catalog(self) -> SourceCatalog | None:
        return self._catalog

    @property
    def enabled(self) -> dict[str, bool]:
        """Copy of the id to enabled-flag mapping."""
        return dict(self._enabled)

    @property
    def filter_text(self) -> str:
        return self._filter_text

    @filter_text.setter
    def filter_text(self, text: str) -> None:
        self._filter_text = text

    async def fetch_catalog(self) -> SourceCatalog:
        """Replace the catalog with a fresh one and disable every source.

        Enablement is not carried over from the previous catalog. On failure
        the previous catalog and flags are left untouched.

        Raises:
            ApiError: If the catalog request fails.
        """
        catalog = await self._client.list_sources()
        self._catalog = catalog
        self._enabled = {source.id: False for source in catalog.sources}
        logger.info(f"Loaded {len(catalog.sources)} sources")
        return catalog

    def set_enabled(self, source_id: str, state: bool) -> None:
        self._enabled[source_id] = state

    def disable_all(self) -> None:
        for source_id in self._enabled:
            self._enabled[source_id] = False

    def is_enabled(self, source_id: str) -> bool:
        return self._enabled.get(source_id, False)

    def enabled_ids(self) -> list[str]:
        return [source_id for source_id, state in self._enabled.items() if state]

    def enabled_count(self) -> int:
        return len(self.enabled_ids())

    def filter_string(self) -> str:
        """Comma-joined enabled ids, empty when nothing is enabled."""
        return ",".join(self.enabled_ids())

    def visible_sources(self) -> list[Source]:
        """Catalog entries matching ``filter_text``, for display only.

        Matching is a case-insensitive substring test against the name,
        description and id joined together.
        """
        if self._catalog is None:
            return []
        needle = self._filter_text.lower()
        if not needle:
            return list(self._catalog.sources)
        return [
            source
            for source in self._catalog.sources
            if needle in f"{source.name} {source.description} {source.id}".lower()
        ]
