from typing import Protocol

from newsreel.data import ArticleListing, SourceCatalog


class NewsClient(Protocol):
    """Interface for the remote news service."""

    async def search(
        self,
        query: str | None = None,
        source_filter: str | None = None,
    ) -> ArticleListing:
        """Search articles, or list top headlines when ``query`` is empty.

        Args:
            query: Free-text query. Empty or None selects listing mode.
            source_filter: Comma-joined source ids. Empty or None disables
                source filtering.

        Returns:
            The article listing.

        Raises:
            ApiError: On a structured failure, transport error or bad body.
        """
        ...

    async def list_sources(self) -> SourceCatalog:
        """Fetch the full source catalog.

        Raises:
            ApiError: On a structured failure, transport error or bad body.
        """
        ...
