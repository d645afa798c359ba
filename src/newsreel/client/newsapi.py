"""NewsAPI client (https://newsapi.org/docs)."""

import json
import logging
import os
from typing import Any

import httpx

from newsreel.data import Article, ArticleListing, ArticleSource, Source, SourceCatalog
from newsreel.errors import DecodeError, RemoteError, TransportError

NEWSAPI_BASE_URL = "https://newsapi.org/v2"
DEFAULT_USER_AGENT = "Newsreel"
DEFAULT_CATEGORY = "general"

logger = logging.getLogger(__name__)


class NewsAPIClient:
    """Typed wrapper around the NewsAPI search, listing and sources endpoints.

    An empty query selects listing mode (``/top-headlines``); anything else
    selects search mode (``/everything``). The API key is attached once as the
    ``X-Api-Key`` header of the underlying ``httpx.AsyncClient``.

    Args:
        api_key: NewsAPI key (defaults to NEWS_API_TOKEN env var).
        base_url: API root, without trailing slash.
        user_agent: Value of the User-Agent header.
        default_category: Category used by listing mode when no source filter
            is given.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, mainly for tests.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str = NEWSAPI_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        default_category: str = DEFAULT_CATEGORY,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key or os.environ.get("NEWS_API_TOKEN")
        if not self._api_key:
            raise ValueError("NewsAPI key required. Pass api_key or set NEWS_API_TOKEN env var.")
        self._default_category = default_category
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"X-Api-Key": self._api_key, "User-Agent": user_agent},
            timeout=timeout,
            transport=transport,
        )

    @property
    def http(self) -> httpx.AsyncClient:
        """The underlying HTTP client, carrying the API key header.

        Image downloads use a separate client so the key never reaches
        third-party image hosts.
        """
        return self._client

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "NewsAPIClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def search(
        self,
        query: str | None = None,
        source_filter: str | None = None,
    ) -> ArticleListing:
        """Search articles, or list top headlines when ``query`` is empty.

        Args:
            query: Free-text query. Empty or None selects listing mode.
            source_filter: Comma-joined source ids. In search mode it narrows
                the query; in listing mode it replaces the default category.

        Returns:
            The article listing (articles default to empty).

        Raises:
            RemoteError: The service returned a structured failure.
            TransportError: The request failed at the network level.
            DecodeError: The body could not be interpreted.
        """
        params: dict[str, str] = {}
        if query:
            path = "/everything"
            params["q"] = query
            if source_filter:
                params["sources"] = source_filter
        else:
            path = "/top-headlines"
            if source_filter:
                params["sources"] = source_filter
            else:
                params["category"] = self._default_category

        data = await self._get_json(path, params)
        return _decode_listing(data)

    async def list_sources(self) -> SourceCatalog:
        """Fetch the full source catalog.

        Raises:
            RemoteError: The service returned a structured failure.
            TransportError: The request failed at the network level.
            DecodeError: The body could not be interpreted.
        """
        data = await self._get_json("/top-headlines/sources", {})
        return _decode_catalog(data)

    async def _get_json(self, path: str, params: dict[str, str]) -> dict[str, Any]:
        """GET ``path`` and return the decoded JSON object.

        HTTP error statuses are not raised: NewsAPI reports failures with a
        JSON body on 4xx/5xx responses, and that body is what callers want.
        """
        logger.debug(f"GET {path} params={params}")
        try:
            response = await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"HTTP request failed: {e}") from e

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(
                f"Failed to parse JSON response (HTTP {response.status_code}): {e}"
            ) from e

        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
        return data


def _decode_failure(data: dict[str, Any], expected: str) -> RemoteError | DecodeError:
    """Interpret a payload without the ``expected`` array as a structured failure.

    Success and failure are told apart by shape, not by an explicit tag: this
    is a best-effort heuristic over what NewsAPI sends, not a protocol
    guarantee.
    """
    if "code" not in data:
        return DecodeError(f"Response has neither '{expected}' nor an error code: {data!r}")
    return RemoteError(code=str(data["code"]), message=str(data.get("message", "")))


def _decode_listing(data: dict[str, Any]) -> ArticleListing:
    if "articles" not in data:
        # A bare status-ok payload is still a success with no items
        if data.get("status") == "ok" and "code" not in data:
            return ArticleListing(status="ok", total_results=_total_results(data, 0))
        raise _decode_failure(data, "articles")

    items = data.get("articles") or []
    if not isinstance(items, list):
        raise DecodeError(f"'articles' must be a list, got {type(items).__name__}")

    try:
        articles = tuple(_decode_article(item) for item in items)
    except (TypeError, ValueError, AttributeError) as e:
        raise DecodeError(f"Malformed article payload: {e}") from e

    return ArticleListing(
        status=str(data.get("status", "ok")),
        total_results=_total_results(data, len(articles)),
        articles=articles,
    )


def _total_results(data: dict[str, Any], default: int) -> int:
    try:
        return int(data.get("totalResults") or default)
    except (TypeError, ValueError) as e:
        raise DecodeError(f"Malformed totalResults: {data.get('totalResults')!r}") from e


def _decode_article(item: dict[str, Any]) -> Article:
    source = item.get("source") or {}
    return Article(
        title=item.get("title") or "",
        source=ArticleSource(id=source.get("id"), name=source.get("name")),
        author=item.get("author"),
        description=item.get("description"),
        content=item.get("content"),
        url=item.get("url"),
        url_to_image=item.get("urlToImage"),
        published_at=item.get("publishedAt"),
    )


def _decode_catalog(data: dict[str, Any]) -> SourceCatalog:
    if "sources" not in data:
        raise _decode_failure(data, "sources")

    items = data.get("sources") or []
    if not isinstance(items, list):
        raise DecodeError(f"'sources' must be a list, got {type(items).__name__}")

    try:
        sources = tuple(
            Source(
                id=item["id"],
                name=item.get("name") or item["id"],
                description=item.get("description") or "",
                url=item.get("url") or "",
                category=item.get("category") or "",
                language=item.get("language") or "",
                country=item.get("country") or "",
            )
            for item in items
        )
    except (KeyError, TypeError) as e:
        raise DecodeError(f"Malformed source payload: {e}") from e

    return SourceCatalog(status=str(data.get("status", "ok")), sources=sources)
