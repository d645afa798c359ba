"""Core data models for Newsreel."""

from dataclasses import dataclass
from enum import StrEnum


class ImageFormat(StrEnum):
    """Image containers recognised by the magic-byte sniffer."""

    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    WEBP = "webp"
    BMP = "bmp"


class Phase(StrEnum):
    """Lifecycle of the result state machine.

    ``IDLE`` is only ever the initial phase; once a search completes the
    machine moves between the two ``LOADED_*`` phases and never returns.
    """

    IDLE = "idle"
    LOADED_OK = "loaded_ok"
    LOADED_ERR = "loaded_err"


@dataclass(frozen=True)
class ArticleSource:
    """The ``source`` reference embedded in an article."""

    id: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class Article:
    """A news article returned by a search or listing request."""

    title: str
    source: ArticleSource = ArticleSource()
    author: str | None = None
    description: str | None = None
    content: str | None = None
    url: str | None = None
    url_to_image: str | None = None
    published_at: str | None = None


@dataclass(frozen=True)
class Source:
    """A publisher that can be used to filter listings and searches."""

    id: str
    name: str
    description: str = ""
    url: str = ""
    category: str = ""
    language: str = ""
    country: str = ""


@dataclass(frozen=True)
class ArticleListing:
    """Successful search or listing response."""

    status: str
    total_results: int
    articles: tuple[Article, ...] = ()


@dataclass(frozen=True)
class SourceCatalog:
    """Successful source catalog response."""

    status: str
    sources: tuple[Source, ...] = ()

    def by_id(self) -> dict[str, Source]:
        return {source.id: source for source in self.sources}


@dataclass(frozen=True)
class ImageHandle:
    """Validated image bytes ready for display."""

    data: bytes
    format: ImageFormat

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ImageCompletion:
    """Outcome of one image resolution, tagged with the search generation it belongs to."""

    generation: int
    index: int
    image: ImageHandle | None = None


@dataclass(frozen=True)
class StateSnapshot:
    """Read-only view of the result state machine for rendering."""

    phase: Phase
    query: str
    generation: int
    listing: ArticleListing | None = None
    error: str | None = None
    image_slots: tuple[bool, ...] = ()
    active_article: int | None = None
    source_panel_open: bool = False
    source_error: str | None = None
    enabled_source_count: int = 0
    total_source_count: int = 0

    @property
    def loaded_image_count(self) -> int:
        return sum(self.image_slots)
