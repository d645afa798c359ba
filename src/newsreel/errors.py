"""Exception hierarchy for Newsreel.

Search-level failures derive from ``ApiError`` and end up as the error state
of a search. Image failures derive from ``CacheError`` and stay local to the
slot of the article they belong to.
"""


class NewsreelError(Exception):
    """Base class for every error raised by Newsreel."""


# ============================================================
# Remote API
# ============================================================


class ApiError(NewsreelError):
    """A search, listing or catalog request failed."""


class RemoteError(ApiError):
    """The service answered with a structured failure payload."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"API returned an error: {message} (code {code})")
        self.code = code
        self.message = message


class TransportError(ApiError):
    """The request never produced a response (timeout, reset, DNS...)."""


class DecodeError(ApiError):
    """The response body was neither a success nor a failure payload."""


# ============================================================
# Image cache
# ============================================================


class CacheError(NewsreelError):
    """An image could not be resolved."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"{reason}: {url}")
        self.url = url
        self.reason = reason


class CacheIOError(CacheError):
    """The cache directory or a cache file could not be accessed."""


class InvalidImageError(CacheError):
    """The payload is not a recognised image container."""


class ImageFetchError(CacheError):
    """Downloading the image failed."""
