from newsreel.client.base import NewsClient
from newsreel.client.newsapi import NewsAPIClient

__all__ = [
    "NewsAPIClient",
    "NewsClient",
]
