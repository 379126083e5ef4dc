"""site_mapper.crawler: fetching, visited-URL tracking and the per-page worker pool."""

from .crawler import DEFAULT_POOL_SIZE, CrawlEngine, CrawlStats, pool_size
from .fetcher import FetchError, Fetcher, PageFetcher, open_session
from .models import Page, RawPage, RawRef, TokenizedPage
from .visited import VisitedSet

__all__ = [
    "DEFAULT_POOL_SIZE",
    "CrawlEngine",
    "CrawlStats",
    "FetchError",
    "Fetcher",
    "Page",
    "PageFetcher",
    "RawPage",
    "RawRef",
    "TokenizedPage",
    "VisitedSet",
    "open_session",
    "pool_size",
]
