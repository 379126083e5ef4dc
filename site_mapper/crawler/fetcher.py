# site_mapper/crawler/fetcher.py
"""
Fetcher module: turns a URL into a RawPage over an aiohttp session.

Timeouts and TLS belong to the session; status codes are reported, never judged.
"""
from __future__ import annotations

import asyncio
from typing import Protocol

from aiohttp import ClientError, ClientSession, ClientTimeout

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.models import RawPage


class FetchError(Exception):
    """Transport-level failure for a single URL."""

    def __init__(self, url: str, cause: BaseException | str) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"{url}: {str(cause) or type(cause).__name__}")


class PageFetcher(Protocol):
    """Anything able to GET a URL; raises FetchError on transport failure."""

    async def fetch(self, url: str) -> RawPage:
        ...


def open_session(config: CrawlerConfig) -> ClientSession:
    """Build the shared HTTP session used for every request of a run."""
    return ClientSession(
        timeout=ClientTimeout(total=config.timeout),
        headers={"User-Agent": config.user_agent},
        raise_for_status=False,
    )


class Fetcher:
    """PageFetcher backed by an aiohttp ClientSession."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> RawPage:
        try:
            async with self.session.get(url) as resp:
                body = await resp.read()
                return RawPage(url=url, body=body, status=resp.status)
        except (ClientError, asyncio.TimeoutError) as exc:
            raise FetchError(url, exc) from exc


__all__ = ["FetchError", "Fetcher", "PageFetcher", "open_session"]
