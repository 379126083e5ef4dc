# File: site_mapper/engine.py
"""site_mapper.engine: orchestration of a whole crawl, from the entry page to the fixpoint."""

from __future__ import annotations

from typing import List, Optional

from aiohttp import ClientSession

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.crawler import CrawlEngine, ProgressCallback
from site_mapper.crawler.fetcher import FetchError, Fetcher, PageFetcher, open_session
from site_mapper.crawler.models import Page
from site_mapper.logger import logger
from site_mapper.mapper import map_collection, map_page
from site_mapper.parser.filters import Scope
from site_mapper.parser.html_parser import parse_collection, parse_page
from site_mapper.session import CrawlSession

__all__ = ["Engine", "EntryPageError", "start_crawl"]


class EntryPageError(RuntimeError):
    """The entry page could not be fetched or did not answer 200: nothing to crawl."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        self.url = url
        self.status = status
        super().__init__(f"Entry page {url}: {reason}")


class Engine:
    """Crawls one site round by round until a round discovers no new page.

    Used as an async context manager; without an injected fetcher it owns an
    aiohttp session for the lifetime of the ``async with`` block.
    """

    def __init__(
        self,
        config: CrawlerConfig,
        fetcher: Optional[PageFetcher] = None,
        session: Optional[CrawlSession] = None,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        self.config = config
        self.scope = Scope.from_config(config)
        self.fetcher = fetcher
        self.session = session if session is not None else CrawlSession()
        self.progress = progress
        self._http: Optional[ClientSession] = None

    async def __aenter__(self) -> Engine:
        if self.fetcher is None:
            self._http = open_session(self.config)
            self.fetcher = Fetcher(self._http)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._http and not self._http.closed:
            await self._http.close()

    async def crawl(self) -> CrawlSession:
        if self.fetcher is None:
            raise RuntimeError("Engine must be entered with 'async with' before crawling")
        session = self.session
        engine = CrawlEngine(
            self.fetcher,
            session.visited,
            pool_limit=self.config.pool_size,
            stats=session.stats,
            progress=self.progress,
        )

        seed = await self._fetch_entry()
        session.record([seed])

        batch: List[Page] = [seed]
        rounds = 0
        while batch:
            rounds += 1
            next_batch: List[Page] = []
            for page in batch:
                fetched = await engine.crawl(page)
                mapped = map_collection(parse_collection(fetched, self.scope))
                session.record(mapped)
                next_batch.extend(mapped)
            logger.info("Round %d: %d pages in, %d new pages", rounds, len(batch), len(next_batch))
            batch = next_batch

        session.finish()
        logger.info(
            "Finished: %d pages in %.2f s (%d failed, %d rejected)",
            len(session.results), session.elapsed, session.stats.failed, session.stats.rejected,
        )
        return session

    async def _fetch_entry(self) -> Page:
        url = self.config.entry_url
        logger.info("Starting crawl: %s", url)
        self.session.visited.claim(url)
        try:
            raw = await self.fetcher.fetch(url)  # type: ignore[union-attr]
        except FetchError as exc:
            raise EntryPageError(url, str(exc.cause) or type(exc.cause).__name__) from exc
        if raw.status != 200:
            raise EntryPageError(url, f"HTTP {raw.status}", status=raw.status)
        return map_page(parse_page(raw, self.scope))


async def start_crawl(
    config: CrawlerConfig, progress: Optional[ProgressCallback] = None
) -> CrawlSession:
    """Run a full crawl with a fresh session and the default aiohttp fetcher.

    *progress* is called after every page with its URL, anchor count and fetched count.
    """
    async with Engine(config, progress=progress) as engine:
        return await engine.crawl()
