# === FILE: site_mapper/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from site_mapper.crawler.fetcher import FetchError, PageFetcher
from site_mapper.crawler.models import Page, RawPage
from site_mapper.crawler.visited import VisitedSet
from site_mapper.logger import logger

__all__ = ("DEFAULT_POOL_SIZE", "CrawlEngine", "CrawlStats", "ProgressCallback", "pool_size")

DEFAULT_POOL_SIZE = 20

ProgressCallback = Callable[[str, int, int], None]


def pool_size(n: int, limit: int = DEFAULT_POOL_SIZE) -> int:
    """Number of workers for *n* anchors: never more than the anchors, never above *limit*."""
    return max(0, min(n, limit))


@dataclass(slots=True)
class CrawlStats:
    """Counters accumulated over every CrawlEngine.crawl call of a run."""
    pages: int = 0
    anchors: int = 0
    claimed: int = 0
    already_visited: int = 0
    fetched: int = 0
    failed: int = 0
    rejected: int = 0
    max_workers: int = 0


class CrawlEngine:
    """Fetches the not-yet-visited anchors of one page with a bounded pool of tasks."""

    def __init__(
        self,
        fetcher: PageFetcher,
        visited: VisitedSet,
        pool_limit: int = DEFAULT_POOL_SIZE,
        stats: CrawlStats | None = None,
        progress: Optional[ProgressCallback] = None,
    ) -> None:
        self.fetcher = fetcher
        self.visited = visited
        self.pool_limit = pool_limit
        self.stats = stats if stats is not None else CrawlStats()
        self.progress = progress

    async def crawl(self, page: Page) -> List[RawPage]:
        to_process = len(page.anchors)
        self.stats.pages += 1
        self.stats.anchors += to_process
        logger.info("%s contains %d URLs to crawl", page.url, to_process)
        if to_process == 0:
            logger.info("Crawled 0 URLs (no pages requested)")
            self._report(page.url, 0, 0)
            return []

        start = time.monotonic()
        queue: asyncio.Queue[str] = asyncio.Queue()
        # claims happen here, before any worker runs, so each URL is enqueued once per run
        for url in page.anchors:
            if self.visited.claim(url):
                self.stats.claimed += 1
                queue.put_nowait(url)
            else:
                self.stats.already_visited += 1

        workers = pool_size(to_process, self.pool_limit)
        self.stats.max_workers = max(self.stats.max_workers, workers)
        tasks = [asyncio.create_task(self._worker(queue)) for _ in range(workers)]
        try:
            batches = await asyncio.gather(*tasks)
        except BaseException:
            # one worker failed or the crawl was cancelled: stop the rest before propagating
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        pages = [raw for batch in batches for raw in batch]

        logger.info(
            "Crawled %d of %d URLs from %s in %.2f s",
            len(pages), to_process, page.url, time.monotonic() - start,
        )
        self._report(page.url, to_process, len(pages))
        return pages

    def _report(self, url: str, to_process: int, crawled: int) -> None:
        if self.progress is not None:
            self.progress(url, to_process, crawled)

    async def _worker(self, queue: asyncio.Queue[str]) -> List[RawPage]:
        fetched: List[RawPage] = []
        while True:
            try:
                url = queue.get_nowait()
            except asyncio.QueueEmpty:
                return fetched
            try:
                raw = await self.fetcher.fetch(url)
            except FetchError as exc:
                self.stats.failed += 1
                logger.warning("Failed %s", exc)
                continue
            finally:
                queue.task_done()
            if not raw.ok:
                self.stats.rejected += 1
                logger.warning("Skipping %s: HTTP %d", url, raw.status)
                continue
            self.stats.fetched += 1
            fetched.append(raw)
