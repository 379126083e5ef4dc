"""site_mapper.session: state owned by one crawl run."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from site_mapper.crawler.crawler import CrawlStats
from site_mapper.crawler.models import Page
from site_mapper.crawler.visited import VisitedSet


@dataclass
class CrawlSession:
    """Visited URLs, collected pages and counters of a single run.

    ``results`` is append-only; only the orchestrator records into it.
    """

    visited: VisitedSet = field(default_factory=VisitedSet)
    results: List[Page] = field(default_factory=list)
    stats: CrawlStats = field(default_factory=CrawlStats)
    started_at: float = field(default_factory=time.monotonic)
    finished_at: Optional[float] = None

    def record(self, pages: Iterable[Page]) -> None:
        self.results.extend(pages)

    def finish(self) -> None:
        self.finished_at = time.monotonic()

    @property
    def elapsed(self) -> float:
        end = self.finished_at if self.finished_at is not None else time.monotonic()
        return end - self.started_at


__all__ = ["CrawlSession"]
