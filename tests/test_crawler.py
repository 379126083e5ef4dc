# File: tests/test_crawler.py
import asyncio
import logging

import pytest

from site_mapper.crawler.crawler import DEFAULT_POOL_SIZE, CrawlEngine, pool_size
from site_mapper.crawler.models import Page, RawPage
from site_mapper.crawler.visited import VisitedSet
from site_mapper.logger import logger

BASE = "http://www.example.com"


def anchors(n: int) -> list[str]:
    return [f"{BASE}/page{i}" for i in range(n)]


@pytest.mark.parametrize(
    "n,expected",
    [(0, 0), (1, 1), (5, 5), (19, 19), (20, 20), (21, 20), (500, 20)],
)
def test_pool_size(n, expected):
    assert DEFAULT_POOL_SIZE == 20
    assert pool_size(n) == expected


@pytest.mark.asyncio()
async def test_no_anchors_spins_up_no_workers(stub_fetcher):
    fetcher = stub_fetcher({})
    engine = CrawlEngine(fetcher, VisitedSet())

    assert await engine.crawl(Page(url=BASE + "/")) == []
    assert fetcher.calls == {}
    assert engine.stats.max_workers == 0


@pytest.mark.asyncio()
@pytest.mark.parametrize("n,expected", [(5, 5), (20, 20), (50, 20)])
async def test_concurrency_is_bounded_by_pool(stub_fetcher, n, expected):
    urls = anchors(n)
    fetcher = stub_fetcher({u: "<p>ok</p>" for u in urls}, delay=0.01)
    engine = CrawlEngine(fetcher, VisitedSet())

    pages = await engine.crawl(Page(url=BASE + "/", anchors=urls))

    assert sorted(p.url for p in pages) == sorted(urls)
    assert fetcher.max_in_flight == expected
    assert engine.stats.max_workers == expected


@pytest.mark.asyncio()
async def test_custom_pool_limit(stub_fetcher):
    urls = anchors(10)
    fetcher = stub_fetcher({u: "" for u in urls}, delay=0.01)
    engine = CrawlEngine(fetcher, VisitedSet(), pool_limit=3)

    await engine.crawl(Page(url=BASE + "/", anchors=urls))

    assert fetcher.max_in_flight == 3


@pytest.mark.asyncio()
async def test_already_visited_anchors_are_not_fetched(stub_fetcher):
    urls = anchors(6)
    fetcher = stub_fetcher({u: "" for u in urls})
    visited = VisitedSet(urls[:4])
    engine = CrawlEngine(fetcher, visited)

    pages = await engine.crawl(Page(url=BASE + "/", anchors=urls))

    assert sorted(p.url for p in pages) == urls[4:]
    assert set(fetcher.calls) == set(urls[4:])
    assert engine.stats.claimed == 2
    assert engine.stats.already_visited == 4


@pytest.mark.asyncio()
async def test_duplicate_anchor_fetched_once(stub_fetcher):
    url = BASE + "/same"
    fetcher = stub_fetcher({url: ""})
    engine = CrawlEngine(fetcher, VisitedSet())

    pages = await engine.crawl(Page(url=BASE + "/", anchors=[url, url, url]))

    assert len(pages) == 1
    assert fetcher.calls[url] == 1


@pytest.mark.asyncio()
async def test_failures_and_non_2xx_are_skipped(stub_fetcher):
    ok, down, error, missing = (f"{BASE}/{name}" for name in ("ok", "down", "error", "missing"))
    fetcher = stub_fetcher({ok: "<p>ok</p>", error: (500, "boom")}, failing=[down])
    engine = CrawlEngine(fetcher, VisitedSet())

    pages = await engine.crawl(Page(url=BASE + "/", anchors=[ok, down, error, missing]))

    assert [p.url for p in pages] == [ok]
    assert engine.stats.fetched == 1
    assert engine.stats.failed == 1
    assert engine.stats.rejected == 2
    assert all(fetcher.calls[u] == 1 for u in (ok, down, error, missing))


@pytest.mark.asyncio()
async def test_parallel_pages_share_one_visited_set(stub_fetcher):
    shared = anchors(30)
    fetcher = stub_fetcher({u: "" for u in shared}, delay=0.001)
    engine = CrawlEngine(fetcher, VisitedSet())
    first = Page(url=BASE + "/left", anchors=shared)
    second = Page(url=BASE + "/right", anchors=list(reversed(shared)))

    left, right = await asyncio.gather(engine.crawl(first), engine.crawl(second))

    assert len(left) + len(right) == len(shared)
    assert set(fetcher.calls) == set(shared)
    assert max(fetcher.calls.values()) == 1


@pytest.mark.asyncio()
async def test_each_skipped_page_logs_one_warning(stub_fetcher, monkeypatch, caplog):
    ok, down, error, missing = (f"{BASE}/{name}" for name in ("ok", "down", "error", "missing"))
    fetcher = stub_fetcher({ok: "<p>ok</p>", error: (500, "boom")}, failing=[down])
    engine = CrawlEngine(fetcher, VisitedSet())
    monkeypatch.setattr(logger, "propagate", True)

    with caplog.at_level(logging.WARNING, logger="SiteMapper"):
        await engine.crawl(Page(url=BASE + "/", anchors=[ok, down, error, missing]))

    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 3
    assert [m for m in warnings if down in m] == [f"Failed {down}: connection refused"]
    assert [m for m in warnings if error in m] == [f"Skipping {error}: HTTP 500"]
    assert [m for m in warnings if missing in m] == [f"Skipping {missing}: HTTP 404"]
    assert not any(ok in m for m in warnings)


class BrokenFetcher:
    """Raises ValueError at once for ``bad``; every other fetch takes ``delay`` seconds."""

    def __init__(self, bad: str, delay: float) -> None:
        self.bad = bad
        self.delay = delay
        self.started = 0
        self.completed = 0

    async def fetch(self, url: str) -> RawPage:
        self.started += 1
        if url == self.bad:
            raise ValueError(f"cannot decode {url}")
        await asyncio.sleep(self.delay)
        self.completed += 1
        return RawPage(url=url, body=b"", status=200)


@pytest.mark.asyncio()
async def test_unexpected_error_cancels_remaining_workers():
    urls = anchors(4)
    fetcher = BrokenFetcher(bad=urls[1], delay=0.05)
    engine = CrawlEngine(fetcher, VisitedSet())

    with pytest.raises(ValueError, match="cannot decode"):
        await engine.crawl(Page(url=BASE + "/", anchors=urls))

    await asyncio.sleep(0.1)
    assert fetcher.started == 4
    assert fetcher.completed == 0
    pending = [t for t in asyncio.all_tasks() if t is not asyncio.current_task()]
    assert pending == []


@pytest.mark.asyncio()
async def test_progress_reported_per_page(stub_fetcher):
    urls = anchors(3)
    fetcher = stub_fetcher({urls[0]: "", urls[1]: ""})
    calls = []
    engine = CrawlEngine(fetcher, VisitedSet(), progress=lambda *args: calls.append(args))

    await engine.crawl(Page(url=BASE + "/", anchors=urls))
    await engine.crawl(Page(url=BASE + "/empty"))

    assert calls == [(BASE + "/", 3, 2), (BASE + "/empty", 0, 0)]
