# File: tests/conftest.py
import asyncio
from collections import Counter
from typing import AsyncIterator, Callable, Dict, Iterable, Tuple, Union

import pytest
import pytest_asyncio
from aiohttp import web

from site_mapper.config import CrawlerConfig
from site_mapper.crawler.fetcher import FetchError
from site_mapper.crawler.models import RawPage
from site_mapper.parser.filters import Scope

PageEntry = Union[str, Tuple[int, str]]


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


class StubFetcher:
    """In-memory site used instead of HTTP.

    ``pages`` maps a URL to an HTML body (status 200) or a ``(status, body)`` pair;
    unknown URLs answer 404 and URLs in ``failing`` raise FetchError.
    Every call is counted, as is the peak number of concurrent fetches.
    """

    def __init__(
        self,
        pages: Dict[str, PageEntry],
        failing: Iterable[str] = (),
        delay: float = 0.0,
    ) -> None:
        self.pages = dict(pages)
        self.failing = set(failing)
        self.delay = delay
        self.calls: Counter = Counter()
        self.in_flight = 0
        self.max_in_flight = 0

    async def fetch(self, url: str) -> RawPage:
        self.calls[url] += 1
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
        finally:
            self.in_flight -= 1
        if url in self.failing:
            raise FetchError(url, ConnectionRefusedError("connection refused"))
        entry = self.pages.get(url)
        if entry is None:
            return RawPage(url=url, body=b"<h1>Not Found</h1>", status=404)
        status, body = entry if isinstance(entry, tuple) else (200, entry)
        return RawPage(url=url, body=body.encode("utf-8"), status=status)


@pytest.fixture()
def stub_fetcher() -> Callable[..., StubFetcher]:
    """Factory for StubFetcher instances."""
    return StubFetcher


@pytest.fixture()
def config() -> CrawlerConfig:
    """www.example.com and the bare host, over http."""
    return CrawlerConfig(hostname="example.com", subdomains="www,", http_only=True)


@pytest.fixture()
def scope(config) -> Scope:
    return Scope.from_config(config)


@pytest_asyncio.fixture
async def serve(unused_tcp_port: int) -> AsyncIterator[Callable]:
    """Start an aiohttp app on a free port; returns its ``host:port``."""
    runners = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", unused_tcp_port)
        await site.start()
        runners.append(runner)
        return f"127.0.0.1:{unused_tcp_port}"

    yield _serve
    for runner in runners:
        await runner.cleanup()
