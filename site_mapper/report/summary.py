"""site_mapper.report.summary: the default human-readable outcome of a crawl."""

from __future__ import annotations

import click

from site_mapper.session import CrawlSession
from site_mapper.utils import format_elapsed


def _green(value: object) -> str:
    return click.style(str(value), fg="green")


def render_summary(session: CrawlSession) -> str:
    stats = session.stats
    lines = [
        "-------------------------",
        "",
        f"Number of URLs crawled and processed: {_green(len(session.results))}",
        f"Time: {_green(format_elapsed(session.elapsed))}",
    ]
    if stats.failed or stats.rejected:
        lines.append(
            f"Skipped: {click.style(str(stats.failed), fg='red')} failed, "
            f"{click.style(str(stats.rejected), fg='yellow')} non-2xx"
        )
    return "\n".join(lines)
