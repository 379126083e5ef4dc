"""Per-page progress lines printed on stderr while a crawl runs."""
from __future__ import annotations

import click

SEPARATOR = "-" * 25


def render_progress(url: str, to_process: int, crawled: int) -> str:
    """Red when every anchor was fetched, yellow when some were skipped, green when none were asked for."""
    lines = [SEPARATOR, url, f"Contains {to_process} URLs to crawl"]
    if to_process == 0:
        lines.append(f"Crawled {click.style(str(crawled), fg='green')} URLs (no pages requested)")
    elif crawled == to_process:
        lines.append(f"Crawled {click.style(str(crawled), fg='red')} URLs")
    else:
        lines.append(f"Crawled {click.style(str(crawled), fg='yellow')} URLs")
    return "\n".join(lines)


def echo_progress(url: str, to_process: int, crawled: int) -> None:
    click.echo(render_progress(url, to_process, crawled), err=True)
