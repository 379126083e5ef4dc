# File: site_mapper/report/dot_report.py
"""site_mapper.report.dot_report: Graphviz dot rendering through a Jinja2 template."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterable

from jinja2 import Environment, PackageLoader, StrictUndefined

from site_mapper.crawler.models import Page

_TEMPLATE = "sitemap.dot.j2"


def dot_quote(value: str) -> str:
    """Escape a string for use inside a double-quoted dot identifier."""
    return str(value).replace("\\", "\\\\").replace('"', '\\"')


@lru_cache(maxsize=1)
def _environment() -> Environment:
    env = Environment(
        loader=PackageLoader("site_mapper", "templates"),
        autoescape=False,
        undefined=StrictUndefined,
    )
    env.filters["dot_quote"] = dot_quote
    return env


def render_dot(pages: Iterable[Page]) -> str:
    """Render a ``digraph sitemap`` with one block per page, anchors only.

    Example:
    ```python
    from site_mapper.report.dot_report import render_dot
    print(render_dot(session.results))  # pipe into `dot -Tsvg`
    ```
    """
    template = _environment().get_template(_TEMPLATE)
    return template.render(pages=list(pages))
