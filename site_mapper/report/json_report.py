# site_mapper/report/json_report.py

"""
JSON rendering of the crawled pages.
"""
import json
from typing import Iterable

from site_mapper.crawler.models import Page


def render_json(pages: Iterable[Page], pretty: bool = True) -> str:
    """
    Serialize pages as a JSON list of ``{url, anchors, links, scripts}`` objects.

    :param pages: crawled pages in result order
    :param pretty: indent with two spaces (default) or emit a single line
    :return: the JSON document

    Example:
    ```python
    from site_mapper.report.json_report import render_json
    print(render_json(session.results))
    ```
    """
    data = [page.as_dict() for page in pages]
    return json.dumps(data, ensure_ascii=False, indent=2 if pretty else None)
