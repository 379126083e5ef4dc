"""site_mapper.mapper: turns tokenized pages into deduplicated Page records.

Kept apart from the parser so that the tokenized form stays available to other
consumers; the mapper only picks the URL attribute of each category.
"""

from __future__ import annotations

from typing import Iterable, List

from site_mapper.crawler.models import Page, RawRef, TokenizedPage
from site_mapper.utils import remove_duplicates

__all__ = ["map_page", "map_collection"]


def _values(refs: Iterable[RawRef], key: str) -> List[str]:
    return remove_duplicates(v for v in (ref.get(key) for ref in refs) if v)


def map_page(page: TokenizedPage) -> Page:
    """Associate a page with its unique anchors, stylesheet links and script sources."""
    return Page(
        url=page.url,
        anchors=_values(page.anchors, "href"),
        links=_values(page.links, "href"),
        scripts=_values(page.scripts, "src"),
    )


def map_collection(pages: Iterable[TokenizedPage]) -> List[Page]:
    return [map_page(page) for page in pages]
