# === FILE: site_mapper/parser/html_parser.py ===
"""HTML tokenization for SiteMapper.

:func:`parse_page` walks the ``<a>``, ``<link>`` and ``<script>`` start tags of a
fetched page in document order and keeps the ones that point at the crawled
site:

* ``<link rel="canonical">`` is dropped - it names the page, not an asset.
* ``<script>`` without ``src`` is inline code and is dropped.
* every ``href``/``src`` goes through :func:`~site_mapper.parser.filters.normalize_ref`;
  rejected references vanish silently, kept ones are stored in absolute form.

The result is a :class:`~site_mapper.crawler.models.TokenizedPage`; deduplication
is the mapper's job.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_mapper.crawler.models import RawPage, RawRef, TokenizedPage
from site_mapper.logger import logger
from site_mapper.parser.filters import Scope, is_canonical, missing_script_src, normalize_ref

__all__: Sequence[str] = ("parse_page", "parse_collection")

_TAGS = ["a", "link", "script"]


def _keep(tag: Tag, key: str, base_url: str, scope: Scope) -> Optional[RawRef]:
    attrs = tag.attrs
    value = attrs.get(key)
    if not isinstance(value, str):
        return None
    absolute = normalize_ref(value, base_url, scope)
    if absolute is None:
        return None
    kept = {k: v if isinstance(v, str) else " ".join(v) for k, v in attrs.items()}
    kept[key] = absolute
    return RawRef(tag=tag.name, attrs=kept)


def parse_page(page: RawPage, scope: Scope) -> TokenizedPage:
    """Tokenize *page.body* into categorized, in-scope references."""
    soup = BeautifulSoup(page.body, "html.parser")
    result = TokenizedPage(url=page.url)

    for tag in soup.find_all(_TAGS):
        if not isinstance(tag, Tag):
            continue
        if tag.name == "link":
            if is_canonical(tag.attrs):
                continue
            ref = _keep(tag, "href", page.url, scope)
            if ref:
                result.links.append(ref)
        elif tag.name == "script":
            if missing_script_src(tag.attrs):
                continue
            ref = _keep(tag, "src", page.url, scope)
            if ref:
                result.scripts.append(ref)
        else:
            ref = _keep(tag, "href", page.url, scope)
            if ref:
                result.anchors.append(ref)

    logger.debug(
        "Parsed %s: %d anchors, %d links, %d scripts",
        page.url, len(result.anchors), len(result.links), len(result.scripts),
    )
    return result


def parse_collection(pages: Iterable[RawPage], scope: Scope) -> List[TokenizedPage]:
    """Parse every 2xx page in input order; others are skipped."""
    parsed: List[TokenizedPage] = []
    for page in pages:
        if not page.ok:
            logger.debug("Not parsing %s: HTTP %d", page.url, page.status)
            continue
        parsed.append(parse_page(page, scope))
    return parsed
