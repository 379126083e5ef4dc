"""
Data models for the SiteMapper crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(slots=True)
class RawPage:
    """Result of one HTTP GET: requested URL, raw body and status code."""

    url: str
    body: bytes
    status: int

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


@dataclass(slots=True)
class RawRef:
    """A kept <a>, <link> or <script> tag; its href/src is already absolute."""

    tag: str
    attrs: Dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> Optional[str]:
        return self.attrs.get(key)


@dataclass(slots=True)
class TokenizedPage:
    url: str
    anchors: List[RawRef] = field(default_factory=list)
    links: List[RawRef] = field(default_factory=list)
    scripts: List[RawRef] = field(default_factory=list)


@dataclass(slots=True)
class Page:
    """Mapped page: deduplicated absolute URLs per asset category."""

    url: str
    anchors: List[str] = field(default_factory=list)
    links: List[str] = field(default_factory=list)
    scripts: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
