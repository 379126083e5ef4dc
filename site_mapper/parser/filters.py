"""
Scope rules deciding which references of a page belong to the crawled site.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from site_mapper.config import CrawlerConfig
from site_mapper.logger import logger

EXCLUDED_EXTENSIONS = re.compile(r"\.(?:doc|ico|pdf|gif|jpg|png)$", re.IGNORECASE)

_WEB_SCHEMES = ("http", "https")


def build_valid_hosts(hostname: str, subdomains: Iterable[str]) -> frozenset[str]:
    """``{sub}.{hostname}`` for each subdomain; an empty subdomain yields the bare hostname."""
    return frozenset(f"{sub}.{hostname}" if sub else hostname for sub in subdomains)


@dataclass(frozen=True, slots=True)
class Scope:
    protocol: str
    hostname: str
    canonical_host: str
    valid_hosts: frozenset[str]

    @classmethod
    def from_config(cls, config: CrawlerConfig) -> Scope:
        return cls(
            protocol=config.protocol,
            hostname=config.hostname,
            canonical_host=config.canonical_host,
            valid_hosts=build_valid_hosts(config.hostname, config.subdomains),
        )


def is_canonical(attrs: Mapping[str, object]) -> bool:
    """A <link rel="canonical"> names the page itself, not an asset."""
    rel = attrs.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return any(str(r).lower() == "canonical" for r in rel)


def missing_script_src(attrs: Mapping[str, object]) -> bool:
    return not attrs.get("src")


def normalize_ref(raw: str, base_url: str, scope: Scope) -> Optional[str]:
    """Return the absolute in-scope form of *raw*, or None if it must be dropped.

    References without a host, or with the bare hostname, are rewritten onto
    ``scope.canonical_host``; every kept URL gets ``scope.protocol``. Only host-less
    relative paths are resolved against *base_url*. Query and fragment are dropped.
    """
    raw = raw.strip()
    try:
        parsed = urlsplit(raw)
    except ValueError:
        logger.debug("URL_INVALID %s", raw)
        return None

    if parsed.scheme and parsed.scheme.lower() not in _WEB_SCHEMES:
        logger.debug("URL_INVALID %s (scheme)", raw)
        return None

    if EXCLUDED_EXTENSIONS.search(parsed.path):
        logger.debug("URL_INVALID %s (extension)", raw)
        return None

    host = parsed.netloc.lower()
    path = parsed.path
    if not host and not path.startswith("/"):
        path = urlsplit(urljoin(base_url, path)).path

    if not host or host == scope.hostname:
        return urlunsplit((scope.protocol, scope.canonical_host, path or "/", "", ""))

    if host not in scope.valid_hosts:
        logger.debug("URL_INVALID %s (host)", raw)
        return None

    return urlunsplit((scope.protocol, host, path or "/", "", ""))


__all__ = [
    "EXCLUDED_EXTENSIONS",
    "Scope",
    "build_valid_hosts",
    "is_canonical",
    "missing_script_src",
    "normalize_ref",
]
