# File: site_mapper/utils.py
"""site_mapper.utils: small helpers shared by the mapper and the reports."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from site_mapper.logger import logger

__all__: Sequence[str] = ("remove_duplicates", "format_elapsed")


def remove_duplicates(urls: Iterable[str]) -> List[str]:
    """Remove duplicate URLs, keeping the order of first occurrence."""
    urls = list(urls)
    unique = list(dict.fromkeys(urls))
    removed = len(urls) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate URLs", removed)
    return unique


def format_elapsed(seconds: float) -> str:
    """Human-readable duration: ``850ms``, ``12.34s`` or ``3m05.2s``."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, rest = divmod(seconds, 60)
    return f"{int(minutes)}m{rest:04.1f}s"
