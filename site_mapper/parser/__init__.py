"""site_mapper.parser: HTML tokenization and site-scope filtering."""

from .filters import Scope, build_valid_hosts, normalize_ref
from .html_parser import parse_collection, parse_page

__all__ = ["Scope", "build_valid_hosts", "normalize_ref", "parse_collection", "parse_page"]
