# === FILE: site_mapper/config.py ===
"""
Loading and validation of the SiteMapper crawl configuration.
Pydantic describes the schema; YAML and JSON files are accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)


class CrawlerConfig(BaseModel):
    """Configuration for a single crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    hostname: str = Field("example.com", min_length=1, description="Site host without subdomain.")
    subdomains: List[str] = Field(
        default_factory=lambda: ["www", ""],
        description="Valid subdomains; an empty entry stands for the bare hostname.",
    )
    http_only: bool = Field(False, description="Use http instead of https.")
    timeout: float = Field(5.0, gt=0, description="Per-request timeout (seconds).")
    pool_size: int = Field(20, ge=1, description="Upper bound of fetch workers per page.")
    user_agent: str = Field("SiteMapperBot/1.0", min_length=1, description="User-Agent header.")

    @field_validator("hostname", mode="before")
    def _clean_hostname(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip().lower().rstrip("/")
            if "://" in v or "/" in v:
                raise ValueError("hostname must not contain a scheme or a path")
        return v

    @field_validator("subdomains", mode="before")
    def _split_subdomains(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, (list, tuple)):
            v = [str(s).strip().strip(".").lower() for s in v]
            if not v:
                raise ValueError("at least one subdomain (possibly empty) is required")
        return v

    @property
    def protocol(self) -> str:
        return "http" if self.http_only else "https"

    @property
    def canonical_host(self) -> str:
        """Host that own-site references without a host are rewritten to."""
        first = self.subdomains[0]
        return f"{first}.{self.hostname}" if first else self.hostname

    @property
    def entry_url(self) -> str:
        return f"{self.protocol}://{self.canonical_host}/"

    def with_overrides(self, **values: Any) -> CrawlerConfig:
        """Return a re-validated copy with the given non-None fields replaced."""
        data = self.model_dump()
        data.update({k: v for k, v in values.items() if v is not None})
        return CrawlerConfig(**data)


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None] = None) -> CrawlerConfig:
    """
    Read YAML or JSON and return a validated CrawlerConfig.
    Without a path, configs/default.yaml is used when present, else the defaults.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return CrawlerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "ValidationError", "load_config"]
