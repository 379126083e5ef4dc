# File: site_mapper/report/__init__.py
"""site_mapper.report: renderers for the crawled site (JSON, Graphviz dot, summary)."""

from __future__ import annotations

from pathlib import Path
from typing import Union

from .dot_report import render_dot
from .json_report import render_json
from .progress import echo_progress, render_progress
from .summary import render_summary


def write_report(text: str, path: Union[str, Path]) -> Path:
    """Save an already rendered report to *path*, creating parent directories."""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text if text.endswith("\n") else text + "\n", encoding="utf-8")
    return p


__all__ = [
    "echo_progress",
    "render_dot",
    "render_json",
    "render_progress",
    "render_summary",
    "write_report",
]
