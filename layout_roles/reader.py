"""Load page HTML files for a page range."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_PAGE_PATTERN = "page{n}.html"


def page_path(html_dir: str | Path, number: int, pattern: str = DEFAULT_PAGE_PATTERN) -> Path:
    return Path(html_dir) / pattern.format(n=number)


def read_pages(
    html_dir: str | Path,
    pages: Iterable[int],
    pattern: str = DEFAULT_PAGE_PATTERN,
) -> dict[str, Any]:
    """Return a ``page_html`` payload for ``pages``, read in the order given."""
    numbers = list(pages)
    paths = [(n, page_path(html_dir, n, pattern)) for n in numbers]
    missing = [str(p) for _, p in paths if not p.is_file()]
    if missing:
        raise FileNotFoundError(f"Missing page files: {', '.join(missing)}")
    logger.info("reading %d pages from %s", len(numbers), html_dir)
    return {
        "type": "page_html",
        "source_dir": str(Path(html_dir).resolve()),
        "pages": [{"page": n, "html": p.read_text(encoding="utf-8")} for n, p in paths],
    }
