"""Row extraction from page-layout HTML.

Each page is a standalone HTML document whose ``body`` holds one ``div.txt``
per printed line.  A line's ``span`` children carry the text, each styled
inline and, through its ``id``, by a rule in the page stylesheet.
"""

from __future__ import annotations

import logging
from typing import List, Mapping

from bs4 import BeautifulSoup, Tag

from .rows import Row, Segment
from .styles import (
    MalformedStyleError,
    StyleRecord,
    merge_styles,
    parse_length,
    parse_style_declaration,
    shared_style_table,
    style_length,
)

logger = logging.getLogger(__name__)

DEFAULT_ROW_SELECTOR = "body > div.txt"

# Row container keys every classifier comparison relies on.
_ROW_LENGTH_KEYS = ("top", "left")


def _segment(span: Tag, shared: Mapping[str, StyleRecord]) -> Segment:
    inline = parse_style_declaration(span.get("style"))
    ident = span.get("id")
    return Segment(text=span.get_text(), style=merge_styles(shared.get(ident), inline))


def _validate(row: Row, index: int) -> Row:
    try:
        for key in _ROW_LENGTH_KEYS:
            style_length(row.style, key)
        for section in row.sections:
            if "fontSize" in section.style:
                parse_length(section.style["fontSize"])
    except MalformedStyleError as exc:
        raise MalformedStyleError(f"row {index}: {exc}") from exc
    return row


def _row(container: Tag, shared: Mapping[str, StyleRecord]) -> Row:
    return Row(
        sections=tuple(_segment(span, shared) for span in container.find_all("span")),
        style=parse_style_declaration(container.get("style")),
    )


def extract_rows(html: str, row_selector: str = DEFAULT_ROW_SELECTOR) -> List[Row]:
    """Return the page's rows in document order."""
    shared = shared_style_table(html)
    soup = BeautifulSoup(html, "html.parser")
    rows = [_validate(_row(c, shared), i) for i, c in enumerate(soup.select(row_selector))]
    logger.debug("extracted %d rows (%d shared styles)", len(rows), len(shared))
    return rows
