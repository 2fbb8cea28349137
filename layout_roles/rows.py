from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from .styles import EMPTY_STYLE, StyleRecord

# -- Data models -------------------------------------------------------------------------


@dataclass(frozen=True)
class Segment:
    """A run of text inside a row sharing one merged style."""

    text: str
    style: StyleRecord = field(default_factory=lambda: EMPTY_STYLE)


@dataclass(frozen=True)
class Row:
    """One line of a page: its container's style plus its segments in markup order."""

    sections: Tuple[Segment, ...]
    style: StyleRecord = field(default_factory=lambda: EMPTY_STYLE)


# -- Helpers -----------------------------------------------------------------------------


def row_text(row: Row) -> str:
    return "".join(section.text for section in row.sections)


def first_text(row: Row) -> str:
    """Text of the first segment, or ``""`` for a row without segments."""
    return row.sections[0].text if row.sections else ""


def segment_is_italic(segment: Segment) -> bool:
    return segment.style.get("fontStyle") == "italic"


def chapter_number(row: Row) -> int:
    return int(first_text(row))
