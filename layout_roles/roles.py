"""Row role classification.

Every row of a page gets exactly one :class:`RoleTag`.  Rows are visited in
order and each is checked against :data:`ROLE_PREDICATES` top to bottom; the
first predicate that holds decides the role.  Predicates see the row plus a
:class:`ScanState` summarising the rows already classified on the same page,
so the table order is part of the behaviour:

* a row that looks like both a heading and body text is a heading;
* once a footnote starts, every later row on the page is a footnote, because
  ``FOOTNOTE`` is tried before ``BODY`` and its second clause only asks whether
  a footnote was seen.

A row no predicate accepts stops the run with :class:`UnclassifiableRowError`
rather than being guessed at.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from .rows import Row, first_text, row_text
from .styles import parse_length, style_length

logger = logging.getLogger(__name__)


class RoleTag(str, Enum):
    CHAPTER_NUMBER = "CHAPTER_NUMBER"
    CHAPTER_HEADING = "CHAPTER_HEADING"
    INTRO_VERSE = "INTRO_VERSE"
    PAGE_HEADER = "PAGE_HEADER"
    FOOTNOTE = "FOOTNOTE"
    BODY = "BODY"


@dataclass(frozen=True)
class TaggedRow:
    role: RoleTag
    row: Row


@dataclass(frozen=True)
class ScanState:
    """What the classifier remembers about the current page."""

    is_first_row: bool = True
    seen: FrozenSet[RoleTag] = field(default_factory=frozenset)
    previous_row: Optional[Row] = None

    def advance(self, role: RoleTag, row: Row) -> ScanState:
        return ScanState(is_first_row=False, seen=self.seen | {role}, previous_row=row)


class UnclassifiableRowError(RuntimeError):
    """No role predicate accepted a row."""

    def __init__(self, text: str, index: int, page: Optional[int] = None) -> None:
        where = f"page {page}, row {index}" if page is not None else f"row {index}"
        super().__init__(f"No role matches {where}: {text!r}")
        self.text = text
        self.index = index
        self.page = page


# -- Layout helpers ----------------------------------------------------------------------

GAP_THRESHOLD = 20

_DIGITS_RE = re.compile(r"[0-9]+")
_NO_LOWERCASE_RE = re.compile(r"[^a-z]+")


def _top(row: Row) -> int:
    return style_length(row.style, "top")


def _left(row: Row) -> int:
    return style_length(row.style, "left")


def vertical_distance(a: Optional[Row], b: Row) -> int:
    """Absolute ``top`` offset between two rows; 0 when there is no earlier row."""
    return abs(_top(a) - _top(b)) if a is not None else 0


def vertical_gap(a: Optional[Row], b: Row) -> bool:
    """True when ``b`` sits far enough from ``a`` to start a separate block."""
    return vertical_distance(a, b) > GAP_THRESHOLD


def all_digits(text: str) -> bool:
    return _DIGITS_RE.fullmatch(text) is not None


def starts_with_digits(text: str) -> bool:
    return _DIGITS_RE.match(text) is not None


def all_uppercase(text: str) -> bool:
    """Non-empty and free of lowercase letters; digits and punctuation allowed."""
    return _NO_LOWERCASE_RE.fullmatch(text) is not None


def _has_small_print(row: Row) -> bool:
    return any(
        parse_length(section.style["fontSize"]) <= 9
        for section in row.sections
        if "fontSize" in section.style
    )


# -- Predicates --------------------------------------------------------------------------

Predicate = Callable[[Row, ScanState], bool]


def is_chapter_number(row: Row, state: ScanState) -> bool:
    return (
        state.is_first_row
        and len(row.sections) == 1
        and _top(row) > 120
        and all_digits(row.sections[0].text)
    )


def is_chapter_heading(row: Row, state: ScanState) -> bool:
    return _top(row) < 200 and all(all_uppercase(s.text) for s in row.sections)


def is_intro_verse(row: Row, state: ScanState) -> bool:
    seen = state.seen
    # After the first verse line a large gap means the prose has begun.
    could_be_body = RoleTag.INTRO_VERSE in seen and vertical_gap(state.previous_row, row)
    return (
        RoleTag.CHAPTER_HEADING in seen
        and RoleTag.BODY not in seen
        and not could_be_body
        and _left(row) > 50
    )


def is_page_header(row: Row, state: ScanState) -> bool:
    seen = state.seen
    number_at_top = RoleTag.BODY not in seen and _top(row) < 50
    number_at_bottom = (
        RoleTag.CHAPTER_HEADING in seen
        and RoleTag.BODY in seen
        and vertical_distance(state.previous_row, row) > 15
        and all_digits(first_text(row))
        and _top(row) > 560
    )
    return number_at_top or number_at_bottom


def is_footnote(row: Row, state: ScanState) -> bool:
    seen = state.seen
    starts_footnotes = (
        RoleTag.BODY in seen
        and RoleTag.FOOTNOTE not in seen
        and starts_with_digits(first_text(row))
        and vertical_gap(state.previous_row, row)
        and _has_small_print(row)
    )
    # TODO: confirm against reference output whether rows after a footnote
    # block that look like body text should really stay footnotes.
    return starts_footnotes or RoleTag.FOOTNOTE in seen


def is_body(row: Row, state: ScanState) -> bool:
    seen = state.seen
    first_after_intro = (
        RoleTag.INTRO_VERSE in seen
        and RoleTag.BODY not in seen
        and vertical_gap(state.previous_row, row)
    )
    return first_after_intro or RoleTag.FOOTNOTE not in seen


# Evaluation order is priority order: first match wins.
ROLE_PREDICATES: Tuple[Tuple[RoleTag, Predicate], ...] = (
    (RoleTag.CHAPTER_NUMBER, is_chapter_number),
    (RoleTag.CHAPTER_HEADING, is_chapter_heading),
    (RoleTag.INTRO_VERSE, is_intro_verse),
    (RoleTag.PAGE_HEADER, is_page_header),
    (RoleTag.FOOTNOTE, is_footnote),
    (RoleTag.BODY, is_body),
)


# -- Classification ----------------------------------------------------------------------


def classify_row(row: Row, state: ScanState) -> Optional[RoleTag]:
    """Return the highest-priority role whose predicate accepts ``row``, if any."""
    return next((role for role, predicate in ROLE_PREDICATES if predicate(row, state)), None)


def classify_page(rows: Sequence[Row], page: Optional[int] = None) -> List[TaggedRow]:
    """Tag every row of one page, in order, starting from a fresh scan state."""
    state = ScanState()
    tagged: List[TaggedRow] = []
    for index, row in enumerate(rows):
        role = classify_row(row, state)
        if role is None:
            raise UnclassifiableRowError(row_text(row), index, page)
        tagged.append(TaggedRow(role=role, row=row))
        state = state.advance(role, row)
    logger.debug(
        "page %s: %s",
        page,
        dict(Counter(t.role.value for t in tagged)),
    )
    return tagged


def classify_pages(pages: Iterable[Tuple[int, Sequence[Row]]]) -> List[TaggedRow]:
    """Classify pages independently and concatenate their tagged rows in page order."""
    return [tagged for number, rows in pages for tagged in classify_page(rows, page=number)]
