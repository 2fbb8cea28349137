from typing import Iterable, List


def _to_int(part: str) -> int:
    """Return a validated 1-based page number from ``part``."""
    try:
        number = int(part)
    except ValueError as exc:
        raise ValueError(f"Invalid page number: {part}") from exc
    if number < 1:
        raise ValueError(f"Invalid page number: {part}")
    return number


def _expand(part: str) -> Iterable[int]:
    head, *tail = part.split("-", 1)
    start = _to_int(head.strip())
    if not tail:
        return (start,)
    end = _to_int(tail[0].strip())
    if start > end:
        raise ValueError(f"Invalid range: {part}")
    return range(start, end + 1)


def parse_page_ranges(page_spec: str) -> List[int]:
    """``"9-11,15"`` -> ``[9, 10, 11, 15]``: sorted, de-duplicated, 1-based."""
    if not page_spec or not page_spec.strip():
        raise ValueError("Empty page range")
    parts = (p.strip() for p in page_spec.split(",") if p.strip())
    return sorted({n for part in parts for n in _expand(part)})
