"""Persist emitted records to disk."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _prepare(path: str | Path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    return target


def write_document(
    records: Iterable[Mapping[str, Any]], path: str | Path, indent: str = "\t"
) -> Path:
    """Write ``records`` as a single JSON array."""
    rows = list(records)
    target = _prepare(path)
    target.write_text(json.dumps(rows, indent=indent, ensure_ascii=False), encoding="utf-8")
    logger.info("wrote %d rows to %s", len(rows), target)
    return target


def write_jsonl(records: Iterable[Mapping[str, Any]], path: str | Path) -> Path:
    """Write one JSON object per line."""
    lines = [json.dumps(r, ensure_ascii=False) for r in records]
    target = _prepare(path)
    target.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    logger.info("wrote %d rows to %s", len(lines), target)
    return target


_WRITERS = {"json": write_document, "jsonl": write_jsonl}


def write_records(
    records: Iterable[Mapping[str, Any]], path: str | Path, fmt: str = "json"
) -> Path:
    try:
        writer = _WRITERS[fmt]
    except KeyError:
        raise ValueError(f"Unsupported output format: {fmt}") from None
    return writer(records, path)
