from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from layout_roles.framework import Artifact, register, with_metrics
from layout_roles.html_rows import DEFAULT_ROW_SELECTOR, extract_rows
from layout_roles.styles import MalformedStyleError


def _page_rows(page: Mapping[str, Any], row_selector: str) -> dict[str, Any]:
    number = page.get("page")
    try:
        rows = extract_rows(page.get("html", ""), row_selector)
    except MalformedStyleError as exc:
        raise MalformedStyleError(f"page {number}, {exc}") from exc
    return {"page": number, "rows": rows}


@dataclass
class _HtmlParsePass:
    """Turn ``page_html`` documents into ``page_rows`` without performing IO."""

    name: str = field(default="html_parse", init=False)
    input_type: type = field(default=dict, init=False)  # {"type": "page_html"}
    output_type: type = field(default=dict, init=False)  # {"type": "page_rows"}
    row_selector: str = DEFAULT_ROW_SELECTOR

    def __call__(self, a: Artifact) -> Artifact:
        doc = a.payload
        if not isinstance(doc, Mapping) or doc.get("type") != "page_html":
            return a
        pages = [_page_rows(p, self.row_selector) for p in doc.get("pages", [])]
        meta = with_metrics(
            a.meta,
            self.name,
            {"pages": len(pages), "rows": sum(len(p["rows"]) for p in pages)},
        )
        payload = {
            "type": "page_rows",
            "source_dir": doc.get("source_dir"),
            "pages": pages,
        }
        return Artifact(payload=payload, meta=meta)


html_parse = register(_HtmlParsePass())
