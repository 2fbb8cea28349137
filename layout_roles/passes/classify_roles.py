from __future__ import annotations

"""Role classification pass.

Consumes ``page_rows`` and emits ``tagged_rows``: one flat, page-ordered list
of :class:`~layout_roles.roles.TaggedRow`.  Each page is classified from a
fresh scan state, so nothing learned on one page leaks into the next.
"""

from collections import Counter
from collections.abc import Iterable, Mapping
from typing import Any

from layout_roles.framework import Artifact, register, with_metrics
from layout_roles.roles import RoleTag, TaggedRow, classify_pages
from layout_roles.rows import chapter_number


def _pages(doc: Mapping[str, Any]) -> Iterable[tuple[int, list]]:
    return ((p.get("page"), p.get("rows", [])) for p in doc.get("pages", []))


def _metrics(items: list[TaggedRow], pages: int) -> dict[str, Any]:
    counts = Counter(t.role.value for t in items)
    return {
        "pages": pages,
        "rows": len(items),
        "roles": {role.value: counts.get(role.value, 0) for role in RoleTag},
        "chapters": [chapter_number(t.row) for t in items if t.role is RoleTag.CHAPTER_NUMBER],
    }


class _ClassifyRolesPass:
    name = "classify_roles"
    input_type = dict
    output_type = dict

    def __call__(self, a: Artifact) -> Artifact:
        doc = a.payload
        if not isinstance(doc, Mapping) or doc.get("type") != "page_rows":
            return a
        items = classify_pages(_pages(doc))
        meta = with_metrics(a.meta, self.name, _metrics(items, len(doc.get("pages", []))))
        payload = {"type": "tagged_rows", "items": items}
        return Artifact(payload=payload, meta=meta)


classify_roles = register(_ClassifyRolesPass())
