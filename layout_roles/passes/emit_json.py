from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from layout_roles.framework import Artifact, register, with_metrics
from layout_roles.roles import TaggedRow
from layout_roles.rows import Segment, segment_is_italic

Record = dict[str, Any]


def _section_record(section: Segment, annotate_italic: bool) -> Record:
    record: Record = {"text": section.text, "style": dict(section.style)}
    if annotate_italic:
        record["italic"] = segment_is_italic(section)
    return record


def tagged_row_record(tagged: TaggedRow, annotate_italic: bool = False) -> Record:
    """Plain, JSON-ready view of ``tagged``."""
    return {
        "rowType": tagged.role.value,
        "row": {
            "sections": [_section_record(s, annotate_italic) for s in tagged.row.sections],
            "style": dict(tagged.row.style),
        },
    }


@dataclass
class _EmitJsonPass:
    """Convert tagged rows to records; ``core`` writes them to ``output_path``."""

    name: str = field(default="emit_json", init=False)
    input_type: type = field(default=dict, init=False)  # {"type": "tagged_rows"}
    output_type: type = field(default=list, init=False)
    output_path: str | None = None
    format: str = "json"
    annotate_italic: bool = False

    def __post_init__(self) -> None:
        if self.format not in {"json", "jsonl"}:
            raise ValueError(f"Unsupported output format: {self.format}")

    def __call__(self, a: Artifact) -> Artifact:
        doc = a.payload
        if not isinstance(doc, Mapping) or doc.get("type") != "tagged_rows":
            return a
        records = [tagged_row_record(t, self.annotate_italic) for t in doc.get("items", [])]
        meta = with_metrics(a.meta, self.name, {"rows": len(records)})
        return Artifact(payload=records, meta=meta)


emit_json = register(_EmitJsonPass())
