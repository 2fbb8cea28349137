import json
from dataclasses import replace

import pytest

from layout_roles.framework import Artifact
from layout_roles.passes.emit_json import emit_json, tagged_row_record
from layout_roles.roles import RoleTag, TaggedRow
from layout_roles.writer import write_document, write_jsonl, write_records
from tests.utils.rows import make_row


def _tagged():
    return [
        TaggedRow(RoleTag.CHAPTER_NUMBER, make_row("3", top=150, left=80)),
        TaggedRow(RoleTag.INTRO_VERSE, make_row("verse", top=210, left=60, font_style="italic")),
    ]


def test_record_shape():
    record = tagged_row_record(_tagged()[0])
    assert record == {
        "rowType": "CHAPTER_NUMBER",
        "row": {
            "sections": [{"text": "3", "style": {"fontSize": "12px"}}],
            "style": {"top": "150px", "left": "80px"},
        },
    }


def test_pass_emits_records_in_order():
    result = emit_json(Artifact(payload={"type": "tagged_rows", "items": _tagged()}, meta={}))
    assert [r["rowType"] for r in result.payload] == ["CHAPTER_NUMBER", "INTRO_VERSE"]
    assert result.meta["metrics"]["emit_json"] == {"rows": 2}
    assert "italic" not in result.payload[1]["row"]["sections"][0]


def test_italic_annotation_is_opt_in():
    annotated = replace(emit_json, annotate_italic=True)
    result = annotated(Artifact(payload={"type": "tagged_rows", "items": _tagged()}))
    assert [r["row"]["sections"][0]["italic"] for r in result.payload] == [False, True]


def test_unknown_format_rejected():
    with pytest.raises(ValueError, match="Unsupported output format"):
        replace(emit_json, format="xml")


def test_write_document_uses_tab_indent(tmp_path):
    records = [tagged_row_record(t) for t in _tagged()]
    path = write_document(records, tmp_path / "nested" / "content.json")
    text = path.read_text(encoding="utf-8")
    assert text.startswith("[\n\t{")
    assert json.loads(text) == records


def test_write_jsonl_one_record_per_line(tmp_path):
    records = [tagged_row_record(t) for t in _tagged()]
    path = write_jsonl(records, tmp_path / "content.jsonl")
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line) for line in lines] == records


def test_write_records_rejects_unknown_format(tmp_path):
    with pytest.raises(ValueError):
        write_records([], tmp_path / "x", "xml")
