import pytest

from layout_roles.framework import Artifact
from layout_roles.passes.html_parse import html_parse
from layout_roles.rows import row_text
from layout_roles.styles import MalformedStyleError
from tests.utils.rows import chapter_page, page_html, plain_page


def _doc(*pages):
    return {
        "type": "page_html",
        "source_dir": "/tmp/html",
        "pages": [{"page": n, "html": html} for n, html in pages],
    }


def test_pages_become_rows_with_metrics():
    result = html_parse(Artifact(payload=_doc((9, chapter_page()), (10, plain_page())), meta={}))
    doc = result.payload
    assert doc["type"] == "page_rows"
    assert [p["page"] for p in doc["pages"]] == [9, 10]
    assert row_text(doc["pages"][1]["rows"][0]) == "The Beginning"
    assert result.meta["metrics"]["html_parse"] == {"pages": 2, "rows": 11}


def test_other_payloads_pass_through():
    a = Artifact(payload=[1, 2, 3], meta={})
    assert html_parse(a) is a


def test_malformed_row_names_its_page():
    broken = page_html(['<div class="txt" style="top:10px;"><span>x</span></div>'])
    with pytest.raises(MalformedStyleError, match="page 12, row 0"):
        html_parse(Artifact(payload=_doc((12, broken))))
