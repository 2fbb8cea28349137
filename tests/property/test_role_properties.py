from hypothesis import given, settings, strategies as st

from layout_roles.roles import RoleTag, classify_page, classify_pages
from tests.utils.rows import make_row

words = st.text(alphabet="abcdefghijKLMNOP0123456789 .", min_size=1, max_size=20)

rows = st.builds(
    make_row,
    words,
    top=st.integers(min_value=0, max_value=800),
    left=st.integers(min_value=0, max_value=400),
    font_size=st.sampled_from([6, 8, 9, 10, 12, None]),
)
pages = st.lists(rows, max_size=25)


@given(pages)
@settings(deadline=None)
def test_same_length_same_order(page) -> None:
    tagged = classify_page(page)
    assert [t.row for t in tagged] == page


@given(pages)
@settings(deadline=None)
def test_classification_is_deterministic(page) -> None:
    assert classify_page(page) == classify_page(page)


@given(pages)
@settings(deadline=None)
def test_footnote_block_runs_to_end_of_page(page) -> None:
    found = [t.role for t in classify_page(page)]
    if RoleTag.FOOTNOTE in found:
        tail = found[found.index(RoleTag.FOOTNOTE):]
        # only predicates ahead of FOOTNOTE may interrupt the block
        assert set(tail) <= {RoleTag.FOOTNOTE, RoleTag.CHAPTER_HEADING, RoleTag.PAGE_HEADER}


@given(st.lists(pages, max_size=5))
@settings(deadline=None)
def test_pages_do_not_influence_each_other(doc) -> None:
    combined = classify_pages(list(enumerate(doc, 1)))
    separate = [t for page in doc for t in classify_page(page)]
    assert combined == separate
