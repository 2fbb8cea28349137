"""Builders for rows and page HTML used across tests."""

from __future__ import annotations

from types import MappingProxyType
from typing import Sequence

from layout_roles.rows import Row, Segment


def make_row(
    texts: str | Sequence[str],
    top: int,
    left: int = 20,
    font_size: int | None = 12,
    font_style: str | None = None,
) -> Row:
    """Row at (``top``, ``left``) with one segment per text, all sharing one font."""
    parts = (texts,) if isinstance(texts, str) else tuple(texts)
    seg_style = {
        k: v
        for k, v in {
            "fontSize": f"{font_size}px" if font_size is not None else None,
            "fontStyle": font_style,
        }.items()
        if v is not None
    }
    return Row(
        sections=tuple(Segment(text=t, style=MappingProxyType(dict(seg_style))) for t in parts),
        style=MappingProxyType({"top": f"{top}px", "left": f"{left}px"}),
    )


def page_html(rows: Sequence[str], styles: Sequence[str] = ()) -> str:
    """Minimal layout page: a stylesheet of ``#fN`` rules and one ``div.txt`` per row."""
    rules = "".join(f"{rule}\n" for rule in styles)
    body = "\n".join(rows)
    return (
        "<html><head><style type=\"text/css\">\n"
        f"{rules}"
        "</style></head>\n"
        f"<body>\n{body}\n</body></html>\n"
    )


def div(top: int, left: int, *spans: str) -> str:
    style = f"position:absolute; left:{left}px; top:{top}px;"
    return f'<div class="txt" style="{style}">{"".join(spans)}</div>'


def span(text: str, ident: str = "f1", style: str = "") -> str:
    style_attr = f' style="{style}"' if style else ""
    return f'<span id="{ident}"{style_attr}>{text}</span>'


SHARED_STYLES = (
    "#f1 { font-family:serif; font-size:12px; font-style:normal; }",
    "#f2 { font-family:serif; font-size:8px; font-style:normal; }",
    "#f3 { font-family:serif; font-size:12px; font-style:italic; }",
)


def chapter_page() -> str:
    """A chapter opening: number, heading, verse, body and a footnote."""
    return page_html(
        [
            div(150, 80, span("3")),
            div(180, 60, span("THE BEGINNING")),
            div(230, 60, span("In the beginning was the word,", "f3")),
            div(245, 60, span("and the word was long.", "f3")),
            div(290, 20, span("Long continuing body paragraph")),
            div(305, 20, span("that keeps going for a while.")),
            div(340, 20, span("12", "f2"), span(" This is a footnote.", "f2")),
            div(352, 20, span("and it continues here")),
        ],
        SHARED_STYLES,
    )


def plain_page() -> str:
    """A continuation page: running head, then body."""
    return page_html(
        [
            div(30, 200, span("The Beginning")),
            div(80, 20, span("Body text on a later page.")),
            div(95, 20, span("More of the body.")),
        ],
        SHARED_STYLES,
    )
