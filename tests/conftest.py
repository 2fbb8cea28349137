from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from tests.utils.rows import chapter_page, plain_page  # noqa: E402


@pytest.fixture
def html_dir(tmp_path: Path) -> Path:
    """Directory holding ``page9.html`` (chapter opening) and ``page10.html``."""
    directory = tmp_path / "html"
    directory.mkdir()
    (directory / "page9.html").write_text(chapter_page(), encoding="utf-8")
    (directory / "page10.html").write_text(plain_page(), encoding="utf-8")
    return directory
