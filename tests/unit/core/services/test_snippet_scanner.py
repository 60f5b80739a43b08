from __future__ import annotations

"""
Unit tests for the Snippet Discovery Service.

Verifies the recursive walk, extension filtering, segment extraction,
verbatim content reading and error report persistence.
"""

import os
from pathlib import Path

import pytest

from snippet4ng.core.services.scanner import (
    finalize_error_reporting,
    read_snippet,
    yield_snippet_files,
)
from snippet4ng.domain.errors import SnippetReadError
from snippet4ng.domain.models import SnippetError, SnippetFile


@pytest.fixture
def snippet_tree(tmp_path: Path) -> Path:
    """Create a temporary snippet tree."""
    root = tmp_path / "Snippets"
    (root / "cards").mkdir(parents=True)
    (root / "layouts" / "grid%202").mkdir(parents=True)
    (root / ".hidden").mkdir()

    (root / "cards" / "basic-card.txt").write_text("<div>card</div>", encoding="utf-8")
    (root / "cards" / "notes.md").write_text("# not a snippet", encoding="utf-8")
    (root / "layouts" / "grid%202" / "two col.txt").write_bytes(b"<div>\r\n</div>\r\n")
    (root / ".hidden" / "secret.txt").write_text("x", encoding="utf-8")
    (root / "footer.txt").write_text("<footer></footer>", encoding="utf-8")

    return root


def test_yield_snippet_files_filters_and_orders(snippet_tree: Path) -> None:
    found = list(yield_snippet_files(str(snippet_tree)))

    assert [s.rel_path for s in found] == [
        "footer.txt",
        os.path.join("cards", "basic-card.txt"),
        os.path.join("layouts", "grid%202", "two col.txt"),
    ]


def test_yield_snippet_files_extracts_segments(snippet_tree: Path) -> None:
    by_name = {s.base_name: s for s in yield_snippet_files(str(snippet_tree))}

    assert by_name["footer"].relative_dir == ()
    assert by_name["basic-card"].relative_dir == ("cards",)
    assert by_name["two col"].relative_dir == ("layouts", "grid%202")
    assert by_name["two col"].original_segments == ("layouts", "grid 2")


def test_yield_snippet_files_defers_reading(snippet_tree: Path) -> None:
    by_name = {s.base_name: s for s in yield_snippet_files(str(snippet_tree))}

    assert by_name["basic-card"].content == ""
    assert os.path.isabs(by_name["footer"].file_path)


def test_read_snippet_reads_content_verbatim(snippet_tree: Path) -> None:
    by_name = {s.base_name: read_snippet(s) for s in yield_snippet_files(str(snippet_tree))}

    assert by_name["basic-card"].content == "<div>card</div>"
    assert by_name["two col"].content == "<div>\r\n</div>\r\n"


def test_read_snippet_rejects_invalid_utf8(tmp_path: Path) -> None:
    bad = tmp_path / "bad.txt"
    bad.write_bytes(b"\xff\xfe<p>caf\xe9</p>")
    snippet = SnippetFile(str(bad), "bad.txt", (), (), "bad")

    with pytest.raises(SnippetReadError, match="UTF-8"):
        read_snippet(snippet)


def test_read_snippet_missing_file(tmp_path: Path) -> None:
    snippet = SnippetFile(str(tmp_path / "gone.txt"), "gone.txt", (), (), "gone")

    with pytest.raises(SnippetReadError, match="Cannot read"):
        read_snippet(snippet)


def test_yield_snippet_files_custom_extension(snippet_tree: Path) -> None:
    found = list(yield_snippet_files(str(snippet_tree), extension=".md"))
    assert [s.base_name for s in found] == ["notes"]


def test_yield_snippet_files_missing_root(tmp_path: Path, caplog) -> None:
    assert list(yield_snippet_files(str(tmp_path / "nope"))) == []
    assert "does not exist" in caplog.text


def test_finalize_error_reporting_persistence(tmp_path: Path) -> None:
    error_path = tmp_path / "reports" / "errors.txt"
    errors = [
        SnippetError(rel_path="cards/bad.txt", error="ng generate failed"),
        SnippetError(rel_path="x/???.txt", error="no usable characters"),
    ]

    path = finalize_error_reporting(True, str(error_path), errors)

    assert path == str(error_path)
    content = error_path.read_text(encoding="utf-8")
    assert "SNIPPET GENERATION ERRORS REPORT" in content
    assert "cards/bad.txt" in content
    assert "ng generate failed" in content


def test_finalize_error_reporting_skips_without_errors(tmp_path: Path) -> None:
    error_path = tmp_path / "errors.txt"

    assert finalize_error_reporting(True, str(error_path), []) == ""
    assert finalize_error_reporting(False, str(error_path), [SnippetError("a", "b")]) == ""
    assert not error_path.exists()
