from __future__ import annotations

"""
Unit tests for the Document Patcher.

Verifies sentinel replacement, the re-appended end sentinel and the
no-write policy for empty sections.
"""

import logging

from doctoc_watch.core.services.patcher import DocumentPatcher, patch_text, update_document
from doctoc_watch.domain.constants import END_SENTINEL, TITLE_SENTINEL


def test_patch_replaces_title_and_inserts_lines(doctoc_document):
    out = patch_text(doctoc_document, "H", ["x"])

    assert TITLE_SENTINEL not in out
    assert "\nH\n" in out
    assert f"x\n{END_SENTINEL}" in out
    assert out.count(END_SENTINEL) == 1


def test_patch_keeps_document_repatchable(doctoc_document):
    once = patch_text(doctoc_document, None, ["", "**Files**", "", "- [a.md](/a.md)", ""])
    twice = patch_text(once, None, ["y"])

    assert END_SENTINEL in twice
    assert f"y\n{END_SENTINEL}" in twice


def test_none_header_keeps_title(doctoc_document):
    out = patch_text(doctoc_document, None, ["x"])
    assert TITLE_SENTINEL in out


def test_missing_sentinels_are_noops(caplog):
    text = "# Just a readme\n"

    with caplog.at_level(logging.WARNING):
        out = patch_text(text, "H", ["x"])

    assert out == text
    assert "Title sentinel not found" in caplog.text
    assert "End sentinel not found" in caplog.text


def test_only_first_sentinel_is_replaced():
    text = f"{END_SENTINEL}\n{END_SENTINEL}"

    out = patch_text(text, None, ["x"])

    assert out == f"x\n{END_SENTINEL}\n{END_SENTINEL}"


def test_update_document_round_trip(tmp_path, doctoc_document):
    path = tmp_path / "README.md"
    path.write_text(doctoc_document, encoding="utf-8")

    written = update_document(str(path), "H", ["x"])

    content = path.read_text(encoding="utf-8")
    assert written is True
    assert TITLE_SENTINEL not in content
    assert "H" in content
    assert f"x\n{END_SENTINEL}" in content


def test_update_document_skips_empty_sections(tmp_path, doctoc_document):
    path = tmp_path / "README.md"
    path.write_text(doctoc_document, encoding="utf-8")

    assert update_document(str(path), "H", []) is False
    assert path.read_text(encoding="utf-8") == doctoc_document


def test_custom_sentinels():
    patcher = DocumentPatcher(title_sentinel="[[title]]", end_sentinel="[[end]]")

    out = patcher.patch("[[title]]\n[[end]]", "T", ["a", "b"])

    assert out == "T\na\nb\n[[end]]"
