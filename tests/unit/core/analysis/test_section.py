from __future__ import annotations

"""
Unit tests for the section composer (framing and deduplication).
"""

from doctoc_watch.core.analysis.section import compose_section, dedupe_lines


def test_compose_frames_rendered_lines(sample_tree):
    lines = compose_section(sample_tree, "/root", "**Files**")

    assert lines == [
        "",
        "**Files**",
        "",
        "- [a.md](/a.md)",
        "- **sub**",
        "  - [b.md](/sub/b.md)",
        "",
    ]


def test_compose_is_idempotent(sample_tree):
    first = compose_section(sample_tree, "/root", "H", root_key="/root/")
    second = compose_section(sample_tree, "/root", "H", root_key="/root/")
    assert first == second


def test_duplicate_children_are_collapsed():
    tree = {"/root/": ["/root/a.md", "/root/a.md", "/root/b.md"]}

    lines = compose_section(tree, "/root", "H")

    assert lines.count("- [a.md](/a.md)") == 1
    assert lines == ["", "H", "", "- [a.md](/a.md)", "- [b.md](/b.md)", ""]


def test_empty_tree_keeps_framing_only():
    lines = compose_section({"/root/": ["/root/empty/"]}, "/root", "H")
    assert lines == ["", "H", "", ""]


def test_explicit_root_key_overrides_default(sample_tree):
    lines = compose_section(sample_tree, "/root", "H", root_key="/root/sub/")
    assert lines == ["", "H", "", "- [b.md](/sub/b.md)", ""]


def test_dedupe_preserves_blank_lines_and_first_occurrence():
    assert dedupe_lines(["", "a", "", "b", "a", "", "b"]) == ["", "a", "", "b", ""]
