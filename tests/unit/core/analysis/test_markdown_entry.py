from __future__ import annotations

"""
Unit tests for path classification and single entry rendering.
"""

import pytest

from doctoc_watch.core.analysis.markdown import display_text, escape_markdown, render_entry
from doctoc_watch.core.analysis.paths import is_directory


@pytest.mark.parametrize("path, expected", [
    ("/root/sub/", True),
    ("/", True),
    ("/root/a.md", False),
    ("/root/sub", False),
    ("", False),
])
def test_is_directory_uses_trailing_separator(path, expected):
    assert is_directory(path) is expected


def test_render_file_as_link():
    assert render_entry("/root/a.md", "/root") == "[a.md](/a.md)"


def test_render_directory_as_label():
    assert render_entry("/root/sub/", "/root", as_label=True) == "**sub**"


def test_escaping_only_touches_display_text():
    """Underscores and asterisks are escaped in the text, never in the link."""
    out = render_entry("/root/a_b*c", "/root")
    assert out == r"[a\_b\*c](/a_b*c)"


def test_nested_path_shows_last_segment():
    assert render_entry("/root/docs/guide/intro.md", "/root") == "[intro.md](/docs/guide/intro.md)"


def test_escaped_directory_label():
    assert render_entry("/root/my_docs/", "/root", as_label=True) == r"**my\_docs**"


def test_path_outside_working_dir_is_rejected():
    with pytest.raises(ValueError):
        render_entry("/elsewhere/a.md", "/root")


def test_working_dir_itself_has_empty_text():
    assert display_text("/") == ""
    assert render_entry("/root/", "/root", as_label=True) == "****"


def test_escape_markdown_all_occurrences():
    assert escape_markdown("__init__*") == r"\_\_init\_\_\*"
