from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Puts the 'src' directory on sys.path so the package imports uninstalled.
2. Provides shared watched trees and DocToc-style documents.
"""

import os
import sys
from typing import Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from doctoc_watch.domain.constants import END_SENTINEL, TITLE_SENTINEL  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_tree() -> Dict[str, List[str]]:
    """
    A small watched tree rooted at /root/.

    /root/
      a.md
      sub/
        b.md
    """
    return {
        "/root/": ["/root/a.md", "/root/sub/"],
        "/root/sub/": ["/root/sub/b.md"],
    }


@pytest.fixture
def doctoc_document() -> str:
    """A README as left behind by `doctoc --github`."""
    return "\n".join([
        "# Project",
        "",
        "<!-- START doctoc generated TOC please keep comment here to allow auto update -->",
        "<!-- DON'T EDIT THIS SECTION, INSTEAD RE-RUN doctoc TO UPDATE -->",
        TITLE_SENTINEL,
        "",
        "- [Usage](#usage)",
        "",
        END_SENTINEL,
        "",
        "## Usage",
        "",
    ])


@pytest.fixture
def readme(tmp_path, doctoc_document):
    """The DocToc document written to disk inside a project directory."""
    path = tmp_path / "README.md"
    path.write_text(doctoc_document, encoding="utf-8")
    return path
