from __future__ import annotations

"""
Domain Constants.

Sentinel markers shared with the DocToc output format, default command line
values and the event vocabulary emitted by the watcher.
"""

from typing import Tuple

APP_NAME = "doctoc-watch"

# -----------------------------------------------------------------------------
# DOCUMENT SENTINELS
# -----------------------------------------------------------------------------

# Title line written by `doctoc --github`; replaced by the target header.
TITLE_SENTINEL = (
    "**Table of Contents**  *generated with "
    "[DocToc](https://github.com/thlorenz/doctoc)*"
)

# Closing comment of the DocToc block; the file list is inserted before it.
END_SENTINEL = (
    "<!-- END doctoc generated TOC please keep "
    "comment here to allow auto update -->"
)

# -----------------------------------------------------------------------------
# MARKDOWN RENDERING
# -----------------------------------------------------------------------------

PATH_SEP = "/"
INDENT_UNIT = "  "
BULLET = "- "
MD_ESCAPE_CHARS: Tuple[str, ...] = ("_", "*")

# -----------------------------------------------------------------------------
# RUNTIME DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_TARGET = "README.md"
DEFAULT_LIST_FILES_HEADER = "**Files**"
DEFAULT_DOCTOC_COMMAND = "doctoc"
DEFAULT_DOCTOC_ARGS: Tuple[str, ...] = ("--github",)
DEFAULT_POLL_INTERVAL = 1.0

# -----------------------------------------------------------------------------
# WATCH EVENTS
# -----------------------------------------------------------------------------

EVENT_ADDED = "added"
EVENT_DELETED = "deleted"
EVENT_CHANGED = "changed"
