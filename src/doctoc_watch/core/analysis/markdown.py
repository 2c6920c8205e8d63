from __future__ import annotations

"""
Markdown Entry Renderer.

Turns a single watched path into the markdown fragment shown in the file
list: a link for files, a bold label for directories.
"""

import re
from typing import List

from doctoc_watch.domain.constants import MD_ESCAPE_CHARS, PATH_SEP

_MD_ESCAPE_RX = re.compile("([" + "".join(re.escape(c) for c in MD_ESCAPE_CHARS) + "])")


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_entry(path: str, working_dir: str, as_label: bool = False) -> str:
    """
    Render one path as a markdown fragment.

    The working directory prefix is stripped, "_" and "*" are escaped in the
    display text and the last non-empty segment is shown. The link target
    keeps the unescaped relative path.

    Args:
        path: Absolute watched path (directories end with "/").
        working_dir: Prefix stripped from the path.
        as_label: Render a bold, non-linked label (directories).

    Returns:
        str: "**text**" or "[text](relative-path)".

    Raises:
        ValueError: If the path does not live under the working directory.
    """
    relative = strip_working_dir(path, working_dir)
    text = display_text(relative)

    if as_label:
        return f"**{text}**"
    return f"[{text}]({relative})"


def strip_working_dir(path: str, working_dir: str) -> str:
    """Remove the working directory prefix, refusing foreign paths."""
    if not path.startswith(working_dir):
        raise ValueError(f"Path '{path}' is outside the working directory '{working_dir}'.")
    return path[len(working_dir):]


def escape_markdown(text: str) -> str:
    return _MD_ESCAPE_RX.sub(r"\\\1", text)


def display_text(relative: str) -> str:
    """Last non-empty segment of an escaped relative path."""
    segments: List[str] = [s for s in escape_markdown(relative).split(PATH_SEP) if s]
    return segments[-1] if segments else ""
