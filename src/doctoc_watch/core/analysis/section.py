from __future__ import annotations

"""
Section Composer.

Frames the rendered tree with the list header and the blank lines markdown
needs around a list, then removes duplicated rows.
"""

from typing import Iterable, List, Optional, Set

from doctoc_watch.core.analysis.tree_renderer import build_lines
from doctoc_watch.domain.constants import PATH_SEP
from doctoc_watch.domain.tree_models import WatchedTree, snapshot_tree


def compose_section(
        tree: WatchedTree,
        working_dir: str,
        list_header: str,
        root_key: Optional[str] = None,
) -> List[str]:
    """
    Build the complete file list section.

    Args:
        tree: Directory -> ordered children mapping.
        working_dir: Prefix stripped from links and labels.
        list_header: Markdown heading shown above the list.
        root_key: Directory the list starts from. Defaults to the working
            directory with a trailing "/".

    Returns:
        List[str]: ["", header, "", *rows, ""] with duplicate rows removed.
    """
    root = root_key if root_key is not None else working_dir.rstrip(PATH_SEP) + PATH_SEP
    snapshot = snapshot_tree(tree)

    lines: List[str] = ["", list_header, ""]
    lines.extend(build_lines(snapshot, root, working_dir, 1))
    lines.append("")

    return dedupe_lines(lines)


def dedupe_lines(lines: Iterable[str]) -> List[str]:
    """
    Drop repeated lines, keeping the first occurrence.

    Empty lines are layout and always survive.
    """
    seen: Set[str] = set()
    out: List[str] = []
    for line in lines:
        if line == "":
            out.append(line)
            continue
        if line in seen:
            continue
        seen.add(line)
        out.append(line)
    return out
