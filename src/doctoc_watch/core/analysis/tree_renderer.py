from __future__ import annotations

"""
Markdown Tree Renderer.

Walks a watched tree from a root directory and produces the indented bullet
lines of the file list. Files come before directories at every level and
directories without recorded children are pruned.
"""

from typing import FrozenSet, List, Sequence

from doctoc_watch.core.analysis.markdown import render_entry
from doctoc_watch.core.analysis.paths import is_directory
from doctoc_watch.domain.constants import BULLET, INDENT_UNIT
from doctoc_watch.domain.tree_models import WatchedTree


# -----------------------------------------------------------------------------
# Tree Rendering Logic
# -----------------------------------------------------------------------------
def build_lines(
        tree: WatchedTree,
        current_key: str,
        working_dir: str,
        depth: int = 1,
) -> List[str]:
    """
    Recursively render the subtree rooted at current_key.

    The root itself (depth 1) is never emitted; its children start at zero
    indentation. The tree is only read, never modified.

    Args:
        tree: Directory -> ordered children mapping.
        current_key: Path being rendered.
        working_dir: Prefix stripped from links and labels.
        depth: Recursion depth, 1 for the root.

    Returns:
        List[str]: Rendered markdown lines.
    """
    return _build(tree, current_key, working_dir, depth, frozenset())


def files_first(children: Sequence[str]) -> List[str]:
    """Stable partition: files keep their order, directories follow."""
    return sorted(children, key=is_directory)


def format_line(fragment: str, depth: int) -> str:
    """Indent one unit per level below the root's children (depth 2)."""
    return f"{INDENT_UNIT * max(depth - 2, 0)}{BULLET}{fragment}"


def _build(
        tree: WatchedTree,
        current_key: str,
        working_dir: str,
        depth: int,
        ancestors: FrozenSet[str],
) -> List[str]:
    lines: List[str] = []

    # Case A: File (Leaf)
    if not is_directory(current_key):
        lines.append(format_line(render_entry(current_key, working_dir), depth))
        return lines

    # Case B: Pruned directory
    children = tree.get(current_key)
    if children is None:
        return lines

    # Case C: Directory with children
    if depth > 1:
        lines.append(format_line(render_entry(current_key, working_dir, as_label=True), depth))

    ancestors = ancestors | {current_key}
    for child in files_first(children):
        if is_directory(child) and (child not in tree or child in ancestors):
            continue
        lines.extend(_build(tree, child, working_dir, depth + 1, ancestors))

    return lines
