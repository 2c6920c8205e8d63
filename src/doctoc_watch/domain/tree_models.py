from __future__ import annotations

"""
Watched Tree Data Models.

Provides the type definitions shared by the watcher and the markdown
renderer, plus the immutable result objects passed back to the interfaces.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Sequence, Tuple

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

# Directory path (trailing "/") -> ordered child paths.
# Child directories also carry the trailing "/".
WatchedTree = Mapping[str, Sequence[str]]

# Frozen form handed to the renderer.
TreeSnapshot = Dict[str, Tuple[str, ...]]


def snapshot_tree(tree: WatchedTree) -> TreeSnapshot:
    """
    Copy a watched tree into a read-only snapshot.

    The watcher keeps mutating its own mapping between polls; rendering always
    works on a copy whose child lists are tuples.

    Args:
        tree: Live directory -> children mapping.

    Returns:
        TreeSnapshot: Independent copy preserving key and child order.
    """
    return {key: tuple(children) for key, children in tree.items()}


@dataclass(frozen=True)
class WatchEvent:
    """
    A single change reported by the watcher.

    Attributes:
        kind: One of "added", "deleted" or "changed".
        path: Absolute path of the affected file or directory.
    """
    kind: str
    path: str


# -----------------------------------------------------------------------------
# RENDER RESULTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RenderResult:
    """
    Outcome of a single render pass over the target document.

    Attributes:
        ok: False when the pass was aborted.
        error: Description of the failure, empty on success.
        target: Absolute path of the target document.
        lines: Composed markdown section that was (or would have been) written.
        written: True when the document was rewritten.
        skipped: True when the pass was coalesced into one already in flight.
    """
    ok: bool
    error: str
    target: str
    lines: List[str] = field(default_factory=list)
    written: bool = False
    skipped: bool = False


def create_success_result(target: str, lines: List[str], written: bool) -> RenderResult:
    return RenderResult(ok=True, error="", target=target, lines=list(lines), written=written)


def create_error_result(target: str, error: str) -> RenderResult:
    return RenderResult(ok=False, error=error, target=target)


def create_skipped_result(target: str) -> RenderResult:
    return RenderResult(ok=True, error="", target=target, skipped=True)
