from __future__ import annotations

"""
Polling Tree Watcher.

Expands the watch patterns, keeps a fingerprint of every matched path and
reports added, deleted and changed paths between polls. The current matches
are also exposed as a watched tree (directory -> children) for the renderer.
"""

import glob
import logging
import os
import posixpath
import re
import threading
import time
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple

from doctoc_watch.core.analysis.paths import is_directory
from doctoc_watch.domain.constants import (
    DEFAULT_POLL_INTERVAL,
    EVENT_ADDED,
    EVENT_CHANGED,
    EVENT_DELETED,
    PATH_SEP,
)
from doctoc_watch.domain.errors import PatternError
from doctoc_watch.domain.tree_models import TreeSnapshot, WatchEvent, snapshot_tree
from doctoc_watch.infra.fs import as_watch_key

logger = logging.getLogger(__name__)

# (mtime_ns, size); directories only record their presence.
Fingerprint = Tuple[int, int]

_DIR_FINGERPRINT: Fingerprint = (0, 0)

# -----------------------------------------------------------------------------
# PATTERN EXPANSION
# -----------------------------------------------------------------------------

def expand_patterns(patterns: Iterable[str], working_dir: str) -> List[str]:
    """
    Expand glob patterns into sorted watched-tree keys.

    Relative patterns are resolved against the working directory and "**"
    matches recursively. A pattern starting with "!" removes its matches from
    the result.

    Args:
        patterns: Glob patterns.
        working_dir: Base directory for relative patterns.

    Returns:
        List[str]: Unique absolute posix paths, directories ending with "/".

    Raises:
        PatternError: If a pattern cannot be expanded.
    """
    included: Set[str] = set()
    excluded: Set[str] = set()

    for raw in patterns:
        pattern = raw.strip()
        if not pattern:
            continue
        negate = pattern.startswith("!")
        if negate:
            pattern = pattern[1:]

        matches = _glob(pattern, working_dir)
        if negate:
            excluded.update(matches)
        else:
            included.update(matches)

    return sorted(included - excluded)


def _glob(pattern: str, working_dir: str) -> Set[str]:
    # Only the pattern may carry wildcards; "[" or "*" in the directory name are literal
    full = pattern if os.path.isabs(pattern) else os.path.join(glob.escape(working_dir), pattern)
    try:
        found = glob.glob(full, recursive=True)
    except (OSError, ValueError, re.error) as e:
        raise PatternError(f"Invalid watch pattern '{pattern}': {e}") from e

    out: Set[str] = set()
    for path in found:
        norm = os.path.normpath(path)
        out.add(as_watch_key(norm, os.path.isdir(norm)))
    return out

# -----------------------------------------------------------------------------
# TREE CONSTRUCTION
# -----------------------------------------------------------------------------

def parent_key(path: str) -> str:
    """Directory key containing path ("/a/b/c.md" -> "/a/b/")."""
    parent = posixpath.dirname(path.rstrip(PATH_SEP))
    return parent.rstrip(PATH_SEP) + PATH_SEP


def build_watched_tree(paths: Iterable[str], working_dir: str) -> Dict[str, List[str]]:
    """
    Group watched paths into a directory -> children mapping.

    Every path is linked into its parent, and every intermediate directory
    into its own parent, up to the working directory. Matched directories
    only get an entry once something is linked into them, so empty ones stay
    pruned.

    Args:
        paths: Watched-tree keys (directories end with "/").
        working_dir: Root of the tree.

    Returns:
        Dict[str, List[str]]: Mapping in first-seen order.
    """
    root = as_watch_key(working_dir, True)
    tree: Dict[str, List[str]] = {}
    linked: Set[str] = set()

    def link(child: str) -> None:
        while child != root and child not in linked:
            linked.add(child)
            parent = parent_key(child)
            tree.setdefault(parent, []).append(child)
            child = parent

    for path in paths:
        if path == root:
            continue
        if not path.startswith(root):
            logger.warning(f"Ignoring path outside the working directory: {path}")
            continue
        link(path)

    return tree

# -----------------------------------------------------------------------------
# WATCHER
# -----------------------------------------------------------------------------

EventCallback = Callable[[List[WatchEvent]], None]


class TreeWatcher:
    """
    Poll-based watcher over a set of glob patterns.

    Attributes:
        patterns: Glob patterns defining the watched set.
        working_dir: Base directory of the patterns and root of the tree.
        interval: Seconds between polls.
        tracked: Extra paths fingerprinted for events but kept out of the tree.
    """

    def __init__(
            self,
            patterns: Iterable[str],
            working_dir: str,
            interval: float = DEFAULT_POLL_INTERVAL,
            track: Iterable[str] = (),
    ) -> None:
        self.patterns = list(patterns)
        self.working_dir = working_dir
        self.interval = interval
        self.tracked = [as_watch_key(os.path.abspath(p), False) for p in track]

        self._baseline: Dict[str, Fingerprint] = {}
        self._matched: List[str] = []
        self._suspended: Set[str] = set()
        self._started = False
        self._reported_nomatch = False

    # -------------------------
    # Scanning
    # -------------------------

    def start(self) -> None:
        """Take the initial snapshot. Errors here are not swallowed."""
        self._matched, self._baseline = self._scan()
        self._started = True
        logger.debug(f"Watching {len(self._matched)} path(s).")

    def watched(self) -> TreeSnapshot:
        """Current matches as a watched tree snapshot."""
        if not self._started:
            self.start()
        return snapshot_tree(build_watched_tree(self._matched, self.working_dir))

    def poll(self) -> List[WatchEvent]:
        """
        Rescan and report the differences to the previous poll.

        Returns:
            List[WatchEvent]: Deleted, then added, then changed paths.
        """
        if not self._started:
            self.start()
            return []

        matched, current = self._scan()
        previous = self._baseline

        events: List[WatchEvent] = []
        for path in sorted(set(previous) - set(current)):
            events.append(WatchEvent(EVENT_DELETED, path))
        for path in sorted(set(current) - set(previous)):
            events.append(WatchEvent(EVENT_ADDED, path))
        for path in sorted(set(current) & set(previous)):
            if not is_directory(path) and current[path] != previous[path]:
                events.append(WatchEvent(EVENT_CHANGED, path))

        # Suspended paths keep their old fingerprint until resumed
        for path in self._suspended:
            if path in previous:
                current[path] = previous[path]
            else:
                current.pop(path, None)

        self._matched = matched
        self._baseline = current
        return [e for e in events if e.path not in self._suspended]

    def _scan(self) -> Tuple[List[str], Dict[str, Fingerprint]]:
        matched = expand_patterns(self.patterns, self.working_dir)

        if matched:
            self._reported_nomatch = False
        elif not self._reported_nomatch:
            logger.warning("No matches found")
            self._reported_nomatch = True

        fingerprints: Dict[str, Fingerprint] = {}
        for path in list(matched) + self.tracked:
            fp = _fingerprint(path)
            if fp is not None:
                fingerprints[path] = fp

        # Paths that vanished between glob and stat are dropped
        matched = [p for p in matched if p in fingerprints]
        return matched, fingerprints

    # -------------------------
    # Suspension
    # -------------------------

    def suspend(self, path: str) -> None:
        """Stop reporting events for path (e.g. while it is being written)."""
        self._suspended.add(as_watch_key(os.path.abspath(path), False))

    def resume(self, path: str) -> None:
        """Report events for path again, starting from its current state."""
        key = as_watch_key(os.path.abspath(path), False)
        self._suspended.discard(key)
        if key in self._baseline or key in self.tracked or key in self._matched:
            fp = _fingerprint(key)
            if fp is None:
                self._baseline.pop(key, None)
            else:
                self._baseline[key] = fp

    # -------------------------
    # Loop
    # -------------------------

    def run(self, callback: EventCallback, stop_event: Optional[threading.Event] = None) -> None:
        """
        Poll until stop_event is set, handing each non-empty batch to callback.

        Scan failures after start-up and errors raised by the callback are
        logged; the loop keeps going.

        Args:
            callback: Receives the events of one poll.
            stop_event: Optional event ending the loop.
        """
        if not self._started:
            self.start()

        while not (stop_event is not None and stop_event.is_set()):
            if stop_event is not None:
                if stop_event.wait(self.interval):
                    break
            else:
                time.sleep(self.interval)

            try:
                events = self.poll()
            except (PatternError, OSError) as e:
                logger.error(f"An error has occurred: {e}")
                continue

            if not events:
                continue
            try:
                callback(events)
            except Exception as e:
                logger.exception(f"An error has occurred while handling events: {e}")


def _fingerprint(path: str) -> Optional[Fingerprint]:
    try:
        st = os.stat(path)
    except OSError:
        return None
    if is_directory(path):
        return _DIR_FINGERPRINT
    return (st.st_mtime_ns, st.st_size)

