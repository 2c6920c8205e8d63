from __future__ import annotations

"""
Render orchestration.

One render pass over the target document:
1. Runs DocToc and waits for it.
2. Composes the file list section from a snapshot of the watched tree.
3. Splices header and section into the document.

Passes over the same document never interleave. A pass requested while one
is in flight is coalesced and re-run once, with the newest tree, as soon as
the running pass finishes.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional, Tuple

from doctoc_watch.core.analysis.section import compose_section
from doctoc_watch.core.services.doctoc import run_doctoc
from doctoc_watch.core.services.patcher import DocumentPatcher
from doctoc_watch.core.services.watcher import TreeWatcher
from doctoc_watch.domain.config import WatchConfig
from doctoc_watch.domain.constants import EVENT_ADDED, EVENT_CHANGED, EVENT_DELETED, PATH_SEP
from doctoc_watch.domain.errors import DocTocError
from doctoc_watch.domain.tree_models import (
    RenderResult,
    TreeSnapshot,
    WatchEvent,
    WatchedTree,
    create_error_result,
    create_skipped_result,
    create_success_result,
    snapshot_tree,
)
from doctoc_watch.infra.fs import as_watch_key, relative_to_cwd, to_posix

logger = logging.getLogger(__name__)

DocTocRunner = Callable[..., object]

# Per-target single-flight state, shared by every engine in the process
_REGISTRY_LOCK = threading.Lock()
_TARGET_LOCKS: Dict[str, threading.Lock] = {}
# target -> (engine that asked, newest tree it asked with)
_PENDING: Dict[str, Tuple["RenderEngine", TreeSnapshot]] = {}


def _target_lock(target: str) -> threading.Lock:
    lock = _TARGET_LOCKS.get(target)
    if lock is None:
        lock = threading.Lock()
        _TARGET_LOCKS[target] = lock
    return lock


class RenderEngine:
    """
    Runs render passes for one target document.

    Attributes:
        config: Validated runtime configuration.
        runner: Callable invoking DocToc as runner(target, command).
        patcher: Splices the section into the document.
    """

    def __init__(
            self,
            config: WatchConfig,
            runner: DocTocRunner = run_doctoc,
            patcher: Optional[DocumentPatcher] = None,
    ) -> None:
        self.config = config
        self.runner = runner
        self.patcher = patcher or DocumentPatcher()
        self._target_key = as_watch_key(config.target, False)
        self._link_base = to_posix(config.working_dir).rstrip(PATH_SEP)

    # -------------------------
    # Rendering
    # -------------------------

    def render(self, tree: WatchedTree) -> RenderResult:
        """
        Render the tree into the target document.

        Args:
            tree: Current watched tree. It is copied before use.

        Returns:
            RenderResult: Outcome of the pass (skipped if coalesced).
        """
        target = self.config.target
        snapshot = snapshot_tree(tree)

        with _REGISTRY_LOCK:
            lock = _target_lock(target)
            if not lock.acquire(blocking=False):
                _PENDING[target] = (self, snapshot)
                logger.debug(f"Render of {target} already in flight; queued.")
                return create_skipped_result(target)

        engine: RenderEngine = self
        result: Optional[RenderResult] = None
        try:
            while True:
                # A queued request is rendered with the config of the engine that made it
                outcome = engine._render_once(snapshot)
                if engine is self:
                    result = outcome
                with _REGISTRY_LOCK:
                    queued = _PENDING.pop(target, None)
                    if queued is None:
                        lock.release()
                        return result
                engine, snapshot = queued
        except BaseException:
            with _REGISTRY_LOCK:
                _PENDING.pop(target, None)
                lock.release()
            raise

    def _render_once(self, snapshot: TreeSnapshot) -> RenderResult:
        cfg = self.config

        try:
            self.runner(cfg.target, cfg.doctoc_command)
        except DocTocError as e:
            msg = str(e)
            if e.stderr:
                msg = f"{msg}: {e.stderr.strip()}"
            logger.error(f"exec error: {msg}")
            return create_error_result(cfg.target, msg)

        lines = compose_section(
            snapshot,
            self._link_base,
            cfg.list_files_header,
            root_key=self._link_base + PATH_SEP,
        )

        try:
            written = self.patcher.update(cfg.target, cfg.target_header, lines)
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Failed to update '{cfg.target}': {e}"
            logger.error(msg)
            return create_error_result(cfg.target, msg)

        return create_success_result(cfg.target, lines, written)

    # -------------------------
    # Watch dispatch
    # -------------------------

    def render_suspended(self, watcher: TreeWatcher) -> RenderResult:
        """Render while the watcher ignores the target, so our own write is not an event."""
        watcher.suspend(self.config.target)
        try:
            return self.render(watcher.watched())
        finally:
            watcher.resume(self.config.target)

    def is_relevant(self, event: WatchEvent) -> bool:
        if event.kind in (EVENT_ADDED, EVENT_DELETED):
            return True
        return event.kind == EVENT_CHANGED and event.path == self._target_key

    def handle_events(self, events: List[WatchEvent], watcher: TreeWatcher) -> Optional[RenderResult]:
        """
        React to one batch of watcher events.

        Added or deleted paths and edits of the target document trigger a
        single render for the whole batch. Other edits are ignored.

        Args:
            events: Events of one poll.
            watcher: Source of the watched tree.

        Returns:
            Optional[RenderResult]: Result of the render, None if nothing relevant happened.
        """
        relevant = [e for e in events if self.is_relevant(e)]
        for e in events:
            if e in relevant:
                if self.config.verbose:
                    logger.info(f"{relative_to_cwd(e.path, self.config.working_dir)} {e.kind}")
            else:
                logger.debug(f"Ignoring {e.kind} on {e.path}")

        if not relevant:
            return None

        if self.config.verbose and any(e.kind == EVENT_CHANGED for e in relevant):
            logger.info(f"Running doctoc on {self.config.target}")

        return self.render_suspended(watcher)
