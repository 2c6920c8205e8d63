from __future__ import annotations

"""
Unit tests for the watched tree models and result factories.
"""

import dataclasses

import pytest

from doctoc_watch.domain.tree_models import (
    WatchEvent,
    create_error_result,
    create_skipped_result,
    create_success_result,
    snapshot_tree,
)


def test_snapshot_is_independent_of_source(sample_tree):
    snap = snapshot_tree(sample_tree)
    sample_tree["/root/"].append("/root/new.md")

    assert snap["/root/"] == ("/root/a.md", "/root/sub/")
    assert list(snap) == list(sample_tree)


def test_result_factories():
    ok = create_success_result("/p/README.md", ["", "H", ""], written=True)
    err = create_error_result("/p/README.md", "boom")
    skipped = create_skipped_result("/p/README.md")

    assert ok.ok and ok.written and ok.error == ""
    assert not err.ok and err.error == "boom" and err.lines == []
    assert skipped.ok and skipped.skipped and not skipped.written


def test_events_are_immutable():
    event = WatchEvent("added", "/p/a.md")
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.kind = "deleted"  # type: ignore[misc]
