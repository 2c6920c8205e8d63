from __future__ import annotations

"""
Unit tests for configuration validation.

Verifies:
1. Defaults when nothing is given.
2. Type coercion in relaxed mode and TypeError in strict mode.
3. Target resolution against the working directory.
"""

import os

import pytest

from doctoc_watch.core.pipeline.validator import validate_config
from doctoc_watch.domain.config import WatchConfig
from doctoc_watch.domain.constants import DEFAULT_LIST_FILES_HEADER, DEFAULT_POLL_INTERVAL


def test_empty_config_uses_defaults(tmp_path):
    cfg, warnings = validate_config({"working_dir": str(tmp_path)})

    assert isinstance(cfg, WatchConfig)
    assert cfg.target == os.path.join(str(tmp_path), "README.md")
    assert cfg.target_header is None
    assert cfg.list_files_header == DEFAULT_LIST_FILES_HEADER
    assert cfg.interval == DEFAULT_POLL_INTERVAL
    assert cfg.verbose is False and cfg.run_once is False
    # Empty watch set is allowed but reported
    assert any("list_files" in w for w in warnings)


def test_relative_target_is_joined_to_working_dir(tmp_path):
    cfg, _ = validate_config({"working_dir": str(tmp_path), "target": "docs/INDEX.md", "list_files": ["*.md"]})
    assert cfg.target == os.path.join(str(tmp_path), "docs", "INDEX.md")


def test_absolute_target_is_kept(tmp_path):
    target = str(tmp_path / "elsewhere" / "README.md")
    cfg, _ = validate_config({"working_dir": "/tmp", "target": target, "list_files": ["*.md"]})
    assert cfg.target == target


def test_csv_string_patterns_are_split(tmp_path):
    cfg, warnings = validate_config({"working_dir": str(tmp_path), "list_files": "a.md, docs/**/*.md ,"})

    assert cfg.list_files == ["a.md", "docs/**/*.md"]
    assert warnings == []


def test_bool_coercion_warns():
    cfg, warnings = validate_config({"verbose": "yes", "run_once": 0, "list_files": ["*"]})

    assert cfg.verbose is True
    assert cfg.run_once is False
    assert len(warnings) == 2


def test_invalid_values_fall_back():
    cfg, warnings = validate_config({
        "interval": -3,
        "list_files_header": 42,
        "target_header": ["not", "a", "string"],
        "list_files": ["ok.md", 7],
    })

    assert cfg.interval == DEFAULT_POLL_INTERVAL
    assert cfg.list_files_header == DEFAULT_LIST_FILES_HEADER
    assert cfg.target_header is None
    assert cfg.list_files == ["ok.md"]
    assert len(warnings) == 4


def test_numeric_string_interval_is_accepted():
    cfg, warnings = validate_config({"interval": "0.25", "list_files": ["*"]})
    assert cfg.interval == 0.25
    assert warnings == []


def test_headers_keep_inner_whitespace():
    cfg, _ = validate_config({"target_header": "## Table  of  Contents", "list_files": ["*"]})
    assert cfg.target_header == "## Table  of  Contents"


def test_non_dict_input_uses_defaults():
    cfg, warnings = validate_config(["not", "a", "dict"])

    assert isinstance(cfg, WatchConfig)
    assert any("Invalid config type" in w for w in warnings)


@pytest.mark.parametrize("raw", [
    {"verbose": "yes"},
    {"interval": "fast"},
    {"list_files": "a.md,b.md"},
    {"target": 3},
])
def test_strict_mode_raises(raw):
    with pytest.raises(TypeError):
        validate_config(raw, strict=True)


def test_none_values_do_not_mask_defaults(tmp_path):
    cfg, _ = validate_config({
        "working_dir": str(tmp_path),
        "target": None,
        "list_files_header": None,
        "list_files": ["*"],
    })
    assert cfg.target.endswith("README.md")
    assert cfg.list_files_header == DEFAULT_LIST_FILES_HEADER


@pytest.mark.parametrize("value", [float("inf"), "inf", float("nan"), "nan"])
def test_non_finite_interval_falls_back(value):
    cfg, warnings = validate_config({"interval": value, "list_files": ["*"]})

    assert cfg.interval == DEFAULT_POLL_INTERVAL
    assert len(warnings) == 1
