from __future__ import annotations

"""
Configuration Domain Management.

Defines the explicit runtime configuration handed to every component and the
loader for the optional JSON configuration file. Values resolve in the order
defaults < configuration file < command line.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from doctoc_watch.domain.constants import (
    DEFAULT_DOCTOC_COMMAND,
    DEFAULT_LIST_FILES_HEADER,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TARGET,
)

logger = logging.getLogger(__name__)

# Fields accepted from the configuration file and from CLI overrides.
CONFIG_KEYS: List[str] = [
    "target",
    "target_header",
    "list_files",
    "list_files_header",
    "verbose",
    "run_once",
    "working_dir",
    "doctoc_command",
    "interval",
]


# -----------------------------------------------------------------------------
# CONFIGURATION MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class WatchConfig:
    """
    Validated runtime configuration.

    Attributes:
        target: Absolute path of the document to patch.
        target_header: Markdown replacing the DocToc title line (None keeps it).
        list_files: Glob patterns defining the watched set.
        list_files_header: Markdown heading placed above the file list.
        verbose: Log options and individual watch events.
        run_once: Render a single time instead of watching.
        working_dir: Absolute directory links are made relative to.
        doctoc_command: Executable used to regenerate the table of contents.
        interval: Polling interval of the watcher, in seconds.
    """
    target: str
    target_header: Optional[str] = None
    list_files: List[str] = field(default_factory=list)
    list_files_header: str = DEFAULT_LIST_FILES_HEADER
    verbose: bool = False
    run_once: bool = False
    working_dir: str = ""
    doctoc_command: str = DEFAULT_DOCTOC_COMMAND
    interval: float = DEFAULT_POLL_INTERVAL

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default configuration dictionary.

    Returns:
        Dict[str, Any]: Default values keyed by WatchConfig field name.
    """
    return {
        "target": DEFAULT_TARGET,
        "target_header": None,
        "list_files": [],
        "list_files_header": DEFAULT_LIST_FILES_HEADER,
        "verbose": False,
        "run_once": False,
        "working_dir": os.getcwd(),
        "doctoc_command": DEFAULT_DOCTOC_COMMAND,
        "interval": DEFAULT_POLL_INTERVAL,
    }


# -----------------------------------------------------------------------------
# PERSISTENCE (READ-ONLY)
# -----------------------------------------------------------------------------

def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """
    Read configuration values from a JSON file.

    Unknown keys are dropped. A missing path yields an empty dictionary; an
    unreadable or malformed file is reported and ignored.

    Args:
        path: Location of the JSON file, or None.

    Returns:
        Dict[str, Any]: Known keys found in the file.
    """
    if not path:
        return {}

    if not os.path.exists(path):
        logger.warning(f"Config file not found: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load config file '{path}': {e}. Ignoring it.")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Config file '{path}' does not contain a JSON object. Ignoring it.")
        return {}

    unknown = sorted(k for k in data if k not in CONFIG_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown config keys: {', '.join(unknown)}")

    return {k: v for k, v in data.items() if k in CONFIG_KEYS}


def merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow merge of non-None override values into a base configuration.

    Args:
        base: The lower-precedence configuration.
        overrides: Values to inject.

    Returns:
        Dict[str, Any]: Merged configuration.
    """
    out = dict(base)
    for k in CONFIG_KEYS:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out
