from __future__ import annotations

"""
Configuration Validation Service.

Turns the merged configuration dictionary (defaults, config file and CLI
overrides) into a WatchConfig. Handles type coercion, path normalization and
fallback to defaults so that the watcher always starts from a sane state.
"""

import logging
import math
import os
from typing import Any, Dict, List, Optional, Tuple

from doctoc_watch.domain.config import WatchConfig, get_default_config
from doctoc_watch.infra.fs import normalize_path

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[WatchConfig, List[str]]:
    """
    Validate and normalize a raw configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raise on type mismatch instead of coercing.

    Returns:
        Tuple[WatchConfig, List[str]]: The validated configuration and a list
                                       of warnings produced while coercing.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        config = {}

    merged: Dict[str, Any] = dict(defaults)
    merged.update({k: v for k, v in config.items() if v is not None})

    target = _as_str(merged.get("target"), defaults["target"], "target", warnings, strict)
    list_files_header = _as_str(
        merged.get("list_files_header"), defaults["list_files_header"],
        "list_files_header", warnings, strict,
    )
    doctoc_command = _as_str(
        merged.get("doctoc_command"), defaults["doctoc_command"],
        "doctoc_command", warnings, strict,
    )
    target_header = _as_optional_str(merged.get("target_header"), "target_header", warnings, strict)

    verbose = _as_bool(merged.get("verbose"), False, "verbose", warnings, strict)
    run_once = _as_bool(merged.get("run_once"), False, "run_once", warnings, strict)

    list_files = _as_list_str(merged.get("list_files"), [], "list_files", warnings, strict)
    if not list_files:
        warnings.append("No watch patterns given (list_files is empty). The file list will be empty.")

    interval = _as_positive_float(
        merged.get("interval"), defaults["interval"], "interval", warnings, strict
    )

    # Paths: the target is resolved relative to the working directory
    working_dir = normalize_path(
        _as_str(merged.get("working_dir"), defaults["working_dir"], "working_dir", warnings, strict),
        fallback=defaults["working_dir"],
    )
    if not os.path.isabs(os.path.expanduser(target)):
        target = os.path.join(working_dir, target)
    target = normalize_path(target, fallback=os.path.join(working_dir, defaults["target"]))

    cfg = WatchConfig(
        target=target,
        target_header=target_header,
        list_files=list_files,
        list_files_header=list_files_header,
        verbose=verbose,
        run_once=run_once,
        working_dir=working_dir,
        doctoc_command=doctoc_command,
        interval=interval,
    )
    return cfg, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_optional_str(value: Any, field: str, warnings: List[str], strict: bool) -> Optional[str]:
    """Headers keep their inner whitespace; only non-strings are rejected."""
    if value is None or isinstance(value, str):
        return value

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Ignoring it.")
    return None


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Ensure input is a list of sanitized strings, supporting CSV parsing."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        items = [x.strip() for x in value.split(",") if x.strip()]
        return items if items else list(fallback)

    if isinstance(value, (list, tuple)):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str):
                s = item.strip()
                if s:
                    out.append(s)
            else:
                msg = f"Invalid item in '{field}[{i}]': expected str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out if out else list(fallback)

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


def _as_positive_float(value: Any, fallback: float, field: str, warnings: List[str], strict: bool) -> float:
    """Accept ints, floats and numeric strings greater than zero."""
    if value is None:
        return fallback

    number: Optional[float] = None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        number = float(value)
    elif isinstance(value, str) and not strict:
        try:
            number = float(value.strip())
        except ValueError:
            number = None

    if number is not None and math.isfinite(number) and number > 0:
        return number

    msg = f"Invalid field '{field}': expected positive number, received {value!r}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback
