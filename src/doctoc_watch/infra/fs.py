from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path normalization and UTF-8 document I/O. Directory paths handed to the
renderer always use "/" and end with it, which is the only way the core
tells them apart from files.
"""

import os
from typing import Optional

from doctoc_watch.domain.constants import PATH_SEP

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def to_posix(path: str) -> str:
    """Use forward slashes regardless of platform."""
    if os.sep != PATH_SEP:
        return path.replace(os.sep, PATH_SEP)
    return path


def as_watch_key(path: str, is_dir: bool) -> str:
    """
    Convert a filesystem path into the watched-tree key convention.

    Args:
        path: Absolute path.
        is_dir: Whether the path names a directory.

    Returns:
        str: Posix path, with a trailing "/" for directories.
    """
    p = to_posix(path)
    if is_dir:
        return p.rstrip(PATH_SEP) + PATH_SEP
    return p.rstrip(PATH_SEP)


def relative_to_cwd(path: str, working_dir: str) -> str:
    """Strip the working directory prefix for log messages."""
    wd = to_posix(working_dir).rstrip(PATH_SEP)
    p = to_posix(path)
    if p.startswith(wd):
        return p[len(wd):] or PATH_SEP
    return p

# -----------------------------------------------------------------------------
# DOCUMENT I/O
# -----------------------------------------------------------------------------

def read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_text(path: str, content: str) -> None:
    """Overwrite a document with UTF-8 content, keeping its newlines as given."""
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
