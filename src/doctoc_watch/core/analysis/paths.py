from __future__ import annotations

"""
Path classification for watched-tree entries.
"""

from doctoc_watch.domain.constants import PATH_SEP


def is_directory(path: str) -> bool:
    """
    Tell whether a watched path names a directory.

    Purely syntactic: directories are the paths ending with "/". No
    filesystem access is made, so callers must hand in normalized keys.

    Args:
        path: Watched-tree key or child entry.

    Returns:
        bool: True if the path ends with the path separator.
    """
    return path.endswith(PATH_SEP)
