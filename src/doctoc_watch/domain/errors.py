from __future__ import annotations

"""
Domain Exceptions.
"""

from typing import Optional


class DoctocWatchError(Exception):
    """Base class for every error raised by doctoc-watch."""


class DocTocError(DoctocWatchError):
    """
    The external table-of-contents generator failed.

    Attributes:
        returncode: Process exit status, None when the command could not start.
        stderr: Captured error stream of the process.
    """

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = "") -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class PatternError(DoctocWatchError):
    """A watch pattern could not be expanded."""
