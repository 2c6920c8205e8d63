from __future__ import annotations

"""
DocToc Runner.

Blocking invocation of the external table-of-contents generator. The file
list is rendered only after this call returns, because the patcher works on
the document DocToc just rewrote.
"""

import logging
import shlex
import subprocess
from typing import List, Sequence

from doctoc_watch.domain.constants import DEFAULT_DOCTOC_ARGS, DEFAULT_DOCTOC_COMMAND
from doctoc_watch.domain.errors import DocTocError

logger = logging.getLogger(__name__)


def build_command(
        target: str,
        command: str = DEFAULT_DOCTOC_COMMAND,
        extra_args: Sequence[str] = DEFAULT_DOCTOC_ARGS,
) -> List[str]:
    """Split the command like a shell would, so "npx doctoc" works."""
    return [*shlex.split(command), target, *extra_args]


def run_doctoc(
        target: str,
        command: str = DEFAULT_DOCTOC_COMMAND,
        extra_args: Sequence[str] = DEFAULT_DOCTOC_ARGS,
) -> subprocess.CompletedProcess:
    """
    Run DocToc on the target document and wait for it.

    Standard output is irrelevant and only logged at DEBUG; the error stream
    is surfaced as a warning.

    Args:
        target: Document to regenerate the table of contents for.
        command: DocToc executable.
        extra_args: Arguments appended after the target.

    Returns:
        subprocess.CompletedProcess: The finished process.

    Raises:
        DocTocError: If the command cannot be started or exits non-zero.
    """
    cmd = build_command(target, command, extra_args)
    logger.debug(f"Running: {' '.join(cmd)}")

    try:
        proc = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        raise DocTocError(f"Could not run '{command}': {e}") from e

    if proc.stdout:
        logger.debug(proc.stdout.rstrip())
    if proc.stderr:
        logger.warning(proc.stderr.rstrip())

    if proc.returncode != 0:
        raise DocTocError(
            f"'{command}' exited with status {proc.returncode}",
            returncode=proc.returncode,
            stderr=proc.stderr or "",
        )

    return proc
