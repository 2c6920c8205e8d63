from __future__ import annotations

"""
Document Patcher.

Splices the composed file list and the target header into the document
produced by DocToc. Only two literal sentinels are looked up, so other
document formats can be supported by swapping the patcher instance.
"""

import logging
from typing import List, Optional, Sequence

from doctoc_watch.domain.constants import END_SENTINEL, TITLE_SENTINEL
from doctoc_watch.infra.fs import read_text, write_text

logger = logging.getLogger(__name__)


class DocumentPatcher:
    """
    Sentinel based splicer for DocToc generated documents.

    Attributes:
        title_sentinel: Literal replaced by the target header.
        end_sentinel: Literal the file list is inserted in front of.
    """

    def __init__(self, title_sentinel: str = TITLE_SENTINEL, end_sentinel: str = END_SENTINEL) -> None:
        self.title_sentinel = title_sentinel
        self.end_sentinel = end_sentinel

    def patch(self, text: str, header: Optional[str], lines: Sequence[str]) -> str:
        """
        Return the document text with header and file list spliced in.

        The end sentinel is written back after the list so the next run can
        find it again. Missing sentinels leave the text unchanged for that
        replacement.

        Args:
            text: Current document content.
            header: Replacement for the title sentinel, None to keep it.
            lines: Composed section lines.

        Returns:
            str: Patched document content.
        """
        if header is not None:
            if self.title_sentinel in text:
                text = text.replace(self.title_sentinel, header, 1)
            else:
                logger.warning("Title sentinel not found in document; header left unchanged.")

        if self.end_sentinel in text:
            block: List[str] = list(lines) + [self.end_sentinel]
            text = text.replace(self.end_sentinel, "\n".join(block), 1)
        else:
            logger.warning("End sentinel not found in document; file list not inserted.")

        return text

    def update(self, path: str, header: Optional[str], lines: Sequence[str]) -> bool:
        """
        Patch the document at path in place.

        Args:
            path: Target document.
            header: Replacement for the title sentinel, None to keep it.
            lines: Composed section lines. Nothing is written when empty.

        Returns:
            bool: True if the document was rewritten.
        """
        if not lines:
            logger.debug(f"Nothing to write for {path}.")
            return False

        current = read_text(path)
        write_text(path, self.patch(current, header, lines))
        logger.info("Readme Updated")
        return True


_DEFAULT_PATCHER = DocumentPatcher()


def patch_text(text: str, header: Optional[str], lines: Sequence[str]) -> str:
    return _DEFAULT_PATCHER.patch(text, header, lines)


def update_document(path: str, header: Optional[str], lines: Sequence[str]) -> bool:
    return _DEFAULT_PATCHER.update(path, header, lines)
