"""Clipboard copies and PDF export of generated documents."""

import logging
import re
import threading
from pathlib import Path
from typing import Callable, Optional

from .config import COPY_NOTICE_SECONDS
from .errors import ExportFailure
from .formatting import to_plain_text
from .timers import ThreadingScheduler

logger = logging.getLogger(__name__)

A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297
PAGE_MARGIN_MM = 10

COPIED = "Copied!"
COPY_FAILED = "Failed to copy."


class CopyNotice:
    """Copies text to a clipboard and shows a short-lived acknowledgement.

    ``clipboard`` is a callable taking the text; raising marks the copy as
    failed. The message clears ``clear_after`` seconds after the latest copy.
    """

    def __init__(self, clipboard: Callable[[str], None], scheduler=None,
                 clear_after: float = COPY_NOTICE_SECONDS):
        self.clipboard = clipboard
        self.scheduler = scheduler or ThreadingScheduler()
        self.clear_after = clear_after
        self.message = ""
        self._lock = threading.Lock()
        self._handle = None

    def copy(self, text: str) -> bool:
        """Copy ``text``; returns whether the clipboard accepted it."""
        try:
            self.clipboard(text)
        except Exception as e:
            logger.warning(f"Clipboard write failed: {e}")
            self._show(COPY_FAILED)
            return False
        self._show(COPIED)
        return True

    def copy_document(self, markdown: str) -> bool:
        """Copy a generated document as plain text."""
        return self.copy(to_plain_text(markdown))

    def _show(self, message: str) -> None:
        with self._lock:
            if self._handle is not None:
                self._handle.cancel()
            self.message = message
            self._handle = self.scheduler.call_later(self.clear_after, self._clear)

    def _clear(self) -> None:
        with self._lock:
            self.message = ""
            self._handle = None


def export_filename(title: str) -> str:
    """Download name for an exported document, e.g. ``Generated-Proposal-npo-connect.pdf``."""
    stem = re.sub(r"\s+", "-", title)
    return f"{stem}-npo-connect.pdf"


def scaled_image_height(image_width: float, image_height: float,
                        page_width: float = A4_WIDTH_MM,
                        margin: float = PAGE_MARGIN_MM) -> float:
    """Height of a rendered image once fitted between the page margins."""
    if image_width <= 0 or image_height <= 0:
        raise ValueError("image dimensions must be positive")
    ratio = image_width / image_height
    return (page_width - 2 * margin) / ratio


def page_offsets(image_height: float, page_height: float = A4_HEIGHT_MM,
                 margin: float = PAGE_MARGIN_MM) -> list:
    """Vertical positions at which a tall image is placed on successive pages.

    Each page shows the next ``page_height - 2 * margin`` slice of the image;
    offsets after the first are negative so earlier slices sit above the page.
    """
    printable = page_height - 2 * margin
    if printable <= 0:
        raise ValueError("margins leave no printable area")

    offsets = [margin]
    height_left = image_height - printable
    while height_left > 0:
        offsets.append(height_left - image_height + margin)
        height_left -= printable
    return offsets


class DocumentExporter:
    """Writes generated documents to PDF files.

    ``renderer`` turns ``(title, content)`` into PDF bytes; it is supplied by
    the host environment.
    """

    def __init__(self, renderer: Callable[[str, str], bytes]):
        self.renderer = renderer

    def export(self, title: str, content: str, directory: Optional[Path] = None) -> Path:
        """Render and save a document.

        Returns:
            Path of the written PDF

        Raises:
            ExportFailure: if rendering or writing fails
        """
        output_path = (directory or Path(".")) / export_filename(title)

        try:
            pdf_bytes = self.renderer(title, content)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(pdf_bytes)
        except Exception as e:
            logger.error(f"Error generating PDF: {e}")
            raise ExportFailure(
                "Sorry, there was an error creating the PDF. Please try again."
            ) from e

        logger.info(f"Exported {title!r} to {output_path}")
        return output_path
