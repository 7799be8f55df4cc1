# src/scan2txt/document.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Tuple, Union

import fitz  # PyMuPDF

from .exceptions import DocumentOpenError

logger = logging.getLogger("scan2txt")


class Document:
    """
    Read-only view over an opened PDF.

    Page sizes are reported in points (1/72 inch) from the page rectangle,
    so rotated pages report their displayed orientation.
    """

    def __init__(self, doc: fitz.Document, path: Path):
        self._doc = doc
        self.path = path

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.page_count:
            raise IndexError(f"page index {index} out of range for {self.page_count} page(s)")

    def page_size(self, index: int) -> Tuple[float, float]:
        self._check_index(index)
        rect = self._doc.load_page(index).rect
        return rect.width, rect.height

    def load_page(self, index: int) -> fitz.Page:
        self._check_index(index)
        return self._doc.load_page(index)

    def close(self) -> None:
        if not self._doc.is_closed:
            self._doc.close()

    def __enter__(self) -> "Document":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def open_document(path: Union[str, Path]) -> Document:
    """
    Open a PDF for reading. Raises DocumentOpenError when the path is missing,
    is not a well-formed PDF, or is password protected.
    """
    p = Path(path)
    if not p.is_file():
        raise DocumentOpenError(f"file does not exist: {p}")

    try:
        doc = fitz.open(str(p))
    except Exception as e:
        raise DocumentOpenError(f"cannot open {p.name}, {e}") from e

    if not doc.is_pdf:
        doc.close()
        raise DocumentOpenError(f"not a PDF document: {p.name}")
    if doc.needs_pass:
        doc.close()
        raise DocumentOpenError(f"document is password protected: {p.name}")

    logger.debug("Opened %s, %d page(s)", p, doc.page_count)
    return Document(doc, p)
