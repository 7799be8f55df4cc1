# src/scan2txt/__init__.py
"""OCR text extraction for PDF documents, scanned or not."""

__version__ = "1.0.0"

from .config import ExtractOptions
from .exceptions import (
    DocumentOpenError,
    NoEngineAvailableError,
    RecognitionError,
    RenderError,
    Scan2TxtError,
    UsageError,
    WorkspaceError,
)
from .pipeline import extract_text
from .postprocess import parse_marked_output

__all__ = [
    "ExtractOptions",
    "extract_text",
    "parse_marked_output",
    "Scan2TxtError",
    "UsageError",
    "DocumentOpenError",
    "NoEngineAvailableError",
    "RenderError",
    "RecognitionError",
    "WorkspaceError",
]
