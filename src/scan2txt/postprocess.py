# src/scan2txt/postprocess.py
from __future__ import annotations

from typing import Iterable

from .models import PageResult

START_MARKER = "========== EXTRACTED TEXT =========="
END_MARKER = "==================================="


def page_header(page_num: int) -> str:
    return f"=== Page {page_num} ==="


def assemble(results: Iterable[PageResult]) -> str:
    """
    Join page results in the order given. Each page contributes a header line,
    its text and a blank line. Pages without text leave no trace.
    """
    parts = []
    for r in results:
        if not r.text.strip():
            continue
        parts.append(f"{page_header(r.page_num)}\n{r.text}\n\n")
    return "".join(parts)


def format_output(text: str) -> str:
    """The stdout block of a successful run."""
    return f"{START_MARKER}\n{text}\n{END_MARKER}\n"


def parse_marked_output(output: str) -> str:
    """
    Recover the document text from captured command output.
    Without a start marker the whole output is returned, without an end
    marker everything after the start marker. The result is stripped.
    """
    start = output.find(START_MARKER)
    if start == -1:
        return output.strip()
    start += len(START_MARKER)

    end = output.find(END_MARKER, start)
    if end == -1:
        return output[start:].strip()
    return output[start:end].strip()
