# src/scan2txt/pipeline.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator, Optional, Union

from .config import ExtractOptions
from .document import Document, open_document
from .engine import create_engine
from .logger import PROGRESS  # noqa: F401, installs Logger.progress
from .models import PageResult
from .ocr_backends.base import BaseOCREngine
from .pdf_processor import BasePDFProcessor, get_pdf_processor, page_image_name
from .postprocess import assemble
from .workspace import workspace

__all__ = ["PagePipeline", "extract_text"]

logger = logging.getLogger("scan2txt")


class PagePipeline:
    """
    Runs pages one at a time, in ascending order:
    render -> persist -> decode -> recognize -> collect.

    The engine is created once by the caller and reused for every page.
    Any exception aborts the whole document.
    """

    def __init__(
        self,
        document: Document,
        engine: BaseOCREngine,
        processor: BasePDFProcessor,
        workdir: Path,
        dpi: int,
    ):
        self.document = document
        self.engine = engine
        self.processor = processor
        self.workdir = workdir
        self.dpi = dpi

    def process_page(self, page_index: int) -> Optional[PageResult]:
        total = self.document.page_count
        page_num = page_index + 1
        logger.info("Processing page %d/%d...", page_num, total)

        request = self.processor.plan(self.document, page_index, self.dpi)
        image_path = self.workdir / page_image_name(page_num)
        self.processor.render_page(self.document, request, image_path)
        try:
            image = self.processor.decode(image_path, page_index)
        finally:
            image_path.unlink(missing_ok=True)

        text = self.engine.recognize(image.pixels)
        del image

        extra = {"phase": "ocr", "current": page_num, "total": total}
        if text and text.strip():
            logger.progress("  Page %d/%d, text extracted: %d characters", page_num, total, len(text), extra=extra)
            return PageResult(page_num=page_num, text=text)
        logger.progress("  Page %d/%d, no text found", page_num, total, extra=extra)
        return None

    def run(self) -> Iterator[PageResult]:
        for page_index in range(self.document.page_count):
            result = self.process_page(page_index)
            if result is not None:
                yield result


def extract_text(
    path: Union[str, Path],
    options: Optional[ExtractOptions] = None,
    *,
    engine: Optional[BaseOCREngine] = None,
) -> str:
    """
    OCR every page of a PDF and return the text, one "=== Page n ===" block
    per page that produced text.

    Raises DocumentOpenError, NoEngineAvailableError, WorkspaceError,
    RenderError or RecognitionError. Nothing is returned on failure,
    text from pages processed before the failure is discarded.
    """
    opts = options or ExtractOptions()

    with open_document(path) as document:
        logger.info("Processing %d page(s)...", document.page_count)

        if engine is None:
            engine = create_engine(
                opts.language,
                fallback_language=opts.fallback_language,
                backend=opts.ocr_backend,
                backend_kwargs=opts.ocr_backend_kwargs,
            )
        logger.info("OCR initialised: %s", engine.display_name)

        processor = get_pdf_processor("pymupdf", max_pixels=opts.max_pixels)
        with workspace(opts.temp_dir) as workdir:
            pipeline = PagePipeline(document, engine, processor, workdir, opts.dpi)
            return assemble(pipeline.run())
