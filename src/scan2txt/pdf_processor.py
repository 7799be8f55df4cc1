# src/scan2txt/pdf_processor.py
from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

import fitz  # PyMuPDF
import numpy as np
from PIL import Image

from .document import Document
from .exceptions import RenderError
from .models import RasterImage, RenderRequest

logger = logging.getLogger("scan2txt")

POINTS_PER_INCH = 72


def target_size(width_pt: float, height_pt: float, dpi: int) -> tuple[int, int]:
    """Pixel dimensions of a page of the given size in points rendered at dpi."""
    return math.ceil(width_pt * dpi / POINTS_PER_INCH), math.ceil(height_pt * dpi / POINTS_PER_INCH)


def page_image_name(page_num: int) -> str:
    return f"page_{page_num:04d}.png"


# --- Step 1, interface ---
class BasePDFProcessor(ABC):
    """
    Interface for any page rasterization engine.
    """

    def __init__(self, max_pixels: Optional[int] = None):
        self.max_pixels = max_pixels

    def plan(self, document: Document, page_index: int, dpi: int) -> RenderRequest:
        """Compute the render target for one page."""
        width_pt, height_pt = document.page_size(page_index)
        width, height = target_size(width_pt, height_pt, dpi)
        request = RenderRequest(page_index=page_index, width=width, height=height)
        if self.max_pixels is not None and request.pixel_count > self.max_pixels:
            raise RenderError(
                f"page {page_index + 1} would render to {width}x{height} pixels, "
                f"above the limit of {self.max_pixels}"
            )
        return request

    @abstractmethod
    def render_page(self, document: Document, request: RenderRequest, out_path: Path) -> Path:
        """Renders one page to an image file at out_path and returns the path."""
        raise NotImplementedError

    def decode(self, image_path: Path, page_index: int) -> RasterImage:
        """Reopen a rendered page image as an RGB pixel buffer."""
        try:
            with Image.open(image_path) as im:
                pixels = np.asarray(im.convert("RGB"))
        except Exception as e:
            raise RenderError(f"cannot decode {image_path.name}, {e}") from e
        return RasterImage(page_index=page_index, pixels=pixels)


# --- Step 2, concrete implementation with PyMuPDF ---
class PyMuPDFProcessor(BasePDFProcessor):
    """Page rasterizer that uses PyMuPDF."""

    def render_page(self, document: Document, request: RenderRequest, out_path: Path) -> Path:
        """
        Render a page to a PNG of exactly request.width x request.height pixels.
        An existing file at out_path is overwritten.
        """
        page_num = request.page_index + 1
        try:
            page = document.load_page(request.page_index)
            rect = page.rect
            if rect.width <= 0 or rect.height <= 0:
                raise ValueError(f"empty page rectangle {rect}")
            matrix = fitz.Matrix(request.width / rect.width, request.height / rect.height)
            pix = page.get_pixmap(matrix=matrix, alpha=False)

            out_path.parent.mkdir(parents=True, exist_ok=True)
            if (pix.width, pix.height) == (request.width, request.height):
                pix.save(str(out_path))
            else:
                # PyMuPDF rounds the transformed rectangle itself, pin the exact target size
                mode = "RGB" if pix.n >= 3 else "L"
                im = Image.frombytes(mode, (pix.width, pix.height), pix.samples)
                im = im.resize((request.width, request.height), Image.LANCZOS)
                im.save(out_path, format="PNG")
        except Exception as e:
            raise RenderError(f"cannot render page {page_num}, {e}") from e

        logger.debug("Rendered page %d to %s (%dx%d)", page_num, out_path.name, request.width, request.height)
        return out_path


# --- Step 3, factory ---
def get_pdf_processor(engine_name: str = "pymupdf", max_pixels: Optional[int] = None) -> BasePDFProcessor:
    """
    Create a page rasterizer by name.
    """
    name = (engine_name or "").lower()
    if name == "pymupdf":
        return PyMuPDFProcessor(max_pixels=max_pixels)
    raise ValueError(f"Unknown PDF engine, '{engine_name}'. Supported engines, ['pymupdf']")
