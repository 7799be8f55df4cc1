# scan2txt/models.py
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class RenderRequest:
    """Target raster geometry for a single page."""
    page_index: int
    width: int
    height: int

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


@dataclass
class RasterImage:
    """Decoded pixels of one page, RGB uint8 with shape (height, width, 3)."""
    page_index: int
    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


@dataclass
class PageResult:
    """Recognized text of a single page. page_num is 1-based."""
    page_num: int
    text: str
