# scan2txt/config.py
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Dict, Any, Optional

DEFAULT_LANGUAGE = "fr-FR"
FALLBACK_LANGUAGE = "en-US"
DEFAULT_DPI = 300
DEFAULT_OCR_BACKEND = "scan2txt.ocr_backends.tesseract_backend.TesseractOCREngine"


@dataclass
class ExtractOptions:
    """Configuration for a scan2txt extraction run."""
    language: str = DEFAULT_LANGUAGE
    fallback_language: str = FALLBACK_LANGUAGE
    dpi: int = DEFAULT_DPI

    # Parent of the per-run workspace, None means the system temp dir
    temp_dir: Optional[Path] = None
    # Upper bound on width*height of a render target, None means unbounded
    max_pixels: Optional[int] = None

    ocr_backend: str = DEFAULT_OCR_BACKEND
    ocr_backend_kwargs: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self):
        """Converts options to a plain dictionary (paths as strings)."""
        d = asdict(self)
        for key, value in d.items():
            if isinstance(value, Path):
                d[key] = str(value)
        return d

    @classmethod
    def from_dict(cls, options_dict: dict):
        d = dict(options_dict)

        if isinstance(d.get("temp_dir"), str):
            d["temp_dir"] = Path(d["temp_dir"])

        # allow explicit None to mean use default
        for key in ["language", "fallback_language", "dpi", "ocr_backend", "ocr_backend_kwargs"]:
            if key in d and d[key] is None:
                d.pop(key)

        return cls(**d)
