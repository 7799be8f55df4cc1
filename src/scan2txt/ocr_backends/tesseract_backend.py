# scan2txt/ocr_backends/tesseract_backend.py
from __future__ import annotations

from typing import Dict, Any
import logging
import os
import platform
import re
import shutil
from pathlib import Path

import numpy as np
from PIL import Image
import pytesseract as pt

from ..exceptions import LanguageUnavailableError, RecognitionError
from .base import BaseOCREngine

logger = logging.getLogger("scan2txt")


def _as_int(x, default: int) -> int:
    try:
        if isinstance(x, str):
            x = x.strip().rstrip(",}] ")
        return int(x)
    except Exception:
        m = re.search(r"-?\d+", str(x))
        return int(m.group()) if m else default


def resolve_tesseract_cmd() -> str | None:
    # 1) explicit env override
    cmd = os.getenv("TESSERACT_CMD")
    if cmd and Path(cmd).exists():
        return cmd

    # 2) look on PATH
    cmd = shutil.which("tesseract")
    if cmd:
        return cmd

    # 3) common fallbacks by OS
    system = platform.system()
    if system == "Windows":
        candidates = [
            r"C:\Program Files\Tesseract-OCR\tesseract.exe",
            r"C:\Program Files (x86)\Tesseract-OCR\tesseract.exe",
        ]
    elif system == "Darwin":  # macOS
        candidates = [
            "/opt/homebrew/bin/tesseract",   # Apple Silicon Homebrew
            "/usr/local/bin/tesseract",      # Intel Homebrew/MacPorts
        ]
    else:  # Linux and others
        candidates = [
            "/usr/bin/tesseract",            # apt/yum default
            "/usr/local/bin/tesseract",      # source install
            "/snap/bin/tesseract",           # snap
        ]

    for p in candidates:
        if Path(p).exists():
            return p
    return None

cmd = resolve_tesseract_cmd()
if cmd:
    pt.pytesseract.tesseract_cmd = cmd


# Primary language subtag -> Tesseract traineddata name
_TESS_LANG_MAP = {
    "ar": "ara",
    "cs": "ces",
    "da": "dan",
    "de": "deu",
    "el": "ell",
    "en": "eng",
    "es": "spa",
    "fi": "fin",
    "fr": "fra",
    "he": "heb",
    "hi": "hin",
    "hu": "hun",
    "it": "ita",
    "ja": "jpn",
    "ko": "kor",
    "nl": "nld",
    "no": "nor",
    "pl": "pol",
    "pt": "por",
    "ro": "ron",
    "ru": "rus",
    "sv": "swe",
    "tr": "tur",
    "uk": "ukr",
    "vi": "vie",
}

# Region specific scripts
_TESS_REGION_MAP = {
    "zh-cn": "chi_sim",
    "zh-sg": "chi_sim",
    "zh-hans": "chi_sim",
    "zh-tw": "chi_tra",
    "zh-hk": "chi_tra",
    "zh-hant": "chi_tra",
}


def to_tesseract_lang(tag: str) -> str:
    """
    Map a language tag such as "fr-FR", "en_US" or "zh-TW" to a Tesseract
    language name. Unknown tags and raw Tesseract names ("fra", "chi_sim")
    pass through lowercased.
    """
    t = (tag or "").strip().replace("_", "-").lower()
    if not t:
        raise LanguageUnavailableError("empty language tag")
    if t in _TESS_REGION_MAP:
        return _TESS_REGION_MAP[t]
    if t == "zh":
        return "chi_sim"
    primary = t.split("-", 1)[0]
    if primary in _TESS_LANG_MAP:
        return _TESS_LANG_MAP[primary]
    # raw traineddata names keep their underscores
    return (tag or "").strip().lower()


class TesseractOCREngine(BaseOCREngine):
    """
    Pytesseract-based backend.

    Kwargs supported (all optional):
      - tesseract_cmd: full path to tesseract binary (Windows)
      - tessdata_prefix: path to tessdata directory
      - oem: 0..3 (default 3 = LSTM)
      - psm: page segmentation mode (default 3 = fully automatic, whole pages)
      - preserve_interword_spaces: bool (default True)
      - extra_config: str of extra flags (appended to config string)
    """

    def __init__(self, language: str, **kwargs: Dict[str, Any]):
        k = dict(kwargs)  # don't mutate caller's dict

        # Binary path / tessdata (Windows-friendly)
        tesseract_cmd = k.pop("tesseract_cmd", None) or k.pop("tesseract_path", None)
        if tesseract_cmd:
            if not os.path.exists(str(tesseract_cmd)):
                raise LanguageUnavailableError(f"Tesseract binary not found: {tesseract_cmd}")
            pt.pytesseract.tesseract_cmd = str(tesseract_cmd)

        tessdata_prefix = k.pop("tessdata_prefix", None)
        if tessdata_prefix:
            os.environ["TESSDATA_PREFIX"] = str(tessdata_prefix)

        self.language = language
        self.lang = to_tesseract_lang(language)

        # Tesseract config
        oem = _as_int(k.pop("oem", 3), 3)
        psm = _as_int(k.pop("psm", 3), 3)
        preserve_spaces = bool(k.pop("preserve_interword_spaces", True))
        extra_cfg = str(k.pop("extra_config", "")).strip()

        cfg_parts = [f"--oem {oem}", f"--psm {psm}"]
        if preserve_spaces:
            cfg_parts.append("-c preserve_interword_spaces=1")
        if extra_cfg:
            cfg_parts.append(extra_cfg)
        self._config = " ".join(cfg_parts)

        if k:
            logger.debug("Ignoring unsupported Tesseract options, %s", sorted(k))

        installed = self._installed_languages()
        if self.lang not in installed:
            raise LanguageUnavailableError(
                f"Tesseract language data '{self.lang}' for {language} is not installed"
            )

    @staticmethod
    def _installed_languages() -> set:
        try:
            return set(pt.get_languages(config=""))
        except pt.TesseractNotFoundError as e:
            raise LanguageUnavailableError(f"Tesseract is not installed or not on PATH, {e}") from e
        except (pt.TesseractError, OSError) as e:
            raise LanguageUnavailableError(f"Cannot list Tesseract languages, {e}") from e

    @property
    def display_name(self) -> str:
        return f"{self.language} (tesseract: {self.lang})"

    def _to_pil(self, img) -> Image.Image:
        if isinstance(img, Image.Image):
            return img
        if isinstance(img, np.ndarray):
            if img.ndim == 2:
                return Image.fromarray(img)
            # Heuristic: if last dim is 3/4 treat as RGB
            return Image.fromarray(img[..., :3])
        raise RecognitionError(f"Unsupported image type, {type(img).__name__}")

    def recognize(self, image: np.ndarray) -> str:
        try:
            pil_im = self._to_pil(image)
            txt = pt.image_to_string(pil_im, lang=self.lang, config=self._config)
        except RecognitionError:
            raise
        except (pt.TesseractError, RuntimeError, OSError, ValueError, TypeError) as e:
            raise RecognitionError(f"Tesseract failed, {e}") from e
        return txt.strip()
