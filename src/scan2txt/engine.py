# src/scan2txt/engine.py
from __future__ import annotations

import importlib
import logging
from typing import Any, Optional, Type

from .config import DEFAULT_OCR_BACKEND, FALLBACK_LANGUAGE
from .exceptions import LanguageUnavailableError, NoEngineAvailableError
from .ocr_backends.base import BaseOCREngine

logger = logging.getLogger("scan2txt")


def _import_obj(dotted: str):
    mod_path, _, attr = dotted.rpartition(".")
    if not mod_path or not attr:
        raise ImportError(f"Invalid backend path, {dotted}")
    mod = importlib.import_module(mod_path)
    try:
        return getattr(mod, attr)
    except AttributeError as e:
        raise ImportError(f"Backend class not found, {dotted}") from e


def load_backend(backend: Any) -> Type[BaseOCREngine]:
    """Accept a backend class or its dotted path."""
    if isinstance(backend, str):
        return _import_obj(backend)
    return backend


def create_engine(
    language: str,
    *,
    fallback_language: str = FALLBACK_LANGUAGE,
    backend: Any = DEFAULT_OCR_BACKEND,
    backend_kwargs: Optional[dict] = None,
) -> BaseOCREngine:
    """
    Build the OCR engine for a run.

    The requested language is tried first. If the backend reports it as
    unavailable, a warning is logged and the fallback language is tried once.
    When both fail, NoEngineAvailableError is raised.
    """
    EngineCls = load_backend(backend)
    kwargs = dict(backend_kwargs or {})

    try:
        return EngineCls(language, **kwargs)
    except LanguageUnavailableError as e:
        logger.debug("Engine for %s unavailable, %s", language, e)
        first_error = e

    logger.warning("Language %s not available, falling back to %s", language, fallback_language)
    try:
        return EngineCls(fallback_language, **kwargs)
    except LanguageUnavailableError as e:
        raise NoEngineAvailableError(
            f"Unable to initialise the OCR engine for {language} or {fallback_language}: "
            f"{first_error}; {e}"
        ) from e
