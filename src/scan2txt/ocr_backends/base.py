# scan2txt/ocr_backends/base.py
from abc import ABC, abstractmethod
import numpy as np

class BaseOCREngine(ABC):
    """
    A recognizer bound to one language for the lifetime of a run.
    Constructors raise LanguageUnavailableError when the language cannot be served.
    """
    language: str = ""

    @property
    def display_name(self) -> str:
        return self.language

    @abstractmethod
    def recognize(self, image: np.ndarray) -> str:
        """Return the recognized text, an empty string when none was found."""
        pass
