# scan2txt/exceptions.py
class Scan2TxtError(Exception):
    """Base exception for the scan2txt library."""
    pass

class UsageError(Scan2TxtError):
    """Raised for bad or missing command line arguments."""
    pass

class DocumentOpenError(Scan2TxtError):
    """Raised when the input document is missing, unreadable or malformed."""
    pass

class LanguageUnavailableError(Scan2TxtError):
    """Raised by a backend when it cannot serve the requested language."""
    pass

class NoEngineAvailableError(Scan2TxtError):
    """Raised when neither the requested nor the fallback language has an engine."""
    pass

class RenderError(Scan2TxtError):
    """Raised when a page cannot be rasterized."""
    pass

class RecognitionError(Scan2TxtError):
    """Raised when the OCR engine fails on an image. Finding no text is not an error."""
    pass

class WorkspaceError(Scan2TxtError):
    """Raised when the transient page directory cannot be created."""
    pass
