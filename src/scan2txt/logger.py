# src/scan2txt/logger.py

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import IO, Optional, Union

LOGGER_NAME = "scan2txt"

# --- Custom Log Level for Progress ---
PROGRESS = 25
logging.addLevelName(PROGRESS, "PROGRESS")

def progress(self, msg, *args, **kwargs):
    if self.isEnabledFor(PROGRESS):
        self._log(PROGRESS, msg, args, **kwargs)

logging.Logger.progress = progress

# --- Custom Filters ---
class ExcludeLevelFilter(logging.Filter):
    def __init__(self, levelno: int):
        super().__init__()
        self.levelno = levelno
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno != self.levelno

# --- Main Configuration Function ---
def setup_logging(
    level: int = logging.INFO,
    *,
    stream: Optional[IO[str]] = None,
    file_path: Optional[Union[str, Path]] = None,
    file_level: Optional[int] = None,
) -> logging.Logger:
    """
    Configures the "scan2txt" logger for a command line run.

    Args:
        level: The level for the diagnostics stream (stderr by default).
        stream: Where diagnostics go. Resolved at call time so redirected
            stderr is honoured.
        file_path: Optional persistent log file.
        file_level: The logging level for the file.

    Returns:
        The configured logger. Handlers from a previous call are replaced.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.propagate = False

    # Diagnostics channel, progress lines included
    sh = logging.StreamHandler(stream if stream is not None else sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(sh)

    # File handler
    if file_path:
        fp = Path(file_path)
        fp.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(fp, maxBytes=5*1024*1024, backupCount=2, encoding="utf-8")
        fh.setLevel(file_level if file_level is not None else level)
        fh.setFormatter(logging.Formatter("%(asctime)s | %(levelname)-8s | %(message)s"))
        fh.addFilter(ExcludeLevelFilter(PROGRESS))
        logger.addHandler(fh)

    return logger
