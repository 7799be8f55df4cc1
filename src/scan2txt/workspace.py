# src/scan2txt/workspace.py
from __future__ import annotations

import logging
import shutil
import tempfile
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from .exceptions import WorkspaceError

logger = logging.getLogger("scan2txt")

WORKSPACE_PREFIX = "scan2txt_"


def _remove_quietly(path: Path) -> None:
    try:
        shutil.rmtree(path)
    except OSError as e:
        # A leftover temp dir never fails the run
        logger.debug("Could not remove workspace %s, %s", path, e)


@contextmanager
def workspace(base_dir: Optional[Union[str, Path]] = None) -> Iterator[Path]:
    """
    Create a uniquely named directory for transient page images and remove it
    on every exit path. Raises WorkspaceError if it cannot be created.
    """
    parent = Path(base_dir) if base_dir else Path(tempfile.gettempdir())
    path = parent / f"{WORKSPACE_PREFIX}{uuid.uuid4().hex}"
    try:
        path.mkdir(parents=True)
    except OSError as e:
        raise WorkspaceError(f"cannot create workspace {path}, {e}") from e

    logger.debug("Workspace, %s", path)
    try:
        yield path
    finally:
        _remove_quietly(path)
