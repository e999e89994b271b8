"""Atomic file writing for generated output.

A page is written to a temporary file in the target directory and then
renamed over the destination, so an interrupted build never leaves a
half-written HTML file behind.

Usage:
    from common.atomic_file import atomic_write_text

    atomic_write_text(Path("html/index.html"), "<html>...</html>")
"""

import os
import tempfile
from pathlib import Path
from typing import Union

from common.base.logging_config import get_logger
from common.errors import CannotWriteFile

logger = get_logger(__name__)


def atomic_write_text(file_path: Union[str, Path], content: str, encoding: str = 'utf-8') -> None:
    """Atomically write text content to a file, creating parent directories.

    Args:
        file_path: Path of the file to write
        content: The text content to write
        encoding: Text encoding (default: utf-8)

    Raises:
        CannotWriteFile: If the directory, temporary file or rename fails
    """
    path = Path(file_path)
    temp_path = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory as the target, so the rename stays on one filesystem
        temp_fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix='.tmp_', suffix=path.name)
        with os.fdopen(temp_fd, 'w', encoding=encoding) as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        os.replace(temp_path, path)
        temp_path = None
    except OSError as e:
        logger.error(f"Error during atomic write to {path}: {e}")
        raise CannotWriteFile(path, e.strerror or str(e)) from e
    finally:
        if temp_path is not None and os.path.exists(temp_path):
            os.remove(temp_path)
