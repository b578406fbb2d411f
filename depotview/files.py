"""
File I/O Primitives
===================

Thin wrappers between the engine's text-in/text-out functions and files:
reading an uploaded CSV into text and writing an export document to disk.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from .config import get_config
from .exceptions import FileReadError
from .export import ExportDocument
from .parsers.codec import BOM

logger = logging.getLogger(__name__)


def read_upload(source, encoding: Optional[str] = None) -> str:
    """
    Read CSV content into text.

    Parameters
    ----------
    source : bytes, str, pathlib.Path or file-like
        Raw bytes, already-decoded text, a path, or an object with
        ``read()`` (e.g. a streamlit ``UploadedFile``)
    encoding : str, optional
        Defaults to the configured import encoding

    Returns
    -------
    str
        Decoded text without a leading byte order mark

    Raises
    ------
    FileReadError
        If the file cannot be read or decoded
    """
    encoding = encoding or get_config().get_import_encoding()

    try:
        if isinstance(source, Path):
            content = source.read_bytes()
        elif hasattr(source, 'read'):
            content = source.read()
        else:
            content = source

        if isinstance(content, (bytes, bytearray)):
            content = bytes(content).decode(encoding)
    except (OSError, UnicodeDecodeError, LookupError) as e:
        raise FileReadError(f"Could not read CSV file: {e}") from e

    if not isinstance(content, str):
        raise FileReadError(f"Unsupported upload content of type {type(content).__name__}")

    return content.lstrip(BOM)


def save_download(document: ExportDocument, directory: Union[str, Path] = '.') -> Path:
    """
    Write an export document into ``directory`` under its file name.

    Returns
    -------
    Path
        The written file
    """
    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)

    path = target_dir / document.filename
    path.write_text(document.content, encoding=get_config().get_export_encoding())
    logger.info("Wrote %s (%d bytes)", path, len(document.content))
    return path
