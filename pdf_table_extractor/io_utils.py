from __future__ import annotations

import logging
import os
import tempfile

from .normalization import parse_response_body

logger = logging.getLogger(__name__)

SUPPORTED_MIME_TYPES = ('text/csv',)


def read_saved_response(file_obj):
    """Decode a saved extraction response from an uploaded file, stream or path.

    Undecodable content raises ``MalformedResponse``, like a bad service reply.
    """
    if file_obj is None:
        raise ValueError("No file uploaded.")

    if hasattr(file_obj, 'read'):
        if hasattr(file_obj, 'seek'):
            file_obj.seek(0)
        return parse_response_body(file_obj.read())

    path = resolve_upload_path(file_obj)
    with open(path, 'rb') as f:
        body = f.read()
    logger.info("Read saved response %s (%d bytes)", os.path.basename(path), len(body))
    return parse_response_body(body)


def resolve_upload_path(file_obj):
    """Return the local path Gradio stored an uploaded file under."""
    if file_obj is None:
        return None
    if isinstance(file_obj, (str, os.PathLike)):
        return os.fspath(file_obj)
    return getattr(file_obj, 'name', None)


def emit_download(content: str, mime_type: str, filename: str) -> str:
    """Write text to a fresh temp directory and return the path to offer for download.

    Each call gets its own directory so two tables with the same title never
    overwrite each other's file.
    """
    if mime_type not in SUPPORTED_MIME_TYPES:
        raise ValueError(f"Unsupported download type: {mime_type}")
    if not filename or os.path.basename(filename) != filename:
        raise ValueError(f"Invalid download filename: {filename!r}")

    temp_dir = tempfile.mkdtemp(prefix='pdf_tables_')
    path = os.path.join(temp_dir, filename)
    with open(path, 'w', newline='', encoding='utf-8') as f:
        f.write(content)
    logger.info("Wrote %s download %s (%d chars)", mime_type, path, len(content))
    return path
