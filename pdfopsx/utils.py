"""Utility functions for PDF operations."""

from __future__ import annotations

import logging
from typing import Optional

from .backends.base import PDFBackend
from .document import engine_operation, opened_document, resolve_backend
from .exceptions import InvalidInputError


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def check_content(content: Optional[bytes], name: str = "content") -> None:
    """Raise :class:`InvalidInputError` when ``content`` is missing or empty."""

    if content is None or len(content) < 1:
        raise InvalidInputError(f"The {name} was not specified.")


def get_page_count(content: bytes, *, backend: Optional[PDFBackend] = None) -> int:
    """Return the number of pages in ``content``."""

    check_content(content, "source_content")
    backend = resolve_backend(backend)
    with opened_document(backend, content, "get_page_count") as document:
        with engine_operation("get_page_count"):
            return backend.page_count(document)


def pdf_to_text(content: bytes, *, backend: Optional[PDFBackend] = None) -> str:
    """Return the extracted text of every page, concatenated in page order."""

    check_content(content, "source_content")
    backend = resolve_backend(backend)
    parts = []
    with opened_document(backend, content, "pdf_to_text") as document:
        with engine_operation("pdf_to_text"):
            for page in range(1, backend.page_count(document) + 1):
                parts.append(backend.extract_text(document, page))
    return "".join(parts)


def rewrite_pdf(content: bytes, *, backend: Optional[PDFBackend] = None) -> bytes:
    """Open ``content`` and serialize it again without other changes."""

    check_content(content, "source_content")
    backend = resolve_backend(backend)
    with opened_document(backend, content, "rewrite_pdf") as document:
        with engine_operation("rewrite_pdf"):
            return backend.serialize(document)


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500 KB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"
