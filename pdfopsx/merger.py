"""Merge functionality for :mod:`pdfopsx`."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from .backends.base import PDFBackend
from .document import engine_operation, new_document, opened_document, resolve_backend
from .exceptions import InvalidInputError
from .utils import check_content

LOGGER = logging.getLogger("pdfopsx.merge")


def merge_pdfs(
    contents: Sequence[bytes],
    *,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Concatenate every page of every document in ``contents``.

    Each input is opened once, copied in full into a single target and
    closed again before the next input is read; the target is serialized
    once at the end.

    Raises:
        InvalidInputError: If no inputs are given or any input is empty.
    """

    if not contents:
        raise InvalidInputError("No input PDFs provided")
    for index, content in enumerate(contents):
        check_content(content, f"content at position {index}")

    backend = resolve_backend(backend)
    with new_document(backend) as target:
        for index, content in enumerate(contents):
            with opened_document(backend, content, "merge_pdfs") as source:
                with engine_operation("merge_pdfs"):
                    page_count = backend.page_count(source)
                    LOGGER.debug("Adding %d pages from input %d", page_count, index)
                    if page_count:
                        backend.copy_pages(source, 1, page_count, target)

        with engine_operation("merge_pdfs"):
            result = backend.serialize(target)

    LOGGER.info("Merged %d PDFs", len(contents))
    return result


def append_pdf(
    source_content: bytes,
    append_content: bytes,
    *,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Return ``source_content`` followed by every page of ``append_content``."""

    check_content(source_content, "source_content")
    check_content(append_content, "append_content")
    return merge_pdfs([source_content, append_content], backend=backend)


__all__ = ["append_pdf", "merge_pdfs"]
