"""PDF splitting into fixed-size chunks."""

from __future__ import annotations

import logging
from typing import List, Optional

from .backends.base import BackendDocument, PDFBackend
from .document import engine_operation, opened_document, resolve_backend
from .types import SplitPlan
from .utils import check_content

LOGGER = logging.getLogger("pdfopsx.split")


def split_pdf(
    content: bytes,
    pages_per_document: int = 1,
    *,
    keep_remainder: bool = True,
    backend: Optional[PDFBackend] = None,
) -> List[bytes]:
    """Split ``content`` into consecutive documents of ``pages_per_document`` pages.

    Args:
        content: Source PDF bytes.
        pages_per_document: Size of every complete chunk.
        keep_remainder: When the page count is not a multiple of
            ``pages_per_document`` the trailing pages form a final, shorter
            document. Pass ``False`` to drop them instead.
        backend: Engine to use; defaults to :class:`PypdfBackend`.

    Returns:
        The serialized chunks in source order.

    Raises:
        InvalidInputError: If ``content`` is empty or ``pages_per_document < 1``.
        MalformedDocumentError: If ``content`` cannot be parsed.
        EngineFailureError: If copying or serializing a chunk fails.
    """

    check_content(content, "source_content")
    plan = SplitPlan(pages_per_document=pages_per_document, keep_remainder=keep_remainder)
    backend = resolve_backend(backend)
    sections: List[bytes] = []

    with opened_document(backend, content, "split_pdf") as source, engine_operation("split_pdf"):
        page_count = backend.page_count(source)
        target: Optional[BackendDocument] = None
        try:
            for page in range(1, page_count + 1):
                if plan.opens_chunk(page):
                    target = backend.new_document()

                backend.copy_pages(source, page, page, target)

                if plan.closes_chunk(page):
                    sections.append(backend.serialize(target))
                    backend.close(target)
                    target = None
                    LOGGER.debug("Completed chunk %d ending at page %d", len(sections), page)

            if target is not None:
                remainder = page_count % plan.pages_per_document
                if plan.keep_remainder:
                    sections.append(backend.serialize(target))
                    LOGGER.debug("Flushed final chunk of %d pages", remainder)
                else:
                    LOGGER.warning("Dropping %d trailing pages that do not fill a chunk", remainder)
        finally:
            if target is not None:
                backend.close(target)

    LOGGER.info("Split %d pages into %d documents", page_count, len(sections))
    return sections


__all__ = ["split_pdf"]
