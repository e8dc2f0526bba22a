"""Page selection and page extraction."""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from .backends.base import PDFBackend
from .document import engine_operation, new_document, opened_document, resolve_backend
from .exceptions import InvalidInputError
from .types import PageSet
from .utils import check_content

LOGGER = logging.getLogger("pdfopsx.pages")


def pages_in_range(start_page: int, end_page: int) -> List[int]:
    """Return the pages after ``start_page`` up to and including ``end_page``.

    ``start_page`` itself is not part of the range: ``pages_in_range(2, 5)``
    is ``[3, 4, 5]``.
    """

    return list(range(start_page + 1, end_page + 1))


def resolve_page_set(selection: Iterable[int], page_count: int) -> PageSet:
    """Select the pages of a ``page_count``-page document named in ``selection``.

    Duplicates and ordering in ``selection`` are irrelevant; numbers outside
    ``[1, page_count]`` select nothing.
    """

    wanted = set(selection)
    return PageSet(tuple(page for page in range(1, page_count + 1) if page in wanted))


def parse_page_spec(page_spec: str) -> List[int]:
    """Parse a page specification string such as ``"1,3,5-7"`` into page numbers."""

    if not page_spec or not page_spec.strip():
        raise InvalidInputError("Page specification cannot be empty")

    pages: set[int] = set()
    for token in page_spec.split(","):
        token = token.strip()
        if "-" in token:
            match = re.match(r"^(\d+)-(\d+)$", token)
            if not match:
                raise InvalidInputError(
                    f"Invalid page range format: '{token}'. Expected 'start-end'."
                )

            start = int(match.group(1))
            end = int(match.group(2))
            if start > end:
                raise InvalidInputError(
                    f"Invalid range '{token}': start page ({start}) must be <= end page ({end})."
                )

            pages.update(range(start, end + 1))
        else:
            if not token.isdigit():
                raise InvalidInputError(
                    f"Invalid page number: '{token}'. Expected a positive integer."
                )

            pages.add(int(token))

    return sorted(pages)


def extract_pages(
    content: bytes,
    pages: Iterable[int],
    *,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Return a new document holding the selected pages in ascending order."""

    check_content(content, "source_content")
    backend = resolve_backend(backend)

    with opened_document(backend, content, "extract_pages") as source:
        with engine_operation("extract_pages"):
            page_set = resolve_page_set(pages, backend.page_count(source))
            with new_document(backend) as target:
                for page in page_set:
                    LOGGER.debug("Copying page %s", page)
                    backend.copy_pages(source, page, page, target)
                result = backend.serialize(target)

    LOGGER.info("Extracted %d pages", len(page_set))
    return result


def extract_page_range(
    content: bytes,
    start_page: int,
    end_page: int,
    *,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Extract the pages in ``(start_page, end_page]`` into a new document."""

    check_content(content, "source_content")
    return extract_pages(content, pages_in_range(start_page, end_page), backend=backend)


def extract_pages_into_pdfs(
    content: bytes,
    pages: Iterable[int],
    *,
    backend: Optional[PDFBackend] = None,
) -> List[bytes]:
    """Return one single-page document per selected page, in ascending order."""

    check_content(content, "source_content")
    backend = resolve_backend(backend)
    documents: List[bytes] = []

    with opened_document(backend, content, "extract_pages_into_pdfs") as source:
        with engine_operation("extract_pages_into_pdfs"):
            for page in resolve_page_set(pages, backend.page_count(source)):
                with new_document(backend) as target:
                    backend.copy_pages(source, page, page, target)
                    documents.append(backend.serialize(target))

    LOGGER.info("Extracted %d single-page documents", len(documents))
    return documents


__all__ = [
    "extract_page_range",
    "extract_pages",
    "extract_pages_into_pdfs",
    "pages_in_range",
    "parse_page_spec",
    "resolve_page_set",
]
