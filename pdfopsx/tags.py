"""Merge tag discovery.

A merge tag is a piece of text enclosed in a pair of delimiters, for example
``<<A>> invoice-42 <</A>>``. Documents are scanned page by page and the pages
carrying the same tag are grouped so that they can be merged or routed
together.
"""

from __future__ import annotations

import logging
import re
from typing import Dict, Iterable, List, Optional

from .backends.base import PDFBackend
from .document import engine_operation, opened_document, resolve_backend
from .exceptions import InvalidInputError
from .types import MergeTag, TagOccurrence
from .utils import check_content

LOGGER = logging.getLogger("pdfopsx.tags")


def _check_delimiters(start_tag: str, end_tag: str) -> None:
    if not start_tag or not start_tag.strip():
        raise InvalidInputError("The start tag was not specified.")
    if not end_tag or not end_tag.strip():
        raise InvalidInputError("The end tag was not specified.")


def find_tag_in_text(text: str, start_tag: str, end_tag: str) -> Optional[str]:
    """Return the trimmed text between the delimiters, or ``None``.

    Both delimiters must occur verbatim in ``text``. The delimiters are then
    located ignoring case: the first start delimiter, and the first end
    delimiter at or after it. The end delimiter has to begin after the start
    delimiter ends and the enclosed text must not be blank.
    """

    if start_tag not in text or end_tag not in text:
        return None

    start_match = re.search(re.escape(start_tag), text, re.IGNORECASE)
    if start_match is None:
        return None

    end_match = re.compile(re.escape(end_tag), re.IGNORECASE).search(text, start_match.start())
    if end_match is None or start_match.end() >= end_match.start():
        return None

    tag = text[start_match.end():end_match.start()].strip()
    return tag or None


def scan_tags(
    content: bytes,
    start_tag: str,
    end_tag: str,
    *,
    backend: Optional[PDFBackend] = None,
) -> List[TagOccurrence]:
    """Return at most one tag occurrence per page, in page order."""

    check_content(content, "source_content")
    _check_delimiters(start_tag, end_tag)
    backend = resolve_backend(backend)
    occurrences: List[TagOccurrence] = []

    with opened_document(backend, content, "scan_tags") as document, engine_operation("scan_tags"):
        for page in range(1, backend.page_count(document) + 1):
            tag = find_tag_in_text(backend.extract_text(document, page), start_tag, end_tag)
            if tag is None:
                continue
            LOGGER.debug("Found tag %r on page %d", tag, page)
            occurrences.append(TagOccurrence(page=page, tag=tag))

    return occurrences


def group_tags(occurrences: Iterable[TagOccurrence]) -> List[MergeTag]:
    """Group occurrences by exact tag text.

    Groups are ordered by tag text and the pages of a group ascend. A page
    contributes to one group only; later occurrences on an already seen page
    are ignored.
    """

    tag_by_page: Dict[int, str] = {}
    for occurrence in occurrences:
        tag_by_page.setdefault(occurrence.page, occurrence.tag)

    groups: Dict[str, MergeTag] = {}
    for page in sorted(tag_by_page):
        tag = tag_by_page[page]
        groups.setdefault(tag, MergeTag(tag=tag)).on_pages.append(page)

    return [groups[tag] for tag in sorted(groups)]


def find_merge_tags(
    content: bytes,
    start_tag: str,
    end_tag: str,
    *,
    backend: Optional[PDFBackend] = None,
) -> List[MergeTag]:
    """Scan ``content`` for tags enclosed by ``start_tag``/``end_tag`` and group them."""

    merge_tags = group_tags(scan_tags(content, start_tag, end_tag, backend=backend))
    LOGGER.info("Found %d distinct merge tags", len(merge_tags))
    return merge_tags


__all__ = ["find_merge_tags", "find_tag_in_text", "group_tags", "scan_tags"]
