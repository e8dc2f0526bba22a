"""Text and image stamps drawn over existing pages."""

from __future__ import annotations

import logging
import math
from typing import Optional

from .backends.base import BackendDocument, PDFBackend
from .document import engine_operation, opened_document, resolve_backend
from .types import (
    Alignment,
    DiagonalTextStamp,
    ImageStamp,
    PageSize,
    Placement,
    StampSpec,
    TextStamp,
    TextStyle,
    VerticalAlignment,
)
from .utils import check_content

LOGGER = logging.getLogger("pdfopsx.stamps")

DEFAULT_MARGIN = 20.0
MAX_TEXT_LENGTH = 50
TEXT_TOP_OFFSET = 20.0

DIAGONAL_TEXT_STYLE = TextStyle(
    font_size=60,
    alignment=Alignment.CENTER,
    vertical_alignment=VerticalAlignment.MIDDLE,
)
PLAIN_TEXT_STYLE = TextStyle(
    font_size=12,
    bold=True,
    color=(1.0, 0.0, 0.0),
    alignment=Alignment.LEFT,
)


def diagonal_angle(size: PageSize) -> int:
    """Angle of the page diagonal in whole degrees, truncated."""

    return int(math.atan2(size.height, size.width) * (180 / math.pi))


def diagonal_text_placement(size: PageSize, opacity: float) -> Placement:
    return Placement(
        x=size.width / 2,
        y=size.height / 2,
        rotation=math.pi / 180 * diagonal_angle(size),
        opacity=opacity,
    )


def image_placement(size: PageSize, image_size: PageSize, opacity: float) -> Placement:
    return Placement(
        x=0.0,
        y=size.height - image_size.height - DEFAULT_MARGIN,
        opacity=opacity,
    )


def text_placement(size: PageSize, opacity: float) -> Placement:
    return Placement(x=DEFAULT_MARGIN, y=size.height - TEXT_TOP_OFFSET, opacity=opacity)


def truncate_text(text: str, limit: int = MAX_TEXT_LENGTH) -> str:
    return text[:limit]


def stamped_pages(page_count: int, each_page: bool) -> range:
    """Pages receiving a stamp: all of them, or only the first."""

    return range(1, (page_count if each_page else min(page_count, 1)) + 1)


class StampCompositor:
    """Places one overlay per targeted page and delegates drawing to the backend."""

    def __init__(self, backend: Optional[PDFBackend] = None) -> None:
        self.backend = resolve_backend(backend)

    def apply(self, content: bytes, stamp: StampSpec) -> bytes:
        check_content(content, "source_content")
        kind = type(stamp).__name__
        if stamp.is_blank:
            LOGGER.debug("%s has no payload; returning source unchanged", kind)
            return content

        operation = f"apply_stamp[{kind}]"
        with opened_document(self.backend, content, operation) as document, engine_operation(operation):
            image_size = self.backend.image_size(stamp.image) if isinstance(stamp, ImageStamp) else None
            pages = stamped_pages(self.backend.page_count(document), stamp.each_page)
            for page in pages:
                self._draw(document, page, stamp, image_size)
            result = self.backend.serialize(document)

        LOGGER.info("Applied %s to %d pages", kind, len(pages))
        return result

    def _draw(
        self,
        document: BackendDocument,
        page: int,
        stamp: StampSpec,
        image_size: Optional[PageSize],
    ) -> None:
        size = self.backend.page_size(document, page)
        if isinstance(stamp, DiagonalTextStamp):
            self.backend.draw_text_overlay(
                document,
                page,
                stamp.text,
                diagonal_text_placement(size, stamp.opacity),
                DIAGONAL_TEXT_STYLE,
            )
        elif isinstance(stamp, ImageStamp):
            assert image_size is not None
            self.backend.draw_image_overlay(
                document,
                page,
                stamp.image,
                image_placement(size, image_size, stamp.opacity),
            )
        elif isinstance(stamp, TextStamp):
            self.backend.draw_text_overlay(
                document,
                page,
                truncate_text(stamp.text),
                text_placement(size, stamp.opacity),
                PLAIN_TEXT_STYLE,
            )
        else:  # pragma: no cover
            raise TypeError(f"Unsupported stamp type: {type(stamp).__name__}")


def apply_stamp(content: bytes, stamp: StampSpec, *, backend: Optional[PDFBackend] = None) -> bytes:
    return StampCompositor(backend).apply(content, stamp)


def add_diagonal_text_stamp(
    content: bytes,
    stamp_text: str,
    each_page: bool = False,
    *,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Draw ``stamp_text`` large and translucent along the page diagonal."""

    return apply_stamp(content, DiagonalTextStamp(stamp_text, each_page=each_page), backend=backend)


def add_image_stamp(
    content: bytes,
    stamp_content: bytes,
    each_page: bool = False,
    *,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Draw the encoded image ``stamp_content`` in the top-left corner."""

    return apply_stamp(content, ImageStamp(stamp_content, each_page=each_page), backend=backend)


def add_text_stamp(
    content: bytes,
    stamp_text: str,
    each_page: bool = False,
    *,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Draw ``stamp_text`` in bold red along the top edge."""

    return apply_stamp(content, TextStamp(stamp_text, each_page=each_page), backend=backend)


__all__ = [
    "DEFAULT_MARGIN",
    "MAX_TEXT_LENGTH",
    "StampCompositor",
    "add_diagonal_text_stamp",
    "add_image_stamp",
    "add_text_stamp",
    "apply_stamp",
    "diagonal_angle",
]
