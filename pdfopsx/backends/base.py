"""Backend protocol for PDF operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..types import PageSize, Placement, ProtectionParams, TextStyle


@dataclass
class BackendDocument:
    """Opaque handle for a document owned by a backend."""

    source_size: int = 0
    closed: bool = False


class PDFBackend(Protocol):
    """Protocol defining the engine operations the core relies on.

    Page numbers are 1-based throughout.
    """

    def open_document(self, content: bytes) -> BackendDocument:
        """Parse ``content``; raise :class:`MalformedDocumentError` on failure."""

    def new_document(self) -> BackendDocument:
        """Return an empty target document."""

    def close(self, document: BackendDocument) -> None:
        """Release resources held by ``document``. Must be idempotent."""

    def page_count(self, document: BackendDocument) -> int:
        """Return the number of pages in ``document``."""

    def page_size(self, document: BackendDocument, page: int) -> PageSize:
        """Return the size of ``page`` in points."""

    def extract_text(self, document: BackendDocument, page: int) -> str:
        """Return the plain text of ``page``."""

    def copy_pages(
        self,
        source: BackendDocument,
        first_page: int,
        last_page: int,
        target: BackendDocument,
    ) -> None:
        """Append the inclusive page range of ``source`` to ``target``."""

    def draw_text_overlay(
        self,
        document: BackendDocument,
        page: int,
        text: str,
        placement: Placement,
        style: TextStyle,
    ) -> None:
        """Draw ``text`` over ``page`` inside a saved/restored graphics state."""

    def draw_image_overlay(
        self,
        document: BackendDocument,
        page: int,
        image: bytes,
        placement: Placement,
    ) -> None:
        """Draw the encoded ``image`` over ``page`` at its natural size."""

    def image_size(self, image: bytes) -> PageSize:
        """Return the rendered size of the encoded ``image`` in points."""

    def flatten_form(self, document: BackendDocument) -> None:
        """Bake form field appearances into the page content."""

    def set_field_value(self, document: BackendDocument, field_name: str, value: str) -> bool:
        """Set a form field; return ``False`` when no such field exists."""

    def serialize(self, document: BackendDocument) -> bytes:
        """Return the serialized bytes of ``document``."""

    def encrypt_on_serialize(self, document: BackendDocument, params: ProtectionParams) -> bytes:
        """Return the serialized bytes of ``document`` encrypted with ``params``."""
