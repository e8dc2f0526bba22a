"""pypdf backend implementation for pdfopsx.

Documents are parsed and written with ``pypdf``. Overlays are rendered onto
a single-page canvas with ``reportlab`` and merged over the target page.
Encryption is applied by ``pikepdf`` when the document is serialized, since
it exposes owner-only AES-256 with unencrypted metadata directly.
"""

from __future__ import annotations

import io
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

import pikepdf
from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError
from pypdf.generic import NameObject
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen.canvas import Canvas

from ..exceptions import EngineFailureError, MalformedDocumentError
from ..types import (
    Alignment,
    Cipher,
    PageSize,
    Permission,
    Placement,
    ProtectionParams,
    TextStyle,
    VerticalAlignment,
)
from .base import BackendDocument, PDFBackend

LOGGER = logging.getLogger("pdfopsx.backends.pypdf")

_SECURITY_REVISIONS = {Cipher.AES_256: 6}


@dataclass
class PypdfDocument(BackendDocument):
    writer: Optional[PdfWriter] = None
    reader: Optional[PdfReader] = None


def _field_value(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, list):
        value = value[0] if value else None
        if value is None:
            return None
    return str(value)


def _pikepdf_permissions(permissions: Permission) -> pikepdf.Permissions:
    return pikepdf.Permissions(
        accessibility=bool(permissions & Permission.EXTRACT_TEXT_AND_GRAPHICS),
        extract=bool(permissions & Permission.EXTRACT),
        modify_annotation=bool(permissions & Permission.ADD_OR_MODIFY),
        modify_assembly=bool(permissions & Permission.ASSEMBLE_DOC),
        modify_form=bool(permissions & Permission.FILL_FORM_FIELDS),
        modify_other=bool(permissions & Permission.MODIFY),
        print_lowres=bool(permissions & Permission.PRINT),
        print_highres=bool(permissions & Permission.PRINT_HIGH_QUALITY),
    )


class PypdfBackend(PDFBackend):
    """Backend implementation that uses `pypdf` under the hood."""

    def __init__(self, *, pdf_version: str = "1.7") -> None:
        self.pdf_version = pdf_version

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------
    def _new_writer(self, reader: Optional[PdfReader] = None) -> PdfWriter:
        writer = PdfWriter(clone_from=reader) if reader is not None else PdfWriter()
        writer.pdf_header = f"%PDF-{self.pdf_version}".encode("ascii")
        return writer

    def open_document(self, content: bytes) -> PypdfDocument:
        try:
            reader = PdfReader(io.BytesIO(content))
            if reader.is_encrypted and reader.decrypt("") == 0:
                raise MalformedDocumentError(
                    "PDF is protected with a user password and cannot be opened."
                )
            writer = self._new_writer(reader)
        except MalformedDocumentError:
            raise
        except PdfReadError as exc:
            raise MalformedDocumentError(f"Corrupted or invalid PDF content. Error: {exc}") from exc
        except Exception as exc:
            raise MalformedDocumentError(f"Unexpected error reading PDF. Error: {exc}") from exc

        return PypdfDocument(source_size=len(content), writer=writer, reader=reader)

    def new_document(self) -> PypdfDocument:
        return PypdfDocument(writer=self._new_writer())

    def close(self, document: BackendDocument) -> None:
        if document.closed:
            return
        document.closed = True
        if isinstance(document, PypdfDocument):
            document.writer = None
            document.reader = None

    def _writer(self, document: BackendDocument) -> PdfWriter:
        if document.closed or not isinstance(document, PypdfDocument) or document.writer is None:
            raise EngineFailureError("Document is closed or was not created by this backend.")
        return document.writer

    def _page(self, document: BackendDocument, page: int) -> Any:
        writer = self._writer(document)
        if page < 1 or page > len(writer.pages):
            raise EngineFailureError(
                f"Page {page} is out of bounds. PDF has {len(writer.pages)} pages."
            )
        return writer.pages[page - 1]

    # ------------------------------------------------------------------
    # Geometry and text
    # ------------------------------------------------------------------
    def page_count(self, document: BackendDocument) -> int:
        return len(self._writer(document).pages)

    def page_size(self, document: BackendDocument, page: int) -> PageSize:
        mediabox = self._page(document, page).mediabox
        return PageSize(float(mediabox.width), float(mediabox.height))

    def extract_text(self, document: BackendDocument, page: int) -> str:
        return self._page(document, page).extract_text() or ""

    def copy_pages(
        self,
        source: BackendDocument,
        first_page: int,
        last_page: int,
        target: BackendDocument,
    ) -> None:
        if not isinstance(source, PypdfDocument) or source.reader is None:
            raise EngineFailureError("Pages can only be copied from an opened document.")
        page_count = len(source.reader.pages)
        if first_page < 1 or last_page > page_count or first_page > last_page:
            raise EngineFailureError(
                f"Invalid page range {first_page}-{last_page}. PDF has {page_count} pages."
            )
        self._writer(target).append(
            source.reader,
            pages=list(range(first_page - 1, last_page)),
            import_outline=False,
        )

    # ------------------------------------------------------------------
    # Overlays
    # ------------------------------------------------------------------
    def _merge_overlay(self, document: BackendDocument, page: int, canvas_buffer: io.BytesIO) -> None:
        target = self._page(document, page)
        canvas_buffer.seek(0)
        overlay = PdfReader(canvas_buffer).pages[0]
        mediabox = target.mediabox
        target.merge_translated_page(overlay, tx=float(mediabox.left), ty=float(mediabox.bottom))

    def draw_text_overlay(
        self,
        document: BackendDocument,
        page: int,
        text: str,
        placement: Placement,
        style: TextStyle,
    ) -> None:
        size = self.page_size(document, page)
        buffer = io.BytesIO()
        canvas = Canvas(buffer, pagesize=(size.width, size.height))
        canvas.saveState()
        canvas.setFillAlpha(placement.opacity)
        canvas.setFillColorRGB(*style.color)
        canvas.setFont("Helvetica-Bold" if style.bold else "Helvetica", style.font_size)
        canvas.translate(placement.x, placement.y)
        canvas.rotate(math.degrees(placement.rotation))

        if style.vertical_alignment is VerticalAlignment.MIDDLE:
            baseline = -(style.font_size * 0.35)
        elif style.vertical_alignment is VerticalAlignment.TOP:
            baseline = -(style.font_size * 0.75)
        else:
            baseline = 0.0

        if style.alignment is Alignment.CENTER:
            canvas.drawCentredString(0, baseline, text)
        elif style.alignment is Alignment.RIGHT:
            canvas.drawRightString(0, baseline, text)
        else:
            canvas.drawString(0, baseline, text)

        canvas.restoreState()
        canvas.showPage()
        canvas.save()
        self._merge_overlay(document, page, buffer)

    def image_size(self, image: bytes) -> PageSize:
        width, height = ImageReader(io.BytesIO(image)).getSize()
        return PageSize(float(width), float(height))

    def draw_image_overlay(
        self,
        document: BackendDocument,
        page: int,
        image: bytes,
        placement: Placement,
    ) -> None:
        size = self.page_size(document, page)
        reader = ImageReader(io.BytesIO(image))
        image_width, image_height = reader.getSize()

        buffer = io.BytesIO()
        canvas = Canvas(buffer, pagesize=(size.width, size.height))
        canvas.saveState()
        canvas.setFillAlpha(placement.opacity)
        canvas.translate(placement.x, placement.y)
        canvas.rotate(math.degrees(placement.rotation))
        canvas.drawImage(reader, 0, 0, width=image_width, height=image_height, mask="auto")
        canvas.restoreState()
        canvas.showPage()
        canvas.save()
        self._merge_overlay(document, page, buffer)

    # ------------------------------------------------------------------
    # Forms
    # ------------------------------------------------------------------
    def _form_fields(self, writer: PdfWriter) -> Dict[str, Any]:
        return writer.get_fields() or {}

    def set_field_value(self, document: BackendDocument, field_name: str, value: str) -> bool:
        writer = self._writer(document)
        if field_name not in self._form_fields(writer):
            return False

        for page in writer.pages:
            if "/Annots" in page:
                writer.update_page_form_field_values(
                    page, {field_name: value}, auto_regenerate=False
                )
        writer.set_need_appearances_writer(True)
        return True

    def flatten_form(self, document: BackendDocument) -> None:
        writer = self._writer(document)
        fields = self._form_fields(writer)
        if not fields:
            LOGGER.debug("Document has no form fields to flatten")
            return

        values = {}
        for name, form_field in fields.items():
            if form_field.get("/FT") == "/Sig":
                continue
            value = _field_value(form_field.get("/V"))
            if value is not None:
                values[name] = value

        for page in writer.pages:
            if "/Annots" in page and values:
                writer.update_page_form_field_values(
                    page, values, auto_regenerate=False, flatten=True
                )

        writer.remove_annotations(subtypes="/Widget")
        root = writer._root_object  # type: ignore[attr-defined]
        if NameObject("/AcroForm") in root:
            del root[NameObject("/AcroForm")]

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    def serialize(self, document: BackendDocument) -> bytes:
        buffer = io.BytesIO()
        self._writer(document).write(buffer)
        return buffer.getvalue()

    def encrypt_on_serialize(self, document: BackendDocument, params: ProtectionParams) -> bytes:
        plain = self.serialize(document)
        encryption = pikepdf.Encryption(
            owner=params.owner_password.decode("latin-1"),
            user=params.user_password.decode("latin-1"),
            R=_SECURITY_REVISIONS[params.cipher],
            allow=_pikepdf_permissions(params.permissions),
            aes=True,
            metadata=params.encrypt_metadata,
        )

        buffer = io.BytesIO()
        with pikepdf.open(io.BytesIO(plain)) as pdf:
            pdf.save(buffer, encryption=encryption)
        return buffer.getvalue()
