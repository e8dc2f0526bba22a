from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence
import sys

import pytest
from PIL import Image
from pypdf import PdfWriter
from reportlab.pdfgen.canvas import Canvas

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdfopsx.backends.base import BackendDocument  # noqa: E402
from pdfopsx.exceptions import MalformedDocumentError  # noqa: E402
from pdfopsx.types import PageSize  # noqa: E402


class FakeDocument(BackendDocument):
    def __init__(self, pages: Optional[List[int]] = None, source_size: int = 0) -> None:
        super().__init__(source_size=source_size)
        self.pages: List[int] = list(pages or [])
        self.fields: Dict[str, str] = {}


class FakeBackend:
    """In-memory backend recording every call.

    Documents are encoded as ``b"pages:1,2,3"`` where each number labels a
    source page, so copied pages can be traced back to where they came from.
    """

    def __init__(
        self,
        texts: Optional[Dict[int, str]] = None,
        size: PageSize = PageSize(600.0, 800.0),
        image: PageSize = PageSize(50.0, 25.0),
        fields: Optional[Dict[str, str]] = None,
        fail_on: Optional[str] = None,
    ) -> None:
        self.texts = texts or {}
        self.size = size
        self.image = image
        self.fields = fields or {}
        self.fail_on = fail_on
        self.calls: List[tuple] = []
        self.opened: List[FakeDocument] = []
        self.created: List[FakeDocument] = []

    @staticmethod
    def encode(pages: Sequence[int]) -> bytes:
        return ("pages:" + ",".join(str(page) for page in pages)).encode("ascii")

    def _maybe_fail(self, name: str) -> None:
        if self.fail_on == name:
            raise RuntimeError(f"{name} exploded")

    @property
    def open_handles(self) -> List[FakeDocument]:
        return [doc for doc in self.opened + self.created if not doc.closed]

    def open_document(self, content: bytes) -> FakeDocument:
        self.calls.append(("open_document",))
        if not content.startswith(b"pages:"):
            raise MalformedDocumentError("not a fake document")
        body = content[len(b"pages:"):].decode("ascii")
        document = FakeDocument([int(p) for p in body.split(",") if p], len(content))
        document.fields = dict(self.fields)
        self.opened.append(document)
        return document

    def new_document(self) -> FakeDocument:
        self.calls.append(("new_document",))
        document = FakeDocument()
        self.created.append(document)
        return document

    def close(self, document: FakeDocument) -> None:
        document.closed = True

    def page_count(self, document: FakeDocument) -> int:
        return len(document.pages)

    def page_size(self, document: FakeDocument, page: int) -> PageSize:
        return self.size

    def extract_text(self, document: FakeDocument, page: int) -> str:
        return self.texts.get(document.pages[page - 1], "")

    def copy_pages(self, source, first_page, last_page, target) -> None:
        self._maybe_fail("copy_pages")
        self.calls.append(("copy_pages", first_page, last_page))
        target.pages.extend(source.pages[first_page - 1:last_page])

    def draw_text_overlay(self, document, page, text, placement, style) -> None:
        self._maybe_fail("draw_text_overlay")
        self.calls.append(("draw_text_overlay", page, text, placement, style))

    def draw_image_overlay(self, document, page, image, placement) -> None:
        self.calls.append(("draw_image_overlay", page, image, placement))

    def image_size(self, image: bytes) -> PageSize:
        self.calls.append(("image_size",))
        return self.image

    def flatten_form(self, document: FakeDocument) -> None:
        self.calls.append(("flatten_form",))
        document.fields = {}

    def set_field_value(self, document: FakeDocument, field_name: str, value: str) -> bool:
        self.calls.append(("set_field_value", field_name, value))
        if field_name not in document.fields:
            return False
        document.fields[field_name] = value
        return True

    def serialize(self, document: FakeDocument) -> bytes:
        self._maybe_fail("serialize")
        self.calls.append(("serialize",))
        return self.encode(document.pages)

    def encrypt_on_serialize(self, document: FakeDocument, params) -> bytes:
        self.calls.append(("encrypt_on_serialize", params))
        return b"encrypted:" + self.encode(document.pages)

    def calls_named(self, name: str) -> List[tuple]:
        return [call for call in self.calls if call[0] == name]


@pytest.fixture()
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
def fake_backend_factory() -> Callable[..., FakeBackend]:
    return FakeBackend


@pytest.fixture()
def blank_pdf_factory() -> Callable[..., bytes]:
    def _create(pages: int = 1, width: float = 200, height: float = 200) -> bytes:
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=width, height=height)
        buffer = BytesIO()
        writer.write(buffer)
        return buffer.getvalue()

    return _create


@pytest.fixture()
def text_pdf_factory() -> Callable[[Sequence[str]], bytes]:
    """One page per string, each drawn with reportlab."""

    def _create(texts: Sequence[str], pagesize=(612, 792)) -> bytes:
        buffer = BytesIO()
        canvas = Canvas(buffer, pagesize=pagesize)
        for text in texts:
            canvas.setFont("Helvetica", 12)
            canvas.drawString(72, 700, text)
            canvas.showPage()
        canvas.save()
        return buffer.getvalue()

    return _create


@pytest.fixture()
def numbered_pdf(text_pdf_factory) -> bytes:
    return text_pdf_factory([f"Page {number}" for number in range(1, 7)])


@pytest.fixture()
def form_pdf() -> bytes:
    buffer = BytesIO()
    canvas = Canvas(buffer, pagesize=(612, 792))
    canvas.drawString(72, 740, "Application form")
    canvas.acroForm.textfield(
        name="name",
        value="",
        x=72,
        y=680,
        width=200,
        height=20,
        borderStyle="inset",
        forceBorder=True,
    )
    canvas.acroForm.textfield(
        name="city",
        value="Paris",
        x=72,
        y=640,
        width=200,
        height=20,
        borderStyle="inset",
        forceBorder=True,
    )
    canvas.showPage()
    canvas.save()
    return buffer.getvalue()


@pytest.fixture()
def png_image() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (40, 30), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture()
def image_file_factory(tmp_path: Path) -> Callable[[str], Path]:
    def _create(filename: str, mode: str = "RGB") -> Path:
        path = tmp_path / filename
        fmt = {".png": "PNG", ".gif": "GIF", ".bmp": "BMP", ".jpg": "JPEG", ".jpeg": "JPEG"}[
            path.suffix.lower()
        ]
        Image.new(mode, (16, 12), color=0).save(path, format=fmt)
        return path

    return _create


@pytest.fixture()
def pdf_file_factory(tmp_path: Path, text_pdf_factory) -> Callable[..., Path]:
    def _create(filename: str, texts: Sequence[str]) -> Path:
        path = tmp_path / filename
        path.write_bytes(text_pdf_factory(texts))
        return path

    return _create
