"""File-path wrappers around the in-memory operations."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from PIL import Image, UnidentifiedImageError

from .backends.base import PDFBackend
from .exceptions import InvalidInputError
from .merger import append_pdf, merge_pdfs
from .protection import protect_pdf
from .utils import check_content, rewrite_pdf

LOGGER = logging.getLogger("pdfopsx.files")

PathLike = Union[str, Path]

IMAGE_FORMATS = {
    ".gif": "GIF",
    ".bmp": "BMP",
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
}


def check_file_path(path: Optional[PathLike], extension: str = ".pdf") -> Path:
    """Validate ``path`` before any document work and return it as a :class:`Path`."""

    if path is None or not str(path):
        raise InvalidInputError("The file path was not specified.")

    file_path = Path(path).expanduser()
    if not file_path.resolve().parent.is_dir():
        raise InvalidInputError(f"The specified file folder does not exist: {file_path.parent}")

    if file_path.suffix.lower() != extension.lower():
        raise InvalidInputError(
            f"The specified file does not appear to be a {extension} file: {file_path}"
        )

    return file_path


def _read_file(path: Path) -> bytes:
    if not path.is_file():
        raise InvalidInputError(f"File not found: {path}")
    try:
        return path.read_bytes()
    except OSError as exc:
        raise InvalidInputError(f"Unable to read file: {path}. Error: {exc}") from exc


def _write_file(content: bytes, path: Path) -> bool:
    with path.open("wb") as handle:
        handle.write(content)
    LOGGER.info("Wrote %d bytes to %s", len(content), path)
    return path.exists()


def open_pdf(path: PathLike, *, backend: Optional[PDFBackend] = None) -> bytes:
    """Read the PDF at ``path`` and return it re-serialized by the backend."""

    pdf_path = check_file_path(path)
    return rewrite_pdf(_read_file(pdf_path), backend=backend)


def write_pdf(content: bytes, path: PathLike, *, backend: Optional[PDFBackend] = None) -> bool:
    """Write ``content`` to ``path``; return whether the file now exists."""

    check_content(content, "source_content")
    pdf_path = check_file_path(path)
    return _write_file(rewrite_pdf(content, backend=backend), pdf_path)


def write_pdfs(
    contents: Sequence[bytes],
    path: PathLike,
    *,
    backend: Optional[PDFBackend] = None,
) -> bool:
    """Merge ``contents`` in order and write the result to ``path``."""

    pdf_path = check_file_path(path)
    return _write_file(merge_pdfs(contents, backend=backend), pdf_path)


def append_pdf_file(
    content: bytes,
    path: PathLike,
    *,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Return ``content`` followed by the pages of the PDF at ``path``."""

    check_content(content, "source_content")
    append_content = open_pdf(path, backend=backend)
    return append_pdf(content, append_content, backend=backend)


def write_protected_pdf(
    content: bytes,
    path: PathLike,
    password: Optional[str] = None,
    *,
    backend: Optional[PDFBackend] = None,
) -> bool:
    """Write an owner-protected copy of ``content`` to ``path``."""

    check_content(content, "source_content")
    pdf_path = check_file_path(path)
    return _write_file(protect_pdf(content, password, backend=backend), pdf_path)


def load_image(path: PathLike) -> bytes:
    """Load a GIF, BMP, PNG or JPEG file and return it re-encoded in its own format."""

    if path is None or not str(path):
        raise InvalidInputError("The file path was not specified.")

    image_path = Path(path).expanduser()
    image_format = IMAGE_FORMATS.get(image_path.suffix.lower())
    if image_format is None:
        raise InvalidInputError(f"Invalid image file specified: {image_path}")
    if not image_path.is_file():
        raise InvalidInputError(f"File not found: {image_path}")

    try:
        with Image.open(image_path) as image:
            if image_format == "JPEG" and image.mode not in ("RGB", "L", "CMYK"):
                image = image.convert("RGB")
            buffer = io.BytesIO()
            image.save(buffer, format=image_format)
    except (UnidentifiedImageError, OSError) as exc:
        raise InvalidInputError(f"Unable to load image: {image_path}. Error: {exc}") from exc

    return buffer.getvalue()


__all__ = [
    "append_pdf_file",
    "check_file_path",
    "load_image",
    "open_pdf",
    "write_pdf",
    "write_pdfs",
    "write_protected_pdf",
]
