"""Scoped access to backend documents.

Every operation acquires its engine handles through these context managers
so that handles are released on every exit path, including errors raised
half-way through a multi-step operation.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from .backends import BackendDocument, PypdfBackend
from .backends.base import PDFBackend
from .exceptions import EngineFailureError, MalformedDocumentError, PdfOpsError

LOGGER = logging.getLogger("pdfopsx.document")


def resolve_backend(backend: Optional[PDFBackend] = None) -> PDFBackend:
    return backend if backend is not None else PypdfBackend()


@contextmanager
def engine_operation(operation: str) -> Iterator[None]:
    """Wrap unexpected engine faults in :class:`EngineFailureError`."""

    try:
        yield
    except PdfOpsError:
        raise
    except Exception as exc:
        LOGGER.error("%s failed: %s", operation, exc)
        raise EngineFailureError(f"{operation} failed. Error: {exc}") from exc


@contextmanager
def opened_document(
    backend: PDFBackend,
    content: bytes,
    operation: str,
) -> Iterator[BackendDocument]:
    """Open ``content`` for the duration of the ``with`` block."""

    try:
        document = backend.open_document(content)
    except MalformedDocumentError as exc:
        raise MalformedDocumentError(f"{operation}: {exc.message}") from exc
    except PdfOpsError:
        raise
    except Exception as exc:
        raise MalformedDocumentError(
            f"{operation}: unable to open PDF content. Error: {exc}"
        ) from exc

    try:
        yield document
    finally:
        backend.close(document)


@contextmanager
def new_document(backend: PDFBackend) -> Iterator[BackendDocument]:
    """Create an empty target document for the duration of the ``with`` block."""

    document = backend.new_document()
    try:
        yield document
    finally:
        backend.close(document)


__all__ = ["engine_operation", "new_document", "opened_document", "resolve_backend"]
