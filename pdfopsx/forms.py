"""Interactive form helpers."""

from __future__ import annotations

import logging
from typing import Optional

from .backends.base import PDFBackend
from .document import engine_operation, opened_document, resolve_backend
from .exceptions import InvalidInputError
from .utils import check_content

LOGGER = logging.getLogger("pdfopsx.forms")


def flatten_form(content: bytes, *, backend: Optional[PDFBackend] = None) -> bytes:
    """Bake every form field into the page content and drop the form."""

    check_content(content, "source_content")
    backend = resolve_backend(backend)
    with opened_document(backend, content, "flatten_form") as document, engine_operation("flatten_form"):
        backend.flatten_form(document)
        return backend.serialize(document)


def set_form_field(
    content: bytes,
    field_name: str,
    field_value: str,
    *,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Set ``field_name`` to ``field_value``.

    An unknown field name leaves the form untouched; the document is still
    rewritten and returned.
    """

    check_content(content, "source_content")
    if not field_name:
        raise InvalidInputError("The field name was not specified.")

    backend = resolve_backend(backend)
    with opened_document(backend, content, "set_form_field") as document, engine_operation("set_form_field"):
        if not backend.set_field_value(document, field_name, field_value):
            LOGGER.warning("Form field %r not found; nothing was changed", field_name)
        return backend.serialize(document)


__all__ = ["flatten_form", "set_form_field"]
