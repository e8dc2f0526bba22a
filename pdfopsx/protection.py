"""Owner-password protection helpers.

Protected documents carry no user password: anyone can open and print
them, while changing permissions requires the owner password. When no
password is supplied a random one is generated and never disclosed, which
locks the permissions for good.
"""

from __future__ import annotations

import logging
import secrets
from typing import Optional

from .backends.base import PDFBackend
from .document import engine_operation, opened_document, resolve_backend
from .types import Cipher, Permission, ProtectionParams
from .utils import check_content

LOGGER = logging.getLogger("pdfopsx.protection")

GENERATED_PASSWORD_BYTES = 16


def plan_protection(password: Optional[str] = None) -> ProtectionParams:
    """Return owner-only AES-256 parameters allowing printing only."""

    if password:
        owner_password = password.encode("ascii", errors="replace")
    else:
        owner_password = secrets.token_hex(GENERATED_PASSWORD_BYTES).encode("ascii")

    return ProtectionParams(
        owner_password=owner_password,
        permissions=Permission.PRINT | Permission.PRINT_HIGH_QUALITY,
        cipher=Cipher.AES_256,
        encrypt_metadata=False,
    )


def protect_pdf(
    content: bytes,
    password: Optional[str] = None,
    *,
    backend: Optional[PDFBackend] = None,
) -> bytes:
    """Encrypt ``content`` with an owner password; see :func:`plan_protection`."""

    check_content(content, "source_content")
    params = plan_protection(password)
    backend = resolve_backend(backend)

    LOGGER.debug(
        "Protecting PDF with owner password %s",
        "<provided>" if password else "<generated>",
    )
    with opened_document(backend, content, "protect_pdf") as document, engine_operation("protect_pdf"):
        return backend.encrypt_on_serialize(document, params)


__all__ = ["GENERATED_PASSWORD_BYTES", "plan_protection", "protect_pdf"]
