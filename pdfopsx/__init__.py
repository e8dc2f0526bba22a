"""
pdfopsx - In-memory PDF operations.

Every operation takes PDF bytes and returns new PDF bytes; inputs are never
modified. Path-based wrappers live in :mod:`pdfopsx.files`.

Quick Start:
    >>> from pdfopsx import split_pdf, merge_pdfs
    >>> chunks = split_pdf(content, pages_per_document=2)
    >>> merged = merge_pdfs(chunks)

Operations:
    - extract_pages / extract_page_range / extract_pages_into_pdfs
    - split_pdf, merge_pdfs, append_pdf
    - find_merge_tags
    - add_diagonal_text_stamp, add_image_stamp, add_text_stamp
    - protect_pdf, flatten_form, set_form_field
    - get_page_count, pdf_to_text

Exceptions:
    - PdfOpsError: Base exception
    - InvalidInputError: Missing or invalid argument
    - MalformedDocumentError: Bytes that do not parse as a PDF
    - EngineFailureError: The PDF engine failed mid-operation

For CLI usage, use the 'pdfopsx' command after installation.
"""

# Operations
from pdfopsx.pages import extract_page_range, extract_pages, extract_pages_into_pdfs
from pdfopsx.splitter import split_pdf
from pdfopsx.merger import append_pdf, merge_pdfs
from pdfopsx.tags import find_merge_tags
from pdfopsx.stamps import add_diagonal_text_stamp, add_image_stamp, add_text_stamp
from pdfopsx.protection import protect_pdf
from pdfopsx.forms import flatten_form, set_form_field
from pdfopsx.utils import get_page_count, pdf_to_text

# File wrappers
from pdfopsx.files import (
    append_pdf_file,
    check_file_path,
    load_image,
    open_pdf,
    write_pdf,
    write_pdfs,
    write_protected_pdf,
)

# Data types
from pdfopsx.types import MergeTag, PageSet, SplitPlan

# Exceptions
from pdfopsx.exceptions import (
    PdfOpsError,
    InvalidInputError,
    MalformedDocumentError,
    EngineFailureError,
)

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Operations
    "extract_page_range",
    "extract_pages",
    "extract_pages_into_pdfs",
    "split_pdf",
    "merge_pdfs",
    "append_pdf",
    "find_merge_tags",
    "add_diagonal_text_stamp",
    "add_image_stamp",
    "add_text_stamp",
    "protect_pdf",
    "flatten_form",
    "set_form_field",
    "get_page_count",
    "pdf_to_text",
    # File wrappers
    "append_pdf_file",
    "check_file_path",
    "load_image",
    "open_pdf",
    "write_pdf",
    "write_pdfs",
    "write_protected_pdf",
    # Data types
    "MergeTag",
    "PageSet",
    "SplitPlan",
    # Exceptions
    "PdfOpsError",
    "InvalidInputError",
    "MalformedDocumentError",
    "EngineFailureError",
    # Version info
    "__version__",
]
