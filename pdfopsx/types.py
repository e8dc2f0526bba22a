"""
Type definitions and dataclasses for pdfopsx.

This module defines the value types exchanged between the components and
the PDF backend. None of them hold engine resources; they are built for a
single operation and discarded afterwards.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, List, NamedTuple, Tuple, Union

from .exceptions import InvalidInputError


class PageSize(NamedTuple):
    """Width and height of a page in PDF points."""

    width: float
    height: float


@dataclass(frozen=True)
class PageSet:
    """
    Ordered, duplicate-free selection of 1-based page numbers.

    Attributes:
        pages: Page numbers in ascending order
    """

    pages: Tuple[int, ...] = ()

    def __iter__(self) -> Iterator[int]:
        return iter(self.pages)

    def __len__(self) -> int:
        return len(self.pages)

    def __contains__(self, page: object) -> bool:
        return page in self.pages

    def __bool__(self) -> bool:
        return bool(self.pages)


@dataclass
class SplitPlan:
    """
    Partition of a document into chunks of ``pages_per_document`` pages.

    Attributes:
        pages_per_document: Number of pages in every complete chunk
        keep_remainder: Whether a trailing partial chunk is emitted
    """

    pages_per_document: int = 1
    keep_remainder: bool = True

    def __post_init__(self) -> None:
        if self.pages_per_document < 1:
            raise InvalidInputError(
                f"pages_per_document must be >= 1, got {self.pages_per_document}"
            )

    def opens_chunk(self, page: int) -> bool:
        return (page - 1) % self.pages_per_document == 0

    def closes_chunk(self, page: int) -> bool:
        return page % self.pages_per_document == 0


class TagOccurrence(NamedTuple):
    """A tag found on a single page."""

    page: int
    tag: str


@dataclass
class MergeTag:
    """
    A tag together with every page it was found on.

    Attributes:
        tag: Trimmed text found between the delimiters
        on_pages: Pages containing the tag, ascending
    """

    tag: str = ""
    on_pages: List[int] = field(default_factory=list)


class Alignment(str, enum.Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlignment(str, enum.Enum):
    BOTTOM = "bottom"
    MIDDLE = "middle"
    TOP = "top"


@dataclass(frozen=True)
class TextStyle:
    """Font and colour settings for a text overlay."""

    font_size: float = 12
    bold: bool = False
    color: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    alignment: Alignment = Alignment.LEFT
    vertical_alignment: VerticalAlignment = VerticalAlignment.BOTTOM


@dataclass(frozen=True)
class Placement:
    """
    Where and how an overlay is drawn on a page.

    ``x``/``y`` are in the page's own coordinate space (origin bottom-left),
    ``rotation`` is in radians.
    """

    x: float
    y: float
    rotation: float = 0.0
    opacity: float = 1.0


def _check_opacity(opacity: float) -> None:
    if not 0.0 <= opacity <= 1.0:
        raise InvalidInputError(f"Opacity must be within [0, 1], got {opacity}")


@dataclass(frozen=True)
class DiagonalTextStamp:
    """Large translucent text running along the page diagonal."""

    text: str
    each_page: bool = False
    opacity: float = 0.2

    def __post_init__(self) -> None:
        _check_opacity(self.opacity)

    @property
    def is_blank(self) -> bool:
        return not self.text or not self.text.strip()


@dataclass(frozen=True)
class ImageStamp:
    """An image placed in the top-left corner of the page."""

    image: bytes
    each_page: bool = False
    opacity: float = 0.4

    def __post_init__(self) -> None:
        _check_opacity(self.opacity)

    @property
    def is_blank(self) -> bool:
        return not self.image


@dataclass(frozen=True)
class TextStamp:
    """A short bold red note along the top edge of the page."""

    text: str
    each_page: bool = False
    opacity: float = 0.4

    def __post_init__(self) -> None:
        _check_opacity(self.opacity)

    @property
    def is_blank(self) -> bool:
        return not self.text or not self.text.strip()


StampSpec = Union[DiagonalTextStamp, ImageStamp, TextStamp]


class Permission(enum.IntFlag):
    """User access permission bits of the PDF standard security handler."""

    NONE = 0
    PRINT = 1 << 2
    MODIFY = 1 << 3
    EXTRACT = 1 << 4
    ADD_OR_MODIFY = 1 << 5
    FILL_FORM_FIELDS = 1 << 8
    EXTRACT_TEXT_AND_GRAPHICS = 1 << 9
    ASSEMBLE_DOC = 1 << 10
    PRINT_HIGH_QUALITY = 1 << 11


class Cipher(str, enum.Enum):
    AES_256 = "AES-256"


@dataclass(frozen=True)
class ProtectionParams:
    """
    Parameters for owner-only document encryption.

    Attributes:
        owner_password: Password bytes gating permission changes
        permissions: Operations granted to anyone opening the document
        cipher: Encryption algorithm
        encrypt_metadata: Whether the XMP metadata stream is encrypted
    """

    owner_password: bytes
    permissions: Permission = Permission.PRINT | Permission.PRINT_HIGH_QUALITY
    cipher: Cipher = Cipher.AES_256
    encrypt_metadata: bool = False

    @property
    def user_password(self) -> bytes:
        return b""

    def __repr__(self) -> str:
        return (
            "ProtectionParams(owner_password=<hidden>, permissions={permissions!r}, "
            "cipher={cipher}, encrypt_metadata={encrypt_metadata})"
        ).format(
            permissions=self.permissions,
            cipher=self.cipher.value,
            encrypt_metadata=self.encrypt_metadata,
        )
