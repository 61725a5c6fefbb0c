"""Pydantic data models for LifeDocs.

Defines the Document entity and the value objects that flow through the ingestion
pipeline and the keyset-paginated listings (UploadedInput, SummaryResult, PageCursor).
"""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, computed_field

# Image formats the remote OCR service accepts.
OCR_ELIGIBLE_EXTENSIONS: frozenset[str] = frozenset(
    {"png", "jpg", "jpeg", "tif", "tiff", "bmp", "gif", "webp", "pnm"}
)

_CONTENT_TYPES: dict[str, str] = {
    "pdf": "application/pdf",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "tif": "image/tiff",
    "tiff": "image/tiff",
    "bmp": "image/bmp",
    "gif": "image/gif",
    "webp": "image/webp",
    "pnm": "image/x-portable-anymap",
}


# ========== Pagination ==========


class PageCursor(BaseModel):
    """Position marker for keyset pagination.

    Identifies the last document of a page by its ``(title, id)`` sort key.
    Never stored; passed back by the caller to request the following page.
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Title of the last document seen")
    id: int = Field(..., description="Id of the last document seen")


# ========== Document Models ==========


class Document(BaseModel):
    """Document entity representing a unit of stored knowledge.

    ``id == 0`` is the "not yet persisted" sentinel; a repository assigns the
    durable id on save. ``id``, ``title`` and ``owner_id`` are fixed at
    construction; only ``content`` may be replaced.
    """

    id: int = Field(default=0, ge=0, frozen=True, description="Primary key (0 = unsaved)")
    title: str = Field(..., frozen=True, description="Document title (not unique)")
    content: str = Field(..., description="Document body")
    tags: list[str] = Field(default_factory=list, description="Reserved for future use")
    owner_id: UUID = Field(..., frozen=True, description="Owning identity")

    @classmethod
    def new(cls, title: str, content: str, owner_id: UUID) -> Document:
        """Build an unsaved document (``id = 0``)."""
        return cls(id=0, title=title, content=content, owner_id=owner_id)

    @property
    def is_persisted(self) -> bool:
        return self.id != 0

    def replace_content(self, new_content: str) -> None:
        """Replace the whole body. No merge and no history are kept."""
        self.content = new_content

    def cursor(self) -> PageCursor:
        """Return the keyset cursor pointing at this document."""
        return PageCursor(title=self.title, id=self.id)


class UploadedInput(BaseModel):
    """A file uploaded for ingestion, immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    file_name: str = Field(..., description="Original file name as uploaded")
    file_bytes: bytes = Field(..., repr=False, description="Raw file content")
    owner_id: UUID = Field(..., description="Identity the resulting document belongs to")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def extension(self) -> str:
        """Lower-cased suffix after the last dot, or ``""`` when there is none."""
        _, dot, suffix = self.file_name.rpartition(".")
        return suffix.lower() if dot else ""

    @property
    def content_type(self) -> str:
        return _CONTENT_TYPES.get(self.extension, "application/octet-stream")

    def is_pdf(self) -> bool:
        return self.file_name.lower().endswith(".pdf")

    def is_ocr_eligible(self) -> bool:
        return self.extension in OCR_ELIGIBLE_EXTENSIONS


class SummaryResult(BaseModel):
    """Output of summarization: a short summary and a derived title."""

    model_config = ConfigDict(frozen=True)

    summary: str = Field(..., description="Short summary of the extracted text")
    title: str = Field(..., description="Title derived from the extracted text")


__all__ = [
    "OCR_ELIGIBLE_EXTENSIONS",
    "Document",
    "PageCursor",
    "SummaryResult",
    "UploadedInput",
]
