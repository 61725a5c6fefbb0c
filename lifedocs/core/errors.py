"""Error taxonomy for document ingestion and persistence.

Each error carries a stable ``code`` tag and a ``user_message`` that can be shown to
callers. The exception message itself holds the internal detail and is meant for
logs only.
"""

from __future__ import annotations


class DocumentServiceError(Exception):
    """Base class for tagged document service failures."""

    code: str = "document_service_failed"
    default_user_message: str = "The document request could not be completed."

    def __init__(self, detail: str = "", *, user_message: str | None = None) -> None:
        super().__init__(detail or self.default_user_message)
        self.user_message = user_message or self.default_user_message

    def to_dict(self) -> dict[str, str]:
        """Caller-facing representation without internal details."""
        return {"code": self.code, "message": self.user_message}


class ExtractionError(DocumentServiceError):
    """Text could not be obtained from the uploaded file."""

    code = "extraction_failed"
    default_user_message = "The text of your file could not be read."


class SummarizationError(DocumentServiceError):
    """The summarization call failed or timed out."""

    code = "summarization_failed"
    default_user_message = "Your file could not be summarized."


class PersistenceError(DocumentServiceError):
    """The repository could not complete get/list/save."""

    code = "persistence_failed"
    default_user_message = "Your document could not be saved or loaded."


__all__ = [
    "DocumentServiceError",
    "ExtractionError",
    "PersistenceError",
    "SummarizationError",
]
