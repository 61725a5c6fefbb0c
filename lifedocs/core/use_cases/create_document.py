"""CreateDocumentUseCase - Core orchestration for document creation.

Orchestrates one all-or-nothing unit of work:

    direct:  Document(title, content) -> DocumentRepository.save
    upload:  TextExtractor -> DocumentSummarizer -> Document(summary) -> DocumentRepository.save

The first failing stage aborts the call with that stage's error. Nothing is
written before the save, so a failure leaves the repository untouched.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar
from uuid import UUID

from lifedocs.common.tracing import pipeline_stage
from lifedocs.core.errors import ExtractionError, PersistenceError, SummarizationError
from lifedocs.core.ports.repositories import DocumentRepository
from lifedocs.core.ports.summarizer import DocumentSummarizer
from lifedocs.core.ports.text_extractor import TextExtractor
from lifedocs.schemas.models import Document, SummaryResult, UploadedInput

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CreateDocumentUseCase:
    """Use case for creating one persisted document, directly or from an upload.

    NO framework dependencies - only ports and schemas.

    Attributes:
        repository: DocumentRepository receiving the single save.
        extractor: TextExtractor for uploaded files.
        summarizer: DocumentSummarizer turning extracted text into title/content.
        extraction_timeout: Default bound in seconds on the extraction stage.
        summarization_timeout: Default bound in seconds on the summarization stage.
    """

    def __init__(
        self,
        repository: DocumentRepository,
        extractor: TextExtractor,
        summarizer: DocumentSummarizer,
        extraction_timeout: float | None = 60.0,
        summarization_timeout: float | None = 120.0,
    ) -> None:
        """Initialize CreateDocumentUseCase with its ports.

        Args:
            repository: DocumentRepository instance.
            extractor: TextExtractor instance.
            summarizer: DocumentSummarizer instance.
            extraction_timeout: Seconds before extraction counts as failed (None = unbounded).
            summarization_timeout: Seconds before summarization counts as failed (None = unbounded).
        """
        self.repository = repository
        self.extractor = extractor
        self.summarizer = summarizer
        self.extraction_timeout = extraction_timeout
        self.summarization_timeout = summarization_timeout

        logger.info(
            "Initialized CreateDocumentUseCase",
            extra={
                "extraction_timeout": extraction_timeout,
                "summarization_timeout": summarization_timeout,
            },
        )

    async def execute(
        self,
        owner_id: UUID,
        title: str | None = None,
        content: str | None = None,
        uploaded_file: UploadedInput | None = None,
        timeout: float | None = None,
    ) -> Document:
        """Create and persist exactly one document.

        Pipeline flow:
        1. No file (or an empty upload): build Document(title, content)
        2. File: extract text -> summarize -> Document(summary.title, summary.summary);
           caller title/content are ignored
        3. Save through the repository and return the stored document

        Args:
            owner_id: Owner of the new document.
            title: Title for direct creation (missing = "").
            content: Content for direct creation (missing = "").
            uploaded_file: File to derive the document from.
            timeout: Per-stage bound in seconds overriding both configured defaults.

        Returns:
            Document: The persisted document with its assigned id.

        Raises:
            ExtractionError: Text could not be read, timed out, or was empty.
            SummarizationError: Summarization failed or timed out.
            PersistenceError: The repository could not save the document.
            ValueError: uploaded_file belongs to a different owner than owner_id.
        """
        if uploaded_file is not None and uploaded_file.owner_id != owner_id:
            raise ValueError(
                f"Upload {uploaded_file.file_name!r} belongs to owner "
                f"{uploaded_file.owner_id}, not {owner_id}"
            )

        if uploaded_file is not None and uploaded_file.file_bytes:
            document = await self._document_from_upload(owner_id, uploaded_file, timeout)
        else:
            document = Document.new(title or "", content or "", owner_id)

        with pipeline_stage("persist"):
            return await self._persist(document)

    async def _document_from_upload(
        self,
        owner_id: UUID,
        uploaded_file: UploadedInput,
        timeout: float | None,
    ) -> Document:
        with pipeline_stage("extract"):
            text = await self._extract(uploaded_file, timeout)
            if not text.strip():
                logger.warning(
                    "No readable text in upload",
                    extra={"file_name": uploaded_file.file_name},
                )
                raise ExtractionError(f"No readable text in {uploaded_file.file_name!r}")

        with pipeline_stage("summarize"):
            summary = await self._summarize(text, timeout)
        return Document.new(summary.title, summary.summary, owner_id)

    async def _extract(self, uploaded_file: UploadedInput, timeout: float | None) -> str:
        limit = timeout if timeout is not None else self.extraction_timeout
        logger.info(
            "Extracting text",
            extra={"file_name": uploaded_file.file_name, "timeout": limit},
        )
        try:
            return await _bounded(self.extractor.extract_text(uploaded_file), limit)
        except ExtractionError:
            raise
        except TimeoutError as e:
            logger.error("Extraction timed out", extra={"file_name": uploaded_file.file_name})
            raise ExtractionError(f"Extraction timed out after {limit}s") from e
        except Exception as e:
            logger.exception("Unexpected extraction failure: %s", e)
            raise ExtractionError(f"Unexpected extraction failure: {e}") from e

    async def _summarize(self, text: str, timeout: float | None) -> SummaryResult:
        limit = timeout if timeout is not None else self.summarization_timeout
        logger.info("Summarizing text", extra={"chars": len(text), "timeout": limit})
        try:
            return await _bounded(self.summarizer.summarize(text), limit)
        except SummarizationError:
            raise
        except TimeoutError as e:
            logger.error("Summarization timed out")
            raise SummarizationError(f"Summarization timed out after {limit}s") from e
        except Exception as e:
            logger.exception("Unexpected summarization failure: %s", e)
            raise SummarizationError(f"Unexpected summarization failure: {e}") from e

    async def _persist(self, document: Document) -> Document:
        try:
            saved = await self.repository.save(document)
        except PersistenceError:
            raise
        except Exception as e:
            logger.exception("Unexpected persistence failure: %s", e)
            raise PersistenceError(f"Unexpected persistence failure: {e}") from e

        logger.info(
            "Created document",
            extra={"doc_id": saved.id, "owner_id": saved.owner_id},
        )
        return saved


async def _bounded(awaitable: Awaitable[T], timeout: float | None) -> T:
    if timeout is None:
        return await awaitable
    return await asyncio.wait_for(awaitable, timeout=timeout)


__all__ = ["CreateDocumentUseCase"]
