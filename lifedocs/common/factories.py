"""Factory functions for creating fully-wired use cases and dependencies.

Centralizes dependency injection to keep CLI commands thin. Every factory returns a
``(use_case, cleanup)`` tuple; ``cleanup`` is a coroutine function that must be
awaited once the caller is done so pooled connections and HTTP clients are released.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

import httpx
import ollama

from lifedocs.clients.in_memory_document_repository import InMemoryDocumentRepository
from lifedocs.clients.postgres_document_repository import PostgresDocumentRepository
from lifedocs.common.config import LifeDocsConfig, get_config
from lifedocs.common.logging import get_logger
from lifedocs.common.postgres_pool import PostgresPool, PostgresPoolError
from lifedocs.core.errors import PersistenceError
from lifedocs.core.ports.repositories import DocumentRepository
from lifedocs.core.use_cases.create_document import CreateDocumentUseCase
from lifedocs.core.use_cases.get_document import GetDocumentUseCase
from lifedocs.core.use_cases.list_documents import ListDocumentsUseCase
from lifedocs.ingest.readers.pdf_text import PdfTextLayerExtractor
from lifedocs.ingest.readers.tesseract import TesseractOcrExtractor
from lifedocs.ingest.readers.uploaded_file import UploadedFileTextExtractor
from lifedocs.ingest.summarizers.ollama import OllamaDocumentSummarizer

logger = get_logger(__name__)

Cleanup = Callable[[], Awaitable[None]]


async def _noop() -> None:
    return None


def make_document_repository(
    config: LifeDocsConfig | None = None,
) -> tuple[DocumentRepository, Cleanup]:
    """Create the DocumentRepository selected by ``repository_backend``.

    Returns:
        Tuple of (repository, cleanup_fn). For the postgres backend cleanup_fn
        closes the connection pool; for the memory backend it does nothing.

    Raises:
        PersistenceError: If the postgres pool cannot be created.
    """
    config = config or get_config()

    if config.repository_backend == "postgres":
        try:
            pool = PostgresPool(config)
        except PostgresPoolError as e:
            raise PersistenceError(str(e)) from e

        async def close_pool() -> None:
            """Close all pooled connections."""
            pool.close_all()

        logger.info("Using PostgreSQL document repository")
        return PostgresDocumentRepository(pool), close_pool

    logger.info("Using in-memory document repository")
    return InMemoryDocumentRepository(), _noop


def make_create_document_use_case(
    config: LifeDocsConfig | None = None,
    repository: DocumentRepository | None = None,
) -> tuple[CreateDocumentUseCase, Cleanup]:
    """Create a fully-wired CreateDocumentUseCase with its dependencies.

    Args:
        config: Configuration (default: get_config()).
        repository: Existing repository to share; one is created when omitted.

    Returns:
        Tuple of (use_case, cleanup_fn).

    Example:
        use_case, cleanup = make_create_document_use_case()
        try:
            document = await use_case.execute(owner_id=owner, uploaded_file=upload)
        finally:
            await cleanup()
    """
    config = config or get_config()

    cleanup_repository: Cleanup = _noop
    if repository is None:
        repository, cleanup_repository = make_document_repository(config)

    http_client = httpx.AsyncClient(timeout=config.extraction_timeout)
    ocr_extractor = TesseractOcrExtractor(
        base_url=config.tesseract_url,
        languages=config.tesseract_languages,
        client=http_client,
        max_attempts=config.external_max_attempts,
    )
    extractor = UploadedFileTextExtractor(
        pdf_extractor=PdfTextLayerExtractor(),
        ocr_extractor=ocr_extractor,
    )
    ollama_client = ollama.AsyncClient(
        host=config.ollama_host, timeout=config.summarization_timeout
    )
    summarizer = OllamaDocumentSummarizer(
        model=config.ollama_model,
        client=ollama_client,
        summary_char_max_length=config.summary_char_max_length,
        title_word_limit=config.title_word_limit,
        max_attempts=config.external_max_attempts,
    )

    use_case = CreateDocumentUseCase(
        repository=repository,
        extractor=extractor,
        summarizer=summarizer,
        extraction_timeout=config.extraction_timeout,
        summarization_timeout=config.summarization_timeout,
    )

    async def cleanup() -> None:
        """Close the OCR and Ollama HTTP clients, then the repository."""
        try:
            try:
                await http_client.aclose()
            finally:
                await ollama_client.close()
        finally:
            await cleanup_repository()

    return use_case, cleanup


def make_list_documents_use_case(
    config: LifeDocsConfig | None = None,
    repository: DocumentRepository | None = None,
) -> tuple[ListDocumentsUseCase, Cleanup]:
    """Create a ListDocumentsUseCase using the configured page size."""
    config = config or get_config()

    cleanup: Cleanup = _noop
    if repository is None:
        repository, cleanup = make_document_repository(config)

    return ListDocumentsUseCase(repository, default_limit=config.page_size), cleanup


def make_get_document_use_case(
    config: LifeDocsConfig | None = None,
    repository: DocumentRepository | None = None,
) -> tuple[GetDocumentUseCase, Cleanup]:
    """Create a GetDocumentUseCase."""
    cleanup: Cleanup = _noop
    if repository is None:
        repository, cleanup = make_document_repository(config or get_config())

    return GetDocumentUseCase(repository), cleanup


__all__ = [
    "Cleanup",
    "make_create_document_use_case",
    "make_document_repository",
    "make_get_document_use_case",
    "make_list_documents_use_case",
]
