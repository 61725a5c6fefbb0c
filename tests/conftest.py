"""Shared pytest fixtures for the LifeDocs test suite.

Provides test configuration, sample documents, uploads and fakes for the
extraction and summarization ports.
"""

import os
from typing import Any
from unittest.mock import AsyncMock
from uuid import UUID, uuid4

import pytest

from lifedocs.clients.in_memory_document_repository import InMemoryDocumentRepository
from lifedocs.common.config import LifeDocsConfig
from lifedocs.core.ports.summarizer import DocumentSummarizer
from lifedocs.core.ports.text_extractor import TextExtractor
from lifedocs.schemas.models import Document, SummaryResult, UploadedInput

# ========== Test Environment Setup ==========


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Pin environment variables so get_config() never reaches real services."""
    os.environ["REPOSITORY_BACKEND"] = "memory"
    os.environ.setdefault("LOG_LEVEL", "INFO")
    os.environ.setdefault("POSTGRES_USER", "lifedocs")
    os.environ.setdefault("POSTGRES_PASSWORD", "test")
    os.environ.setdefault("POSTGRES_DB", "lifedocs")

    yield


@pytest.fixture(autouse=True)
def clear_config_cache():
    """Reset the cached config so environment changes in one test never leak."""
    from lifedocs.common.config import get_config

    get_config.cache_clear()
    yield
    get_config.cache_clear()


# ========== Configuration Fixtures ==========


@pytest.fixture
def test_config() -> LifeDocsConfig:
    """Provide test configuration with test service URLs.

    Returns:
        LifeDocsConfig: Configuration instance for testing.
    """
    return LifeDocsConfig(
        repository_backend="memory",
        tesseract_url="http://test-ocr:8884",
        ollama_host="http://test-llm:11434",
        ollama_model="test-model",
        extraction_timeout=5.0,
        summarization_timeout=5.0,
        page_size=10,
    )


# ========== Owners & Documents ==========


@pytest.fixture
def owner_id() -> UUID:
    return uuid4()


@pytest.fixture
def other_owner_id() -> UUID:
    return uuid4()


@pytest.fixture
def repository() -> InMemoryDocumentRepository:
    """Fresh in-memory repository."""
    return InMemoryDocumentRepository()


@pytest.fixture
def document_factory() -> Any:
    """Factory for unsaved documents.

    Usage:
        doc = document_factory("Lease", owner_id)
    """

    def _create(title: str, owner: UUID, content: str = "body", doc_id: int = 0) -> Document:
        return Document(id=doc_id, title=title, content=content, owner_id=owner)

    return _create


# ========== Uploads ==========


@pytest.fixture
def png_upload(owner_id: UUID) -> UploadedInput:
    return UploadedInput(file_name="receipt.png", file_bytes=b"\x89PNG fake", owner_id=owner_id)


@pytest.fixture
def pdf_upload(owner_id: UUID) -> UploadedInput:
    return UploadedInput(file_name="lease.pdf", file_bytes=b"%PDF-1.7 fake", owner_id=owner_id)


# ========== Port Fakes ==========


@pytest.fixture
def mock_extractor() -> AsyncMock:
    """TextExtractor returning fixed text."""
    extractor = AsyncMock(spec=TextExtractor)
    extractor.extract_text.return_value = "Rent is due on the first of every month."
    return extractor


@pytest.fixture
def mock_summarizer() -> AsyncMock:
    """DocumentSummarizer returning a fixed summary."""
    summarizer = AsyncMock(spec=DocumentSummarizer)
    summarizer.summarize.return_value = SummaryResult(
        summary="Monthly rent schedule.", title="Rent"
    )
    return summarizer
