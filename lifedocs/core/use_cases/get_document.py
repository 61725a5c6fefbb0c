"""GetDocumentUseCase - Single document lookup by id."""

from __future__ import annotations

import logging

from lifedocs.core.ports.repositories import DocumentRepository
from lifedocs.schemas.models import Document

logger = logging.getLogger(__name__)


class GetDocumentUseCase:
    """Fetch one document by id. A missing id is a valid empty result, not an error."""

    def __init__(self, document_repository: DocumentRepository) -> None:
        self.repository = document_repository

    async def execute(self, doc_id: int) -> Document | None:
        document = await self.repository.get(doc_id)
        if document is None:
            logger.info("Document not found", extra={"doc_id": doc_id})
        return document


__all__ = ["GetDocumentUseCase"]
