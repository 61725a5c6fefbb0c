"""ListDocumentsUseCase - Keyset-paginated listing of an owner's documents."""

from __future__ import annotations

import logging
from uuid import UUID

from pydantic import BaseModel, Field

from lifedocs.core.ports.repositories import DocumentRepository
from lifedocs.schemas.models import Document, PageCursor

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


# ========== Models ==========


class DocumentPage(BaseModel):
    """One page of an owner's documents.

    Attributes:
        documents: Documents in ascending (title, id) order.
        limit: Page size requested.
        next_cursor: Cursor for the following page, or None when this page was not full.
    """

    documents: list[Document] = Field(..., description="Documents on this page")
    limit: int = Field(..., ge=0, description="Page size limit")
    next_cursor: PageCursor | None = Field(
        default=None, description="Cursor of the last document when more may follow"
    )


# ========== Use Case ==========


class ListDocumentsUseCase:
    """Use case for listing an owner's documents with keyset pagination.

    Both cursor values absent requests the first page; both present requests the
    page strictly after ``(title_cursor, id_cursor)``.
    """

    def __init__(
        self, document_repository: DocumentRepository, default_limit: int = DEFAULT_PAGE_SIZE
    ) -> None:
        self.repository = document_repository
        self.default_limit = default_limit
        logger.info("Initialized ListDocumentsUseCase")

    async def execute(
        self,
        owner_id: UUID,
        limit: int | None = None,
        title_cursor: str | None = None,
        id_cursor: int | None = None,
    ) -> DocumentPage:
        """Fetch one page.

        Args:
            owner_id: Owner whose documents are listed.
            limit: Maximum documents to return (default: configured page size).
            title_cursor: Title of the last document of the previous page.
            id_cursor: Id of the last document of the previous page.

        Returns:
            DocumentPage with documents and the cursor for the next page.

        Raises:
            ValueError: If limit < 0 or only one of the two cursor values is given.
        """
        page_size = self.default_limit if limit is None else limit
        if page_size < 0:
            raise ValueError(f"limit must be >= 0, got {page_size}")
        if (title_cursor is None) != (id_cursor is None):
            raise ValueError("title_cursor and id_cursor must be given together")

        logger.info(
            "Listing documents",
            extra={
                "owner_id": str(owner_id),
                "limit": page_size,
                "title_cursor": title_cursor,
                "id_cursor": id_cursor,
            },
        )

        if title_cursor is None or id_cursor is None:
            documents = await self.repository.list_by_owner(owner_id, page_size)
        else:
            documents = await self.repository.list_by_owner_after(
                owner_id, page_size, title_cursor, id_cursor
            )

        next_cursor = None
        if page_size and len(documents) == page_size:
            next_cursor = documents[-1].cursor()

        logger.info(f"Found {len(documents)} documents")
        return DocumentPage(documents=documents, limit=page_size, next_cursor=next_cursor)


__all__ = ["DEFAULT_PAGE_SIZE", "DocumentPage", "ListDocumentsUseCase"]
