"""In-memory implementation of the DocumentRepository port.

Process-local reference backend used for tests and single-process deployments.
Its results are the baseline every other backend must reproduce.
"""

from __future__ import annotations

import asyncio
from uuid import UUID

from lifedocs.common.logging import get_logger
from lifedocs.core.errors import PersistenceError
from lifedocs.core.pagination import select_page
from lifedocs.core.ports.repositories import DocumentRepository
from lifedocs.schemas.models import Document, PageCursor

logger = get_logger(__name__)


class InMemoryDocumentRepository(DocumentRepository):
    """DocumentRepository over a list guarded by a single asyncio lock.

    The lock is held only to snapshot the list or to append one entry and assign
    its id. Filtering and sorting run on the snapshot after the lock is released,
    so a slow listing never blocks concurrent saves.

    Stored entries are private copies, and every returned document is a fresh
    copy, so callers cannot alter the store through a document they hold.
    """

    def __init__(self) -> None:
        self._documents: list[Document] = []
        self._ids: set[int] = set()
        self._next_id = 1
        self._lock = asyncio.Lock()
        logger.info("Initialized InMemoryDocumentRepository")

    async def _snapshot(self) -> list[Document]:
        async with self._lock:
            return list(self._documents)

    async def count(self) -> int:
        """Return the number of stored documents."""
        async with self._lock:
            return len(self._documents)

    async def get(self, doc_id: int) -> Document | None:
        snapshot = await self._snapshot()
        for document in snapshot:
            if document.id == doc_id:
                return document.model_copy(deep=True)

        logger.debug("Document not found", extra={"doc_id": doc_id})
        return None

    async def list_by_owner(self, owner_id: UUID, limit: int) -> list[Document]:
        snapshot = await self._snapshot()
        page = select_page(snapshot, owner_id, limit)
        return [doc.model_copy(deep=True) for doc in page]

    async def list_by_owner_after(
        self,
        owner_id: UUID,
        limit: int,
        cursor_title: str,
        cursor_id: int,
    ) -> list[Document]:
        snapshot = await self._snapshot()
        cursor = PageCursor(title=cursor_title, id=cursor_id)
        page = select_page(snapshot, owner_id, limit, cursor)
        return [doc.model_copy(deep=True) for doc in page]

    async def save(self, document: Document) -> Document:
        async with self._lock:
            if document.id == 0:
                doc_id = self._next_id
            elif document.id in self._ids:
                raise PersistenceError(f"Document id {document.id} already exists")
            else:
                doc_id = document.id

            stored = document.model_copy(update={"id": doc_id}, deep=True)
            self._documents.append(stored)
            self._ids.add(doc_id)
            self._next_id = max(self._next_id, doc_id + 1)

        logger.info("Saved document", extra={"doc_id": doc_id, "owner_id": str(stored.owner_id)})
        return stored.model_copy(deep=True)


__all__ = ["InMemoryDocumentRepository"]
