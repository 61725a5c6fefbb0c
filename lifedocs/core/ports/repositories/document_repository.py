"""Document repository port definition."""

from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from lifedocs.schemas.models import Document


class DocumentRepository(ABC):
    """Repository abstraction for document persistence and keyset listing.

    Every backend must order listings ascending by ``(title, id)`` with titles
    compared by code point, and must be safe to call from concurrent tasks.
    Storage failures surface as ``PersistenceError``.
    """

    @abstractmethod
    async def get(self, doc_id: int) -> Document | None:
        """Retrieve a single document by identifier (no ownership check)."""

    @abstractmethod
    async def list_by_owner(self, owner_id: UUID, limit: int) -> list[Document]:
        """Return the first page of an owner's documents in ``(title, id)`` order."""

    @abstractmethod
    async def list_by_owner_after(
        self,
        owner_id: UUID,
        limit: int,
        cursor_title: str,
        cursor_id: int,
    ) -> list[Document]:
        """Return up to ``limit`` documents strictly after ``(cursor_title, cursor_id)``."""

    @abstractmethod
    async def save(self, document: Document) -> Document:
        """Insert a document and return it with its durable id.

        ``id == 0`` requests a new id. A non-zero id is inserted as given and
        must not collide with an existing document.
        """


__all__ = ["DocumentRepository"]
