"""Storage clients implementing the DocumentRepository port."""

from lifedocs.clients.in_memory_document_repository import InMemoryDocumentRepository
from lifedocs.clients.postgres_document_repository import PostgresDocumentRepository

__all__ = ["InMemoryDocumentRepository", "PostgresDocumentRepository"]
