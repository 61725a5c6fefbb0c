"""Repository port definitions for core use cases."""

from __future__ import annotations

from lifedocs.core.ports.repositories.document_repository import DocumentRepository

__all__ = ["DocumentRepository"]
